"""Structural validation driven by per-field tags.

Fields opt in to checks through pydantic metadata::

    image: str | None = Field(default=None, json_schema_extra={"yamltags": "required"})

Supported tags (comma separated):

- ``required``: the field must be set.
- ``oneOf=<group>``: at most one field of the model in ``<group>`` may be set.
- ``excludes=<field>``: the field and the named sibling may not both be set.

``process_struct`` walks the whole object and reports every violation at once.
"""

from collections import defaultdict
from typing import Any

from pydantic import BaseModel

TAG_KEY = "yamltags"


class TagViolationError(ValueError):
    """Aggregate of every structural tag violation found in an object."""

    def __init__(self, violations: list[str]):
        self.violations = violations
        super().__init__("; ".join(violations))


def process_struct(obj: Any) -> None:
    """Validate tag constraints on ``obj`` and everything nested in it.

    Raises:
        TagViolationError: If any constraint is violated
        ValueError: If a model declares an unknown or malformed tag
    """
    violations: list[str] = []
    _walk(obj, "", violations)
    if violations:
        raise TagViolationError(violations)


def _walk(value: Any, path: str, violations: list[str]) -> None:
    if isinstance(value, BaseModel):
        _check_model(value, path, violations)
        for name, field in type(value).model_fields.items():
            child = getattr(value, name)
            if child is not None:
                _walk(child, _join(path, field.alias or name), violations)
    elif isinstance(value, list | tuple):
        for index, item in enumerate(value):
            _walk(item, f"{path}[{index}]", violations)
    elif isinstance(value, dict):
        for key, item in value.items():
            _walk(item, _join(path, str(key)), violations)


def _check_model(model: BaseModel, path: str, violations: list[str]) -> None:
    fields = type(model).model_fields
    groups: dict[str, list[str]] = defaultdict(list)

    for name, field in fields.items():
        yaml_name = field.alias or name
        is_set = getattr(model, name) is not None

        for tag in _tags_for(field.json_schema_extra):
            kind, _, arg = tag.partition("=")
            if kind == "required" and not arg:
                if not is_set:
                    violations.append(f"required value not set: {_join(path, yaml_name)}")
            elif kind == "oneOf" and arg:
                groups[arg].append(name)
            elif kind == "excludes" and arg:
                if arg not in fields:
                    raise ValueError(
                        f"{type(model).__name__}.{name}: excludes unknown field '{arg}'"
                    )
                if is_set and getattr(model, arg) is not None:
                    other = fields[arg].alias or arg
                    violations.append(
                        f"{_join(path, yaml_name)} and {_join(path, other)} "
                        "are mutually exclusive"
                    )
            else:
                raise ValueError(f"{type(model).__name__}.{name}: unknown yamltag '{tag}'")

    for members in groups.values():
        set_members = [m for m in members if getattr(model, m) is not None]
        if len(set_members) > 1:
            names = " ".join(fields[m].alias or m for m in members)
            where = path or "<root>"
            violations.append(f"only one of [{names}] can be set at {where}")


def _tags_for(extra: Any) -> list[str]:
    if not isinstance(extra, dict):
        return []
    raw = extra.get(TAG_KEY, "")
    return [tag.strip() for tag in raw.split(",") if tag.strip()]


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name
