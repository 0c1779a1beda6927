from collections.abc import Callable
from pathlib import Path

import pytest
import yaml

from stagecraft.system.path_resolver import PathResolver

V1ALPHA1_FULL = {
    "apiVersion": "v1alpha1",
    "kind": "Config",
    "name": "web",
    "build": {
        "tagPolicy": "gitCommit",
        "artifacts": [
            {
                "imageName": "gcr.io/demo/web",
                "workspace": "web",
                "dockerfilePath": "web.Dockerfile",
            },
            {"imageName": "gcr.io/demo/worker"},
        ],
    },
    "deploy": {"kubectl": {"manifests": ["k8s/*.yaml"]}},
}


@pytest.fixture
def path_resolver(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> PathResolver:
    """Provide a PathResolver rooted in a temporary working directory."""
    monkeypatch.delenv("STAGECRAFT_CONFIG", raising=False)
    monkeypatch.setenv("STAGECRAFT_WORKDIR", str(tmp_path))
    return PathResolver()


@pytest.fixture
def write_config(path_resolver: PathResolver) -> Callable[[dict], Path]:
    """Write a config document to the resolver's default config path."""

    def _write(document: dict) -> Path:
        config_path = path_resolver.get_pipeline_config_path()
        config_path.parent.mkdir(parents=True, exist_ok=True)
        config_path.write_text(yaml.dump(document, sort_keys=False))
        return config_path

    return _write


@pytest.fixture
def v1alpha1_document() -> dict:
    """Provide a fully populated v1alpha1 document."""
    return yaml.safe_load(yaml.dump(V1ALPHA1_FULL))
