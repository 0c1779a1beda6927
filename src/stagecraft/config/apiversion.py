"""Parsing and ordering of apiVersion identifiers.

API versions follow the Kubernetes convention: ``v<major>`` optionally followed
by ``alpha<n>`` or ``beta<n>``, numbers without leading zeros. Ordering is
delegated to ``packaging.version.Version`` which ranks pre-releases the same
way:

    v1alpha1 < v1alpha2 < v1beta1 < v1 < v2alpha1 < v2
"""

import re

from packaging.version import InvalidVersion, Version

from stagecraft.config.errors import MalformedVersionError

API_VERSION_PATTERN = re.compile(r"v[1-9]\d*((alpha|beta)[1-9]\d*)?")


def parse(api_version: str) -> Version:
    """Parse an apiVersion string into an orderable version.

    Args:
        api_version: Version string such as "v1alpha3"

    Returns:
        Version: Comparable representation of the api version

    Raises:
        MalformedVersionError: If the string is not a valid api version
    """
    if not isinstance(api_version, str) or not API_VERSION_PATTERN.fullmatch(api_version):
        raise MalformedVersionError(str(api_version))

    try:
        return Version(api_version.lstrip("v"))
    except InvalidVersion as e:
        raise MalformedVersionError(api_version) from e


def must_parse(api_version: str) -> Version:
    """Parse an apiVersion that is known to be well-formed.

    Used for registered schema constants, where a malformed value is a bug.
    """
    try:
        return parse(api_version)
    except MalformedVersionError as e:
        raise ValueError(f"invalid registered api version: '{api_version}'") from e
