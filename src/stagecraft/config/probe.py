"""Extraction of the declared apiVersion from a raw document."""

import yaml

from stagecraft.config.errors import MalformedDocumentError

API_VERSION_KEY = "apiVersion"


def probe_version(data: bytes) -> str:
    """Read the apiVersion of a document without parsing the rest of it.

    Args:
        data: Raw YAML document

    Returns:
        str: The declared api version

    Raises:
        MalformedDocumentError: If the document is not YAML, is not a mapping,
            or does not declare a non-empty string apiVersion
    """
    try:
        document = yaml.safe_load(data)
    except yaml.YAMLError as e:
        raise MalformedDocumentError(f"parsing api version: {e}") from e

    if not isinstance(document, dict):
        raise MalformedDocumentError("parsing api version: document is not a mapping")

    api_version = document.get(API_VERSION_KEY)
    if not isinstance(api_version, str) or not api_version.strip():
        raise MalformedDocumentError(f"parsing api version: missing '{API_VERSION_KEY}'")

    return api_version
