"""Release metadata resolution for n3h-pin."""

import json
from dataclasses import dataclass

import httpx

from config import Config
from fetcher import fetch


class MetadataError(ValueError):
    """Raised when a metadata document is not valid JSON or lacks a field."""


@dataclass(frozen=True)
class ReleaseMetadata:
    version: str
    commitish: str


def parse_document(body: bytes, source: str) -> dict:
    """Parse a JSON object from a response body.

    The source is a human-readable name used in error messages.
    """
    try:
        document = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise MetadataError(f"{source} is not valid JSON: {e}") from e

    if not isinstance(document, dict):
        raise MetadataError(
            f"{source} must be a JSON object, got {type(document).__name__}"
        )
    return document


def require_string(document: dict, field: str, source: str) -> str:
    if field not in document:
        raise MetadataError(f"{source} is missing required field '{field}'")

    value = document[field]
    if not isinstance(value, str):
        raise MetadataError(
            f"{source} field '{field}' must be a string, got {type(value).__name__}"
        )
    if not value:
        raise MetadataError(f"{source} field '{field}' is empty")
    return value


def fetch_release_metadata(
    client: httpx.Client,
    config: Config,
    tag: str,
) -> ReleaseMetadata:
    """Fetch the package and release descriptors for a tag.

    The package descriptor supplies the version, the release descriptor
    supplies the commit the release was cut from.
    """
    package = parse_document(
        fetch(client, config.package_url(tag), config.max_redirects),
        "package descriptor",
    )
    version = require_string(package, "version", "package descriptor")

    release = parse_document(
        fetch(client, config.release_url(tag), config.max_redirects),
        "release descriptor",
    )
    commitish = require_string(release, "target_commitish", "release descriptor")

    return ReleaseMetadata(version=version, commitish=commitish)
