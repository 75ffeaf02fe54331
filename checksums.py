"""Checksum file fetching and parsing for n3h-pin."""

import re
from collections.abc import Callable, Iterable
from dataclasses import asdict, dataclass

import httpx

from config import Config
from fetcher import fetch
from logging_setup import get_logger
from platforms import PLATFORMS, Platform


logger = get_logger("checksums")

# "<hash>  <filename>" as written by sha256sum; '*' marks binary mode
CHECKSUM_LINE = re.compile(r"^(\S+)[ \t]+\*?(\S+)", re.MULTILINE)

SHA256_SUFFIX = ".sha256"


class ChecksumError(ValueError):
    """Raised when a checksum file cannot be parsed or filed."""


@dataclass(frozen=True)
class ArtifactRecord:
    url: str
    file: str
    hash: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def parse_checksum(text: str) -> tuple[str, str]:
    """Parse a checksum file into (hash, filename).

    Only the first line of the form "<hash> <filename>" is used.
    """
    match = CHECKSUM_LINE.search(text.strip())
    if match is None:
        raise ChecksumError(f"No '<hash> <filename>' line in checksum file: {text!r}")
    return match.group(1), match.group(2)


def resolve_artifact(
    client: httpx.Client,
    config: Config,
    tag: str,
    version: str,
    platform: Platform,
) -> ArtifactRecord:
    checksum_url = config.checksum_url(tag, version, platform.descriptor)
    body = fetch(client, checksum_url, config.max_redirects)

    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise ChecksumError(f"Checksum file {checksum_url} is not UTF-8 text") from e

    digest, filename = parse_checksum(text)
    return ArtifactRecord(
        url=checksum_url[: -len(SHA256_SUFFIX)],
        file=filename,
        hash=digest,
    )


def resolve_artifacts(
    client: httpx.Client,
    config: Config,
    tag: str,
    version: str,
    platforms: Iterable[Platform] = PLATFORMS,
    on_progress: Callable[[int, int], None] | None = None,
) -> dict[str, dict[str, dict[str, dict[str, str]]]]:
    """Resolve the checksum of every platform artifact, one at a time.

    Returns a mapping of os -> arch -> package type -> artifact record.
    """
    platforms = list(platforms)
    total = len(platforms)
    artifacts: dict[str, dict[str, dict[str, dict[str, str]]]] = {}

    for i, platform in enumerate(platforms):
        record = resolve_artifact(client, config, tag, version, platform)

        slot = artifacts.setdefault(platform.os, {}).setdefault(platform.arch, {})
        if platform.package_type in slot:
            raise ChecksumError(
                f"Duplicate artifact {platform.os}/{platform.arch}/{platform.package_type}"
            )
        slot[platform.package_type] = record.to_dict()
        logger.debug("%s -> %s (%s)", platform.descriptor, record.file, record.hash)

        if on_progress:
            on_progress(i + 1, total)

    return artifacts
