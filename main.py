"""n3h-pin - Pin release artifacts of n3h to their published SHA-256 checksums."""

import argparse
import sys
from pathlib import Path

from checksums import ChecksumError, resolve_artifacts
from config import Config
from fetcher import FetchError, make_client
from logging_setup import get_logger, setup_logging
from manifest import build_manifest, write_manifest
from metadata import MetadataError, fetch_release_metadata


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Write a pin manifest of release artifact URLs and SHA-256 hashes",
    )
    parser.add_argument(
        "tag",
        nargs="?",
        default=None,
        help="Release tag to pin, e.g. v0.0.4-alpha1",
    )
    parser.add_argument(
        "-c", "--config",
        type=Path,
        default=None,
        help="Path to config file (default: config.toml)",
    )
    parser.add_argument(
        "-o", "--output",
        type=str,
        default=None,
        help="Override manifest output path from config",
    )
    parser.add_argument(
        "--host",
        type=str,
        default=None,
        help="Override release host from config",
    )
    parser.add_argument(
        "--repo",
        type=str,
        default=None,
        help="Override repository name from config",
    )

    # Logging verbosity (mutually exclusive)
    verbosity_group = parser.add_mutually_exclusive_group()
    verbosity_group.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output (DEBUG level)",
    )
    verbosity_group.add_argument(
        "-q", "--quiet",
        action="store_true",
        help="Quiet mode (only warnings and errors)",
    )

    parser.add_argument(
        "--log-file",
        type=Path,
        default=None,
        help="Write logs to file (always DEBUG level)",
    )

    return parser.parse_args()


def main() -> int:
    args = parse_args()

    # Setup logging first
    verbosity = 1 if args.verbose else (-1 if args.quiet else 0)
    setup_logging(verbosity=verbosity, log_file=args.log_file)
    logger = get_logger()

    if not args.tag:
        logger.error("Usage: main.py <release-tag>  (a release tag is required)")
        return 1
    tag = args.tag

    logger.debug("Loading configuration...")
    try:
        config = Config.load(
            config_path=args.config,
            output_override=args.output,
            host_override=args.host,
            repo_override=args.repo,
        )
    except (OSError, ValueError) as e:
        logger.error("Error loading configuration: %s", e)
        return 1

    logger.info("Release: %s/%s@%s", config.org, config.repo, tag)
    logger.info("Output: %s", config.output_path)

    def on_progress(completed: int, total: int) -> None:
        logger.debug("Resolved %d/%d checksums", completed, total)

    try:
        with make_client(config) as client:
            metadata = fetch_release_metadata(client, config, tag)
            logger.info("Version: %s, commit: %s", metadata.version, metadata.commitish)

            artifacts = resolve_artifacts(
                client,
                config,
                tag,
                metadata.version,
                on_progress=on_progress,
            )

        manifest = build_manifest(tag, metadata, artifacts)
        output_path = write_manifest(manifest, config.output_path)
        written = output_path.read_text(encoding="utf-8")
    except (FetchError, MetadataError, ChecksumError, OSError) as e:
        logger.error("Error pinning release %s: %s", tag, e)
        logger.debug("Traceback:", exc_info=True)
        return 1

    # Operator confirmation is printed even in quiet mode
    print()
    print(f"Wrote {output_path}:")
    print(written, end="")
    return 0


if __name__ == "__main__":
    sys.exit(main())
