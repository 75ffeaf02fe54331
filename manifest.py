"""Pin manifest assembly and writing for n3h-pin."""

import json
import os
import stat
import tempfile
from pathlib import Path

from metadata import ReleaseMetadata


WARNING_BANNER = (
    "AUTO-GENERATED FILE - DO NOT EDIT. "
    "Regenerate with `python main.py <release-tag>`."
)


def build_manifest(
    tag: str,
    metadata: ReleaseMetadata,
    artifacts: dict,
) -> dict:
    """Assemble the pin manifest.

    The manifest structure is:
    {
        "warning": ...,
        "release": "<tag>",
        "version": "v<version>",
        "commitish": "<commit>",
        "artifacts": {
            "<os>": {"<arch>": {"<type>": {"url": ..., "file": ..., "hash": ...}}}
        }
    }
    """
    return {
        "warning": WARNING_BANNER,
        "release": tag,
        "version": f"v{metadata.version}",
        "commitish": metadata.commitish,
        "artifacts": artifacts,
    }


def _target_mode(output_path: Path) -> int:
    """Mode for the new manifest: the old file's, or the umask default."""
    try:
        return stat.S_IMODE(output_path.stat().st_mode)
    except FileNotFoundError:
        umask = os.umask(0)
        os.umask(umask)
        return 0o666 & ~umask


def write_manifest(manifest: dict, output_path: Path) -> Path:
    """Write the manifest as indented JSON, replacing any previous file.

    The JSON goes to a temporary file next to the target which is then
    renamed over it, so the target is either the old or the new manifest.
    The result keeps the permissions of the file it replaces.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(
        dir=output_path.parent,
        prefix=f".{output_path.name}.",
        suffix=".tmp",
    )
    tmp_path = Path(tmp_name)

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(manifest, f, indent=2)
            f.write("\n")
        os.chmod(tmp_path, _target_mode(output_path))
        os.replace(tmp_path, output_path)
    finally:
        tmp_path.unlink(missing_ok=True)

    return output_path
