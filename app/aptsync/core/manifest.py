"""Curated package list I/O.

The curated list is a plain UTF-8 text file with one package name per
line. Blank lines and lines starting with ``#`` are ignored. The file is
read in full before a command runs and rewritten in full (atomically)
after a mutating command.
"""

import logging
import os
from pathlib import Path
from tempfile import NamedTemporaryFile

from pydantic import ValidationError

from aptsync.models.manifest import CuratedSet

logger = logging.getLogger(__name__)

MANIFEST_HEADER = (
    "# apt-sync curated packages",
    "# one package per line, comments start with #",
)


class ManifestError(Exception):
    """Base exception for manifest-related errors."""


class ManifestReadError(ManifestError):
    """Raised when the manifest file cannot be read or decoded."""


class ManifestWriteError(ManifestError):
    """Raised when the manifest file cannot be written."""


class InvalidPackageNameError(ManifestError):
    """Raised when the manifest contains a malformed package name."""


def parse_manifest(text: str, source: str = "<string>") -> CuratedSet:
    """Parse manifest text into a CuratedSet.

    Surrounding whitespace is trimmed, blank lines and comment lines are
    skipped and duplicates collapse onto their first occurrence.

    Args:
        text: Raw manifest contents.
        source: Where the text came from, used in error messages.

    Returns:
        CuratedSet in file order.

    Raises:
        InvalidPackageNameError: If a line is not a valid package name.
    """
    names = [
        stripped
        for line in text.splitlines()
        if (stripped := line.strip()) and not stripped.startswith("#")
    ]
    try:
        return CuratedSet.from_names(names)
    except ValidationError as e:
        raise InvalidPackageNameError(f"Invalid package list in {source}: {e}") from e


def render_manifest(curated: CuratedSet) -> str:
    """Render a CuratedSet as manifest text (header plus one name per line)."""
    lines = [*MANIFEST_HEADER, *curated.names]
    return "\n".join(lines) + "\n"


def load_manifest(path: Path) -> CuratedSet:
    """Load the curated package list.

    A missing file is not an error: it loads as an empty CuratedSet so the
    first ``add`` can create it.

    Args:
        path: Path to the manifest file.

    Returns:
        CuratedSet read from disk.

    Raises:
        ManifestReadError: If the file exists but cannot be read or decoded.
        InvalidPackageNameError: If the file contains a malformed name.
    """
    if not path.exists():
        logger.debug("Manifest %s does not exist, starting empty", path)
        return CuratedSet()

    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise ManifestReadError(f"Manifest {path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ManifestReadError(f"Failed to read manifest {path}: {e}") from e

    curated = parse_manifest(text, source=str(path))
    logger.debug("Loaded %d curated package(s) from %s", len(curated), path)
    return curated


def save_manifest(curated: CuratedSet, path: Path) -> Path:
    """Save the curated package list.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.
    The temporary file is cleaned up on failure.

    Args:
        curated: The CuratedSet to save.
        path: Destination path; parent directories are created.

    Returns:
        Path where the manifest was saved.

    Raises:
        ManifestWriteError: If the file cannot be written.
    """
    tmp_path: Path | None = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=path.parent,
            delete=False,
            prefix=f".{path.name}.",
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            f.write(render_manifest(curated))
        # NamedTemporaryFile creates 0600 files; keep the manifest shareable
        mode = path.stat().st_mode & 0o777 if path.exists() else 0o644
        os.chmod(tmp_path, mode)
        # os.replace() is atomic on POSIX
        os.replace(str(tmp_path), str(path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ManifestWriteError(f"Failed to write manifest {path}: {e}") from e

    logger.debug("Saved %d curated package(s) to %s", len(curated), path)
    return path
