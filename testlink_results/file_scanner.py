"""Find report files below a directory using comma-separated glob includes."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


class ScanError(Exception):
    """Raised when the directory cannot be scanned."""


def split_includes(includes: str) -> list[str]:
    """Split an include expression on commas, dropping blanks."""
    if not includes or not includes.strip():
        return []
    return [p.strip() for p in includes.split(',') if p.strip()]


def scan(directory, includes: str) -> list[str]:
    """
    List files under ``directory`` matching any of the include patterns.

    Patterns are glob expressions relative to ``directory`` (``**`` matches
    any number of sub-directories). Results are relative POSIX paths, ordered
    pattern by pattern and sorted within each pattern; a file matched by
    several patterns appears once, at its first position.
    """
    root = Path(directory)
    if not root.is_dir():
        raise ScanError(f"Not a directory: {directory}")

    found: list[str] = []
    seen = set()
    for pattern in split_includes(includes):
        try:
            matches = sorted(p.relative_to(root).as_posix()
                             for p in root.glob(pattern) if p.is_file())
        except (OSError, ValueError, NotImplementedError) as e:
            raise ScanError(f"Failed to scan {directory} for '{pattern}': {e}") from e
        for rel in matches:
            if rel not in seen:
                seen.add(rel)
                found.append(rel)

    logger.debug(f"Found {len(found)} files in {directory} matching '{includes}'")
    return found
