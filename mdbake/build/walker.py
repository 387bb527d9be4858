"""Source tree discovery."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

from mdbake.build.models import SourceRootError

MARKDOWN_PATTERN = "*.md"


def resolve_source_root(path: str | Path) -> Path:
    """Canonicalize the source root. Raises SourceRootError if it is unusable."""
    try:
        root = Path(path).resolve(strict=True)
    except (OSError, RuntimeError) as e:
        raise SourceRootError(f"Source directory not found: {path}") from e
    if not root.is_dir():
        raise SourceRootError(f"Source path is not a directory: {path}")
    return root


def iter_markdown_files(root: Path) -> Iterator[Path]:
    """Yield every markdown file under ``root``, recursively.

    Enumeration order is whatever the filesystem returns. Directories whose
    names happen to end in ``.md`` are skipped.
    """
    for path in root.rglob(MARKDOWN_PATTERN):
        if path.is_file():
            yield path
