"""Mapping source paths onto the output tree."""

from __future__ import annotations

from pathlib import Path

from mdbake.build.models import OutputRootError, UnmappablePathError

OUTPUT_SUFFIX = ".html"


def prepare_output_root(path: str | Path) -> Path:
    """Create the output root if needed and return its canonical path."""
    out = Path(path)
    try:
        out.mkdir(parents=True, exist_ok=True)
        return out.resolve(strict=True)
    except OSError as e:
        raise OutputRootError(f"Cannot create output directory {path}: {e}") from e


def destination_for(source_root: Path, output_root: Path, source: Path) -> Path:
    """Re-root ``source`` under ``output_root`` with an .html suffix.

    ``notes/intro.md`` under the source root becomes ``notes/intro.html``
    under the output root.
    """
    try:
        rel = source.relative_to(source_root)
    except ValueError as e:
        raise UnmappablePathError(f"{source} is not under {source_root}") from e
    return (output_root / rel).with_suffix(OUTPUT_SUFFIX)
