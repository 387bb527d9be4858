"""Assembling and writing rendered documents."""

from __future__ import annotations

import os
from pathlib import Path

from mdbake.render.options import ConversionOptions, style_block

TMP_SUFFIX = ".tmp"


def assemble(html: str, options: ConversionOptions) -> bytes:
    """Rendered HTML, then the optional style block, then the optional trailer."""
    parts = [html if html.endswith("\n") else html + "\n"]
    if options.stylesheet is not None:
        parts.append(style_block(options.stylesheet))
    if options.trailer is not None:
        parts.append(options.trailer)
    return "".join(parts).encode("utf-8")


def write_document(dest: Path, payload: bytes, atomic: bool = True) -> None:
    """Write ``payload`` to ``dest``, creating parent directories first.

    In atomic mode the bytes land in a sibling ``.tmp`` file that replaces
    ``dest`` only once fully written; a failed write leaves ``dest`` as it
    was and removes the temp file.
    """
    dest.parent.mkdir(parents=True, exist_ok=True)
    if not atomic:
        dest.write_bytes(payload)
        return

    tmp = dest.with_suffix(dest.suffix + TMP_SUFFIX)
    try:
        tmp.write_bytes(payload)
        os.replace(tmp, dest)
    except OSError:
        tmp.unlink(missing_ok=True)
        raise
