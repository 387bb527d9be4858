"""Build subsystem: walks the source tree, converts, and writes the HTML tree."""

from mdbake.build.driver import SiteBuilder, build_site
from mdbake.build.models import (
    BuildError,
    BuildReport,
    FileSkipped,
    OutputRootError,
    SkippedFile,
    SkipReason,
    SourceRootError,
    UnmappablePathError,
)
from mdbake.build.paths import destination_for, prepare_output_root
from mdbake.build.walker import iter_markdown_files, resolve_source_root
from mdbake.build.writer import assemble, write_document

__all__ = [
    "BuildError",
    "BuildReport",
    "FileSkipped",
    "OutputRootError",
    "SiteBuilder",
    "SkipReason",
    "SkippedFile",
    "SourceRootError",
    "UnmappablePathError",
    "assemble",
    "build_site",
    "destination_for",
    "iter_markdown_files",
    "prepare_output_root",
    "resolve_source_root",
    "write_document",
]
