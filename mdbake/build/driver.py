"""SiteBuilder converts a markdown tree into a mirrored HTML tree."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from pathlib import Path

from mdbake.build.models import (
    BuildReport,
    FileSkipped,
    SkippedFile,
    SkipReason,
    UnmappablePathError,
)
from mdbake.build.paths import destination_for
from mdbake.build.walker import iter_markdown_files
from mdbake.build.writer import assemble, write_document
from mdbake.render.options import ConversionOptions
from mdbake.render.renderer import MarkdownRenderer, Renderer
from mdbake.transform import LinkRewriter, TransformPipeline

logger = logging.getLogger(__name__)


class SiteBuilder:
    def __init__(
        self,
        source_root: Path,
        output_root: Path,
        options: ConversionOptions,
        pipeline: TransformPipeline | None = None,
        renderer: Renderer | None = None,
        atomic_writes: bool = True,
        on_written: Callable[[Path, Path], None] | None = None,
    ):
        """
        Args:
            source_root: Canonical directory holding the markdown tree
            output_root: Canonical directory receiving the HTML tree
            options: Immutable ConversionOptions for the whole run
            pipeline: Text transforms run before rendering (defaults to LinkRewriter)
            renderer: Markdown renderer (defaults to MarkdownRenderer over ``options``)
            atomic_writes: Write through a temp file and rename on success
            on_written: Called with (source, destination) after each successful write
        """
        self.source_root = source_root
        self.output_root = output_root
        self.options = options
        self.pipeline = pipeline or TransformPipeline([LinkRewriter()])
        self.renderer = renderer or MarkdownRenderer(options)
        self.atomic_writes = atomic_writes
        self.on_written = on_written

    # -- Public API ----------------------------------------------------------

    def run(self) -> BuildReport:
        """Convert every markdown file under the source root. Never raises per-file errors."""
        start = time.monotonic()
        report = BuildReport()

        for source_path in iter_markdown_files(self.source_root):
            rel = self._display_path(source_path)
            try:
                dest = self.build_file(source_path)
            except FileSkipped as exc:
                report.skipped.append(SkippedFile(file=rel, reason=exc.reason, error=str(exc)))
                logger.warning("Skipped %s (%s): %s", rel, exc.reason.value, exc)
                continue

            report.written += 1
            logger.info("Converted: %s", rel)
            if self.on_written is not None:
                self.on_written(source_path, dest)

        report.duration = time.monotonic() - start
        return report

    def plan(self) -> list[tuple[Path, Path]]:
        """Source/destination pairs a run would produce; touches nothing."""
        pairs = []
        for source_path in iter_markdown_files(self.source_root):
            try:
                pairs.append(
                    (source_path, destination_for(self.source_root, self.output_root, source_path))
                )
            except UnmappablePathError:
                continue
        return sorted(pairs)

    def build_file(self, source_path: Path) -> Path:
        """Convert a single file and return its destination. Raises FileSkipped on failure."""
        try:
            dest = destination_for(self.source_root, self.output_root, source_path)
        except UnmappablePathError as e:
            raise FileSkipped(SkipReason.unmappable, e) from e

        try:
            raw = source_path.read_bytes()
        except OSError as e:
            raise FileSkipped(SkipReason.unreadable, e) from e
        try:
            content = raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise FileSkipped(SkipReason.not_utf8, e) from e

        content = self.pipeline.apply(content)

        try:
            html = self.renderer.render(content)
        except Exception as e:
            logger.debug("Renderer failed on %s", source_path, exc_info=True)
            raise FileSkipped(SkipReason.render, e) from e

        try:
            write_document(dest, assemble(html, self.options), atomic=self.atomic_writes)
        except OSError as e:
            raise FileSkipped(SkipReason.write, e) from e

        return dest

    # -- Internals -----------------------------------------------------------

    def _display_path(self, source_path: Path) -> str:
        try:
            return str(source_path.relative_to(self.source_root))
        except ValueError:
            return str(source_path)


def build_site(
    source_root: Path,
    output_root: Path,
    options: ConversionOptions,
    atomic_writes: bool = True,
) -> BuildReport:
    """One-shot convenience wrapper around SiteBuilder.run()."""
    return SiteBuilder(source_root, output_root, options, atomic_writes=atomic_writes).run()
