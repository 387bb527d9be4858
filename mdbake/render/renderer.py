"""Markdown-to-HTML rendering backed by Python-Markdown."""

from __future__ import annotations

import logging
from typing import Any, Protocol, runtime_checkable

import markdown
from markdown.extensions.toc import slugify

from mdbake.render.options import ConversionOptions
from mdbake.render.tasklist import RelaxedTasklistExtension

logger = logging.getLogger(__name__)


@runtime_checkable
class Renderer(Protocol):
    """Turns one markdown document into an HTML fragment."""

    def render(self, source: str) -> str: ...


class HeaderAnchorizer:
    """Prefixed heading slugs, de-duplicated as ``a``, ``a-1``, ``a-2``.

    Used as toc's ``slugify`` so repeated headings never reach toc's own
    ``_1`` suffixing. Call ``reset`` between documents.
    """

    def __init__(self, prefix: str) -> None:
        self.prefix = prefix
        self._seen: set[str] = set()

    def reset(self) -> None:
        self._seen.clear()

    def __call__(self, value: str, separator: str) -> str:
        base = self.prefix + slugify(value, separator)
        anchor, n = base, 0
        while anchor in self._seen:
            n += 1
            anchor = f"{base}{separator}{n}"
        self._seen.add(anchor)
        return anchor


def build_extensions(options: ConversionOptions) -> tuple[list[Any], dict[str, dict]]:
    """Translate ConversionOptions into Python-Markdown extensions and their configs."""
    ext = options.extension
    extensions: list[Any] = ["fenced_code"]
    configs: dict[str, dict] = {}

    if ext.table:
        extensions.append("tables")
    if ext.strikethrough:
        extensions.append("pymdownx.tilde")
        configs["pymdownx.tilde"] = {"subscript": False}
    if ext.superscript:
        extensions.append("pymdownx.caret")
        configs["pymdownx.caret"] = {"insert": False}
    if ext.autolink:
        extensions.append("pymdownx.magiclink")
    if ext.tasklist:
        extensions.append("pymdownx.tasklist")
        configs["pymdownx.tasklist"] = {"custom_checkbox": False}
        if options.parse.relaxed_tasklist_matching:
            extensions.append(RelaxedTasklistExtension())
    if ext.footnotes:
        extensions.append("footnotes")
    if ext.header_ids is not None:
        extensions.append("toc")
        configs["toc"] = {"slugify": HeaderAnchorizer(ext.header_ids)}
    if options.parse.smart:
        extensions.append("smarty")

    return extensions, configs


class MarkdownRenderer:
    """Python-Markdown instance configured once per run."""

    def __init__(self, options: ConversionOptions) -> None:
        self.options = options
        extensions, configs = build_extensions(options)
        logger.debug("Markdown extensions: %s", extensions)
        self._anchorizer: HeaderAnchorizer | None = configs.get("toc", {}).get("slugify")
        self._md = markdown.Markdown(
            extensions=extensions,
            extension_configs=configs,
            output_format="html",
        )

    def render(self, source: str) -> str:
        # Footnote numbering and heading-id de-duplication are per document.
        self._md.reset()
        if self._anchorizer is not None:
            self._anchorizer.reset()
        return self._md.convert(source)
