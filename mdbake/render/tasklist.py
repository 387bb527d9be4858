"""Relaxed task-list matching for Python-Markdown.

``pymdownx.tasklist`` only recognises ``[x]``, ``[X]`` and ``[ ]``. With
relaxed matching any single non-space mark (``[-]``, ``[~]``, ``[✓]``)
counts as checked. The mark is rewritten to ``[x]`` on parsed ``<li>``
elements, so code blocks and other literal text never change.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as etree

from markdown.extensions import Extension
from markdown.treeprocessors import Treeprocessor

# leading box of a list item's text, followed by at least one space
_RELAXED_BOX_RE = re.compile(r"^( *)\[[^\s\]xX]\](?= )")


class RelaxedTasklistTreeprocessor(Treeprocessor):
    def _normalise(self, el: etree.Element) -> None:
        if el.text:
            el.text = _RELAXED_BOX_RE.sub(r"\1[x]", el.text, count=1)

    def run(self, root: etree.Element) -> None:
        for li in root.iter("li"):
            if li.text:
                self._normalise(li)
            elif len(li) and li[0].tag == "p":
                # loose lists wrap the item text in a paragraph
                self._normalise(li[0])


class RelaxedTasklistExtension(Extension):
    def extendMarkdown(self, md):
        # Ahead of pymdownx's "task-list" (25), which turns boxes into checkboxes.
        md.treeprocessors.register(
            RelaxedTasklistTreeprocessor(md), "relaxed_tasklist", 26
        )


def makeExtension(**kwargs):
    return RelaxedTasklistExtension(**kwargs)
