"""Rewrites inline markdown links to .md files so they target the generated .html."""

import re

from .pipeline import Transform

# Greedy and line-bounded: several links on one line can be captured as one.
_MD_LINK_RE = re.compile(r"\[(?P<text>.*)\]\((?P<link>.*)\.md\)")


class LinkRewriter(Transform):
    def apply(self, content: str) -> str:
        return _MD_LINK_RE.sub(_rewrite_match, content)


def _rewrite_match(m: re.Match) -> str:
    return f"[{m.group('text')}]({m.group('link')}.html)"
