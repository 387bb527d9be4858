"""Transform pipeline applied to markdown source before rendering."""

from .pipeline import Transform, TransformPipeline
from .link_rewriter import LinkRewriter

__all__ = [
    "Transform",
    "TransformPipeline",
    "LinkRewriter",
]
