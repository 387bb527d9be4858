"""mdbake: bake a directory of markdown into a mirrored tree of HTML pages."""

from mdbake.build import BuildReport, SiteBuilder, build_site
from mdbake.config import MdbakeConfig, load_config
from mdbake.render import ConversionOptions, MarkdownRenderer, Profile
from mdbake.transform import LinkRewriter, TransformPipeline

__version__ = "0.1.0"

__all__ = [
    "BuildReport",
    "ConversionOptions",
    "LinkRewriter",
    "MarkdownRenderer",
    "MdbakeConfig",
    "Profile",
    "SiteBuilder",
    "TransformPipeline",
    "build_site",
    "load_config",
]
