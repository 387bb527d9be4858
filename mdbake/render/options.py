"""Immutable conversion options and the named profiles that seed them."""

from __future__ import annotations

import logging
from enum import Enum
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from mdbake.config.models import MdbakeConfig

logger = logging.getLogger(__name__)

TRAILER_RESOURCE = "autoinclude.html"


class Profile(str, Enum):
    """Operating modes for a build."""

    full = "full"
    plain = "plain"


class ExtensionOptions(BaseModel):
    """Markdown syntax extensions beyond the baseline."""

    model_config = ConfigDict(frozen=True)

    strikethrough: bool = True
    table: bool = True
    autolink: bool = True
    tasklist: bool = True
    superscript: bool = True
    footnotes: bool = True
    header_ids: str | None = "header-"  # id prefix; None disables heading ids


class ParseOptions(BaseModel):
    model_config = ConfigDict(frozen=True)

    smart: bool = True
    relaxed_tasklist_matching: bool = True


class ConversionOptions(BaseModel):
    """Everything that shapes one output document, fixed for the whole run."""

    model_config = ConfigDict(frozen=True)

    extension: ExtensionOptions = Field(default_factory=ExtensionOptions)
    parse: ParseOptions = Field(default_factory=ParseOptions)
    stylesheet: str | None = None
    trailer: str | None = None

    @classmethod
    def for_profile(
        cls,
        profile: Profile,
        stylesheet: str | None = None,
        trailer: str | None = None,
    ) -> ConversionOptions:
        """Build the option set for a profile.

        ``plain`` ignores ``stylesheet`` and ``trailer`` and renders with the
        baseline syntax only; ``full`` enables every extension.
        """
        if profile is Profile.plain:
            return cls(
                extension=ExtensionOptions(
                    strikethrough=False,
                    table=False,
                    autolink=False,
                    tasklist=False,
                    superscript=False,
                    footnotes=False,
                    header_ids=None,
                ),
                parse=ParseOptions(smart=False, relaxed_tasklist_matching=False),
            )
        return cls(stylesheet=stylesheet, trailer=trailer)


def style_block(css: str) -> str:
    """Wrap raw stylesheet text in a <style> element, verbatim."""
    return f"<style>{css}</style>"


def load_stylesheet(path: str | Path | None) -> str | None:
    """Read a stylesheet; a missing or unreadable file means no stylesheet."""
    if path is None:
        return None
    try:
        return Path(path).read_bytes().decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        logger.warning("Stylesheet %s not embedded: %s", path, e)
        return None


def load_trailer() -> str:
    """Return the trailer fragment bundled with the package."""
    return resources.files("mdbake.assets").joinpath(TRAILER_RESOURCE).read_text(encoding="utf-8")


def options_from_config(
    config: MdbakeConfig,
    profile: Profile | None = None,
    stylesheet: str | None = None,
    trailer: bool | None = None,
) -> ConversionOptions:
    """Resolve the run's ConversionOptions.

    Explicit arguments (usually CLI flags) win over the config file, which
    wins over the profile's defaults.
    """
    profile = profile or Profile(config.profile)
    stylesheet_path = stylesheet or config.stylesheet
    want_trailer = trailer if trailer is not None else config.trailer
    if want_trailer is None:
        want_trailer = profile is Profile.full

    base = ConversionOptions.for_profile(profile)
    css = load_stylesheet(stylesheet_path) if profile is Profile.full or stylesheet else None

    return ConversionOptions(
        extension=ExtensionOptions(
            **{**base.extension.model_dump(), **config.extension.model_dump(exclude_unset=True)}
        ),
        parse=ParseOptions(
            **{**base.parse.model_dump(), **config.parse.model_dump(exclude_unset=True)}
        ),
        stylesheet=css,
        trailer=load_trailer() if want_trailer else None,
    )
