from pydantic import BaseModel, Field
from typing import Literal


class ExtensionOverrides(BaseModel):
    """Per-extension switches that take precedence over the active profile."""

    strikethrough: bool | None = None
    table: bool | None = None
    autolink: bool | None = None
    tasklist: bool | None = None
    superscript: bool | None = None
    footnotes: bool | None = None
    header_ids: str | None = None


class ParseOverrides(BaseModel):
    smart: bool | None = None
    relaxed_tasklist_matching: bool | None = None


class MdbakeConfig(BaseModel):
    profile: Literal["full", "plain"] = "full"
    out_dir: str = "build"
    stylesheet: str | None = None
    trailer: bool | None = None
    atomic_writes: bool = True
    extension: ExtensionOverrides = Field(default_factory=ExtensionOverrides)
    parse: ParseOverrides = Field(default_factory=ParseOverrides)
    log_level: Literal["debug", "info", "warn", "error"] = "warn"
