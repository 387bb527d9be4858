"""YAML config loading with env var expansion."""

import os
import re
from pathlib import Path

import yaml
from pydantic import ValidationError

from .models import MdbakeConfig


def load_config(cli_path: str | None = None) -> MdbakeConfig:
    """Load config with resolution order: CLI > project-local > user-global > defaults."""
    config_paths = [
        Path(cli_path) if cli_path else None,
        Path("./mdbake.yaml"),
        Path.home() / ".mdbake" / "config.yaml",
    ]

    for path in config_paths:
        if path and path.exists():
            try:
                with open(path) as f:
                    raw = yaml.safe_load(f)
                if raw is None:
                    continue
                if not isinstance(raw, dict):
                    raise ValueError(f"Invalid config in {path}: expected a mapping")
                raw = _expand_env_vars(raw)
                return MdbakeConfig(**raw)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
            except ValidationError as e:
                raise ValueError(f"Invalid config in {path}: {e}") from e

    return MdbakeConfig()


def _expand_env_vars(obj: object) -> object:
    """Recursively expand ${VAR} references in strings."""
    if isinstance(obj, str):
        return re.sub(r"\$\{(\w+)\}", lambda m: os.environ.get(m.group(1), ""), obj)
    elif isinstance(obj, dict):
        return {k: _expand_env_vars(v) for k, v in obj.items()}
    elif isinstance(obj, list):
        return [_expand_env_vars(v) for v in obj]
    return obj


# Default YAML template for `mdbake config init`
DEFAULT_CONFIG_TEMPLATE = """\
# mdbake.yaml

# Operating mode
#   full:  all markdown extensions, stylesheet + trailer, quiet console
#   plain: bare rendering, no stylesheet or trailer, echo each file
profile: "full"

# Output
out_dir: "build"
# stylesheet: "docs/style.css"   # embedded in a <style> block in every page
# trailer: true                  # force the bundled trailer on/off (default: per profile)
atomic_writes: true

# Markdown extension overrides (unset = follow profile)
# extension:
#   table: true
#   strikethrough: true
#   autolink: true
#   tasklist: true
#   superscript: true
#   footnotes: true
#   header_ids: "header-"

# parse:
#   smart: true
#   relaxed_tasklist_matching: true

# Logging
log_level: "warn"              # debug | info | warn | error
"""
