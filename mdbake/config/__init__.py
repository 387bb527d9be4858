from .loader import load_config
from .models import (
    ExtensionOverrides,
    MdbakeConfig,
    ParseOverrides,
)

__all__ = [
    "ExtensionOverrides",
    "MdbakeConfig",
    "ParseOverrides",
    "load_config",
]
