"""Configuration loading and process-wide options."""

from columnar.lib.config.settings import (
    DEFAULT_SEPARATOR,
    ColumnarConfig,
    LayoutConfig,
    apply_config,
    get_separator,
    load_config,
    reset_separator,
    set_separator,
)

__all__ = [
    "DEFAULT_SEPARATOR",
    "ColumnarConfig",
    "LayoutConfig",
    "apply_config",
    "get_separator",
    "load_config",
    "reset_separator",
    "set_separator",
]
