"""Process-wide options and the `.columnar/config.toml` loader."""

from __future__ import annotations

import logging
import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import cast

from columnar.lib.columns import ColumnDescriptor, coerce_descriptor
from columnar.lib.errors import InvalidColumn

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR = "  "

_separator: str = DEFAULT_SEPARATOR


def get_separator() -> str:
    """Return the current field separator.

    Formatters built without a pinned separator call this on every line, so
    changing it with set_separator() restyles already-built formatters.
    """

    return _separator


def set_separator(value: str) -> str:
    """Set the process-wide field separator and return the previous value."""

    global _separator
    if not isinstance(value, str):
        raise TypeError(f"Separator must be str, got {type(value).__name__}")
    previous = _separator
    _separator = value
    return previous


def reset_separator() -> None:
    set_separator(DEFAULT_SEPARATOR)


@dataclass(frozen=True, slots=True)
class LayoutConfig:
    """Named column layout declared under `[layouts.<name>]`."""

    name: str
    columns: tuple[ColumnDescriptor, ...] = ()
    object_mapper: str | None = None
    context: str | None = None


@dataclass(frozen=True, slots=True)
class ColumnarConfig:
    """Resolved configuration for columnar."""

    separator: str = DEFAULT_SEPARATOR
    color: bool = False
    layouts: dict[str, LayoutConfig] = field(default_factory=dict)


_LAYOUT_KEYS = frozenset({"columns", "object_mapper", "context"})

_ENV_SEPARATOR = "COLUMNAR_SEPARATOR"
_ENV_COLOR = "COLUMNAR_COLOR"
_ENV_ROOT = "COLUMNAR_ROOT"

_TRUE_VALUES = frozenset({"1", "true", "yes", "on"})
_FALSE_VALUES = frozenset({"0", "false", "no", "off", ""})


def resolve_root(explicit: Path | None = None) -> Path:
    """Resolve the directory that owns `.columnar/config.toml`.

    Precedence:
    1. Explicit function argument.
    2. `COLUMNAR_ROOT` environment variable.
    3. Current working directory.
    """

    if explicit is not None:
        return explicit.expanduser().resolve()
    env_root = os.getenv(_ENV_ROOT)
    if env_root:
        return Path(env_root).expanduser().resolve()
    return Path.cwd().resolve()


def config_path(root: Path) -> Path:
    return root / ".columnar" / "config.toml"


def _coerce_optional_name(*, raw_value: object, source: str) -> str | None:
    if raw_value is None:
        return None
    if not isinstance(raw_value, str):
        raise ValueError(
            f"Invalid value for '{source}': expected str, got "
            f"{type(raw_value).__name__} ({raw_value!r})."
        )
    normalized = raw_value.strip()
    if not normalized:
        raise ValueError(f"Invalid value for '{source}': expected non-empty string.")
    return normalized


def _coerce_layout(*, name: str, raw_value: object, source: str) -> LayoutConfig:
    if not isinstance(raw_value, dict):
        raise ValueError(f"Invalid value for '{source}': expected table.")

    columns: tuple[ColumnDescriptor, ...] = ()
    object_mapper: str | None = None
    context: str | None = None
    for key, value in cast("dict[str, object]", raw_value).items():
        if key not in _LAYOUT_KEYS:
            logger.warning("Ignoring unknown columnar config key '%s.%s'.", source, key)
            continue
        if key == "columns":
            if not isinstance(value, list):
                raise ValueError(
                    f"Invalid value for '{source}.columns': expected array, got "
                    f"{type(value).__name__} ({value!r})."
                )
            parsed: list[ColumnDescriptor] = []
            for index, item in enumerate(cast("list[object]", value)):
                if not isinstance(item, (str, dict, list)):
                    raise ValueError(
                        f"Invalid value for '{source}.columns[{index}]': expected "
                        f"table, string or array, got {type(item).__name__} ({item!r})."
                    )
                try:
                    parsed.append(coerce_descriptor(item))  # type: ignore[arg-type]
                except InvalidColumn as error:
                    raise ValueError(
                        f"Invalid value for '{source}.columns[{index}]': {error}"
                    ) from error
            columns = tuple(parsed)
            continue
        if key == "object_mapper":
            object_mapper = _coerce_optional_name(raw_value=value, source=f"{source}.{key}")
            continue
        context = _coerce_optional_name(raw_value=value, source=f"{source}.{key}")

    return LayoutConfig(name=name, columns=columns, object_mapper=object_mapper, context=context)


def _coerce_layouts(*, raw_value: object, source: str) -> dict[str, LayoutConfig]:
    if not isinstance(raw_value, dict):
        raise ValueError(f"Invalid value for '{source}': expected table.")
    return {
        name: _coerce_layout(name=name, raw_value=value, source=f"{source}.{name}")
        for name, value in cast("dict[str, object]", raw_value).items()
    }


def _coerce_separator(*, raw_value: object, source: str) -> str:
    if not isinstance(raw_value, str):
        raise ValueError(
            f"Invalid value for '{source}': expected str, got "
            f"{type(raw_value).__name__} ({raw_value!r})."
        )
    return raw_value


def _coerce_bool(*, raw_value: object, source: str) -> bool:
    if not isinstance(raw_value, bool):
        raise ValueError(
            f"Invalid value for '{source}': expected bool, got "
            f"{type(raw_value).__name__} ({raw_value!r})."
        )
    return raw_value


def _coerce_env_bool(*, raw_value: str, env_name: str) -> bool:
    normalized = raw_value.strip().lower()
    if normalized in _TRUE_VALUES:
        return True
    if normalized in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid environment override '{env_name}': expected bool, got {raw_value!r}.")


def _apply_toml_payload(*, values: dict[str, object], payload: dict[str, object]) -> None:
    for key, raw_value in payload.items():
        if key == "separator":
            values["separator"] = _coerce_separator(raw_value=raw_value, source=key)
            continue
        if key == "color":
            values["color"] = _coerce_bool(raw_value=raw_value, source=key)
            continue
        if key == "layouts":
            values["layouts"] = _coerce_layouts(raw_value=raw_value, source=key)
            continue
        logger.warning("Ignoring unknown columnar config key '%s'.", key)


def _apply_env_overrides(values: dict[str, object]) -> None:
    separator = os.getenv(_ENV_SEPARATOR)
    if separator is not None:
        values["separator"] = separator
    color = os.getenv(_ENV_COLOR)
    if color is not None:
        values["color"] = _coerce_env_bool(raw_value=color, env_name=_ENV_COLOR)


def load_config(root: Path | None = None) -> ColumnarConfig:
    """Load `.columnar/config.toml` under ``root`` and apply environment overrides."""

    defaults = ColumnarConfig()
    values: dict[str, object] = {
        "separator": defaults.separator,
        "color": defaults.color,
        "layouts": defaults.layouts,
    }
    path = config_path(resolve_root(root))
    if path.is_file():
        payload_obj = tomllib.loads(path.read_text(encoding="utf-8"))
        _apply_toml_payload(values=values, payload=cast("dict[str, object]", payload_obj))

    _apply_env_overrides(values)
    return ColumnarConfig(
        separator=cast("str", values["separator"]),
        color=cast("bool", values["color"]),
        layouts=cast("dict[str, LayoutConfig]", values["layouts"]),
    )


def apply_config(config: ColumnarConfig) -> None:
    """Push process-wide options from ``config`` into the running process."""

    set_separator(config.separator)
