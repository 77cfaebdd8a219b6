"""Column descriptors and the compiler that resolves them against a registry."""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import TYPE_CHECKING, TypeAlias, cast

import structlog

from columnar.lib.errors import InvalidColumn

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable

    from columnar.lib.registry import ExtractorRegistry

logger = structlog.get_logger(__name__)

_DESCRIPTOR_KEYS = frozenset({"extractor", "width", "style"})


@dataclass(frozen=True, slots=True)
class ColumnDescriptor:
    """Declarative column: extractor name plus optional width and style."""

    extractor: str
    width: int | None = None
    style: str | None = None


@dataclass(frozen=True, slots=True)
class ResolvedColumn:
    """Column bound to a concrete extractor callable."""

    extractor: Callable[..., str | None]
    width: int | None = None
    style: str | None = None
    wants_context: bool = False
    name: str = ""


DescriptorLike: TypeAlias = ColumnDescriptor | str | Sequence[object] | Mapping[str, object]


def _check_width(value: object, *, source: str) -> int | None:
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidColumn(
            f"Invalid width for column '{source}': expected int, got "
            f"{type(value).__name__} ({value!r})."
        )
    if value <= 0:
        raise InvalidColumn(
            f"Invalid width for column '{source}': expected a positive int, got {value!r}."
        )
    return value


def _check_style(value: object, *, source: str) -> str | None:
    if value is None:
        return None
    if not isinstance(value, str):
        raise InvalidColumn(
            f"Invalid style for column '{source}': expected str, got "
            f"{type(value).__name__} ({value!r})."
        )
    normalized = value.strip()
    if not normalized:
        raise InvalidColumn(f"Invalid style for column '{source}': expected non-empty string.")
    return normalized


def _check_name(value: object) -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidColumn(f"Invalid extractor name: expected non-empty str, got {value!r}.")
    return value.strip()


def coerce_descriptor(value: DescriptorLike) -> ColumnDescriptor:
    """Normalize one descriptor-like value into a validated ColumnDescriptor.

    Accepts a ColumnDescriptor, a bare extractor name, a ``(name, width,
    style)`` tuple (trailing items optional), or a mapping with ``extractor``,
    ``width`` and ``style`` keys as written in config files.
    """

    if isinstance(value, ColumnDescriptor):
        name = _check_name(value.extractor)
        return ColumnDescriptor(
            extractor=name,
            width=_check_width(value.width, source=name),
            style=_check_style(value.style, source=name),
        )

    if isinstance(value, str):
        return ColumnDescriptor(extractor=_check_name(value))

    if isinstance(value, Mapping):
        payload = cast("Mapping[str, object]", value)
        unknown = sorted(set(payload) - _DESCRIPTOR_KEYS)
        if unknown:
            raise InvalidColumn(f"Unknown column keys: {', '.join(unknown)}.")
        if "extractor" not in payload:
            raise InvalidColumn("Column is missing required key 'extractor'.")
        name = _check_name(payload["extractor"])
        return ColumnDescriptor(
            extractor=name,
            width=_check_width(payload.get("width"), source=name),
            style=_check_style(payload.get("style"), source=name),
        )

    if isinstance(value, Sequence):
        items = list(cast("Sequence[object]", value))
        if not 1 <= len(items) <= 3:
            raise InvalidColumn(
                f"Invalid column {value!r}: expected (extractor, width, style) with 1-3 items."
            )
        name = _check_name(items[0])
        width = items[1] if len(items) > 1 else None
        style = items[2] if len(items) > 2 else None
        return ColumnDescriptor(
            extractor=name,
            width=_check_width(width, source=name),
            style=_check_style(style, source=name),
        )

    raise InvalidColumn(f"Invalid column {value!r}: unsupported descriptor type.")


def coerce_descriptors(values: Iterable[DescriptorLike]) -> tuple[ColumnDescriptor, ...]:
    return tuple(coerce_descriptor(value) for value in values)


def compile_columns(
    descriptors: Iterable[DescriptorLike],
    registry: ExtractorRegistry,
) -> tuple[ResolvedColumn, ...]:
    """Resolve descriptors into columns bound to registered extractors.

    Raises UnresolvedExtractor for the first name missing from ``registry``;
    no partial result is returned. Order, width and style are preserved.
    """

    resolved: list[ResolvedColumn] = []
    for descriptor in coerce_descriptors(descriptors):
        spec = registry.resolve(descriptor.extractor)
        resolved.append(
            ResolvedColumn(
                extractor=spec.func,
                width=descriptor.width,
                style=descriptor.style,
                wants_context=spec.wants_context,
                name=spec.name,
            )
        )
    logger.debug("compiled columns", columns=[column.name for column in resolved])
    return tuple(resolved)
