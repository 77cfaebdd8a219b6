"""Compile configured layouts and register them as display transformers."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeAlias

import structlog

from columnar.lib.formatter import compile_formatter
from columnar.lib.registry import default_mappers, default_registry
from columnar.lib.style import plain_style

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

    from columnar.lib.config.settings import ColumnarConfig, LayoutConfig
    from columnar.lib.registry import ExtractorRegistry, MapperRegistry
    from columnar.lib.style import StyleApplier

logger = structlog.get_logger(__name__)

Transformer: TypeAlias = "Callable[[str], str]"


def compile_layout(
    layout: LayoutConfig,
    *,
    registry: ExtractorRegistry | None = None,
    mappers: MapperRegistry | None = None,
    separator: str | None = None,
    apply_style: StyleApplier = plain_style,
) -> Transformer:
    """Build the formatter for one configured layout.

    Both the object mapper and every column extractor are resolved here, so an
    unknown name raises UnresolvedExtractor before the layout is used.
    """

    resolved_registry = registry if registry is not None else default_registry()
    object_mapper = None
    if layout.object_mapper is not None:
        resolved_mappers = mappers if mappers is not None else default_mappers()
        object_mapper = resolved_mappers.resolve(layout.object_mapper).func
    logger.debug("compiling layout", layout=layout.name, object_mapper=layout.object_mapper)
    return compile_formatter(
        layout.columns,
        resolved_registry,
        object_mapper=object_mapper,
        separator=separator,
        apply_style=apply_style,
    )


class DisplayTransformers:
    """Formatters keyed by the UI context (command, prompt) they decorate."""

    def __init__(self) -> None:
        self._transformers: dict[str, Transformer] = {}

    def register(self, context_id: str, transformer: Transformer) -> None:
        if not context_id:
            raise ValueError("Context id must be non-empty")
        if context_id in self._transformers:
            logger.info("replacing display transformer", context=context_id)
        self._transformers[context_id] = transformer

    def unregister(self, context_id: str) -> None:
        self._transformers.pop(context_id, None)

    def get(self, context_id: str) -> Transformer | None:
        return self._transformers.get(context_id)

    def transform(self, context_id: str, candidate: str) -> str:
        """Format ``candidate`` for ``context_id``; unknown contexts pass it through."""

        transformer = self._transformers.get(context_id)
        if transformer is None:
            return candidate
        return transformer(candidate)

    def __contains__(self, context_id: object) -> bool:
        return context_id in self._transformers

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._transformers))

    def __len__(self) -> int:
        return len(self._transformers)


def install_layouts(
    config: ColumnarConfig,
    transformers: DisplayTransformers,
    *,
    registry: ExtractorRegistry | None = None,
    mappers: MapperRegistry | None = None,
    apply_style: StyleApplier = plain_style,
) -> list[str]:
    """Compile every layout and register it under its context (or its name).

    All layouts are compiled before any is registered, so one bad layout
    leaves ``transformers`` untouched. Returns the registered context ids.
    """

    compiled: list[tuple[str, Transformer]] = []
    for name in sorted(config.layouts):
        layout = config.layouts[name]
        transformer = compile_layout(
            layout, registry=registry, mappers=mappers, apply_style=apply_style
        )
        compiled.append((layout.context or layout.name, transformer))

    for context_id, transformer in compiled:
        transformers.register(context_id, transformer)
    return [context_id for context_id, _ in compiled]
