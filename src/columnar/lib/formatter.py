"""Line formatter: resolved columns -> reusable `candidate -> line` function.

For each candidate the formatter maps it to an intermediate object (when an
object mapper is set), runs every column extractor over that object, pads
present values to the column width, styles them, and joins the segments with
the separator.

Extractor exceptions are not caught. A failing extractor aborts formatting of
that one candidate and the exception reaches the caller unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

from columnar.lib.columns import compile_columns
from columnar.lib.config.settings import get_separator
from columnar.lib.style import plain_style

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from columnar.lib.columns import DescriptorLike, ResolvedColumn
    from columnar.lib.registry import ExtractorRegistry
    from columnar.lib.style import StyleApplier


@dataclass(frozen=True, slots=True)
class CandidateContext:
    """Per-call context handed to extractors registered with ``wants_context``."""

    candidate: str


@dataclass(frozen=True, slots=True)
class Segment:
    """One padded field of a line plus the style it should be rendered with."""

    text: str
    style: str | None = None


@dataclass(frozen=True, slots=True)
class FormattedLine:
    """A line as tagged segments; rendering decides how styles are realized."""

    segments: tuple[Segment, ...]
    separator: str

    @property
    def plain(self) -> str:
        return self.separator.join(segment.text for segment in self.segments)

    def render(self, apply_style: StyleApplier = plain_style) -> str:
        return self.separator.join(
            apply_style(segment.text, segment.style) if segment.style else segment.text
            for segment in self.segments
        )

    def __str__(self) -> str:
        return self.plain


def pad(raw: str | None, width: int | None) -> str:
    """Right-pad ``raw`` with spaces up to ``width``; never truncate."""

    if raw is None:
        return ""
    if width is None or len(raw) > width:
        return raw
    return raw + " " * (width - len(raw))


def _extract(column: ResolvedColumn, obj: Any, ctx: CandidateContext) -> str | None:
    if column.wants_context:
        return column.extractor(obj, ctx)
    return column.extractor(obj)


def format_segments(
    candidate: str,
    columns: Sequence[ResolvedColumn],
    *,
    object_mapper: Callable[[str], Any] | None = None,
) -> tuple[Segment, ...]:
    """Run every column over one candidate and return its padded segments."""

    ctx = CandidateContext(candidate=candidate)
    obj = object_mapper(candidate) if object_mapper is not None else candidate
    segments: list[Segment] = []
    for column in columns:
        raw = _extract(column, obj, ctx)
        # Absent values contribute an empty, unstyled segment.
        style = column.style if raw is not None else None
        segments.append(Segment(text=pad(raw, column.width), style=style))
    return tuple(segments)


@dataclass(frozen=True, slots=True)
class FormatterSpec:
    """Compiled columns plus the optional object mapper and pinned separator.

    When ``separator`` is None the process-wide separator is read on every
    call, so get_separator()/set_separator() changes apply to built formatters.
    """

    columns: tuple[ResolvedColumn, ...]
    object_mapper: Callable[[str], Any] | None = None
    separator: str | None = None

    def current_separator(self) -> str:
        return self.separator if self.separator is not None else get_separator()

    def format_line(self, candidate: str) -> FormattedLine:
        segments = format_segments(
            candidate, self.columns, object_mapper=self.object_mapper
        )
        return FormattedLine(segments=segments, separator=self.current_separator())

    def build(self, apply_style: StyleApplier = plain_style) -> Callable[[str], str]:
        """Return a function formatting one candidate into a display string."""

        def transform(candidate: str) -> str:
            return self.format_line(candidate).render(apply_style)

        return transform


def build_line_formatter(
    columns: Iterable[ResolvedColumn],
    *,
    object_mapper: Callable[[str], Any] | None = None,
    separator: str | None = None,
) -> Callable[[str], FormattedLine]:
    """Return a function producing the segment form of each candidate's line."""

    spec = FormatterSpec(columns=tuple(columns), object_mapper=object_mapper, separator=separator)
    return spec.format_line


def build_formatter(
    columns: Iterable[ResolvedColumn],
    *,
    object_mapper: Callable[[str], Any] | None = None,
    separator: str | None = None,
    apply_style: StyleApplier = plain_style,
) -> Callable[[str], str]:
    """Return a reusable function formatting one candidate into one line."""

    spec = FormatterSpec(columns=tuple(columns), object_mapper=object_mapper, separator=separator)
    return spec.build(apply_style)


def compile_formatter(
    descriptors: Iterable[DescriptorLike],
    registry: ExtractorRegistry,
    *,
    object_mapper: Callable[[str], Any] | None = None,
    separator: str | None = None,
    apply_style: StyleApplier = plain_style,
) -> Callable[[str], str]:
    """Compile descriptors against ``registry`` and build the formatter.

    Unknown extractor names raise UnresolvedExtractor here, before any
    candidate is formatted.
    """

    columns = compile_columns(descriptors, registry)
    return build_formatter(
        columns,
        object_mapper=object_mapper,
        separator=separator,
        apply_style=apply_style,
    )
