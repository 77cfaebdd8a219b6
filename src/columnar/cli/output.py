"""CLI output payloads and emission."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, is_dataclass
from typing import TYPE_CHECKING, Any, Literal, Protocol, runtime_checkable

from columnar.cli.format_helpers import describe_column, tabular

if TYPE_CHECKING:
    from columnar.lib.config.settings import LayoutConfig

OutputFormat = Literal["text", "json"]


@runtime_checkable
class TextFormattable(Protocol):
    """Payloads that provide a human-readable text rendering."""

    def format_text(self) -> str: ...


@dataclass(frozen=True, slots=True)
class OutputConfig:
    format: OutputFormat = "text"


@dataclass(frozen=True, slots=True)
class ExtractorRow:
    name: str
    description: str
    wants_context: bool = False


@dataclass(frozen=True, slots=True)
class ExtractorListOutput:
    extractors: tuple[ExtractorRow, ...]
    mappers: tuple[ExtractorRow, ...] = ()

    def format_text(self) -> str:
        sections = [tabular([[row.name, row.description] for row in self.extractors])]
        if self.mappers:
            sections.append(
                "Object mappers:\n"
                + tabular([[row.name, row.description] for row in self.mappers])
            )
        return "\n\n".join(section for section in sections if section)


@dataclass(frozen=True, slots=True)
class LayoutRow:
    name: str
    context: str | None
    object_mapper: str | None
    columns: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class LayoutListOutput:
    layouts: tuple[LayoutRow, ...]

    def format_text(self) -> str:
        if not self.layouts:
            return "(no layouts configured)"
        return tabular(
            [
                [
                    row.name,
                    row.context or "-",
                    row.object_mapper or "-",
                    " ".join(row.columns),
                ]
                for row in self.layouts
            ]
        )


@dataclass(frozen=True, slots=True)
class FormattedLinesOutput:
    layout: str
    lines: tuple[str, ...]

    def format_text(self) -> str:
        return "\n".join(self.lines)


def layout_row(layout: LayoutConfig) -> LayoutRow:
    return LayoutRow(
        name=layout.name,
        context=layout.context,
        object_mapper=layout.object_mapper,
        columns=tuple(describe_column(column) for column in layout.columns),
    )


def normalize_output_format(*, requested: str | None, json_mode: bool) -> OutputFormat:
    """Resolve the final output format from flags."""

    if json_mode:
        return "json"
    if requested is None or requested == "":
        return "text"
    normalized = requested.strip().lower()
    if normalized == "text":
        return "text"
    if normalized == "json":
        return "json"
    raise SystemExit("--format must be one of: text, json")


def _to_jsonable(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return _to_jsonable(asdict(value))
    if isinstance(value, dict):
        return {str(key): _to_jsonable(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_to_jsonable(item) for item in value]
    return value


def emit(value: Any, config: OutputConfig) -> None:
    """Emit one payload according to the configured output mode."""

    if config.format == "json":
        print(json.dumps(_to_jsonable(value), sort_keys=True))
        return
    if isinstance(value, TextFormattable):
        print(value.format_text())
        return
    print(json.dumps(_to_jsonable(value), sort_keys=True, indent=2))
