"""Cyclopts CLI entry point for columnar."""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Annotated

from cyclopts import App, Parameter

from columnar import __version__
from columnar.cli.format_helpers import parse_column_token
from columnar.cli.output import (
    ExtractorListOutput,
    ExtractorRow,
    FormattedLinesOutput,
    LayoutListOutput,
    OutputConfig,
    layout_row,
    normalize_output_format,
)
from columnar.cli.output import emit as emit_output
from columnar.lib.config.settings import apply_config, load_config, set_separator
from columnar.lib.errors import ColumnarError, UnresolvedExtractor
from columnar.lib.formatter import compile_formatter
from columnar.lib.layouts import compile_layout
from columnar.lib.registry import default_mappers, default_registry
from columnar.lib.style import ansi_style, plain_style

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Sequence

    from columnar.lib.config.settings import ColumnarConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class GlobalOptions:
    """Top-level options that apply to all commands."""

    output: OutputConfig
    verbosity: int = 0


_GLOBAL_OPTIONS: ContextVar[GlobalOptions | None] = ContextVar("_GLOBAL_OPTIONS", default=None)


def get_global_options() -> GlobalOptions:
    """Return parsed global options for the current command."""

    return _GLOBAL_OPTIONS.get() or GlobalOptions(output=OutputConfig())


def emit(payload: object) -> None:
    """Write command output using current output format settings."""

    emit_output(payload, get_global_options().output)


def _extract_global_options(argv: Sequence[str]) -> tuple[list[str], GlobalOptions]:
    json_mode = False
    output_format: str | None = None
    verbosity = 0
    cleaned: list[str] = []

    i = 0
    while i < len(argv):
        arg = argv[i]
        if arg == "--json":
            json_mode = True
            i += 1
            continue
        if arg == "--format":
            if i + 1 >= len(argv):
                raise SystemExit("--format requires a value")
            output_format = argv[i + 1]
            i += 2
            continue
        if arg.startswith("--format="):
            output_format = arg.partition("=")[2]
            i += 1
            continue
        if arg in {"-v", "--verbose"}:
            verbosity += 1
            i += 1
            continue

        cleaned.append(arg)
        i += 1

    resolved = normalize_output_format(requested=output_format, json_mode=json_mode)
    return cleaned, GlobalOptions(output=OutputConfig(format=resolved), verbosity=verbosity)


app = App(
    name="columnar",
    help="Format completion candidates into aligned, styled columns.",
    version=__version__,
)


def _read_candidates(stream: Iterable[str]) -> list[str]:
    return [line.rstrip("\r\n") for line in stream]


def _load(root: Path | None, separator: str | None) -> ColumnarConfig:
    config = load_config(root)
    apply_config(config)
    if separator is not None:
        set_separator(separator)
    return config


def _style_applier(config: ColumnarConfig, color: bool | None) -> Callable[[str, str], str]:
    enabled = config.color if color is None else color
    return ansi_style if enabled else plain_style


def _emit_lines(name: str, transform: Callable[[str], str]) -> None:
    candidates = _read_candidates(sys.stdin)
    logger.info("formatting %d candidates with %s", len(candidates), name)
    lines = tuple(transform(candidate) for candidate in candidates)
    if not lines and get_global_options().output.format == "text":
        return
    emit(FormattedLinesOutput(layout=name, lines=lines))


@app.command(name="format")
def format_layout(
    layout: str,
    separator: Annotated[
        str | None,
        Parameter(name="--separator", help="Field separator (overrides config)."),
    ] = None,
    color: Annotated[
        bool | None,
        Parameter(name="--color", help="Render column styles as ANSI escapes."),
    ] = None,
    root: Annotated[
        Path | None,
        Parameter(name="--root", help="Directory containing .columnar/config.toml."),
    ] = None,
) -> None:
    """Format candidates read from stdin with a configured layout."""

    config = _load(root, separator)
    layout_config = config.layouts.get(layout)
    if layout_config is None:
        raise UnresolvedExtractor(layout, kind="layout", known=tuple(sorted(config.layouts)))
    transform = compile_layout(layout_config, apply_style=_style_applier(config, color))
    _emit_lines(layout, transform)


@app.command(name="columns")
def format_columns(
    *tokens: str,
    mapper: Annotated[
        str | None,
        Parameter(name="--mapper", help="Object mapper applied to each candidate."),
    ] = None,
    separator: Annotated[
        str | None,
        Parameter(name="--separator", help="Field separator (overrides config)."),
    ] = None,
    color: Annotated[
        bool | None,
        Parameter(name="--color", help="Render column styles as ANSI escapes."),
    ] = None,
    root: Annotated[
        Path | None,
        Parameter(name="--root", help="Directory containing .columnar/config.toml."),
    ] = None,
) -> None:
    """Format stdin candidates with ad-hoc columns given as NAME[:WIDTH[:STYLE]]."""

    config = _load(root, separator)
    object_mapper = default_mappers().resolve(mapper).func if mapper is not None else None
    transform = compile_formatter(
        [parse_column_token(token) for token in tokens],
        default_registry(),
        object_mapper=object_mapper,
        apply_style=_style_applier(config, color),
    )
    _emit_lines("columns", transform)


@app.command(name="extractors")
def list_extractors() -> None:
    """List registered extractors and object mappers."""

    emit(
        ExtractorListOutput(
            extractors=tuple(
                ExtractorRow(
                    name=spec.name,
                    description=spec.description,
                    wants_context=spec.wants_context,
                )
                for spec in default_registry().specs()
            ),
            mappers=tuple(
                ExtractorRow(name=spec.name, description=spec.description)
                for spec in default_mappers().specs()
            ),
        )
    )


@app.command(name="layouts")
def list_layouts(
    root: Annotated[
        Path | None,
        Parameter(name="--root", help="Directory containing .columnar/config.toml."),
    ] = None,
) -> None:
    """List layouts declared in .columnar/config.toml."""

    config = load_config(root)
    emit(
        LayoutListOutput(
            layouts=tuple(layout_row(config.layouts[name]) for name in sorted(config.layouts))
        )
    )


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point used by `columnar` and `python -m columnar`."""

    from columnar.lib.logging import configure_logging

    args = list(sys.argv[1:] if argv is None else argv)
    cleaned_args, options = _extract_global_options(args)
    configure_logging(json_mode=options.output.format == "json", verbosity=options.verbosity)

    token = _GLOBAL_OPTIONS.set(options)
    try:
        try:
            app(cleaned_args)
        except (ColumnarError, KeyError, ValueError, OSError) as exc:
            print(f"error: {exc}", file=sys.stderr)
            raise SystemExit(1) from None
    finally:
        _GLOBAL_OPTIONS.reset(token)
