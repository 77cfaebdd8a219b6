"""Smoke tests for the columnar CLI."""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING

from columnar import __version__
from columnar.cli.format_helpers import describe_column, parse_column_token, tabular
from columnar.cli.main import _extract_global_options
from columnar.lib.columns import ColumnDescriptor

if TYPE_CHECKING:
    from collections.abc import Callable

_FILES_LAYOUT = (
    "[layouts.files]\n"
    'object_mapper = "path"\n'
    "columns = [\n"
    '  { extractor = "basename", width = 8, style = "bold" },\n'
    '  { extractor = "dirname" },\n'
    "]\n"
)


def test_help_lists_commands(run_columnar) -> None:
    result = run_columnar(["--help"])

    assert result.returncode == 0
    for expected in ["format", "columns", "extractors", "layouts"]:
        assert expected in result.stdout


def test_version(run_columnar) -> None:
    result = run_columnar(["--version"])

    assert result.returncode == 0
    assert __version__ in result.stdout


def test_format_layout_from_stdin(run_columnar, write_config: Callable[[str], Path]) -> None:
    write_config(_FILES_LAYOUT)

    result = run_columnar(["format", "files"], stdin="src/app.py\nREADME\n")

    assert result.returncode == 0, result.stderr
    assert result.stdout.splitlines() == ["app.py    src", "README    ."]


def test_format_layout_with_color_and_separator(
    run_columnar, write_config: Callable[[str], Path]
) -> None:
    write_config(_FILES_LAYOUT)

    result = run_columnar(
        ["format", "files", "--color", "--separator", "|"], stdin="src/app.py\n"
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout == "\x1b[1mapp.py  \x1b[0m|src\n"


def test_format_layout_json(run_columnar, write_config: Callable[[str], Path]) -> None:
    write_config(_FILES_LAYOUT)

    result = run_columnar(["--json", "format", "files"], stdin="a/b.txt\n")

    assert result.returncode == 0, result.stderr
    assert json.loads(result.stdout) == {"layout": "files", "lines": ["b.txt     a"]}


def test_format_unknown_layout_fails(run_columnar) -> None:
    result = run_columnar(["format", "missing"], stdin="x\n")

    assert result.returncode == 1
    assert "Unknown layout 'missing'" in result.stderr


def test_format_layout_with_unknown_extractor_fails(
    run_columnar, write_config: Callable[[str], Path]
) -> None:
    write_config('[layouts.bad]\ncolumns = ["nope"]\n')

    result = run_columnar(["format", "bad"], stdin="x\n")

    assert result.returncode == 1
    assert "Unknown extractor 'nope'" in result.stderr
    assert result.stdout == ""


def test_adhoc_columns_with_mapper(run_columnar) -> None:
    result = run_columnar(
        ["columns", "identity:3", "candidate", "--mapper", "length", "--separator", "|"],
        stdin="hello\nhi\n",
    )

    assert result.returncode == 0, result.stderr
    assert result.stdout.splitlines() == ["5  |hello", "2  |hi"]


def test_adhoc_columns_use_config_separator(
    run_columnar, write_config: Callable[[str], Path]
) -> None:
    write_config('separator = " : "\n')

    result = run_columnar(["columns", "identity", "length"], stdin="abc\n")

    assert result.returncode == 0, result.stderr
    assert result.stdout == "abc : 3\n"


def test_extractors_lists_builtins(run_columnar) -> None:
    result = run_columnar(["extractors"])

    assert result.returncode == 0
    assert "basename" in result.stdout
    assert "Object mappers:" in result.stdout


def test_extractors_json(run_columnar) -> None:
    result = run_columnar(["--json", "extractors"])

    payload = json.loads(result.stdout)
    names = {row["name"]: row for row in payload["extractors"]}
    assert names["candidate"]["wants_context"] is True
    assert {row["name"] for row in payload["mappers"]} >= {"path", "length", "words"}


def test_layouts_lists_configured_layouts(
    run_columnar, write_config: Callable[[str], Path]
) -> None:
    write_config(_FILES_LAYOUT)

    result = run_columnar(["layouts"])

    assert result.returncode == 0
    assert result.stdout.splitlines() == ["files  -  path  basename:8:bold dirname"]


def test_extract_global_options() -> None:
    cleaned, options = _extract_global_options(["-v", "--json", "format", "files", "--verbose"])

    assert cleaned == ["format", "files"]
    assert options.output.format == "json"
    assert options.verbosity == 2


def test_column_tokens_round_trip_through_describe() -> None:
    assert parse_column_token("basename") == ColumnDescriptor("basename")
    assert parse_column_token("basename:30:bold") == ColumnDescriptor("basename", 30, "bold")
    assert parse_column_token("dirname::dim") == ColumnDescriptor("dirname", None, "dim")
    assert describe_column(ColumnDescriptor("dirname", None, "dim")) == "dirname::dim"


def test_tabular_aligns_columns() -> None:
    assert tabular([["a", "one"], ["bbb", "two"]]) == "a    one\nbbb  two"
    assert tabular([]) == ""
