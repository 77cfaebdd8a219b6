"""ANSI style applier and builtin extractor coverage."""

from __future__ import annotations

from pathlib import PurePath

import pytest

from columnar.lib import extractors
from columnar.lib.columns import ColumnDescriptor
from columnar.lib.formatter import CandidateContext, compile_formatter
from columnar.lib.registry import default_mappers, default_registry
from columnar.lib.style import ansi_style, known_styles, plain_style, strip_ansi, style_names


def test_plain_style_is_identity() -> None:
    assert plain_style("text ", "bold") == "text "


def test_ansi_style_wraps_and_resets() -> None:
    assert ansi_style("ab  ", "bold") == "\x1b[1mab  \x1b[0m"
    assert ansi_style("x", "red+bold") == "\x1b[31m\x1b[1mx\x1b[0m"


def test_ansi_style_ignores_unknown_names() -> None:
    assert ansi_style("x", "sparkly") == "x"
    assert style_names("sparkly bold") == ["bold"]


def test_style_aliases_and_dashes() -> None:
    assert style_names("comment") == ["bright_black"]
    assert style_names("bg-blue, underline") == ["bg_blue", "underline"]
    assert "reset" not in known_styles()


def test_strip_ansi_recovers_plain_text() -> None:
    assert strip_ansi(ansi_style("hello", "green underline")) == "hello"


def test_ansi_styled_line_keeps_plain_width() -> None:
    formatter = compile_formatter(
        [ColumnDescriptor("basename", 10, "bold"), ColumnDescriptor("dirname", style="dim")],
        default_registry(),
        object_mapper=default_mappers().resolve("path").func,
        separator="  ",
        apply_style=ansi_style,
    )

    line = formatter("src/columnar/cli.py")

    assert strip_ansi(line) == "cli.py      src/columnar"
    assert line.startswith("\x1b[1mcli.py    \x1b[0m")


@pytest.mark.parametrize(
    ("func", "value", "expected"),
    [
        (extractors.identity, "abc", "abc"),
        (extractors.identity, 12, "12"),
        (extractors.length, "abcd", "4"),
        (extractors.length, 5, None),
        (extractors.upper, "abc", "ABC"),
        (extractors.lower, "ABC", "abc"),
        (extractors.basename, "a/b/c.txt", "c.txt"),
        (extractors.basename, PurePath("a/b"), "b"),
        (extractors.dirname, "a/b/c.txt", "a/b"),
        (extractors.dirname, "c.txt", "."),
        (extractors.parent, "a/b/c.txt", "b"),
        (extractors.parent, "c.txt", None),
        (extractors.suffix, "c.tar.gz", ".gz"),
        (extractors.suffix, "Makefile", None),
    ],
)
def test_builtin_extractors(func, value: object, expected: str | None) -> None:
    assert func(value) == expected


def test_candidate_extractor_reads_context() -> None:
    assert extractors.candidate(5, CandidateContext(candidate="hello")) == "hello"


def test_builtin_mappers() -> None:
    assert extractors.to_path("a/b") == PurePath("a/b")
    assert extractors.to_length("hello") == 5
    assert extractors.to_words(" a  b ") == ["a", "b"]


def test_builtin_layout_over_length_mapper() -> None:
    formatter = compile_formatter(
        [ColumnDescriptor("identity", 3), ColumnDescriptor("candidate")],
        default_registry(),
        object_mapper=default_mappers().resolve("length").func,
        separator="|",
    )

    assert formatter("hello") == "5  |hello"
