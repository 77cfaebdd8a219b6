"""Text helpers for CLI listings."""

from __future__ import annotations

from columnar.lib.columns import ColumnDescriptor


def tabular(rows: list[list[str]], sep: str = "  ") -> str:
    """Align columns by max width per column.

    >>> tabular([["basename", "Final path component."], ["length", "Length."]])
    'basename  Final path component.\\nlength    Length.'
    """
    if not rows:
        return ""
    col_count = max(len(row) for row in rows)
    col_widths = [
        max((len(row[col]) if col < len(row) else 0) for row in rows)
        for col in range(col_count)
    ]
    lines: list[str] = []
    for row in rows:
        cells = [
            (row[col] if col < len(row) else "").ljust(col_widths[col])
            for col in range(col_count)
        ]
        lines.append(sep.join(cells).rstrip())
    return "\n".join(lines)


def describe_column(column: ColumnDescriptor) -> str:
    """Compact one-token rendering like ``basename:30:bold``."""

    parts = [column.extractor]
    if column.width is not None or column.style is not None:
        parts.append("" if column.width is None else str(column.width))
    if column.style is not None:
        parts.append(column.style)
    return ":".join(parts)


def parse_column_token(token: str) -> ColumnDescriptor:
    """Parse ``name[:width[:style]]`` as typed on the command line.

    >>> parse_column_token("basename:30:bold")
    ColumnDescriptor(extractor='basename', width=30, style='bold')
    """
    name, _, rest = token.partition(":")
    width_text, _, style = rest.partition(":")
    width: int | None = None
    if width_text:
        try:
            width = int(width_text)
        except ValueError as error:
            raise ValueError(f"Invalid column '{token}': width must be an integer.") from error
    return ColumnDescriptor(extractor=name, width=width, style=style or None)
