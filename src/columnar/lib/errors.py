"""Error types raised while compiling column layouts."""

from __future__ import annotations


class ColumnarError(Exception):
    """Base class for columnar configuration errors."""


class UnresolvedExtractor(ColumnarError, KeyError):
    """A column names an extractor (or mapper) that is not registered."""

    def __init__(self, name: str, *, kind: str = "extractor", known: tuple[str, ...] = ()) -> None:
        self.name = name
        self.kind = kind
        self.known = known
        super().__init__(name)

    def __str__(self) -> str:
        message = f"Unknown {self.kind} '{self.name}'"
        if self.known:
            message += f" (registered: {', '.join(self.known)})"
        return message


class InvalidColumn(ColumnarError, ValueError):
    """A column descriptor is malformed."""
