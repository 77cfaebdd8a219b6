"""Host-agnostic builtin extractors and object mappers."""

from __future__ import annotations

from pathlib import PurePath
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from columnar.lib.formatter import CandidateContext
    from columnar.lib.registry import ExtractorRegistry, MapperRegistry


def candidate(_obj: object, ctx: CandidateContext) -> str:
    """The raw candidate string, even when an object mapper is active."""

    return ctx.candidate


def identity(obj: object) -> str:
    """The object itself, converted to text."""

    return obj if isinstance(obj, str) else str(obj)


def length(obj: object) -> str | None:
    """Length of the object, when it has one."""

    try:
        return str(len(obj))  # type: ignore[arg-type]
    except TypeError:
        return None


def upper(obj: object) -> str:
    """Upper-cased text of the object."""

    return identity(obj).upper()


def lower(obj: object) -> str:
    """Lower-cased text of the object."""

    return identity(obj).lower()


def _as_path(obj: object) -> PurePath:
    return obj if isinstance(obj, PurePath) else PurePath(identity(obj))


def basename(obj: object) -> str:
    """Final path component."""

    return _as_path(obj).name


def dirname(obj: object) -> str:
    """Directory part of a path ('.' for bare names)."""

    return str(_as_path(obj).parent)


def parent(obj: object) -> str | None:
    """Parent directory name, absent for bare names."""

    path = _as_path(obj)
    if len(path.parts) < 2:
        return None
    return path.parent.name or str(path.parent)


def suffix(obj: object) -> str | None:
    """File extension including the dot, absent when there is none."""

    return _as_path(obj).suffix or None


def to_path(value: str) -> PurePath:
    """Candidate as a pure filesystem path."""

    return PurePath(value)


def to_length(value: str) -> int:
    """Candidate length as an integer."""

    return len(value)


def to_words(value: str) -> list[str]:
    """Candidate split on whitespace."""

    return value.split()


def register_builtins(registry: ExtractorRegistry, mappers: MapperRegistry) -> None:
    """Register the builtin extractors and mappers on the given registries."""

    registry.register("candidate", candidate, wants_context=True)
    for func in (identity, length, upper, lower, basename, dirname, parent, suffix):
        registry.register(func.__name__, func)

    mappers.register("path", to_path)
    mappers.register("length", to_length)
    mappers.register("words", to_words)
