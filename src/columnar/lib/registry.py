"""Named extractor and object-mapper registries.

Columns refer to extractors by name. Names are resolved against a registry
when a layout is compiled, so a typo fails fast instead of rendering an empty
field on every refresh.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Generic, TypeVar

from columnar.lib.errors import UnresolvedExtractor

if TYPE_CHECKING:
    from collections.abc import Callable, Iterator

DEFAULT_EXTRACTOR_PREFIX = "column:"
DEFAULT_MAPPER_PREFIX = "mapper:"

SpecT = TypeVar("SpecT", "ExtractorSpec", "MapperSpec")


@dataclass(frozen=True, slots=True)
class ExtractorSpec:
    """One registered extractor.

    Extractors registered with ``wants_context=True`` are called as
    ``func(obj, ctx)`` where ``ctx`` is the per-call CandidateContext; all
    others are called as ``func(obj)``.
    """

    name: str
    func: Callable[..., str | None]
    wants_context: bool = False
    description: str = ""


@dataclass(frozen=True, slots=True)
class MapperSpec:
    """One registered candidate -> intermediate object mapper."""

    name: str
    func: Callable[[str], Any]
    description: str = ""


class _PrefixedRegistry(Generic[SpecT]):
    """Mapping keyed by ``prefix + name`` with a duplicate guard."""

    kind = "entry"

    def __init__(self, prefix: str) -> None:
        self._prefix = prefix
        self._entries: dict[str, SpecT] = {}

    @property
    def prefix(self) -> str:
        return self._prefix

    def _key(self, name: str) -> str:
        return f"{self._prefix}{name}"

    def _add(self, spec: SpecT) -> SpecT:
        key = self._key(spec.name)
        if key in self._entries:
            raise ValueError(
                f"Duplicate {self.kind} name '{spec.name}': already registered by "
                f"{self._entries[key].func}"
            )
        self._entries[key] = spec
        return spec

    def resolve(self, name: str) -> SpecT:
        """Fetch one spec by its unprefixed name."""

        spec = self._entries.get(self._key(name))
        if spec is None:
            raise UnresolvedExtractor(name, kind=self.kind, known=tuple(self.names()))
        return spec

    def unregister(self, name: str) -> None:
        self._entries.pop(self._key(name), None)

    def names(self) -> list[str]:
        """Return registered names (without the prefix) in sorted order."""

        offset = len(self._prefix)
        return sorted(key[offset:] for key in self._entries)

    def specs(self) -> list[SpecT]:
        return [self._entries[self._key(name)] for name in self.names()]

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._key(name) in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __len__(self) -> int:
        return len(self._entries)


class ExtractorRegistry(_PrefixedRegistry[ExtractorSpec]):
    """Registry of column extractors keyed by name."""

    kind = "extractor"

    def __init__(self, prefix: str = DEFAULT_EXTRACTOR_PREFIX) -> None:
        super().__init__(prefix)

    def register(
        self,
        name: str,
        func: Callable[..., str | None],
        *,
        wants_context: bool = False,
        description: str = "",
    ) -> ExtractorSpec:
        """Register an extractor and guard against duplicates."""

        if not name:
            raise ValueError("Extractor name must be non-empty")
        return self._add(
            ExtractorSpec(
                name=name,
                func=func,
                wants_context=wants_context,
                description=description or _first_doc_line(func),
            )
        )

    def extractor(
        self,
        name: str,
        *,
        wants_context: bool = False,
        description: str = "",
    ) -> Callable[[Callable[..., str | None]], Callable[..., str | None]]:
        """Decorator form of :meth:`register`."""

        def decorate(func: Callable[..., str | None]) -> Callable[..., str | None]:
            self.register(name, func, wants_context=wants_context, description=description)
            return func

        return decorate


class MapperRegistry(_PrefixedRegistry[MapperSpec]):
    """Registry of object mappers keyed by name."""

    kind = "object mapper"

    def __init__(self, prefix: str = DEFAULT_MAPPER_PREFIX) -> None:
        super().__init__(prefix)

    def register(
        self,
        name: str,
        func: Callable[[str], Any],
        *,
        description: str = "",
    ) -> MapperSpec:
        if not name:
            raise ValueError("Mapper name must be non-empty")
        return self._add(
            MapperSpec(name=name, func=func, description=description or _first_doc_line(func))
        )

    def mapper(
        self, name: str, *, description: str = ""
    ) -> Callable[[Callable[[str], Any]], Callable[[str], Any]]:
        def decorate(func: Callable[[str], Any]) -> Callable[[str], Any]:
            self.register(name, func, description=description)
            return func

        return decorate


def _first_doc_line(func: Callable[..., Any]) -> str:
    doc = (getattr(func, "__doc__", None) or "").strip()
    return doc.splitlines()[0] if doc else ""


_REGISTRY = ExtractorRegistry()
_MAPPERS = MapperRegistry()
_bootstrapped = False


def _bootstrap_builtin_modules() -> None:
    # Imported lazily so the builtin module can register through the public API.
    import columnar.lib.extractors as builtin_extractors

    builtin_extractors.register_builtins(_REGISTRY, _MAPPERS)


def _ensure_bootstrapped() -> None:
    global _bootstrapped
    if _bootstrapped:
        return
    # Only mark bootstrapped after a successful registration so failures retry.
    _bootstrap_builtin_modules()
    _bootstrapped = True


def default_registry() -> ExtractorRegistry:
    """Return the process-wide extractor registry, with builtins registered."""

    _ensure_bootstrapped()
    return _REGISTRY


def default_mappers() -> MapperRegistry:
    """Return the process-wide object-mapper registry, with builtins registered."""

    _ensure_bootstrapped()
    return _MAPPERS
