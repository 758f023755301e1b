"""Build-once registry of per-kind packers, unwrappers, and type resolvers."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Protocol

from packages.inwrap_shared.logging import get_logger

from .context import ChainContext
from .errors import ConfigurationError, kind_name
from .resolvers import DefaultTypeResolver, TypeResolver
from .types import Arity

_LOGGER = get_logger(__name__)


class Packer(Protocol):
    """Hook contract for wrapping one value in one wrapper kind."""

    def pack(self, payload: Any, depth: int, context: ChainContext) -> Any:
        """Return ``payload`` wrapped in this packer's kind."""


class Unwrapper(Protocol):
    """Hook contract for extracting the value held by one wrapper kind."""

    def unwrap(self, wrapped: Any, depth: int, context: ChainContext) -> Any:
        """Return the value held by ``wrapped``."""


def _frozen(values: Mapping[Any, Any]) -> Mapping[Any, Any]:
    return MappingProxyType(dict(values))


@dataclass(frozen=True, eq=False)
class Registry:
    """Read-only mapping from wrapper kind to its registered capabilities."""

    packers: Mapping[Any, Packer] = field(default_factory=lambda: _frozen({}))
    unwrappers: Mapping[Any, Unwrapper] = field(default_factory=lambda: _frozen({}))
    resolvers: Mapping[Any, TypeResolver] = field(default_factory=lambda: _frozen({}))
    default_resolver: DefaultTypeResolver = field(default_factory=DefaultTypeResolver)

    @staticmethod
    def builder() -> RegistryBuilder:
        """Return a new empty builder."""
        return RegistryBuilder()

    def packer_for(self, kind: Any) -> Packer:
        """Return the packer for ``kind`` or raise ``ConfigurationError``."""
        packer = self.packers.get(kind)
        if packer is None:
            raise ConfigurationError(
                f"wrapper of type {kind_name(kind)} is not supported, "
                "please register a Packer for it",
                kind=kind,
            )
        return packer

    def unwrapper_for(self, kind: Any) -> Unwrapper:
        """Return the unwrapper for ``kind`` or raise ``ConfigurationError``."""
        unwrapper = self.unwrappers.get(kind)
        if unwrapper is None:
            raise ConfigurationError(
                f"wrapper of type {kind_name(kind)} is not supported, "
                "please register an Unwrapper for it",
                kind=kind,
            )
        return unwrapper

    def resolver_for(self, kind: Any) -> TypeResolver:
        """Return the custom resolver for ``kind`` or the default resolver."""
        return self.resolvers.get(kind, self.default_resolver)


class RegistryBuilder:
    """Mutable collector for registry entries; ``build`` freezes a snapshot."""

    def __init__(self) -> None:
        self._packers: dict[Any, Packer] = {}
        self._unwrappers: dict[Any, Unwrapper] = {}
        self._resolvers: dict[Any, TypeResolver] = {}
        self._arities: dict[Any, Arity] = {}

    def register(self, kind: Any, handler: object) -> RegistryBuilder:
        """Register every capability ``handler`` exposes for ``kind``.

        Capabilities are detected by method name: ``pack``, ``unwrap`` and
        ``resolve_type``.
        """
        registered = False
        if callable(getattr(handler, "pack", None)):
            self.register_packer(kind, handler)  # type: ignore[arg-type]
            registered = True
        if callable(getattr(handler, "unwrap", None)):
            self.register_unwrapper(kind, handler)  # type: ignore[arg-type]
            registered = True
        if callable(getattr(handler, "resolve_type", None)):
            self.register_type_resolver(kind, handler)  # type: ignore[arg-type]
            registered = True
        if not registered:
            raise ConfigurationError(
                f"{type(handler).__name__} exposes none of pack, unwrap, resolve_type",
                kind=kind,
            )
        return self

    def register_packer(self, kind: Any, packer: Packer) -> RegistryBuilder:
        """Register the packer used for ``kind``."""
        _put_once(self._packers, kind, packer, capability="Packer")
        return self

    def register_unwrapper(self, kind: Any, unwrapper: Unwrapper) -> RegistryBuilder:
        """Register the unwrapper used for ``kind``."""
        _put_once(self._unwrappers, kind, unwrapper, capability="Unwrapper")
        return self

    def register_type_resolver(
        self, kind: Any, resolver: TypeResolver
    ) -> RegistryBuilder:
        """Register a custom type resolver used for ``kind``."""
        _put_once(self._resolvers, kind, resolver, capability="TypeResolver")
        return self

    def declare_arity(self, kind: Any, arity: Arity) -> RegistryBuilder:
        """Declare how many type parameters ``kind`` takes for default resolution."""
        _put_once(self._arities, kind, Arity(arity), capability="arity")
        return self

    def build(self) -> Registry:
        """Freeze the current registrations into an immutable ``Registry``."""
        registry = Registry(
            packers=_frozen(self._packers),
            unwrappers=_frozen(self._unwrappers),
            resolvers=_frozen(self._resolvers),
            default_resolver=DefaultTypeResolver(self._arities),
        )
        _LOGGER.debug(
            "Wrapper registry built: %d packer(s), %d unwrapper(s), %d resolver(s)",
            len(self._packers),
            len(self._unwrappers),
            len(self._resolvers),
        )
        return registry


def _put_once(
    target: dict[Any, Any], kind: Any, value: object, *, capability: str
) -> None:
    """Insert one entry, rejecting a second registration for the same kind."""
    if kind in target:
        raise ConfigurationError(
            f"{capability} for {kind_name(kind)} is already registered",
            kind=kind,
        )
    target[kind] = value
