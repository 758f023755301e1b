"""Type resolution strategies for single wrapper kinds."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Protocol

from .context import ChainContext
from .errors import ConfigurationError, kind_name
from .types import Arity, arity_of, parameterize


class TypeResolver(Protocol):
    """Hook contract for computing the composite type one wrapper kind produces."""

    def resolve_type(
        self,
        payload_type: Any,
        kind: Any,
        depth: int,
        context: ChainContext,
    ) -> Any:
        """Return the type of ``kind`` wrapped around ``payload_type`` at ``depth``."""


class DefaultTypeResolver:
    """Resolve zero- and one-parameter wrapper kinds.

    A zero-parameter kind resolves to itself and discards ``payload_type``, so
    an outer non-generic kind truncates the composite type at that point. A
    one-parameter kind is parameterized by ``payload_type``. Kinds with more
    parameters need a custom resolver.
    """

    def __init__(self, arities: Mapping[Any, Arity] | None = None) -> None:
        self._arities: Mapping[Any, Arity] = MappingProxyType(dict(arities or {}))

    def arity(self, kind: Any) -> Arity:
        """Return the declared arity for ``kind`` or discover it from the class."""
        declared = self._arities.get(kind)
        if declared is not None:
            return declared
        return arity_of(kind)

    def resolve_type(
        self,
        payload_type: Any,
        kind: Any,
        depth: int,
        context: ChainContext,
    ) -> Any:
        del depth, context
        arity = self.arity(kind)
        if arity is Arity.NONE:
            return kind
        if arity is Arity.SINGLE:
            return parameterize(kind, payload_type)
        raise ConfigurationError(
            f"Unable to process {kind_name(kind)}: {type(self).__name__} does not "
            "support wrapper kinds with more than one type parameter; register a "
            f"custom TypeResolver for {kind_name(kind)}",
            kind=kind,
        )


class ConstantTypeResolver:
    """Resolve a wrapper kind to one fixed composite type."""

    def __init__(self, composite_type: Any) -> None:
        self._composite_type = composite_type

    def resolve_type(
        self,
        payload_type: Any,
        kind: Any,
        depth: int,
        context: ChainContext,
    ) -> Any:
        del payload_type, kind, depth, context
        return self._composite_type
