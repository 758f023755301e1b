"""Drive values and types through an outer-to-inner chain of wrapper kinds.

Packing and type resolution walk the chain from the innermost kind outward,
so the last kind applied is the outermost shell. Unwrapping walks the other
way, peeling the outermost shell first. For a fixed chain the two are exact
inverses.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from packages.inwrap_shared.logging import get_logger

from .context import EMPTY_CONTEXT, ChainContext
from .errors import kind_name
from .registry import Registry
from .types import as_chain

_LOGGER = get_logger(__name__)


class WrapperChainResolver:
    """Compute the composite type produced by wrapping a payload type."""

    def __init__(self, registry: Registry) -> None:
        self._registry = registry

    def resolve_chain_type(
        self,
        payload_type: Any,
        chain: Iterable[type],
        context: ChainContext | None = None,
    ) -> Any:
        """Return the fully wrapped type for ``payload_type`` under ``chain``."""
        kinds = as_chain(chain)
        resolved_context = EMPTY_CONTEXT if context is None else context
        result = payload_type
        for depth in range(len(kinds) - 1, -1, -1):
            kind = kinds[depth]
            resolver = self._registry.resolver_for(kind)
            result = resolver.resolve_type(result, kind, depth, resolved_context)
        _LOGGER.debug(
            "Resolved wrapper chain [%s] around %r to %r",
            ", ".join(kind_name(kind) for kind in kinds),
            payload_type,
            result,
        )
        return result


class ChainPacker:
    """Wrap a raw payload in every kind of a chain, innermost first."""

    def __init__(self, registry: Registry) -> None:
        self._registry = registry

    def pack(
        self,
        payload: Any,
        chain: Iterable[type],
        context: ChainContext | None = None,
    ) -> Any:
        """Return ``payload`` wrapped ``len(chain)`` times, outermost shell last."""
        kinds = as_chain(chain)
        resolved_context = EMPTY_CONTEXT if context is None else context
        # Missing packers fail before any packer runs.
        packers = [self._registry.packer_for(kind) for kind in kinds]
        packed = payload
        for depth in range(len(kinds) - 1, -1, -1):
            packed = packers[depth].pack(packed, depth, resolved_context)
        return packed


class ChainUnwrapper:
    """Peel every kind of a chain off a wrapped value, outermost first."""

    def __init__(self, registry: Registry) -> None:
        self._registry = registry

    def unwrap(
        self,
        wrapped: Any,
        chain: Iterable[type],
        context: ChainContext | None = None,
    ) -> Any:
        """Return the payload held ``len(chain)`` levels inside ``wrapped``."""
        kinds = as_chain(chain)
        resolved_context = EMPTY_CONTEXT if context is None else context
        unwrappers = [self._registry.unwrapper_for(kind) for kind in kinds]
        unwrapped = wrapped
        for depth, unwrapper in enumerate(unwrappers):
            unwrapped = unwrapper.unwrap(unwrapped, depth, resolved_context)
        return unwrapped


def resolve_chain_type(
    registry: Registry,
    payload_type: Any,
    chain: Iterable[type],
    context: ChainContext | None = None,
) -> Any:
    """Module-level shortcut for ``WrapperChainResolver.resolve_chain_type``."""
    return WrapperChainResolver(registry).resolve_chain_type(payload_type, chain, context)


def pack(
    registry: Registry,
    payload: Any,
    chain: Iterable[type],
    context: ChainContext | None = None,
) -> Any:
    """Module-level shortcut for ``ChainPacker.pack``."""
    return ChainPacker(registry).pack(payload, chain, context)


def unwrap(
    registry: Registry,
    wrapped: Any,
    chain: Iterable[type],
    context: ChainContext | None = None,
) -> Any:
    """Module-level shortcut for ``ChainUnwrapper.unwrap``."""
    return ChainUnwrapper(registry).unwrap(wrapped, chain, context)
