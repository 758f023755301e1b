"""Tests for wrapper chain type resolution, packing, and unwrapping."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from packages.inwrap import (
    ChainContext,
    ChainPacker,
    ChainUnwrapper,
    ConfigurationError,
    ConstantTypeResolver,
    Registry,
    WrapperChainResolver,
    nesting_of,
    pack,
    resolve_chain_type,
    split_type,
    unwrap,
)
from packages.inwrap.single_field import SingleFieldEnvelope, register_single_field
from tests.inwrap.wrappers import Box, BoxHandler, BoxPacker, BoxUnwrapper, Label, Pair


def _registry() -> Registry:
    """Return a registry with a trivial Box packer and unwrapper."""
    return Registry.builder().register(Box, BoxHandler()).build()


def test_single_wrapper_resolves_to_kind_parameterized_by_payload() -> None:
    """A one-parameter kind should be parameterized by the payload type."""
    wrapped_type = resolve_chain_type(_registry(), str, [Box])

    assert split_type(wrapped_type) == (Box, (str,))


def test_nested_chain_resolves_innermost_kind_closest_to_payload() -> None:
    """Resolution should nest kinds in declared outer-to-inner order."""
    registry = register_single_field(Registry.builder()).build()

    wrapped_type = WrapperChainResolver(registry).resolve_chain_type(
        int, [SingleFieldEnvelope, Box, Box]
    )

    assert nesting_of(wrapped_type) == [SingleFieldEnvelope, Box, Box, int]


def test_two_parameter_kind_without_custom_resolver_is_rejected() -> None:
    """Default resolution should reject kinds with two type parameters."""
    with pytest.raises(ConfigurationError) as exc_info:
        resolve_chain_type(_registry(), str, [Pair])

    assert exc_info.value.kind is Pair
    assert "Pair" in str(exc_info.value)


def test_custom_resolver_handles_two_parameter_kind() -> None:
    """A registered custom resolver should supply the composite type."""
    registry = (
        Registry.builder()
        .register_type_resolver(Pair, ConstantTypeResolver(Pair[str, int]))
        .build()
    )

    wrapped_type = resolve_chain_type(registry, str, [Pair])

    assert wrapped_type == Pair[str, int]
    assert split_type(wrapped_type) == (Pair, (str, int))


def test_zero_parameter_outer_kind_collapses_resolved_type() -> None:
    """An outer non-generic kind should discard all inner type structure."""
    registry = _registry()

    assert resolve_chain_type(registry, str, [Label, Box, Box]) is Label
    assert resolve_chain_type(registry, str, [object, Box, Box]) is object


def test_zero_parameter_inner_kind_truncates_only_below_it() -> None:
    """Kinds outside a non-generic kind should still wrap the collapsed type."""
    wrapped_type = resolve_chain_type(_registry(), str, [Box, Label, Box])

    assert nesting_of(wrapped_type) == [Box, Label]


def test_resolvers_receive_depth_and_context() -> None:
    """Resolution should pass each kind's chain index and the caller context."""
    seen: list[tuple[int, ChainContext]] = []

    class RecordingResolver:
        def resolve_type(self, payload_type, kind, depth, context):  # type: ignore[no-untyped-def]
            seen.append((depth, context))
            return Box[payload_type]

    context = ChainContext.of("marker")
    registry = (
        Registry.builder().register_type_resolver(Box, RecordingResolver()).build()
    )

    resolve_chain_type(registry, str, [Box, Box, Box], context)

    assert seen == [(2, context), (1, context), (0, context)]


def test_chain_pack_builds_nested_wrappers() -> None:
    """Packing should produce one wrapper per chain entry around the payload."""
    wrapped = pack(_registry(), "test", [Box, Box, Box])

    assert wrapped == Box(Box(Box("test")))


def test_chain_unwrap_returns_innermost_payload() -> None:
    """Unwrapping should peel every chain entry off a nested value."""
    unwrapped = unwrap(_registry(), Box(Box(Box("test"))), [Box, Box, Box])

    assert unwrapped == "test"


def test_pack_then_unwrap_round_trips_payload() -> None:
    """Unwrapping a packed value with the same chain should return the payload."""
    registry = _registry()
    chain = (Box, Box, Box)
    payload = {"id": 7, "tags": ["a", "b"]}

    assert unwrap(registry, pack(registry, payload, chain), chain) == payload


def test_pack_walks_inner_to_outer_and_unwrap_outer_to_inner() -> None:
    """Packing and unwrapping should visit depths in opposite orders."""
    packer = BoxPacker()
    unwrapper = BoxUnwrapper()
    registry = (
        Registry.builder()
        .register_packer(Box, packer)
        .register_unwrapper(Box, unwrapper)
        .build()
    )
    chain = [Box, Box, Box]

    wrapped = ChainPacker(registry).pack("x", chain)
    ChainUnwrapper(registry).unwrap(wrapped, chain)

    assert packer.depths == [2, 1, 0]
    assert unwrapper.depths == [0, 1, 2]


def test_pack_forwards_context_to_every_packer() -> None:
    """Every packer call should receive the caller-supplied context."""
    packer = BoxPacker()
    registry = Registry.builder().register_packer(Box, packer).build()
    context = ChainContext.of("field-names")

    pack(registry, 1, [Box, Box], context)

    assert packer.contexts == [context, context]


def test_pack_with_unregistered_kind_fails_before_packing() -> None:
    """A missing packer should fail fast without running any other packer."""
    packer = BoxPacker()
    registry = Registry.builder().register_packer(Box, packer).build()

    with pytest.raises(ConfigurationError) as exc_info:
        pack(registry, "test", [Label, Box])

    assert exc_info.value.kind is Label
    assert "Label" in str(exc_info.value)
    assert packer.depths == []


def test_unwrap_with_unregistered_kind_fails() -> None:
    """A missing unwrapper should raise rather than pass the value through."""
    registry = Registry.builder().register_packer(Box, BoxPacker()).build()

    with pytest.raises(ConfigurationError) as exc_info:
        unwrap(registry, Box("test"), [Box])

    assert exc_info.value.kind is Box


def test_empty_chain_is_rejected() -> None:
    """Every chain operation should require at least one wrapper kind."""
    registry = _registry()

    with pytest.raises(ConfigurationError):
        pack(registry, "test", [])
    with pytest.raises(ConfigurationError):
        unwrap(registry, "test", ())
    with pytest.raises(ConfigurationError):
        resolve_chain_type(registry, str, [])


def test_pack_still_applies_every_layer_when_type_collapses() -> None:
    """Packing should wrap every layer even where resolution collapses."""
    registry = Registry.builder().register(Box, BoxHandler()).build()

    assert resolve_chain_type(registry, str, [Box, Label, Box]) == Box[Label]
    assert pack(registry, "x", [Box, Box, Box]) == Box(Box(Box("x")))


def test_concurrent_conversions_share_one_registry() -> None:
    """Concurrent pack/unwrap calls should not interfere with each other."""
    registry = _registry()
    chain = (Box, Box)

    def round_trip(value: int) -> int:
        return unwrap(registry, pack(registry, value, chain), chain)

    with ThreadPoolExecutor(max_workers=8) as executor:
        results = list(executor.map(round_trip, range(200)))

    assert results == list(range(200))
