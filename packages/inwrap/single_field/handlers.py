"""Packer and unwrapper for ``SingleFieldEnvelope`` chain positions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from packages.inwrap.context import ChainContext
from packages.inwrap.registry import RegistryBuilder
from packages.inwrap.types import Arity

from .envelope import SingleFieldEnvelope


@dataclass(frozen=True, init=False)
class FieldNames:
    """Context marker naming the envelope member at each chain depth."""

    names: tuple[str, ...]

    def __init__(self, *names: str) -> None:
        object.__setattr__(self, "names", tuple(names))

    def name_at(self, depth: int) -> str | None:
        """Return the member name for ``depth``; blank or missing means default."""
        if depth < 0 or depth >= len(self.names):
            return None
        name = self.names[depth]
        return name if name != "" else None


class SingleFieldPacker:
    """Wrap a payload in an envelope named by the context's ``FieldNames``."""

    def pack(
        self, payload: Any, depth: int, context: ChainContext
    ) -> SingleFieldEnvelope[Any]:
        field_names = context.find(FieldNames)
        field_name = field_names.name_at(depth) if field_names is not None else None
        return SingleFieldEnvelope(field_name=field_name, payload=payload)


class SingleFieldUnwrapper:
    """Return the payload of a decoded envelope."""

    def unwrap(self, wrapped: Any, depth: int, context: ChainContext) -> Any:
        del context
        if not isinstance(wrapped, SingleFieldEnvelope):
            raise TypeError(
                f"expected SingleFieldEnvelope at chain depth {depth}, "
                f"got {type(wrapped).__name__}"
            )
        return wrapped.payload


def register_single_field(builder: RegistryBuilder) -> RegistryBuilder:
    """Register envelope packing and unwrapping on ``builder``."""
    return (
        builder.register_packer(SingleFieldEnvelope, SingleFieldPacker())
        .register_unwrapper(SingleFieldEnvelope, SingleFieldUnwrapper())
        .declare_arity(SingleFieldEnvelope, Arity.SINGLE)
    )
