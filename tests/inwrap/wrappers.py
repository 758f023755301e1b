"""Wrapper kinds shared by wrapper chain tests."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from packages.inwrap import ChainContext

T = TypeVar("T")
K = TypeVar("K")
V = TypeVar("V")


@dataclass(frozen=True)
class Box(Generic[T]):
    """One-parameter wrapper holding one value."""

    value: T


@dataclass(frozen=True)
class Pair(Generic[K, V]):
    """Two-parameter wrapper that default resolution cannot handle."""

    key: K
    value: V


class Label:
    """Non-generic wrapper kind."""


class Wrapped(BaseModel, Generic[T]):
    """Pydantic generic model used as a wrapper kind."""

    value: T


class BoxPacker:
    """Packer recording every depth it is called with."""

    def __init__(self) -> None:
        self.depths: list[int] = []
        self.contexts: list[ChainContext] = []

    def pack(self, payload: Any, depth: int, context: ChainContext) -> Box[Any]:
        self.depths.append(depth)
        self.contexts.append(context)
        return Box(payload)


class BoxUnwrapper:
    """Unwrapper recording every depth it is called with."""

    def __init__(self) -> None:
        self.depths: list[int] = []

    def unwrap(self, wrapped: Box[Any], depth: int, context: ChainContext) -> Any:
        del context
        self.depths.append(depth)
        return wrapped.value


class BoxHandler:
    """Packer and unwrapper in one object."""

    def pack(self, payload: Any, depth: int, context: ChainContext) -> Box[Any]:
        del depth, context
        return Box(payload)

    def unwrap(self, wrapped: Box[Any], depth: int, context: ChainContext) -> Any:
        del depth, context
        return wrapped.value
