"""Wrapper-kind descriptors and composite type helpers.

A composite type is an ordinary Python type expression (``Box[str]``,
``Envelope[Box[int]]``, or a bare class) that the payload codec can build a
``TypeAdapter`` for. These helpers keep construction and inspection of such
expressions uniform across ``typing`` generics and pydantic generic models.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Iterable, TypeAlias, get_args, get_origin

from .errors import ConfigurationError, kind_name

WrapperChain: TypeAlias = tuple[type, ...]


class Arity(str, Enum):
    """Number of type parameters a wrapper kind declares."""

    NONE = "none"
    SINGLE = "single"
    MULTIPLE = "multiple"


def as_chain(kinds: Iterable[type]) -> WrapperChain:
    """Normalize an outer-to-inner sequence of kinds into an immutable chain."""
    chain = tuple(kinds)
    if len(chain) == 0:
        raise ConfigurationError("wrapper chain must contain at least one kind")
    return chain


def arity_of(kind: object) -> Arity:
    """Discover arity from a class's generic parameters."""
    metadata = getattr(kind, "__pydantic_generic_metadata__", None)
    if isinstance(metadata, dict):
        parameters = tuple(metadata.get("parameters", ()))
    else:
        parameters = tuple(getattr(kind, "__parameters__", ()))

    if len(parameters) == 0:
        return Arity.NONE
    if len(parameters) == 1:
        return Arity.SINGLE
    return Arity.MULTIPLE


def parameterize(kind: Any, *args: Any) -> Any:
    """Return ``kind`` parameterized by ``args`` in declaration order."""
    if len(args) == 0:
        return kind
    try:
        return kind[args if len(args) > 1 else args[0]]
    except TypeError as exc:
        raise ConfigurationError(
            f"{kind_name(kind)} cannot be parameterized with {len(args)} argument(s)",
            kind=kind,
        ) from exc


def split_type(tp: Any) -> tuple[Any, tuple[Any, ...]]:
    """Return ``(origin, args)`` for one composite type expression."""
    metadata = getattr(tp, "__pydantic_generic_metadata__", None)
    if isinstance(metadata, dict) and metadata.get("origin") is not None:
        return metadata["origin"], tuple(metadata.get("args", ()))

    origin = get_origin(tp)
    if origin is None:
        return tp, ()
    return origin, get_args(tp)


def nesting_of(tp: Any) -> list[Any]:
    """Return the chain of single-argument origins from outermost inward.

    ``Box[Envelope[str]]`` yields ``[Box, Envelope, str]``. Descent stops at
    the first type that is not parameterized by exactly one argument.
    """
    levels: list[Any] = []
    current = tp
    while True:
        origin, args = split_type(current)
        levels.append(origin)
        if len(args) != 1:
            return levels
        current = args[0]
