"""Typed errors for wrapper chain resolution, packing, and envelope decoding."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(eq=False)
class WrapperError(Exception):
    """Base error type for wrapper chain failures."""

    message: str

    def __str__(self) -> str:
        """Return the human-readable error message."""
        return self.message


@dataclass(eq=False)
class ConfigurationError(WrapperError):
    """Registry or chain setup cannot satisfy the requested operation."""

    kind: object | None = None


@dataclass(eq=False)
class MalformedEnvelopeError(WrapperError):
    """Single-field JSON input does not hold exactly one member."""

    member_count: int | None = None


def kind_name(kind: object) -> str:
    """Return a stable display name for one wrapper kind."""
    module = getattr(kind, "__module__", None)
    qualname = getattr(kind, "__qualname__", None)
    if qualname is None:
        return repr(kind)
    if module in (None, "builtins"):
        return qualname
    return f"{module}.{qualname}"
