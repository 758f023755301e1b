"""Caller-supplied metadata forwarded through wrapper chains."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TypeVar

M = TypeVar("M")


@dataclass(frozen=True)
class ChainContext:
    """Opaque bag of marker objects available to packers, unwrappers, and resolvers.

    The chain engine never inspects markers; wrapper kinds look up the ones
    they understand with ``find``.
    """

    markers: tuple[object, ...] = ()

    @classmethod
    def of(cls, *markers: object) -> ChainContext:
        """Build a context from marker objects in declaration order."""
        return cls(markers=tuple(markers))

    def find(self, marker_type: type[M]) -> M | None:
        """Return the last marker of ``marker_type`` or ``None``."""
        found: M | None = None
        for marker in self.markers:
            if isinstance(marker, marker_type):
                found = marker
        return found

    def with_markers(self, *markers: object) -> ChainContext:
        """Return a new context with ``markers`` appended."""
        return ChainContext(markers=(*self.markers, *markers))


EMPTY_CONTEXT = ChainContext()
