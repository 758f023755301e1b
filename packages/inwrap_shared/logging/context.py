"""Context propagation helpers for structured logging.

A ``contextvars``-backed mapping lets callers attach fields such as the
wrapper chain being converted to every log line emitted inside a block,
including from concurrent conversions on other threads or tasks.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator, Mapping

from . import fields

_LOG_CONTEXT: ContextVar[dict[str, str]] = ContextVar("inwrap_log_context", default={})


def get_context() -> dict[str, str]:
    """Return a shallow copy of current logging context."""
    return dict(_LOG_CONTEXT.get())


def bind_context(**values: object) -> None:
    """Bind values into the current logging context.

    Values are stored as strings; ``None`` values are skipped.
    """
    bound = {str(key): str(value) for key, value in values.items() if value is not None}
    if bound:
        _LOG_CONTEXT.set({**_LOG_CONTEXT.get(), **bound})


def clear_context(*keys: str) -> None:
    """Clear selected keys, or every key when none are given."""
    if keys:
        _LOG_CONTEXT.set(
            {key: value for key, value in _LOG_CONTEXT.get().items() if key not in keys}
        )
    else:
        _LOG_CONTEXT.set({})


@contextmanager
def log_context(values: Mapping[str, object]) -> Iterator[None]:
    """Temporarily bind logging context for the duration of a block."""
    token = _LOG_CONTEXT.set(_LOG_CONTEXT.get().copy())
    try:
        bind_context(**dict(values))
        yield
    finally:
        _LOG_CONTEXT.reset(token)


@contextmanager
def conversion_context(*, direction: str, wrapper_chain: str) -> Iterator[None]:
    """Bind the conversion direction and chain label for one body conversion."""
    with log_context({fields.DIRECTION: direction, fields.WRAPPER_CHAIN: wrapper_chain}):
        yield
