"""Standalone codec for ``SingleFieldEnvelope`` values.

The payload is delegated to pydantic for whatever payload type the caller
names. Payload codec failures surface as ``pydantic.ValidationError`` and are
not wrapped.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter

from .envelope import (
    DEFAULT_FIELD_NAME,
    DEFAULT_FIELD_NAME_CONTEXT_KEY,
    SingleFieldEnvelope,
)


@lru_cache(maxsize=256)
def envelope_adapter(payload_type: Any) -> TypeAdapter[SingleFieldEnvelope[Any]]:
    """Return a cached ``TypeAdapter`` for ``SingleFieldEnvelope[payload_type]``."""
    return TypeAdapter(SingleFieldEnvelope[payload_type])


class SingleFieldCodec:
    """Encode and decode one-member JSON objects with a configured default name."""

    def __init__(self, default_field_name: str | None = None) -> None:
        if default_field_name is None or default_field_name == "":
            self._default_field_name = DEFAULT_FIELD_NAME
        else:
            self._default_field_name = default_field_name

    @property
    def default_field_name(self) -> str:
        """Return the name used for envelopes without a stored field name."""
        return self._default_field_name

    def serialization_context(self) -> dict[str, str]:
        """Return the pydantic serialization context carrying the default name."""
        return {DEFAULT_FIELD_NAME_CONTEXT_KEY: self._default_field_name}

    def serialize(
        self, envelope: SingleFieldEnvelope[Any], payload_type: Any = Any
    ) -> dict[str, Any]:
        """Return the JSON-compatible one-member object for ``envelope``."""
        return envelope_adapter(payload_type).dump_python(
            envelope,
            mode="json",
            context=self.serialization_context(),
        )

    def deserialize(
        self, value: Any, payload_type: Any = Any
    ) -> SingleFieldEnvelope[Any]:
        """Decode an already-parsed JSON object into an envelope."""
        return envelope_adapter(payload_type).validate_python(value)

    def dumps(
        self, envelope: SingleFieldEnvelope[Any], payload_type: Any = Any
    ) -> bytes:
        """Return ``envelope`` encoded as JSON bytes."""
        return envelope_adapter(payload_type).dump_json(
            envelope,
            context=self.serialization_context(),
        )

    def loads(
        self, data: str | bytes, payload_type: Any = Any
    ) -> SingleFieldEnvelope[Any]:
        """Decode JSON text into an envelope."""
        return envelope_adapter(payload_type).validate_json(data)
