"""Immutable envelope holding one named JSON member around a payload.

Serialized form is a JSON object with exactly one member. Decoding keeps the
member name that was observed, so re-encoding reproduces the input shape.
Encoding an envelope without a stored name uses the default field name from
the pydantic serialization context key ``single_field_default_name``, or
``"data"`` when none is supplied.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Generic, TypeVar, get_args

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from packages.inwrap.errors import MalformedEnvelopeError

T = TypeVar("T")

DEFAULT_FIELD_NAME = "data"
DEFAULT_FIELD_NAME_CONTEXT_KEY = "single_field_default_name"


class SingleFieldEnvelope(Generic[T]):
    """One payload stored under one JSON member name.

    ``field_name`` is ``None`` when the producer leaves naming to the codec's
    configured default.
    """

    # Not a dataclass: pydantic schemas parameterized generic dataclasses
    # field by field and skips __get_pydantic_core_schema__.
    __slots__ = ("_field_name", "_payload")

    def __init__(self, field_name: str | None, payload: T) -> None:
        object.__setattr__(self, "_field_name", field_name)
        object.__setattr__(self, "_payload", payload)

    @property
    def field_name(self) -> str | None:
        """Return the stored member name, if any."""
        return self._field_name

    @property
    def payload(self) -> T:
        """Return the wrapped payload."""
        return self._payload

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SingleFieldEnvelope):
            return NotImplemented
        return (self._field_name, self._payload) == (other._field_name, other._payload)

    def __hash__(self) -> int:
        return hash((self._field_name, self._payload))

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}(field_name={self._field_name!r}, "
            f"payload={self._payload!r})"
        )

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        args = get_args(source)
        payload_type = args[0] if args else Any
        members_schema = core_schema.dict_schema(
            keys_schema=core_schema.str_schema(),
            values_schema=handler.generate_schema(payload_type),
        )
        from_members = core_schema.chain_schema(
            [
                core_schema.no_info_plain_validator_function(require_single_member),
                members_schema,
                core_schema.no_info_plain_validator_function(_from_members),
            ]
        )
        return core_schema.json_or_python_schema(
            json_schema=from_members,
            python_schema=core_schema.union_schema(
                [core_schema.is_instance_schema(cls), from_members],
                mode="left_to_right",
            ),
            serialization=core_schema.plain_serializer_function_ser_schema(
                _to_members,
                info_arg=True,
                return_schema=members_schema,
            ),
        )


def require_single_member(value: Any) -> Mapping[str, Any]:
    """Return ``value`` when it is a mapping with exactly one member."""
    if not isinstance(value, Mapping):
        raise MalformedEnvelopeError(
            f"single-field envelope must be a JSON object, got {type(value).__name__}"
        )
    if len(value) != 1:
        raise MalformedEnvelopeError(
            "single-field envelope must hold exactly one member, "
            f"got {len(value)}",
            member_count=len(value),
        )
    return value


def default_field_name(context: object) -> str:
    """Return the default field name carried by a serialization context."""
    if isinstance(context, Mapping):
        name = context.get(DEFAULT_FIELD_NAME_CONTEXT_KEY)
        if isinstance(name, str) and name != "":
            return name
    return DEFAULT_FIELD_NAME


def _from_members(members: dict[str, Any]) -> SingleFieldEnvelope[Any]:
    ((name, payload),) = members.items()
    return SingleFieldEnvelope(field_name=name, payload=payload)


def _to_members(
    envelope: SingleFieldEnvelope[Any], info: core_schema.SerializationInfo
) -> dict[str, Any]:
    name = envelope.field_name
    if name is None:
        name = default_field_name(info.context)
    return {name: envelope.payload}
