"""Public single-field envelope API."""

from .codec import SingleFieldCodec, envelope_adapter
from .envelope import (
    DEFAULT_FIELD_NAME,
    DEFAULT_FIELD_NAME_CONTEXT_KEY,
    SingleFieldEnvelope,
    require_single_member,
)
from .handlers import FieldNames, SingleFieldPacker, SingleFieldUnwrapper, register_single_field

__all__ = [
    "DEFAULT_FIELD_NAME",
    "DEFAULT_FIELD_NAME_CONTEXT_KEY",
    "FieldNames",
    "SingleFieldCodec",
    "SingleFieldEnvelope",
    "SingleFieldPacker",
    "SingleFieldUnwrapper",
    "envelope_adapter",
    "register_single_field",
    "require_single_member",
]
