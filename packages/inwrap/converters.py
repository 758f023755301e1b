"""Request and response body converters over wrapper chains.

A converter is built once per call site: it resolves the composite type for
its chain, builds a pydantic ``TypeAdapter`` for that type, and then converts
any number of bodies. Converters only transform bytes and values; sending
them is the HTTP client's job.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

from pydantic import TypeAdapter

from packages.inwrap_shared.config import InwrapSettings
from packages.inwrap_shared.logging import conversion_context, get_logger

from .chain import ChainPacker, ChainUnwrapper, WrapperChainResolver
from .context import EMPTY_CONTEXT, ChainContext
from .errors import kind_name
from .registry import Registry
from .single_field import SingleFieldCodec
from .types import WrapperChain, as_chain

_LOGGER = get_logger(__name__)


def _chain_label(chain: WrapperChain) -> str:
    return ">".join(kind_name(kind) for kind in chain)


class RequestBodyConverter:
    """Pack a payload through a chain and serialize it to JSON."""

    def __init__(
        self,
        *,
        adapter: TypeAdapter[Any],
        packer: ChainPacker,
        chain: WrapperChain,
        context: ChainContext,
        serialization_context: dict[str, Any],
    ) -> None:
        self._adapter = adapter
        self._packer = packer
        self._chain = chain
        self._context = context
        self._serialization_context = serialization_context

    def to_python(self, value: Any) -> Any:
        """Return the JSON-compatible structure for ``value`` after packing."""
        packed = self._packed(value)
        return self._adapter.dump_python(
            packed, mode="json", context=self._serialization_context
        )

    def convert(self, value: Any) -> bytes:
        """Return JSON bytes for ``value`` after packing."""
        packed = self._packed(value)
        return self._adapter.dump_json(packed, context=self._serialization_context)

    def _packed(self, value: Any) -> Any:
        with conversion_context(direction="request", wrapper_chain=_chain_label(self._chain)):
            _LOGGER.debug("Packing request body")
            return self._packer.pack(value, self._chain, self._context)


class ResponseBodyConverter:
    """Parse a JSON body as a chain's composite type and unwrap the payload."""

    def __init__(
        self,
        *,
        adapter: TypeAdapter[Any],
        unwrapper: ChainUnwrapper,
        chain: WrapperChain,
        context: ChainContext,
    ) -> None:
        self._adapter = adapter
        self._unwrapper = unwrapper
        self._chain = chain
        self._context = context

    def from_python(self, data: Any) -> Any:
        """Return the payload held by already-decoded JSON ``data``."""
        return self._unwrapped(self._adapter.validate_python(data))

    def convert(self, body: bytes | str) -> Any:
        """Return the payload held by the JSON document ``body``."""
        return self._unwrapped(self._adapter.validate_json(body))

    def _unwrapped(self, wrapped: Any) -> Any:
        with conversion_context(direction="response", wrapper_chain=_chain_label(self._chain)):
            _LOGGER.debug("Unwrapping response body")
            return self._unwrapper.unwrap(wrapped, self._chain, self._context)


class BodyConverterFactory:
    """Build request/response converters for call sites declaring a chain."""

    def __init__(
        self,
        registry: Registry,
        *,
        default_field_name: str | None = None,
    ) -> None:
        self._resolver = WrapperChainResolver(registry)
        self._packer = ChainPacker(registry)
        self._unwrapper = ChainUnwrapper(registry)
        self._codec = SingleFieldCodec(default_field_name)

    @classmethod
    def from_settings(
        cls, registry: Registry, settings: InwrapSettings
    ) -> BodyConverterFactory:
        """Create a factory configured from runtime settings."""
        return cls(
            registry,
            default_field_name=settings.single_field.default_field_name,
        )

    def wrapped_type(
        self,
        payload_type: Any,
        chain: Iterable[type],
        context: ChainContext | None = None,
    ) -> Any:
        """Return the composite type a body for ``chain`` is (de)serialized as."""
        return self._resolver.resolve_chain_type(payload_type, chain, context)

    def request_body_converter(
        self,
        payload_type: Any,
        chain: Iterable[type],
        context: ChainContext | None = None,
    ) -> RequestBodyConverter:
        """Return a converter packing ``payload_type`` values through ``chain``."""
        kinds = as_chain(chain)
        resolved_context = EMPTY_CONTEXT if context is None else context
        wrapped_type = self.wrapped_type(payload_type, kinds, resolved_context)
        return RequestBodyConverter(
            adapter=TypeAdapter(wrapped_type),
            packer=self._packer,
            chain=kinds,
            context=resolved_context,
            serialization_context=self._codec.serialization_context(),
        )

    def response_body_converter(
        self,
        payload_type: Any,
        chain: Iterable[type],
        context: ChainContext | None = None,
    ) -> ResponseBodyConverter:
        """Return a converter unwrapping ``payload_type`` values from ``chain``."""
        kinds = as_chain(chain)
        resolved_context = EMPTY_CONTEXT if context is None else context
        wrapped_type = self.wrapped_type(payload_type, kinds, resolved_context)
        return ResponseBodyConverter(
            adapter=TypeAdapter(wrapped_type),
            unwrapper=self._unwrapper,
            chain=kinds,
            context=resolved_context,
        )
