"""Public wrapper chain API.

Resolve the composite type of a chain of wrapper kinds around a payload type,
pack payloads into nested wrappers, and unwrap them again.
"""

from .chain import (
    ChainPacker,
    ChainUnwrapper,
    WrapperChainResolver,
    pack,
    resolve_chain_type,
    unwrap,
)
from .context import EMPTY_CONTEXT, ChainContext
from .converters import BodyConverterFactory, RequestBodyConverter, ResponseBodyConverter
from .errors import ConfigurationError, MalformedEnvelopeError, WrapperError
from .registry import Packer, Registry, RegistryBuilder, Unwrapper
from .resolvers import ConstantTypeResolver, DefaultTypeResolver, TypeResolver
from .types import Arity, WrapperChain, arity_of, as_chain, nesting_of, parameterize, split_type

__all__ = [
    "Arity",
    "BodyConverterFactory",
    "ChainContext",
    "ChainPacker",
    "ChainUnwrapper",
    "ConfigurationError",
    "ConstantTypeResolver",
    "DefaultTypeResolver",
    "EMPTY_CONTEXT",
    "MalformedEnvelopeError",
    "Packer",
    "Registry",
    "RegistryBuilder",
    "RequestBodyConverter",
    "ResponseBodyConverter",
    "TypeResolver",
    "Unwrapper",
    "WrapperChain",
    "WrapperChainResolver",
    "WrapperError",
    "arity_of",
    "as_chain",
    "nesting_of",
    "pack",
    "parameterize",
    "resolve_chain_type",
    "split_type",
    "unwrap",
]
