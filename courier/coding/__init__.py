"""Body encoding, decoding, and response validation."""

from courier.coding.codecs import BodyDecoder, BodyEncoder
from courier.coding.registry import CodecNotFoundError, CodecRegistry, default_registry
from courier.coding.validators import ResponseValidator


__all__ = [
    "BodyDecoder",
    "BodyEncoder",
    "CodecNotFoundError",
    "CodecRegistry",
    "ResponseValidator",
    "default_registry",
]
