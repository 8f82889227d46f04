"""Registry resolving default codecs from body types."""

from collections.abc import Callable
from typing import Any, TypeVar

from pydantic import BaseModel

from courier.coding.codecs import BodyDecoder, BodyEncoder
from courier.models.parameters import RequestParameters


EncoderFactory = Callable[[type[Any]], BodyEncoder[Any]]
DecoderFactory = Callable[[type[Any]], BodyDecoder[Any]]
FactoryT = TypeVar("FactoryT")


class CodecNotFoundError(LookupError):
    """Raised when no codec is registered for a body type."""

    def __init__(self, body_type: type[Any], direction: str) -> None:
        """Initialize the error.

        Args:
            body_type: Type that has no codec.
            direction: ``"encoder"`` or ``"decoder"``.
        """
        self.body_type = body_type
        super().__init__(f"No {direction} registered for {body_type!r}")


class CodecRegistry:
    """Maps body types to encoder and decoder factories.

    Lookup follows the body type's MRO, so a codec registered for a base class
    (e.g. ``pydantic.BaseModel``) applies to its subclasses. Factories receive
    the concrete body type.
    """

    def __init__(self) -> None:
        """Initialize an empty registry."""
        self._encoders: dict[type[Any], EncoderFactory] = {}
        self._decoders: dict[type[Any], DecoderFactory] = {}

    def register(
        self,
        body_type: type[Any],
        encoder: EncoderFactory | None = None,
        decoder: DecoderFactory | None = None,
    ) -> None:
        """Register codec factories for a body type.

        Args:
            body_type: Body type the factories handle.
            encoder: Factory for request encoders.
            decoder: Factory for response decoders.
        """
        if encoder is not None:
            self._encoders[body_type] = encoder
        if decoder is not None:
            self._decoders[body_type] = decoder

    def encoder_for(self, body_type: type[Any]) -> BodyEncoder[Any]:
        """Resolve the request encoder for a body type.

        Raises:
            CodecNotFoundError: If nothing is registered along the MRO.
        """
        factory = self._lookup(self._encoders, body_type)
        if factory is None:
            raise CodecNotFoundError(body_type, "encoder")
        return factory(body_type)

    def decoder_for(self, body_type: type[Any]) -> BodyDecoder[Any]:
        """Resolve the response decoder for a body type.

        Raises:
            CodecNotFoundError: If nothing is registered along the MRO.
        """
        factory = self._lookup(self._decoders, body_type)
        if factory is None:
            raise CodecNotFoundError(body_type, "decoder")
        return factory(body_type)

    @staticmethod
    def _lookup(
        table: dict[type[Any], FactoryT], body_type: type[Any]
    ) -> FactoryT | None:
        for candidate in getattr(body_type, "__mro__", (body_type,)):
            if candidate in table:
                return table[candidate]
        return None


def default_registry() -> CodecRegistry:
    """Build a registry with the built-in codecs.

    Covers ``bytes`` (pass-through), ``str`` (UTF-8), ``dict``/``list`` (JSON),
    ``RequestParameters`` (form encoding, request side only) and pydantic
    models (JSON).
    """
    registry = CodecRegistry()
    registry.register(
        bytes,
        encoder=lambda _: BodyEncoder.passthrough(),
        decoder=lambda _: BodyDecoder.passthrough(),
    )
    registry.register(
        str,
        encoder=lambda _: BodyEncoder.string(),
        decoder=lambda _: BodyDecoder.string(),
    )
    for json_type in (dict, list):
        registry.register(
            json_type,
            encoder=lambda _: BodyEncoder.json(),
            decoder=lambda _: BodyDecoder.json(),
        )
    registry.register(RequestParameters, encoder=lambda _: BodyEncoder.form())
    registry.register(
        BaseModel,
        encoder=lambda _: BodyEncoder.model(),
        decoder=BodyDecoder.model,
    )
    return registry
