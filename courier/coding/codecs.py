"""Body encoders and decoders.

An encoder turns an optional request body into optional bytes; a decoder
turns optional response bytes into an optional body. Any exception raised by
the wrapped handler counts as an encoding or decoding failure.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from pydantic import BaseModel

from courier.models.parameters import RequestParameters


BodyT = TypeVar("BodyT")
ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class BodyEncoder(Generic[BodyT]):
    """Transforms a request body into bytes."""

    handler: Callable[[BodyT | None], bytes | None]

    def encode(self, body: BodyT | None) -> bytes | None:
        """Encode a body.

        Args:
            body: Body to encode.

        Returns:
            Encoded bytes, or None for no body.
        """
        return self.handler(body)

    @classmethod
    def passthrough(cls) -> "BodyEncoder[bytes]":
        """Send ``bytes`` bodies unchanged."""
        return BodyEncoder(lambda body: body)

    @classmethod
    def string(cls, encoding: str = "utf-8") -> "BodyEncoder[str]":
        """Encode ``str`` bodies with a text encoding."""

        def encode(body: str | None) -> bytes | None:
            if body is None:
                return None
            return body.encode(encoding)

        return BodyEncoder(encode)

    @classmethod
    def json(cls, **dumps_kwargs: Any) -> "BodyEncoder[Any]":
        """Serialize JSON-compatible bodies with ``json.dumps``."""

        def encode(body: Any) -> bytes | None:
            if body is None:
                return None
            return json.dumps(body, **dumps_kwargs).encode("utf-8")

        return BodyEncoder(encode)

    @classmethod
    def model(cls) -> "BodyEncoder[BaseModel]":
        """Serialize pydantic models to JSON."""

        def encode(body: BaseModel | None) -> bytes | None:
            if body is None:
                return None
            return body.model_dump_json().encode("utf-8")

        return BodyEncoder(encode)

    @classmethod
    def form(cls) -> "BodyEncoder[RequestParameters]":
        """Encode ``RequestParameters`` as a form body."""

        def encode(body: RequestParameters | None) -> bytes | None:
            if body is None:
                return None
            return body.encode().encode("utf-8")

        return BodyEncoder(encode)


@dataclass(frozen=True)
class BodyDecoder(Generic[BodyT]):
    """Transforms response bytes into a body."""

    handler: Callable[[bytes | None], BodyT | None]

    def decode(self, data: bytes | None) -> BodyT | None:
        """Decode response bytes.

        Args:
            data: Raw response bytes.

        Returns:
            Decoded body, or None.
        """
        return self.handler(data)

    @classmethod
    def passthrough(cls) -> "BodyDecoder[bytes]":
        """Return response bytes unchanged."""
        return BodyDecoder(lambda data: data)

    @classmethod
    def string(cls, encoding: str = "utf-8") -> "BodyDecoder[str]":
        """Decode response bytes as text."""

        def decode(data: bytes | None) -> str | None:
            if data is None:
                return None
            return data.decode(encoding)

        return BodyDecoder(decode)

    @classmethod
    def json(cls, **loads_kwargs: Any) -> "BodyDecoder[Any]":
        """Parse response bytes with ``json.loads``."""

        def decode(data: bytes | None) -> Any:
            if data is None:
                return None
            return json.loads(data, **loads_kwargs)

        return BodyDecoder(decode)

    @classmethod
    def model(cls, model_type: type[ModelT]) -> "BodyDecoder[ModelT]":
        """Validate response bytes as JSON for a pydantic model."""

        def decode(data: bytes | None) -> ModelT | None:
            if data is None:
                return None
            return model_type.model_validate_json(data)

        return BodyDecoder(decode)
