"""Typed response values produced by request execution."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from courier.models.headers import get_header


BodyT = TypeVar("BodyT")


class Response(BaseModel, Generic[BodyT]):
    """Decoded result of one HTTP exchange.

    Status code and headers are only present when the transport produced an
    HTTP response. A ``Response`` is never partially decoded: it exists only
    once the body decoder has succeeded.
    """

    model_config = ConfigDict(frozen=True, extra="forbid", arbitrary_types_allowed=True)

    url: str | None = Field(default=None, description="Final response URL")
    headers: dict[str, str] | None = Field(
        default=None, description="Response headers"
    )
    status_code: int | None = Field(default=None, description="HTTP status code")
    body: BodyT | None = Field(default=None, description="Decoded response body")

    def header(self, key: str) -> str | None:
        """Get a response header value, ignoring key case."""
        return get_header(self.headers, key)
