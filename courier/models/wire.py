"""Transport-ready request values."""

import httpx
from pydantic import BaseModel, ConfigDict, Field

from courier.models.method import RequestMethod


class WireRequest(BaseModel):
    """A fully resolved HTTP request, ready to hand to a transport."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    url: str = Field(min_length=1, description="Final absolute URL")
    method: RequestMethod
    headers: dict[str, str] = Field(default_factory=dict)
    body: bytes | None = Field(default=None, description="Encoded request body")
    timeout: float = Field(gt=0, description="Transport timeout in seconds")

    def to_httpx(self, client: httpx.Client) -> httpx.Request:
        """Build the equivalent ``httpx.Request`` on a client.

        Args:
            client: Client whose defaults (base headers, cookies) apply.

        Returns:
            Request ready for ``client.send``.
        """
        return client.build_request(
            self.method.value,
            self.url,
            headers=self.headers,
            content=self.body,
            timeout=self.timeout,
        )
