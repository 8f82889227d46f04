"""Configuration model for the request manager."""

import re
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, field_validator

from courier.config.defaults import default_accept_language, default_user_agent
from courier.constants import DEFAULT_ACCEPT_ENCODING
from courier.models.authentication import RequestAuthentication
from courier.models.headers import HeaderKey


_HEADER_NAME = re.compile(r"^[!#$%&'*+.^_`|~0-9A-Za-z-]+$")


class ManagerConfig(BaseModel):
    """Settings a ``RequestManager`` applies to every request.

    Instances are immutable. The manager swaps in a new snapshot on change,
    and each execution reads one snapshot for its whole lifetime.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    additional_headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers merged into every request with highest precedence",
    )
    inject_default_headers: bool = Field(
        default=True,
        description="Inject User-Agent, Accept-Encoding and Accept-Language",
    )
    authentication: RequestAuthentication | None = Field(
        default=None,
        description="Backup credential for descriptors without one",
    )
    user_agent: Annotated[str, Field(min_length=1, max_length=500)] | None = None
    accept_languages: tuple[str, ...] | None = Field(
        default=None,
        description="Accept-Language tags in preference order; None reads the locale",
    )

    @field_validator("additional_headers")
    @classmethod
    def validate_headers(cls, v: dict[str, str]) -> dict[str, str]:
        """Ensure header names are HTTP tokens and values are single-line."""
        for key, value in v.items():
            if not _HEADER_NAME.match(key):
                msg = f"Invalid header name: {key!r}"
                raise ValueError(msg)
            if "\r" in value or "\n" in value:
                msg = f"Header '{key}' value must not contain line breaks"
                raise ValueError(msg)
        return v

    def default_headers(self) -> dict[str, str]:
        """Headers injected below descriptor headers.

        Returns:
            The default headers, or an empty dict when injection is disabled.
        """
        if not self.inject_default_headers:
            return {}
        return {
            HeaderKey.USER_AGENT: self.user_agent or default_user_agent(),
            HeaderKey.ACCEPT_ENCODING: DEFAULT_ACCEPT_ENCODING,
            HeaderKey.ACCEPT_LANGUAGE: default_accept_language(self.accept_languages),
        }
