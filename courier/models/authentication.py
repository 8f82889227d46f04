"""Credential descriptors resolved into an ``Authorization`` header."""

import base64
from enum import Enum
from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

from courier.models.headers import HeaderKey


class TokenType(str, Enum):
    """Registered authorization schemes.

    Any other scheme can be passed to ``TokenAuthentication`` as a plain string.
    """

    BASIC = "Basic"
    BEARER = "Bearer"
    DIGEST = "Digest"
    HOBA = "HOBA"
    MUTUAL = "Mutual"
    AWS = "AWS4-HMAC-SHA256"


class BasicAuthentication(BaseModel):
    """HTTP basic credentials."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["basic"] = "basic"
    username: str
    password: str = Field(repr=False)

    @property
    def header_key(self) -> str:
        """Header this credential is sent in."""
        return HeaderKey.AUTHORIZATION

    @property
    def header_value(self) -> str:
        """Computed ``Authorization`` value (``Basic <base64(user:pass)>``)."""
        raw = f"{self.username}:{self.password}".encode()
        return f"{TokenType.BASIC.value} {base64.b64encode(raw).decode('ascii')}"


class TokenAuthentication(BaseModel):
    """Scheme-tagged token credentials, e.g. ``Bearer <token>``."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    kind: Literal["token"] = "token"
    token_type: TokenType | Annotated[str, Field(min_length=1)] = TokenType.BEARER
    value: str = Field(repr=False)

    @property
    def header_key(self) -> str:
        """Header this credential is sent in."""
        return HeaderKey.AUTHORIZATION

    @property
    def header_value(self) -> str:
        """Computed ``Authorization`` value (``<scheme> <token>``)."""
        scheme = (
            self.token_type.value
            if isinstance(self.token_type, TokenType)
            else self.token_type
        )
        return f"{scheme} {self.value}"


RequestAuthentication = Annotated[
    BasicAuthentication | TokenAuthentication, Field(discriminator="kind")
]
