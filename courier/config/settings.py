"""Environment settings powered by Pydantic BaseSettings."""

from typing import Annotated

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from courier.config.manager import ManagerConfig
from courier.constants import DEFAULT_SLA_SECONDS
from courier.models.authentication import TokenAuthentication, TokenType


class CourierSettings(BaseSettings):
    """Environment configuration (``COURIER_*`` variables or ``.env``)."""

    model_config = SettingsConfigDict(
        env_prefix="COURIER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    user_agent: str | None = None
    inject_default_headers: bool = True
    bearer_token: str | None = Field(default=None, repr=False)
    default_retries: Annotated[int, Field(ge=0, le=10)] = 0
    default_sla_seconds: Annotated[float, Field(gt=0)] = DEFAULT_SLA_SECONDS

    def to_manager_config(self) -> ManagerConfig:
        """Build a ManagerConfig from these settings.

        A configured bearer token becomes the manager's backup credential.
        """
        authentication = (
            TokenAuthentication(token_type=TokenType.BEARER, value=self.bearer_token)
            if self.bearer_token
            else None
        )
        return ManagerConfig(
            inject_default_headers=self.inject_default_headers,
            user_agent=self.user_agent,
            authentication=authentication,
        )


def get_settings() -> CourierSettings:
    """Get a settings instance."""
    return CourierSettings()
