"""Configuration management using pydantic-settings."""

from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .types import Credentials


class Settings(BaseSettings):
    """Signing settings loaded from the standard AWS environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="AWS_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    access_key_id: str = Field(
        default="",
        description="Access key ID used in the credential scope",
    )
    secret_access_key: SecretStr = Field(
        default=SecretStr(""),
        description="Secret key the signing key is derived from",
    )
    session_token: str = Field(
        default="",
        description="Session token for temporary credentials (optional)",
    )
    region: str = Field(
        default="us-east-1",
        description="Region bound into the signature scope",
    )
    iot_endpoint: Optional[str] = Field(
        default=None,
        description="AWS IoT data endpoint for presigned MQTT connections",
    )
    signing_service: str = Field(
        default="iotdata",
        description="Service name bound into the signature scope",
    )

    def credentials(self) -> Credentials:
        return Credentials(
            access_key=self.access_key_id,
            secret_key=self.secret_access_key.get_secret_value(),
            session_token=self.session_token,
            region=self.region,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings."""
    return Settings()
