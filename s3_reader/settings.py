from __future__ import annotations

from typing import Literal

from pydantic import AliasChoices, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Configuration for the S3 client used by readers.

    Unset credentials and region fall through to boto3's own lookup chain
    (shared config files, instance metadata, ...).
    """

    model_config = SettingsConfigDict(
        env_prefix="", case_sensitive=False, extra="ignore"
    )

    endpoint: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "S3_READER_ENDPOINT",
            "AWS_ENDPOINT_URL",
        ),
    )
    access_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "S3_READER_ACCESS_KEY_ID",
            "AWS_ACCESS_KEY_ID",
        ),
    )
    secret_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "S3_READER_SECRET_ACCESS_KEY",
            "AWS_SECRET_ACCESS_KEY",
        ),
    )
    session_token: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "S3_READER_SESSION_TOKEN",
            "AWS_SESSION_TOKEN",
        ),
    )
    region: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "S3_READER_REGION",
            "AWS_REGION",
            "AWS_DEFAULT_REGION",
        ),
    )
    addressing_style: Literal["auto", "virtual", "path"] = Field(
        default="auto",
        validation_alias="S3_READER_ADDRESSING_STYLE",
    )
    max_attempts: int = Field(
        default=3,
        ge=1,
        validation_alias="S3_READER_MAX_ATTEMPTS",
    )

    @field_validator("endpoint", mode="before")
    @classmethod
    def _blank_endpoint_is_unset(cls, value: object) -> object:
        if isinstance(value, str) and not value.strip():
            return None
        return value


def load_settings_from_env() -> ClientSettings:
    """Load S3 client settings from environment variables.

    Returns:
        ClientSettings instance populated from environment variables.
    """
    return ClientSettings()
