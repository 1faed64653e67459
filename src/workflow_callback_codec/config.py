"""Settings for services that mint or read callback strings.

Configuration is loaded from:
- environment variables
- and a local `.env` file (if present)

The codec functions themselves take the registry and length limit as explicit
arguments; these settings only decide what a service passes in.
"""

from __future__ import annotations

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from workflow_callback_codec.versions import (
    STANDARD_RULESETS,
    TAGGED_VERSION,
    VersionRegistry,
)

# Interactive-message callback ids are limited to 255 characters.
CALLBACK_ID_MAX_LENGTH = 255


class CodecSettings(BaseSettings):
    """Settings for the callback codec.

    Environment variables:
    - CALLBACK_CODEC_DEFAULT_VERSION  (optional)
    - CALLBACK_CODEC_MAX_LENGTH       (optional)
    - LOG_LEVEL                       (optional)

    Notes:
        Pydantic-settings supports overriding the env file in tests via:
        `CodecSettings(_env_file=path_to_env)`.
    """

    default_version: str = Field(
        default=TAGGED_VERSION,
        validation_alias="CALLBACK_CODEC_DEFAULT_VERSION",
        description="Version tag used for new encodes when the caller does not pin one",
    )
    max_length: int = Field(
        default=CALLBACK_ID_MAX_LENGTH,
        gt=0,
        validation_alias="CALLBACK_CODEC_MAX_LENGTH",
        description="Maximum length of an encoded string, custom data included",
    )
    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
        populate_by_name=True,
    )

    @field_validator("default_version")
    @classmethod
    def _require_standard_version(cls, value: str) -> str:
        known = [ruleset.tag for ruleset in STANDARD_RULESETS]
        if value not in known:
            raise ValueError(
                f"CALLBACK_CODEC_DEFAULT_VERSION must be one of {known}, got {value!r}"
            )
        return value

    def build_registry(self) -> VersionRegistry:
        return VersionRegistry.standard(default_version=self.default_version)

    def encode_kwargs(self) -> dict[str, object]:
        """Keyword arguments for `encode` reflecting these settings."""

        return {"registry": self.build_registry(), "max_length": self.max_length}
