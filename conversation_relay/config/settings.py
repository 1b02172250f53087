"""
Runtime settings for the relay, read from environment variables and ``.env``.

Values are validated with Pydantic so a malformed port or token budget fails at
startup rather than on the first call. Variable names match the field names in
upper case (``OPENAI_API_KEY``, ``PORT``, ``CONVERSATION_HISTORY``...).
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from conversation_relay.config.constants import (
    DEFAULT_MAX_TOKENS,
    DEFAULT_MODEL,
    DEFAULT_PROMPT_NAME,
    DEFAULT_TIMEOUT_SECONDS,
)


class Settings(BaseSettings):
    """Validated relay configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    host: str = Field("0.0.0.0", description="Interface the server binds to")
    port: int = Field(3000, ge=1, le=65535, description="Listen port")
    log_level: str = Field("INFO", description="Application log level")

    openai_api_key: Optional[str] = Field(None, description="Backend credential")
    openai_model: str = Field(DEFAULT_MODEL, description="Chat model identifier")
    openai_max_tokens: int = Field(
        DEFAULT_MAX_TOKENS, gt=0, description="Reply length cap in tokens"
    )
    openai_timeout: float = Field(
        DEFAULT_TIMEOUT_SECONDS, gt=0, description="Backend request timeout in seconds"
    )
    openai_base_url: Optional[str] = Field(
        None, description="Alternative OpenAI-compatible endpoint"
    )

    system_prompt: Optional[str] = Field(None, description="Literal system instruction")
    system_prompt_file: Optional[str] = Field(
        None, description="Path to a file holding the system instruction"
    )
    system_prompt_name: str = Field(
        DEFAULT_PROMPT_NAME, description="Name of a prompt shipped with the package"
    )

    conversation_history: bool = Field(
        False, description="Send prior turns of the call to the backend"
    )

    @field_validator(
        "openai_api_key", "openai_base_url", "system_prompt", "system_prompt_file",
        mode="before",
    )
    @classmethod
    def empty_as_unset(cls, v):
        """Treat ``VAR=`` the same as an unset variable."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def api_key_configured(self) -> bool:
        return bool(self.openai_api_key)


def load_settings() -> Settings:
    return Settings()
