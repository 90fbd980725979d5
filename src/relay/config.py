"""Relay configuration with environment variable loading.

Pydantic-based, immutable configuration for the DeepSeek relay.
Built once at process start and handed to the API layer.
"""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Load environment variables from .env file
load_dotenv()

DEFAULT_API_URL = "https://api.deepseek.com/v3.2_speciale_expires_on_20251215"
DEFAULT_MODEL = "deepseek-v3.2_speciale_expires_on_20251215"
TUTOR_PROMPT = "You are HomeworkHelper, an AI tutor that explains every answer step-by-step."


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    return float(value) if value else default


class RelayConfig(BaseModel):
    """Configuration for the DeepSeek relay.

    A missing API key is allowed here so the server can still start;
    the relay refuses each request instead.

    Attributes:
        api_key: Bearer credential for the upstream API (None if unset).
        api_url: Full URL of the upstream chat-completion endpoint.
        model_name: Model identifier sent with every completion request.
        temperature: Sampling temperature (low keeps answers focused).
        system_prompt: Fixed system-role instruction (tutoring persona).
        timeout: Seconds to wait on the upstream call before giving up.
    """

    model_config = ConfigDict(frozen=True)

    api_key: str | None = Field(
        default_factory=lambda: os.getenv("DEEPSEEK_API_KEY"),
        description="DeepSeek API key",
    )
    api_url: str = Field(
        default_factory=lambda: os.getenv("DEEPSEEK_API_URL") or DEFAULT_API_URL,
        description="Upstream chat-completion URL",
    )
    model_name: str = Field(
        default_factory=lambda: os.getenv("DEEPSEEK_MODEL") or DEFAULT_MODEL,
        description="Model to use",
    )
    temperature: float = Field(
        default=0.2,
        ge=0.0,
        le=2.0,
        description="Sampling temperature for answer generation",
    )
    system_prompt: str = Field(
        default=TUTOR_PROMPT,
        min_length=1,
        description="System-role instruction sent before the question",
    )
    timeout: float = Field(
        default_factory=lambda: _env_float("DEEPSEEK_TIMEOUT", 120.0),
        gt=0.0,
        description="Upstream request timeout in seconds",
    )

    @field_validator("api_key")
    @classmethod
    def normalize_api_key(cls, v: str | None) -> str | None:
        """Strip whitespace; treat a blank key as not configured."""
        if v is None or not v.strip():
            return None
        return v.strip()

    @property
    def has_api_key(self) -> bool:
        return self.api_key is not None


def get_relay_config() -> RelayConfig:
    """Create relay configuration from environment.

    Returns:
        Configured RelayConfig instance.
    """
    return RelayConfig()
