"""
Configuration management for the Gemini integration package.

This module handles environment variable configuration and validation
for Gemini integration using Pydantic settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from submittal_review.utils.logger import logger


class GeminiSettings(BaseSettings):
    """Configuration for Gemini integration using Pydantic settings."""

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="GEMINI_"
    )

    api_key: str = Field(description="Gemini API key for authentication")
    model_name: str = Field(
        default="gemini-3-pro-preview",
        description="Gemini model used for extraction and chat",
    )
    temperature: float | None = Field(
        default=None,
        description="Temperature for content generation (0.0-1.0); provider default when unset",
    )
    timeout: int = Field(default=600, description="Request timeout in seconds")

    # Braintrust tracing of google-genai calls
    enable_braintrust: bool = Field(
        default=False, description="Trace Gemini calls with Braintrust"
    )
    braintrust_project_name: str | None = Field(
        default=None, description="Braintrust project receiving traces"
    )


_gemini_settings: GeminiSettings | None = None


def get_gemini_settings() -> GeminiSettings:
    """
    Get the global Gemini settings instance.

    Returns:
        GeminiSettings: The global settings instance
    """
    global _gemini_settings
    if _gemini_settings is None:
        _gemini_settings = GeminiSettings()
        logger.info("Settings loaded", model_name=_gemini_settings.model_name)
    return _gemini_settings

