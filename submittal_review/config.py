from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=False, extra="ignore")

    client_base_url: str = Field(
        default="http://localhost:3000", description="Frontend base URL"
    )
    ai_provider: str = Field(
        default="gemini",
        description="Review provider backing extraction and chat (gemini or mock)",
    )
    max_upload_bytes: int = Field(
        default=50 * 1024 * 1024,
        description="Largest submittal upload accepted, in bytes",
    )


class ReviewerProfile(BaseSettings):
    """Identity of the engineer signing exported reviews.

    Passed explicitly to the export builders; nothing reads it implicitly.
    """

    model_config = SettingsConfigDict(
        case_sensitive=False, extra="ignore", env_prefix="REVIEWER_"
    )

    name: str = Field(default="Alex Johnson", description="Reviewer full name")
    title: str = Field(
        default="Senior Project Engineer", description="Reviewer job title"
    )
    company: str = Field(
        default="Apex Construction Solutions", description="Reviewer company"
    )


_app_settings: AppSettings | None = None
_reviewer_profile: ReviewerProfile | None = None


def get_app_settings() -> AppSettings:
    global _app_settings
    if _app_settings is None:
        _app_settings = AppSettings()
    return _app_settings


def get_reviewer_profile() -> ReviewerProfile:
    """Get the reviewer profile loaded from the environment."""
    global _reviewer_profile
    if _reviewer_profile is None:
        _reviewer_profile = ReviewerProfile()
    return _reviewer_profile


def get_client_base_url() -> str:
    """Get the client base URL from settings."""
    settings = get_app_settings()
    return settings.client_base_url
