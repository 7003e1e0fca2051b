"""Factory for creating review provider instances."""

from enum import Enum

from submittal_review.ai.base import ReviewProvider
from submittal_review.config import get_app_settings
from submittal_review.utils.logger import logger


class ReviewProviderType(str, Enum):
    """Available review provider types."""

    GEMINI = "gemini"
    MOCK = "mock"


def create_review_provider(
    provider_type: ReviewProviderType | str | None = None,
) -> ReviewProvider:
    """Create a review provider instance.

    Args:
        provider_type: Type of provider to create. If None, uses the
            AI_PROVIDER setting (defaults to Gemini).

    Returns:
        ReviewProvider: Instance of the specified provider

    Raises:
        ValueError: If provider type is not supported
    """
    if provider_type is None:
        provider_type = get_app_settings().ai_provider

    if isinstance(provider_type, str):
        provider_type = ReviewProviderType(provider_type.lower())

    logger.info(f"Creating review provider: {provider_type.value}")

    if provider_type == ReviewProviderType.GEMINI:
        from submittal_review.ai.providers.gemini import GeminiReviewProvider

        return GeminiReviewProvider()
    elif provider_type == ReviewProviderType.MOCK:
        from submittal_review.ai.providers.mock import MockReviewProvider

        return MockReviewProvider()
    else:
        raise ValueError(f"Unsupported review provider: {provider_type}")
