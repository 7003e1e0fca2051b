"""Review provider implementations."""

from submittal_review.ai.providers.factory import (
    ReviewProviderType,
    create_review_provider,
)

__all__ = [
    "ReviewProviderType",
    "create_review_provider",
]
