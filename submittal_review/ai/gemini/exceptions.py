"""Custom exceptions for the Gemini integration package."""

from submittal_review.review.exceptions import TransportError


class GeminiError(TransportError):
    """Base exception for Gemini-specific failures.

    Surfaces to the review flow as a transport failure.
    """

    pass


class GeminiAuthenticationError(GeminiError):
    """Raised when the Gemini client cannot be created from settings."""

    pass
