"""Exceptions raised while encoding, analyzing, and chatting about a submittal."""


class ReviewError(Exception):
    """Base exception for all submittal review errors."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class EncodingError(ReviewError):
    """Raised when an uploaded document cannot be read or encoded."""

    pass


class TransportError(ReviewError):
    """Raised when the model provider cannot be reached or rejects the call."""

    pass


class EmptyResponseError(ReviewError):
    """Raised when the model provider returns no text."""

    pass


class SchemaParseError(ReviewError):
    """Raised when extraction output does not match the submittal schema."""

    pass


class SessionNotInitializedError(ReviewError):
    """Raised when a chat message is sent before the session is opened."""

    pass


class DocumentNotReadyError(ReviewError):
    """Raised when an operation needs a completed review and none is active."""

    pass
