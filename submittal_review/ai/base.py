"""Base classes for review provider abstraction."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from submittal_review.review.constants import UNTITLED_SOURCE

if TYPE_CHECKING:
    from submittal_review.review.schemas import SubmittalRecord


class GroundingCitation(BaseModel):
    """Web source consulted while answering a chat question."""

    uri: str
    title: str | None = None

    @property
    def display_title(self) -> str:
        return self.title or UNTITLED_SOURCE


class ChatReply(BaseModel):
    """Answer to one chat message."""

    text: str
    citations: list[GroundingCitation] = Field(default_factory=list)


class SessionHandle(BaseModel):
    """Opaque reference to a provider-side chat session.

    The provider owns the conversation history behind ``chat``; callers only
    pass the handle back to ``send``.
    """

    model_config = {"arbitrary_types_allowed": True}

    session_id: str
    chat: Any = Field(default=None, exclude=True, repr=False)


class ReviewProvider(ABC):
    """Abstract base class for submittal review providers.

    Provides a common interface over the hosted model so the Gemini
    implementation and deterministic test doubles are interchangeable.
    """

    @abstractmethod
    async def analyze(
        self,
        encoded_document: str,
        mime_type: str,
        focus_instruction: str | None = None,
    ) -> "SubmittalRecord":
        """Extract a structured review from a document.

        Args:
            encoded_document: Base64 document bytes without transport prefix
            mime_type: Declared content type of the document
            focus_instruction: Optional reviewer criterion to prioritize

        Returns:
            SubmittalRecord: The validated extraction result

        Raises:
            TransportError: If the provider call fails
            EmptyResponseError: If the provider returns no text
            SchemaParseError: If the text does not match the record schema
        """
        pass

    @abstractmethod
    async def open_session(
        self, encoded_document: str, mime_type: str
    ) -> SessionHandle:
        """Open a chat seeded with the document and the reviewer persona.

        Args:
            encoded_document: Base64 document bytes without transport prefix
            mime_type: Declared content type of the document

        Returns:
            SessionHandle: Handle to pass to ``send``
        """
        pass

    @abstractmethod
    async def send(self, session: SessionHandle | None, text: str) -> ChatReply:
        """Send one user message on an open session.

        Args:
            session: Handle returned by ``open_session``
            text: The user's question

        Returns:
            ChatReply: Answer text and web citations with a uri

        Raises:
            SessionNotInitializedError: If the session was never opened
            EmptyResponseError: If the provider returns no text
            TransportError: If the provider call fails
        """
        pass
