"""Follow-up chat about the active submittal."""

import asyncio

from submittal_review.ai.base import ReviewProvider, SessionHandle
from submittal_review.review.constants import (
    CHAT_ERROR_MESSAGE,
    CHAT_GREETING,
    ChatRole,
)
from submittal_review.review.exceptions import ReviewError
from submittal_review.review.schemas import ChatTurn
from submittal_review.utils.logger import logger


class ChatSession:
    """Transcript and provider session for one active document.

    The provider session is opened on the first question, at most once.
    Questions are answered strictly one at a time in submission order.
    """

    def __init__(
        self,
        provider: ReviewProvider,
        document_id: str,
        encoded_document: str,
        mime_type: str,
    ):
        self.provider = provider
        self.document_id = document_id
        self._encoded_document = encoded_document
        self._mime_type = mime_type
        self._session: SessionHandle | None = None
        self._lock = asyncio.Lock()
        self._turns: list[ChatTurn] = [
            ChatTurn(role=ChatRole.ASSISTANT, text=CHAT_GREETING)
        ]

    @property
    def turns(self) -> list[ChatTurn]:
        return list(self._turns)

    @property
    def is_open(self) -> bool:
        return self._session is not None

    @property
    def is_busy(self) -> bool:
        return self._lock.locked()

    async def _ensure_session(self) -> SessionHandle:
        if self._session is None:
            self._session = await self.provider.open_session(
                self._encoded_document, self._mime_type
            )
        return self._session

    async def ask(self, text: str) -> ChatTurn:
        """Ask a question and return the assistant's turn.

        Provider failures never escape: they become a fallback assistant
        message and the session stays usable.

        Raises:
            ValueError: If the question is blank
        """
        question = text.strip()
        if not question:
            raise ValueError("Question must not be empty")

        async with self._lock:
            self._turns.append(ChatTurn(role=ChatRole.USER, text=question))
            try:
                session = await self._ensure_session()
                reply = await self.provider.send(session, question)
                turn = ChatTurn(
                    role=ChatRole.ASSISTANT,
                    text=reply.text,
                    citations=reply.citations,
                )
            except ReviewError as e:
                logger.error(
                    "Chat turn failed",
                    document_id=self.document_id,
                    error=e.message,
                    error_type=type(e).__name__,
                )
                turn = ChatTurn(role=ChatRole.ASSISTANT, text=CHAT_ERROR_MESSAGE)
            self._turns.append(turn)
            return turn
