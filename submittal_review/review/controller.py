"""State machine for the single active submittal."""

import asyncio
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from submittal_review.ai.base import ReviewProvider
from submittal_review.review.chat import ChatSession
from submittal_review.review.constants import (
    ANALYSIS_ERROR_MESSAGE,
    DocumentStatus,
    ReviewState,
    status_style,
)
from submittal_review.review.encoder import encode_document
from submittal_review.review.exceptions import DocumentNotReadyError, ReviewError
from submittal_review.review.schemas import ActiveDocument, ReviewSnapshot
from submittal_review.utils.logger import logger


class ReviewController:
    """Owns the one active document slot and its chat.

    States: empty -> analyzing -> ready | error, and back to empty on reset.
    Submissions queue behind each other so provider calls never interleave.
    Each submission takes a fresh document id; a result is applied only while
    that id is still the latest, so a slow analysis of a discarded document
    can never overwrite newer state.
    """

    def __init__(self, provider: ReviewProvider):
        self.provider = provider
        self._state = ReviewState.EMPTY
        self._document: ActiveDocument | None = None
        self._error: str | None = None
        self._chat: ChatSession | None = None
        self._latest_id: str | None = None
        self._analysis_lock = asyncio.Lock()

    @property
    def state(self) -> ReviewState:
        return self._state

    @property
    def document(self) -> ActiveDocument | None:
        return self._document

    @property
    def error(self) -> str | None:
        return self._error

    def snapshot(self) -> ReviewSnapshot:
        record = self._document.record if self._document else None
        return ReviewSnapshot(
            state=self._state,
            document=self._document.model_copy() if self._document else None,
            error=self._error,
            status_style=status_style(record.recommended_status)._asdict()
            if record
            else None,
        )

    def _clear(self) -> None:
        self._document = None
        self._chat = None
        self._error = None

    def reset(self) -> ReviewSnapshot:
        """Discard the active document, its chat, and any in-flight result."""
        if self._latest_id is not None:
            logger.info("Resetting review", document_id=self._latest_id)
        self._latest_id = None
        self._clear()
        self._state = ReviewState.EMPTY
        return self.snapshot()

    def _is_latest(self, document_id: str) -> bool:
        return self._latest_id == document_id

    async def submit(
        self,
        payload: Any,
        file_name: str,
        mime_type: str | None = None,
        focus_instruction: str | None = None,
    ) -> ReviewSnapshot:
        """Encode and analyze a new submittal, replacing the current one.

        Args:
            payload: Document bytes, path, data URL, or binary file-like object
            file_name: Original file name for display
            mime_type: Declared content type
            focus_instruction: Optional reviewer criterion to prioritize

        Returns:
            ReviewSnapshot: State after this submission settles; unchanged
            from whatever newer submission or reset superseded it
        """
        document_id = uuid4().hex
        self._latest_id = document_id
        self._clear()
        self._state = ReviewState.ANALYZING
        self._document = ActiveDocument(
            id=document_id,
            file_name=file_name,
            uploaded_at=datetime.now(UTC),
            mime_type=mime_type,
        )
        logger.info("Submittal received", document_id=document_id, file_name=file_name)

        try:
            async with self._analysis_lock:
                return await self._analyze(
                    document_id, payload, mime_type, focus_instruction
                )
        except asyncio.CancelledError:
            if self._is_latest(document_id):
                logger.warning("Submittal analysis cancelled", document_id=document_id)
                self._latest_id = None
                self._clear()
                self._state = ReviewState.EMPTY
            raise

    async def _analyze(
        self,
        document_id: str,
        payload: Any,
        mime_type: str | None,
        focus_instruction: str | None,
    ) -> ReviewSnapshot:
        if not self._is_latest(document_id):
            logger.info("Skipping superseded submittal", document_id=document_id)
            return self.snapshot()

        try:
            encoded = await encode_document(payload, mime_type)
            record = await self.provider.analyze(
                encoded.data, encoded.mime_type, focus_instruction
            )
        except ReviewError as e:
            return self._fail(document_id, e, e.message or ANALYSIS_ERROR_MESSAGE)
        except Exception as e:
            return self._fail(document_id, e, ANALYSIS_ERROR_MESSAGE)

        if not self._is_latest(document_id):
            logger.info("Discarding stale analysis result", document_id=document_id)
            return self.snapshot()

        self._document = self._document.model_copy(
            update={
                "status": DocumentStatus.COMPLETED,
                "record": record,
                "encoded_data": encoded.data,
                "mime_type": encoded.mime_type,
            }
        )
        self._state = ReviewState.READY
        logger.info(
            "Submittal analysis complete",
            document_id=document_id,
            recommended_status=record.recommended_status.value,
        )
        return self.snapshot()

    def _fail(
        self, document_id: str, error: Exception, message: str
    ) -> ReviewSnapshot:
        """Move to the error state unless a newer submission owns the slot."""
        if not self._is_latest(document_id):
            logger.info("Discarding stale analysis failure", document_id=document_id)
            return self.snapshot()

        logger.error(
            "Submittal analysis failed",
            document_id=document_id,
            error=str(error),
            error_type=type(error).__name__,
        )
        self._clear()
        self._state = ReviewState.ERROR
        self._error = message
        return self.snapshot()

    def _ready_document(self) -> ActiveDocument:
        if self._state != ReviewState.READY or self._document is None:
            raise DocumentNotReadyError("No completed review is active")
        return self._document

    def chat(self) -> ChatSession:
        """Get the chat for the ready document, creating it on first use."""
        document = self._ready_document()
        if document.encoded_data is None or document.mime_type is None:
            raise DocumentNotReadyError("Active document has no encoded data")
        if self._chat is None:
            self._chat = ChatSession(
                self.provider,
                document_id=document.id,
                encoded_document=document.encoded_data,
                mime_type=document.mime_type,
            )
        return self._chat

    def update_response(self, text: str) -> ActiveDocument:
        """Store the reviewer's edit of the draft response."""
        document = self._ready_document()
        self._document = document.model_copy(update={"response_text": text})
        return self._document

    def discard_response_edit(self) -> ActiveDocument:
        """Restore the model's draft response."""
        document = self._ready_document()
        self._document = document.model_copy(update={"response_text": None})
        return self._document
