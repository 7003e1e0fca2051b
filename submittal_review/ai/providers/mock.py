"""Deterministic review provider for local development and tests."""

import asyncio
from uuid import uuid4

from submittal_review.ai.base import (
    ChatReply,
    GroundingCitation,
    ReviewProvider,
    SessionHandle,
)
from submittal_review.review.constants import ReviewStatus
from submittal_review.review.exceptions import SessionNotInitializedError
from submittal_review.review.schemas import (
    ComplianceCheck,
    CompletenessCheck,
    SubmittalRecord,
)
from submittal_review.utils.logger import logger

MOCK_RECORD = SubmittalRecord(
    submittal_number="23 81 26-001",
    contract_number="N/A",
    spec_section="23 81 26 - Split-System Air-Conditioners",
    description="Ductless split heat pump system [Page 2]",
    manufacturer="Mitsubishi Electric PUZ-A36NKA7",
    required_attachments="Product data sheets, AHRI certificate, wiring diagrams",
    completeness=CompletenessCheck(
        is_complete=False,
        missing_files=["AHRI certificate"],
        missing_details=["Seismic anchorage details"],
    ),
    compliance=ComplianceCheck(
        is_compliant=True,
        conflicts=[],
        applicable_clauses=["2.1.A Manufacturers", "2.4.B Outdoor Units"],
    ),
    issues=["[Page 4] Refrigerant line set length not stated"],
    recommended_status=ReviewStatus.APPROVED_AS_NOTED,
    draft_response=(
        "The submitted equipment is acceptable as noted. Provide the AHRI "
        "certificate and confirm line set lengths prior to installation."
    ),
    next_steps="Submit AHRI certificate and line set layout for record.",
)


class MockReviewProvider(ReviewProvider):
    """Review provider returning canned data.

    Answers echo the question so transcript ordering is observable.
    """

    def __init__(
        self,
        record: SubmittalRecord = MOCK_RECORD,
        latency: float = 0.0,
    ):
        self.record = record
        self.latency = latency
        self.analyze_calls: list[tuple[str, str, str | None]] = []
        self.sessions_opened = 0

    async def analyze(
        self,
        encoded_document: str,
        mime_type: str,
        focus_instruction: str | None = None,
    ) -> SubmittalRecord:
        self.analyze_calls.append((encoded_document, mime_type, focus_instruction))
        if self.latency:
            await asyncio.sleep(self.latency)
        logger.info("Returning mock submittal review")
        return self.record

    async def open_session(
        self, encoded_document: str, mime_type: str
    ) -> SessionHandle:
        self.sessions_opened += 1
        return SessionHandle(session_id=uuid4().hex, chat=[])

    async def send(self, session: SessionHandle | None, text: str) -> ChatReply:
        if session is None or session.chat is None:
            raise SessionNotInitializedError("Chat session has not been opened")
        if self.latency:
            await asyncio.sleep(self.latency)
        session.chat.append(text)
        return ChatReply(
            text=f"Answer {len(session.chat)}: {text}",
            citations=[
                GroundingCitation(uri="https://www.astm.org/", title="ASTM International")
            ],
        )
