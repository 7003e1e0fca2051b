"""Pydantic schemas for submittal reviews, the active document, and chat."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from submittal_review.ai.base import GroundingCitation
from submittal_review.review.constants import (
    ChatRole,
    DocumentStatus,
    ReviewState,
    ReviewStatus,
)

# Wire names follow the camelCase contract given to the model provider
_RECORD_CONFIG = ConfigDict(
    alias_generator=to_camel,
    populate_by_name=True,
    frozen=True,
    extra="ignore",
)


class CompletenessCheck(BaseModel):
    """Whether the submittal package includes everything it should."""

    model_config = _RECORD_CONFIG

    is_complete: bool
    missing_files: list[str]
    missing_details: list[str]


class ComplianceCheck(BaseModel):
    """Whether the submitted product conforms to the specification."""

    model_config = _RECORD_CONFIG

    is_compliant: bool
    conflicts: list[str] = Field(
        description="Any conflicts with typical specs, citing page numbers"
    )
    applicable_clauses: list[str] = Field(
        description="Spec clauses referenced or applicable"
    )


class SubmittalRecord(BaseModel):
    """Structured result of a submittal extraction.

    Immutable once produced; a new analysis replaces it wholesale.
    """

    model_config = _RECORD_CONFIG

    submittal_number: str = Field(description="The submittal ID or number")
    contract_number: str = Field(
        description="Contract number if found, else 'N/A'"
    )
    spec_section: str = Field(description="Specification section number and title")
    description: str = Field(
        description="Brief description of the material with page citation"
    )
    manufacturer: str = Field(description="Manufacturer name and model number")
    required_attachments: str = Field(
        description="List of attachments mentioned or required"
    )
    completeness: CompletenessCheck
    compliance: ComplianceCheck
    issues: list[str] = Field(
        description="List of identified issues with Page Number citations"
    )
    recommended_status: ReviewStatus
    draft_response: str = Field(description="Professional engineer response text")
    next_steps: str = Field(description="Actionable steps for the contractor")


class ActiveDocument(BaseModel):
    """The one submittal currently under review."""

    id: str
    file_name: str
    uploaded_at: datetime
    status: DocumentStatus = DocumentStatus.PROCESSING
    record: SubmittalRecord | None = None
    encoded_data: str | None = Field(default=None, exclude=True, repr=False)
    mime_type: str | None = None
    response_text: str | None = Field(
        default=None,
        description="Reviewer's edit of the draft response; never sent to the model",
    )

    @property
    def current_response(self) -> str:
        """The engineer response as it should be exported."""
        if self.response_text is not None:
            return self.response_text
        return self.record.draft_response if self.record else ""


class ChatTurn(BaseModel):
    """A single message in a document chat transcript."""

    role: ChatRole
    text: str
    citations: list[GroundingCitation] = Field(default_factory=list)


class ReviewSnapshot(BaseModel):
    """Current state of the review slot as exposed to clients."""

    state: ReviewState
    document: ActiveDocument | None = None
    error: str | None = None
    status_style: dict[str, str] | None = Field(
        default=None, description="Badge classes for the recommended status"
    )


class ResponseUpdateRequest(BaseModel):
    """Reviewer edit of the draft engineer response."""

    text: str


class ChatRequest(BaseModel):
    """A follow-up question about the active document."""

    message: str = Field(min_length=1)


class ChatTranscriptResponse(BaseModel):
    turns: list[ChatTurn]


class EmailDraft(BaseModel):
    """Prefilled email for sending a review to the contractor."""

    subject: str
    body: str
    mailto_url: str
