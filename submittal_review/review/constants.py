"""Review statuses, document states, badge styles, and fixed UI text."""

from enum import Enum
from typing import NamedTuple


class ReviewStatus(str, Enum):
    """Review outcome recommended for a submittal."""

    APPROVED = "APPROVED"
    APPROVED_AS_NOTED = "APPROVED AS NOTED"
    REVISE_AND_RESUBMIT = "REVISE AND RESUBMIT"
    REJECT = "REJECT"


class DocumentStatus(str, Enum):
    """Lifecycle of the active document."""

    PROCESSING = "processing"
    COMPLETED = "completed"
    ERROR = "error"


class ReviewState(str, Enum):
    """States of the single active-document slot."""

    EMPTY = "empty"
    ANALYZING = "analyzing"
    READY = "ready"
    ERROR = "error"


class ChatRole(str, Enum):
    """Speaker of a chat turn."""

    USER = "user"
    ASSISTANT = "assistant"


class StatusStyle(NamedTuple):
    background: str
    text: str
    border: str


DEFAULT_STATUS_STYLE = StatusStyle("bg-gray-100", "text-gray-800", "border-gray-200")

STATUS_STYLES: dict[ReviewStatus, StatusStyle] = {
    ReviewStatus.APPROVED: StatusStyle(
        "bg-green-50", "text-green-700", "border-green-200"
    ),
    ReviewStatus.APPROVED_AS_NOTED: StatusStyle(
        "bg-blue-50", "text-blue-700", "border-blue-200"
    ),
    ReviewStatus.REVISE_AND_RESUBMIT: StatusStyle(
        "bg-red-50", "text-red-700", "border-red-200"
    ),
    ReviewStatus.REJECT: StatusStyle("bg-rose-50", "text-rose-700", "border-rose-200"),
}


def status_style(status: ReviewStatus | str) -> StatusStyle:
    """Look up the badge style for a review status."""
    try:
        return STATUS_STYLES[ReviewStatus(status)]
    except ValueError:
        return DEFAULT_STATUS_STYLE


PDF_MIME_TYPE = "application/pdf"
DEFAULT_MIME_TYPE = "application/octet-stream"

UNTITLED_SOURCE = "Source"

CHAT_GREETING = (
    "Hi! I've analyzed the full document (including technical data sheets). "
    "I can also search the web to verify product availability. Ask me about "
    'specific details or pages (e.g., "Did you read page 15?").'
)
CHAT_ERROR_MESSAGE = "Sorry, I encountered an error processing your request."

ANALYSIS_ERROR_MESSAGE = (
    "Failed to analyze the document. Please ensure it is a valid PDF and try again."
)

AI_DISCLAIMER = (
    "Disclaimer: This AI tool can make mistakes. Engineers must perform "
    "independent verification and use the AI-generated output only as a "
    "starting point. Do not rely solely on this application for official "
    "submittal reviews or engineering decisions."
)
