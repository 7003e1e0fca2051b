"""FastAPI router for submittal upload, review state, chat, and exports."""

from enum import Enum
from http import HTTPStatus
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile
from fastapi.responses import PlainTextResponse

from submittal_review.config import (
    AppSettings,
    ReviewerProfile,
    get_app_settings,
    get_reviewer_profile,
)
from submittal_review.review import exports
from submittal_review.review.constants import PDF_MIME_TYPE
from submittal_review.review.controller import ReviewController
from submittal_review.review.dependencies import get_review_controller
from submittal_review.review.exceptions import DocumentNotReadyError
from submittal_review.review.schemas import (
    ActiveDocument,
    ChatRequest,
    ChatTranscriptResponse,
    ChatTurn,
    EmailDraft,
    ResponseUpdateRequest,
    ReviewSnapshot,
)
from submittal_review.utils.logger import logger

router = APIRouter(prefix="/reviews", tags=["Reviews"])


class ExportFormat(str, Enum):
    CSV = "csv"
    TEXT = "text"
    EMAIL = "email"
    REPORT = "report"


def _ready_document(controller: ReviewController) -> ActiveDocument:
    document = controller.document
    if document is None or document.record is None:
        raise HTTPException(
            status_code=HTTPStatus.CONFLICT, detail="No completed review is active"
        )
    return document


@router.post("", response_model=ReviewSnapshot)
async def submit_submittal(
    file: Annotated[UploadFile, File(description="Submittal PDF")],
    controller: Annotated[ReviewController, Depends(get_review_controller)],
    settings: Annotated[AppSettings, Depends(get_app_settings)],
    focus_instruction: Annotated[str | None, Form()] = None,
) -> ReviewSnapshot:
    """
    Upload a submittal and run the structured review.

    Replaces any active document. Analysis failures are reported in the
    returned snapshot's ``error`` rather than as an HTTP error.
    """
    if file.content_type != PDF_MIME_TYPE:
        raise HTTPException(
            status_code=HTTPStatus.UNSUPPORTED_MEDIA_TYPE,
            detail="Please upload a PDF file.",
        )
    if file.size is not None and file.size > settings.max_upload_bytes:
        raise HTTPException(
            status_code=HTTPStatus.REQUEST_ENTITY_TOO_LARGE,
            detail="Submittal exceeds the maximum upload size",
        )

    logger.info(
        "Submittal upload",
        file_name=file.filename,
        has_focus=bool(focus_instruction),
    )
    return await controller.submit(
        file,
        file_name=file.filename or "submittal.pdf",
        mime_type=file.content_type,
        focus_instruction=focus_instruction,
    )


@router.get("/current", response_model=ReviewSnapshot)
async def get_current_review(
    controller: Annotated[ReviewController, Depends(get_review_controller)],
) -> ReviewSnapshot:
    """Get the state of the active review."""
    return controller.snapshot()


@router.delete("/current", response_model=ReviewSnapshot)
async def reset_review(
    controller: Annotated[ReviewController, Depends(get_review_controller)],
) -> ReviewSnapshot:
    """Discard the active document and its chat."""
    return controller.reset()


@router.put("/current/response", response_model=ActiveDocument)
async def update_response(
    request: ResponseUpdateRequest,
    controller: Annotated[ReviewController, Depends(get_review_controller)],
) -> ActiveDocument:
    """Save the reviewer's edit of the draft engineer response."""
    try:
        return controller.update_response(request.text)
    except DocumentNotReadyError as e:
        raise HTTPException(status_code=HTTPStatus.CONFLICT, detail=e.message)


@router.delete("/current/response", response_model=ActiveDocument)
async def discard_response_edit(
    controller: Annotated[ReviewController, Depends(get_review_controller)],
) -> ActiveDocument:
    """Restore the model's draft engineer response."""
    try:
        return controller.discard_response_edit()
    except DocumentNotReadyError as e:
        raise HTTPException(status_code=HTTPStatus.CONFLICT, detail=e.message)


@router.get("/current/chat", response_model=ChatTranscriptResponse)
async def get_chat_transcript(
    controller: Annotated[ReviewController, Depends(get_review_controller)],
) -> ChatTranscriptResponse:
    """Get the chat transcript for the active document."""
    try:
        chat = controller.chat()
    except DocumentNotReadyError as e:
        raise HTTPException(status_code=HTTPStatus.CONFLICT, detail=e.message)
    return ChatTranscriptResponse(turns=chat.turns)


@router.post("/current/chat", response_model=ChatTurn)
async def ask_question(
    request: ChatRequest,
    controller: Annotated[ReviewController, Depends(get_review_controller)],
) -> ChatTurn:
    """Ask a follow-up question about the active document."""
    try:
        chat = controller.chat()
    except DocumentNotReadyError as e:
        raise HTTPException(status_code=HTTPStatus.CONFLICT, detail=e.message)

    if chat.is_busy:
        raise HTTPException(
            status_code=HTTPStatus.CONFLICT,
            detail="Wait for the previous answer before asking again",
        )

    try:
        return await chat.ask(request.message)
    except ValueError as e:
        raise HTTPException(status_code=HTTPStatus.UNPROCESSABLE_ENTITY, detail=str(e))


@router.get("/current/export/{export_format}", response_model=None)
async def export_review(
    export_format: ExportFormat,
    controller: Annotated[ReviewController, Depends(get_review_controller)],
    profile: Annotated[ReviewerProfile, Depends(get_reviewer_profile)],
) -> PlainTextResponse | EmailDraft:
    """Export the active review as CSV, clipboard text, email draft, or report."""
    document = _ready_document(controller)
    record = document.record
    response_text = document.current_response

    if export_format == ExportFormat.CSV:
        return PlainTextResponse(
            exports.build_csv_log(record, response_text),
            media_type="text/csv",
            headers={
                "Content-Disposition": f'attachment; filename="{exports.csv_log_filename(record)}"'
            },
        )
    if export_format == ExportFormat.EMAIL:
        return exports.build_email_draft(record, response_text, profile)
    if export_format == ExportFormat.REPORT:
        return PlainTextResponse(
            exports.build_print_report(
                record, document.file_name, response_text, profile
            )
        )
    return PlainTextResponse(exports.build_clipboard_text(record, response_text))
