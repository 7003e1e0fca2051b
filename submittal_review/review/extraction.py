"""Schema contract for structured submittal extraction."""

from typing import Any

from pydantic import ValidationError

from submittal_review.review.exceptions import EmptyResponseError, SchemaParseError
from submittal_review.review.schemas import SubmittalRecord
from submittal_review.utils.logger import logger


def submittal_response_schema() -> dict[str, Any]:
    """JSON schema the provider must conform to, using wire field names."""
    return SubmittalRecord.model_json_schema(by_alias=True)


def parse_submittal_record(text: str | None) -> SubmittalRecord:
    """Validate provider output into a SubmittalRecord.

    Extraction is all-or-nothing: any deviation from the schema fails the
    whole record.

    Raises:
        EmptyResponseError: If no text was returned
        SchemaParseError: If the text is not valid JSON matching the schema
    """
    if not text or not text.strip():
        raise EmptyResponseError("No response from model provider")

    try:
        return SubmittalRecord.model_validate_json(text, strict=True)
    except ValidationError as e:
        logger.error(
            "Failed to parse structured response",
            error_count=e.error_count(),
            text_preview=text[:500],
        )
        raise SchemaParseError(f"Failed to parse structured response: {e}")
