"""Document encoding for inline provider attachments.

Turns an uploaded file into base64 text plus its media type, the pair every
provider call carries.
"""

import asyncio
import base64
import binascii
import inspect
import mimetypes
import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from submittal_review.review.constants import DEFAULT_MIME_TYPE
from submittal_review.review.exceptions import EncodingError
from submittal_review.utils.logger import logger

DATA_URL_PREFIX = "data:"


class EncodedDocument(BaseModel):
    """Transport-safe document payload."""

    model_config = {"frozen": True}

    data: str
    mime_type: str


def split_data_url(value: str) -> tuple[str, str | None]:
    """Strip a ``data:<type>;base64,`` prefix.

    Returns:
        tuple: (base64 payload, media type declared in the prefix or None)
    """
    if not value.startswith(DATA_URL_PREFIX) or "," not in value:
        return value, None
    header, payload = value.split(",", 1)
    media_type = header[len(DATA_URL_PREFIX) :].split(";", 1)[0] or None
    return payload, media_type


def encode_bytes(raw: bytes, mime_type: str | None = None) -> EncodedDocument:
    """Encode raw bytes. Zero-length payloads are rejected."""
    if not raw:
        raise EncodingError("Document is empty")
    return EncodedDocument(
        data=base64.b64encode(raw).decode("ascii"),
        mime_type=mime_type or DEFAULT_MIME_TYPE,
    )


def decode_document(data: str) -> bytes:
    """Decode a base64 payload (with or without a data-URL prefix)."""
    payload, _ = split_data_url(data)
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise EncodingError(f"Invalid base64 document data: {e}")


async def _read_payload(payload: Any) -> bytes:
    if isinstance(payload, (bytes, bytearray, memoryview)):
        return bytes(payload)

    if isinstance(payload, (str, os.PathLike)):
        return await asyncio.to_thread(Path(payload).read_bytes)

    read = getattr(payload, "read", None)
    if read is None:
        raise EncodingError(f"Unsupported document payload: {type(payload).__name__}")

    content = read()
    if inspect.isawaitable(content):
        content = await content
    if isinstance(content, str):
        raise EncodingError("Document stream must be opened in binary mode")
    return bytes(content)


async def encode_document(payload: Any, mime_type: str | None = None) -> EncodedDocument:
    """Encode an uploaded document for inline transport.

    Args:
        payload: Raw bytes, a filesystem path, a ``data:`` URL string, or a
            binary file-like object with a sync or async ``read()``
        mime_type: Declared content type; inferred when omitted

    Returns:
        EncodedDocument: Base64 data without transport prefix, and media type

    Raises:
        EncodingError: If the payload cannot be read or is empty
    """
    if isinstance(payload, str) and payload.startswith(DATA_URL_PREFIX):
        data, declared = split_data_url(payload)
        raw = decode_document(data)
        return encode_bytes(raw, mime_type or declared)

    if mime_type is None and isinstance(payload, (str, os.PathLike)):
        mime_type, _ = mimetypes.guess_type(str(payload))

    try:
        raw = await _read_payload(payload)
    except EncodingError:
        raise
    except (OSError, ValueError, TypeError) as e:
        logger.error("Failed to read document", error=str(e))
        raise EncodingError(f"Failed to read document: {e}")

    encoded = encode_bytes(raw, mime_type)
    logger.debug(
        "Encoded document", size_bytes=len(raw), mime_type=encoded.mime_type
    )
    return encoded
