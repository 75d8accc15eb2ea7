"""Decodes raw conversion-service JSON into tagged payload variants."""

import json
from typing import Any

from docquery.pdf.models import (
    BodyOnly,
    ExtractionPayload,
    Malformed,
    UploadTarget,
    WellFormed,
)

_DUMP_LIMIT = 300


def decode_upload_target(data: Any) -> UploadTarget | None:
    """Return the presigned/retrieval URL pair, or None if either is missing."""
    if not isinstance(data, dict):
        return None
    presigned_url = data.get("presignedUrl")
    url = data.get("url")
    if not presigned_url or not url:
        return None
    return UploadTarget(presigned_url=str(presigned_url), url=str(url))


def decode_extraction_payload(data: Any) -> ExtractionPayload:
    """Classify a conversion response.

    A non-empty string ``body`` is accepted even when ``success`` is absent or
    false. The upstream service sets the flag inconsistently.
    """
    if not isinstance(data, dict):
        return Malformed(details=_dump(data))
    body = data.get("body")
    if isinstance(body, str) and data.get("success"):
        return WellFormed(text=body)
    if isinstance(body, str) and body.strip():
        return BodyOnly(text=body)
    return Malformed(details=error_message(data) or _dump(data))


def error_message(data: Any) -> str:
    """First non-empty ``message``/``error`` string in an upstream JSON object."""
    if not isinstance(data, dict):
        return ""
    for key in ("message", "error"):
        value = data.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return ""


def _dump(data: Any) -> str:
    try:
        dumped = json.dumps(data)
    except (TypeError, ValueError):
        dumped = repr(data)
    return dumped[:_DUMP_LIMIT]
