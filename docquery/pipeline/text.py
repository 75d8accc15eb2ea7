"""Text helpers shared by both remote clients."""

import re
import uuid

PREVIEW_LIMIT = 500

_WHITESPACE_RUN = re.compile(r"\s+")


def normalize_text(text: str) -> str:
    """Collapse whitespace runs to one space and trim the ends.

    Newlines are whitespace too, so the result is a single line and
    never contains blank-line sequences.
    """
    return _WHITESPACE_RUN.sub(" ", text).strip()


def body_preview(body: str, limit: int = PREVIEW_LIMIT) -> str:
    """Bounded, single-line preview of a raw response body for diagnostics."""
    return normalize_text(body[:limit])


def new_request_id() -> str:
    return uuid.uuid4().hex[:12]
