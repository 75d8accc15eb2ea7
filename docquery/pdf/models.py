from dataclasses import dataclass


@dataclass(frozen=True)
class UploadTarget:
    """Presigned upload handle negotiated for a single extraction."""

    presigned_url: str
    url: str


@dataclass(frozen=True)
class WellFormed:
    """Conversion response with a success flag and a text body."""

    text: str


@dataclass(frozen=True)
class BodyOnly:
    """Conversion response whose success flag is missing or false but body has text."""

    text: str


@dataclass(frozen=True)
class Malformed:
    """Conversion response carrying no usable text."""

    details: str


ExtractionPayload = WellFormed | BodyOnly | Malformed
