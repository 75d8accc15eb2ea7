from dataclasses import dataclass, field

DEFAULT_FILENAME = "document.pdf"
DEFAULT_CONTENT_TYPE = "application/pdf"


@dataclass(frozen=True)
class DocumentBytes:
    """An uploaded document, alive only for one extraction call."""

    content: bytes
    filename: str = DEFAULT_FILENAME
    content_type: str = DEFAULT_CONTENT_TYPE

    @classmethod
    def from_upload(
        cls,
        content: bytes,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> "DocumentBytes":
        """Build from raw upload fields, falling back to PDF defaults for blanks."""
        return cls(
            content=content,
            filename=(filename or "").strip() or DEFAULT_FILENAME,
            content_type=(content_type or "").strip() or DEFAULT_CONTENT_TYPE,
        )


@dataclass(frozen=True)
class GroundedQuestion:
    """A user question, optionally grounded in document text."""

    question: str
    context: str | None = None

    @property
    def is_grounded(self) -> bool:
        return bool(self.context and self.context.strip())


@dataclass(frozen=True)
class AnswerResult:
    """Normalized reply of the answering service."""

    answer: str
    sources: list[str] = field(default_factory=list)
