from typing import ClassVar


class PipelineError(Exception):
    """Base exception for all document query pipeline errors."""

    kind: ClassVar[str] = "pipeline"

    def to_payload(self) -> dict[str, str]:
        """Error envelope for the presentation layer."""
        return {"error": self.kind, "message": str(self)}


class ConfigurationError(PipelineError):
    """Raised when a required service credential is not configured."""

    kind: ClassVar[str] = "configuration"


class InvalidRequestError(PipelineError):
    """Raised when the caller supplied empty or malformed input."""

    kind: ClassVar[str] = "invalid_request"


class UpstreamError(PipelineError):
    """Raised when a remote service call fails."""

    kind: ClassVar[str] = "upstream"

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        body_preview: str = "",
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body_preview = body_preview


class UpstreamNetworkError(UpstreamError):
    """Raised when a remote call fails at the transport level (DNS, reset, timeout)."""


class UpstreamProtocolError(UpstreamError):
    """Raised when the conversion service returns non-2xx or an unusable payload."""


class UpstreamTransferError(UpstreamError):
    """Raised when uploading bytes to the presigned URL fails."""


class UpstreamAPIError(UpstreamError):
    """Raised when the answering service rejects a request."""


class ExtractionFailedError(UpstreamError):
    """Raised when the conversion service reports no usable text."""
