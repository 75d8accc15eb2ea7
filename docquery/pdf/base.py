from abc import ABC, abstractmethod

from docquery.pipeline.models import DocumentBytes


class BaseDocumentExtractor(ABC):
    """Contract for all document text extraction adapters."""

    @abstractmethod
    def extract(self, document: DocumentBytes, request_id: str | None = None) -> str:
        """Extract plain text from an uploaded document.

        Args:
            document: Raw bytes with filename and declared content type.
            request_id: Correlation id for log events; generated when omitted.

        Returns:
            Extracted text as a single normalized string.

        Raises:
            PipelineError: if extraction fails for any reason.
        """

    def close(self) -> None:
        """Release any held connections."""
