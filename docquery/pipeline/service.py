import httpx

from docquery.answering.factory import GroundedQueryFactory
from docquery.answering.grounded_query import GroundedQueryClient
from docquery.config.settings import Settings
from docquery.pdf.base import BaseDocumentExtractor
from docquery.pdf.factory import DocumentExtractorFactory
from docquery.pipeline.models import AnswerResult, DocumentBytes


class QueryService:
    """Entry point for the presentation layer.

    Extraction and querying are independent: the caller holds the extracted
    text and passes it back (possibly edited) as context when asking.
    """

    def __init__(
        self,
        extractor: BaseDocumentExtractor,
        query_client: GroundedQueryClient,
    ) -> None:
        self._extractor = extractor
        self._query_client = query_client

    def extract(
        self,
        content: bytes,
        filename: str | None = None,
        content_type: str | None = None,
        request_id: str | None = None,
    ) -> str:
        """Convert an uploaded file into normalized plain text."""
        document = DocumentBytes.from_upload(content, filename, content_type)
        return self._extractor.extract(document, request_id=request_id)

    def ask(
        self,
        question: str,
        context: str | None = None,
        model: str | None = None,
        request_id: str | None = None,
    ) -> AnswerResult:
        """Answer a question, grounded in ``context`` when it is non-blank."""
        return self._query_client.ask(
            question,
            context=context,
            model=model,
            request_id=request_id,
        )

    def ask_with_document(self, context: str, question: str) -> AnswerResult:
        """Answer a question about caller-held document text with the default model.

        The text is sent as given, so edits the caller made after
        extraction are what the model sees.
        """
        return self._query_client.ask(question, context=context)

    def close(self) -> None:
        self._extractor.close()
        self._query_client.close()


def build_service(
    settings: Settings,
    http_client: httpx.Client | None = None,
) -> QueryService:
    """Build a QueryService with the configured adapters."""
    return QueryService(
        extractor=DocumentExtractorFactory.create(settings, http_client=http_client),
        query_client=GroundedQueryFactory.create(settings, http_client=http_client),
    )
