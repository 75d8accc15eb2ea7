from typing import ClassVar

import httpx

from docquery.config.settings import Settings
from docquery.pdf.base import BaseDocumentExtractor
from docquery.pdf.pdfco_adapter import PdfCoAdapter


class DocumentExtractorFactory:
    """Creates the configured document extractor."""

    ADAPTERS: ClassVar[dict[str, type[PdfCoAdapter]]] = {
        "pdfco": PdfCoAdapter,
    }

    @classmethod
    def create(
        cls,
        settings: Settings,
        http_client: httpx.Client | None = None,
    ) -> BaseDocumentExtractor:
        engine = settings.pdf_engine.lower()
        adapter_cls = cls.ADAPTERS.get(engine)
        if adapter_cls is None:
            raise ValueError(
                f"Unknown PDF engine '{engine}'. Choose from: {list(cls.ADAPTERS)}"
            )
        return adapter_cls(
            api_key=settings.pdfco_api_key,
            timeout_seconds=settings.pdfco_timeout_seconds,
            base_url=settings.pdfco_base_url,
            http_client=http_client,
        )
