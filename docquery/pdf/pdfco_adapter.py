from typing import Any, ClassVar

import httpx

from docquery.logging.logger import Log
from docquery.pdf.base import BaseDocumentExtractor
from docquery.pdf.models import BodyOnly, Malformed, UploadTarget
from docquery.pdf.payload import decode_extraction_payload, decode_upload_target, error_message
from docquery.pipeline.exceptions import (
    ConfigurationError,
    ExtractionFailedError,
    InvalidRequestError,
    UpstreamNetworkError,
    UpstreamProtocolError,
    UpstreamTransferError,
)
from docquery.pipeline.models import DocumentBytes
from docquery.pipeline.text import body_preview, new_request_id, normalize_text


class PdfCoAdapter(BaseDocumentExtractor):
    """Extracts text from a PDF through the PDF.co presigned upload workflow.

    Three sequential calls per document: negotiate a presigned upload URL,
    PUT the bytes there, then ask the converter for inline text. The URL pair
    lives only for the duration of one ``extract`` call.
    """

    DEFAULT_BASE_URL: ClassVar[str] = "https://api.pdf.co/v1"
    PRESIGN_PATH: ClassVar[str] = "/file/upload/get-presigned-url"
    CONVERT_PATH: ClassVar[str] = "/pdf/convert/to/text"
    USER_AGENT: ClassVar[str] = "docquery/0.1"

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int = 60,
        base_url: str | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._timeout = timeout_seconds
        self._base_url = (base_url or self.DEFAULT_BASE_URL).rstrip("/")
        self._owns_client = http_client is None
        self._http = http_client if http_client is not None else httpx.Client()

    def extract(self, document: DocumentBytes, request_id: str | None = None) -> str:
        request_id = request_id or new_request_id()
        if not document.content:
            raise InvalidRequestError("Uploaded document is empty")
        if not self._api_key:
            raise ConfigurationError(
                "PDF.co API key is not configured. Set the PDFCO_API_KEY environment variable."
            )
        Log.info(
            f"Extracting text from {document.filename} "
            f"({len(document.content)} bytes, {document.content_type})",
            request_id=request_id,
        )

        target = self._negotiate_upload_target(document, request_id)
        self._upload(target, document, request_id)
        text = self._convert_to_text(target, request_id)

        Log.info(
            f"Extracted {len(text)} chars from {document.filename}",
            request_id=request_id,
            chars=len(text),
        )
        return text

    def close(self) -> None:
        if self._owns_client:
            self._http.close()

    def _negotiate_upload_target(self, document: DocumentBytes, request_id: str) -> UploadTarget:
        response = self._send(
            "GET",
            f"{self._base_url}{self.PRESIGN_PATH}",
            step="negotiate",
            request_id=request_id,
            params={"name": document.filename, "contenttype": document.content_type},
            headers=self._service_headers(),
        )
        status = f"{response.status_code} {response.reason_phrase}"
        preview = body_preview(response.text)

        if not response.is_success:
            data = _json_or_none(response)
            detail = error_message(data) or preview
            self._log_failure(request_id, "negotiate", response, preview)
            raise UpstreamProtocolError(
                f"PDF.co presigned URL error: {status}: {detail} body={preview}",
                status_code=response.status_code,
                body_preview=preview,
            )

        data = _json_or_none(response)
        if data is None:
            self._log_failure(request_id, "negotiate", response, preview)
            raise UpstreamProtocolError(
                f"PDF.co presigned URL returned non-JSON response: {status} body={preview}",
                status_code=response.status_code,
                body_preview=preview,
            )

        target = decode_upload_target(data)
        if target is None:
            detail = error_message(data) or "missing presignedUrl/url"
            self._log_failure(request_id, "negotiate", response, preview)
            raise UpstreamProtocolError(
                f"Failed to get presigned URL: {status}: {detail} body={preview}",
                status_code=response.status_code,
                body_preview=preview,
            )

        Log.debug(
            "negotiate: upload target ready",
            request_id=request_id,
            step="negotiate",
        )
        return target

    def _upload(self, target: UploadTarget, document: DocumentBytes, request_id: str) -> None:
        response = self._send(
            "PUT",
            target.presigned_url,
            step="upload",
            request_id=request_id,
            content=document.content,
            headers={"Content-Type": document.content_type},
        )
        if not response.is_success:
            preview = body_preview(response.text)
            self._log_failure(request_id, "upload", response, preview)
            raise UpstreamTransferError(
                "File upload to presigned URL failed: "
                f"{response.status_code} {response.reason_phrase}: {preview}",
                status_code=response.status_code,
                body_preview=preview,
            )
        Log.debug(
            f"upload: {len(document.content)} bytes stored",
            request_id=request_id,
            step="upload",
        )

    def _convert_to_text(self, target: UploadTarget, request_id: str) -> str:
        response = self._send(
            "POST",
            f"{self._base_url}{self.CONVERT_PATH}",
            step="extract",
            request_id=request_id,
            json={"url": target.url, "inline": True},
            headers=self._service_headers(),
        )
        status = f"{response.status_code} {response.reason_phrase}"
        preview = body_preview(response.text)
        data = _json_or_none(response)

        if not response.is_success:
            detail = error_message(data) or preview
            self._log_failure(request_id, "extract", response, preview)
            raise UpstreamProtocolError(
                f"PDF.co extraction error: {status}: {detail} body={preview}",
                status_code=response.status_code,
                body_preview=preview,
            )
        if data is None:
            self._log_failure(request_id, "extract", response, preview)
            raise UpstreamProtocolError(
                f"PDF.co extraction returned non-JSON response: {status} body={preview}",
                status_code=response.status_code,
                body_preview=preview,
            )

        payload = decode_extraction_payload(data)
        if isinstance(payload, Malformed):
            self._log_failure(request_id, "extract", response, preview)
            raise ExtractionFailedError(
                f"Text extraction failed: {payload.details}",
                status_code=response.status_code,
                body_preview=preview,
            )
        if isinstance(payload, BodyOnly):
            Log.warning(
                "extract: success flag missing or false, accepting non-empty body",
                request_id=request_id,
                step="extract",
            )
        return normalize_text(payload.text)

    def _send(
        self,
        method: str,
        url: str,
        *,
        step: str,
        request_id: str,
        **kwargs: Any,
    ) -> httpx.Response:
        Log.debug(f"{step}: {method} request", request_id=request_id, step=step)
        try:
            return self._http.request(method, url, timeout=self._timeout, **kwargs)
        except httpx.TransportError as exc:
            Log.error(
                f"{step}: network error: {exc}",
                request_id=request_id,
                step=step,
            )
            raise UpstreamNetworkError(f"PDF.co {step} network error: {exc}") from exc

    def _service_headers(self) -> dict[str, str]:
        return {
            "x-api-key": self._api_key,
            "Accept": "application/json",
            "User-Agent": self.USER_AGENT,
        }

    @staticmethod
    def _log_failure(request_id: str, step: str, response: httpx.Response, preview: str) -> None:
        Log.error(
            f"{step}: failed with {response.status_code} "
            f"{response.reason_phrase}: {preview}",
            request_id=request_id,
            step=step,
            status_code=response.status_code,
            body_preview=preview,
        )


def _json_or_none(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return None
