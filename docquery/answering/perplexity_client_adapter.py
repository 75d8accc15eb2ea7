from typing import ClassVar

import httpx
import openai
from openai.types.chat import ChatCompletion

from docquery.answering.client_base import BaseAnswerClient
from docquery.answering.models import ChatMessage, ChatReply, RequestPolicy
from docquery.logging.logger import Log
from docquery.pipeline.exceptions import (
    ConfigurationError,
    UpstreamAPIError,
    UpstreamNetworkError,
)
from docquery.pipeline.text import body_preview


class PerplexityClientAdapter(BaseAnswerClient):
    """Answering client for Perplexity's OpenAI-compatible chat API."""

    DEFAULT_BASE_URL: ClassVar[str] = "https://api.perplexity.ai"

    def __init__(
        self,
        *,
        api_key: str,
        timeout_seconds: int = 60,
        base_url: str | None = None,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._api_key = api_key
        self._owns_client = http_client is None
        self._client = openai.OpenAI(
            api_key=api_key,
            timeout=timeout_seconds,
            base_url=base_url or self.DEFAULT_BASE_URL,
            max_retries=0,
            http_client=http_client,
        )

    def create_chat_completion(
        self,
        *,
        model: str,
        messages: list[ChatMessage],
        policy: RequestPolicy,
        request_id: str,
    ) -> ChatReply:
        if not self._api_key:
            raise ConfigurationError(
                "Perplexity API key is not configured. "
                "Set the PERPLEXITY_API_KEY environment variable."
            )
        try:
            response = self._client.chat.completions.create(
                model=model,
                messages=messages,  # type: ignore[arg-type]
                max_tokens=policy.max_tokens,
                temperature=policy.temperature,
                top_p=policy.top_p,
                extra_body={
                    "return_citations": policy.return_citations,
                    "search_recency_filter": policy.search_recency_filter,
                },
            )
        except (openai.APIConnectionError, httpx.TransportError) as exc:
            Log.error(
                f"query: network error: {exc}",
                request_id=request_id,
                step="query",
            )
            raise UpstreamNetworkError(f"Perplexity API network error: {exc}") from exc
        except openai.APIStatusError as exc:
            detail = _upstream_message(exc.body) or exc.response.reason_phrase
            preview = body_preview(exc.response.text)
            Log.error(
                f"query: failed with {exc.status_code}: {preview}",
                request_id=request_id,
                step="query",
                status_code=exc.status_code,
            )
            raise UpstreamAPIError(
                f"Perplexity API error: {exc.status_code} - {detail}",
                status_code=exc.status_code,
                body_preview=preview,
            ) from exc
        except openai.APIError as exc:
            Log.error(
                f"query: API error: {exc}",
                request_id=request_id,
                step="query",
            )
            raise UpstreamAPIError(f"Perplexity API error: {exc}") from exc
        except ValueError as exc:
            Log.error(
                f"query: malformed JSON reply: {exc}",
                request_id=request_id,
                step="query",
            )
            raise UpstreamAPIError(f"Perplexity API returned malformed JSON: {exc}") from exc

        # Non-JSON bodies come back from the SDK as plain text.
        if not isinstance(response, ChatCompletion):
            preview = body_preview(str(response))
            Log.error(
                f"query: unexpected reply: {preview}",
                request_id=request_id,
                step="query",
            )
            raise UpstreamAPIError(
                f"Perplexity API returned an unexpected response: {preview}",
                body_preview=preview,
            )
        return _reply_from_completion(response)

    def close(self) -> None:
        if self._owns_client:
            self._client.close()


def _reply_from_completion(response: ChatCompletion) -> ChatReply:
    # The SDK builds completions without validation, so fields may be absent.
    content = None
    choices = getattr(response, "choices", None) or []
    if choices:
        message = getattr(choices[0], "message", None)
        content = getattr(message, "content", None)
    citations = getattr(response, "citations", None)
    return ChatReply(
        content=content,
        citations=list(citations) if isinstance(citations, list) else [],
    )


def _upstream_message(body: object) -> str:
    if not isinstance(body, dict):
        return ""
    error = body.get("error")
    if isinstance(error, dict):
        body = error
    elif isinstance(error, str) and error.strip():
        return error.strip()
    message = body.get("message")
    return message.strip() if isinstance(message, str) else ""
