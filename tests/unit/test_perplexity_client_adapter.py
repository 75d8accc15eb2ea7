import json
from unittest.mock import MagicMock, patch

import httpx
import pytest

from docquery.answering.models import ChatReply, RequestPolicy
from docquery.answering.perplexity_client_adapter import PerplexityClientAdapter
from docquery.pipeline.exceptions import (
    ConfigurationError,
    UpstreamAPIError,
    UpstreamNetworkError,
)

MESSAGES = [{"role": "user", "content": "What is new in PDF 2.0?"}]


def _completion(content: str | None = "An answer.", **extra: object) -> dict[str, object]:
    body: dict[str, object] = {
        "id": "cmpl-1",
        "object": "chat.completion",
        "created": 1700000000,
        "model": "sonar-pro",
        "choices": [
            {
                "index": 0,
                "finish_reason": "stop",
                "message": {"role": "assistant", "content": content},
            }
        ],
    }
    body.update(extra)
    return body


def _make_adapter(
    responder: httpx.Response | Exception,
    api_key: str = "pplx-key",
) -> tuple[PerplexityClientAdapter, list[httpx.Request]]:
    requests: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        if isinstance(responder, Exception):
            raise responder
        return responder

    adapter = PerplexityClientAdapter(
        api_key=api_key,
        timeout_seconds=5,
        http_client=httpx.Client(transport=httpx.MockTransport(handler)),
    )
    return adapter, requests


def _call(adapter: PerplexityClientAdapter) -> ChatReply:
    return adapter.create_chat_completion(
        model="sonar-pro",
        messages=MESSAGES,
        policy=RequestPolicy(),
        request_id="req-1",
    )


class TestRequestWireFormat:
    def test_posts_chat_completion_with_policy(self) -> None:
        adapter, requests = _make_adapter(httpx.Response(200, json=_completion()))
        _call(adapter)
        assert len(requests) == 1
        request = requests[0]
        assert request.method == "POST"
        assert str(request.url) == "https://api.perplexity.ai/chat/completions"
        assert request.headers["Authorization"] == "Bearer pplx-key"
        body = json.loads(request.content)
        assert body == {
            "model": "sonar-pro",
            "messages": MESSAGES,
            "max_tokens": 1000,
            "temperature": 0.2,
            "top_p": 0.9,
            "return_citations": True,
            "search_recency_filter": "month",
        }


class TestReplyParsing:
    def test_returns_content_and_citations(self) -> None:
        adapter, _ = _make_adapter(
            httpx.Response(
                200,
                json=_completion(citations=["https://pdfa.org/pdf-2-0", "https://iso.org"]),
            )
        )
        reply = _call(adapter)
        assert reply.content == "An answer."
        assert reply.citations == ["https://pdfa.org/pdf-2-0", "https://iso.org"]

    def test_citations_default_empty(self) -> None:
        adapter, _ = _make_adapter(httpx.Response(200, json=_completion()))
        assert _call(adapter).citations == []

    def test_null_content(self) -> None:
        adapter, _ = _make_adapter(httpx.Response(200, json=_completion(content=None)))
        assert _call(adapter).content is None

    def test_no_choices(self) -> None:
        body = _completion()
        body["choices"] = []
        adapter, _ = _make_adapter(httpx.Response(200, json=body))
        assert _call(adapter).content is None


class TestFailures:
    def test_missing_credential_makes_no_network_call(self) -> None:
        adapter, requests = _make_adapter(httpx.Response(200, json=_completion()), api_key="")
        with pytest.raises(ConfigurationError, match="PERPLEXITY_API_KEY"):
            _call(adapter)
        assert requests == []

    def test_status_error_includes_status_and_upstream_message(self) -> None:
        adapter, requests = _make_adapter(
            httpx.Response(
                401,
                json={"error": {"message": "Invalid API key provided", "type": "invalid_api_key"}},
            )
        )
        with pytest.raises(UpstreamAPIError) as exc_info:
            _call(adapter)
        error = exc_info.value
        assert error.status_code == 401
        assert "401" in str(error)
        assert "Invalid API key provided" in str(error)
        assert len(requests) == 1

    def test_server_error_is_not_retried(self) -> None:
        adapter, requests = _make_adapter(httpx.Response(503, text="upstream unavailable"))
        with pytest.raises(UpstreamAPIError, match="503"):
            _call(adapter)
        assert len(requests) == 1

    def test_connection_failure_is_network_error(self) -> None:
        adapter, _ = _make_adapter(httpx.ConnectError("name resolution failed"))
        with pytest.raises(UpstreamNetworkError, match="network error"):
            _call(adapter)

    def test_timeout_is_network_error(self) -> None:
        adapter, _ = _make_adapter(httpx.ReadTimeout("timed out"))
        with pytest.raises(UpstreamNetworkError):
            _call(adapter)

    def test_non_json_success_reply_is_api_error(self) -> None:
        adapter, _ = _make_adapter(
            httpx.Response(
                200,
                text="<html>gateway</html>",
                headers={"content-type": "text/html"},
            )
        )
        with pytest.raises(UpstreamAPIError) as exc_info:
            _call(adapter)
        assert "gateway" in exc_info.value.body_preview

    def test_unparseable_json_reply_is_api_error(self) -> None:
        adapter, _ = _make_adapter(
            httpx.Response(
                200,
                content=b"{not json",
                headers={"content-type": "application/json"},
            )
        )
        with pytest.raises(UpstreamAPIError, match="malformed JSON"):
            _call(adapter)


class TestClientConstruction:
    def test_configures_sdk_without_retries(self) -> None:
        with patch(
            "docquery.answering.perplexity_client_adapter.openai.OpenAI",
            return_value=MagicMock(),
        ) as mock_openai:
            PerplexityClientAdapter(api_key="k", timeout_seconds=42)
        mock_openai.assert_called_once_with(
            api_key="k",
            timeout=42,
            base_url="https://api.perplexity.ai",
            max_retries=0,
            http_client=None,
        )
