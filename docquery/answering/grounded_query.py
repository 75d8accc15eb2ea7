"""Builds grounded chat requests and normalizes the replies."""

from docquery.answering.client_base import BaseAnswerClient
from docquery.answering.models import ChatMessage, ChatReply, RequestPolicy
from docquery.logging.logger import Log
from docquery.pipeline.exceptions import InvalidRequestError
from docquery.pipeline.models import AnswerResult, GroundedQuestion
from docquery.pipeline.text import new_request_id

DEFAULT_MODEL = "sonar-pro"
NO_RESPONSE_PLACEHOLDER = "No response generated"
SYSTEM_PROMPT = (
    "You are a helpful assistant that can analyze PDF documents and answer "
    "questions about them. Use the provided PDF content to answer questions "
    "accurately and cite relevant sections when possible."
)


class GroundedQueryClient:
    """Asks one question of the answering service, optionally grounded in document text."""

    def __init__(
        self,
        *,
        client: BaseAnswerClient,
        default_model: str = DEFAULT_MODEL,
        policy: RequestPolicy | None = None,
    ) -> None:
        self._client = client
        self._default_model = default_model or DEFAULT_MODEL
        self._policy = policy or RequestPolicy()

    def ask(
        self,
        question: str,
        context: str | None = None,
        model: str | None = None,
        request_id: str | None = None,
    ) -> AnswerResult:
        """Send a single-turn question and return ``{answer, sources}``.

        Raises:
            InvalidRequestError: if the question is blank (no network call).
            ConfigurationError: if the provider credential is missing.
            UpstreamError: on transport or API failures.
        """
        request_id = request_id or new_request_id()
        grounded = self.build_question(question, context)
        messages = self.build_messages(grounded)
        model_name = (model or "").strip() or self._default_model
        Log.info(
            f"query: model={model_name} grounded={grounded.is_grounded} "
            f"context_chars={len(grounded.context or '')}",
            request_id=request_id,
            step="query",
            model=model_name,
        )

        reply = self._client.create_chat_completion(
            model=model_name,
            messages=messages,
            policy=self._policy,
            request_id=request_id,
        )
        result = self._normalize(reply)

        Log.info(
            f"query: answer of {len(result.answer)} chars "
            f"with {len(result.sources)} sources",
            request_id=request_id,
            step="query",
        )
        return result

    def close(self) -> None:
        self._client.close()

    @staticmethod
    def build_question(question: str, context: str | None = None) -> GroundedQuestion:
        if not question or not question.strip():
            raise InvalidRequestError("Query is required")
        return GroundedQuestion(question=question.strip(), context=context)

    @staticmethod
    def build_messages(grounded: GroundedQuestion) -> list[ChatMessage]:
        if not grounded.is_grounded:
            return [{"role": "user", "content": grounded.question}]
        return [
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": f"PDF Content:\n{grounded.context}\n\nQuestion: {grounded.question}",
            },
        ]

    @staticmethod
    def _normalize(reply: ChatReply) -> AnswerResult:
        answer = reply.content if isinstance(reply.content, str) and reply.content else None
        sources = [str(source) for source in reply.citations if source]
        return AnswerResult(answer=answer or NO_RESPONSE_PLACEHOLDER, sources=sources)
