"""Example answering client adapter.

Use this module as a reference when implementing new provider adapters.
Implement BaseAnswerClient and register the provider in GroundedQueryFactory.
"""

from typing import ClassVar

from docquery.answering.client_base import BaseAnswerClient
from docquery.answering.models import ChatMessage, ChatReply, RequestPolicy


class ExampleClientAdapter(BaseAnswerClient):
    """Example adapter that returns a fixed answer.

    No network calls. Useful for local development and tests.
    """

    DEFAULT_ANSWER: ClassVar[str] = "This is an example answer. No answering service was called."

    def create_chat_completion(
        self,
        *,
        model: str,
        messages: list[ChatMessage],
        policy: RequestPolicy,
        request_id: str,
    ) -> ChatReply:
        _ = model, messages, policy, request_id
        return ChatReply(content=self.DEFAULT_ANSWER, citations=[])
