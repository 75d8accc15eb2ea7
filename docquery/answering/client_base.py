from abc import ABC, abstractmethod

from docquery.answering.models import ChatMessage, ChatReply, RequestPolicy


class BaseAnswerClient(ABC):
    """Contract for provider-specific answering clients."""

    @abstractmethod
    def create_chat_completion(
        self,
        *,
        model: str,
        messages: list[ChatMessage],
        policy: RequestPolicy,
        request_id: str,
    ) -> ChatReply:
        """Send one chat request and return the provider reply."""

    def close(self) -> None:
        """Release any held connections."""
