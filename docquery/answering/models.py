from dataclasses import dataclass, field

ChatMessage = dict[str, str]


@dataclass(frozen=True)
class RequestPolicy:
    """Fixed sampling and search parameters sent with every question."""

    max_tokens: int = 1000
    temperature: float = 0.2
    top_p: float = 0.9
    return_citations: bool = True
    search_recency_filter: str = "month"


@dataclass(frozen=True)
class ChatReply:
    """Provider reply reduced to the fields the answer is built from."""

    content: str | None = None
    citations: list[object] = field(default_factory=list)
