import httpx

from docquery.answering.example_client_adapter import ExampleClientAdapter
from docquery.answering.grounded_query import GroundedQueryClient
from docquery.answering.perplexity_client_adapter import PerplexityClientAdapter
from docquery.config.settings import Settings


class GroundedQueryFactory:
    """Creates the configured grounded query client."""

    PROVIDERS = ("perplexity", "example")

    @classmethod
    def create(
        cls,
        settings: Settings,
        http_client: httpx.Client | None = None,
    ) -> GroundedQueryClient:
        """Create a configured query client from application settings."""
        provider = settings.answer_provider.lower()
        if provider == "example":
            return GroundedQueryClient(client=ExampleClientAdapter(), default_model="example")
        if provider == "perplexity":
            client = PerplexityClientAdapter(
                api_key=settings.perplexity_api_key,
                timeout_seconds=settings.perplexity_timeout_seconds,
                base_url=settings.perplexity_base_url,
                http_client=http_client,
            )
            return GroundedQueryClient(
                client=client,
                default_model=settings.perplexity_model_name,
            )
        raise ValueError(
            f"Unknown answer provider '{provider}'. Choose from: {list(cls.PROVIDERS)}"
        )
