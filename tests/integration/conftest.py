from collections.abc import Generator

import httpx
import pytest

from docquery.config.settings import Settings
from docquery.pipeline.service import QueryService, build_service
from tests.integration.fakes import FakeUpstreams


@pytest.fixture()
def upstreams() -> FakeUpstreams:
    return FakeUpstreams()


@pytest.fixture()
def settings() -> Settings:
    return Settings(
        pdfco_api_key="pdfco-key",
        perplexity_api_key="pplx-key",
        answer_provider="perplexity",
    )


@pytest.fixture()
def service(settings: Settings, upstreams: FakeUpstreams) -> Generator[QueryService, None, None]:
    http_client = httpx.Client(transport=httpx.MockTransport(upstreams))
    svc = build_service(settings, http_client=http_client)
    yield svc
    svc.close()
    http_client.close()
