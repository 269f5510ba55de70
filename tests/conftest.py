from pathlib import Path
from typing import Callable, List

import httpx
import pytest
from fastapi.testclient import TestClient

from showcase_site.core.config import Settings
from showcase_site.core.providers import build_provider
from showcase_site.main import create_app


def make_settings(**overrides) -> Settings:
    values = dict(
        mail_provider="mailgun",
        mailgun_api_key="key-test",
        mailgun_domain="mg.example.com",
        recipient_email="inbox@example.com",
        site_name="Showcase News Group",
    )
    values.update(overrides)
    return Settings(_env_file=None, **values)


class ProviderStub:
    """httpx MockTransport handler that records requests and replays a canned response"""

    def __init__(self) -> None:
        self.requests: List[httpx.Request] = []
        self.respond: Callable[[httpx.Request], httpx.Response] = lambda request: httpx.Response(
            200, json={"id": "<20261018.1@mg.example.com>", "message": "Queued. Thank you."}
        )

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self.respond(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))


@pytest.fixture
def provider_stub() -> ProviderStub:
    return ProviderStub()


@pytest.fixture
def static_dir(tmp_path: Path) -> Path:
    public = tmp_path / "public"
    public.mkdir()
    (public / "index.html").write_text("<html><body>Showcase home</body></html>")
    (public / "styles.css").write_text("body { margin: 0; }")
    return public


@pytest.fixture
def make_client(provider_stub: ProviderStub, static_dir: Path):
    def _make(raise_server_exceptions: bool = True, **overrides) -> TestClient:
        overrides.setdefault("static_dir", static_dir)
        settings = make_settings(**overrides)
        provider = build_provider(settings, client=provider_stub.client())
        app = create_app(settings=settings, provider=provider)
        return TestClient(app, raise_server_exceptions=raise_server_exceptions)

    return _make


@pytest.fixture
def client(make_client) -> TestClient:
    return make_client()
