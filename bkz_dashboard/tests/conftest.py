from __future__ import annotations

from dataclasses import replace

import httpx
import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from bkz_dashboard.api import dashboard as dashboard_module
from bkz_dashboard.config.settings import DEFAULT_CONTRACT, Settings, get_settings

API_URL = "https://explorer.test/v2/api"


def make_settings(**overrides) -> Settings:
    base = Settings(
        PORT=3000,
        HOST="127.0.0.1",
        ETHERSCAN_API_KEY="test-key",
        EXPLORER_API_URL=API_URL,
        CHAIN_ID=56,
        CONTRACT_ADDRESS=DEFAULT_CONTRACT,
        TOKEN_SYMBOL="BKZ",
        TX_URL_TEMPLATE="https://bscscan.com/tx/{hash}",
        HTTP_TIMEOUT_SECONDS=5.0,
        LOG_LEVEL="INFO",
    )
    return replace(base, **overrides)


@pytest.fixture()
def settings_factory():
    return make_settings


@pytest.fixture()
def settings() -> Settings:
    return make_settings()


@pytest.fixture()
def explorer():
    """
    Fake explorer keyed by ``action``.

    Each entry is either a JSON-able payload, an ``httpx.Response`` or an
    exception instance to raise from the transport.
    """
    state = {"responses": {}, "calls": []}

    def handler(request: httpx.Request) -> httpx.Response:
        action = request.url.params.get("action")
        state["calls"].append(action)
        result = state["responses"].get(action)
        if isinstance(result, Exception):
            raise result
        if isinstance(result, httpx.Response):
            return result
        return httpx.Response(200, json=result)

    state["transport"] = httpx.MockTransport(handler)
    return state


@pytest.fixture()
def dashboard_client(settings, explorer):
    state = {"settings": settings}

    async def fake_client():
        async with httpx.AsyncClient(transport=explorer["transport"]) as client:
            yield client

    app = FastAPI()
    app.include_router(dashboard_module.router)
    app.dependency_overrides[get_settings] = lambda: state["settings"]
    app.dependency_overrides[dashboard_module.get_http_client] = fake_client
    client = TestClient(app)
    yield client, state
