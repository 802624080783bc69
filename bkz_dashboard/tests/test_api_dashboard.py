from __future__ import annotations

import httpx
import pytest

from bkz_dashboard.api.dashboard import FAILURE_MESSAGE, get_http_client
from bkz_dashboard.services.render import MISSING_KEY_TEXT, NO_TRANSFERS_HTML

SUPPLY_RAW = "1000000000000000000000"


def _hash(i: int) -> str:
    return f"0x{i:064x}"


def _transfers(count: int) -> dict:
    return {"result": [{"hash": _hash(i), "value": str(i * 10**18)} for i in range(1, count + 1)]}


def test_missing_credential_never_calls_upstream(dashboard_client, explorer, settings_factory):
    client, state = dashboard_client
    state["settings"] = settings_factory(ETHERSCAN_API_KEY="")

    resp = client.get("/")
    assert resp.status_code == 200
    assert MISSING_KEY_TEXT in resp.text
    assert explorer["calls"] == []


def test_renders_dashboard_from_primary_shape(dashboard_client, explorer):
    client, _ = dashboard_client
    explorer["responses"] = {
        "tokeninfo": {"data": {"total_supply": SUPPLY_RAW, "holders_count": 1234, "decimals": 18}},
        "transfers": {"data": {"transfers": _transfers(5)["result"]}},
    }

    resp = client.get("/")
    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("text/html")
    assert "1,000 BKZ" in resp.text
    assert "1,234" in resp.text
    assert explorer["calls"] == ["tokeninfo", "transfers"]

    # first three, upstream order
    positions = [resp.text.find(f"https://bscscan.com/tx/{_hash(i)}") for i in (1, 2, 3)]
    assert all(p > 0 for p in positions)
    assert positions == sorted(positions)
    assert _hash(4) not in resp.text
    assert resp.text.count('class="tx"') == 3


def test_alternate_shape_renders_same_supply(dashboard_client, explorer):
    client, _ = dashboard_client
    explorer["responses"] = {
        "tokeninfo": {"result": {"totalSupply": SUPPLY_RAW, "holdersCount": 1234, "decimals": 18}},
        "transfers": _transfers(1),
    }

    resp = client.get("/")
    assert resp.status_code == 200
    assert "1,000 BKZ" in resp.text
    assert "1,234" in resp.text


def test_empty_transfers_show_message(dashboard_client, explorer):
    client, _ = dashboard_client
    explorer["responses"] = {
        "tokeninfo": {"data": {"total_supply": SUPPLY_RAW}},
        "transfers": {"result": []},
    }

    resp = client.get("/")
    assert resp.status_code == 200
    assert NO_TRANSFERS_HTML in resp.text
    assert 'class="tx"' not in resp.text


def test_missing_fields_degrade_to_placeholders(dashboard_client, explorer):
    client, _ = dashboard_client
    explorer["responses"] = {"tokeninfo": {"status": "0"}, "transfers": {}}

    resp = client.get("/")
    assert resp.status_code == 200
    assert '<div class="value">—</div>' in resp.text


@pytest.mark.parametrize("failing", ["tokeninfo", "transfers"])
@pytest.mark.parametrize(
    "failure",
    [
        lambda: httpx.Response(502, text="bad gateway"),
        lambda: httpx.Response(200, text="<html>not json</html>"),
        lambda: httpx.ConnectError("connection refused"),
        lambda: httpx.ReadTimeout("timed out"),
    ],
)
def test_upstream_failure_returns_generic_error(dashboard_client, explorer, failing, failure):
    client, _ = dashboard_client
    explorer["responses"] = {
        "tokeninfo": {"data": {"total_supply": SUPPLY_RAW}},
        "transfers": _transfers(2),
    }
    explorer["responses"][failing] = failure()

    resp = client.get("/")
    assert resp.status_code == 500
    assert resp.text == FAILURE_MESSAGE
    assert 'class="card"' not in resp.text


def test_token_info_failure_skips_transfers_call(dashboard_client, explorer):
    client, _ = dashboard_client
    explorer["responses"] = {"tokeninfo": httpx.Response(503)}

    resp = client.get("/")
    assert resp.status_code == 500
    assert explorer["calls"] == ["tokeninfo"]


@pytest.mark.parametrize(
    "token_info",
    [
        {"data": {"total_supply": "9" * 120, "decimals": 0}},
        {"data": {"total_supply": "1e200", "decimals": 0}},
        {"data": {"total_supply": SUPPLY_RAW, "holders_count": "9" * 120}},
    ],
)
def test_oversized_numbers_degrade_to_placeholder(dashboard_client, explorer, token_info):
    client, _ = dashboard_client
    explorer["responses"] = {"tokeninfo": token_info, "transfers": _transfers(1)}

    resp = client.get("/")
    assert resp.status_code == 200
    assert '<div class="value">—</div>' in resp.text


def test_float_decimals_scale_supply(dashboard_client, explorer):
    client, _ = dashboard_client
    explorer["responses"] = {
        "tokeninfo": {"data": {"total_supply": "5000000", "decimals": 6.0, "holders_count": 1234.0}},
        "transfers": {"result": []},
    }

    resp = client.get("/")
    assert resp.status_code == 200
    assert "5 BKZ" in resp.text
    assert '<div class="value">1,234</div>' in resp.text


@pytest.mark.asyncio
async def test_http_client_uses_configured_timeout(settings_factory):
    gen = get_http_client(settings_factory(HTTP_TIMEOUT_SECONDS=2.5))
    client = await gen.__anext__()
    try:
        assert isinstance(client, httpx.AsyncClient)
        assert client.timeout == httpx.Timeout(2.5)
    finally:
        await gen.aclose()
    assert client.is_closed
