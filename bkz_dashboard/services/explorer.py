"""Helpers for interacting with the Etherscan V2 explorer API."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

import httpx

from bkz_dashboard.config.settings import Settings


@dataclass(frozen=True)
class UpstreamOk:
    payload: Any


@dataclass(frozen=True)
class UpstreamError:
    """
    A failed outbound call.

    reason is one of: "network", "timeout", "status", "decode".
    """

    url: str
    reason: str
    detail: str
    status_code: int | None = None


UpstreamResult = Union[UpstreamOk, UpstreamError]


def token_params(settings: Settings, action: str) -> dict[str, Any]:
    return {
        "chainid": settings.CHAIN_ID,
        "module": "token",
        "action": action,
        "contractaddress": settings.CONTRACT_ADDRESS,
        "apikey": settings.ETHERSCAN_API_KEY,
    }


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    params: dict[str, Any] | None = None,
) -> UpstreamResult:
    """GET ``url`` and return the decoded JSON body, or an UpstreamError."""

    try:
        response = await client.get(url, params=params)
        response.raise_for_status()
    except httpx.TimeoutException as exc:
        return UpstreamError(url=url, reason="timeout", detail=repr(exc))
    except httpx.HTTPStatusError as exc:
        return UpstreamError(
            url=url,
            reason="status",
            detail=f"HTTP {exc.response.status_code}",
            status_code=exc.response.status_code,
        )
    except httpx.HTTPError as exc:
        return UpstreamError(url=url, reason="network", detail=repr(exc))

    try:
        return UpstreamOk(payload=response.json())
    except ValueError as exc:
        return UpstreamError(
            url=url,
            reason="decode",
            detail=f"non-JSON body: {exc}",
            status_code=response.status_code,
        )


async def fetch_token_info(client: httpx.AsyncClient, settings: Settings) -> UpstreamResult:
    return await fetch_json(client, settings.EXPLORER_API_URL, token_params(settings, "tokeninfo"))


async def fetch_transfers(client: httpx.AsyncClient, settings: Settings) -> UpstreamResult:
    return await fetch_json(client, settings.EXPLORER_API_URL, token_params(settings, "transfers"))
