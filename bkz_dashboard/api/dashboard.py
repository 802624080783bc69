# bkz_dashboard/api/dashboard.py
from __future__ import annotations

import logging
from typing import AsyncIterator

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse, PlainTextResponse, Response

from bkz_dashboard.config.settings import Settings, get_settings
from bkz_dashboard.services.explorer import UpstreamError, fetch_token_info, fetch_transfers
from bkz_dashboard.services.extract import extract_snapshot, extract_transfers
from bkz_dashboard.services.render import build_view, missing_credential_view, render_dashboard

logger = logging.getLogger("bkz_dashboard.api")

router = APIRouter(tags=["dashboard"])

FAILURE_MESSAGE = "Could not load blockchain data. See the server log for details."


async def get_http_client(
    settings: Settings = Depends(get_settings),
) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT_SECONDS) as client:
        yield client


def _failed(step: str, error: UpstreamError) -> Response:
    logger.error(
        "❌ %s call failed | reason=%s | status=%s | %s",
        step,
        error.reason,
        error.status_code,
        error.detail,
    )
    return PlainTextResponse(FAILURE_MESSAGE, status_code=500)


@router.get("/", response_class=HTMLResponse)
async def dashboard(
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_http_client),
) -> Response:
    if not settings.has_credential:
        logger.warning("⚠️ ETHERSCAN_API_KEY not set; serving placeholder dashboard")
        return HTMLResponse(render_dashboard(missing_credential_view(), settings))

    token_info = await fetch_token_info(client, settings)
    if isinstance(token_info, UpstreamError):
        return _failed("tokeninfo", token_info)
    snapshot = extract_snapshot(token_info.payload)

    transfers_result = await fetch_transfers(client, settings)
    if isinstance(transfers_result, UpstreamError):
        return _failed("transfers", transfers_result)
    transfers = extract_transfers(transfers_result.payload)

    view = build_view(snapshot, transfers, settings)
    logger.info(
        "✅ dashboard rendered | supply=%s | holders=%s | transfers=%d",
        view.supply_display,
        view.holders_display,
        len(transfers),
    )
    return HTMLResponse(render_dashboard(view, settings))
