# bkz_dashboard/main.py
from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI

from bkz_dashboard.api.dashboard import router as dashboard_router
from bkz_dashboard.config.logging_config import configure_logging
from bkz_dashboard.config.settings import get_settings


logger = logging.getLogger("bkz_dashboard")


app = FastAPI(title="BitKz Live Dashboard")

# Routers
app.include_router(dashboard_router)


@app.on_event("startup")
async def on_startup() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    if not settings.has_credential:
        logger.warning("⚠️ ETHERSCAN_API_KEY is empty; every request renders the placeholder view")
    logger.info(
        "✅ dashboard ready | chain=%s | contract=%s",
        settings.CHAIN_ID,
        settings.CONTRACT_ADDRESS,
    )


def run() -> None:
    settings = get_settings()
    configure_logging(settings.LOG_LEVEL)
    logger.info("Server running on port %s", settings.PORT)
    uvicorn.run(app, host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
