from __future__ import annotations

import logging


LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s | %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging once; uvicorn keeps its own handlers."""
    logging.basicConfig(level=getattr(logging, level, logging.INFO), format=LOG_FORMAT)
    logging.getLogger("httpx").setLevel(logging.WARNING)
