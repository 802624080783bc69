from __future__ import annotations

import os
from dataclasses import dataclass


DEFAULT_CONTRACT = "0x74c220a24718cf1cb2743b212ce52e23be6dd357"


def parse_int(value: str | None, default: int) -> int:
    if value is None or value.strip() == "":
        return default
    return int(value)


def parse_float(value: str | None, default: float) -> float:
    if value is None or value.strip() == "":
        return default
    return float(value)


@dataclass(frozen=True)
class Settings:
    PORT: int
    HOST: str
    ETHERSCAN_API_KEY: str
    EXPLORER_API_URL: str
    CHAIN_ID: int
    CONTRACT_ADDRESS: str
    TOKEN_SYMBOL: str
    TX_URL_TEMPLATE: str
    HTTP_TIMEOUT_SECONDS: float
    LOG_LEVEL: str

    @property
    def has_credential(self) -> bool:
        return bool(self.ETHERSCAN_API_KEY)

    def tx_url(self, tx_hash: str) -> str:
        return self.TX_URL_TEMPLATE.format(hash=tx_hash)

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            PORT=parse_int(os.getenv("PORT"), 3000),
            HOST=os.getenv("HOST", "0.0.0.0"),
            ETHERSCAN_API_KEY=os.getenv("ETHERSCAN_API_KEY", "").strip(),
            EXPLORER_API_URL=os.getenv("EXPLORER_API_URL", "https://api.etherscan.io/v2/api"),
            CHAIN_ID=parse_int(os.getenv("CHAIN_ID"), 56),
            CONTRACT_ADDRESS=os.getenv("CONTRACT_ADDRESS", DEFAULT_CONTRACT),
            TOKEN_SYMBOL=os.getenv("TOKEN_SYMBOL", "BKZ"),
            TX_URL_TEMPLATE=os.getenv("TX_URL_TEMPLATE", "https://bscscan.com/tx/{hash}"),
            HTTP_TIMEOUT_SECONDS=parse_float(os.getenv("HTTP_TIMEOUT_SECONDS"), 10.0),
            LOG_LEVEL=os.getenv("LOG_LEVEL", "INFO").upper(),
        )


_settings: Settings | None = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings.from_env()
    return _settings
