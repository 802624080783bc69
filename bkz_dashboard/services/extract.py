"""
Best-effort field extraction from explorer JSON.

The explorer does not keep a stable schema across endpoints and API versions,
so every field is looked up through an ordered list of candidate key paths.
Supporting a new response shape means adding a path to one of the tables
below.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable, Sequence, Tuple

from bkz_dashboard.schemas.dashboard import TokenSnapshot, TransferRecord
from bkz_dashboard.services.formatting import MAX_DECIMALS, parse_integral

logger = logging.getLogger("bkz_dashboard.extract")

KeyPath = Tuple[str, ...]


class _Absent:
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False


ABSENT: Any = _Absent()

DEFAULT_DECIMALS = 18
DEFAULT_HASH = "—"
DEFAULT_VALUE = "0"
MAX_TRANSFERS = 3

# ----------------------------
# Candidate key paths, most preferred first
# ----------------------------
TOTAL_SUPPLY_PATHS: list[KeyPath] = [("data", "total_supply"), ("result", "totalSupply")]
HOLDERS_PATHS: list[KeyPath] = [("data", "holders_count"), ("result", "holdersCount")]
DECIMALS_PATHS: list[KeyPath] = [("data", "decimals"), ("result", "decimals")]
TRANSFERS_PATHS: list[KeyPath] = [("data", "transfers"), ("result",)]
TX_HASH_PATHS: list[KeyPath] = [("hash",), ("transactionHash",), ("txHash",)]
TX_VALUE_PATHS: list[KeyPath] = [("value",), ("tokenValue",), ("amount",)]

LIST_WRAPPED_KEYS = frozenset({"result"})


def _step(node: Any, key: str) -> Any:
    if isinstance(node, Mapping) and key in node:
        return node[key]
    return ABSENT


def _walk(data: Any, path: KeyPath) -> Any:
    node = data
    prev = None
    for key in path:
        # Etherscan wraps single-record results in a one-element list.
        if prev in LIST_WRAPPED_KEYS and isinstance(node, list) and node:
            node = node[0]
        node = _step(node, key)
        if node is ABSENT or node is None:
            return ABSENT
        prev = key
    return node


def resolve(data: Any, paths: Iterable[KeyPath]) -> Any:
    """Return the first non-null value reached by ``paths``, else ``ABSENT``."""
    for path in paths:
        value = _walk(data, path)
        if value is not ABSENT:
            return value
    return ABSENT


def _as_int(value: Any) -> int | None:
    if value is ABSENT or isinstance(value, (Mapping, list)):
        return None
    parsed = parse_integral(value)
    return None if parsed is None else int(parsed)


def _as_raw(value: Any) -> str | None:
    if value is ABSENT or isinstance(value, (bool, Mapping, list)):
        return None
    text = str(value).strip()
    return text or None


def extract_snapshot(payload: Any) -> TokenSnapshot:
    decimals = _as_int(resolve(payload, DECIMALS_PATHS))
    if decimals is None or not 0 <= decimals <= MAX_DECIMALS:
        if decimals is not None:
            logger.warning("ignoring out-of-range decimals=%s", decimals)
        decimals = DEFAULT_DECIMALS

    return TokenSnapshot(
        total_supply_raw=_as_raw(resolve(payload, TOTAL_SUPPLY_PATHS)),
        decimals=decimals,
        holders_count=_as_int(resolve(payload, HOLDERS_PATHS)),
    )


def extract_transfer(item: Any) -> TransferRecord:
    tx_hash = resolve(item, TX_HASH_PATHS)
    value = resolve(item, TX_VALUE_PATHS)
    return TransferRecord(
        hash=DEFAULT_HASH if tx_hash is ABSENT else str(tx_hash),
        raw_value=DEFAULT_VALUE if value is ABSENT else str(value),
    )


def extract_transfers(payload: Any, limit: int = MAX_TRANSFERS) -> list[TransferRecord]:
    """First ``limit`` transfers in upstream order; [] when there is no list."""
    items = resolve(payload, TRANSFERS_PATHS)
    if not isinstance(items, Sequence) or isinstance(items, (str, bytes)):
        if items is not ABSENT:
            logger.info("transfers payload is not a list (%s)", type(items).__name__)
        return []
    return [extract_transfer(item) for item in list(items)[:limit]]
