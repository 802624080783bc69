from __future__ import annotations

from decimal import Decimal
from html import escape
from string import Template
from typing import Sequence

from bkz_dashboard.config.settings import Settings
from bkz_dashboard.schemas.dashboard import DashboardView, TokenSnapshot, TransferRecord
from bkz_dashboard.services.formatting import (
    PLACEHOLDER,
    format_amount,
    format_number,
    to_units,
)


HASH_PREFIX_LEN = 12
NO_TRANSFERS_HTML = (
    '<div class="small">No recent transactions, or the transfers endpoint is unavailable.</div>'
)
MISSING_KEY_TEXT = "API key not configured"
MISSING_KEY_HTML = (
    "<div class='small' style='color:#ff7777'>"
    "Set ETHERSCAN_API_KEY in the server environment.</div>"
)

PAGE_TEMPLATE = Template(
    """<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <title>BitKz Live</title>
  <meta name="viewport" content="width=device-width,initial-scale=1" />
  <style>
    :root { --gold: #FFD700; --bg: #000; --white: #fff; --muted: #BBBBBB; }
    html,body{height:100%;margin:0;background:var(--bg);color:var(--white);font-family:Inter, Poppins, system-ui, -apple-system, "Segoe UI", Roboto, Arial;}
    .wrap{max-width:920px;margin:40px auto;padding:24px;}
    h1{margin:0 0 8px;font-size:28px}
    .subtitle{color:var(--muted);margin-bottom:24px}
    .grid{display:grid;grid-template-columns:repeat(auto-fit,minmax(220px,1fr));gap:18px}
    .card{background:rgba(255,255,255,0.02);border-radius:12px;padding:18px;box-shadow:0 4px 18px rgba(0,0,0,0.6);}
    .label{font-size:13px;color:var(--muted);margin-bottom:8px}
    .value{font-size:20px;color:var(--gold);font-weight:700;word-break:break-all}
    .small{font-size:13px;color:var(--muted)}
    .tx{margin-bottom:10px;padding:8px;border-radius:8px;background:rgba(255,255,255,0.02)}
    a.hash{color:var(--gold);text-decoration:none;font-family:monospace}
    footer{margin-top:28px;color:var(--muted);font-size:13px}
  </style>
</head>
<body>
  <div class="wrap">
    <h1>BitKz Live Dashboard</h1>
    <div class="subtitle">Live data from the blockchain (BNB Chain)</div>

    <div class="grid">
      <div class="card">
        <div class="label">Total Supply</div>
        <div class="value">$supply</div>
        <div class="small">Contract: $contract</div>
      </div>

      <div class="card">
        <div class="label">Holders</div>
        <div class="value">$holders</div>
        <div class="small">Addresses holding $symbol</div>
      </div>

      <div class="card">
        <div class="label">Market Cap (approx.)</div>
        <div class="value">$market_cap</div>
        <div class="small">Total Supply x price (estimated)</div>
      </div>
    </div>

    <div style="margin-top:20px">
      <div class="label">Latest transactions</div>
      <div style="margin-top:8px">$transfers</div>
    </div>

    <footer>Refreshed on every page load. Requires a valid Etherscan V2 API key on the server.</footer>
  </div>
</body>
</html>
"""
)


def _short_hash(tx_hash: str) -> str:
    return f"{tx_hash[:HASH_PREFIX_LEN]}..."


def render_transfers(
    transfers: Sequence[TransferRecord],
    decimals: int,
    settings: Settings,
) -> str:
    if not transfers:
        return NO_TRANSFERS_HTML

    rows = []
    for tx in transfers:
        amount = format_amount(tx.raw_value, decimals, allow_zero=True)
        rows.append(
            f'<div class="tx"><a class="hash" target="_blank" '
            f'href="{escape(settings.tx_url(tx.hash))}">{escape(_short_hash(tx.hash))}</a>'
            f" — {amount} {escape(settings.TOKEN_SYMBOL)}</div>"
        )
    return "".join(rows)


def build_view(
    snapshot: TokenSnapshot,
    transfers: Sequence[TransferRecord],
    settings: Settings,
) -> DashboardView:
    supply = to_units(snapshot.total_supply_raw, snapshot.decimals)

    if supply is None:
        supply_display = PLACEHOLDER
        market_cap_display = PLACEHOLDER
    else:
        supply_display = f"{format_number(supply)} {settings.TOKEN_SYMBOL}"
        # No price source yet; market cap is supply x 0.
        market_cap_display = f"{format_number(supply * 0)} (price unavailable)"

    if snapshot.holders_count:
        holders_display = format_number(Decimal(snapshot.holders_count))
    else:
        holders_display = PLACEHOLDER

    return DashboardView(
        supply_display=supply_display,
        holders_display=holders_display,
        market_cap_display=market_cap_display,
        transfers_html=render_transfers(transfers, snapshot.decimals, settings),
    )


def missing_credential_view() -> DashboardView:
    return DashboardView(
        supply_display=MISSING_KEY_TEXT,
        holders_display=MISSING_KEY_TEXT,
        market_cap_display=PLACEHOLDER,
        transfers_html=MISSING_KEY_HTML,
    )


def render_dashboard(view: DashboardView, settings: Settings) -> str:
    return PAGE_TEMPLATE.substitute(
        supply=escape(view.supply_display),
        holders=escape(view.holders_display),
        market_cap=escape(view.market_cap_display),
        transfers=view.transfers_html,
        contract=escape(settings.CONTRACT_ADDRESS),
        symbol=escape(settings.TOKEN_SYMBOL),
    )
