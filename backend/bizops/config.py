"""
Engine configuration — single source of truth for tax, display and service
defaults.

Import from here in all services and routes rather than hardcoding values.
"""
from __future__ import annotations

import os

from dotenv import load_dotenv

# Load .env file automatically in dev (no-op if the file is missing)
load_dotenv()


# ── Tax defaults ───────────────────────────────────────────────────────────────

# Standard VAT rate (%) applied to new lines and to job cost items without a rate
DEFAULT_VAT_RATE: float = float(os.getenv("DEFAULT_VAT_RATE", "20.0"))

# Tax mode used when a document or request does not state one
# (one of "inclusive", "exclusive", "none")
DEFAULT_TAX_MODE: str = os.getenv("DEFAULT_TAX_MODE", "exclusive")


# ── Display ────────────────────────────────────────────────────────────────────

# Single symbol prefix; no localisation beyond this
CURRENCY_SYMBOL: str = os.getenv("CURRENCY_SYMBOL", "£")

# Decimal places used when formatting money for display (engine never rounds)
DISPLAY_DECIMALS: int = 2


# ── Balances ───────────────────────────────────────────────────────────────────

# An invoice counts as fully paid when paid >= amount_due - PAYMENT_TOLERANCE
PAYMENT_TOLERANCE: float = 0.001


# ── Service ────────────────────────────────────────────────────────────────────

SERVICE_CONFIG: dict[str, object] = {
    "title": "BizOps Pricing Engine API",
    "version": "1.0.0",
    "description": "Unit conversion, line pricing, tax resolution and report totals",
}

_cors_default = "http://localhost:3000,http://localhost:8000"
CORS_ORIGINS: list[str] = [
    o.strip() for o in os.getenv("CORS_ORIGINS", _cors_default).split(",") if o.strip()
]

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
JSON_LOGS: bool = os.getenv("LOG_FORMAT", "json").lower() != "text"
