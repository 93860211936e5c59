"""
BizOps Pricing Engine API v1.0
FastAPI surface over the pricing, tax and totals engines.  Stateless: every
request carries the catalog items and documents it needs.
"""
import logging
import time

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bizops.config import CORS_ORIGINS, JSON_LOGS, LOG_LEVEL, SERVICE_CONFIG
from bizops.services.logging_config import setup_logging
from bizops.services.middleware import RequestTimingMiddleware, SecurityHeadersMiddleware

setup_logging(level=LOG_LEVEL, json_output=JSON_LOGS)
logger = logging.getLogger("bizops-api")

_PROCESS_START = time.monotonic()

app = FastAPI(
    title=SERVICE_CONFIG["title"],
    version=SERVICE_CONFIG["version"],
    description=SERVICE_CONFIG["description"],
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Authorization", "Content-Type", "Accept", "X-Requested-With"],
)
app.add_middleware(SecurityHeadersMiddleware)
# Request timing + X-Request-ID must be outermost so it wraps all other middleware
app.add_middleware(RequestTimingMiddleware)

# Routers
from bizops.api.pricing_routes import router as pricing_router  # noqa: E402
from bizops.api.report_routes import router as report_router  # noqa: E402

app.include_router(pricing_router)
app.include_router(report_router)


@app.get("/health")
async def health_check():
    return {
        "status": "active",
        "version": SERVICE_CONFIG["version"],
        "uptime_seconds": round(time.monotonic() - _PROCESS_START, 1),
    }
