"""
Report Routes — P&L and VAT figures over a document set.

POST /api/reports/profit-and-loss
POST /api/reports/vat
"""
import logging
from dataclasses import asdict
from datetime import date
from typing import List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from bizops.config import CURRENCY_SYMBOL
from bizops.models.document_schema import PurchaseDocument, SalesDocument
from bizops.models.pricing_schema import CatalogItem
from bizops.services.report_engine import ReportEngine, format_currency

router = APIRouter(prefix="/api/reports", tags=["Reports"])
logger = logging.getLogger("bizops-report-routes")


class ReportRequest(BaseModel):
    invoices: List[SalesDocument] = Field(default_factory=list)
    credit_notes: List[SalesDocument] = Field(default_factory=list)
    purchase_orders: List[PurchaseDocument] = Field(default_factory=list)
    bills: List[PurchaseDocument] = Field(default_factory=list)
    catalog: List[CatalogItem] = Field(default_factory=list)
    start: Optional[date] = None
    end: Optional[date] = None


def _engine_for(body: ReportRequest) -> ReportEngine:
    if body.start and body.end and body.start > body.end:
        logger.warning("report range rejected: start %s after end %s", body.start, body.end)
        raise HTTPException(status_code=400, detail="start must not be after end")
    return ReportEngine(body.catalog)


def _documents(body: ReportRequest) -> dict:
    return {
        "invoices": body.invoices,
        "credit_notes": body.credit_notes,
        "purchase_orders": body.purchase_orders,
        "bills": body.bills,
        "start": body.start,
        "end": body.end,
    }


@router.post("/profit-and-loss")
def post_profit_and_loss(body: ReportRequest):
    report = _engine_for(body).profit_and_loss(**_documents(body))
    payload = asdict(report)
    payload["display"] = {
        key: format_currency(payload[key], CURRENCY_SYMBOL)
        for key in (
            "total_revenue", "cogs", "gross_profit", "vat_on_sales",
            "vat_on_purchases", "net_vat_position", "net_profit",
        )
    }
    return payload


@router.post("/vat")
def post_vat_report(body: ReportRequest):
    report = _engine_for(body).vat_report(**_documents(body))
    return asdict(report)
