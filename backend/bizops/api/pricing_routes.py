"""
Pricing routes — unit conversion, line pricing, tax resolution, document totals.

GET  /api/pricing/units               — unit table with family and factor
POST /api/pricing/equivalent-prices   — area price in every area unit
POST /api/pricing/cost-unit-prices    — sheet/roll price per area unit
POST /api/pricing/base-price          — pre-discount, pre-tax line amount
POST /api/pricing/resolve-line        — discount + tax mode for one line
POST /api/pricing/document-totals     — sales document subtotal / VAT / total
POST /api/pricing/purchase-totals     — purchase document subtotal / VAT / total
POST /api/pricing/invoice-balance     — amount due after credits and payments
"""
import logging
from dataclasses import asdict
from typing import Dict, List, Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from bizops.config import DEFAULT_TAX_MODE
from bizops.models.document_schema import SalesDocument
from bizops.models.pricing_schema import (
    CatalogItem,
    Discount,
    LineEntry,
    MeasurementUnit,
    PurchaseLine,
    TaxMode,
)
from bizops.services.conversion_engine import (
    cost_unit_prices,
    equivalent_prices,
    factor_to_base,
)
from bizops.services.pricing_engine import (
    calculate_base_price,
    index_catalog,
    line_base_price,
    with_resolved_add_ons,
)
from bizops.services.tax_engine import resolve_line
from bizops.services.totals_engine import DocumentTotals, DocumentTotalsEngine

router = APIRouter(prefix="/api/pricing", tags=["Pricing"])
logger = logging.getLogger("bizops-api")


# ─── Pydantic schemas ────────────────────────────────────────────────────────

class EquivalentPricesRequest(BaseModel):
    base_price: Optional[float] = None
    base_unit: Optional[MeasurementUnit] = None


class CostUnitPricesRequest(BaseModel):
    total_price: Optional[float] = None
    length: Optional[float] = None
    width: Optional[float] = None
    unit: Optional[MeasurementUnit] = None


class BasePriceRequest(BaseModel):
    line: LineEntry
    item: Optional[CatalogItem] = Field(None, description="Inline catalog item; overrides line.inventory_item_id")
    catalog: List[CatalogItem] = Field(default_factory=list)


class ResolveLineRequest(BaseModel):
    base_price: float = 0.0
    discount: Discount = Field(default_factory=Discount)
    vat_rate: float = 0.0
    tax_mode: TaxMode = TaxMode(DEFAULT_TAX_MODE)


class SalesTotalsRequest(BaseModel):
    tax_mode: TaxMode = TaxMode(DEFAULT_TAX_MODE)
    line_items: List[LineEntry] = Field(default_factory=list)
    catalog: List[CatalogItem] = Field(default_factory=list)


class PurchaseTotalsRequest(BaseModel):
    tax_mode: TaxMode = TaxMode(DEFAULT_TAX_MODE)
    line_items: List[PurchaseLine] = Field(default_factory=list)


class InvoiceBalanceRequest(BaseModel):
    invoice: SalesDocument
    credit_notes: List[SalesDocument] = Field(default_factory=list)
    catalog: List[CatalogItem] = Field(default_factory=list)


def _unit_map(prices: Dict[MeasurementUnit, float]) -> Dict[str, float]:
    return {unit.value: price for unit, price in prices.items()}


def _totals_payload(totals: DocumentTotals) -> dict:
    return {
        "subtotal": totals.subtotal,
        "vat_total": totals.vat_total,
        "grand_total": totals.grand_total,
        "lines": [asdict(line) for line in totals.lines],
    }


# ─── Routes ──────────────────────────────────────────────────────────────────

@router.get("/units")
def list_units():
    return [
        {"unit": u.value, "family": u.family.value, "factor_to_base": factor_to_base(u)}
        for u in MeasurementUnit
    ]


@router.post("/equivalent-prices")
def post_equivalent_prices(body: EquivalentPricesRequest):
    return {"prices": _unit_map(equivalent_prices(body.base_price, body.base_unit))}


@router.post("/cost-unit-prices")
def post_cost_unit_prices(body: CostUnitPricesRequest):
    prices = cost_unit_prices(body.total_price, body.length, body.width, body.unit)
    return {"prices": _unit_map(prices)}


@router.post("/base-price")
def post_base_price(body: BasePriceRequest):
    catalog = index_catalog(body.catalog)
    if body.item is not None:
        price = calculate_base_price(with_resolved_add_ons(body.item, catalog), body.line)
    else:
        ref = body.line.inventory_item_id
        if ref and ref not in catalog:
            logger.warning("base price requested for unknown catalog item %s", ref)
            raise HTTPException(status_code=404, detail=f"Catalog item '{ref}' not found")
        price = line_base_price(body.line, catalog)
    return {"base_price": price}


@router.post("/resolve-line")
def post_resolve_line(body: ResolveLineRequest):
    result = resolve_line(body.base_price, body.discount, body.vat_rate, body.tax_mode)
    return asdict(result)


@router.post("/document-totals")
def post_document_totals(body: SalesTotalsRequest):
    engine = DocumentTotalsEngine(body.catalog)
    return _totals_payload(engine.sales_document_totals(body.line_items, body.tax_mode))


@router.post("/purchase-totals")
def post_purchase_totals(body: PurchaseTotalsRequest):
    engine = DocumentTotalsEngine()
    return _totals_payload(engine.purchase_document_totals(body.line_items, body.tax_mode))


@router.post("/invoice-balance")
def post_invoice_balance(body: InvoiceBalanceRequest):
    engine = DocumentTotalsEngine(body.catalog)
    return asdict(engine.invoice_balance(body.invoice, body.credit_notes))
