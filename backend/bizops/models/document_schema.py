import datetime as dt
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field

from bizops.config import DEFAULT_TAX_MODE
from bizops.models.pricing_schema import LineEntry, PurchaseLine, TaxMode


class SalesDocumentKind(str, Enum):
    INVOICE = "invoice"
    QUOTE = "quote"
    CREDIT_NOTE = "credit_note"


class PurchaseDocumentKind(str, Enum):
    PURCHASE_ORDER = "purchase_order"
    BILL = "bill"


class Payment(BaseModel):
    id: Optional[str] = None
    date: Optional[dt.date] = None
    amount: float = 0.0
    method: Optional[str] = Field(None, description="e.g., Bank Transfer, Cash, Card Payment")
    notes: str = ""


class CreditApplication(BaseModel):
    invoice_id: str
    amount: float = 0.0


class SalesDocument(BaseModel):
    """Invoice, quote or credit note."""
    id: str
    number: str = ""
    kind: SalesDocumentKind = SalesDocumentKind.INVOICE
    customer_name: str = ""
    issue_date: dt.date
    tax_mode: TaxMode = TaxMode(DEFAULT_TAX_MODE)
    line_items: List[LineEntry] = Field(default_factory=list)
    payments: List[Payment] = Field(default_factory=list)
    applications: List[CreditApplication] = Field(
        default_factory=list, description="Credit note only: amounts applied against invoices"
    )


class PurchaseDocument(BaseModel):
    """Purchase order or bill."""
    id: str
    number: str = ""
    kind: PurchaseDocumentKind = PurchaseDocumentKind.BILL
    supplier_name: str = ""
    issue_date: dt.date
    tax_mode: TaxMode = TaxMode(DEFAULT_TAX_MODE)
    line_items: List[PurchaseLine] = Field(default_factory=list)
    payments: List[Payment] = Field(default_factory=list)
