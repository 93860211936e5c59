"""
Document Totals Engine — sums resolved lines into document figures.

    subtotal    = Σ exclusive_amount
    vat_total   = Σ vat_amount
    grand_total = Σ line_total

Invoices additionally net off credit-note applications and payments to give
amount due and paid status.  Totals are accumulated in float and never
rounded here.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence, Union

from bizops.config import PAYMENT_TOLERANCE
from bizops.models.document_schema import PurchaseDocument, SalesDocument
from bizops.models.pricing_schema import CatalogItem, LineEntry, PurchaseLine, TaxMode
from bizops.services.pricing_engine import index_catalog, line_base_price
from bizops.services.tax_engine import LineResult, resolve_line, resolve_purchase_line

logger = logging.getLogger("bizops-totals")


@dataclass
class DocumentTotals:
    subtotal: float = 0.0
    vat_total: float = 0.0
    grand_total: float = 0.0
    lines: List[LineResult] = field(default_factory=list)

    def negated(self) -> "DocumentTotals":
        return DocumentTotals(
            subtotal=-self.subtotal,
            vat_total=-self.vat_total,
            grand_total=-self.grand_total,
            lines=list(self.lines),
        )


@dataclass
class AppliedCredit:
    credit_note_id: str
    credit_note_number: str
    amount: float


@dataclass
class InvoiceBalance:
    grand_total: float = 0.0
    credited: float = 0.0
    amount_due: float = 0.0
    paid: float = 0.0
    outstanding: float = 0.0
    is_fully_paid: bool = False
    credits: List[AppliedCredit] = field(default_factory=list)


def aggregate(results: Iterable[LineResult]) -> DocumentTotals:
    totals = DocumentTotals()
    for result in results:
        totals.subtotal += result.exclusive_amount
        totals.vat_total += result.vat_amount
        totals.grand_total += result.line_total
        totals.lines.append(result)
    return totals


class DocumentTotalsEngine:
    """
    Totals for sales and purchase documents against one catalog snapshot.

    The catalog is indexed once at construction and never mutated; build a
    new engine when the catalog changes.
    """

    def __init__(
        self,
        catalog: Optional[Iterable[CatalogItem]] = None,
        payment_tolerance: float = PAYMENT_TOLERANCE,
    ) -> None:
        self.catalog = index_catalog(catalog)
        self.payment_tolerance = payment_tolerance

    # ------------------------------------------------------------------
    # Line level
    # ------------------------------------------------------------------

    def resolve_sales_line(self, line: LineEntry, tax_mode: TaxMode) -> LineResult:
        base = line_base_price(line, self.catalog)
        return resolve_line(base, line.discount, line.vat_rate, tax_mode)

    # ------------------------------------------------------------------
    # Document level
    # ------------------------------------------------------------------

    def sales_document_totals(self, lines: Sequence[LineEntry], tax_mode: TaxMode) -> DocumentTotals:
        return aggregate(self.resolve_sales_line(line, tax_mode) for line in lines)

    def purchase_document_totals(self, lines: Sequence[PurchaseLine], tax_mode: TaxMode) -> DocumentTotals:
        return aggregate(
            resolve_purchase_line(line.quantity, line.unit_price, line.vat_rate, tax_mode)
            for line in lines
        )

    def document_totals(self, document: Union[SalesDocument, PurchaseDocument]) -> DocumentTotals:
        if isinstance(document, PurchaseDocument):
            return self.purchase_document_totals(document.line_items, document.tax_mode)
        return self.sales_document_totals(document.line_items, document.tax_mode)

    # ------------------------------------------------------------------
    # Credits & payments
    # ------------------------------------------------------------------

    @staticmethod
    def applied_credits(invoice_id: str, credit_notes: Iterable[SalesDocument]) -> List[AppliedCredit]:
        credits: List[AppliedCredit] = []
        for cn in credit_notes or []:
            for app in cn.applications:
                if app.invoice_id == invoice_id:
                    credits.append(AppliedCredit(cn.id, cn.number, app.amount))
        return credits

    @staticmethod
    def amount_due(grand_total: float, credits: Iterable[AppliedCredit]) -> float:
        return grand_total - sum(c.amount for c in credits)

    def invoice_balance(
        self,
        invoice: SalesDocument,
        credit_notes: Optional[Iterable[SalesDocument]] = None,
    ) -> InvoiceBalance:
        """
        Grand total less applied credits, then less payments.

        is_fully_paid tolerates sub-tolerance shortfalls from float sums.
        """
        totals = self.sales_document_totals(invoice.line_items, invoice.tax_mode)
        credits = self.applied_credits(invoice.id, credit_notes or [])
        credited = sum(c.amount for c in credits)
        due = self.amount_due(totals.grand_total, credits)
        paid = sum(p.amount for p in invoice.payments)

        logger.debug(
            "invoice balance computed",
            extra={"document_id": invoice.id},
        )
        return InvoiceBalance(
            grand_total=totals.grand_total,
            credited=credited,
            amount_due=due,
            paid=paid,
            outstanding=due - paid,
            is_fully_paid=paid >= due - self.payment_tolerance,
            credits=credits,
        )
