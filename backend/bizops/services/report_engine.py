"""
Report Engine — Profit & Loss and VAT return figures.

Outputs:
  - Profit & Loss: revenue, cost of goods, gross profit, VAT position, net profit
  - VAT report: per-document rows plus payable / reclaimable / net totals

Sales documents feed the payable bucket and purchase documents the reclaimable
bucket.  Credit notes go through the same line resolution as invoices and are
then negated.  All documents are filtered on issue date first.
"""
import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Iterable, List, Optional, Sequence, TypeVar, Union

from bizops.config import CURRENCY_SYMBOL, DISPLAY_DECIMALS
from bizops.models.document_schema import PurchaseDocument, SalesDocument
from bizops.models.pricing_schema import CatalogItem
from bizops.services.totals_engine import DocumentTotals, DocumentTotalsEngine

logger = logging.getLogger("bizops-report")

Doc = TypeVar("Doc", SalesDocument, PurchaseDocument)


def format_currency(amount: float, symbol: str = CURRENCY_SYMBOL) -> str:
    """Two decimals with a symbol prefix; negatives render as -£12.50."""
    if amount < 0:
        return f"-{symbol}{abs(amount):.{DISPLAY_DECIMALS}f}"
    return f"{symbol}{amount:.{DISPLAY_DECIMALS}f}"


def filter_by_date(
    documents: Iterable[Doc],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> List[Doc]:
    """Documents issued within [start, end]; either bound may be open."""
    kept = []
    for doc in documents or []:
        if start is not None and doc.issue_date < start:
            continue
        if end is not None and doc.issue_date > end:
            continue
        kept.append(doc)
    return kept


@dataclass
class ProfitAndLoss:
    start: Optional[date] = None
    end: Optional[date] = None
    total_revenue: float = 0.0
    cogs: float = 0.0
    gross_profit: float = 0.0
    vat_on_sales: float = 0.0
    vat_on_purchases: float = 0.0
    net_vat_position: float = 0.0
    net_profit: float = 0.0


@dataclass
class VatReportRow:
    document_id: str
    number: str
    kind: str
    counterparty: str
    issue_date: date
    subtotal: float
    vat: float
    total: float
    sign: int = 1  # -1 on credit-note rows, whose figures are already negated


@dataclass
class VatReport:
    start: Optional[date] = None
    end: Optional[date] = None
    sales: List[VatReportRow] = field(default_factory=list)
    credit_notes: List[VatReportRow] = field(default_factory=list)
    purchases: List[VatReportRow] = field(default_factory=list)
    total_vat_payable: float = 0.0
    total_vat_reclaimable: float = 0.0
    net_vat_position: float = 0.0


class ReportEngine:
    """
    Financial report figures over a set of documents.

    Lines resolve against the catalog snapshot supplied at construction.
    """

    def __init__(
        self,
        catalog: Optional[Iterable[CatalogItem]] = None,
        currency_symbol: str = CURRENCY_SYMBOL,
    ) -> None:
        self.totals = DocumentTotalsEngine(catalog)
        self.currency_symbol = currency_symbol

    def _row(
        self,
        doc: Union[SalesDocument, PurchaseDocument],
        totals: DocumentTotals,
        sign: int = 1,
    ) -> VatReportRow:
        counterparty = doc.customer_name if isinstance(doc, SalesDocument) else doc.supplier_name
        return VatReportRow(
            document_id=doc.id,
            number=doc.number,
            kind=doc.kind.value,
            counterparty=counterparty,
            issue_date=doc.issue_date,
            subtotal=totals.subtotal,
            vat=totals.vat_total,
            total=totals.grand_total,
            sign=sign,
        )

    # ------------------------------------------------------------------
    # 1. Profit & Loss
    # ------------------------------------------------------------------

    def profit_and_loss(
        self,
        invoices: Sequence[SalesDocument] = (),
        credit_notes: Sequence[SalesDocument] = (),
        purchase_orders: Sequence[PurchaseDocument] = (),
        bills: Sequence[PurchaseDocument] = (),
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> ProfitAndLoss:
        """
        Figures:
            revenue          = Σ invoice subtotals − Σ credit-note subtotals
            vat_on_sales     = Σ invoice VAT − Σ credit-note VAT
            cogs             = Σ purchase subtotals
            vat_on_purchases = Σ purchase VAT
            gross_profit     = revenue − cogs
            net_vat_position = vat_on_sales − vat_on_purchases
            net_profit       = gross_profit − net_vat_position
        """
        report = ProfitAndLoss(start=start, end=end)

        for inv in filter_by_date(invoices, start, end):
            t = self.totals.document_totals(inv)
            report.total_revenue += t.subtotal
            report.vat_on_sales += t.vat_total

        for cn in filter_by_date(credit_notes, start, end):
            t = self.totals.document_totals(cn).negated()
            report.total_revenue += t.subtotal
            report.vat_on_sales += t.vat_total

        for po in filter_by_date(list(purchase_orders) + list(bills), start, end):
            t = self.totals.document_totals(po)
            report.cogs += t.subtotal
            report.vat_on_purchases += t.vat_total

        report.gross_profit = report.total_revenue - report.cogs
        report.net_vat_position = report.vat_on_sales - report.vat_on_purchases
        report.net_profit = report.gross_profit - report.net_vat_position

        logger.info(
            "profit and loss computed: revenue=%s net_profit=%s",
            format_currency(report.total_revenue, self.currency_symbol),
            format_currency(report.net_profit, self.currency_symbol),
        )
        return report

    # ------------------------------------------------------------------
    # 2. VAT report
    # ------------------------------------------------------------------

    def vat_report(
        self,
        invoices: Sequence[SalesDocument] = (),
        credit_notes: Sequence[SalesDocument] = (),
        purchase_orders: Sequence[PurchaseDocument] = (),
        bills: Sequence[PurchaseDocument] = (),
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> VatReport:
        report = VatReport(start=start, end=end)

        for inv in filter_by_date(invoices, start, end):
            row = self._row(inv, self.totals.document_totals(inv))
            report.sales.append(row)
            report.total_vat_payable += row.vat

        for cn in filter_by_date(credit_notes, start, end):
            row = self._row(cn, self.totals.document_totals(cn).negated(), sign=-1)
            report.credit_notes.append(row)
            report.total_vat_payable += row.vat

        for doc in filter_by_date(list(purchase_orders) + list(bills), start, end):
            row = self._row(doc, self.totals.document_totals(doc))
            report.purchases.append(row)
            report.total_vat_reclaimable += row.vat

        report.net_vat_position = report.total_vat_payable - report.total_vat_reclaimable
        return report
