"""
conftest.py — Shared pytest fixtures for the BizOps pricing engine test suite.

No database or external service fixtures are defined here.  All tests in this
suite are pure unit tests that exercise computation functions and classes in
isolation, plus API tests through FastAPI's TestClient.

Import-path bootstrapping:
    The ``backend/`` directory is inserted into sys.path so that all
    ``bizops.*`` imports resolve correctly regardless of where pytest is invoked.
"""

import sys
import os
from datetime import date

import pytest

# ---------------------------------------------------------------------------
# Ensure ``backend/`` is on the import path before any bizops imports occur.
# ---------------------------------------------------------------------------
_BACKEND_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)


# ---------------------------------------------------------------------------
# Engine fixtures
# ---------------------------------------------------------------------------

@pytest.fixture(scope="session")
def totals_engine():
    """DocumentTotalsEngine with an empty catalog (manual lines only)."""
    from bizops.services.totals_engine import DocumentTotalsEngine
    return DocumentTotalsEngine()


@pytest.fixture(scope="session")
def job_costing_engine():
    """JobCostingEngine with the default 20% cost VAT rate."""
    from bizops.services.job_costing_engine import JobCostingEngine
    return JobCostingEngine(default_vat_rate=20.0)


@pytest.fixture
def catalog_totals_engine(catalog):
    """DocumentTotalsEngine bound to the sample catalog."""
    from bizops.services.totals_engine import DocumentTotalsEngine
    return DocumentTotalsEngine(catalog)


@pytest.fixture
def report_engine(catalog):
    """ReportEngine bound to the sample catalog, £ symbol."""
    from bizops.services.report_engine import ReportEngine
    return ReportEngine(catalog, currency_symbol="£")


# ---------------------------------------------------------------------------
# Catalog fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def fixed_item():
    """Fixed-price item at 10.00 per unit with two add-ons (2.50, 1.00)."""
    from bizops.models.pricing_schema import AddOnOption, CatalogItem, PricingType
    return CatalogItem(
        id="fixed-1",
        name="Mug",
        price=10.0,
        pricing_type=PricingType.FIXED,
        add_on_options=[
            AddOnOption(id="gift-wrap", name="Gift Wrap", price=2.5),
            AddOnOption(id="engrave", name="Engraving", price=1.0),
        ],
    )


@pytest.fixture
def measured_item():
    """Measured item at 10.00 per sq m, no floor, one 5.00 lamination add-on."""
    from bizops.models.pricing_schema import AddOnOption, CatalogItem, MeasurementUnit, PricingType
    return CatalogItem(
        id="vinyl-1",
        name="Vinyl Banner",
        price=10.0,
        pricing_type=PricingType.MEASURED,
        measurement_unit=MeasurementUnit.SQ_M,
        add_on_options=[AddOnOption(id="laminate", name="Lamination", price=5.0)],
    )


@pytest.fixture
def floored_item(measured_item):
    """Same as measured_item but with a 100.00 minimum line price."""
    return measured_item.model_copy(update={"id": "vinyl-floor", "min_price": 100.0})


@pytest.fixture
def variant_parent():
    """Parent item carrying the shared add-ons for its variants."""
    from bizops.models.pricing_schema import AddOnOption, CatalogItem
    return CatalogItem(
        id="tee",
        name="T-Shirt",
        price=0.0,
        add_on_options=[
            AddOnOption(id="print-front", name="Front Print", price=4.0),
            AddOnOption(id="print-back", name="Back Print", price=3.0),
        ],
    )


@pytest.fixture
def variant_child():
    """Variant child at 12.00 with its own add-on and a duplicate of the parent's."""
    from bizops.models.pricing_schema import AddOnOption, CatalogItem
    return CatalogItem(
        id="tee-red-m",
        name="T-Shirt Red M",
        price=12.0,
        parent_id="tee",
        add_on_options=[
            AddOnOption(id="child-front", name="FRONT PRINT", price=4.0),
            AddOnOption(id="sleeve", name="Sleeve Print", price=2.0),
        ],
    )


@pytest.fixture
def catalog(fixed_item, measured_item, floored_item, variant_parent, variant_child):
    return [fixed_item, measured_item, floored_item, variant_parent, variant_child]


# ---------------------------------------------------------------------------
# Document fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def sample_invoice():
    """
    Exclusive-VAT invoice issued 2024-03-15:
      3 × Mug @ 10.00, 20% VAT → 30.00 + 6.00
      manual line 2 × 50.00, 10% discount, 20% VAT → 90.00 + 18.00
    grand_total = 144.00
    """
    from bizops.models.document_schema import SalesDocument
    from bizops.models.pricing_schema import Discount, LineEntry, TaxMode
    return SalesDocument(
        id="inv-1",
        number="INV-0001",
        customer_name="Acme Ltd",
        issue_date=date(2024, 3, 15),
        tax_mode=TaxMode.EXCLUSIVE,
        line_items=[
            LineEntry(inventory_item_id="fixed-1", quantity=3, vat_rate=20.0),
            LineEntry(
                description="Design time",
                quantity=2,
                price=50.0,
                vat_rate=20.0,
                discount=Discount(type="percentage", value=10.0),
            ),
        ],
    )


@pytest.fixture
def sample_credit_note():
    """
    Credit note 2024-03-20 against inv-1: one Mug @ 10.00 + 20% VAT = 12.00,
    applied in full to inv-1.
    """
    from bizops.models.document_schema import CreditApplication, SalesDocument, SalesDocumentKind
    from bizops.models.pricing_schema import LineEntry, TaxMode
    return SalesDocument(
        id="cn-1",
        number="CN-0001",
        kind=SalesDocumentKind.CREDIT_NOTE,
        customer_name="Acme Ltd",
        issue_date=date(2024, 3, 20),
        tax_mode=TaxMode.EXCLUSIVE,
        line_items=[LineEntry(inventory_item_id="fixed-1", quantity=1, vat_rate=20.0)],
        applications=[CreditApplication(invoice_id="inv-1", amount=12.0)],
    )


@pytest.fixture
def sample_bill():
    """
    Inclusive-VAT bill 2024-03-10: 4 × 30.00 at 20% → 120.00 gross,
    100.00 net + 20.00 VAT.
    """
    from bizops.models.document_schema import PurchaseDocument, PurchaseDocumentKind
    from bizops.models.pricing_schema import PurchaseLine, TaxMode
    return PurchaseDocument(
        id="bill-1",
        number="SUP-77",
        kind=PurchaseDocumentKind.BILL,
        supplier_name="Paper Co",
        issue_date=date(2024, 3, 10),
        tax_mode=TaxMode.INCLUSIVE,
        line_items=[PurchaseLine(quantity=4, unit_price=30.0, vat_rate=20.0)],
    )


@pytest.fixture
def sample_purchase_order():
    """
    Exclusive-VAT purchase order 2024-04-02 (outside March): 10 × 5.00 at 20%.
    """
    from bizops.models.document_schema import PurchaseDocument, PurchaseDocumentKind
    from bizops.models.pricing_schema import PurchaseLine, TaxMode
    return PurchaseDocument(
        id="po-1",
        number="PO-0001",
        kind=PurchaseDocumentKind.PURCHASE_ORDER,
        supplier_name="Paper Co",
        issue_date=date(2024, 4, 2),
        tax_mode=TaxMode.EXCLUSIVE,
        line_items=[PurchaseLine(quantity=10, unit_price=5.0, vat_rate=20.0)],
    )
