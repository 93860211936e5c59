"""
Pricing schemas — measurement units, catalog items and sales/purchase lines.

Wire values of every enum match what the documents store, so persisted
catalogs and line items validate without translation.
"""
from enum import Enum
from types import MappingProxyType
from typing import List, Optional

from pydantic import BaseModel, Field


class UnitFamily(str, Enum):
    AREA = "area"
    LINEAR = "linear"


class MeasurementUnit(str, Enum):
    # Area
    SQ_M = "sq_m"
    SQ_FT = "sq_ft"
    SQ_CM = "sq_cm"
    SQ_MM = "sq_mm"
    SQ_IN = "sq_in"
    # Linear
    M = "m"
    CM = "cm"
    MM = "mm"
    FT = "ft"
    IN = "in"

    @property
    def family(self) -> UnitFamily:
        return UNIT_FAMILIES[self]


# Explicit family tag per unit; never inferred from the value text.
UNIT_FAMILIES = MappingProxyType({
    MeasurementUnit.SQ_M: UnitFamily.AREA,
    MeasurementUnit.SQ_FT: UnitFamily.AREA,
    MeasurementUnit.SQ_CM: UnitFamily.AREA,
    MeasurementUnit.SQ_MM: UnitFamily.AREA,
    MeasurementUnit.SQ_IN: UnitFamily.AREA,
    MeasurementUnit.M: UnitFamily.LINEAR,
    MeasurementUnit.CM: UnitFamily.LINEAR,
    MeasurementUnit.MM: UnitFamily.LINEAR,
    MeasurementUnit.FT: UnitFamily.LINEAR,
    MeasurementUnit.IN: UnitFamily.LINEAR,
})


class PricingType(str, Enum):
    FIXED = "fixed"
    MEASURED = "measured"


class TaxMode(str, Enum):
    INCLUSIVE = "inclusive"   # line prices include VAT; VAT is extracted
    EXCLUSIVE = "exclusive"   # line prices exclude VAT; VAT is added
    NONE = "none"             # no VAT


class DiscountType(str, Enum):
    FIXED = "fixed"
    PERCENTAGE = "percentage"


class AddOnOption(BaseModel):
    id: str
    name: str
    price: float = 0.0


class Discount(BaseModel):
    type: DiscountType = DiscountType.FIXED
    value: float = 0.0


class CatalogItem(BaseModel):
    """
    Sales-side inventory item.

    For measured pricing, `price` is the price per `measurement_unit`.
    `min_price` is a per-line floor and only applies to measured pricing.
    """
    id: str = ""
    name: str = ""
    price: float = 0.0
    pricing_type: PricingType = PricingType.FIXED
    measurement_unit: Optional[MeasurementUnit] = None
    min_price: Optional[float] = None
    vat_rate: Optional[float] = None
    add_on_options: List[AddOnOption] = Field(default_factory=list)
    parent_id: Optional[str] = Field(None, description="Set on variant children; add-ons inherit from the parent")


class SupplierItem(BaseModel):
    """
    Purchase-side inventory item.

    A measured supplier item is sold as one whole sheet/roll of
    `length` × `width` (in the linear `measurement_unit`) for `price`.
    """
    id: str = ""
    name: str = ""
    supplier_id: Optional[str] = None
    price: float = 0.0
    pricing_type: PricingType = PricingType.FIXED
    length: Optional[float] = None
    width: Optional[float] = None
    measurement_unit: Optional[MeasurementUnit] = None
    include_wastage: bool = True


class LineEntry(BaseModel):
    """A sales line (invoice, quote, credit note)."""
    id: Optional[str] = None
    inventory_item_id: Optional[str] = None
    description: str = ""
    quantity: float = 1.0
    price: float = Field(0.0, description="Unit price for manual lines with no catalog item")
    length: Optional[float] = None
    width: Optional[float] = None
    unit: Optional[MeasurementUnit] = None
    selected_add_on_ids: List[str] = Field(default_factory=list)
    discount: Discount = Field(default_factory=Discount)
    vat_rate: float = 0.0


class PurchaseLine(BaseModel):
    """A purchase order or bill line. Purchase lines carry no discount."""
    id: Optional[str] = None
    supplier_item_id: Optional[str] = None
    description: str = ""
    quantity: float = 1.0
    unit_price: float = 0.0
    vat_rate: float = 0.0
