"""
Pricing Engine — base price of a single sales line.

The base price is the pre-discount, pre-tax amount of a line:

    fixed    : (item price + selected add-ons) × quantity
    measured : line area (m²) × price per m² × quantity, floored at min_price

Lines are edited live and are often incomplete.  Every missing-data path
resolves to 0 instead of raising, so documents always render.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from bizops.models.pricing_schema import (
    AddOnOption,
    CatalogItem,
    LineEntry,
    PricingType,
)
from bizops.services.conversion_engine import factor_to_base, is_area_unit

logger = logging.getLogger("bizops-pricing")


def _add_ons_unit_price(item: CatalogItem, selected_ids: Iterable[str]) -> float:
    """Sum of selected add-on prices; ids with no matching option add 0."""
    options = {}
    for opt in item.add_on_options:
        options.setdefault(opt.id, opt)

    total = 0.0
    for add_on_id in selected_ids:
        option = options.get(add_on_id)
        if option is not None:
            total += option.price or 0.0
    return total


def line_area_sq_m(line: LineEntry) -> float:
    """
    Area of a measured line in square metres.

    Area unit on the line: `length` is the area figure and `width`, when
    positive, multiplies it (single-value area entry).  Linear unit: both
    dimensions convert to metres and multiply.
    """
    if line.unit is None:
        return 0.0

    length = line.length or 0.0
    width = line.width or 0.0
    factor = factor_to_base(line.unit)

    if is_area_unit(line.unit):
        return length * (width if width > 0 else 1.0) * factor
    return (length * factor) * (width * factor)


def calculate_base_price(item: CatalogItem, line: LineEntry) -> float:
    """
    Pre-discount, pre-tax amount for `line` priced against `item`.

    Steps:
      1. add_ons      = Σ price of selected add-on options
      2. unit_price   = item.price + add_ons
      3. fixed (or no measurement unit): unit_price × quantity
      4. measured:
           no line unit        → 0
           price_per_sq_m      = unit_price / factor(item.measurement_unit)
           calculated          = area_sq_m × price_per_sq_m × quantity
           calculated < min    → min_price (per-line floor)
    """
    effective_unit_price = item.price + _add_ons_unit_price(item, line.selected_add_on_ids)

    if item.pricing_type != PricingType.MEASURED or item.measurement_unit is None:
        return effective_unit_price * line.quantity

    if line.unit is None:
        return 0.0

    area_sq_m = line_area_sq_m(line)
    price_per_sq_m = effective_unit_price / factor_to_base(item.measurement_unit)
    calculated = area_sq_m * price_per_sq_m * line.quantity

    if item.min_price and calculated < item.min_price:
        return item.min_price

    return calculated


# ---------------------------------------------------------------------------
# Catalog-aware helpers
# ---------------------------------------------------------------------------

def resolve_add_on_options(
    item: CatalogItem,
    catalog: Mapping[str, CatalogItem],
) -> List[AddOnOption]:
    """
    Add-ons available to `item`: its own options plus its parent's when it
    is a variant.

    Options are always de-duplicated on (lower-cased name, price), variant
    or not.  The first occurrence fixes the position, the last occurrence
    supplies the option, so an earlier duplicate id no longer resolves.
    """
    parent = catalog.get(item.parent_id) if item.parent_id else None
    raw = list(item.add_on_options) + (list(parent.add_on_options) if parent else [])

    merged: Dict[Tuple[str, float], AddOnOption] = {}
    for opt in raw:
        merged[(opt.name.lower(), opt.price)] = opt
    return list(merged.values())


def with_resolved_add_ons(item: CatalogItem, catalog: Mapping[str, CatalogItem]) -> CatalogItem:
    return item.model_copy(update={"add_on_options": resolve_add_on_options(item, catalog)})


def index_catalog(items: Optional[Iterable[CatalogItem]]) -> Dict[str, CatalogItem]:
    """Id → item lookup.  The first item with a given id wins."""
    lookup: Dict[str, CatalogItem] = {}
    for item in items or []:
        lookup.setdefault(item.id, item)
    return lookup


def line_base_price(line: LineEntry, catalog: Mapping[str, CatalogItem]) -> float:
    """
    Base price of a line in the context of a catalog.

    A line whose `inventory_item_id` resolves is priced against that item
    (variants pick up parent add-ons).  Anything else is a manual line:
    `price × quantity`.
    """
    item = catalog.get(line.inventory_item_id) if line.inventory_item_id else None
    if item is None:
        if line.inventory_item_id:
            logger.debug("catalog item %s not found; pricing as manual line", line.inventory_item_id)
        return (line.price or 0.0) * line.quantity
    return calculate_base_price(with_resolved_add_ons(item, catalog), line)
