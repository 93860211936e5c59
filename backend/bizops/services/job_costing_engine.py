"""
Job Costing Engine — material cost of a job line from supplier stock.

Measured supplier materials are bought as whole sheets/rolls.  A job line
consumes part of that area (proportional cost), but whole sheets have to be
bought, so the difference is booked as wastage:

    proportional = line area (m²) × cost per m² × quantity
    sheets       = min over both orientations of ceil(L/sheetL) × ceil(W/sheetW)
    total        = sheets × quantity × sheet price
    wastage      = total − proportional

Missing data gives zero cost rather than an error.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

from bizops.config import DEFAULT_VAT_RATE
from bizops.models.pricing_schema import LineEntry, MeasurementUnit, PricingType, SupplierItem
from bizops.services.conversion_engine import (
    convert_to_base_units,
    cost_unit_prices,
    is_area_unit,
)
from bizops.services.pricing_engine import line_area_sq_m

logger = logging.getLogger("bizops-job-costing")


@dataclass(frozen=True)
class MaterialCost:
    proportional_cost: float = 0.0
    wastage_cost: float = 0.0
    total_material_cost: float = 0.0
    cost_vat_rate: float = 0.0
    cost_vat: float = 0.0
    sheets_consumed: int = 0


def sheets_required(
    length_m: float,
    width_m: float,
    sheet_length_m: float,
    sheet_width_m: float,
) -> int:
    """
    Whole sheets needed to cover length × width.

    Try both orientations; pick whichever needs fewer sheets.
    """
    if min(length_m, width_m, sheet_length_m, sheet_width_m) <= 0:
        return 0
    normal = math.ceil(length_m / sheet_length_m) * math.ceil(width_m / sheet_width_m)
    rotated = math.ceil(length_m / sheet_width_m) * math.ceil(width_m / sheet_length_m)
    return min(normal, rotated)


class JobCostingEngine:
    """Material and manual cost lines for job costing."""

    def __init__(self, default_vat_rate: float = DEFAULT_VAT_RATE) -> None:
        self.default_vat_rate = default_vat_rate

    def _with_vat(self, proportional: float, wastage: float, total: float,
                  vat_rate: Optional[float], sheets: int = 0) -> MaterialCost:
        rate = self.default_vat_rate if vat_rate is None else vat_rate
        return MaterialCost(
            proportional_cost=proportional,
            wastage_cost=wastage,
            total_material_cost=total,
            cost_vat_rate=rate,
            cost_vat=total * (rate / 100.0),
            sheets_consumed=sheets,
        )

    def material_cost(
        self,
        line: LineEntry,
        supplier_item: Optional[SupplierItem],
        cost_vat_rate: Optional[float] = None,
    ) -> MaterialCost:
        """
        Cost of the supplier material consumed by `line`.

        Fixed supplier items cost price × quantity.  Measured items are
        costed per m² from the sheet price, with sheet wastage added when
        the item tracks wastage and the line has linear length and width.
        """
        if supplier_item is None:
            return MaterialCost()

        if supplier_item.pricing_type != PricingType.MEASURED:
            proportional = supplier_item.price * line.quantity
            return self._with_vat(proportional, 0.0, proportional, cost_vat_rate)

        unit_prices = cost_unit_prices(
            supplier_item.price,
            supplier_item.length,
            supplier_item.width,
            supplier_item.measurement_unit,
        )
        cost_per_sq_m = unit_prices.get(MeasurementUnit.SQ_M)
        if not cost_per_sq_m or line.unit is None or not line.length:
            return self._with_vat(0.0, 0.0, 0.0, cost_vat_rate)

        # Same area rule as sales pricing: an area-unit line is length (× width
        # as a multiplier), not length × width as two converted dimensions.
        proportional = line_area_sq_m(line) * cost_per_sq_m * line.quantity

        tracks_wastage = (
            supplier_item.include_wastage
            and not is_area_unit(line.unit)
            and bool(line.width)
        )
        if not tracks_wastage:
            return self._with_vat(proportional, 0.0, proportional, cost_vat_rate)

        # cost_unit_prices returned a price, so the sheet is fully dimensioned
        sheets = sheets_required(
            convert_to_base_units(line.length, line.unit),
            convert_to_base_units(line.width, line.unit),
            convert_to_base_units(supplier_item.length, supplier_item.measurement_unit),
            convert_to_base_units(supplier_item.width, supplier_item.measurement_unit),
        )
        if sheets <= 0:
            return self._with_vat(proportional, 0.0, proportional, cost_vat_rate)

        total = sheets * line.quantity * supplier_item.price
        return self._with_vat(proportional, total - proportional, total, cost_vat_rate, sheets)

    def manual_cost(self, amount: float, vat_rate: Optional[float] = None) -> MaterialCost:
        """Unlinked cost line; an absent rate means no VAT."""
        amount = amount or 0.0
        rate = vat_rate if vat_rate is not None else 0.0
        return MaterialCost(
            proportional_cost=amount,
            total_material_cost=amount,
            cost_vat_rate=rate,
            cost_vat=amount * (rate / 100.0),
        )
