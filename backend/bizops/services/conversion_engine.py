"""
Conversion Engine — measurement-unit table and per-area price derivation.

Covers:
  - Conversion factors into square metres (area units) and metres (linear units)
  - Unit family checks
  - Equivalent prices: one area price re-expressed in every area unit
  - Cost unit prices: a whole sheet/roll price spread over its area

Pure functions over an immutable table; nothing here raises for bad input.
Incomplete or inconsistent inputs return an empty mapping.
"""

import logging
from types import MappingProxyType
from typing import Dict, List, Optional

from bizops.models.pricing_schema import MeasurementUnit, UnitFamily, UNIT_FAMILIES

logger = logging.getLogger("bizops-conversion")


# ---------------------------------------------------------------------------
# Physical constants
# ---------------------------------------------------------------------------
METERS_PER_FOOT: float = 0.3048
CM_PER_METER: float = 100.0
MM_PER_METER: float = 1000.0
INCHES_PER_FOOT: float = 12.0


# ---------------------------------------------------------------------------
# Conversion table
#   area units   -> square metres
#   linear units -> metres
# ---------------------------------------------------------------------------
CONVERSION_TO_BASE_UNIT = MappingProxyType({
    MeasurementUnit.SQ_M: 1.0,
    MeasurementUnit.SQ_FT: METERS_PER_FOOT * METERS_PER_FOOT,
    MeasurementUnit.SQ_CM: (1 / CM_PER_METER) * (1 / CM_PER_METER),
    MeasurementUnit.SQ_MM: (1 / MM_PER_METER) * (1 / MM_PER_METER),
    MeasurementUnit.SQ_IN: (METERS_PER_FOOT / INCHES_PER_FOOT) * (METERS_PER_FOOT / INCHES_PER_FOOT),
    MeasurementUnit.M: 1.0,
    MeasurementUnit.CM: 1 / CM_PER_METER,
    MeasurementUnit.MM: 1 / MM_PER_METER,
    MeasurementUnit.FT: METERS_PER_FOOT,
    MeasurementUnit.IN: METERS_PER_FOOT / INCHES_PER_FOOT,
})


def factor_to_base(unit: MeasurementUnit) -> float:
    """Factor that takes a value in `unit` to m² (area) or m (linear)."""
    return CONVERSION_TO_BASE_UNIT[MeasurementUnit(unit)]


def is_area_unit(unit: MeasurementUnit) -> bool:
    return UNIT_FAMILIES[MeasurementUnit(unit)] is UnitFamily.AREA


def is_linear_unit(unit: MeasurementUnit) -> bool:
    return not is_area_unit(unit)


def area_units() -> List[MeasurementUnit]:
    return [u for u in MeasurementUnit if is_area_unit(u)]


def linear_units() -> List[MeasurementUnit]:
    return [u for u in MeasurementUnit if is_linear_unit(u)]


def convert_to_base_units(value: float, unit: MeasurementUnit) -> float:
    return value * factor_to_base(unit)


def _scale_to_area_units(price_per_sq_m: float) -> Dict[MeasurementUnit, float]:
    return {unit: price_per_sq_m * factor_to_base(unit) for unit in area_units()}


# ---------------------------------------------------------------------------
# Price derivation
# ---------------------------------------------------------------------------

def equivalent_prices(
    base_price: Optional[float],
    base_unit: Optional[MeasurementUnit],
) -> Dict[MeasurementUnit, float]:
    """
    Re-express a price quoted per `base_unit` in every area unit.

    Returns an empty mapping when `base_unit` is missing or linear, or when
    `base_price` is missing or not positive (forms pre-fill before a price is
    entered).

    Formula:
        price_per_sq_m = base_price / factor(base_unit)
        price[u]       = price_per_sq_m * factor(u)
    """
    if base_unit is None or not is_area_unit(base_unit):
        return {}
    if not base_price or base_price <= 0:
        return {}

    price_per_sq_m = base_price / factor_to_base(base_unit)
    return _scale_to_area_units(price_per_sq_m)


def cost_unit_prices(
    total_price: Optional[float],
    length: Optional[float],
    width: Optional[float],
    linear_unit: Optional[MeasurementUnit],
) -> Dict[MeasurementUnit, float]:
    """
    Spread the price of one whole sheet/roll over its area, per area unit.

    `length` and `width` are the material's dimensions in `linear_unit`.
    Passing an area unit for the dimensions is a caller defect: it is logged
    and an empty mapping is returned.

    Formula:
        area_sq_m      = (length * f) * (width * f)
        cost_per_sq_m  = total_price / area_sq_m
        price[u]       = cost_per_sq_m * factor(u)
    """
    if not total_price or total_price <= 0:
        return {}
    if not length or length <= 0 or not width or width <= 0:
        return {}
    if linear_unit is None:
        return {}

    if is_area_unit(linear_unit):
        logger.error(
            "cost_unit_prices expects a linear unit for dimensions",
            extra={"unit": MeasurementUnit(linear_unit).value},
        )
        return {}

    factor = factor_to_base(linear_unit)
    area_sq_m = (length * factor) * (width * factor)
    if area_sq_m <= 0:
        return {}

    return _scale_to_area_units(total_price / area_sq_m)
