"""Comparable sales used to sanity-check an ARV."""

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class CompCondition(Enum):
    INFERIOR = "inferior"
    SIMILAR = "similar"
    SUPERIOR = "superior"


class Confidence(Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


@dataclass(frozen=True)
class Comp:
    address: str
    sale_price: Decimal
    sqft: int
    sale_date: str = ""
    bedrooms: int = 3
    bathrooms: Decimal = Decimal("2")
    condition: CompCondition = CompCondition.SIMILAR
    # Percent adjustments to sale price, +/- (5 = +5%)
    location_adjustment_pct: Decimal = Decimal("0")
    condition_adjustment_pct: Decimal = Decimal("0")
    size_adjustment_pct: Decimal = Decimal("0")
    other_adjustment: Decimal = Decimal("0")  # Dollars

    @property
    def is_valid(self) -> bool:
        return self.sale_price > 0 and self.sqft > 0


@dataclass(frozen=True)
class ArvSuggestion:
    value: Decimal = Decimal("0")
    confidence: Confidence = Confidence.LOW
    comp_count: int = 0
    price_per_sqft: Decimal = Decimal("0")
    coefficient_of_variation_pct: Decimal = Decimal("0")
    difference_from_subject_pct: Decimal = Decimal("0")
