"""Rehab budget data types.

A rehab budget is either one aggregate figure or a categorized breakdown.
Both reduce to a single `total_cost`.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class RehabLineItem:
    name: str
    cost: Decimal = Decimal("0")


@dataclass(frozen=True)
class RehabCategory:
    name: str
    items: tuple[RehabLineItem, ...] = ()

    @property
    def total_cost(self) -> Decimal:
        return sum((item.cost for item in self.items), Decimal("0"))


@dataclass(frozen=True)
class SimpleRehab:
    cost: Decimal = Decimal("0")

    @property
    def total_cost(self) -> Decimal:
        return self.cost


@dataclass(frozen=True)
class ItemizedRehab:
    categories: tuple[RehabCategory, ...] = ()

    @property
    def total_cost(self) -> Decimal:
        return sum((category.total_cost for category in self.categories), Decimal("0"))


RehabBudget = SimpleRehab | ItemizedRehab


@dataclass(frozen=True)
class RehabPreset:
    """Cost-per-square-foot shortcut for a rehab scope.

    A preset with `cost_per_sqft` of 0 is unconfigured and cannot be applied.
    """
    key: str
    name: str
    description: str
    cost_per_sqft: Decimal = Decimal("0")

    @property
    def is_configured(self) -> bool:
        return self.cost_per_sqft > 0
