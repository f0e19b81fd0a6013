"""Rehab budget builders: categorized templates and per-sqft presets.

Pure functions. No I/O.
"""

from decimal import Decimal, ROUND_HALF_UP

from flipcalc.models.rehab import (
    ItemizedRehab,
    RehabCategory,
    RehabLineItem,
    RehabPreset,
    SimpleRehab,
)

WHOLE_DOLLARS = Decimal("1")

# Category name -> line item names, in display order.
DEFAULT_CATEGORIES: dict[str, tuple[str, ...]] = {
    "Exterior & Landscaping": (
        "Roof Repair/Replace", "Siding/Stucco", "Windows", "Exterior Paint",
        "Landscaping", "Driveway/Concrete", "Deck/Patio", "Fencing",
    ),
    "Kitchen": (
        "Cabinets", "Countertops", "Appliances", "Sink & Faucet",
        "Backsplash", "Flooring", "Lighting",
    ),
    "Bathrooms": (
        "Vanity/Sink", "Toilet", "Tub/Shower", "Tile Work",
        "Plumbing Fixtures", "Mirrors/Hardware",
    ),
    "Interior General": (
        "Interior Paint", "Flooring (Carpet/LVP)", "Doors & Trim",
        "Drywall Repair", "Light Fixtures", "Hardware/Doorknobs",
    ),
    "Mechanical & Systems": (
        "HVAC System", "Electrical Panel/Wiring", "Plumbing/Water Heater",
        "Foundation Repair", "Insulation",
    ),
    "Permits & Misc": (
        "Permits & Fees", "Dumpster/Cleanup", "Staging", "Contingency (10%)",
    ),
}

DEFAULT_PRESETS: tuple[RehabPreset, ...] = (
    RehabPreset("light", "Light Cosmetic", "Paint, flooring, fixtures, minor repairs"),
    RehabPreset("medium", "Medium Rehab", "Kitchen/bath updates, some systems work"),
    RehabPreset("full", "Full Gut", "Complete renovation, new everything"),
)


def default_rehab_categories() -> tuple[RehabCategory, ...]:
    """Standard rehab categories with every line item at zero cost."""
    return tuple(
        RehabCategory(
            name=name,
            items=tuple(RehabLineItem(name=item) for item in items),
        )
        for name, items in DEFAULT_CATEGORIES.items()
    )


def itemized_rehab(costs: dict[str, dict[str, Decimal]] | None = None) -> ItemizedRehab:
    """Build an itemized budget from the default template.

    Args:
        costs: category name -> {line item name -> cost}. Unknown names are
            appended to their category (or as a new category).
    """
    costs = costs or {}
    categories: list[RehabCategory] = []
    seen: set[str] = set()

    for category in default_rehab_categories():
        overrides = dict(costs.get(category.name, {}))
        items = [
            RehabLineItem(name=item.name, cost=overrides.pop(item.name, item.cost))
            for item in category.items
        ]
        items.extend(RehabLineItem(name=name, cost=cost) for name, cost in overrides.items())
        categories.append(RehabCategory(name=category.name, items=tuple(items)))
        seen.add(category.name)

    for name, items in costs.items():
        if name in seen:
            continue
        categories.append(RehabCategory(
            name=name,
            items=tuple(RehabLineItem(name=item, cost=cost) for item, cost in items.items()),
        ))

    return ItemizedRehab(categories=tuple(categories))


def estimate_preset_cost(preset: RehabPreset, sqft: int) -> Decimal | None:
    """Whole-dollar rehab estimate for a preset, or None if it can't be applied."""
    if not preset.is_configured or sqft <= 0:
        return None
    return (preset.cost_per_sqft * sqft).quantize(WHOLE_DOLLARS, ROUND_HALF_UP)


def apply_preset(preset: RehabPreset, sqft: int) -> SimpleRehab | None:
    cost = estimate_preset_cost(preset, sqft)
    if cost is None:
        return None
    return SimpleRehab(cost=cost)
