"""ARV check from comparable sales.

Pure functions. No I/O.
"""

from decimal import Decimal

from flipcalc.models.comps import ArvSuggestion, Comp, Confidence

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def adjusted_price(comp: Comp) -> Decimal:
    """Sale price after percent adjustments and the flat adjustment."""
    pct = comp.location_adjustment_pct + comp.condition_adjustment_pct + comp.size_adjustment_pct
    return comp.sale_price + comp.sale_price * pct / HUNDRED + comp.other_adjustment


def price_per_sqft(price: Decimal, sqft: int) -> Decimal:
    if sqft <= 0:
        return ZERO
    return price / sqft


def _confidence(count: int, cv_pct: Decimal) -> Confidence:
    if count >= 3 and cv_pct < 10:
        return Confidence.HIGH
    if count >= 2 and cv_pct < 20:
        return Confidence.MEDIUM
    return Confidence.LOW


def suggest_arv(comps: list[Comp], subject_arv: Decimal = ZERO) -> ArvSuggestion:
    """Average adjusted comp price, with confidence from count and spread.

    Comps without a sale price or square footage are ignored.
    """
    valid = [c for c in comps if c.is_valid]
    if not valid:
        return ArvSuggestion()

    prices = [adjusted_price(c) for c in valid]
    mean = sum(prices, ZERO) / len(prices)
    variance = sum(((p - mean) ** 2 for p in prices), ZERO) / len(prices)
    cv_pct = variance.sqrt() / mean * HUNDRED if mean > 0 else ZERO

    total_sqft = sum(c.sqft for c in valid)
    difference = (mean - subject_arv) / subject_arv * HUNDRED if subject_arv > 0 else ZERO

    return ArvSuggestion(
        value=mean,
        confidence=_confidence(len(valid), cv_pct),
        comp_count=len(valid),
        price_per_sqft=price_per_sqft(sum(prices, ZERO), total_sqft),
        coefficient_of_variation_pct=cv_pct,
        difference_from_subject_pct=difference,
    )
