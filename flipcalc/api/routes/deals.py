"""Deal routes: analysis and every view derived from it."""

import logging

from fastapi import APIRouter, HTTPException

from flipcalc.api.schemas import (
    AnalysisResponse,
    AnalyzeRequest,
    ArvSuggestionResponse,
    BreakEvenRequest,
    BreakEvenResponse,
    CompareRequest,
    DealResultsResponse,
    DscrQualificationResponse,
    EndBuyerBrrrrResponse,
    EndBuyerRentalResponse,
    EndBuyerResponse,
    ExitStrategyRequest,
    ExitStrategyResponse,
    LenderComparisonResponse,
    LenderQuoteResponse,
    LenderRequest,
    PerSqFtResponse,
    PropertyComparisonResponse,
    PropertySnapshotResponse,
    RefinanceResponse,
    SensitivityPointResponse,
    SensitivityRequest,
    SensitivityResponse,
    StrategySummaryResponse,
    WholesaleResponse,
    cents,
    rounded_fields,
)
from flipcalc.models.results import DealResults
from flipcalc.engine.breakeven import solve_break_even
from flipcalc.engine.comparison import (
    compare_properties,
    cost_per_sqft,
    passes_seventy_percent_rule,
    seventy_percent_ratio,
)
from flipcalc.engine.comps import suggest_arv
from flipcalc.engine.economics import compute_deal_economics
from flipcalc.engine.exit_strategies import compare_exit_strategies
from flipcalc.engine.lenders import compare_lenders
from flipcalc.engine.sensitivity import run_sensitivity, sensitivity_sweep

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/deals", tags=["deals"])


def _results_response(results: DealResults) -> DealResultsResponse:
    return DealResultsResponse(
        **rounded_fields(results),
        cash_on_cash_unbounded=results.cash_on_cash_unbounded,
    )


def _nested(model, obj):
    return model(**rounded_fields(obj)) if obj is not None else None


@router.post("/analyze", response_model=AnalysisResponse)
async def analyze(req: AnalyzeRequest):
    """Full cost and profit breakdown for one deal.

    Adds per-sqft figures when `sqft` is given and an ARV check when comps are.
    """
    logger.info("Analyzing deal: %s", req.address or "(no address)")
    assumptions = req.to_assumptions()
    results = compute_deal_economics(assumptions)
    ratio = seventy_percent_ratio(assumptions, results)

    per_sqft = None
    if req.sqft > 0:
        per_sqft = PerSqFtResponse(**rounded_fields(cost_per_sqft(assumptions, results, req.sqft)))

    arv_suggestion = None
    if req.comps:
        suggestion = suggest_arv([c.to_comp() for c in req.comps], assumptions.arv)
        arv_suggestion = ArvSuggestionResponse(**rounded_fields(suggestion))

    return AnalysisResponse(
        address=assumptions.address,
        loan_type=assumptions.loan_type,
        purchase_price=cents(assumptions.purchase_price),
        arv=cents(assumptions.arv),
        results=_results_response(results),
        seventy_percent_ratio=cents(ratio),
        passes_seventy_percent_rule=assumptions.arv > 0 and passes_seventy_percent_rule(ratio),
        per_sqft=per_sqft,
        arv_suggestion=arv_suggestion,
    )


@router.post("/break-even", response_model=BreakEvenResponse)
async def break_even(req: BreakEvenRequest):
    logger.info("Break-even for %s, target profit %s", req.deal.address or "(no address)", req.target_profit)
    analysis = solve_break_even(req.deal.to_assumptions(), req.target_profit)
    return BreakEvenResponse(**rounded_fields(analysis))


@router.post("/sensitivity", response_model=SensitivityResponse)
async def sensitivity(req: SensitivityRequest):
    """What-if: ARV, rehab and holding period shifted by percent.

    With `sweep`, also returns profit across the range for that one variable.
    """
    assumptions = req.deal.to_assumptions()
    result = run_sensitivity(
        assumptions,
        arv_pct=req.arv_adjustment_pct,
        rehab_pct=req.rehab_adjustment_pct,
        holding_pct=req.holding_adjustment_pct,
    )

    sweep = []
    if req.sweep is not None:
        sweep = [
            SensitivityPointResponse(**rounded_fields(p))
            for p in sensitivity_sweep(assumptions, req.sweep, req.sweep_deltas)
        ]

    adjusted = result.adjusted_assumptions
    return SensitivityResponse(
        **rounded_fields(result),
        adjusted_arv=cents(adjusted.arv),
        adjusted_rehab=cents(adjusted.rehab.total_cost),
        adjusted_holding_months=adjusted.holding_months,
        base=_results_response(result.base),
        adjusted=_results_response(result.adjusted),
        sweep=sweep,
    )


@router.post("/lenders", response_model=LenderComparisonResponse)
async def lenders(req: LenderRequest):
    scenarios = None
    if req.scenarios is not None:
        scenarios = [s.to_scenario() for s in req.scenarios]
    comparison = compare_lenders(req.deal.to_assumptions(), scenarios)
    return LenderComparisonResponse(
        **rounded_fields(comparison),
        quotes=[LenderQuoteResponse(**rounded_fields(q)) for q in comparison.quotes],
    )


@router.post("/exit-strategies", response_model=ExitStrategyResponse)
async def exit_strategies(req: ExitStrategyRequest):
    """Flip vs. BRRRR vs. wholesale on the same deal."""
    comparison = compare_exit_strategies(
        req.deal.to_assumptions(),
        req.refinance.to_terms(),
        req.wholesale.to_terms(),
    )
    refinance = comparison.refinance
    wholesale = comparison.wholesale
    end_buyer = wholesale.end_buyer
    return ExitStrategyResponse(
        **rounded_fields(comparison),
        strategies=[StrategySummaryResponse(**rounded_fields(s)) for s in comparison.strategies],
        refinance=RefinanceResponse(**{
            **rounded_fields(refinance),
            "dscr_qualification": _nested(DscrQualificationResponse, refinance.dscr_qualification),
        }),
        wholesale=WholesaleResponse(
            **rounded_fields(wholesale),
            end_buyer=EndBuyerResponse(**{
                **rounded_fields(end_buyer),
                "brrrr": _nested(EndBuyerBrrrrResponse, end_buyer.brrrr),
                "rental": _nested(EndBuyerRentalResponse, end_buyer.rental),
            }),
        ),
    )


@router.post("/compare", response_model=PropertyComparisonResponse)
async def compare(req: CompareRequest):
    if not req.properties:
        raise HTTPException(status_code=400, detail="At least one property is required")

    names = [p.name for p in req.properties]
    if len(set(names)) != len(names):
        raise HTTPException(status_code=400, detail="Property names must be unique")

    logger.info("Comparing %d properties", len(names))
    comparison = compare_properties({p.name: p.deal.to_assumptions() for p in req.properties})
    return PropertyComparisonResponse(
        **rounded_fields(comparison),
        properties=[
            PropertySnapshotResponse(
                name=snap.name,
                address=snap.assumptions.address,
                results=_results_response(snap.results),
                seventy_percent_ratio=cents(snap.seventy_percent_ratio),
                passes_seventy_percent_rule=snap.passes_seventy_percent_rule,
            )
            for snap in comparison.properties
        ],
    )
