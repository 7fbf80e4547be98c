import logging
from typing import Dict, List, Optional, Sequence

from compensation.config import settings
from compensation.schemas.bonus import BillingScore, CorporateScore, NpsQuarterScore, NpsScore
from compensation.schemas.objective import BillingObjective, NpsObjective, Quarter
from compensation.schemas.weights import WeightDistribution
from compensation.utils.numbers import clamp, mean

logger = logging.getLogger(__name__)


def _has_ratio(actual: Optional[float], target: Optional[float]) -> bool:
    return actual is not None and target is not None and target != 0


def evaluate_billing(objective: Optional[BillingObjective]) -> BillingScore:
    """
    Annual billing with a pass/fail gate and an upside cap.

    Below the gate the completion is 0, however close attainment came.
    """
    gate = settings.BILLING_GATE_PERCENTAGE
    cap = settings.BILLING_CAP_PERCENTAGE
    if objective is not None:
        if objective.gate_percentage is not None:
            gate = objective.gate_percentage
        if objective.cap_percentage is not None:
            cap = objective.cap_percentage

    if objective is None or not _has_ratio(objective.actual_value, objective.target_value):
        return BillingScore(
            configured=False,
            target=objective.target_value if objective else None,
            actual=objective.actual_value if objective else None,
            gate_percentage=gate,
            cap_percentage=cap,
            raw_completion=0.0,
            gate_met=False,
            completion=0.0,
        )

    raw = objective.actual_value * 100 / objective.target_value
    gate_met = raw >= gate
    return BillingScore(
        configured=True,
        target=objective.target_value,
        actual=objective.actual_value,
        gate_percentage=gate,
        cap_percentage=cap,
        raw_completion=raw,
        gate_met=gate_met,
        completion=min(raw, cap) if gate_met else 0.0,
    )


def evaluate_nps(objectives: Sequence[NpsObjective]) -> NpsScore:
    by_quarter: Dict[Quarter, NpsObjective] = {}
    for objective in objectives:
        if objective.quarter in by_quarter:
            logger.warning("Duplicate NPS objective for %s %s; keeping the first", objective.year, objective.quarter.value)
            continue
        by_quarter[objective.quarter] = objective

    quarters: List[NpsQuarterScore] = []
    for quarter in Quarter:
        objective = by_quarter.get(quarter)
        actual = objective.actual_value if objective else None
        target = objective.target_value if objective else None
        if actual is None or target is None:
            # Missing quarters are left out of the average, not counted as 0
            quarters.append(NpsQuarterScore(quarter=quarter, target=target, actual=actual, has_data=False, met=False))
            continue
        met = actual >= target
        if target > 0:
            completion = clamp(actual * 100 / target)
        else:
            # NPS targets can be zero or negative; no ratio, only met / not met
            completion = 100.0 if met else 0.0
        quarters.append(NpsQuarterScore(
            quarter=quarter,
            target=target,
            actual=actual,
            has_data=True,
            completion=completion,
            met=met,
        ))

    average = mean(q.completion for q in quarters if q.has_data)
    return NpsScore(configured=average is not None, quarters=quarters, average_completion=average)


def evaluate_corporate(objectives: Sequence, weights: WeightDistribution) -> CorporateScore:
    billing_rows = [o for o in objectives if isinstance(o, BillingObjective)]
    nps_rows = [o for o in objectives if isinstance(o, NpsObjective)]
    if len(billing_rows) > 1:
        logger.warning("%d billing objectives for %s; using the first", len(billing_rows), billing_rows[0].year)

    billing = evaluate_billing(billing_rows[0] if billing_rows else None)
    nps = evaluate_nps(nps_rows)

    nps_completion = nps.average_completion or 0.0
    internal_weight = weights.billing + weights.nps
    if internal_weight:
        total = (billing.completion * weights.billing + nps_completion * weights.nps) / internal_weight
    else:
        total = 0.0

    return CorporateScore(billing=billing, nps=nps, total_completion=total, gate_met=billing.gate_met)
