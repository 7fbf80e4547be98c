"""
Bonus calculation for one employee and one year.

Pure and synchronous: no I/O happens here. Missing data is reported in the
result (``configured`` flags, ``warnings``, ``BonusStatus``) rather than raised.
"""
import logging
from typing import Iterable, List, Optional

from pydantic import TypeAdapter

from compensation.schemas.bonus import (
    BonusBreakdown, BonusResult, BonusStatus, CorporateScore,
    EmployeeSummary, PersonalScore, ProRataProfile,
)
from compensation.schemas.objective import (
    BillingObjective, CorporateObjective, EmployeeRecord, NpsObjective, Objective,
)
from compensation.schemas.weights import WeightDistribution
from compensation.services.corporate import evaluate_corporate
from compensation.services.personal import aggregate_personal
from compensation.services.prorata import compute_prorata
from compensation.services.weights import resolve_weights

logger = logging.getLogger(__name__)

_corporate_objective = TypeAdapter(CorporateObjective)


def parse_corporate_objectives(rows: Iterable) -> list:
    """Billing/NPS variants from mappings; already-built variants pass through"""
    return [
        row if isinstance(row, (BillingObjective, NpsObjective)) else _corporate_objective.validate_python(row)
        for row in rows
    ]


def parse_objectives(rows: Iterable) -> List[Objective]:
    return [Objective.model_validate(row, from_attributes=True) for row in rows]


def compose_bonus(
    corporate: CorporateScore,
    personal: PersonalScore,
    weights: WeightDistribution,
    pro_rata: ProRataProfile,
) -> BonusBreakdown:
    company_component = corporate.total_completion * weights.company / 100

    if not pro_rata.eligible:
        status = BonusStatus.NOT_EMPLOYED
    elif personal.total_count == 0:
        status = BonusStatus.NO_PERSONAL_OBJECTIVES
    elif personal.evaluated_count < personal.total_count:
        status = BonusStatus.PENDING_EVALUATION
    else:
        status = BonusStatus.CALCULATED

    if status != BonusStatus.CALCULATED:
        # Only an employed, fully evaluated year gets a number
        return BonusBreakdown(status=status, company_component=company_component, gate_met=corporate.gate_met)

    personal_component = personal.average_completion * weights.area / 100
    base = company_component + personal_component
    return BonusBreakdown(
        status=status,
        company_component=company_component,
        personal_component=personal_component,
        base=base,
        gate_met=corporate.gate_met,
        final_percentage=base * pro_rata.factor,
    )


def calculate_employee_bonus(
    employee,
    corporate_objectives: Iterable,
    personal_objectives: Iterable,
    year: int,
    *,
    prorata_policy: Optional[str] = None,
) -> BonusResult:
    if not isinstance(employee, EmployeeRecord):
        employee = EmployeeRecord.model_validate(employee, from_attributes=True)
    corporate_rows = [o for o in parse_corporate_objectives(corporate_objectives) if o.year == year]
    personal_rows = [o for o in parse_objectives(personal_objectives) if o.year in (None, year)]

    resolved = resolve_weights(employee.effective_seniority_level)
    corporate = evaluate_corporate(corporate_rows, resolved.weights)
    personal = aggregate_personal(personal_rows)
    pro_rata = compute_prorata(employee.hire_date, year, prorata_policy)
    bonus = compose_bonus(corporate, personal, resolved.weights, pro_rata)

    warnings = []
    if resolved.warning:
        warnings.append(resolved.warning)
    if not pro_rata.eligible:
        warnings.append(f"Hired on {employee.hire_date}, after {year}; no bonus for that year")
    if not corporate.billing.configured:
        warnings.append(f"Billing objective not configured for {year}")
    if not corporate.nps.configured:
        warnings.append(f"No NPS quarter with target and actual for {year}")

    logger.debug("Bonus for employee %s (%s): %s %s", employee.id, year, bonus.status.value, bonus.final_percentage)

    return BonusResult(
        employee=EmployeeSummary(
            id=employee.id,
            name=employee.full_name,
            department=employee.department,
            seniority_level=employee.seniority_level,
            effective_seniority_level=employee.effective_seniority_level,
            seniority_label=resolved.label,
            hire_date=employee.hire_date,
        ),
        year=year,
        weights=resolved,
        corporate=corporate,
        personal=personal,
        pro_rata=pro_rata,
        bonus=bonus,
        warnings=warnings,
    )
