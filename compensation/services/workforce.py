import asyncio
import logging
from datetime import date
from typing import List, Optional, Sequence

from sqlalchemy import select, or_
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from compensation.config import settings
from compensation.core.exceptions import EmployeeNotFoundError
from compensation.database import AsyncSessionLocal
from compensation.models.employee import Employee, SeniorityHistory
from compensation.models.objective import CorporateObjective, Objective
from compensation.schemas.bonus import BonusResult, BonusStatus, WorkforceBonusSummary
from compensation.schemas.objective import EmployeeRecord
from compensation.services.bonus import calculate_employee_bonus, parse_corporate_objectives, parse_objectives
from compensation.utils.numbers import mean

logger = logging.getLogger(__name__)


async def load_corporate_objectives(db: AsyncSession, year: int) -> list:
    result = await db.execute(
        select(CorporateObjective)
        .where(CorporateObjective.year == year)
        .order_by(CorporateObjective.objective_type, CorporateObjective.quarter)
    )
    return parse_corporate_objectives(
        {
            "objective_type": row.objective_type,
            "year": row.year,
            "quarter": row.quarter,
            "target_value": row.target_value,
            "actual_value": row.actual_value,
            "gate_percentage": row.gate_percentage,
            "cap_percentage": row.cap_percentage,
        }
        for row in result.scalars()
    )


async def get_seniority_at_year_end(db: AsyncSession, employee_id: str, year: int) -> Optional[str]:
    """Level in force on 31 December of ``year``, from the seniority history"""
    result = await db.execute(
        select(SeniorityHistory.new_level)
        .where(SeniorityHistory.employee_id == employee_id)
        .where(SeniorityHistory.effective_date <= date(year, 12, 31))
        .order_by(SeniorityHistory.effective_date.desc())
        .limit(1)
    )
    return result.scalar_one_or_none()


async def load_employee(db: AsyncSession, employee_id: str, year: int, as_of: date) -> EmployeeRecord:
    result = await db.execute(select(Employee).where(Employee.id == employee_id))
    employee = result.scalar_one_or_none()
    if not employee:
        raise EmployeeNotFoundError(employee_id)

    seniority_at_year_end = None
    if year != as_of.year:
        seniority_at_year_end = await get_seniority_at_year_end(db, employee_id, year)

    return EmployeeRecord(
        id=employee.id,
        first_name=employee.first_name,
        last_name=employee.last_name,
        department=employee.department.name if employee.department else None,
        seniority_level=employee.seniority_level,
        seniority_at_year_end=seniority_at_year_end,
        hire_date=employee.hire_date,
    )


async def load_personal_objectives(db: AsyncSession, employee_id: str, year: int):
    """Main objectives for the year plus their sub-objectives"""
    mains = await db.execute(
        select(Objective)
        .where(Objective.employee_id == employee_id)
        .where(Objective.year == year)
        .where(Objective.parent_objective_id.is_(None))
    )
    main_rows = mains.scalars().all()
    if not main_rows:
        return []

    subs = await db.execute(
        select(Objective)
        .where(Objective.parent_objective_id.in_([m.id for m in main_rows]))
        .order_by(Objective.sub_objective_number)
    )
    return parse_objectives(list(main_rows) + list(subs.scalars().all()))


async def calculate_bonus_for_employee(
    db: AsyncSession,
    employee_id: str,
    year: int,
    *,
    as_of: Optional[date] = None,
    corporate_objectives: Optional[list] = None,
    prorata_policy: Optional[str] = None,
) -> BonusResult:
    as_of = as_of or date.today()
    employee = await load_employee(db, employee_id, year, as_of)
    if corporate_objectives is None:
        corporate_objectives = await load_corporate_objectives(db, year)
    objectives = await load_personal_objectives(db, employee_id, year)

    return calculate_employee_bonus(
        employee, corporate_objectives, objectives, year, prorata_policy=prorata_policy
    )


async def list_active_employee_ids(db: AsyncSession, year: int) -> List[str]:
    result = await db.execute(
        select(Employee.id)
        .where(Employee.status == "active")
        .where(or_(Employee.hire_date.is_(None), Employee.hire_date <= date(year, 12, 31)))
        .order_by(Employee.last_name, Employee.first_name)
    )
    return list(result.scalars().all())


async def calculate_workforce_bonuses(
    year: int,
    *,
    session_factory: Optional[async_sessionmaker] = None,
    as_of: Optional[date] = None,
    concurrency: Optional[int] = None,
    prorata_policy: Optional[str] = None,
) -> List[BonusResult]:
    session_factory = session_factory or AsyncSessionLocal
    as_of = as_of or date.today()

    # Corporate objectives are shared read-only by every employee
    async with session_factory() as db:
        corporate_objectives = await load_corporate_objectives(db, year)
        employee_ids = await list_active_employee_ids(db, year)

    logger.info("Calculating %s bonuses for %d employees", year, len(employee_ids))
    semaphore = asyncio.Semaphore(concurrency or settings.WORKFORCE_CONCURRENCY)

    async def run(employee_id: str) -> BonusResult:
        async with semaphore:
            async with session_factory() as db:
                return await calculate_bonus_for_employee(
                    db, employee_id, year,
                    as_of=as_of,
                    corporate_objectives=corporate_objectives,
                    prorata_policy=prorata_policy,
                )

    return list(await asyncio.gather(*(run(employee_id) for employee_id in employee_ids)))


def summarize_workforce(results: Sequence[BonusResult], year: int) -> WorkforceBonusSummary:
    """Workforce totals; only fully evaluated bonuses enter the average"""
    calculated = [r for r in results if r.bonus.status == BonusStatus.CALCULATED]
    return WorkforceBonusSummary(
        year=year,
        total_employees=len(results),
        calculated_count=len(calculated),
        pending_count=sum(1 for r in results if r.bonus.status == BonusStatus.PENDING_EVALUATION),
        no_objectives_count=sum(1 for r in results if r.bonus.status == BonusStatus.NO_PERSONAL_OBJECTIVES),
        average_final_percentage=mean(r.bonus.final_percentage for r in calculated),
    )
