import calendar
from datetime import date
from typing import Callable, Dict, Optional

from compensation.config import settings
from compensation.schemas.bonus import ProRataProfile


def whole_month_factor(hire_date: date, year: int):
    """The hire month counts in full: hired any day of July -> 6 months"""
    months = 12 - (hire_date.month - 1)
    return months, months / 12


def daily_factor(hire_date: date, year: int):
    days_in_year = 366 if calendar.isleap(year) else 365
    days_worked = (date(year, 12, 31) - hire_date).days + 1
    factor = days_worked / days_in_year
    return round(factor * 12, 1), factor


PRORATA_POLICIES: Dict[str, Callable] = {
    "whole_month": whole_month_factor,
    "daily": daily_factor,
}


def compute_prorata(hire_date: Optional[date], year: int, policy: Optional[str] = None) -> ProRataProfile:
    policy = policy or settings.PRORATA_POLICY
    if policy not in PRORATA_POLICIES:
        raise ValueError(f"Unknown pro-rata policy: {policy}")

    if hire_date is not None and hire_date.year > year:
        # Not yet employed that year: nothing to pay, factor left at 1
        return ProRataProfile(applies=False, months=0, factor=1.0, percentage=100.0, policy=policy, eligible=False)

    if hire_date is None or hire_date.year != year:
        return ProRataProfile(applies=False, months=12, factor=1.0, percentage=100.0, policy=policy)

    months, factor = PRORATA_POLICIES[policy](hire_date, year)
    return ProRataProfile(applies=True, months=months, factor=factor, percentage=factor * 100, policy=policy)
