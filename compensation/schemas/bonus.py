from pydantic import BaseModel
from datetime import date
from enum import Enum
from typing import List, Optional

from compensation.schemas.objective import Periodicity, Quarter
from compensation.schemas.weights import ResolvedWeights


class BonusStatus(str, Enum):
    CALCULATED = "calculated"
    PENDING_EVALUATION = "pending_evaluation"
    NO_PERSONAL_OBJECTIVES = "no_personal_objectives"
    NOT_EMPLOYED = "not_employed"  # hired after the bonus year


class BillingScore(BaseModel):
    configured: bool
    target: Optional[float] = None
    actual: Optional[float] = None
    gate_percentage: float
    cap_percentage: float
    raw_completion: float
    gate_met: bool
    completion: float


class NpsQuarterScore(BaseModel):
    quarter: Quarter
    target: Optional[float] = None
    actual: Optional[float] = None
    has_data: bool
    completion: Optional[float] = None  # None when the quarter has no data
    met: bool


class NpsScore(BaseModel):
    configured: bool
    quarters: List[NpsQuarterScore]
    average_completion: Optional[float] = None  # None -> "not configured"


class CorporateScore(BaseModel):
    billing: BillingScore
    nps: NpsScore
    total_completion: float
    gate_met: bool

    @property
    def configured(self) -> bool:
        return self.billing.configured or self.nps.configured


class SubObjectiveScore(BaseModel):
    id: str
    title: Optional[str] = None
    effective_value: float
    evaluated: bool


class ObjectiveScore(BaseModel):
    id: str
    title: Optional[str] = None
    periodicity: Periodicity
    effective_value: float  # the objective's own effective value
    progress: float  # value that enters the average
    evaluated: bool
    sub_objectives: List[SubObjectiveScore] = []


class PersonalScore(BaseModel):
    objectives: List[ObjectiveScore]
    average_completion: Optional[float] = None  # None -> "no objectives"
    evaluated_count: int
    total_count: int

    @property
    def fully_evaluated(self) -> bool:
        return self.total_count > 0 and self.evaluated_count == self.total_count


class ProRataProfile(BaseModel):
    applies: bool
    months: float
    factor: float
    percentage: float
    policy: str
    eligible: bool = True


class BonusBreakdown(BaseModel):
    status: BonusStatus
    company_component: float
    personal_component: Optional[float] = None
    base: Optional[float] = None
    gate_met: bool
    final_percentage: Optional[float] = None


class EmployeeSummary(BaseModel):
    id: str
    name: str
    department: Optional[str] = None
    seniority_level: Optional[str] = None
    effective_seniority_level: Optional[str] = None
    seniority_label: str
    hire_date: Optional[date] = None


class BonusResult(BaseModel):
    employee: EmployeeSummary
    year: int
    weights: ResolvedWeights
    corporate: CorporateScore
    personal: PersonalScore
    pro_rata: ProRataProfile
    bonus: BonusBreakdown
    warnings: List[str] = []

    @property
    def final_percentage(self) -> Optional[float]:
        return self.bonus.final_percentage


class WorkforceBonusSummary(BaseModel):
    year: int
    total_employees: int
    calculated_count: int
    pending_count: int
    no_objectives_count: int
    average_final_percentage: Optional[float] = None
