from pydantic import BaseModel, Field
from datetime import date
from enum import Enum
from typing import Annotated, Literal, Optional, Union


class Periodicity(str, Enum):
    ANNUAL = "annual"
    SEMESTRAL = "semestral"
    TRIMESTRAL = "trimestral"


class Quarter(str, Enum):
    Q1 = "q1"
    Q2 = "q2"
    Q3 = "q3"
    Q4 = "q4"


class BillingObjective(BaseModel):
    objective_type: Literal["billing"] = "billing"
    year: int
    quarter: None = None  # billing is always annual
    target_value: Optional[float] = None
    actual_value: Optional[float] = None
    gate_percentage: Optional[float] = None
    cap_percentage: Optional[float] = None

    model_config = {"from_attributes": True}


class NpsObjective(BaseModel):
    objective_type: Literal["nps"] = "nps"
    year: int
    quarter: Quarter
    target_value: Optional[float] = None
    actual_value: Optional[float] = None

    model_config = {"from_attributes": True}


CorporateObjective = Annotated[
    Union[BillingObjective, NpsObjective], Field(discriminator="objective_type")
]


class Objective(BaseModel):
    id: str
    employee_id: Optional[str] = None
    year: Optional[int] = None
    title: Optional[str] = None
    parent_objective_id: Optional[str] = None
    periodicity: Periodicity = Periodicity.ANNUAL
    progress_percentage: float = 0
    achievement_percentage: Optional[float] = None
    is_locked: bool = False
    weight_pct: Optional[float] = None

    model_config = {"from_attributes": True}

    @property
    def is_main(self) -> bool:
        return self.parent_objective_id is None

    @property
    def is_evaluated(self) -> bool:
        return self.is_locked or self.achievement_percentage is not None


class EmployeeRecord(BaseModel):
    id: str
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    department: Optional[str] = None
    seniority_level: Optional[str] = None
    seniority_at_year_end: Optional[str] = None
    hire_date: Optional[date] = None

    model_config = {"from_attributes": True}

    @property
    def full_name(self) -> str:
        return " ".join(p for p in (self.first_name, self.last_name) if p)

    @property
    def effective_seniority_level(self) -> Optional[str]:
        return self.seniority_at_year_end or self.seniority_level
