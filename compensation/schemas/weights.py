from pydantic import BaseModel, Field, model_validator
from typing import Optional


class WeightBand(BaseModel):
    """One row of the seniority policy table; company/area are derived."""
    billing: float = Field(..., ge=0, le=100)
    nps: float = Field(..., ge=0, le=100)
    area1: float = Field(..., ge=0, le=100)
    area2: float = Field(..., ge=0, le=100)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_total(self):
        total = self.billing + self.nps + self.area1 + self.area2
        if abs(total - 100) > 1e-9:
            raise ValueError(f"weight band must add up to 100, got {total}")
        return self


class WeightDistribution(BaseModel):
    company: float
    area: float
    billing: float
    nps: float
    area1: float
    area2: float

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def check_invariants(self):
        if abs(self.billing + self.nps - self.company) > 1e-9:
            raise ValueError("billing + nps must equal company")
        if abs(self.area1 + self.area2 - self.area) > 1e-9:
            raise ValueError("area1 + area2 must equal area")
        if abs(self.company + self.area - 100) > 1e-9:
            raise ValueError("company + area must equal 100")
        return self

    @classmethod
    def from_band(cls, band: WeightBand) -> "WeightDistribution":
        return cls(
            company=band.billing + band.nps,
            area=band.area1 + band.area2,
            billing=band.billing,
            nps=band.nps,
            area1=band.area1,
            area2=band.area2,
        )


class ResolvedWeights(BaseModel):
    seniority_level: Optional[str]
    category: int
    label: str
    is_default: bool  # True when the level was missing or malformed
    warning: Optional[str] = None
    weights: WeightDistribution
