# compensation/config.py
from pydantic_settings import BaseSettings
from typing import Dict, Literal, Optional
from pydantic import Field, field_validator

from compensation.schemas.weights import WeightBand, WeightDistribution

# Jr, Ssr, Sr, Líder, C-Level
DEFAULT_WEIGHT_BANDS: Dict[int, WeightBand] = {
    1: WeightBand(billing=15, nps=15, area1=35, area2=35),
    2: WeightBand(billing=20, nps=20, area1=30, area2=30),
    3: WeightBand(billing=30, nps=30, area1=20, area2=20),
    4: WeightBand(billing=35, nps=35, area1=15, area2=15),
    5: WeightBand(billing=35, nps=35, area1=15, area2=15),
}


class Settings(BaseSettings):
    DATABASE_URL: str = Field("sqlite+aiosqlite:///./hr.db")
    SQLALCHEMY_DATABASE_URL: Optional[str] = None
    SQL_ECHO: bool = Field(False)
    LOG_LEVEL: str = Field("INFO")

    # Applied when a billing row leaves gate/cap empty
    BILLING_GATE_PERCENTAGE: float = Field(90, ge=0)
    BILLING_CAP_PERCENTAGE: float = Field(150, ge=0)

    DEFAULT_SENIORITY_CATEGORY: int = Field(1, ge=1, le=5)
    SENIORITY_WEIGHT_BANDS: Dict[int, WeightBand] = Field(
        default_factory=lambda: dict(DEFAULT_WEIGHT_BANDS)
    )

    PRORATA_POLICY: Literal["whole_month", "daily"] = Field("whole_month")
    WORKFORCE_CONCURRENCY: int = Field(10, ge=1)

    model_config = {
        "env_file": ".env",
        "extra": "allow",
    }

    @field_validator("SENIORITY_WEIGHT_BANDS")
    @classmethod
    def check_all_categories(cls, bands: Dict[int, WeightBand]) -> Dict[int, WeightBand]:
        missing = {1, 2, 3, 4, 5} - set(bands)
        if missing:
            raise ValueError(f"missing weight bands for categories {sorted(missing)}")
        return bands

    @property
    def effective_database_url(self) -> str:
        url = self.SQLALCHEMY_DATABASE_URL or self.DATABASE_URL
        # Ensure asyncpg is used
        if url.startswith("postgresql://") and "+asyncpg" not in url:
            url = url.replace("postgresql://", "postgresql+asyncpg://", 1)
        return url

    def weight_distribution(self, category: int) -> WeightDistribution:
        return WeightDistribution.from_band(self.SENIORITY_WEIGHT_BANDS[category])


settings = Settings()
