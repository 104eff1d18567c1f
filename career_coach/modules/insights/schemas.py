"""Pydantic schemas for validating model-generated industry insights."""

from pydantic import BaseModel, ConfigDict, Field

from career_coach.modules.insights.interface import (
    DemandLevel,
    InsightContent,
    MarketOutlook,
    SalaryRange,
)


class SalaryRangeSchema(BaseModel):
    """One salary band as returned by the model."""

    role: str = Field(..., min_length=1)
    min: float = Field(..., ge=0)
    max: float = Field(..., ge=0)
    median: float = Field(..., ge=0)
    location: str = Field(default="")


class InsightPayload(BaseModel):
    """The JSON object the industry analysis prompt asks for.

    Keys arrive in camelCase; the minimum entry counts are requested in the
    prompt but only non-emptiness is enforced here.
    """

    model_config = ConfigDict(populate_by_name=True)

    salary_ranges: list[SalaryRangeSchema] = Field(..., alias="salaryRanges", min_length=1)
    growth_rate: float = Field(..., alias="growthRate")
    demand_level: DemandLevel = Field(..., alias="demandLevel")
    top_skills: list[str] = Field(..., alias="topSkills", min_length=1)
    market_outlook: MarketOutlook = Field(..., alias="marketOutlook")
    key_trends: list[str] = Field(..., alias="keyTrends", min_length=1)
    recommended_skills: list[str] = Field(..., alias="recommendedSkills", min_length=1)

    def to_content(self) -> InsightContent:
        """Convert to the interface dataclass."""
        return InsightContent(
            salary_ranges=[SalaryRange(**r.model_dump()) for r in self.salary_ranges],
            growth_rate=self.growth_rate,
            demand_level=self.demand_level,
            top_skills=list(self.top_skills),
            market_outlook=self.market_outlook,
            key_trends=list(self.key_trends),
            recommended_skills=list(self.recommended_skills),
        )
