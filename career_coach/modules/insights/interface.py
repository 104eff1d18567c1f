"""Insights Module - Industry salary, demand and trend snapshots."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Protocol
from uuid import UUID

from career_coach.shared.datetime_utils import utc_now


class DemandLevel(str, Enum):
    """How strongly employers are hiring in an industry."""

    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


class MarketOutlook(str, Enum):
    """Overall direction of an industry's job market."""

    POSITIVE = "Positive"
    NEUTRAL = "Neutral"
    NEGATIVE = "Negative"


@dataclass
class SalaryRange:
    """Salary band for one role."""

    role: str
    min: float
    max: float
    median: float
    location: str


@dataclass
class InsightContent:
    """What the model produced for an industry, before it is stored."""

    salary_ranges: list[SalaryRange]
    growth_rate: float  # Percentage
    demand_level: DemandLevel
    top_skills: list[str]
    market_outlook: MarketOutlook
    key_trends: list[str]
    recommended_skills: list[str]


@dataclass
class IndustryInsight:
    """A stored insight snapshot for one industry."""

    id: UUID
    industry: str
    salary_ranges: list[SalaryRange]
    growth_rate: float
    demand_level: DemandLevel
    top_skills: list[str]
    market_outlook: MarketOutlook
    key_trends: list[str]
    recommended_skills: list[str]
    last_updated: datetime = field(default_factory=utc_now)
    next_update: datetime = field(default_factory=utc_now)


@dataclass
class RefreshSummary:
    """Outcome of a refresh_all run."""

    refreshed: list[str] = field(default_factory=list)
    failed: dict[str, str] = field(default_factory=dict)  # industry -> error message

    @property
    def total(self) -> int:
        return len(self.refreshed) + len(self.failed)


class IInsightGenerator(Protocol):
    """Produces fresh insight content for an industry."""

    async def generate(self, industry: str) -> InsightContent:
        ...
