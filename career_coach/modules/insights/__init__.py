"""Insights module - Industry salary, demand and trend snapshots."""

from career_coach.modules.insights.generator import InsightGenerator
from career_coach.modules.insights.interface import (
    DemandLevel,
    IndustryInsight,
    InsightContent,
    MarketOutlook,
    RefreshSummary,
    SalaryRange,
)
from career_coach.modules.insights.models import IndustryInsightModel
from career_coach.modules.insights.service import InsightService, get_insight_service

__all__ = [
    "DemandLevel",
    "IndustryInsight",
    "IndustryInsightModel",
    "InsightContent",
    "InsightGenerator",
    "InsightService",
    "MarketOutlook",
    "RefreshSummary",
    "SalaryRange",
    "get_insight_service",
]
