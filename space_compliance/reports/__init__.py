"""Recommendations, documentation checklists and report generation."""

from .recommendations import RecommendationGenerator, RecommendationRule, UK_SPACE_RULES
from .checklist import DocumentationChecklistBuilder, ChecklistItem, EvidenceStatus
from .summaries import (
    AssessmentResult,
    ComplianceSummary,
    CrossRegimeSummary,
    LicenseRequirementSummary,
    ReportGenerator,
    summarize_cross_regime,
    summarize_statuses,
)

__all__ = [
    "RecommendationGenerator",
    "RecommendationRule",
    "UK_SPACE_RULES",
    "DocumentationChecklistBuilder",
    "ChecklistItem",
    "EvidenceStatus",
    "AssessmentResult",
    "ComplianceSummary",
    "CrossRegimeSummary",
    "LicenseRequirementSummary",
    "ReportGenerator",
    "summarize_cross_regime",
    "summarize_statuses",
]
