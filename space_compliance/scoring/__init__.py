"""Status handling, weighted scoring, gap analysis and cross-references."""

from .status import (
    ComplianceStatus,
    RequirementAssessment,
    build_status_map,
    check_references,
)
from .score import ScoreCalculator, ComplianceScore
from .gaps import GapAnalyzer, Gap, GapPriority, Effort
from .cross_reference import CrossReferenceFinder

__all__ = [
    "ComplianceStatus",
    "RequirementAssessment",
    "build_status_map",
    "check_references",
    "ScoreCalculator",
    "ComplianceScore",
    "GapAnalyzer",
    "Gap",
    "GapPriority",
    "Effort",
    "CrossReferenceFinder",
]
