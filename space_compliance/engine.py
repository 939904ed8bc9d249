"""
Compliance assessment orchestration.

ComplianceEngine wires the pipeline together:

    profile -> validated profile -> applicable requirements -> score
            -> risk level -> gaps / cross-references / recommendations /
               checklist

Every stage is a pure function of the (requirements, statuses) pair. The
catalog and configuration are injected, so one engine class serves any
regulatory regime that supplies its own catalog, thresholds and
recommendation rules.
"""

import logging
from typing import Any, Optional, Sequence

from .catalog.requirements import Requirement, RequirementCatalog
from .config import EngineConfig
from .profile.licensing import LicenseDeterminer
from .profile.model import LicenseType, OperatorProfile
from .profile.validator import ProfileValidator
from .reports.checklist import ChecklistItem, DocumentationChecklistBuilder
from .reports.recommendations import UK_SPACE_RULES, RecommendationGenerator, RecommendationRule
from .reports.summaries import (
    AssessmentResult,
    ComplianceSummary,
    CrossRegimeSummary,
    LicenseRequirementSummary,
    summarize_cross_regime,
    summarize_statuses,
)
from .risk.classifier import RiskClassifier, RiskLevel
from .scoring.cross_reference import CrossReferenceFinder
from .scoring.gaps import Gap, GapAnalyzer
from .scoring.score import ComplianceScore, ScoreCalculator
from .scoring.status import StatusInput, build_status_map, check_references

logger = logging.getLogger(__name__)


class ComplianceEngine:
    """
    Compliance scoring and gap-analysis engine for one requirement catalog.

    The engine holds no state between calls beyond its collaborators, so a
    single instance may serve concurrent callers.
    """

    def __init__(
        self,
        catalog: RequirementCatalog,
        config: Optional[EngineConfig] = None,
        recommendation_rules: Sequence[RecommendationRule] = UK_SPACE_RULES
    ):
        """
        Initialize engine.

        Args:
            catalog: Source of requirements and applicability
            config: Weights, thresholds and limits; defaults to the UK regime
            recommendation_rules: Threshold gates for recommendations
        """
        self.catalog = catalog
        self.config = config or EngineConfig()

        self.validator = ProfileValidator()
        self.license_determiner = LicenseDeterminer()
        self.score_calculator = ScoreCalculator(self.config.weighting)
        self.risk_classifier = RiskClassifier(self.config.risk)
        self.gap_analyzer = GapAnalyzer()
        self.cross_reference_finder = CrossReferenceFinder()
        self.recommendation_generator = RecommendationGenerator(
            recommendation_rules,
            max_recommendations=self.config.max_recommendations
        )
        self.checklist_builder = DocumentationChecklistBuilder()

    def validate_profile(self, raw: Any) -> OperatorProfile:
        return self.validator.validate(raw)

    def determine_required_licenses(self, profile: OperatorProfile) -> list[LicenseType]:
        return self.license_determiner.determine(profile)

    def calculate_compliance_score(
        self,
        requirements: list[Requirement],
        statuses: StatusInput
    ) -> ComplianceScore:
        return self.score_calculator.calculate(requirements, statuses)

    def determine_risk_level(
        self,
        score: ComplianceScore,
        requirements: list[Requirement],
        statuses: StatusInput
    ) -> RiskLevel:
        return self.risk_classifier.classify(score, requirements, statuses)

    def generate_gap_analysis(self, requirements: list[Requirement], statuses: StatusInput) -> list[Gap]:
        return self.gap_analyzer.analyze(requirements, statuses)

    def find_cross_references(self, requirements: list[Requirement]) -> list[str]:
        return self.cross_reference_finder.find(requirements)

    def generate_recommendations(
        self,
        profile: OperatorProfile,
        score: ComplianceScore,
        gaps: list[Gap],
        licenses: list[LicenseType],
        cross_references: Sequence[str] = ()
    ) -> list[str]:
        return self.recommendation_generator.generate(profile, score, gaps, licenses, cross_references)

    def generate_documentation_checklist(self, profile: Any, statuses: StatusInput) -> list[ChecklistItem]:
        """Build the evidence checklist for the requirements applicable to a profile."""
        profile = self.validate_profile(profile)
        requirements = self.catalog.get_applicable_requirements(profile)
        return self.checklist_builder.build(requirements, statuses)

    def perform_assessment(self, profile: Any, statuses: StatusInput) -> AssessmentResult:
        """
        Run the full assessment.

        Args:
            profile: Raw profile mapping or validated OperatorProfile
            statuses: Status mapping or assessment records

        Returns:
            AssessmentResult

        Raises:
            ValidationError: If the profile or a status value is invalid
            UnknownReferenceError: If strict_references is set and a status
                refers to a requirement that is not in the catalog
        """
        profile = self.validate_profile(profile)
        status_map = build_status_map(statuses)

        requirements = self.catalog.get_applicable_requirements(profile)
        # Statuses for catalog requirements that do not apply are ignored silently
        unknown = check_references(
            self.catalog.all_requirements(), status_map, strict=self.config.strict_references
        )

        licenses = self.determine_required_licenses(profile)
        score = self.calculate_compliance_score(requirements, status_map)
        risk_level = self.determine_risk_level(score, requirements, status_map)
        gaps = self.generate_gap_analysis(requirements, status_map)
        cross_references = self.find_cross_references(requirements)
        recommendations = self.generate_recommendations(
            profile, score, gaps, licenses, cross_references
        )
        checklist = self.checklist_builder.build(requirements, status_map)

        logger.info(
            "Assessed %s: %d applicable requirements, score %d, risk %s, %d gaps",
            profile.operator_type.value, len(requirements), score.overall,
            risk_level.value, len(gaps)
        )

        return AssessmentResult(
            profile=profile,
            applicable_requirements=requirements,
            statuses=status_map,
            score=score,
            risk_level=risk_level,
            gaps=gaps,
            cross_references=cross_references,
            recommendations=recommendations,
            required_licenses=licenses,
            checklist=checklist,
            unknown_references=unknown,
        )

    def license_summaries(self, profile: Any, statuses: StatusInput) -> list[LicenseRequirementSummary]:
        """Score and gaps for each required licence separately."""
        profile = self.validate_profile(profile)
        status_map = build_status_map(statuses)
        applicable = self.catalog.get_applicable_requirements(profile)

        summaries = []
        for license_type in self.determine_required_licenses(profile):
            requirements = [r for r in applicable if license_type in r.license_types]
            score = self.calculate_compliance_score(requirements, status_map)
            summaries.append(LicenseRequirementSummary(
                license_type=license_type,
                requirements=requirements,
                compliance_score=score.overall,
                gaps=self.generate_gap_analysis(requirements, status_map),
            ))
        return summaries

    def compliance_summary(self, profile: Any, statuses: StatusInput) -> ComplianceSummary:
        """Status counts over the requirements applicable to a profile."""
        profile = self.validate_profile(profile)
        return summarize_statuses(
            total_requirements=len(self.catalog.all_requirements()),
            requirements=self.catalog.get_applicable_requirements(profile),
            status_map=build_status_map(statuses),
            required_licenses=self.determine_required_licenses(profile),
        )

    def cross_regime_summary(self, profile: Any) -> CrossRegimeSummary:
        """Overlap of the applicable requirements with the catalog's comparison regime."""
        profile = self.validate_profile(profile)
        return summarize_cross_regime(
            self.catalog.get_applicable_requirements(profile),
            self.catalog.comparisons(),
        )
