"""
Free-text action recommendations.

Each recommendation is gated by a score threshold on a category or licence,
optionally combined with a profile flag. Rules are plain data so another
regulatory regime can bring its own set.
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from ..catalog.requirements import RequirementCategory
from ..profile.model import LicenseType, OperatorProfile
from ..scoring.gaps import Gap, GapPriority
from ..scoring.score import ComplianceScore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RecommendationRule:
    """
    A threshold gate producing one recommendation.

    Exactly one of category or license_type is set. A gate on a category or
    licence that is absent from the score never fires; a licence gate also
    requires the licence to be among the required licences.
    """

    message: str
    priority: GapPriority
    threshold: int
    category: Optional[RequirementCategory] = None
    license_type: Optional[LicenseType] = None
    profile_flag: Optional[str] = None

    def fires(
        self,
        profile: OperatorProfile,
        score: ComplianceScore,
        licenses: Sequence[LicenseType]
    ) -> bool:
        if self.profile_flag and not getattr(profile, self.profile_flag):
            return False
        if self.license_type is not None:
            if self.license_type not in licenses:
                return False
            value = score.license(self.license_type)
        else:
            value = score.category(self.category)
        return value is not None and value < self.threshold


def _category_rule(message, priority, category, threshold, flag=None):
    return RecommendationRule(message, priority, threshold, category=category, profile_flag=flag)


def _license_rule(message, license_type):
    return RecommendationRule(message, GapPriority.HIGH, 70, license_type=license_type)


C = RequirementCategory

UK_SPACE_RULES = (
    _category_rule(
        "Priority: Complete CAA licence application process - allow minimum 6 months lead time",
        GapPriority.HIGH, C.OPERATOR_LICENSING, 80
    ),
    _license_rule(
        "Engage with CAA Spaceflight Team early regarding launch licence requirements (CAP 2210)",
        LicenseType.LAUNCH
    ),
    _license_rule(
        "Prepare orbital operator licence package including debris mitigation plan and insurance",
        LicenseType.ORBITAL_OPERATOR
    ),
    _license_rule(
        "Complete environmental impact assessment and safety case for spaceport licence",
        LicenseType.SPACEPORT
    ),
    _category_rule(
        "Develop comprehensive safety case demonstrating risks are ALARP (As Low As Reasonably Practicable)",
        GapPriority.HIGH, C.SAFETY, 70
    ),
    _category_rule(
        "Obtain third party liability insurance - minimum typically EUR 60M for orbital activities",
        GapPriority.HIGH, C.LIABILITY_INSURANCE, 80
    ),
    _category_rule(
        "Submit maximum probable loss assessment to CAA for insurance amount determination",
        GapPriority.HIGH, C.LIABILITY_INSURANCE, 80
    ),
    _category_rule(
        "Develop debris mitigation plan per ISO 24113 and IADC guidelines",
        GapPriority.MEDIUM, C.ENVIRONMENTAL, 80, flag='launch_to_orbit'
    ),
    _category_rule(
        "Ensure 25-year post-mission deorbit compliance demonstration",
        GapPriority.MEDIUM, C.ENVIRONMENTAL, 80, flag='launch_to_orbit'
    ),
    _category_rule(
        "Implement cyber security measures per NCSC guidance for space sector",
        GapPriority.MEDIUM, C.SECURITY, 70
    ),
    _category_rule(
        "Develop comprehensive informed consent process for spaceflight participants",
        GapPriority.MEDIUM, C.INFORMED_CONSENT, 80, flag='involves_people'
    ),
    _category_rule(
        "Coordinate emergency response planning with local authorities and emergency services",
        GapPriority.MEDIUM, C.EMERGENCY_RESPONSE, 80, flag='launch_from_uk'
    ),
    _category_rule(
        "Register space object in UK Register of Space Objects through UK Space Agency",
        GapPriority.LOW, C.REGISTRATION, 80, flag='launch_to_orbit'
    ),
)

CROSS_REGIME_REVIEW = (
    "Review EU Space Act requirements for potential dual compliance needs post-Brexit"
)


class RecommendationGenerator:
    """
    Builds a bounded, prioritized recommendation list.

    Fired rules, up to gap_limit "Address:" entries for high-priority gaps, and
    a cross-regime review note are sorted by priority (stable) and cut to
    max_recommendations.
    """

    def __init__(
        self,
        rules: Sequence[RecommendationRule] = UK_SPACE_RULES,
        max_recommendations: int = 10,
        gap_limit: int = 3
    ):
        self.rules = tuple(rules)
        self.max_recommendations = max_recommendations
        self.gap_limit = gap_limit

    def generate(
        self,
        profile: OperatorProfile,
        score: ComplianceScore,
        gaps: Sequence[Gap],
        licenses: Sequence[LicenseType],
        cross_references: Sequence[str] = ()
    ) -> list[str]:
        """
        Generate recommendations.

        Args:
            profile: Validated operator profile
            score: Compliance score
            gaps: Gap list, already sorted by priority
            licenses: Required licences
            cross_references: Cross-references of the applicable requirements;
                when present and the operator has a UK nexus, a cross-regime
                review is recommended

        Returns:
            At most max_recommendations messages, highest priority first
        """
        candidates: list[tuple[GapPriority, str]] = []

        for rule in self.rules:
            if rule.fires(profile, score, licenses):
                candidates.append((rule.priority, rule.message))

        high_gaps = [g for g in gaps if g.priority == GapPriority.HIGH][:self.gap_limit]
        for gap in high_gaps:
            candidates.append((GapPriority.HIGH, f"Address: {gap.recommendation}"))

        if profile.has_uk_nexus and cross_references:
            candidates.append((GapPriority.LOW, CROSS_REGIME_REVIEW))

        candidates.sort(key=lambda c: c[0].rank)
        recommendations = [message for _, message in candidates[:self.max_recommendations]]

        if len(candidates) > self.max_recommendations:
            logger.debug(
                "Dropped %d recommendations over the limit of %d",
                len(candidates) - self.max_recommendations, self.max_recommendations
            )
        return recommendations
