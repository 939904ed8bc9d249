"""
Gap analysis for requirements that are not yet fully satisfied.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from ..catalog.requirements import BindingLevel, Requirement, RequirementCategory, Severity
from .status import OPEN_STATUSES, ComplianceStatus, StatusInput, build_status_map, status_of

logger = logging.getLogger(__name__)


class GapPriority(Enum):
    """Remediation priority of a gap."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    @property
    def rank(self) -> int:
        return _PRIORITY_RANK[self]


_PRIORITY_RANK = {
    GapPriority.HIGH: 0,
    GapPriority.MEDIUM: 1,
    GapPriority.LOW: 2,
}


class Effort(Enum):
    """Rough effort needed to close a gap."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


@dataclass
class Gap:
    """An applicable requirement that is not yet compliant."""

    requirement_id: str
    status: ComplianceStatus
    priority: GapPriority
    gap: str
    recommendation: str
    estimated_effort: Effort = Effort.MEDIUM
    dependencies: list[str] = field(default_factory=list)
    caa_guidance_ref: Optional[str] = None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'requirement_id': self.requirement_id,
            'status': self.status.value,
            'priority': self.priority.value,
            'gap': self.gap,
            'recommendation': self.recommendation,
            'estimated_effort': self.estimated_effort.value,
            'dependencies': self.dependencies,
            'caa_guidance_ref': self.caa_guidance_ref,
        }


class GapAnalyzer:
    """
    Emits one gap per partial, non-compliant or unassessed requirement.

    Gaps are ordered high, medium, low; ties keep catalog order.
    """

    CATEGORY_EFFORT = {
        RequirementCategory.SAFETY: Effort.HIGH,
        RequirementCategory.LIABILITY_INSURANCE: Effort.HIGH,
        RequirementCategory.REGISTRATION: Effort.LOW,
        RequirementCategory.INFORMED_CONSENT: Effort.LOW,
    }

    CATEGORY_DEPENDENCIES = {
        RequirementCategory.OPERATOR_LICENSING: [
            "Technical capability demonstration",
            "Financial capability demonstration",
        ],
        RequirementCategory.LIABILITY_INSURANCE: [
            "Maximum probable loss assessment",
            "CAA insurance amount determination",
        ],
        RequirementCategory.SAFETY: [
            "Hazard identification and risk assessment",
        ],
    }

    GAP_TEMPLATES = {
        ComplianceStatus.NON_COMPLIANT: "Non-compliant with {ref}: {title}",
        ComplianceStatus.PARTIAL: "Partially compliant with {ref}: {title}",
        ComplianceStatus.NOT_ASSESSED: "Not yet assessed: {ref}: {title}",
    }

    def analyze(self, requirements: list[Requirement], statuses: StatusInput) -> list[Gap]:
        """
        Generate the gap list.

        Args:
            requirements: Applicable requirements in catalog order
            statuses: Status mapping or assessment records

        Returns:
            Gaps sorted by priority
        """
        status_map = build_status_map(statuses)
        gaps = []

        for requirement in requirements:
            status = status_of(requirement, status_map)
            if status not in OPEN_STATUSES:
                continue
            gaps.append(self._build_gap(requirement, status))

        # sorted() is stable, so catalog order survives within a priority
        gaps = sorted(gaps, key=lambda g: g.priority.rank)
        logger.debug(
            "Found %d gaps (%d high priority)",
            len(gaps), sum(1 for g in gaps if g.priority == GapPriority.HIGH)
        )
        return gaps

    def priority(self, requirement: Requirement) -> GapPriority:
        """Priority from binding level and severity."""
        if requirement.binding_level != BindingLevel.MANDATORY:
            return GapPriority.LOW
        if requirement.severity == Severity.CRITICAL:
            return GapPriority.HIGH
        if requirement.severity == Severity.MAJOR:
            return GapPriority.MEDIUM
        return GapPriority.LOW

    def _build_gap(self, requirement: Requirement, status: ComplianceStatus) -> Gap:
        gap_text = self.GAP_TEMPLATES[status].format(
            ref=requirement.section_ref,
            title=requirement.title
        )

        if requirement.implementation_guidance:
            recommendation = requirement.implementation_guidance[0]
        else:
            recommendation = f"Review and implement {requirement.title}"

        return Gap(
            requirement_id=requirement.id,
            status=status,
            priority=self.priority(requirement),
            gap=gap_text,
            recommendation=recommendation,
            estimated_effort=self.CATEGORY_EFFORT.get(requirement.category, Effort.MEDIUM),
            dependencies=list(self.CATEGORY_DEPENDENCIES.get(requirement.category, [])),
            caa_guidance_ref=requirement.caa_guidance_ref,
        )
