"""
Assessment results, summary statistics and report rendering.

Reports state where an operator stands against the catalog. They are not
legal advice, and every rendered report says so.
"""

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from ..catalog.requirements import RegimeComparison, Requirement, Severity
from ..profile.model import LicenseType, OperatorProfile
from ..risk.classifier import RiskLevel
from ..scoring.gaps import Gap, GapPriority
from ..scoring.score import ComplianceScore
from ..scoring.status import ComplianceStatus, status_of
from .checklist import ChecklistItem, EvidenceStatus


@dataclass
class AssessmentResult:
    """Everything derived from one (profile, statuses) pair."""

    profile: OperatorProfile
    applicable_requirements: list[Requirement]
    statuses: dict[str, ComplianceStatus]
    score: ComplianceScore
    risk_level: RiskLevel
    gaps: list[Gap]
    cross_references: list[str]
    recommendations: list[str]
    required_licenses: list[LicenseType]
    checklist: list[ChecklistItem]
    unknown_references: list[str] = field(default_factory=list)
    generated_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'generated_at': self.generated_at.isoformat(),
            'profile': self.profile.to_dict(),
            'applicable_requirements': [r.id for r in self.applicable_requirements],
            'score': self.score.to_dict(),
            'risk_level': self.risk_level.value,
            'required_licenses': [l.value for l in self.required_licenses],
            'gaps': [g.to_dict() for g in self.gaps],
            'cross_references': self.cross_references,
            'recommendations': self.recommendations,
            'checklist': [i.to_dict() for i in self.checklist],
            'unknown_references': self.unknown_references,
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent, default=str)


@dataclass
class ComplianceSummary:
    """Status counts over the applicable requirements."""

    total_requirements: int
    applicable: int
    compliant: int
    partial: int
    non_compliant: int
    not_assessed: int
    not_applicable: int
    critical_gaps: int
    major_gaps: int
    required_licenses: list[LicenseType]

    def to_dict(self) -> dict:
        return {
            'total_requirements': self.total_requirements,
            'applicable': self.applicable,
            'compliant': self.compliant,
            'partial': self.partial,
            'non_compliant': self.non_compliant,
            'not_assessed': self.not_assessed,
            'not_applicable': self.not_applicable,
            'critical_gaps': self.critical_gaps,
            'major_gaps': self.major_gaps,
            'required_licenses': [l.value for l in self.required_licenses],
        }


@dataclass
class LicenseRequirementSummary:
    """Score and gaps restricted to one required licence."""

    license_type: LicenseType
    requirements: list[Requirement]
    compliance_score: int
    gaps: list[Gap]

    def to_dict(self) -> dict:
        return {
            'license_type': self.license_type.value,
            'requirements': [r.id for r in self.requirements],
            'compliance_score': self.compliance_score,
            'gaps': [g.to_dict() for g in self.gaps],
        }


@dataclass
class CrossRegimeSummary:
    """How far the applicable requirements overlap another regime."""

    overlapping_requirements: int
    unique_requirements: int
    considerations: list[str] = field(default_factory=list)
    comparisons: list[RegimeComparison] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'overlapping_requirements': self.overlapping_requirements,
            'unique_requirements': self.unique_requirements,
            'considerations': self.considerations,
            'comparisons': [c.to_dict() for c in self.comparisons],
        }


def summarize_cross_regime(
    requirements: list[Requirement],
    comparisons: list[RegimeComparison]
) -> CrossRegimeSummary:
    """
    Count requirements with and without cross-regime references.

    A comparison is relevant when it covers at least one applicable
    requirement that carries cross-references. Considerations are the
    relevant comparisons' implications, each listed once in table order.
    """
    overlapping = [r for r in requirements if r.cross_references]
    overlapping_ids = {r.id for r in overlapping}

    relevant = [
        c for c in comparisons
        if any(req_id in overlapping_ids for req_id in c.requirement_ids)
    ]
    considerations = []
    for comparison in relevant:
        if comparison.implications and comparison.implications not in considerations:
            considerations.append(comparison.implications)

    return CrossRegimeSummary(
        overlapping_requirements=len(overlapping),
        unique_requirements=len(requirements) - len(overlapping),
        considerations=considerations,
        comparisons=relevant,
    )


def summarize_statuses(
    total_requirements: int,
    requirements: list[Requirement],
    status_map: dict[str, ComplianceStatus],
    required_licenses: list[LicenseType]
) -> ComplianceSummary:
    """
    Count statuses over applicable requirements.

    Partial, non-compliant and unassessed requirements count as gaps; critical
    and major gaps are tallied by severity.
    """
    counts = {status: 0 for status in ComplianceStatus}
    critical_gaps = 0
    major_gaps = 0

    for requirement in requirements:
        status = status_of(requirement, status_map)
        counts[status] += 1
        if status in (ComplianceStatus.COMPLIANT, ComplianceStatus.NOT_APPLICABLE):
            continue
        if requirement.severity == Severity.CRITICAL:
            critical_gaps += 1
        elif requirement.severity == Severity.MAJOR:
            major_gaps += 1

    return ComplianceSummary(
        total_requirements=total_requirements,
        applicable=len(requirements),
        compliant=counts[ComplianceStatus.COMPLIANT],
        partial=counts[ComplianceStatus.PARTIAL],
        non_compliant=counts[ComplianceStatus.NON_COMPLIANT],
        not_assessed=counts[ComplianceStatus.NOT_ASSESSED],
        not_applicable=counts[ComplianceStatus.NOT_APPLICABLE],
        critical_gaps=critical_gaps,
        major_gaps=major_gaps,
        required_licenses=required_licenses,
    )


class ReportGenerator:
    """Renders an AssessmentResult as markdown or plain text."""

    STANDARD_DISCLAIMERS = [
        "This report is for informational purposes only and does not constitute legal advice.",
        "Scores reflect self-assessed statuses and the requirement catalog in use.",
        "Confirm licensing obligations with the regulator before relying on this assessment.",
    ]

    def __init__(self, title: str = "Space Compliance Assessment", top_gaps: int = 10):
        self.title = title
        self.top_gaps = top_gaps

    def generate_markdown_report(
        self,
        result: AssessmentResult,
        summary: Optional[ComplianceSummary] = None
    ) -> str:
        """
        Generate a markdown-formatted report.

        Args:
            result: Assessment to render
            summary: Optional status counts to include

        Returns:
            Markdown string
        """
        lines = []

        lines.append(f"# {self.title}")
        lines.append(f"**Generated:** {result.generated_at.strftime('%Y-%m-%d %H:%M:%S')}")
        lines.append(f"**Operator type:** {result.profile.operator_type.value}")
        lines.append("")

        lines.append("## Summary")
        lines.append(f"- **Risk level:** {result.risk_level.value.upper()}")
        lines.append(f"- **Overall score:** {result.score.overall}%")
        lines.append(f"- **Mandatory score:** {result.score.mandatory}%")
        licenses = ', '.join(l.value for l in result.required_licenses) or "none"
        lines.append(f"- **Required licences:** {licenses}")
        if summary:
            lines.append(f"- **Applicable requirements:** {summary.applicable} of {summary.total_requirements}")
            lines.append(f"- **Critical gaps:** {summary.critical_gaps}")
            lines.append(f"- **Major gaps:** {summary.major_gaps}")
        lines.append("")

        if result.score.by_category:
            lines.append("## Scores by Category")
            for category, value in result.score.by_category.items():
                lines.append(f"- {category.value.replace('_', ' ').title()}: {value}%")
            lines.append("")

        if result.score.by_license_type:
            lines.append("## Scores by Licence")
            for license_type, value in result.score.by_license_type.items():
                lines.append(f"- {license_type.value.replace('_', ' ').title()}: {value}%")
            lines.append("")

        lines.append("## Gaps")
        if not result.gaps:
            lines.append("No open gaps.")
        for gap in result.gaps[:self.top_gaps]:
            ref = f" ({gap.caa_guidance_ref})" if gap.caa_guidance_ref else ""
            lines.append(f"- **{gap.priority.value.upper()}** {gap.gap}{ref}")
            lines.append(f"  - {gap.recommendation}")
        remaining = len(result.gaps) - self.top_gaps
        if remaining > 0:
            lines.append(f"- ...and {remaining} more")
        lines.append("")

        lines.append("## Recommendations")
        for rec in result.recommendations:
            lines.append(f"- {rec}")
        lines.append("")

        lines.append("## Documentation Checklist")
        marks = {
            EvidenceStatus.COMPLETE: "[x]",
            EvidenceStatus.PARTIAL: "[~]",
            EvidenceStatus.MISSING: "[ ]",
        }
        for item in result.checklist:
            optional = "" if item.required else " *(optional)*"
            lines.append(f"- {marks[item.status]} {item.document}{optional}")
        lines.append("")

        if result.cross_references:
            lines.append("## Cross-References")
            lines.append(', '.join(result.cross_references))
            lines.append("")

        lines.append("## Disclaimers")
        for disclaimer in self.STANDARD_DISCLAIMERS:
            lines.append(f"- {disclaimer}")

        return "\n".join(lines)

    def generate_text_report(self, result: AssessmentResult) -> str:
        """Generate a short plain-text report."""
        lines = [
            f"{self.title.upper()}",
            "-" * 50,
            f"Risk level: {result.risk_level.value}",
            f"Overall score: {result.score.overall}",
            f"Mandatory score: {result.score.mandatory}",
            f"Required licences: {', '.join(l.value for l in result.required_licenses)}",
            f"Open gaps: {len(result.gaps)} "
            f"({sum(1 for g in result.gaps if g.priority == GapPriority.HIGH)} high priority)",
            "",
            "RECOMMENDATIONS:",
        ]
        lines.extend(f"  - {rec}" for rec in result.recommendations)
        missing = [i.document for i in result.checklist if i.status == EvidenceStatus.MISSING]
        lines.append("")
        lines.append(f"MISSING DOCUMENTS ({len(missing)}):")
        lines.extend(f"  - {doc}" for doc in missing)
        return "\n".join(lines)
