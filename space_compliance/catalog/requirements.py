"""
Requirement model and the catalog read interface.

The engine never owns regulatory text. It reads requirements through a
RequirementCatalog, which also decides which requirements apply to a profile.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional

from ..errors import ValidationError
from ..profile.model import ActivityType, LicenseType, OperatorProfile, OperatorType


class RequirementCategory(Enum):
    """Regulatory areas a requirement belongs to."""
    OPERATOR_LICENSING = "operator_licensing"
    RANGE_CONTROL = "range_control"
    LIABILITY_INSURANCE = "liability_insurance"
    SAFETY = "safety"
    ENVIRONMENTAL = "environmental"
    SECURITY = "security"
    REGISTRATION = "registration"
    INFORMED_CONSENT = "informed_consent"
    EMERGENCY_RESPONSE = "emergency_response"


class BindingLevel(Enum):
    """Whether a requirement is legally binding or advisory."""
    MANDATORY = "mandatory"
    RECOMMENDED = "recommended"
    GUIDANCE = "guidance"


class Severity(Enum):
    """Impact tier of a requirement."""
    CRITICAL = "critical"
    MAJOR = "major"
    MINOR = "minor"


@dataclass(frozen=True)
class Applicability:
    """Conditions under which a requirement applies. Empty means always."""

    operator_types: tuple[OperatorType, ...] = ()
    activity_types: tuple[ActivityType, ...] = ()
    launch_from_uk_only: bool = False
    orbital_only: bool = False
    suborbital_only: bool = False
    human_spaceflight_only: bool = False
    commercial_only: bool = False
    min_spacecraft_mass_kg: Optional[float] = None

    def matches(self, profile: OperatorProfile) -> bool:
        """Check whether a profile satisfies every condition."""
        if self.operator_types and profile.operator_type not in self.operator_types:
            return False
        if self.activity_types and not any(
            a in self.activity_types for a in profile.activity_types
        ):
            return False
        if self.launch_from_uk_only and not profile.launch_from_uk:
            return False
        if self.orbital_only and not profile.launch_to_orbit:
            return False
        if self.suborbital_only and not profile.is_suborbital:
            return False
        if self.human_spaceflight_only and not profile.involves_people:
            return False
        if self.commercial_only and not profile.is_commercial:
            return False
        # Unknown mass never excludes a requirement
        if (
            self.min_spacecraft_mass_kg
            and profile.spacecraft_mass_kg
            and profile.spacecraft_mass_kg < self.min_spacecraft_mass_kg
        ):
            return False
        return True


@dataclass(frozen=True)
class Requirement:
    """A single jurisdiction requirement, as supplied by a catalog."""

    id: str
    section_ref: str
    title: str
    category: RequirementCategory
    binding_level: BindingLevel
    severity: Severity
    license_types: tuple[LicenseType, ...] = ()
    cross_references: tuple[str, ...] = ()
    evidence_required: tuple[str, ...] = ()
    implementation_guidance: tuple[str, ...] = ()
    description: str = ""
    compliance_question: str = ""
    caa_guidance_ref: Optional[str] = None
    applicability: Applicability = field(default_factory=Applicability)

    @property
    def is_mandatory(self) -> bool:
        return self.binding_level == BindingLevel.MANDATORY

    @property
    def is_critical_mandatory(self) -> bool:
        return self.is_mandatory and self.severity == Severity.CRITICAL

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'id': self.id,
            'section_ref': self.section_ref,
            'title': self.title,
            'category': self.category.value,
            'binding_level': self.binding_level.value,
            'severity': self.severity.value,
            'license_types': [l.value for l in self.license_types],
            'cross_references': list(self.cross_references),
            'evidence_required': list(self.evidence_required),
            'caa_guidance_ref': self.caa_guidance_ref,
        }


@dataclass(frozen=True)
class RegimeComparison:
    """How one or more requirements map onto another regulatory regime."""

    reference: str
    equivalent: Optional[str] = None
    notes: str = ""
    implications: str = ""
    requirement_ids: tuple[str, ...] = ()

    def to_dict(self) -> dict:
        return {
            'reference': self.reference,
            'equivalent': self.equivalent,
            'notes': self.notes,
            'implications': self.implications,
            'requirement_ids': list(self.requirement_ids),
        }


class RequirementCatalog(ABC):
    """Read interface over a jurisdiction's requirements."""

    @abstractmethod
    def all_requirements(self) -> list[Requirement]:
        """Return every requirement in catalog order."""
        pass

    @abstractmethod
    def is_applicable(self, profile: OperatorProfile, requirement: Requirement) -> bool:
        """Check whether a requirement applies to the given profile."""
        pass

    def get_applicable_requirements(self, profile: OperatorProfile) -> list[Requirement]:
        """Return applicable requirements, preserving catalog order."""
        return [r for r in self.all_requirements() if self.is_applicable(profile, r)]

    def by_category(self, category: RequirementCategory) -> list[Requirement]:
        return [r for r in self.all_requirements() if r.category == category]

    def by_license_type(self, license_type: LicenseType) -> list[Requirement]:
        return [r for r in self.all_requirements() if license_type in r.license_types]

    def mandatory(self) -> list[Requirement]:
        return [r for r in self.all_requirements() if r.is_mandatory]

    def critical(self) -> list[Requirement]:
        return [r for r in self.all_requirements() if r.severity == Severity.CRITICAL]

    def with_cross_references(self) -> list[Requirement]:
        return [r for r in self.all_requirements() if r.cross_references]

    def comparisons(self) -> list[RegimeComparison]:
        """Mappings onto another regime; empty unless the catalog ships a table."""
        return []


class StaticCatalog(RequirementCatalog):
    """
    In-memory catalog whose applicability comes from each requirement's
    Applicability conditions.
    """

    def __init__(
        self,
        requirements: Iterable[Requirement],
        name: str = "catalog",
        comparisons: Iterable[RegimeComparison] = ()
    ):
        """
        Initialize catalog.

        Args:
            requirements: Requirements in catalog order
            name: Display name of the regime (e.g., "UK-SIA")
            comparisons: Optional cross-regime comparison table

        Raises:
            ValidationError: If two requirements share an id
        """
        self.name = name
        self._requirements = list(requirements)
        self._comparisons = list(comparisons)

        seen = set()
        for requirement in self._requirements:
            if requirement.id in seen:
                raise ValidationError(f"Duplicate requirement id: {requirement.id}")
            seen.add(requirement.id)

    def __len__(self) -> int:
        return len(self._requirements)

    def all_requirements(self) -> list[Requirement]:
        return list(self._requirements)

    def comparisons(self) -> list[RegimeComparison]:
        return list(self._comparisons)

    def is_applicable(self, profile: OperatorProfile, requirement: Requirement) -> bool:
        return requirement.applicability.matches(profile)
