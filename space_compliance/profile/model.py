"""
Operator profile model.

An operator profile describes who the operator is and what it does. It is the
single input used to decide which requirements and licences apply.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class OperatorType(Enum):
    """Kinds of operator regulated under the UK Space Industry Act."""
    LAUNCH_OPERATOR = "launch_operator"
    RETURN_OPERATOR = "return_operator"
    SATELLITE_OPERATOR = "satellite_operator"
    SPACEPORT_OPERATOR = "spaceport_operator"
    RANGE_CONTROL = "range_control"


class ActivityType(Enum):
    """Spaceflight activities an operator may carry out."""
    LAUNCH = "launch"
    RETURN = "return"
    ORBITAL_OPERATIONS = "orbital_operations"
    SUBORBITAL = "suborbital"
    SPACEPORT_OPERATIONS = "spaceport_operations"
    RANGE_SERVICES = "range_services"


class LicenseType(Enum):
    """Licences granted by the regulator."""
    LAUNCH = "launch_licence"
    RETURN = "return_licence"
    ORBITAL_OPERATOR = "orbital_operator_licence"
    SPACEPORT = "spaceport_licence"
    RANGE_CONTROL = "range_control_licence"


@dataclass(frozen=True)
class OperatorProfile:
    """A validated operator profile. Every flag is populated."""

    operator_type: OperatorType
    activity_types: tuple[ActivityType, ...]
    launch_from_uk: bool = False
    launch_to_orbit: bool = False
    is_suborbital: bool = False
    has_uk_nexus: bool = True
    involves_people: bool = False
    is_commercial: bool = True
    spacecraft_mass_kg: Optional[float] = None
    planned_launch_site: Optional[str] = None
    target_orbit: Optional[str] = None
    mission_duration_years: Optional[float] = None

    def has_activity(self, activity: ActivityType) -> bool:
        return activity in self.activity_types

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'operator_type': self.operator_type.value,
            'activity_types': [a.value for a in self.activity_types],
            'launch_from_uk': self.launch_from_uk,
            'launch_to_orbit': self.launch_to_orbit,
            'is_suborbital': self.is_suborbital,
            'has_uk_nexus': self.has_uk_nexus,
            'involves_people': self.involves_people,
            'is_commercial': self.is_commercial,
            'spacecraft_mass_kg': self.spacecraft_mass_kg,
            'planned_launch_site': self.planned_launch_site,
            'target_orbit': self.target_orbit,
            'mission_duration_years': self.mission_duration_years,
        }
