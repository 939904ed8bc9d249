"""Determination of the licences an operator needs."""

from dataclasses import dataclass
from typing import Optional

from .model import ActivityType, LicenseType, OperatorProfile, OperatorType


@dataclass(frozen=True)
class LicenseRule:
    """Grants a licence when the operator type, an activity or a flag matches."""

    license_type: LicenseType
    operator_type: OperatorType
    activity: ActivityType
    profile_flag: Optional[str] = None

    def matches(self, profile: OperatorProfile) -> bool:
        if profile.operator_type == self.operator_type:
            return True
        if profile.has_activity(self.activity):
            return True
        return bool(self.profile_flag and getattr(profile, self.profile_flag))


class LicenseDeterminer:
    """
    Maps an operator profile onto the set of licences it requires.

    Rules are evaluated independently, so an operator engaged in several
    activities accumulates several licences.
    """

    DEFAULT_RULES = (
        LicenseRule(LicenseType.LAUNCH, OperatorType.LAUNCH_OPERATOR, ActivityType.LAUNCH),
        LicenseRule(LicenseType.RETURN, OperatorType.RETURN_OPERATOR, ActivityType.RETURN),
        LicenseRule(
            LicenseType.ORBITAL_OPERATOR,
            OperatorType.SATELLITE_OPERATOR,
            ActivityType.ORBITAL_OPERATIONS,
            profile_flag='launch_to_orbit'
        ),
        LicenseRule(LicenseType.SPACEPORT, OperatorType.SPACEPORT_OPERATOR, ActivityType.SPACEPORT_OPERATIONS),
        LicenseRule(LicenseType.RANGE_CONTROL, OperatorType.RANGE_CONTROL, ActivityType.RANGE_SERVICES),
    )

    def __init__(self, rules: Optional[tuple[LicenseRule, ...]] = None):
        self.rules = rules if rules is not None else self.DEFAULT_RULES

    def determine(self, profile: OperatorProfile) -> list[LicenseType]:
        """
        Determine required licences.

        Returns:
            Licences without duplicates, in LicenseType declaration order
        """
        required = {rule.license_type for rule in self.rules if rule.matches(profile)}
        return [license_type for license_type in LicenseType if license_type in required]
