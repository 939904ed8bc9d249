"""
Validation of raw operator profiles.

Raw profiles arrive as partially populated mappings (usually decoded JSON from
a wizard or an API payload). Keys may be snake_case or camelCase. Validation
rejects missing or unknown values and fills every flag with its default.
"""

import logging
from typing import Any, Mapping, Optional

from ..errors import ValidationError
from .model import ActivityType, OperatorProfile, OperatorType

logger = logging.getLogger(__name__)


class ProfileValidator:
    """
    Normalizes a raw profile into an OperatorProfile.

    Explicitly supplied values are passed through unchanged; absent flags take
    the values in FLAG_DEFAULTS.
    """

    FLAG_DEFAULTS = {
        'launch_from_uk': False,
        'launch_to_orbit': False,
        'is_suborbital': False,
        'has_uk_nexus': True,
        'involves_people': False,
        'is_commercial': True,
    }

    OPTIONAL_FIELDS = (
        'spacecraft_mass_kg',
        'planned_launch_site',
        'target_orbit',
        'mission_duration_years',
    )

    # camelCase payload keys -> field names
    ALIASES = {
        'operatorType': 'operator_type',
        'activityTypes': 'activity_types',
        'launchFromUk': 'launch_from_uk',
        'launchToOrbit': 'launch_to_orbit',
        'isSuborbital': 'is_suborbital',
        'hasUkNexus': 'has_uk_nexus',
        'involvesPeople': 'involves_people',
        'isCommercial': 'is_commercial',
        'spacecraftMassKg': 'spacecraft_mass_kg',
        'plannedLaunchSite': 'planned_launch_site',
        'targetOrbit': 'target_orbit',
        'missionDurationYears': 'mission_duration_years',
    }

    def validate(self, raw: Any) -> OperatorProfile:
        """
        Validate a raw profile.

        Args:
            raw: Mapping with profile fields, or an already validated
                OperatorProfile (returned as is)

        Returns:
            OperatorProfile with every flag populated

        Raises:
            ValidationError: If the operator type or activity types are
                missing, or any enum value is unknown
        """
        if isinstance(raw, OperatorProfile):
            return raw
        if not isinstance(raw, Mapping):
            raise ValidationError("Profile must be a mapping")

        data = self._normalize_keys(raw)

        if not data.get('operator_type'):
            raise ValidationError("Operator type is required")
        if not data.get('activity_types'):
            raise ValidationError("At least one activity type is required")

        operator_type = self._parse_operator_type(data['operator_type'])
        activity_types = self._parse_activity_types(data['activity_types'])

        flags = {}
        for name, default in self.FLAG_DEFAULTS.items():
            value = data.get(name)
            flags[name] = default if value is None else value

        optional = {name: data.get(name) for name in self.OPTIONAL_FIELDS}

        profile = OperatorProfile(
            operator_type=operator_type,
            activity_types=activity_types,
            **flags,
            **optional
        )
        logger.debug(
            "Validated profile for %s with activities %s",
            operator_type.value,
            [a.value for a in activity_types]
        )
        return profile

    def _normalize_keys(self, raw: Mapping) -> dict:
        """Map camelCase aliases onto field names, keeping snake_case keys."""
        data = {}
        for key, value in raw.items():
            data[self.ALIASES.get(key, key)] = value
        return data

    def _parse_operator_type(self, value: Any) -> OperatorType:
        if isinstance(value, OperatorType):
            return value
        try:
            return OperatorType(value)
        except ValueError:
            raise ValidationError(f"Unknown operator type: {value!r}") from None

    def _parse_activity_types(self, values: Any) -> tuple[ActivityType, ...]:
        """Parse activity types, dropping duplicates but keeping order."""
        if isinstance(values, (str, ActivityType)):
            values = [values]

        parsed: list[ActivityType] = []
        for value in values:
            activity = self._parse_activity_type(value)
            if activity not in parsed:
                parsed.append(activity)
        return tuple(parsed)

    def _parse_activity_type(self, value: Any) -> ActivityType:
        if isinstance(value, ActivityType):
            return value
        try:
            return ActivityType(value)
        except ValueError:
            raise ValidationError(f"Unknown activity type: {value!r}") from None


def validate_profile(raw: Any, validator: Optional[ProfileValidator] = None) -> OperatorProfile:
    """Validate a raw profile with the default validator."""
    return (validator or ProfileValidator()).validate(raw)
