"""Operator profile validation and licence determination."""

from .model import OperatorProfile, OperatorType, ActivityType, LicenseType
from .validator import ProfileValidator, validate_profile
from .licensing import LicenseDeterminer, LicenseRule

__all__ = [
    "OperatorProfile",
    "OperatorType",
    "ActivityType",
    "LicenseType",
    "ProfileValidator",
    "validate_profile",
    "LicenseDeterminer",
    "LicenseRule",
]
