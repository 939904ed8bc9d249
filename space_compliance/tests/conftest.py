"""Shared fixtures for the compliance engine tests."""

import pytest

from space_compliance.catalog.requirements import (
    Applicability,
    BindingLevel,
    Requirement,
    RequirementCategory,
    Severity,
)
from space_compliance.profile.model import ActivityType, OperatorProfile, OperatorType


def build_requirement(
    req_id: str,
    category: RequirementCategory = RequirementCategory.SAFETY,
    binding_level: BindingLevel = BindingLevel.MANDATORY,
    severity: Severity = Severity.MAJOR,
    **kwargs
) -> Requirement:
    kwargs.setdefault('section_ref', f"Ref {req_id}")
    kwargs.setdefault('title', f"Requirement {req_id}")
    for key in ('license_types', 'cross_references', 'evidence_required', 'implementation_guidance'):
        if key in kwargs:
            kwargs[key] = tuple(kwargs[key])
    return Requirement(
        id=req_id,
        category=category,
        binding_level=binding_level,
        severity=severity,
        **kwargs
    )


@pytest.fixture
def make_requirement():
    """Factory for requirements with sensible defaults."""
    return build_requirement


@pytest.fixture
def launch_profile():
    """UK orbital launch operator."""
    return OperatorProfile(
        operator_type=OperatorType.LAUNCH_OPERATOR,
        activity_types=(ActivityType.LAUNCH,),
        launch_from_uk=True,
        launch_to_orbit=True,
    )


@pytest.fixture
def satellite_profile():
    """Satellite operator launching abroad."""
    return OperatorProfile(
        operator_type=OperatorType.SATELLITE_OPERATOR,
        activity_types=(ActivityType.ORBITAL_OPERATIONS,),
        launch_to_orbit=True,
    )


@pytest.fixture
def always():
    """Applicability with no conditions."""
    return Applicability()
