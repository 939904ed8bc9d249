"""
Assessment statuses and their normalization.

Callers hand over statuses either as a mapping of requirement id to status or
as a list of RequirementAssessment records. Both are reduced to a plain
dict[str, ComplianceStatus] before any scoring happens.
"""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Union

from ..catalog.requirements import Requirement
from ..errors import UnknownReferenceError, ValidationError

logger = logging.getLogger(__name__)


class ComplianceStatus(Enum):
    """Assessment outcome for a single requirement."""
    COMPLIANT = "compliant"
    PARTIAL = "partial"
    NON_COMPLIANT = "non_compliant"
    NOT_ASSESSED = "not_assessed"
    NOT_APPLICABLE = "not_applicable"


# Statuses that leave something to do
OPEN_STATUSES = (
    ComplianceStatus.PARTIAL,
    ComplianceStatus.NON_COMPLIANT,
    ComplianceStatus.NOT_ASSESSED,
)


@dataclass
class RequirementAssessment:
    """One assessed requirement, as stored by the caller."""

    requirement_id: str
    status: ComplianceStatus
    notes: Optional[str] = None
    evidence_notes: Optional[str] = None
    assessed_at: Optional[datetime] = None
    target_date: Optional[datetime] = None

    def __post_init__(self):
        self.status = parse_status(self.status)


StatusInput = Union[Mapping[str, Any], Iterable[RequirementAssessment], None]


def parse_status(value: Any) -> ComplianceStatus:
    """Parse a status value, rejecting unknown strings."""
    if isinstance(value, ComplianceStatus):
        return value
    try:
        return ComplianceStatus(value)
    except ValueError:
        raise ValidationError(f"Unknown compliance status: {value!r}") from None


def build_status_map(statuses: StatusInput) -> dict[str, ComplianceStatus]:
    """
    Normalize status input to a mapping.

    Args:
        statuses: Mapping of requirement id to status (enum or string), an
            iterable of RequirementAssessment, or None

    Returns:
        Dictionary of requirement id to ComplianceStatus. For repeated ids in
        an iterable, the last entry wins.
    """
    if statuses is None:
        return {}
    if isinstance(statuses, Mapping):
        return {req_id: parse_status(value) for req_id, value in statuses.items()}
    return {a.requirement_id: parse_status(a.status) for a in statuses}


def find_unknown_references(
    requirements: list[Requirement],
    status_map: Mapping[str, ComplianceStatus]
) -> list[str]:
    """Return status ids that match no requirement, in input order."""
    known = {r.id for r in requirements}
    return [req_id for req_id in status_map if req_id not in known]


def check_references(
    requirements: list[Requirement],
    status_map: Mapping[str, ComplianceStatus],
    strict: bool = False
) -> list[str]:
    """
    Report status entries that reference unknown requirements.

    Unknown entries are logged and ignored by scoring. In strict mode the
    first one is raised instead.

    Raises:
        UnknownReferenceError: In strict mode, if any reference is unknown
    """
    unknown = find_unknown_references(requirements, status_map)
    for req_id in unknown:
        error = UnknownReferenceError(req_id)
        if strict:
            raise error
        logger.warning("%s (ignored)", error)
    return unknown


def status_of(requirement: Requirement, status_map: Mapping[str, ComplianceStatus]) -> ComplianceStatus:
    """Status of a requirement; absent entries count as not assessed."""
    return status_map.get(requirement.id, ComplianceStatus.NOT_ASSESSED)
