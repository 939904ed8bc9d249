"""
Documentation checklist built from the evidence requirements of applicable
requirements.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from ..catalog.requirements import Requirement
from ..scoring.status import ComplianceStatus, StatusInput, build_status_map, status_of

logger = logging.getLogger(__name__)


class EvidenceStatus(Enum):
    """Completion state of a piece of evidence."""
    COMPLETE = "complete"
    PARTIAL = "partial"
    MISSING = "missing"


_STATUS_ORDER = {
    EvidenceStatus.MISSING: 0,
    EvidenceStatus.PARTIAL: 1,
    EvidenceStatus.COMPLETE: 2,
}


@dataclass
class ChecklistItem:
    """A named document, deduplicated across requirements."""

    document: str
    required: bool
    status: EvidenceStatus

    def to_dict(self) -> dict:
        return {
            'document': self.document,
            'required': self.required,
            'status': self.status.value,
        }


class DocumentationChecklistBuilder:
    """
    Aggregates evidence across requirements into one checklist.

    Every requirement passed in contributes its evidence. A document is
    required if any contributing requirement is mandatory. Its status comes
    from the owning requirement's status; a missing entry is upgraded by the
    first later requirement that has made progress on the same document.
    """

    def build(self, requirements: list[Requirement], statuses: StatusInput) -> list[ChecklistItem]:
        """
        Build the checklist.

        Args:
            requirements: Applicable requirements in catalog order
            statuses: Status mapping or assessment records

        Returns:
            Items sorted required first, then missing, partial, complete;
            ties keep first-seen order
        """
        status_map = build_status_map(statuses)
        items: dict[str, ChecklistItem] = {}

        for requirement in requirements:
            evidence_status = self._evidence_status(status_of(requirement, status_map))

            for document in requirement.evidence_required:
                item = items.get(document)
                if item is None:
                    items[document] = ChecklistItem(
                        document=document,
                        required=requirement.is_mandatory,
                        status=evidence_status,
                    )
                    continue

                item.required = item.required or requirement.is_mandatory
                if item.status == EvidenceStatus.MISSING and evidence_status != EvidenceStatus.MISSING:
                    item.status = evidence_status

        checklist = sorted(
            items.values(),
            key=lambda i: (not i.required, _STATUS_ORDER[i.status])
        )
        logger.debug("Checklist has %d documents", len(checklist))
        return checklist

    @staticmethod
    def _evidence_status(status: ComplianceStatus) -> EvidenceStatus:
        if status == ComplianceStatus.COMPLIANT:
            return EvidenceStatus.COMPLETE
        if status == ComplianceStatus.PARTIAL:
            return EvidenceStatus.PARTIAL
        return EvidenceStatus.MISSING
