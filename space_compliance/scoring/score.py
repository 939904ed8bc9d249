"""
Weighted compliance scoring.

Each requirement carries a weight of severity weight times binding multiplier.
A compliant requirement earns its full weight, a partial one earns
partial_credit of it, and non-compliant or unassessed ones earn nothing.
Not-applicable requirements leave both sides of the ratio.
"""

import logging
from dataclasses import dataclass, field
from typing import Mapping, Optional

import numpy as np

from ..catalog.requirements import BindingLevel, Requirement, RequirementCategory
from ..config import WeightingPolicy
from ..profile.model import LicenseType
from .status import ComplianceStatus, StatusInput, build_status_map, status_of

logger = logging.getLogger(__name__)


@dataclass
class ComplianceScore:
    """
    Weighted compliance percentages.

    Categories and licence types with no counted weight are omitted from
    by_category and by_license_type.
    """

    overall: int
    mandatory: int
    recommended: int
    by_category: dict[RequirementCategory, int] = field(default_factory=dict)
    by_license_type: dict[LicenseType, int] = field(default_factory=dict)

    def category(self, category: RequirementCategory) -> Optional[int]:
        return self.by_category.get(category)

    def license(self, license_type: LicenseType) -> Optional[int]:
        return self.by_license_type.get(license_type)

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        return {
            'overall': self.overall,
            'mandatory': self.mandatory,
            'recommended': self.recommended,
            'by_category': {k.value: v for k, v in self.by_category.items()},
            'by_license_type': {k.value: v for k, v in self.by_license_type.items()},
        }


class ScoreCalculator:
    """
    Computes overall, mandatory, per-category and per-licence scores.

    All groups share one weight vector and one credit vector; a group score is
    the same ratio restricted by a boolean mask.
    """

    def __init__(self, policy: Optional[WeightingPolicy] = None):
        self.policy = policy or WeightingPolicy()

    def credit(self, status: ComplianceStatus) -> float:
        """
        Fraction of weight earned for a status.

        Returns:
            1.0, partial_credit or 0.0; NaN for not applicable, which removes
            the requirement from the denominator
        """
        if status == ComplianceStatus.COMPLIANT:
            return 1.0
        if status == ComplianceStatus.PARTIAL:
            return self.policy.partial_credit
        if status == ComplianceStatus.NOT_APPLICABLE:
            return np.nan
        return 0.0

    def calculate(self, requirements: list[Requirement], statuses: StatusInput) -> ComplianceScore:
        """
        Calculate the compliance score.

        Args:
            requirements: Applicable requirements
            statuses: Status mapping or assessment records; missing entries
                count as not assessed

        Returns:
            ComplianceScore with 0-100 integer percentages
        """
        status_map = build_status_map(statuses)
        weights, credits = self._vectors(requirements, status_map)
        counted = ~np.isnan(credits)
        earned = weights * np.nan_to_num(credits)

        def group_score(mask: np.ndarray) -> Optional[int]:
            selected = mask & counted
            total = weights[selected].sum()
            if total <= 0:
                return None
            return self._percent(earned[selected].sum(), total)

        everything = np.ones(len(requirements), dtype=bool)
        mandatory_mask = np.array(
            [r.binding_level == BindingLevel.MANDATORY for r in requirements], dtype=bool
        )

        by_category = {}
        for category in RequirementCategory:
            mask = np.array([r.category == category for r in requirements], dtype=bool)
            value = group_score(mask)
            if value is not None:
                by_category[category] = value

        by_license_type = {}
        for license_type in LicenseType:
            mask = np.array([license_type in r.license_types for r in requirements], dtype=bool)
            value = group_score(mask)
            if value is not None:
                by_license_type[license_type] = value

        score = ComplianceScore(
            overall=self._or_empty(group_score(everything)),
            mandatory=self._or_empty(group_score(mandatory_mask), self.policy.empty_mandatory_score),
            recommended=self._or_empty(group_score(~mandatory_mask)),
            by_category=by_category,
            by_license_type=by_license_type,
        )
        logger.debug(
            "Scored %d requirements: overall=%d mandatory=%d",
            len(requirements), score.overall, score.mandatory
        )
        return score

    def _vectors(
        self,
        requirements: list[Requirement],
        status_map: Mapping[str, ComplianceStatus]
    ) -> tuple[np.ndarray, np.ndarray]:
        weights = np.array([self.policy.weight(r) for r in requirements], dtype=float)
        credits = np.array(
            [self.credit(status_of(r, status_map)) for r in requirements], dtype=float
        )
        return weights, credits

    def _or_empty(self, value: Optional[int], empty: Optional[int] = None) -> int:
        if value is not None:
            return value
        return self.policy.empty_score if empty is None else empty

    @staticmethod
    def _percent(earned: float, total: float) -> int:
        # Half-up, so 62.5 scores 63
        return int(np.floor(100.0 * earned / total + 0.5))
