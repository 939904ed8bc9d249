"""
Risk classification from a compliance score.

Rules are evaluated in order and the first match wins, so the hard gates
(critical non-compliance and licensing) always dominate numeric thresholds.
"""

import logging
from enum import Enum
from typing import Optional

from ..catalog.requirements import Requirement
from ..config import RiskThresholds
from ..scoring.score import ComplianceScore
from ..scoring.status import ComplianceStatus, StatusInput, build_status_map, status_of

logger = logging.getLogger(__name__)


class RiskLevel(Enum):
    """Discrete compliance risk levels."""
    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class RiskClassifier:
    """
    Maps a ComplianceScore plus raw statuses to a RiskLevel.

    Order of evaluation:
    1. Any critical, mandatory requirement that is non-compliant -> CRITICAL
    2. Licensing category scored below licensing_floor -> CRITICAL
    3. Mandatory score below critical_below / high_below / medium_below ->
       CRITICAL / HIGH / MEDIUM, otherwise LOW
    """

    def __init__(self, thresholds: Optional[RiskThresholds] = None):
        """
        Initialize classifier.

        Args:
            thresholds: Cut-off scores; defaults to the UK regime
        """
        self.thresholds = thresholds or RiskThresholds()

    def classify(
        self,
        score: ComplianceScore,
        requirements: list[Requirement],
        statuses: StatusInput
    ) -> RiskLevel:
        """
        Determine the risk level.

        Args:
            score: Score computed over the same requirements and statuses
            requirements: Applicable requirements
            statuses: Status mapping or assessment records

        Returns:
            RiskLevel
        """
        status_map = build_status_map(statuses)
        t = self.thresholds

        blocking = [
            r.id for r in requirements
            if r.is_critical_mandatory
            and status_of(r, status_map) == ComplianceStatus.NON_COMPLIANT
        ]
        if blocking:
            logger.debug("Critical risk: non-compliant critical requirements %s", blocking)
            return RiskLevel.CRITICAL

        licensing = score.category(t.licensing_category)
        if licensing is not None and licensing < t.licensing_floor:
            logger.debug("Critical risk: licensing score %d below %d", licensing, t.licensing_floor)
            return RiskLevel.CRITICAL

        mandatory = score.mandatory
        if mandatory < t.critical_below:
            return RiskLevel.CRITICAL
        elif mandatory < t.high_below:
            return RiskLevel.HIGH
        elif mandatory < t.medium_below:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW
