"""Risk classification of compliance scores."""

from .classifier import RiskClassifier, RiskLevel

__all__ = [
    "RiskClassifier",
    "RiskLevel",
]
