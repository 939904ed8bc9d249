"""
Engine configuration.

Weights and thresholds are policy, not law: each regulatory regime may supply
its own. Defaults reproduce the UK Space Industry Act scoring.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from .catalog.loaders import read_json
from .catalog.requirements import BindingLevel, Requirement, RequirementCategory, Severity
from .errors import ValidationError

logger = logging.getLogger(__name__)


def _default_severity_weights() -> dict[Severity, float]:
    return {
        Severity.CRITICAL: 3.0,
        Severity.MAJOR: 2.0,
        Severity.MINOR: 1.0,
    }


def _default_binding_multipliers() -> dict[BindingLevel, float]:
    return {
        BindingLevel.MANDATORY: 2.0,
        BindingLevel.RECOMMENDED: 1.0,
        BindingLevel.GUIDANCE: 1.0,
    }


@dataclass
class WeightingPolicy:
    """
    How much each requirement counts towards a score.

    A group with no counted weight scores empty_score, except the mandatory
    group, which scores empty_mandatory_score: nothing mandatory is outstanding.
    """

    severity_weights: dict[Severity, float] = field(default_factory=_default_severity_weights)
    binding_multipliers: dict[BindingLevel, float] = field(default_factory=_default_binding_multipliers)
    partial_credit: float = 0.5
    empty_score: int = 0
    empty_mandatory_score: int = 100

    def __post_init__(self):
        ranked = [self.severity_weights[s] for s in (Severity.CRITICAL, Severity.MAJOR, Severity.MINOR)]
        if not ranked[0] > ranked[1] > ranked[2] > 0:
            raise ValidationError("Severity weights must be positive and strictly decreasing")
        mandatory = self.binding_multipliers[BindingLevel.MANDATORY]
        for level, multiplier in self.binding_multipliers.items():
            if multiplier <= 0:
                raise ValidationError(f"Binding multiplier for {level.value} must be positive")
            if level != BindingLevel.MANDATORY and multiplier >= mandatory:
                raise ValidationError("Mandatory multiplier must exceed all other binding levels")
        if not 0 < self.partial_credit < 1:
            raise ValidationError("Partial credit must be between 0 and 1")

    def weight(self, requirement: Requirement) -> float:
        """Weight of a requirement: severity weight times binding multiplier."""
        return (
            self.severity_weights[requirement.severity]
            * self.binding_multipliers[requirement.binding_level]
        )


@dataclass
class RiskThresholds:
    """Cut-off scores used by the risk classifier."""

    licensing_category: RequirementCategory = RequirementCategory.OPERATOR_LICENSING
    licensing_floor: int = 50
    critical_below: int = 50
    high_below: int = 70
    medium_below: int = 85

    def __post_init__(self):
        if not self.critical_below <= self.high_below <= self.medium_below:
            raise ValidationError("Risk thresholds must be non-decreasing")


@dataclass
class EngineConfig:
    """Top-level engine configuration."""

    weighting: WeightingPolicy = field(default_factory=WeightingPolicy)
    risk: RiskThresholds = field(default_factory=RiskThresholds)
    max_recommendations: int = 10
    strict_references: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "EngineConfig":
        """
        Build a config from partial overrides.

        Example:
            {"weighting": {"severity_weights": {"critical": 5}},
             "risk": {"high_below": 75},
             "max_recommendations": 8}

        Raises:
            ValidationError: On unknown keys or enum values
        """
        if not isinstance(data, dict):
            raise ValidationError("Config must be an object")
        _reject_unknown(data, {'weighting', 'risk', 'max_recommendations', 'strict_references'}, "config")

        weighting = WeightingPolicy(**_weighting_kwargs(data.get('weighting') or {}))
        risk = RiskThresholds(**_risk_kwargs(data.get('risk') or {}))

        max_recommendations = int(data.get('max_recommendations', 10))
        if max_recommendations < 1:
            raise ValidationError("max_recommendations must be at least 1")

        return cls(
            weighting=weighting,
            risk=risk,
            max_recommendations=max_recommendations,
            strict_references=bool(data.get('strict_references', False)),
        )

    @classmethod
    def from_file(cls, path: Optional[str]) -> "EngineConfig":
        """Load a JSON config file; None gives the defaults."""
        if path is None:
            return cls()
        config = cls.from_dict(read_json(path))
        logger.info("Loaded engine config from %s", path)
        return config


def _weighting_kwargs(data: dict) -> dict[str, Any]:
    _reject_unknown(
        data,
        {'severity_weights', 'binding_multipliers', 'partial_credit', 'empty_score', 'empty_mandatory_score'},
        "weighting"
    )
    kwargs: dict[str, Any] = {}
    if 'severity_weights' in data:
        weights = _default_severity_weights()
        weights.update(_enum_keyed(Severity, data['severity_weights']))
        kwargs['severity_weights'] = weights
    if 'binding_multipliers' in data:
        multipliers = _default_binding_multipliers()
        multipliers.update(_enum_keyed(BindingLevel, data['binding_multipliers']))
        kwargs['binding_multipliers'] = multipliers
    if 'partial_credit' in data:
        kwargs['partial_credit'] = float(data['partial_credit'])
    for key in ('empty_score', 'empty_mandatory_score'):
        if key in data:
            kwargs[key] = int(data[key])
    return kwargs


def _risk_kwargs(data: dict) -> dict[str, Any]:
    _reject_unknown(
        data,
        {'licensing_category', 'licensing_floor', 'critical_below', 'high_below', 'medium_below'},
        "risk"
    )
    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        if key == 'licensing_category':
            kwargs[key] = _parse_enum(RequirementCategory, value)
        else:
            kwargs[key] = int(value)
    return kwargs


def _enum_keyed(enum_cls, mapping: dict) -> dict:
    if not isinstance(mapping, dict):
        raise ValidationError(f"{enum_cls.__name__} table must be an object")
    return {_parse_enum(enum_cls, k): float(v) for k, v in mapping.items()}


def _parse_enum(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(f"Unknown {enum_cls.__name__}: {value!r}") from None


def _reject_unknown(data: dict, allowed: set[str], section: str) -> None:
    unknown = sorted(set(data) - allowed)
    if unknown:
        raise ValidationError(f"Unknown {section} keys: {', '.join(unknown)}")
