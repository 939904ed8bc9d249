"""
Loaders for requirement catalogs stored as JSON.

A catalog file is either a list of requirement objects or an object with a
"name", a "requirements" list and an optional "comparisons" table mapping
requirements onto another regime. Field names are snake_case.
"""

import json
import logging
import os
from importlib import resources
from typing import Any, Optional

from ..errors import ValidationError
from ..profile.model import ActivityType, LicenseType, OperatorType
from .requirements import (
    Applicability,
    BindingLevel,
    RegimeComparison,
    Requirement,
    RequirementCategory,
    Severity,
    StaticCatalog,
)

logger = logging.getLogger(__name__)

SAMPLE_CATALOG = "uk_space_sample.json"


def read_json(path: str) -> Any:
    """
    Read a JSON document from disk.

    Raises:
        FileNotFoundError: If the file does not exist
        ValidationError: If the file is not valid JSON
    """
    if not os.path.exists(path):
        raise FileNotFoundError(f"File not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        try:
            return json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Invalid JSON in {path}: {e}") from e


class CatalogLoader:
    """Builds a StaticCatalog from decoded JSON data."""

    REQUIRED_FIELDS = ('id', 'section_ref', 'title', 'category', 'binding_level', 'severity')

    def load(self, path: str) -> StaticCatalog:
        """
        Load a catalog file.

        Args:
            path: Path to the JSON catalog

        Returns:
            StaticCatalog with requirements in file order
        """
        data = read_json(path)
        default_name = os.path.splitext(os.path.basename(path))[0]
        catalog = self.from_data(data, default_name)
        logger.info("Loaded %d requirements from %s", len(catalog), path)
        return catalog

    def load_sample(self) -> StaticCatalog:
        """Load the UK Space Industry Act sample catalog shipped with the package."""
        text = resources.files('space_compliance.data').joinpath(SAMPLE_CATALOG).read_text(encoding='utf-8')
        return self.from_data(json.loads(text), "UK-SIA")

    def from_data(self, data: Any, default_name: str = "catalog") -> StaticCatalog:
        comparisons = []
        if isinstance(data, dict):
            name = data.get('name', default_name)
            entries = data.get('requirements')
            comparisons = [
                self.parse_comparison(entry)
                for entry in _list_field(data, 'comparisons', f"Catalog {name}")
            ]
        else:
            name = default_name
            entries = data

        if not isinstance(entries, list):
            raise ValidationError("Catalog must contain a list of requirements")

        requirements = [self.parse_requirement(entry) for entry in entries]
        return StaticCatalog(requirements, name=name, comparisons=comparisons)

    def parse_requirement(self, entry: dict) -> Requirement:
        """
        Parse one requirement entry.

        Raises:
            ValidationError: If a required field is missing, an enum value is
                unknown or a list field is not a list
        """
        if not isinstance(entry, dict):
            raise ValidationError("Requirement entry must be an object")

        missing = [f for f in self.REQUIRED_FIELDS if not entry.get(f)]
        if missing:
            raise ValidationError(
                f"Requirement {entry.get('id', '?')} is missing fields: {', '.join(missing)}"
            )

        req_id = entry['id']
        owner = f"Requirement {req_id}"
        return Requirement(
            id=req_id,
            section_ref=entry['section_ref'],
            title=entry['title'],
            category=_parse_enum(RequirementCategory, entry['category'], req_id),
            binding_level=_parse_enum(BindingLevel, entry['binding_level'], req_id),
            severity=_parse_enum(Severity, entry['severity'], req_id),
            license_types=tuple(
                _parse_enum(LicenseType, v, req_id) for v in _list_field(entry, 'license_types', owner)
            ),
            cross_references=_string_list(entry, 'cross_references', owner),
            evidence_required=_string_list(entry, 'evidence_required', owner),
            implementation_guidance=_string_list(entry, 'implementation_guidance', owner),
            description=entry.get('description', ""),
            compliance_question=entry.get('compliance_question', ""),
            caa_guidance_ref=entry.get('caa_guidance_ref'),
            applicability=self._parse_applicability(entry.get('applicability') or {}, req_id),
        )

    def parse_comparison(self, entry: dict) -> RegimeComparison:
        """Parse one entry of the optional cross-regime comparison table."""
        if not isinstance(entry, dict) or not entry.get('reference'):
            raise ValidationError("Comparison entry must be an object with a reference")

        owner = f"Comparison {entry['reference']}"
        return RegimeComparison(
            reference=entry['reference'],
            equivalent=entry.get('equivalent'),
            notes=entry.get('notes', ""),
            implications=entry.get('implications', ""),
            requirement_ids=_string_list(entry, 'requirement_ids', owner),
        )

    def _parse_applicability(self, data: dict, req_id: str) -> Applicability:
        owner = f"Requirement {req_id}"
        return Applicability(
            operator_types=tuple(
                _parse_enum(OperatorType, v, req_id) for v in _list_field(data, 'operator_types', owner)
            ),
            activity_types=tuple(
                _parse_enum(ActivityType, v, req_id) for v in _list_field(data, 'activity_types', owner)
            ),
            launch_from_uk_only=bool(data.get('launch_from_uk_only', False)),
            orbital_only=bool(data.get('orbital_only', False)),
            suborbital_only=bool(data.get('suborbital_only', False)),
            human_spaceflight_only=bool(data.get('human_spaceflight_only', False)),
            commercial_only=bool(data.get('commercial_only', False)),
            min_spacecraft_mass_kg=data.get('min_spacecraft_mass_kg'),
        )


def _parse_enum(enum_cls, value, req_id: str):
    try:
        return enum_cls(value)
    except ValueError:
        raise ValidationError(
            f"Requirement {req_id}: unknown {enum_cls.__name__} {value!r}"
        ) from None


def _list_field(data: dict, name: str, owner: str) -> list:
    value = data.get(name)
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValidationError(f"{owner}: {name} must be a list, got {type(value).__name__}")
    return value


def _string_list(data: dict, name: str, owner: str) -> tuple[str, ...]:
    values = _list_field(data, name, owner)
    for value in values:
        if not isinstance(value, str):
            raise ValidationError(f"{owner}: {name} entries must be strings, got {value!r}")
    return tuple(values)


def load_catalog(path: Optional[str] = None) -> StaticCatalog:
    """Load a catalog file, or the bundled sample when no path is given."""
    loader = CatalogLoader()
    return loader.load(path) if path else loader.load_sample()
