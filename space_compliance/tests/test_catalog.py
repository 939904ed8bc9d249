"""
Tests for catalog loading, applicability and engine configuration.
"""

import json

import pytest
from space_compliance.catalog import (
    Applicability,
    BindingLevel,
    CatalogLoader,
    RequirementCategory,
    Severity,
    StaticCatalog,
    load_catalog,
)
from space_compliance.config import EngineConfig, RiskThresholds, WeightingPolicy
from space_compliance.errors import ValidationError
from space_compliance.profile import ActivityType, LicenseType, OperatorProfile, OperatorType


def _entry(req_id="r1", **overrides):
    entry = {
        "id": req_id,
        "section_ref": "s.1",
        "title": "Requirement",
        "category": "safety",
        "binding_level": "mandatory",
        "severity": "major",
    }
    entry.update(overrides)
    return entry


class TestCatalogLoader:
    """Test suite for CatalogLoader."""

    @pytest.fixture
    def loader(self):
        return CatalogLoader()

    def test_sample_catalog(self):
        """Test that the bundled sample loads."""
        catalog = load_catalog()

        assert catalog.name == "UK-SIA"
        assert len(catalog) == 13
        assert all(r.category in RequirementCategory for r in catalog.all_requirements())
        assert len(catalog.with_cross_references()) > 0

    def test_load_list_file(self, loader, tmp_path):
        """Test loading a bare list of requirements."""
        path = tmp_path / "regime.json"
        path.write_text(json.dumps([
            _entry("a", license_types=["launch_licence"], cross_references=["Art. 1"]),
            _entry("b", binding_level="guidance", severity="minor"),
        ]))

        catalog = loader.load(str(path))

        assert catalog.name == "regime"
        a, b = catalog.all_requirements()
        assert a.license_types == (LicenseType.LAUNCH,)
        assert a.cross_references == ("Art. 1",)
        assert b.binding_level == BindingLevel.GUIDANCE
        assert catalog.mandatory() == [a]

    def test_load_named_object(self, loader, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(json.dumps({"name": "Test regime", "requirements": [_entry()]}))

        assert loader.load(str(path)).name == "Test regime"

    def test_missing_fields(self, loader):
        """Test that required fields are enforced."""
        entry = _entry()
        del entry["severity"]

        with pytest.raises(ValidationError, match="missing fields: severity"):
            loader.parse_requirement(entry)

    @pytest.mark.parametrize("field,value", [
        ("category", "weather"),
        ("binding_level", "optional"),
        ("severity", "catastrophic"),
        ("license_types", ["fishing_licence"]),
    ])
    def test_unknown_enum_values(self, loader, field, value):
        """Test that unknown enum values are rejected at the catalog boundary."""
        with pytest.raises(ValidationError, match="r1"):
            loader.parse_requirement(_entry(**{field: value}))

    def test_duplicate_ids(self, loader):
        with pytest.raises(ValidationError, match="Duplicate requirement id"):
            loader.from_data([_entry("a"), _entry("a")])

    def test_invalid_json(self, loader, tmp_path):
        path = tmp_path / "broken.json"
        path.write_text("{not json")

        with pytest.raises(ValidationError, match="Invalid JSON"):
            loader.load(str(path))

    def test_missing_file(self, loader, tmp_path):
        with pytest.raises(FileNotFoundError):
            loader.load(str(tmp_path / "absent.json"))

    def test_not_a_list(self, loader):
        with pytest.raises(ValidationError, match="list of requirements"):
            loader.from_data({"requirements": "none"})

    def test_applicability_parsed(self, loader):
        requirement = loader.parse_requirement(_entry(applicability={
            "operator_types": ["satellite_operator"],
            "orbital_only": True,
            "min_spacecraft_mass_kg": 100,
        }))

        assert requirement.applicability == Applicability(
            operator_types=(OperatorType.SATELLITE_OPERATOR,),
            orbital_only=True,
            min_spacecraft_mass_kg=100,
        )

    @pytest.mark.parametrize("field", [
        "cross_references",
        "evidence_required",
        "implementation_guidance",
        "license_types",
    ])
    def test_list_fields_must_be_lists(self, loader, field):
        """Test that a bare string is not split into characters."""
        with pytest.raises(ValidationError, match=f"Requirement r1: {field} must be a list"):
            loader.parse_requirement(_entry(**{field: "Art. 4"}))

    def test_list_field_entries_must_be_strings(self, loader):
        with pytest.raises(ValidationError, match="evidence_required entries must be strings"):
            loader.parse_requirement(_entry(evidence_required=["Safety case", 3]))

    def test_applicability_lists_must_be_lists(self, loader):
        with pytest.raises(ValidationError, match="operator_types must be a list"):
            loader.parse_requirement(_entry(applicability={"operator_types": "satellite_operator"}))

    def test_sample_comparisons(self):
        """Test that the sample catalog ships its comparison table."""
        comparisons = load_catalog().comparisons()

        assert len(comparisons) == 6
        assert comparisons[0].reference == "SIA s.3 - Launch/Return Licence"
        assert comparisons[0].requirement_ids == ("uk-sia-s3-licence",)
        assert all(c.implications for c in comparisons)

    def test_comparisons_parsed(self, loader):
        catalog = loader.from_data({
            "requirements": [_entry("a")],
            "comparisons": [{"reference": "s.1", "equivalent": "Art. 1", "requirement_ids": ["a"]}],
        })

        comparison, = catalog.comparisons()
        assert comparison.equivalent == "Art. 1"
        assert comparison.requirement_ids == ("a",)
        assert comparison.implications == ""

    def test_comparison_without_reference(self, loader):
        with pytest.raises(ValidationError, match="Comparison entry"):
            loader.from_data({"requirements": [], "comparisons": [{"equivalent": "Art. 1"}]})

    def test_comparisons_must_be_a_list(self, loader):
        with pytest.raises(ValidationError, match="comparisons must be a list"):
            loader.from_data({"requirements": [], "comparisons": {"reference": "s.1"}})

    def test_list_file_has_no_comparisons(self, loader):
        assert loader.from_data([_entry()]).comparisons() == []


class TestApplicability:
    """Test suite for Applicability conditions."""

    def _profile(self, **flags):
        return OperatorProfile(
            operator_type=OperatorType.LAUNCH_OPERATOR,
            activity_types=(ActivityType.LAUNCH,),
            **flags
        )

    def test_empty_always_applies(self):
        assert Applicability().matches(self._profile())

    @pytest.mark.parametrize("condition,flags", [
        ({"launch_from_uk_only": True}, {"launch_from_uk": True}),
        ({"orbital_only": True}, {"launch_to_orbit": True}),
        ({"suborbital_only": True}, {"is_suborbital": True}),
        ({"human_spaceflight_only": True}, {"involves_people": True}),
    ])
    def test_flag_conditions(self, condition, flags):
        """Test that each flag condition needs its profile flag."""
        applicability = Applicability(**condition)

        assert not applicability.matches(self._profile())
        assert applicability.matches(self._profile(**flags))

    def test_commercial_only(self):
        applicability = Applicability(commercial_only=True)

        assert applicability.matches(self._profile())
        assert not applicability.matches(self._profile(is_commercial=False))

    def test_operator_and_activity(self):
        """Test that operator types and activity types must both match."""
        applicability = Applicability(
            operator_types=(OperatorType.LAUNCH_OPERATOR,),
            activity_types=(ActivityType.RETURN,),
        )
        assert not applicability.matches(self._profile())

    def test_minimum_mass(self):
        """Test that an unknown mass never excludes a requirement."""
        applicability = Applicability(min_spacecraft_mass_kg=500)

        assert applicability.matches(self._profile())
        assert applicability.matches(self._profile(spacecraft_mass_kg=800))
        assert not applicability.matches(self._profile(spacecraft_mass_kg=200))

    def test_static_catalog_filters(self, make_requirement, launch_profile):
        """Test that a catalog returns applicable requirements in catalog order."""
        catalog = StaticCatalog([
            make_requirement("a"),
            make_requirement("b", applicability=Applicability(human_spaceflight_only=True)),
            make_requirement("c", severity=Severity.CRITICAL),
        ])

        assert [r.id for r in catalog.get_applicable_requirements(launch_profile)] == ["a", "c"]
        assert [r.id for r in catalog.critical()] == ["c"]


class TestEngineConfig:
    """Test suite for engine configuration."""

    def test_defaults(self):
        config = EngineConfig()

        assert config.max_recommendations == 10
        assert config.strict_references is False
        assert config.weighting.partial_credit == 0.5
        assert config.risk.licensing_floor == 50

    def test_default_weights(self, make_requirement):
        """Test severity weight times binding multiplier."""
        policy = WeightingPolicy()

        assert policy.weight(make_requirement("a", severity=Severity.CRITICAL)) == 6.0
        assert policy.weight(make_requirement("b", severity=Severity.MINOR, binding_level=BindingLevel.GUIDANCE)) == 1.0

    def test_from_dict_overrides(self):
        config = EngineConfig.from_dict({
            "weighting": {"severity_weights": {"critical": 5}},
            "risk": {"high_below": 75, "licensing_category": "safety"},
            "max_recommendations": 8,
            "strict_references": True,
        })

        assert config.weighting.severity_weights[Severity.CRITICAL] == 5.0
        assert config.weighting.severity_weights[Severity.MAJOR] == 2.0
        assert config.risk.high_below == 75
        assert config.risk.licensing_category == RequirementCategory.SAFETY
        assert config.max_recommendations == 8
        assert config.strict_references is True

    def test_empty_scores_from_dict(self):
        config = EngineConfig.from_dict({"weighting": {"empty_score": 100, "empty_mandatory_score": 0}})

        assert config.weighting.empty_score == 100
        assert config.weighting.empty_mandatory_score == 0
        assert EngineConfig().weighting.empty_mandatory_score == 100

    @pytest.mark.parametrize("data,message", [
        ({"colour": "red"}, "Unknown config keys"),
        ({"weighting": {"bonus": 1}}, "Unknown weighting keys"),
        ({"weighting": {"severity_weights": {"minor": 9}}}, "strictly decreasing"),
        ({"weighting": {"binding_multipliers": {"guidance": 3}}}, "Mandatory multiplier"),
        ({"weighting": {"partial_credit": 1}}, "Partial credit"),
        ({"weighting": {"severity_weights": {"huge": 9}}}, "Unknown Severity"),
        ({"risk": {"critical_below": 90}}, "non-decreasing"),
        ({"max_recommendations": 0}, "at least 1"),
    ])
    def test_invalid_config(self, data, message):
        with pytest.raises(ValidationError, match=message):
            EngineConfig.from_dict(data)

    def test_from_file(self, tmp_path):
        path = tmp_path / "config.json"
        path.write_text(json.dumps({"max_recommendations": 5}))

        assert EngineConfig.from_file(str(path)).max_recommendations == 5
        assert EngineConfig.from_file(None) == EngineConfig()

    def test_custom_thresholds(self):
        thresholds = RiskThresholds(critical_below=40, high_below=60, medium_below=80)
        assert thresholds.medium_below == 80
