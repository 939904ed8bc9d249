"""
End-to-end tests for ComplianceEngine against the bundled UK sample catalog.
"""

import json
import logging

import pytest
from space_compliance.catalog import RegimeComparison, StaticCatalog, load_catalog
from space_compliance.config import EngineConfig
from space_compliance.engine import ComplianceEngine
from space_compliance.errors import UnknownReferenceError, ValidationError
from space_compliance.profile import LicenseType
from space_compliance.reports import EvidenceStatus, ReportGenerator
from space_compliance.risk import RiskLevel
from space_compliance.scoring import GapPriority, RequirementAssessment


LAUNCH_PROFILE = {
    "operatorType": "launch_operator",
    "activityTypes": ["launch"],
    "launchFromUk": True,
    "launchToOrbit": True,
}

LAUNCH_REQUIREMENTS = [
    "uk-sia-s3-licence",
    "uk-sia-s8-exemptions",
    "uk-sir-reg9-safety-case",
    "uk-sia-s38-insurance",
    "uk-sir-reg31-debris-mitigation",
    "uk-sia-s61-registration",
    "uk-sir-reg42-cyber",
    "uk-sir-reg19-emergency",
    "uk-caa-public-engagement",
]


class TestComplianceEngine:
    """Test suite for ComplianceEngine."""

    @pytest.fixture
    def engine(self):
        return ComplianceEngine(load_catalog())

    def test_applicable_requirements(self, engine):
        """Test that the catalog filters requirements for a UK orbital launch."""
        result = engine.perform_assessment(LAUNCH_PROFILE, {})
        assert [r.id for r in result.applicable_requirements] == LAUNCH_REQUIREMENTS

    def test_single_critical_failure_is_critical(self, engine):
        """Test the launch example: one critical failure among compliant requirements."""
        statuses = {req_id: "compliant" for req_id in LAUNCH_REQUIREMENTS}
        statuses["uk-sir-reg9-safety-case"] = "non_compliant"

        result = engine.perform_assessment(LAUNCH_PROFILE, statuses)

        assert LicenseType.LAUNCH in result.required_licenses
        assert result.risk_level == RiskLevel.CRITICAL
        assert [g.requirement_id for g in result.gaps] == ["uk-sir-reg9-safety-case"]
        assert result.gaps[0].priority == GapPriority.HIGH
        assert result.gaps[0].caa_guidance_ref == "CAP 2215"

    def test_fully_compliant(self, engine):
        """Test a fully compliant operator."""
        statuses = {req_id: "compliant" for req_id in LAUNCH_REQUIREMENTS}

        result = engine.perform_assessment(LAUNCH_PROFILE, statuses)

        assert result.score.overall == 100
        assert result.score.mandatory == 100
        assert result.risk_level == RiskLevel.LOW
        assert result.gaps == []
        assert all(i.status == EvidenceStatus.COMPLETE for i in result.checklist)
        assert len(result.recommendations) <= 10

    def test_unassessed_operator(self, engine):
        """Test that an empty status map yields a gap per requirement."""
        result = engine.perform_assessment(LAUNCH_PROFILE, {})

        assert result.score.overall == 0
        assert result.risk_level == RiskLevel.CRITICAL
        assert len(result.gaps) == len(LAUNCH_REQUIREMENTS)
        assert len(result.recommendations) == 10
        assert result.recommendations[0].startswith("Priority: Complete CAA licence application")

    def test_cross_references_deduplicated(self, engine):
        """Test that a reference shared by two requirements is listed once."""
        profile = {
            "operator_type": "satellite_operator",
            "activity_types": ["orbital_operations"],
            "launch_to_orbit": True,
        }
        result = engine.perform_assessment(profile, {})

        assert result.cross_references.count("Art. 72") == 1
        assert result.cross_references[:2] == ["Art. 7", "Art. 8"]

    def test_unknown_reference_logged_and_ignored(self, engine, caplog):
        """Test that statuses for unknown requirements do not affect scoring."""
        statuses = {req_id: "compliant" for req_id in LAUNCH_REQUIREMENTS}
        statuses["uk-no-such-requirement"] = "non_compliant"

        with caplog.at_level(logging.WARNING, logger="space_compliance"):
            result = engine.perform_assessment(LAUNCH_PROFILE, statuses)

        assert result.unknown_references == ["uk-no-such-requirement"]
        assert result.score.overall == 100
        assert "Unknown requirement reference: uk-no-such-requirement" in caplog.text

    def test_unknown_reference_strict(self):
        """Test that strict mode raises on unknown references."""
        engine = ComplianceEngine(load_catalog(), EngineConfig(strict_references=True))

        with pytest.raises(UnknownReferenceError) as exc_info:
            engine.perform_assessment(LAUNCH_PROFILE, {"no-such-requirement": "compliant"})

        assert exc_info.value.requirement_id == "no-such-requirement"

    def test_non_applicable_catalog_reference_is_not_unknown(self, engine):
        """Test that a status for a catalog requirement outside the profile is ignored quietly."""
        statuses = {req_id: "compliant" for req_id in LAUNCH_REQUIREMENTS}
        statuses["uk-sia-s7-orbital"] = "non_compliant"

        result = engine.perform_assessment(LAUNCH_PROFILE, statuses)

        assert "uk-sia-s7-orbital" not in [r.id for r in result.applicable_requirements]
        assert result.unknown_references == []
        assert result.score.overall == 100

    def test_non_applicable_catalog_reference_strict(self):
        """Test that strict mode accepts statuses for any requirement in the catalog."""
        engine = ComplianceEngine(load_catalog(), EngineConfig(strict_references=True))

        result = engine.perform_assessment(LAUNCH_PROFILE, {"uk-sia-s7-orbital": "compliant"})

        assert result.unknown_references == []

    def test_invalid_profile(self, engine):
        """Test that validation errors surface directly."""
        with pytest.raises(ValidationError, match="Operator type is required"):
            engine.perform_assessment({"activityTypes": ["launch"]}, {})

    def test_assessment_records(self, engine):
        """Test that assessment records are accepted as statuses."""
        records = [RequirementAssessment(req_id, "compliant") for req_id in LAUNCH_REQUIREMENTS]
        assert engine.perform_assessment(LAUNCH_PROFILE, records).score.overall == 100

    def test_empty_catalog(self, launch_profile):
        """Test that no applicable requirements is not an error."""
        engine = ComplianceEngine(StaticCatalog([]))

        result = engine.perform_assessment(launch_profile, {})

        assert result.score.overall == 0
        assert result.score.mandatory == 100
        assert result.score.by_category == {}
        assert result.risk_level == RiskLevel.LOW
        assert result.gaps == []
        assert result.checklist == []
        assert result.cross_references == []
        assert result.recommendations == []

    def test_documentation_checklist(self, engine):
        """Test the checklist for the launch profile."""
        statuses = {"uk-sia-s3-licence": "partial", "uk-sia-s38-insurance": "compliant"}

        checklist = engine.generate_documentation_checklist(LAUNCH_PROFILE, statuses)

        documents = [i.document for i in checklist]
        assert len(documents) == len(set(documents))
        required = [i.required for i in checklist]
        assert required == sorted(required, reverse=True)
        assert EvidenceStatus.PARTIAL in {i.status for i in checklist}
        assert EvidenceStatus.COMPLETE in {i.status for i in checklist}

    def test_license_summaries(self, engine):
        """Test per-licence scores."""
        statuses = {req_id: "compliant" for req_id in LAUNCH_REQUIREMENTS}
        statuses["uk-sir-reg31-debris-mitigation"] = "non_compliant"

        summaries = {s.license_type: s for s in engine.license_summaries(LAUNCH_PROFILE, statuses)}

        assert set(summaries) == {LicenseType.LAUNCH, LicenseType.ORBITAL_OPERATOR}
        orbital = summaries[LicenseType.ORBITAL_OPERATOR]
        assert [r.id for r in orbital.requirements] == [
            "uk-sia-s38-insurance",
            "uk-sir-reg31-debris-mitigation",
            "uk-sia-s61-registration",
            "uk-sir-reg42-cyber",
        ]
        assert [g.requirement_id for g in orbital.gaps] == ["uk-sir-reg31-debris-mitigation"]
        assert orbital.compliance_score < summaries[LicenseType.LAUNCH].compliance_score

    def test_compliance_summary(self, engine):
        """Test status counts over applicable requirements."""
        statuses = {
            "uk-sia-s3-licence": "compliant",
            "uk-sir-reg9-safety-case": "partial",
            "uk-sia-s38-insurance": "non_compliant",
            "uk-sia-s61-registration": "non_compliant",
            "uk-caa-public-engagement": "not_applicable",
        }

        summary = engine.compliance_summary(LAUNCH_PROFILE, statuses)

        assert summary.total_requirements == 13
        assert summary.applicable == 9
        assert summary.compliant == 1
        assert summary.partial == 1
        assert summary.non_compliant == 2
        assert summary.not_applicable == 1
        assert summary.not_assessed == 4
        # safety case, insurance, debris mitigation
        assert summary.critical_gaps == 3
        # registration, cyber, emergency
        assert summary.major_gaps == 3

    def test_result_serializes(self, engine):
        """Test that the result converts to JSON."""
        result = engine.perform_assessment(LAUNCH_PROFILE, {"uk-sia-s3-licence": "partial"})

        data = json.loads(result.to_json())

        assert data['profile']['operator_type'] == "launch_operator"
        assert data['required_licenses'] == ["launch_licence", "orbital_operator_licence"]
        assert data['risk_level'] == "critical"
        assert data['gaps'][0]['priority'] == "high"

    def test_cross_regime_summary(self, engine):
        """Test overlap counts and considerations against the sample comparison table."""
        summary = engine.cross_regime_summary(LAUNCH_PROFILE)

        # licence, insurance, debris mitigation, registration, cyber
        assert summary.overlapping_requirements == 5
        assert summary.unique_requirements == 4
        assert [c.reference for c in summary.comparisons] == [
            "SIA s.3 - Launch/Return Licence",
            "SIA s.38 - Insurance Requirements",
            "SIR Reg.31 - Debris Mitigation",
            "SIA s.61 - UK Space Registry",
            "SIR Reg.42 - Cyber Security",
        ]
        assert summary.considerations[0] == (
            "UK operators must obtain separate licences for UK and EU activities. No mutual recognition."
        )
        assert len(summary.considerations) == 5
        assert json.loads(json.dumps(summary.to_dict()))['overlapping_requirements'] == 5

    def test_cross_regime_summary_deduplicates(self, launch_profile, make_requirement):
        """Test that shared implications are listed once and unrelated rows are dropped."""
        requirements = [
            make_requirement("a", cross_references=["Art. 1"]),
            make_requirement("b", cross_references=["Art. 2"]),
            make_requirement("c"),
        ]
        comparisons = [
            RegimeComparison("A", implications="Dual authorisation.", requirement_ids=("a",)),
            RegimeComparison("B", implications="Dual authorisation.", requirement_ids=("b",)),
            RegimeComparison("C", implications="Only for c.", requirement_ids=("c",)),
        ]
        engine = ComplianceEngine(StaticCatalog(requirements, comparisons=comparisons))

        summary = engine.cross_regime_summary(launch_profile)

        assert summary.overlapping_requirements == 2
        assert summary.unique_requirements == 1
        assert summary.considerations == ["Dual authorisation."]
        assert [c.reference for c in summary.comparisons] == ["A", "B"]

    def test_cross_regime_summary_without_table(self, launch_profile, make_requirement):
        """Test that a catalog without comparisons still counts overlap."""
        engine = ComplianceEngine(StaticCatalog([make_requirement("a", cross_references=["Art. 1"])]))

        summary = engine.cross_regime_summary(launch_profile)

        assert summary.overlapping_requirements == 1
        assert summary.unique_requirements == 0
        assert summary.considerations == []
        assert summary.comparisons == []


class TestReportGenerator:
    """Test suite for ReportGenerator."""

    @pytest.fixture
    def engine(self):
        return ComplianceEngine(load_catalog())

    def test_markdown_report(self, engine):
        """Test that the markdown report has its sections and disclaimers."""
        result = engine.perform_assessment(LAUNCH_PROFILE, {"uk-sia-s3-licence": "partial"})
        summary = engine.compliance_summary(LAUNCH_PROFILE, {"uk-sia-s3-licence": "partial"})

        report = ReportGenerator().generate_markdown_report(result, summary)

        assert report.startswith("# Space Compliance Assessment")
        assert "**Risk level:** CRITICAL" in report
        assert "## Documentation Checklist" in report
        assert "## Cross-References" in report
        assert "does not constitute legal advice" in report

    def test_markdown_truncates_gaps(self, engine):
        result = engine.perform_assessment(LAUNCH_PROFILE, {})
        report = ReportGenerator(top_gaps=2).generate_markdown_report(result)
        assert f"...and {len(result.gaps) - 2} more" in report

    def test_text_report(self, engine):
        result = engine.perform_assessment(LAUNCH_PROFILE, {})
        report = ReportGenerator().generate_text_report(result)

        assert "Risk level: critical" in report
        assert "RECOMMENDATIONS:" in report
        assert "MISSING DOCUMENTS" in report
