"""
Unit tests for plain-text validation reports.
"""

from sbct.ir.enums import EntityVariant, Severity
from sbct.ir.schema import ProcessedEntity, ValidationResult, ValidationWarning
from sbct.validate.report import HEADER, batch_report, single_report


def processed(name, score=100, warnings=()):
    return ProcessedEntity(
        name=name,
        original=f"**{name}**",
        converted=f"**{name}** *(...)*",
        validation=ValidationResult(warnings=list(warnings), compliance_score=score),
        variant=EntityVariant.NPC,
    )


HP_WARNING = ValidationWarning(
    severity=Severity.WARNING,
    category="HP",
    message="Hit points are missing.",
    suggestion="Add hit points.",
)
PRIMES_INFO = ValidationWarning(
    severity=Severity.INFO,
    category="Primary attributes",
    message="Primary attributes are missing.",
    suggestion="Add primary attributes.",
)


class TestSingleReport:
    """One entity."""

    def test_compliant(self):
        """A clean entity gets a one-line verdict."""
        report = single_report(processed("Owen"))
        assert report.startswith(HEADER)
        assert "Owen is fully compliant (100% compliance)" in report

    def test_grouped_by_severity(self):
        """Warnings show suggestions; info lines do not."""
        report = single_report(processed("Owen", 75, [HP_WARNING, PRIMES_INFO]))

        assert "Compliance Score: 75%" in report
        assert "Total Issues: 2" in report
        assert "WARNINGS (1):" in report
        assert "INFORMATION (1):" in report
        assert "Add hit points." in report
        assert "Add primary attributes." not in report


class TestBatchReport:
    """Several entities."""

    def test_empty_and_single(self):
        """No entities, no report; one entity, the single report."""
        assert batch_report([]) == ""
        assert batch_report([processed("Owen")]) == single_report(processed("Owen"))

    def test_all_compliant(self):
        """Average compliance is reported."""
        report = batch_report([processed("Owen"), processed("Mara")])
        assert "All 2 entities fully compliant (100% average compliance)" in report

    def test_common_issues(self):
        """Issues are counted by category across entities."""
        report = batch_report([
            processed("Owen", 85, [HP_WARNING]),
            processed("Mara", 85, [HP_WARNING]),
            processed("Tess"),
        ])

        assert "Summary: 3 entities processed" in report
        assert "Average Compliance: 90%" in report
        assert "• HP: 2 occurrences" in report
        assert "Tess" not in report
        assert "--- RECOMMENDATIONS ---" in report
