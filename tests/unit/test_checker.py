"""🧪 Tests for CoverageChecker."""

import io

import pytest
from rich.console import Console

from bicepdoc.checker import CoverageChecker, Severity, summarize
from bicepdoc.crossref import SchemaCrossReferencer
from bicepdoc.models import (
    CapabilityFlags,
    DiagnosticKind,
    Example,
    FinalizedDocument,
    Heading,
    PropertySchemaEntry,
    ResourceDocModel,
)


def _document(doc=None, schema=(), name="R"):
    return SchemaCrossReferencer().cross_reference(doc or ResourceDocModel(), schema, name)


def _prop(name, description=""):
    return PropertySchemaEntry(
        name=name, description=description, flags=CapabilityFlags(["Required"])
    )


@pytest.fixture
def console():
    return Console(file=io.StringIO(), width=120)


class TestCoverageChecker:
    """Tests for CoverageChecker class."""

    @pytest.fixture
    def checker(self, console):
        return CoverageChecker(console=console)

    def test_undocumented_property_is_warning(self, checker):
        """Test that undocumented properties are warn severity and pass."""
        report = checker.check(_document(schema=[_prop("a"), _prop("b")]))

        assert [f.name for f in report.warnings] == ["a", "b"]
        assert report.errors == []
        assert report.passed is True
        assert report.passed_strict is False

    def test_stale_reference_fails_run(self, checker):
        """Test the stale reference scenario end to end."""
        doc = ResourceDocModel(metadata={"property:NonExistent": "docs"})
        report = checker.check(_document(doc, [_prop("Resource", "documented")]))

        assert len(report.diagnostics) == 1
        finding = report.diagnostics[0]
        assert finding.kind == DiagnosticKind.STALE_REFERENCE
        assert finding.severity == Severity.ERROR
        assert summarize([report]).passed is False

    def test_warnings_alone_do_not_fail_run(self, checker):
        reports = [checker.check(_document(schema=[_prop("a")]))]

        result = summarize(reports)

        assert result.warnings == 1
        assert result.errors == 0
        assert result.passed is True

    def test_strict_mode_promotes_warnings(self, console):
        """Test that strict mode turns warnings into errors."""
        checker = CoverageChecker(strict=True, console=console)

        report = checker.check(_document(schema=[_prop("a")]))

        assert [f.severity for f in report.findings] == [Severity.ERROR]
        assert summarize([report]).passed is False

    def test_required_rules_disabled_by_default(self, checker):
        """Test that a bare resource passes without opt-in rules."""
        assert checker.check(_document()).findings == []

    def test_required_rules(self, console):
        """Test missing heading/example/front matter/custom detection."""
        checker = CoverageChecker(
            required=["heading", "example", "front_matter", "custom"], console=console
        )

        report = checker.check(_document())

        assert [f.kind for f in report.errors] == [
            DiagnosticKind.MISSING_HEADING,
            DiagnosticKind.MISSING_EXAMPLE,
            DiagnosticKind.MISSING_FRONT_MATTER,
            DiagnosticKind.MISSING_CUSTOM_SECTION,
        ]

    def test_required_rules_satisfied(self, console):
        checker = CoverageChecker(required=["heading", "example"], console=console)
        doc = ResourceDocModel(
            heading=Heading("R", "desc"), examples=[Example("E", "", "x")]
        )

        assert checker.check(_document(doc)).passed_strict is True

    def test_unknown_required_rule_rejected(self):
        with pytest.raises(ValueError, match="Unknown required annotation"):
            CoverageChecker(required=["nonsense"])

    def test_report_to_dict(self, checker):
        """Test the JSON-ready diagnostic record shape."""
        doc = ResourceDocModel(metadata={"property:gone": "x"})
        report = checker.check(_document(doc, name="Directory"), source="dir.py")

        data = report.to_dict()

        assert data["resource"] == "Directory"
        assert data["source"] == "dir.py"
        assert data["passed"] is False
        assert data["diagnostics"] == [
            {
                "resource": "Directory",
                "kind": "stale_reference",
                "severity": "error",
                "name": "gone",
                "detail": "Key 'property:gone' references unknown property 'gone'",
            }
        ]

    def test_print_results(self, checker, console):
        """Test console output for failing and passing resources."""
        failing = checker.check(
            _document(ResourceDocModel(metadata={"property:x": "y"}), name="Bad")
        )
        passing = checker.check(_document(name="Good"))

        checker.print_results([failing, passing])
        output = console.file.getvalue()

        assert "Bad" in output
        assert "stale_reference" in output
        assert "Good" not in output
        assert "Check failed" in output

    def test_print_results_all_passing(self, checker, console):
        checker.print_results([checker.check(_document(name="Good"))], verbose=True)
        output = console.file.getvalue()

        assert "Good" in output
        assert "fully documented" in output

    def test_print_results_warnings_only(self, checker, console):
        """Test that a warnings-only run lists findings but does not fail."""
        report = checker.check(_document(schema=[_prop("a")], name="Job"))

        checker.print_results([report])
        output = console.file.getvalue()

        assert "Job" in output
        assert "undocumented_property" in output
        assert "warn" in output
        assert "1 resources checked" in output
        assert "Check failed" not in output


def test_summarize_counts_across_resources():
    """Test aggregate counts over several reports."""
    checker = CoverageChecker(console=Console(file=io.StringIO()))
    reports = [
        checker.check(_document(schema=[_prop("a")], name="A")),
        checker.check(
            _document(ResourceDocModel(metadata={"property:z": "z"}), name="B")
        ),
    ]

    result = summarize(reports)

    assert result.to_dict() == {
        "resources": 2,
        "errors": 1,
        "warnings": 1,
        "passed": False,
    }


def test_finalized_document_diagnostics_untouched():
    """Test that checking does not mutate the document's diagnostics."""
    document = _document(schema=[_prop("a")])
    before = list(document.diagnostics)

    CoverageChecker(required=["heading"], console=Console(file=io.StringIO())).check(
        document
    )

    assert document.diagnostics == before
    assert isinstance(document, FinalizedDocument)
