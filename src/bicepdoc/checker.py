"""✅ Coverage Checker - Classify cross-reference findings per resource.

Severity policy:
- undocumented_property → warn
- stale_reference → error
- missing_* (opt-in required annotation rules) → error

A run fails if any resource has at least one error. Warnings alone never fail
a run unless strict mode promotes them.

Usage:
    checker = CoverageChecker(required=["heading"])
    reports = [checker.check(doc) for doc in documents]
    result = summarize(reports)
    checker.print_results(reports)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Literal

from rich.console import Console
from rich.table import Table

from .models import Diagnostic, DiagnosticKind, FinalizedDocument, ResourceDocModel

RequiredAnnotation = Literal["heading", "example", "front_matter", "custom"]


class Severity(Enum):
    """Diagnostic severity."""

    ERROR = "error"
    WARN = "warn"

    def __str__(self) -> str:
        return self.value


SEVERITIES = {
    DiagnosticKind.UNDOCUMENTED_PROPERTY: Severity.WARN,
    DiagnosticKind.STALE_REFERENCE: Severity.ERROR,
    DiagnosticKind.MISSING_HEADING: Severity.ERROR,
    DiagnosticKind.MISSING_EXAMPLE: Severity.ERROR,
    DiagnosticKind.MISSING_FRONT_MATTER: Severity.ERROR,
    DiagnosticKind.MISSING_CUSTOM_SECTION: Severity.ERROR,
}


@dataclass
class Finding:
    """A diagnostic with its severity for one resource."""

    resource: str
    kind: DiagnosticKind
    severity: Severity
    name: str
    detail: str

    def to_dict(self) -> dict[str, str]:
        return {
            "resource": self.resource,
            "kind": str(self.kind),
            "severity": str(self.severity),
            "name": self.name,
            "detail": self.detail,
        }


@dataclass
class Report:
    """Coverage report for a single resource."""

    resource_name: str
    findings: list[Finding] = field(default_factory=list)
    source: str | None = None

    @property
    def diagnostics(self) -> list[Finding]:
        return self.findings

    @property
    def errors(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == Severity.ERROR]

    @property
    def warnings(self) -> list[Finding]:
        return [f for f in self.findings if f.severity == Severity.WARN]

    @property
    def passed(self) -> bool:
        return len(self.errors) == 0

    @property
    def passed_strict(self) -> bool:
        return len(self.findings) == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "resource": self.resource_name,
            "source": self.source,
            "passed": self.passed,
            "diagnostics": [f.to_dict() for f in self.findings],
        }


@dataclass
class RunResult:
    """Aggregate outcome of a check run."""

    resources: int
    errors: int
    warnings: int

    @property
    def passed(self) -> bool:
        return self.errors == 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "resources": self.resources,
            "errors": self.errors,
            "warnings": self.warnings,
            "passed": self.passed,
        }


@dataclass
class RequiredRule:
    """An opt-in rule requiring a kind of annotation to be present."""

    name: RequiredAnnotation
    kind: DiagnosticKind
    message: str
    check: Callable[[ResourceDocModel], bool]


REQUIRED_RULES = [
    RequiredRule(
        name="heading",
        kind=DiagnosticKind.MISSING_HEADING,
        message="Missing doc heading",
        check=lambda doc: doc.heading is not None and bool(doc.heading.title.strip()),
    ),
    RequiredRule(
        name="example",
        kind=DiagnosticKind.MISSING_EXAMPLE,
        message="Missing doc example",
        check=lambda doc: bool(doc.examples),
    ),
    RequiredRule(
        name="front_matter",
        kind=DiagnosticKind.MISSING_FRONT_MATTER,
        message="Missing front matter",
        check=lambda doc: bool(doc.merged_front_matter()),
    ),
    RequiredRule(
        name="custom",
        kind=DiagnosticKind.MISSING_CUSTOM_SECTION,
        message="Missing custom doc section",
        check=lambda doc: bool(doc.custom_sections),
    ),
]


class CoverageChecker:
    """Turn finalized documents into severity-classified reports."""

    def __init__(
        self,
        required: Iterable[RequiredAnnotation] = (),
        strict: bool = False,
        console: Console | None = None,
    ) -> None:
        """Initialize the checker.

        Args:
            required: Annotation kinds that must be present (heading, example,
                front_matter, custom)
            strict: If True, warnings are treated as errors
            console: Rich console for output
        """
        wanted = set(required)
        unknown = wanted - {rule.name for rule in REQUIRED_RULES}
        if unknown:
            raise ValueError(f"Unknown required annotation(s): {', '.join(sorted(unknown))}")

        self._rules = [rule for rule in REQUIRED_RULES if rule.name in wanted]
        self.strict = strict
        self.console = console or Console()

    def check(self, document: FinalizedDocument, source: str | None = None) -> Report:
        """Classify a document's diagnostics.

        Args:
            document: Cross-referenced document
            source: Where the resource was defined (for display only)

        Returns:
            Report for the resource
        """
        diagnostics = list(document.diagnostics)
        for rule in self._rules:
            if not rule.check(document.doc):
                diagnostics.append(
                    Diagnostic(kind=rule.kind, name=rule.name, message=rule.message)
                )

        report = Report(resource_name=document.resource_name, source=source)
        for diagnostic in diagnostics:
            severity = SEVERITIES[diagnostic.kind]
            # In strict mode, promote warnings to errors
            if self.strict and severity == Severity.WARN:
                severity = Severity.ERROR
            report.findings.append(
                Finding(
                    resource=document.resource_name,
                    kind=diagnostic.kind,
                    severity=severity,
                    name=diagnostic.name,
                    detail=diagnostic.message,
                )
            )
        return report

    # Reporting

    def print_results(self, reports: list[Report], verbose: bool = False) -> None:
        """Print a findings table and a one-line verdict.

        Args:
            reports: Per-resource reports, already in output order
            verbose: Also list resources without findings
        """
        result = summarize(reports)
        flagged = [r for r in reports if r.findings]

        if flagged:
            self.console.print(self._findings_table(flagged))

        if verbose:
            for report in reports:
                if not report.findings:
                    self.console.print(f"[green]✅ {report.resource_name}[/green]")

        if not flagged:
            self.console.print(
                f"[bold green]✅ All {result.resources} resources are fully documented![/bold green]"
            )
            return

        self.console.print(
            f"[bold]📊 {result.resources} resources checked:[/bold] "
            f"[red]{result.errors} error(s)[/red], "
            f"[yellow]{result.warnings} warning(s)[/yellow]"
        )
        if not result.passed:
            self.console.print("[bold red]Check failed. Fix errors before proceeding.[/bold red]")

    def _findings_table(self, reports: list[Report]) -> Table:
        tbl = Table(
            title="📚 Documentation Coverage Results",
            show_header=True,
            header_style="bold cyan",
        )
        tbl.add_column("Resource")
        tbl.add_column("Severity")
        tbl.add_column("Kind", no_wrap=True)
        tbl.add_column("Detail")

        for report in reports:
            for finding in report.findings:
                color = "red" if finding.severity == Severity.ERROR else "yellow"
                tbl.add_row(
                    report.resource_name,
                    f"[{color}]{finding.severity}[/{color}]",
                    str(finding.kind),
                    finding.detail,
                )
        return tbl


def summarize(reports: Iterable[Report]) -> RunResult:
    """Aggregate per-resource reports into the run-level result."""
    reports = list(reports)
    return RunResult(
        resources=len(reports),
        errors=sum(len(r.errors) for r in reports),
        warnings=sum(len(r.warnings) for r in reports),
    )


def check(document: FinalizedDocument) -> Report:
    """Convenience function to check a single document with default policy."""
    return CoverageChecker().check(document)
