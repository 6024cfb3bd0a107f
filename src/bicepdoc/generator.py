"""📚 Documentation Generator - Orchestrate doc generation for resource types.

Each descriptor runs through one atomic unit of work:

    resolve → cross_reference → render | check

Units are independent and run on a thread pool; results are sorted by
resource type name before they are returned or written, so output never
depends on scheduling order.

Usage:
    generator = DocumentationGenerator(max_workers=4)
    results = generator.generate_all(descriptors)
    generator.write_all(results, Path("docs"), force=False)
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar

from rich.console import Console

from .checker import CoverageChecker, Report
from .crossref import SchemaCrossReferencer
from .models import Diagnostic, FinalizedDocument, ModelDescriptor
from .renderer import MarkdownRenderer
from .resolver import AnnotationResolver

R = TypeVar("R")


@dataclass
class GenerationResult:
    """Result of generating documentation for one resource type."""

    resource_name: str
    markdown: str
    diagnostics: list[Diagnostic] = field(default_factory=list)
    source: str | None = None
    files_created: list[str] = field(default_factory=list)
    files_updated: list[str] = field(default_factory=list)
    files_skipped: list[str] = field(default_factory=list)
    errors: list[str] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return len(self.errors) == 0

    @property
    def filename(self) -> str:
        return f"{self.resource_name.lower()}.md"


def _sort_key(item: GenerationResult | Report) -> tuple[str, str]:
    return (item.resource_name, item.source or "")


class DocumentationGenerator:
    """Generate (or check) documentation for many resource types.

    Supports:
    - Concurrent per-resource processing with deterministic ordering
    - Writing one Markdown file per resource with an overwrite policy
    - Running the check pipeline over the same resolved semantics
    """

    def __init__(
        self,
        max_workers: int = 4,
        console: Console | None = None,
        verbose: bool = False,
    ) -> None:
        """Initialize the generator.

        Args:
            max_workers: Maximum resources processed concurrently
            console: Rich console for output (optional)
            verbose: Print per-file write messages
        """
        self.max_workers = max(1, max_workers)
        self.console = console or Console()
        self.verbose = verbose
        self._resolver = AnnotationResolver()
        self._crossref = SchemaCrossReferencer()
        self._renderer = MarkdownRenderer()

    def finalize(self, descriptor: ModelDescriptor) -> FinalizedDocument:
        """Run the shared resolve → cross-reference stages for one descriptor."""
        doc = self._resolver.resolve(descriptor)
        return self._crossref.cross_reference(
            doc, descriptor.properties, descriptor.resource_name
        )

    def generate(self, descriptor: ModelDescriptor) -> GenerationResult:
        """Generate markdown for a single resource type."""
        document = self.finalize(descriptor)
        return GenerationResult(
            resource_name=descriptor.resource_name,
            markdown=self._renderer.render(document),
            diagnostics=list(document.diagnostics),
            source=descriptor.source,
        )

    def generate_all(
        self, descriptors: Iterable[ModelDescriptor]
    ) -> list[GenerationResult]:
        """Generate markdown for all resource types.

        Returns:
            List of GenerationResult sorted by resource type name
        """
        return sorted(self._map(self.generate, descriptors), key=_sort_key)

    def check_all(
        self,
        descriptors: Iterable[ModelDescriptor],
        checker: CoverageChecker | None = None,
    ) -> list[Report]:
        """Check all resource types without rendering.

        Args:
            descriptors: Descriptors to check
            checker: Checker holding the severity policy (default policy if None)

        Returns:
            List of Report sorted by resource type name
        """
        checker = checker or CoverageChecker(console=self.console)

        def unit(descriptor: ModelDescriptor) -> Report:
            return checker.check(self.finalize(descriptor), source=descriptor.source)

        return sorted(self._map(unit, descriptors), key=_sort_key)

    def _map(
        self,
        unit: Callable[[ModelDescriptor], R],
        descriptors: Iterable[ModelDescriptor],
    ) -> list[R]:
        descriptors = list(descriptors)
        if len(descriptors) <= 1 or self.max_workers == 1:
            return [unit(d) for d in descriptors]
        with ThreadPoolExecutor(max_workers=self.max_workers) as pool:
            return list(pool.map(unit, descriptors))

    # Output

    def write_all(
        self,
        results: list[GenerationResult],
        output_dir: Path | str,
        force: bool = False,
    ) -> None:
        """Write rendered markdown, one file per resource.

        Existing files are skipped unless *force* is set. Outcomes are tracked
        on each result.

        Args:
            results: Results from generate_all (already sorted)
            output_dir: Destination directory (created if missing)
            force: Overwrite existing files
        """
        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        for result in results:
            path = output_dir / result.filename
            try:
                self._write_file(path, result, force)
            except OSError as e:
                result.errors.append(f"Failed to write {path}: {e}")

    def _write_file(self, path: Path, result: GenerationResult, force: bool) -> None:
        existed = path.exists()

        if existed and not force:
            result.files_skipped.append(str(path))
            self.console.print(
                f"[yellow]Warning:[/yellow] {path} already exists. Skipping. "
                "Use --force to overwrite."
            )
            return

        path.write_text(result.markdown, encoding="utf-8")

        if existed:
            result.files_updated.append(str(path))
        else:
            result.files_created.append(str(path))

        if self.verbose:
            self.console.print(f"[dim]File write: {path}[/dim]")


def generate_docs(
    descriptors: Iterable[ModelDescriptor],
    output_dir: Path | str,
    force: bool = False,
    max_workers: int = 4,
) -> list[GenerationResult]:
    """Convenience function to generate and write docs for descriptors.

    Args:
        descriptors: Descriptors to document
        output_dir: Destination directory
        force: Overwrite existing files
        max_workers: Maximum resources processed concurrently

    Returns:
        List of GenerationResult
    """
    generator = DocumentationGenerator(max_workers=max_workers)
    results = generator.generate_all(descriptors)
    generator.write_all(results, output_dir, force=force)
    return results
