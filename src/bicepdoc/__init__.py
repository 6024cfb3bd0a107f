"""📚 bicepdoc - Reference documentation for Bicep local-deploy resource types.

Resolves documentation annotations declared on resource models, cross-checks
them against each resource's property schema and renders Markdown reference
docs (or coverage diagnostics).

Usage:
    from bicepdoc import DocumentationGenerator, discover

    discovered = discover(["src/models"])
    generator = DocumentationGenerator()
    results = generator.generate_all(discovered.descriptors)
    generator.write_all(results, "docs")
"""

__version__ = "0.1.0"

from .checker import CoverageChecker, Report, RunResult, Severity, summarize
from .crossref import SchemaCrossReferencer
from .discovery import DiscoveryResult, ModelDiscovery, discover
from .generator import DocumentationGenerator, GenerationResult
from .models import (
    CapabilityFlags,
    Diagnostic,
    DiagnosticKind,
    FinalizedDocument,
    ModelDescriptor,
    PropertySchemaEntry,
    ResourceDocModel,
)
from .renderer import MarkdownRenderer
from .resolver import AnnotationResolver

__all__ = [
    "__version__",
    "AnnotationResolver",
    "SchemaCrossReferencer",
    "MarkdownRenderer",
    "CoverageChecker",
    "Report",
    "RunResult",
    "Severity",
    "summarize",
    "DocumentationGenerator",
    "GenerationResult",
    "ModelDiscovery",
    "DiscoveryResult",
    "discover",
    "CapabilityFlags",
    "Diagnostic",
    "DiagnosticKind",
    "FinalizedDocument",
    "ModelDescriptor",
    "PropertySchemaEntry",
    "ResourceDocModel",
]
