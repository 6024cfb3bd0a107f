"""🖋️ Markdown Renderer - Serialize a FinalizedDocument to Markdown.

Fixed document structure:

    ---                      (front matter, only if declared)
    # Title
    Description
    ## Example usage         (only if examples exist)
    ## <custom sections>
    ## Argument reference
    ## Attribute reference

Rendering is a pure function: the same document always renders to the same
bytes. Diagnostics are never rendered.
"""

from __future__ import annotations

from .models import FinalizedDocument
from .templates import (
    generate_custom_sections,
    generate_examples,
    generate_front_matter,
    generate_heading,
    generate_property_reference,
)


class MarkdownRenderer:
    """Render finalized resource documents."""

    def render(self, document: FinalizedDocument) -> str:
        doc = document.doc

        lines: list[str] = []
        lines.extend(generate_front_matter(doc))
        lines.extend(generate_heading(doc.heading, document.resource_name))
        lines.extend(generate_examples(doc.examples))
        lines.extend(generate_custom_sections(doc.custom_sections))
        lines.extend(generate_property_reference(document.properties, doc))

        return "\n".join(lines).rstrip("\n") + "\n"


def render(document: FinalizedDocument) -> str:
    """Convenience function to render a single document."""
    return MarkdownRenderer().render(document)
