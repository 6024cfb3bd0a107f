"""🔗 Schema Cross-Referencer - Join a doc model with the property schema.

Findings are carried forward as diagnostics, never raised:

- ``undocumented_property``: schema entry with a blank description and no
  ``property:<Name>`` doc metadata entry
- ``stale_reference``: a ``property:<Name>`` metadata or front matter key
  naming a property that is not in the schema

Without any ``property:`` keys the stale reference check is a no-op.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from .models import (
    Diagnostic,
    DiagnosticKind,
    FinalizedDocument,
    PropertySchemaEntry,
    ResourceDocModel,
    referenced_property,
)


class SchemaCrossReferencer:
    """Cross-reference resolved annotations against a property schema."""

    def cross_reference(
        self,
        doc: ResourceDocModel,
        schema: Sequence[PropertySchemaEntry] | None,
        resource_name: str = "",
    ) -> FinalizedDocument:
        """Build the FinalizedDocument for one resource.

        Args:
            doc: Resolved documentation model
            schema: Property schema in declaration order (None is treated as empty)
            resource_name: Resource type name

        Returns:
            FinalizedDocument with the schema copied verbatim and diagnostics
        """
        properties = tuple(schema or ())
        diagnostics = [
            *self._undocumented(doc, properties),
            *self._stale_references(doc, properties),
        ]
        return FinalizedDocument(
            resource_name=resource_name,
            doc=doc,
            properties=properties,
            diagnostics=diagnostics,
        )

    def _undocumented(
        self, doc: ResourceDocModel, properties: Iterable[PropertySchemaEntry]
    ) -> list[Diagnostic]:
        seen: set[str] = set()
        found = []
        for prop in properties:
            if prop.name in seen:
                continue
            seen.add(prop.name)
            if (prop.description or "").strip() or doc.property_doc(prop.name):
                continue
            found.append(
                Diagnostic(
                    kind=DiagnosticKind.UNDOCUMENTED_PROPERTY,
                    name=prop.name,
                    message=f"Property '{prop.name}' has no description",
                )
            )
        return found

    def _stale_references(
        self, doc: ResourceDocModel, properties: Iterable[PropertySchemaEntry]
    ) -> list[Diagnostic]:
        known = {prop.name for prop in properties}

        keys = list(doc.metadata)
        for index in sorted(doc.front_matter):
            keys.extend(doc.front_matter[index])

        reported: set[str] = set()
        found = []
        for key in keys:
            name = referenced_property(key)
            if name is None or name in known or name in reported:
                continue
            reported.add(name)
            found.append(
                Diagnostic(
                    kind=DiagnosticKind.STALE_REFERENCE,
                    name=name,
                    message=f"Key '{key}' references unknown property '{name}'",
                )
            )
        return found


def cross_reference(
    doc: ResourceDocModel,
    schema: Sequence[PropertySchemaEntry] | None,
    resource_name: str = "",
) -> FinalizedDocument:
    """Convenience function to cross-reference a single doc model."""
    return SchemaCrossReferencer().cross_reference(doc, schema, resource_name)
