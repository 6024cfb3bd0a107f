"""🧩 Annotation Resolver - Fold raw annotation records into a doc model.

The descriptor hands over a pre-ordered list (base-to-derived, then
declaration order). Folding it left to right gives the precedence rules:

- heading: last one wins
- front matter: per block index, later key overwrites earlier value
- doc metadata: later key overwrites earlier value
- examples, custom sections: appended, never merged or deduplicated
"""

from __future__ import annotations

from .annotations import (
    CustomSectionAnnotation,
    DocMetadataAnnotation,
    ExampleAnnotation,
    FrontMatterAnnotation,
    HeadingAnnotation,
)
from .models import (
    DEFAULT_EXAMPLE_LANGUAGE,
    CustomSection,
    Example,
    Heading,
    ModelDescriptor,
    ResourceDocModel,
)

MIN_BLOCK_INDEX = 1


class AnnotationResolver:
    """Resolve a descriptor's raw annotations into a ResourceDocModel.

    Pure and total: a descriptor with no annotations yields an empty model.
    """

    def resolve(self, descriptor: ModelDescriptor) -> ResourceDocModel:
        doc = ResourceDocModel()

        for record in descriptor.annotations:
            if isinstance(record, HeadingAnnotation):
                doc.heading = Heading(title=record.title, description=record.description)
            elif isinstance(record, FrontMatterAnnotation):
                block = max(MIN_BLOCK_INDEX, record.block)
                doc.front_matter.setdefault(block, {})[record.key] = record.value
            elif isinstance(record, DocMetadataAnnotation):
                doc.metadata[record.key] = record.value
            elif isinstance(record, ExampleAnnotation):
                doc.examples.append(
                    Example(
                        title=record.title,
                        description=record.description,
                        code=record.code,
                        language=(record.language or "").strip() or DEFAULT_EXAMPLE_LANGUAGE,
                    )
                )
            elif isinstance(record, CustomSectionAnnotation):
                doc.custom_sections.append(
                    CustomSection(
                        title=record.title,
                        description=record.description,
                        body=record.body,
                    )
                )

        return doc


def resolve(descriptor: ModelDescriptor) -> ResourceDocModel:
    """Convenience function to resolve a single descriptor."""
    return AnnotationResolver().resolve(descriptor)
