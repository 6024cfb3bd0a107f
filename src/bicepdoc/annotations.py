"""🏷️ Documentation Annotations - Declarative doc records for resource models.

Raw annotation records come in five kinds (heading, front matter, doc metadata,
example, custom section). They can be attached to model classes with
decorators, or listed in a YAML resource manifest.

Example:
    from pydantic import BaseModel
    from bicepdoc import annotations as doc

    @doc.resource_type("Directory")
    @doc.front_matter("category", "Workspace")
    @doc.doc_heading("Directory", "Represents a directory in the workspace.")
    @doc.doc_example(
        "Creating a directory",
        "Creates a directory under the user's home.",
        "resource directory 'Directory' = {\\n  path: '/Users/me/dir'\\n}",
    )
    class Directory(BaseModel):
        path: str = doc.type_property("The path.", "Required", "Identifier")

Stacked decorators keep their top-to-bottom order, and records are stored on
the decorated class only. Inheritance is resolved later by discovery, which
concatenates records base-to-derived along the MRO.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import Annotated, Any, Literal, TypeVar, Union

from pydantic import BaseModel, Field, field_validator

from .models import DEFAULT_EXAMPLE_LANGUAGE

ANNOTATIONS_ATTR = "__bicepdoc_annotations__"
RESOURCE_TYPE_ATTR = "__bicepdoc_resource_type__"
FLAGS_KEY = "capability_flags"

T = TypeVar("T", bound=type)


def as_text(value: Any) -> Any:
    """Coerce a YAML scalar to the string it was written as.

    YAML reads ``10``, ``true`` or ``2024-01-01`` as typed values and a blank field as
    None. Annotation text is opaque, so these become strings (None becomes "").
    Anything else is returned unchanged for pydantic to validate.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float, date)):
        return str(value)
    return value


class AnnotationRecord(BaseModel):
    """Base for raw annotation records."""

    @field_validator(
        "title", "description", "key", "value", "code", "language", "body",
        mode="before",
        check_fields=False,
    )
    @classmethod
    def coerce_text(cls, v: Any) -> Any:
        return as_text(v)


class HeadingAnnotation(AnnotationRecord):
    """Document H1 title and the paragraph under it."""

    kind: Literal["heading"] = "heading"
    title: str = ""
    description: str = ""


class FrontMatterAnnotation(AnnotationRecord):
    """A YAML front matter entry for a (1-based) block."""

    kind: Literal["front_matter"] = "front_matter"
    key: str
    value: str = ""
    block: int = Field(default=1, description="Block index; values below 1 are clamped")


class DocMetadataAnnotation(AnnotationRecord):
    """Generator-side metadata, never rendered."""

    kind: Literal["doc_metadata"] = "doc_metadata"
    key: str
    value: str = ""


class ExampleAnnotation(AnnotationRecord):
    """A usage example rendered under ``## Example usage``."""

    kind: Literal["example"] = "example"
    title: str = ""
    description: str = ""
    code: str = ""
    language: str | None = DEFAULT_EXAMPLE_LANGUAGE


class CustomSectionAnnotation(AnnotationRecord):
    """A free-form ``## {title}`` section."""

    kind: Literal["custom_section"] = "custom_section"
    title: str = ""
    description: str = ""
    body: str = ""


RawAnnotation = Annotated[
    Union[
        HeadingAnnotation,
        FrontMatterAnnotation,
        DocMetadataAnnotation,
        ExampleAnnotation,
        CustomSectionAnnotation,
    ],
    Field(discriminator="kind"),
]


# Decorators


def _own_annotations(cls: type) -> list[RawAnnotation]:
    """Get the annotation list declared on *cls* itself (not inherited)."""
    if ANNOTATIONS_ATTR not in cls.__dict__:
        setattr(cls, ANNOTATIONS_ATTR, [])
    return cls.__dict__[ANNOTATIONS_ATTR]


def _annotate(record: RawAnnotation) -> Callable[[T], T]:
    def decorator(cls: T) -> T:
        # Decorators apply bottom-up; prepend to keep source order
        _own_annotations(cls).insert(0, record)
        return cls

    return decorator


def resource_type(name: str) -> Callable[[T], T]:
    """Mark a class as a resource type named *name*."""

    def decorator(cls: T) -> T:
        setattr(cls, RESOURCE_TYPE_ATTR, name)
        _own_annotations(cls)
        return cls

    return decorator


def doc_heading(title: str, description: str = "") -> Callable[[T], T]:
    return _annotate(HeadingAnnotation(title=title, description=description))


def front_matter(key: str, value: str, block: int = 1) -> Callable[[T], T]:
    return _annotate(FrontMatterAnnotation(key=key, value=value, block=block))


def doc_metadata(key: str, value: str) -> Callable[[T], T]:
    return _annotate(DocMetadataAnnotation(key=key, value=value))


def doc_example(
    title: str,
    description: str,
    code: str,
    language: str = DEFAULT_EXAMPLE_LANGUAGE,
) -> Callable[[T], T]:
    return _annotate(
        ExampleAnnotation(
            title=title, description=description, code=code, language=language
        )
    )


def doc_custom(title: str, description: str, body: str = "") -> Callable[[T], T]:
    return _annotate(
        CustomSectionAnnotation(title=title, description=description, body=body)
    )


def type_property(description: str = "", *flags: str, **kwargs: Any) -> Any:
    """Declare a model field with a description and capability flags.

    Args:
        description: Property description shown in the reference section
        *flags: Capability flag names (e.g. "Required", "Identifier")
        **kwargs: Passed through to ``pydantic.Field`` (e.g. ``default``)

    Returns:
        A pydantic ``FieldInfo``
    """
    extra = dict(kwargs.pop("json_schema_extra", None) or {})
    extra[FLAGS_KEY] = list(flags)
    return Field(description=description, json_schema_extra=extra, **kwargs)


def get_resource_type(cls: type) -> str | None:
    """Get the resource type name declared directly on *cls*."""
    return cls.__dict__.get(RESOURCE_TYPE_ATTR)


def get_declared_annotations(cls: type) -> list[RawAnnotation]:
    """Get the records declared directly on *cls*, in source order."""
    return list(cls.__dict__.get(ANNOTATIONS_ATTR, []))
