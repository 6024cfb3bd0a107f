"""📋 Documentation Models - Data structures flowing through the doc pipeline.

One resource is processed as:

    ModelDescriptor → ResourceDocModel → FinalizedDocument → (markdown | Report)

Every structure here is created fresh per resource and never shared between
resources, so descriptors can be processed concurrently.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .annotations import RawAnnotation


# Canonical capability flag names, in the order they render as qualifiers
KNOWN_FLAGS = ("Required", "Identifier", "ReadOnly", "WriteOnly", "DiscriminatorValue")
_CANONICAL = {name.lower(): name for name in KNOWN_FLAGS}

# Metadata/front-matter keys with this prefix reference a property by name
PROPERTY_KEY_PREFIX = "property:"

DEFAULT_EXAMPLE_LANGUAGE = "bicep"


def referenced_property(key: str) -> str | None:
    """Get the property name a key references, or None if it is not a reference."""
    if not key.startswith(PROPERTY_KEY_PREFIX):
        return None
    name = key[len(PROPERTY_KEY_PREFIX) :].strip()
    return name or None


class CapabilityFlags:
    """Immutable set of capability flag names sourced from the type system.

    Known flags are normalized to their canonical spelling so that
    ``"required" in flags`` and ``"Required" in flags`` agree. Unknown flags
    are kept verbatim; the vocabulary belongs to the type system.
    """

    __slots__ = ("_flags",)

    def __init__(self, flags: Iterable[str] = ()) -> None:
        self._flags = frozenset(self.normalize(f) for f in flags if f and f.strip())

    @staticmethod
    def normalize(flag: str) -> str:
        flag = flag.strip()
        return _CANONICAL.get(flag.lower(), flag)

    def __contains__(self, flag: object) -> bool:
        return isinstance(flag, str) and self.normalize(flag) in self._flags

    def __iter__(self) -> Iterator[str]:
        """Iterate known flags in canonical order, then unknown flags sorted."""
        for name in KNOWN_FLAGS:
            if name in self._flags:
                yield name
        yield from sorted(f for f in self._flags if f not in KNOWN_FLAGS)

    def __len__(self) -> int:
        return len(self._flags)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, CapabilityFlags):
            return self._flags == other._flags
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._flags)

    def __repr__(self) -> str:
        return f"CapabilityFlags({list(self)!r})"

    @property
    def required(self) -> bool:
        return "Required" in self._flags

    @property
    def read_only(self) -> bool:
        return "ReadOnly" in self._flags


@dataclass(frozen=True)
class PropertySchemaEntry:
    """One declared property of a resource type, as the type system sees it."""

    name: str
    description: str = ""
    flags: CapabilityFlags = field(default_factory=CapabilityFlags)
    # Permitted values of an enum-typed property, in declaration order
    allowed_values: tuple[str, ...] = ()


@dataclass(frozen=True)
class ModelDescriptor:
    """Handle to one resource type handed over by discovery.

    ``annotations`` must already be in base-to-derived order, declaration
    order within each type. ``properties`` is in schema-declaration order.
    """

    resource_name: str
    annotations: tuple[RawAnnotation, ...] = ()
    properties: tuple[PropertySchemaEntry, ...] | None = ()
    source: str | None = None


@dataclass(frozen=True)
class Heading:
    title: str
    description: str = ""


@dataclass(frozen=True)
class Example:
    title: str
    description: str
    code: str
    language: str = DEFAULT_EXAMPLE_LANGUAGE


@dataclass(frozen=True)
class CustomSection:
    title: str
    description: str
    body: str = ""


@dataclass
class ResourceDocModel:
    """Normalized documentation model for one resource type."""

    heading: Heading | None = None
    # block index -> key -> value, keys in first-insertion order
    front_matter: dict[int, dict[str, str]] = field(default_factory=dict)
    metadata: dict[str, str] = field(default_factory=dict)
    examples: list[Example] = field(default_factory=list)
    custom_sections: list[CustomSection] = field(default_factory=list)

    def merged_front_matter(self) -> dict[str, str]:
        """Merge all blocks in ascending index order.

        A key set in a higher block overwrites the value from a lower block
        but keeps its original position.
        """
        merged: dict[str, str] = {}
        for index in sorted(self.front_matter):
            merged.update(self.front_matter[index])
        return merged

    def property_doc(self, name: str) -> str:
        """Get the property-scoped doc text from metadata (empty if none)."""
        text = ""
        for key, value in self.metadata.items():
            if referenced_property(key) == name:
                text = value
        return text.strip()


class DiagnosticKind(Enum):
    """Kinds of findings produced by cross-referencing."""

    UNDOCUMENTED_PROPERTY = "undocumented_property"
    STALE_REFERENCE = "stale_reference"
    MISSING_HEADING = "missing_heading"
    MISSING_EXAMPLE = "missing_example"
    MISSING_FRONT_MATTER = "missing_front_matter"
    MISSING_CUSTOM_SECTION = "missing_custom_section"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Diagnostic:
    """A single coverage finding for a resource."""

    kind: DiagnosticKind
    name: str
    message: str


@dataclass
class FinalizedDocument:
    """A resolved doc model joined with the resource's property schema."""

    resource_name: str
    doc: ResourceDocModel
    properties: tuple[PropertySchemaEntry, ...] = ()
    diagnostics: list[Diagnostic] = field(default_factory=list)
