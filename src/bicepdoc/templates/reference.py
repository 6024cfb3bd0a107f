"""📚 Reference Template - Generate custom sections and property reference.

Property items look like:

    - **path** (required, identifier) — The path of the directory.

Enum-typed properties end with their allowed values:

    - **mode** (required) — The mode. (Can be `A`, or `B`)

Qualifiers always render in the same order: required/optional, identifier,
read-only, write-only, discriminator, then any flag the type system adds
beyond those (lower-cased, sorted).
"""

from __future__ import annotations

from collections.abc import Sequence

from ..models import KNOWN_FLAGS, CustomSection, PropertySchemaEntry, ResourceDocModel

FLAG_QUALIFIERS = {
    "Identifier": "identifier",
    "ReadOnly": "read-only",
    "WriteOnly": "write-only",
    "DiscriminatorValue": "discriminator",
}


def generate_custom_sections(sections: list[CustomSection]) -> list[str]:
    """Generate one ``## {title}`` section per custom section, in order."""
    lines = []
    for section in sections:
        if section.title.strip():
            lines.append(f"## {section.title}")
            lines.append("")
        if section.description.strip():
            lines.append(section.description)
            lines.append("")
        if section.body.strip():
            # Body may itself be markdown; keep it verbatim
            lines.append(section.body.strip("\r\n"))
            lines.append("")
    return lines


def generate_property_reference(
    properties: Sequence[PropertySchemaEntry],
    doc: ResourceDocModel | None = None,
) -> list[str]:
    """Generate the argument and attribute reference sections.

    Read-only properties are outputs and go under ``## Attribute reference``;
    everything else is an argument. Schema order is preserved within each
    section.

    Args:
        properties: Property schema in declaration order
        doc: Doc model used for ``property:<name>`` description fallbacks

    Returns:
        Section lines (empty if there are no properties)
    """
    arguments = [p for p in properties if not p.flags.read_only]
    outputs = [p for p in properties if p.flags.read_only]

    lines = []
    if arguments:
        lines.append("## Argument reference")
        lines.append("")
        lines.extend(format_property(p, doc) for p in arguments)
        lines.append("")
    if outputs:
        lines.append("## Attribute reference")
        lines.append("")
        lines.extend(format_property(p, doc) for p in outputs)
        lines.append("")
    return lines


def format_qualifiers(prop: PropertySchemaEntry) -> str:
    """Format capability flags as a parenthetical qualifier list."""
    qualifiers = ["required" if prop.flags.required else "optional"]
    for flag in prop.flags:
        if flag == "Required":
            continue
        if flag in FLAG_QUALIFIERS:
            qualifiers.append(FLAG_QUALIFIERS[flag])
        elif flag not in KNOWN_FLAGS:
            qualifiers.append(flag.lower())
    return ", ".join(qualifiers)


def format_allowed_values(values: Sequence[str]) -> str:
    """Format enum values as a ``(Can be ...)`` suffix."""
    if not values:
        return ""
    if len(values) == 1:
        return f"(Can be `{values[0]}`)"
    head = ", ".join(f"`{v}`" for v in values[:-1])
    return f"(Can be {head}, or `{values[-1]}`)"


def format_property(
    prop: PropertySchemaEntry, doc: ResourceDocModel | None = None
) -> str:
    description = (prop.description or "").strip()
    if not description and doc is not None:
        description = doc.property_doc(prop.name)
    suffix = format_allowed_values(prop.allowed_values)
    if suffix:
        description = f"{description} {suffix}".lstrip()
    return f"- **{prop.name}** ({format_qualifiers(prop)}) — {description}"
