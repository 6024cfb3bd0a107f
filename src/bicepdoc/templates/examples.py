"""📖 Heading & Examples Template - Generate the title and usage examples."""

from __future__ import annotations

from ..models import DEFAULT_EXAMPLE_LANGUAGE, Example, Heading


def generate_heading(heading: Heading | None, resource_name: str) -> list[str]:
    """Generate the H1 title and its description paragraph.

    Falls back to the bare resource type name (without description) when no
    heading is declared.
    """
    if heading is None or not heading.title.strip():
        return [f"# {resource_name}", ""]

    lines = [f"# {heading.title}", ""]
    if heading.description.strip():
        lines.append(heading.description)
        lines.append("")
    return lines


def generate_examples(examples: list[Example]) -> list[str]:
    """Generate the ``## Example usage`` section.

    Args:
        examples: Examples in declaration order

    Returns:
        Section lines, or an empty list if there are no examples
    """
    if not examples:
        return []

    lines = ["## Example usage", ""]
    for example in examples:
        lines.extend(_generate_example(example))
    return lines


def _generate_example(example: Example) -> list[str]:
    lines = []

    if example.title.strip():
        lines.append(f"### {example.title}")
        lines.append("")

    if example.description.strip():
        lines.append(example.description)
        lines.append("")

    language = example.language.strip() or DEFAULT_EXAMPLE_LANGUAGE
    lines.append(f"```{language}")
    # Only the fence boundaries are normalized; the code itself is verbatim
    code = example.code.strip("\r\n")
    if code:
        lines.append(code)
    lines.append("```")
    lines.append("")
    return lines
