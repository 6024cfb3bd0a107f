"""🧾 Front Matter Template - Generate the YAML preamble block."""

from __future__ import annotations

import yaml

from ..models import ResourceDocModel

DELIMITER = "---"


def generate_front_matter(doc: ResourceDocModel) -> list[str]:
    """Generate the front matter block for a document.

    All block indices are merged into one mapping (see
    ``ResourceDocModel.merged_front_matter``). Values are opaque strings.

    Args:
        doc: Resolved documentation model

    Returns:
        Lines of the ``---`` delimited block, or an empty list if none declared
    """
    merged = doc.merged_front_matter()
    if not merged:
        return []

    body = yaml.safe_dump(
        {str(key): str(value) for key, value in merged.items()},
        sort_keys=False,
        allow_unicode=True,
        default_flow_style=False,
        width=float("inf"),
    )

    lines = [DELIMITER]
    lines.extend(body.rstrip("\n").split("\n"))
    lines.append(DELIMITER)
    lines.append("")
    return lines
