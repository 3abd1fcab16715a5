# SPDX-License-Identifier: MIT

"""Human-readable renderings of a ``Sequence``."""

import json
from typing import Iterable, List

from ..schema.common import Sequence


def _section(title: str, lines: Iterable[str]) -> str:
    lines = list(lines)
    if not lines:
        return ""
    return f"**{title}:**\n" + "\n".join(lines) + "\n\n"


def render_markdown(sequence: Sequence) -> str:
    """Markdown summary used by find_by_id and the analysis prompt."""
    text = (
        f"# OEIS Sequence {sequence.id}\n\n"
        f"**Name:** {sequence.name}\n\n"
        f"**Data (first few terms):** {', '.join(str(t) for t in sequence.data)}\n\n"
        f"**Keywords:** {','.join(sorted(sequence.keywords))}\n\n"
    )
    if sequence.author:
        text += f"**Author:** {sequence.author}\n\n"
    text += _section("Comments", sequence.comments)
    text += _section("Formulas", sequence.formulas)
    text += _section("Examples", sequence.examples)
    text += _section("Cross-references", sequence.cross_references)
    return text.rstrip() + "\n"


def render_search_summary(terms: List[int], sequences: List[Sequence]) -> str:
    """One line per hit, or a short note when nothing matched."""
    query = ", ".join(str(t) for t in terms)
    if not sequences:
        return f"No sequences found containing {query}."
    lines = [f"Found {len(sequences)} sequence(s) containing {query}:"]
    lines.extend(f"- {s.id}: {s.name}" for s in sequences)
    return "\n".join(lines)


def render_json(sequence: Sequence) -> str:
    """Indented JSON body served by the sequence resource."""
    return json.dumps(sequence.to_json_dict(), indent=2)
