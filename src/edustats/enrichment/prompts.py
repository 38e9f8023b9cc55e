"""Prompt templates sent to the language model."""

from __future__ import annotations

import json
import textwrap
from typing import List

from ..data_sources.base import LookupQuery

SYSTEM_PROMPT = (
    "You are an analyst of French higher-education outcomes. "
    "You answer with a single JSON object and nothing else."
)

_SHAPE = textwrap.dedent(
    """\
    Reply with JSON only, using exactly these keys:
    - "cost": total program cost in euros (number or null)
    - "averageSalary": average gross annual salary after graduation in euros (number or null)
    - "employabilityRate": share of graduates employed, in percent (number or null)
    - "source": short description of where the figures come from
    """
)


def build_fusion_prompt(
    query: LookupQuery,
    registry: List[dict],
    snippets: List[dict],
) -> str:
    """Ask the model to merge registry statistics and search extracts."""

    sections = [
        f'School: "{query.school}"\nProgram: "{query.program}"',
    ]
    if registry:
        sections.append(
            "National registry statistics (Master's graduates' insertion survey):\n"
            + json.dumps(registry, ensure_ascii=False, indent=2)
        )
    if snippets:
        sections.append(
            "Extracts found on trusted sources:\n"
            + json.dumps(snippets, ensure_ascii=False, indent=2)
        )
    sections.append(
        textwrap.dedent(
            """\
            Merge these data into one record for this school and program.
            Never invent a value: if a figure is not supported by the data above, use null.
            Registry statistics take precedence over extracts when they disagree.
            Name the registry and/or the domains you used in "source"."""
        )
    )
    sections.append(_SHAPE)
    return "\n\n".join(sections)


def build_estimate_prompt(query: LookupQuery) -> str:
    """Ask for a best-effort estimate when no source returned anything."""

    return "\n\n".join(
        [
            f'Give your best estimate of the following figures for the school "{query.school}" '
            f'and the program "{query.program}":\n'
            "- program cost (euros)\n"
            "- average salary after graduation (euros)\n"
            "- employability rate after graduation (%)",
            "No verified source was found for this program. "
            'The "source" value must start with "AI estimate" '
            "so readers know the figures are estimates.",
            _SHAPE,
        ]
    )


__all__ = ["SYSTEM_PROMPT", "build_fusion_prompt", "build_estimate_prompt"]
