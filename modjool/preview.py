"""
preview.py

Responsibility: render a compact contextual diff between two versions of a file's lines.

The diff is a single hunk: the common prefix and common suffix are trimmed, and up to
CONTEXT_LINES unchanged lines are shown on each side of the changed span. This module is
read-only; callers decide where the rendered text goes.
"""

from __future__ import annotations

from collections.abc import Sequence

CONTEXT_LINES = 3


def changed_span(original: Sequence[str], updated: Sequence[str]) -> tuple[int, int, int] | None:
    """
    Return (first, original_stop, updated_stop) for the differing span, or None.

    `original[first:original_stop]` was replaced by `updated[first:updated_stop]`.
    """
    limit = min(len(original), len(updated))
    first = 0
    while first < limit and original[first] == updated[first]:
        first += 1
    if first == limit and len(original) == len(updated):
        return None

    # Common suffix, never overlapping the common prefix.
    suffix = 0
    while (
        suffix < limit - first
        and original[len(original) - 1 - suffix] == updated[len(updated) - 1 - suffix]
    ):
        suffix += 1
    return first, len(original) - suffix, len(updated) - suffix


def render_diff(
    original: Sequence[str],
    updated: Sequence[str],
    *,
    name: str,
    context: int = CONTEXT_LINES,
) -> str | None:
    """Render the preview text, or None when both sequences are identical."""
    span = changed_span(original, updated)
    if span is None:
        return None
    first, original_stop, updated_stop = span

    out: list[str] = [f"--- {name} (preview) ---", ""]
    for line in original[max(0, first - context) : first]:
        out.append(f"  {line}")
    for line in original[first:original_stop]:
        out.append(f"- {line}")
    for line in updated[first:updated_stop]:
        out.append(f"+ {line}")
    for line in original[original_stop : original_stop + context]:
        out.append(f"  {line}")
    out.extend(["", "--- end preview ---"])
    return "\n".join(out)
