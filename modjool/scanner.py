"""
scanner.py

Responsibility: locate balanced delimiter regions and rule blocks in a build file.

Rules:
- Scans count depth for one delimiter kind at a time (parentheses OR brackets).
- Characters inside quotes and comments are NOT skipped. Build files are expected to be
  regularly formatted, and a stray delimiter in a label or comment can desynchronize
  the depth counter.
- A scan that reaches end-of-file with nonzero depth returns None; callers treat this as
  "could not locate" and fall back to a patch suggestion.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

PARENS: tuple[str, str] = ("(", ")")
BRACKETS: tuple[str, str] = ("[", "]")


@dataclass(frozen=True)
class DelimiterRange:
    """Inclusive, 0-based line range of one balanced delimiter region."""

    start: int
    end: int

    def contains(self, other: DelimiterRange) -> bool:
        return self.start <= other.start and other.end <= self.end

    @property
    def is_single_line(self) -> bool:
        return self.start == self.end


def find_delimited_range(
    lines: Sequence[str],
    start_index: int,
    delimiters: tuple[str, str] = PARENS,
) -> DelimiterRange | None:
    """
    Return the range opened by the first `delimiters[0]` at or after `start_index`.

    The range starts on the line of that first opening character and ends on the line
    where depth returns to zero.
    """
    open_char, close_char = delimiters
    depth = 0
    first_line: int | None = None
    for index in range(start_index, len(lines)):
        for char in lines[index]:
            if char == open_char:
                if first_line is None:
                    first_line = index
                depth += 1
            elif char == close_char and first_line is not None:
                depth -= 1
                if depth == 0:
                    return DelimiterRange(first_line, index)
    return None


def find_rule_blocks(lines: Sequence[str], rule_kind: str) -> list[DelimiterRange]:
    """Return every balanced `<rule_kind>(...)` block, in file order."""
    prefix = f"{rule_kind}("
    blocks: list[DelimiterRange] = []
    for index, line in enumerate(lines):
        if not line.lstrip().startswith(prefix):
            continue
        block = find_delimited_range(lines, index, PARENS)
        if block is not None:
            blocks.append(block)
    return blocks


def find_topmost_rule(lines: Sequence[str], rule_kind: str) -> DelimiterRange | None:
    """
    Return the rule block with the smallest start line.

    The primary compilable unit is declared first by convention, so the first block in
    file order is always the one that gets new dependencies.
    """
    blocks = find_rule_blocks(lines, rule_kind)
    if not blocks:
        return None
    return min(blocks, key=lambda block: block.start)
