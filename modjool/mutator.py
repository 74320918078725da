"""
mutator.py

Responsibility: compute the next state of a build file's lines for one rule block.

Nothing here touches the filesystem. Every function takes the current lines and returns
a `MutationResult`; the input sequence is never modified in place.

Two strategies, tried in order:
1) List mutation: the block already has a `<field> = [...]` list, insert the missing
   entries right before its closing line.
2) Block synthesis: the block has no such field, splice a complete one in right before
   the block's closing line.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass

from modjool.scanner import BRACKETS, DelimiterRange, find_delimited_range

INDENT_STEP = "    "


@dataclass(frozen=True)
class Unchanged:
    """Every entry is already present."""


@dataclass(frozen=True)
class Mutated:
    lines: list[str]


@dataclass(frozen=True)
class Unlocatable:
    """The entries are missing but there is no safe place to put them."""

    reason: str


MutationResult = Unchanged | Mutated | Unlocatable


def leading_whitespace(line: str) -> str:
    return line[: len(line) - len(line.lstrip(" \t"))]


def _field_pattern(list_field: str) -> re.Pattern[str]:
    # Whole-word match so `deps` does not pick up `runtime_deps` or `private_deps`.
    return re.compile(rf"(?<![\w.]){re.escape(list_field)}\s*=")


def find_list_field(
    lines: Sequence[str],
    block: DelimiterRange,
    list_field: str,
) -> int | None:
    """Return the index of the first line inside `block` that assigns `list_field`."""
    pattern = _field_pattern(list_field)
    for index in range(block.start, block.end + 1):
        if pattern.search(lines[index]):
            return index
    return None


def _previous_content_line(lines: Sequence[str], before: int, stop: int) -> int | None:
    """Walk back from `before - 1` to `stop` skipping blank and comment-only lines."""
    index = before - 1
    while index >= stop:
        stripped = lines[index].strip()
        if stripped and not stripped.startswith("#"):
            return index
        index -= 1
    return None


def _code_before_comment(line: str) -> str:
    """Return `line` up to a `#` that is not inside a quoted string."""
    quote = None
    escaped = False
    for i, ch in enumerate(line):
        if quote:
            if escaped:
                escaped = False
            elif ch == "\\":
                escaped = True
            elif ch == quote:
                quote = None
        elif ch in ("'", '"'):
            quote = ch
        elif ch == "#":
            return line[:i]
    return line


def _ensure_trailing_comma(lines: list[str], index: int) -> None:
    line = lines[index]
    if line.rstrip().endswith(","):
        return
    code = _code_before_comment(line).rstrip()
    if not code or code.endswith((",", "(", "[")):
        return
    lines[index] = code + "," + line[len(code) :]


def format_entry_lines(entries: Sequence[str], indent: str) -> list[str]:
    return [f"{indent}{entry}," for entry in entries]


def missing_entries(text: str, entries: Sequence[str]) -> list[str]:
    """Entries not found verbatim in `text`, in their original order."""
    return [entry for entry in entries if entry not in text]


def insert_into_list(
    lines: Sequence[str],
    dep_list: DelimiterRange,
    entries: Sequence[str],
) -> MutationResult:
    """
    Insert the entries absent from `dep_list` immediately before its closing line.

    New lines are indented one step deeper than the closing line. Lines above the
    insertion point keep their index; the closing line and everything after it shift
    down by the number of inserted lines.
    """
    snippet = "\n".join(lines[dep_list.start : dep_list.end + 1])
    missing = missing_entries(snippet, entries)
    if not missing:
        return Unchanged()
    if dep_list.is_single_line:
        return Unlocatable("dependency list opens and closes on the same line")

    updated = list(lines)
    last_item = _previous_content_line(updated, dep_list.end, dep_list.start)
    if last_item is not None:
        _ensure_trailing_comma(updated, last_item)

    indent = leading_whitespace(updated[dep_list.end]) + INDENT_STEP
    updated[dep_list.end : dep_list.end] = format_entry_lines(missing, indent)
    return Mutated(updated)


def synthesize_list_field(
    lines: Sequence[str],
    block: DelimiterRange,
    list_field: str,
    entries: Sequence[str],
) -> MutationResult:
    """
    Splice a complete `<list_field> = [...]` field in before the block's closing line.

    The presence check runs over the whole block text, not just a field, so an entry
    mentioned anywhere in the block counts as present.
    """
    snippet = "\n".join(lines[block.start : block.end + 1])
    if not missing_entries(snippet, entries):
        return Unchanged()
    if block.is_single_line:
        return Unlocatable("rule block opens and closes on the same line")

    updated = list(lines)
    previous = _previous_content_line(updated, block.end, block.start)
    if previous is not None:
        _ensure_trailing_comma(updated, previous)

    base = leading_whitespace(updated[block.end])
    field_lines = [
        f"{base}{list_field} = [",
        *format_entry_lines(entries, base + INDENT_STEP),
        f"{base}],",
    ]
    updated[block.end : block.end] = field_lines
    return Mutated(updated)


def mutate_rule_block(
    lines: Sequence[str],
    block: DelimiterRange,
    list_field: str,
    entries: Sequence[str],
) -> MutationResult:
    """Ensure `entries` are listed in `block`'s `list_field`, adding the field if needed."""
    field_line = find_list_field(lines, block, list_field)
    if field_line is None:
        return synthesize_list_field(lines, block, list_field, entries)

    assignment = _field_pattern(list_field).search(lines[field_line])
    if assignment is None or "[" not in _code_before_comment(lines[field_line][assignment.end() :]):
        return Unlocatable(f"`{list_field}` on line {field_line + 1} is not a literal list")

    dep_list = find_delimited_range(lines, field_line, BRACKETS)
    if dep_list is None:
        return Unlocatable(f"unbalanced brackets after `{list_field} =` on line {field_line + 1}")
    if dep_list.start != field_line or not block.contains(dep_list):
        return Unlocatable(f"`{list_field}` on line {field_line + 1} is not a literal list")
    return insert_into_list(lines, dep_list, entries)
