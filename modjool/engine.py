"""
engine.py

Responsibility: ensure a set of dependency labels is present in the topmost rule block of
one build file.

High-level flow (`ensure_entries`):
1) Read the file once and split it into lines
2) Locate the topmost `<rule_kind>(` block
3) Insert missing entries into its list field, or synthesize the field
4) Hand the result to the sink: persist, report "no changes", or suggest a patch

Scan failures never raise; they degrade to a patch suggestion so a build file that cannot
be parsed confidently is never modified.
"""

from __future__ import annotations

import enum
from collections.abc import Sequence
from pathlib import Path

from loguru import logger

from modjool.errors import ModjoolError
from modjool.mutator import MutationResult, Unchanged, Unlocatable, mutate_rule_block
from modjool.scanner import find_topmost_rule
from modjool.sinks import DEFAULT_MARKER, Sink, build_patch_snippet

DEFAULT_RULE_KIND = "swift_library"
DEFAULT_LIST_FIELD = "deps"


class BuildFileError(ModjoolError):
    pass


class UpdateOutcome(enum.Enum):
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    PATCH_SUGGESTED = "patch_suggested"


def format_label(package: str, name: str | None = None) -> str:
    """Quoted Bazel label, e.g. `"//UserProfile:UserProfile"`."""
    return f'"//{package}:{name or package}"'


def detect_newline(text: str) -> str:
    return "\r\n" if "\r\n" in text else "\n"


def ensure_entries(
    build_file: str | Path,
    entries: Sequence[str],
    *,
    sink: Sink,
    rule_kind: str = DEFAULT_RULE_KIND,
    list_field: str = DEFAULT_LIST_FIELD,
    marker: str = DEFAULT_MARKER,
) -> UpdateOutcome:
    """
    Make sure every entry appears in `list_field` of the topmost `rule_kind` block.

    Entries are quoted labels and are inserted in the given order.
    """
    path = Path(build_file)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise BuildFileError(f"Could not read build file {path}: {e}") from e

    newline = detect_newline(text)
    lines = text.split(newline)

    block = find_topmost_rule(lines, rule_kind)
    if block is None:
        logger.warning(f"No {rule_kind} found in {path.name}.")
        result: MutationResult = Unlocatable(f"no {rule_kind} block")
    else:
        logger.debug(f"Top {rule_kind} spans lines {block.start + 1}-{block.end + 1}")
        result = mutate_rule_block(lines, block, list_field, entries)

    if isinstance(result, Unchanged):
        sink.unchanged(path)
        return UpdateOutcome.UNCHANGED

    if isinstance(result, Unlocatable):
        logger.warning(f"Cannot update {path.name} safely: {result.reason}")
        patch = build_patch_snippet(
            file_name=path.name,
            rule_kind=rule_kind,
            list_field=list_field,
            entries=entries,
            marker=marker,
        )
        sink.suggest(path, patch)
        return UpdateOutcome.PATCH_SUGGESTED

    logger.info(f"Updating {path.name} (top {rule_kind} {list_field})")
    sink.persist(path, lines, result.lines, newline)
    return UpdateOutcome.UPDATED
