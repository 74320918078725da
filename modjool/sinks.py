"""
sinks.py

Responsibility: every side effect of a build file update.

A sink is chosen once per invocation:
- `ApplySink` backs the file up, then writes the new content; when nothing could be
  located it writes a `.patch` file next to the target instead.
- `PreviewSink` only prints: a contextual diff, "no changes", or the suggested patch.

The engine computes the full next state in memory and hands it to the sink exactly once,
so the target file is either untouched or replaced in a single write.
"""

from __future__ import annotations

import shutil
import sys
from collections.abc import Callable, Sequence
from datetime import datetime, timezone
from pathlib import Path
from typing import Protocol, TextIO

from loguru import logger

from modjool.errors import ModjoolError
from modjool.preview import render_diff

DEFAULT_MARKER = "modjool"


class BackupError(ModjoolError):
    pass


class WriteError(ModjoolError):
    pass


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def backup_stamp(moment: datetime) -> str:
    """ISO-8601 UTC timestamp with colons replaced, safe for file names on every platform."""
    return moment.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ").replace(":", "-")


def backup_path_for(path: Path, marker: str, moment: datetime) -> Path:
    return path.with_name(f"{path.name}.{marker}.bak.{backup_stamp(moment)}")


def patch_path_for(path: Path, marker: str) -> Path:
    return path.with_name(f"{path.name}.{marker}.patch")


def write_backup(path: Path, *, marker: str = DEFAULT_MARKER, moment: datetime | None = None) -> Path:
    """
    Copy `path` to its timestamped backup location and return that location.

    A backup already sitting at the same stamp is replaced. Any failure raises BackupError.
    """
    target = backup_path_for(path, marker, moment or _utc_now())
    try:
        if target.exists():
            target.unlink()
        shutil.copy2(path, target)
    except OSError as e:
        raise BackupError(f"Could not back up {path} to {target}: {e}") from e
    logger.info(f"Backup of {path.name} written to: {target}")
    return target


def build_patch_snippet(
    *,
    file_name: str,
    rule_kind: str,
    list_field: str,
    entries: Sequence[str],
    marker: str = DEFAULT_MARKER,
) -> str:
    """Literal text telling the user which list entries to add by hand."""
    lines = [
        f"# {marker} suggested snippet - add these to the {rule_kind} {list_field} in {file_name}:",
        f"{list_field} = [",
        *(f"    {entry}," for entry in entries),
        "]",
    ]
    return "\n".join(lines) + "\n"


class Sink(Protocol):
    def persist(self, path: Path, original: Sequence[str], updated: Sequence[str], newline: str) -> None:
        ...

    def unchanged(self, path: Path) -> None:
        ...

    def suggest(self, path: Path, patch: str) -> None:
        ...


class ApplySink:
    """Writes to disk: backup first, then the new content (or a patch file)."""

    def __init__(
        self,
        *,
        marker: str = DEFAULT_MARKER,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        self.marker = marker
        self._clock = clock
        self.backup_path: Path | None = None
        self.patch_path: Path | None = None

    def persist(self, path: Path, original: Sequence[str], updated: Sequence[str], newline: str) -> None:
        self.backup_path = write_backup(path, marker=self.marker, moment=self._clock())
        try:
            path.write_text(newline.join(updated), encoding="utf-8", newline="")
        except OSError as e:
            raise WriteError(
                f"Failed writing {path}: {e}. The original content is preserved at {self.backup_path}"
            ) from e
        logger.info(f"{path.name} updated.")

    def unchanged(self, path: Path) -> None:
        logger.info(f"No changes needed; entries already present in {path.name}.")

    def suggest(self, path: Path, patch: str) -> None:
        target = patch_path_for(path, self.marker)
        try:
            target.write_text(patch, encoding="utf-8", newline="\n")
        except OSError as e:
            raise WriteError(f"Failed writing patch {target}: {e}") from e
        self.patch_path = target
        logger.warning(f"Could not modify {path.name} automatically. Patch written to: {target}")


class PreviewSink:
    """Prints what would happen; never touches the filesystem."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    def _print(self, text: str) -> None:
        print(text, file=self._stream or sys.stdout)

    def persist(self, path: Path, original: Sequence[str], updated: Sequence[str], newline: str) -> None:
        rendered = render_diff(original, updated, name=path.name)
        if rendered is None:
            self.unchanged(path)
            return
        self._print(rendered)

    def unchanged(self, path: Path) -> None:
        self._print(f"No changes to {path.name} (dry run).")

    def suggest(self, path: Path, patch: str) -> None:
        self._print(f"--- Suggested {path.name} patch ---\n")
        self._print(patch.rstrip("\n"))
