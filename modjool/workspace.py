"""
workspace.py

Responsibility: check that a directory is a Bazel workspace we can scaffold into.

A valid workspace has MODULE.bazel (Bzlmod) or WORKSPACE / WORKSPACE.bazel (legacy), plus
the root build file. Existing module directories are never overwritten.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from modjool.errors import ModjoolError

IOS_MARKERS = ("ios_application", "swift_library", "rules_apple", "rules_swift")


class WorkspaceError(ModjoolError):
    pass


@dataclass(frozen=True)
class WorkspaceInfo:
    root: Path
    build_file: Path
    uses_bzlmod: bool


def module_dirs(root: Path, module_name: str, *, generate_pair: bool) -> list[Path]:
    dirs = [root / module_name]
    if generate_pair:
        dirs.append(root / f"{module_name}Public")
    return dirs


def validate_workspace(
    root: str | Path,
    *,
    build_file: str = "BUILD.bazel",
    module_name: str,
    generate_pair: bool,
) -> WorkspaceInfo:
    """Raise WorkspaceError unless `root` is a Bazel workspace without `module_name` in it."""
    root_path = Path(root).resolve()
    build_path = root_path / build_file

    has_module_bazel = (root_path / "MODULE.bazel").exists()
    has_workspace = (root_path / "WORKSPACE").exists() or (root_path / "WORKSPACE.bazel").exists()
    has_build_file = build_path.exists()

    if not (has_module_bazel or has_workspace) or not has_build_file:
        missing: list[str] = []
        if not has_module_bazel and not has_workspace:
            missing.append("  - MODULE.bazel (Bzlmod, recommended) OR WORKSPACE/WORKSPACE.bazel (legacy)")
        if not has_build_file:
            missing.append(f"  - {build_file} (root build file)")
        raise WorkspaceError(
            f"Not a valid Bazel workspace: {root_path}\n"
            "Run this tool from the root of a Bazel workspace.\n"
            "Missing required files:\n" + "\n".join(missing)
        )

    content = build_path.read_text(encoding="utf-8")
    if not any(marker in content for marker in IOS_MARKERS):
        logger.warning(
            f"{build_file} doesn't appear to be an iOS Bazel project (no rules_apple/rules_swift usage). "
            "Continuing anyway, but you may need to adjust the generated files."
        )

    for path in module_dirs(root_path, module_name, generate_pair=generate_pair):
        if path.exists():
            raise WorkspaceError(f"Module '{path.name}' already exists at {path}")

    if has_module_bazel:
        logger.info("Valid Bazel workspace detected (Bzlmod, MODULE.bazel)")
    else:
        logger.info("Valid Bazel workspace detected (legacy WORKSPACE, consider migrating to Bzlmod)")

    return WorkspaceInfo(root=root_path, build_file=build_path, uses_bzlmod=has_module_bazel)
