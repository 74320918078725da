"""
renderer.py

Responsibility: deterministically render a module layout from the templates directory.

Rules:
- A layout is a directory under `<templates_dir>/layouts/`; every file in it is rendered
  with Jinja2 and written to the same relative path under the destination.
- Path segments may contain `__<key>__` placeholders, replaced by string context values
  (e.g. `__module_name__/Sources/__module_name__.swift`).
- Layout files may `{% include %}` shared fragments from anywhere in the templates dir.
- Files are walked in sorted order so output and reporting are stable.
- With `dry_run=True` everything is rendered in memory and nothing is written.

This module intentionally does NOT know about Bazel, build files, or CLI parsing.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from modjool.errors import ModjoolError

PACKAGE_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"


class RenderError(ModjoolError):
    pass


@dataclass(frozen=True)
class RenderedFile:
    path: Path
    content: str


@dataclass(frozen=True)
class RenderResult:
    files: tuple[RenderedFile, ...]
    written: bool

    @property
    def paths(self) -> list[Path]:
        return [f.path for f in self.files]


def _iter_layout_files(layout_dir: Path) -> list[Path]:
    """
    Return all files under layout_dir, in deterministic lexicographic order
    (relative path ordering).
    """
    files: list[Path] = []
    for root, _dirs, filenames in os.walk(layout_dir):
        root_path = Path(root)
        for name in filenames:
            files.append(root_path / name)
    files.sort(key=lambda p: p.relative_to(layout_dir).as_posix())
    return files


def _render_path(rel: Path, context: dict[str, Any]) -> Path:
    text = rel.as_posix()
    for key, value in context.items():
        if isinstance(value, str):
            text = text.replace(f"__{key}__", value)
    return Path(text)


def make_environment(templates_dir: Path) -> Environment:
    return Environment(
        loader=FileSystemLoader(str(templates_dir)),
        autoescape=False,
        undefined=StrictUndefined,
        keep_trailing_newline=True,
    )


def render_layout(
    *,
    layout: str,
    destination_dir: str | Path,
    context: dict[str, Any],
    templates_dir: str | Path | None = None,
    dry_run: bool = False,
) -> RenderResult:
    """
    Render `<templates_dir>/layouts/<layout>` into destination_dir.

    - Creates destination directories as needed (unless dry_run).
    - Returned paths are absolute destination paths.
    """
    tpl_dir = Path(templates_dir).resolve() if templates_dir else PACKAGE_TEMPLATES_DIR
    layout_dir = tpl_dir / "layouts" / layout
    dst_dir = Path(destination_dir).resolve()

    if not layout_dir.is_dir():
        raise RenderError(f"Template layout not found: {layout_dir}")

    env = make_environment(tpl_dir)
    rendered: list[RenderedFile] = []

    for src_path in _iter_layout_files(layout_dir):
        name = src_path.relative_to(tpl_dir).as_posix()
        rel = src_path.relative_to(layout_dir)
        try:
            content = env.get_template(name).render(**context)
        except TemplateError as e:
            raise RenderError(f"Failed rendering template file: {name}") from e
        rendered.append(RenderedFile(path=dst_dir / _render_path(rel, context), content=content))

    if not dry_run:
        for item in rendered:
            item.path.parent.mkdir(parents=True, exist_ok=True)
            # Normalize newlines for stable cross-platform output.
            item.path.write_text(item.content, encoding="utf-8", newline="\n")

    return RenderResult(files=tuple(rendered), written=not dry_run)
