"""
generator.py

Responsibility: scaffold one module (or a private/public pair) into a Bazel workspace.

High-level flow (`ModuleGenerator.generate`):
1) Validate the workspace (`workspace.py`)
2) Render the module layout (`renderer.py`)
3) Wire the new labels into the root build file (`engine.py`)
4) Return a report for the CLI to print

With `dry_run` nothing is written: files are rendered in memory and the build file
change is shown as a diff.
"""

from __future__ import annotations

import enum
import re
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from modjool.config import ModjoolConfig
from modjool.engine import UpdateOutcome, ensure_entries, format_label
from modjool.errors import ModjoolError
from modjool.renderer import render_layout
from modjool.sinks import ApplySink, PreviewSink, Sink
from modjool.workspace import validate_workspace

_MODULE_NAME_RE = re.compile(r"[A-Za-z0-9]+")


class ValidationError(ModjoolError):
    pass


class ModuleTemplate(enum.Enum):
    FEATURE = "feature"
    SERVICE = "service"
    UTILITY = "utility"
    VIEWMODEL = "viewmodel"

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def imports(self) -> list[str]:
        return list(_IMPORTS[self])


_DESCRIPTIONS = {
    ModuleTemplate.FEATURE: "Feature module with ViewControllers and UI components",
    ModuleTemplate.SERVICE: "Service module for business logic and data access",
    ModuleTemplate.UTILITY: "Utility module with helper functions and extensions",
    ModuleTemplate.VIEWMODEL: "ViewModel module for MVVM architecture",
}

_IMPORTS = {
    ModuleTemplate.FEATURE: ("Foundation", "UIKit"),
    ModuleTemplate.SERVICE: ("Foundation", "Combine"),
    ModuleTemplate.UTILITY: ("Foundation",),
    ModuleTemplate.VIEWMODEL: ("Foundation", "Combine"),
}


def validate_module_name(name: str, reserved_names: tuple[str, ...] = ()) -> None:
    if not name:
        raise ValidationError("Module name cannot be empty")
    if not name[0].isupper():
        raise ValidationError("Module name must start with an uppercase letter (e.g., UserProfile)")
    if not _MODULE_NAME_RE.fullmatch(name):
        raise ValidationError("Module name must contain only letters and numbers")
    if name in reserved_names:
        raise ValidationError(f"'{name}' is a reserved system framework name")


@dataclass(frozen=True)
class GenerationReport:
    module_name: str
    template: ModuleTemplate
    files: list[Path]
    workspace_root: Path
    build_file: Path
    outcome: UpdateOutcome
    dry_run: bool
    generate_pair: bool = False
    backup_path: Path | None = None
    patch_path: Path | None = None


class ModuleGenerator:
    def __init__(
        self,
        *,
        module_name: str,
        workspace_root: str | Path,
        config: ModjoolConfig,
        dry_run: bool = False,
        templates_dir: str | Path | None = None,
    ) -> None:
        self.module_name = module_name
        self.workspace_root = Path(workspace_root)
        self.config = config
        self.dry_run = dry_run
        self.templates_dir = templates_dir
        try:
            self.template = ModuleTemplate(config.template)
        except ValueError as e:
            choices = ", ".join(t.value for t in ModuleTemplate)
            raise ValidationError(f"Unknown template '{config.template}' (choose from: {choices})") from e

    @property
    def public_module(self) -> str:
        return f"{self.module_name}Public"

    def labels(self) -> list[str]:
        labels = [format_label(self.module_name)]
        if self.config.generate_pair:
            labels.append(format_label(self.public_module))
        return labels

    def _context(self) -> dict[str, object]:
        return {
            "module_name": self.module_name,
            "public_module": self.public_module,
            "template": self.template.value,
            "imports": self.template.imports,
        }

    def generate(self) -> GenerationReport:
        validate_module_name(self.module_name, self.config.reserved_names)

        logger.info("Validating Bazel workspace...")
        info = validate_workspace(
            self.workspace_root,
            build_file=self.config.build_file,
            module_name=self.module_name,
            generate_pair=self.config.generate_pair,
        )

        if self.dry_run:
            logger.info("DRY RUN MODE - No files will be created")

        layout = "pair" if self.config.generate_pair else "single"
        logger.info(f"Generating {self.template.value} module ({layout}) for '{self.module_name}'...")
        rendered = render_layout(
            layout=layout,
            destination_dir=info.root,
            context=self._context(),
            templates_dir=self.templates_dir,
            dry_run=self.dry_run,
        )
        for path in rendered.paths:
            logger.info(f"Generating {path.relative_to(info.root).as_posix()}")

        apply_sink = None if self.dry_run else ApplySink(marker=self.config.marker)
        sink: Sink = apply_sink if apply_sink is not None else PreviewSink()

        outcome = ensure_entries(
            info.build_file,
            self.labels(),
            sink=sink,
            rule_kind=self.config.rule_kind,
            list_field=self.config.list_field,
            marker=self.config.marker,
        )

        return GenerationReport(
            module_name=self.module_name,
            template=self.template,
            files=rendered.paths,
            workspace_root=info.root,
            build_file=info.build_file,
            outcome=outcome,
            dry_run=self.dry_run,
            generate_pair=self.config.generate_pair,
            backup_path=apply_sink.backup_path if apply_sink else None,
            patch_path=apply_sink.patch_path if apply_sink else None,
        )
