"""
cli.py

Responsibility: CLI entrypoint for bazel-modjool-gen.

Commands:
- `generate NAME`: validate workspace -> render module layout -> wire labels into the
  root build file -> print a summary
- `link LABEL...`: only the build file step, for labels of modules that already exist

This module should orchestrate behavior but keep concerns isolated:
- Settings: `config.py`
- Scaffolding: `generator.py`
- Build file mutation: `engine.py`
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path

from loguru import logger

from modjool import __version__
from modjool.config import ModjoolConfig, load_config
from modjool.engine import UpdateOutcome, ensure_entries, format_label
from modjool.errors import ModjoolError
from modjool.generator import GenerationReport, ModuleGenerator, ModuleTemplate
from modjool.logging_config import setup_logging
from modjool.sinks import ApplySink, PreviewSink, Sink


class CLIError(ModjoolError):
    pass


def _normalize_label(raw: str) -> str:
    """
    Accept `Foo`, `//Foo`, `//Foo:Foo` or an already quoted label and return the quoted form.

    External labels (`@repo//pkg:name`) are passed through as written.
    """
    label = raw.strip().strip('"').strip("'")
    if not label:
        raise CLIError("Empty label")
    if label.startswith("@"):
        if "//" not in label:
            raise CLIError(f"External label must contain '//': {raw}")
        return f'"{label}"'
    if label.startswith("//"):
        label = label[2:]
    package, _, name = label.partition(":")
    if not package:
        raise CLIError(f"Label must name a package: {raw}")
    return format_label(package, name or None)


def _load_settings(args: argparse.Namespace, **overrides: object) -> tuple[Path, ModjoolConfig]:
    workspace = Path(args.workspace).resolve()
    config = load_config(workspace).with_overrides(**overrides)
    return workspace, config


def _print_report(report: GenerationReport) -> None:
    if report.dry_run:
        print("\nDRY RUN COMPLETE - Here's what would be generated:")
    else:
        print(f"\nModule '{report.module_name}' generated successfully!")

    root = report.workspace_root
    print("Created:" if not report.dry_run else "Would create:")
    for path in report.files:
        print(f"   - {path.relative_to(root).as_posix()}")

    build_name = report.build_file.name
    if report.outcome is UpdateOutcome.UPDATED and not report.dry_run:
        print("Updated:")
        print(f"   - {build_name} (dependencies)")
        if report.backup_path is not None:
            print(f"   - backup: {report.backup_path.name}")
    elif report.outcome is UpdateOutcome.UNCHANGED:
        print(f"{build_name}: no changes needed")
    elif report.outcome is UpdateOutcome.PATCH_SUGGESTED:
        where = report.patch_path.name if report.patch_path else "printed above"
        print(f"{build_name}: could not be updated automatically, suggested patch: {where}")

    print("\nNext steps:")
    if report.generate_pair:
        print(f"   1. Implement your protocols in {report.module_name}Public/Sources/")
        print(f"   2. Implement your classes in {report.module_name}/Sources/")
    else:
        print(f"   1. Implement your module in {report.module_name}/Sources/")
    print("   Then run: bazel build //...")

    print(f"\nTemplate used: {report.template.description}")


def generate_cmd(args: argparse.Namespace) -> int:
    workspace, config = _load_settings(
        args,
        template=args.template,
        generate_pair=True if args.generate_pair else None,
    )
    generator = ModuleGenerator(
        module_name=args.module_name,
        workspace_root=workspace,
        config=config,
        dry_run=bool(args.dry_run),
        templates_dir=args.templates_dir,
    )
    report = generator.generate()
    _print_report(report)
    return 0


def link_cmd(args: argparse.Namespace) -> int:
    workspace, config = _load_settings(
        args,
        build_file=args.build_file,
        rule_kind=args.rule_kind,
        list_field=args.list_field,
    )
    labels = [_normalize_label(raw) for raw in args.labels]
    build_file = workspace / config.build_file

    sink: Sink = PreviewSink() if args.dry_run else ApplySink(marker=config.marker)
    outcome = ensure_entries(
        build_file,
        labels,
        sink=sink,
        rule_kind=config.rule_kind,
        list_field=config.list_field,
        marker=config.marker,
    )
    messages = {
        UpdateOutcome.UPDATED: f"{build_file.name} updated." if not args.dry_run else "",
        UpdateOutcome.UNCHANGED: f"No changes needed; labels already present in {build_file.name}.",
        UpdateOutcome.PATCH_SUGGESTED: f"{build_file.name} left untouched; see the suggested patch.",
    }
    if messages[outcome]:
        print(messages[outcome])
    return 0


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("-d", "--dry-run", action="store_true", help="Show what would change without writing files")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable verbose output")
    p.add_argument("--workspace", default=".", help="Path to Bazel workspace root (default: .)")


def _build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="bazel-modjool-gen",
        description="Generate Bazel Swift modules and wire them into the root BUILD.bazel",
    )
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = p.add_subparsers(dest="command", required=True)

    g = sub.add_parser(
        "generate",
        help="Scaffold a module (or a private/public pair) and add it to the root deps",
        description="\n".join(f"{t.value}: {t.description}" for t in ModuleTemplate),
    )
    g.add_argument("module_name", help="Name of the module to generate (e.g., UserProfile, PaymentService)")
    g.add_argument(
        "-g",
        "--generate-pair",
        action="store_true",
        help="Generate both a private and a public module (default is a single module)",
    )
    g.add_argument(
        "-t",
        "--template",
        default=None,
        choices=[t.value for t in ModuleTemplate],
        help="Template type to use (default: from .modjool.yaml, else feature)",
    )
    g.add_argument("--templates-dir", default=None, help="Use templates from this directory instead of the bundled ones")
    _add_common(g)
    g.set_defaults(func=generate_cmd)

    ln = sub.add_parser("link", help="Add dependency labels to the top rule of the root build file")
    ln.add_argument("labels", nargs="+", help="Labels to add, e.g. //UserProfile:UserProfile or UserProfile")
    ln.add_argument("--build-file", default=None, help="Build file relative to the workspace (default: BUILD.bazel)")
    ln.add_argument("--rule-kind", default=None, help="Rule whose list receives the labels (default: swift_library)")
    ln.add_argument("--list-field", default=None, help="List field to extend (default: deps)")
    _add_common(ln)
    ln.set_defaults(func=link_cmd)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    setup_logging(verbose=bool(args.verbose), dry_run=bool(args.dry_run))
    try:
        return int(args.func(args))
    except ModjoolError as e:
        logger.debug(f"{type(e).__name__} raised by {args.command}")
        print(f"ERROR: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
