"""
config.py

Responsibility: load the optional `.modjool.yaml` from a workspace root into a typed model.

Precedence is defaults < config file < CLI flags; the CLI applies its own overrides with
`ModjoolConfig.with_overrides`. Unknown keys are ignored so the file can carry notes for
other tools.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import yaml

from modjool.engine import DEFAULT_LIST_FIELD, DEFAULT_RULE_KIND
from modjool.errors import ModjoolError
from modjool.sinks import DEFAULT_MARKER

CONFIG_FILE_NAME = ".modjool.yaml"

DEFAULT_RESERVED_NAMES: tuple[str, ...] = ("Foundation", "UIKit", "SwiftUI", "Combine", "CoreData")


class ConfigError(ModjoolError):
    pass


@dataclass(frozen=True)
class ModjoolConfig:
    """Settings shared by the `generate` and `link` commands."""

    build_file: str = "BUILD.bazel"
    rule_kind: str = DEFAULT_RULE_KIND
    list_field: str = DEFAULT_LIST_FIELD
    marker: str = DEFAULT_MARKER
    template: str = "feature"
    generate_pair: bool = False
    reserved_names: tuple[str, ...] = field(default=DEFAULT_RESERVED_NAMES)

    def with_overrides(self, **overrides: Any) -> ModjoolConfig:
        """Return a copy with every non-None override applied."""
        return replace(self, **{k: v for k, v in overrides.items() if v is not None})


def _require_str(data: dict[str, Any], key: str, default: str) -> str:
    value = data.get(key)
    if value is None:
        return default
    if not isinstance(value, str) or not value.strip():
        raise ConfigError(f"`{key}` must be a non-empty string.")
    return value.strip()


def parse_config(data: dict[str, Any]) -> ModjoolConfig:
    defaults = ModjoolConfig()

    generate_pair = data.get("generate_pair", defaults.generate_pair)
    if not isinstance(generate_pair, bool):
        raise ConfigError("`generate_pair` must be true or false.")

    reserved_raw = data.get("reserved_names")
    if reserved_raw is None:
        reserved = defaults.reserved_names
    elif isinstance(reserved_raw, list) and all(isinstance(n, str) for n in reserved_raw):
        reserved = tuple(reserved_raw)
    else:
        raise ConfigError("`reserved_names` must be a list of strings.")

    return ModjoolConfig(
        build_file=_require_str(data, "build_file", defaults.build_file),
        rule_kind=_require_str(data, "rule_kind", defaults.rule_kind),
        list_field=_require_str(data, "list_field", defaults.list_field),
        marker=_require_str(data, "marker", defaults.marker),
        template=_require_str(data, "template", defaults.template),
        generate_pair=generate_pair,
        reserved_names=reserved,
    )


def load_config(workspace_root: str | Path) -> ModjoolConfig:
    """
    Load `<workspace_root>/.modjool.yaml`, or return defaults when the file is absent.

    Recognized keys:
    - build_file: str (root build file, relative to the workspace)
    - rule_kind: str (rule whose dependency list receives new modules)
    - list_field: str
    - marker: str (embedded in backup and patch file names)
    - template: str (default module template)
    - generate_pair: bool
    - reserved_names: list[str]
    """
    path = Path(workspace_root) / CONFIG_FILE_NAME
    if not path.exists():
        return ModjoolConfig()

    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{path} must contain a mapping/object at the top level.")
    return parse_config(data)
