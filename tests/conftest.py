"""
Pytest configuration for the modjool test suite.

Console logging is suppressed so test output only shows what the code prints to stdout.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from modjool.logging_config import setup_logging

ROOT_BUILD = """\
load("@rules_swift//swift:swift.bzl", "swift_library")

swift_library(
    name = "App",
    srcs = glob(["Sources/*.swift"]),
    deps = [
        "//Core:Core",
    ],
)
"""


@pytest.fixture(autouse=True)
def quiet_logging(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("MODJOOL_QUIET", "1")
    setup_logging(suppress_console=True)


@pytest.fixture
def workspace(tmp_path: Path) -> Path:
    """A minimal Bzlmod workspace with one swift_library in the root BUILD.bazel."""
    (tmp_path / "MODULE.bazel").write_text('module(name = "app")\n', encoding="utf-8")
    (tmp_path / "BUILD.bazel").write_text(ROOT_BUILD, encoding="utf-8")
    return tmp_path
