from __future__ import annotations

from pathlib import Path

import pytest

from modjool.renderer import RenderError, render_layout


def _context(name: str = "Payments", template: str = "service") -> dict[str, object]:
    return {
        "module_name": name,
        "public_module": f"{name}Public",
        "template": template,
        "imports": ["Foundation", "Combine"],
    }


def test_single_layout(tmp_path: Path) -> None:
    result = render_layout(layout="single", destination_dir=tmp_path, context=_context())

    assert result.written
    assert [p.relative_to(tmp_path).as_posix() for p in result.paths] == [
        "Payments/BUILD.bazel",
        "Payments/Sources/Payments.swift",
    ]
    build = (tmp_path / "Payments" / "BUILD.bazel").read_text(encoding="utf-8")
    assert 'name = "Payments",' in build
    source = (tmp_path / "Payments" / "Sources" / "Payments.swift").read_text(encoding="utf-8")
    assert source.startswith("import Foundation\nimport Combine\n")
    assert "public protocol PaymentsProviding" in source
    assert "public final class PaymentsImpl: PaymentsProviding" in source
    assert "import PaymentsPublic" not in source


def test_pair_layout(tmp_path: Path) -> None:
    result = render_layout(layout="pair", destination_dir=tmp_path, context=_context())

    assert [p.relative_to(tmp_path).as_posix() for p in result.paths] == [
        "Payments/BUILD.bazel",
        "Payments/Sources/PaymentsImpl.swift",
        "PaymentsPublic/BUILD.bazel",
        "PaymentsPublic/Sources/PaymentsProviding.swift",
    ]
    private_build = (tmp_path / "Payments" / "BUILD.bazel").read_text(encoding="utf-8")
    assert 'deps = ["//PaymentsPublic:PaymentsPublic"],' in private_build
    assert '"//:__pkg__"' in private_build
    public_build = (tmp_path / "PaymentsPublic" / "BUILD.bazel").read_text(encoding="utf-8")
    assert '"//visibility:public"' in public_build
    impl = (tmp_path / "Payments" / "Sources" / "PaymentsImpl.swift").read_text(encoding="utf-8")
    assert "import PaymentsPublic" in impl


@pytest.mark.parametrize("template", ["feature", "service", "utility", "viewmodel"])
def test_every_template_kind_renders(tmp_path: Path, template: str) -> None:
    result = render_layout(
        layout="pair",
        destination_dir=tmp_path,
        context=_context("Widget", template),
        dry_run=True,
    )
    for item in result.files:
        assert "{{" not in item.content
        assert "WidgetProviding" in item.content or item.path.name == "BUILD.bazel"


def test_dry_run_writes_nothing(tmp_path: Path) -> None:
    result = render_layout(layout="single", destination_dir=tmp_path, context=_context(), dry_run=True)
    assert not result.written
    assert len(result.files) == 2
    assert list(tmp_path.iterdir()) == []


def test_missing_layout(tmp_path: Path) -> None:
    with pytest.raises(RenderError, match="layout not found"):
        render_layout(layout="nope", destination_dir=tmp_path, context=_context())


def test_undefined_variable_is_an_error(tmp_path: Path) -> None:
    context = _context()
    del context["imports"]
    with pytest.raises(RenderError):
        render_layout(layout="single", destination_dir=tmp_path, context=context, dry_run=True)


def test_custom_templates_dir(tmp_path: Path) -> None:
    templates = tmp_path / "tpl"
    (templates / "layouts" / "single" / "__module_name__").mkdir(parents=True)
    (templates / "layouts" / "single" / "__module_name__" / "README.md").write_text(
        "# {{ module_name }}\n", encoding="utf-8"
    )
    out = tmp_path / "out"

    render_layout(layout="single", destination_dir=out, context=_context(), templates_dir=templates)

    assert (out / "Payments" / "README.md").read_text(encoding="utf-8") == "# Payments\n"
