from __future__ import annotations

from modjool.preview import changed_span, render_diff


def test_identical_sequences_have_no_diff() -> None:
    lines = ["a", "b", "c"]
    assert changed_span(lines, list(lines)) is None
    assert render_diff(lines, list(lines), name="BUILD.bazel") is None


def test_insertion_shows_only_added_lines_with_context() -> None:
    original = [f"line{i}" for i in range(10)]
    updated = original[:5] + ["new1", "new2"] + original[5:]

    rendered = render_diff(original, updated, name="BUILD.bazel")

    assert rendered is not None
    body = rendered.splitlines()
    assert body[0] == "--- BUILD.bazel (preview) ---"
    assert body[-1] == "--- end preview ---"
    assert body[2:10] == [
        "  line2",
        "  line3",
        "  line4",
        "+ new1",
        "+ new2",
        "  line5",
        "  line6",
        "  line7",
    ]
    assert not any(line.startswith("- ") for line in body)


def test_replacement_shows_removed_then_added() -> None:
    original = ["a", "b,", "c"]
    updated = ["a", "b", "x", "c"]

    assert changed_span(original, updated) == (1, 2, 3)
    rendered = render_diff(original, updated, name="f")
    assert rendered is not None
    assert "- b," in rendered.splitlines()
    assert rendered.splitlines().index("- b,") < rendered.splitlines().index("+ b")


def test_context_is_clamped_at_file_edges() -> None:
    original = ["only"]
    updated = ["only", "added"]
    rendered = render_diff(original, updated, name="f")
    assert rendered is not None
    assert rendered.splitlines()[2:4] == ["  only", "+ added"]


def test_repeated_lines_do_not_overlap_prefix_and_suffix() -> None:
    original = ["x", "x"]
    updated = ["x", "x", "x"]
    assert changed_span(original, updated) == (2, 2, 3)
