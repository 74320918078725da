from __future__ import annotations

from modjool.scanner import (
    BRACKETS,
    PARENS,
    DelimiterRange,
    find_delimited_range,
    find_rule_blocks,
    find_topmost_rule,
)


def test_paren_range_spans_nested_calls() -> None:
    lines = [
        "swift_library(",
        '    name = "App",',
        '    srcs = glob(["a/*.swift"] + glob(["b/*.swift"])),',
        "    copts = select({",
        '        "//conditions:default": ("-O",),',
        "    }),",
        ")",
        "other()",
    ]
    assert find_delimited_range(lines, 0, PARENS) == DelimiterRange(0, 6)


def test_bracket_range_starts_at_first_opening_line() -> None:
    lines = [
        "deps =",
        "    [",
        '        "//A:A",',
        "        [nested],",
        "    ],",
    ]
    assert find_delimited_range(lines, 0, BRACKETS) == DelimiterRange(1, 4)


def test_bracket_scan_ignores_parentheses() -> None:
    lines = ["deps = [", '    "//A:A",  # )', "]"]
    assert find_delimited_range(lines, 0, BRACKETS) == DelimiterRange(0, 2)


def test_unbalanced_returns_none() -> None:
    lines = ["swift_library(", '    name = "App",', "    deps = ["]
    assert find_delimited_range(lines, 0, PARENS) is None


def test_closing_before_opening_is_ignored() -> None:
    lines = ["]", "deps = [", "]"]
    assert find_delimited_range(lines, 0, BRACKETS) == DelimiterRange(1, 2)


def test_topmost_rule_is_selected() -> None:
    lines = ["    \"filler\","] * 26
    lines[2] = "swift_library("
    lines[10] = ")"
    lines[15] = "swift_library("
    lines[25] = ")"
    assert find_rule_blocks(lines, "swift_library") == [DelimiterRange(2, 10), DelimiterRange(15, 25)]
    assert find_topmost_rule(lines, "swift_library") == DelimiterRange(2, 10)


def test_rule_prefix_requires_open_paren_and_line_start() -> None:
    lines = [
        '# swift_library(name = "commented")',
        "swift_library_wrapper(",
        ")",
        'load("@rules_swift//swift:swift.bzl", "swift_library")',
        "    swift_library(",
        "    )",
    ]
    assert find_rule_blocks(lines, "swift_library") == [DelimiterRange(4, 5)]


def test_no_rule_block() -> None:
    assert find_topmost_rule(["cc_library(", ")"], "swift_library") is None
