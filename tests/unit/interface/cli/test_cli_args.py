from __future__ import annotations

"""
Unit tests for CLI Argument Parsing.
"""

import pytest

from compactlog.interface.cli.args import args_to_overrides, build_parser


def parse_args(arg_list):
    """Helper to simulate CLI argument parsing."""
    return build_parser().parse_args(arg_list)


def test_generate_overrides_mapping() -> None:
    args = parse_args([
        "generate",
        "-i", "src",
        "-o", "out/viewer.json",
        "--groups", "groups.json",
        "--ext", ".py,.pyi",
        "--exclude", "tests, build",
        "--protolog-class", "Log",
    ])

    overrides = args_to_overrides(args)

    assert overrides["source_root"] == "src"
    assert overrides["output_path"] == "out/viewer.json"
    assert overrides["groups_file"] == "groups.json"
    assert overrides["extensions"] == [".py", ".pyi"]
    assert overrides["exclude_patterns"] == ["tests", "build"]
    assert overrides["protolog_class"] == "Log"
    assert overrides["group_class"] is None
    assert "include_patterns" not in overrides


def test_global_flags_and_decode_arguments() -> None:
    args = parse_args(["--debug", "decode", "viewer.json", "-42", "7", "abc"])

    assert args.debug is True
    assert args.command == "decode"
    assert args.identifier == -42
    assert args.args == ["7", "abc"]


def test_show_level_choices() -> None:
    assert parse_args(["show", "viewer.json", "--min-level", "WARN"]).min_level == "WARN"

    with pytest.raises(SystemExit):
        parse_args(["show", "viewer.json", "--min-level", "LOUD"])


def test_command_is_required() -> None:
    with pytest.raises(SystemExit):
        parse_args([])
