from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema of the compactlog tool and translates raw
argparse namespaces into configuration overrides.
"""

import argparse
from typing import Any, Dict, List, Optional

from compactlog.domain.log_level import LogLevel

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the compactlog CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog="compactlog",
        description="Build and read viewer configs for compacted log calls.",
    )
    p.add_argument(
        "--debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "--log-file",
        dest="log_file",
        default=None,
        help="Also write diagnostics to this rotating log file.",
    )

    sub = p.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    # --- generate ---
    gen = sub.add_parser("generate", help="Scan sources and write the viewer config.")
    gen.add_argument(
        "-c", "--config",
        dest="config_path",
        default=None,
        help="Project configuration file (default: ./compactlog.json).",
    )
    gen.add_argument(
        "-i", "--input",
        dest="source_root",
        default=None,
        help="Root directory of the sources to scan.",
    )
    gen.add_argument(
        "-o", "--output",
        dest="output_path",
        default=None,
        help="Destination of the viewer config.",
    )
    gen.add_argument(
        "--groups",
        dest="groups_file",
        default=None,
        help="JSON file declaring the log groups.",
    )
    gen.add_argument("--ext", dest="extensions", default=None, help="Comma-separated extensions to scan.")
    gen.add_argument("--include", dest="include_patterns", default=None, help="Comma-separated inclusion regexes.")
    gen.add_argument("--exclude", dest="exclude_patterns", default=None, help="Comma-separated exclusion regexes.")
    gen.add_argument(
        "--protolog-class",
        dest="protolog_class",
        default=None,
        help="Name of the logging facade whose calls are compacted.",
    )
    gen.add_argument(
        "--group-class",
        dest="group_class",
        default=None,
        help="Name of the class holding the log group constants.",
    )
    gen.add_argument("--use-defaults", action="store_true", help="Ignore the project configuration file.")
    gen.add_argument("--overwrite", action="store_true", help="Replace an existing viewer config.")
    gen.add_argument("--dry-run", action="store_true", help="Scan without writing the viewer config.")
    gen.add_argument("--dump-config", action="store_true", help="Print the effective configuration and exit.")
    gen.add_argument("--json", dest="json_output", action="store_true", help="Print the result as JSON.")

    # --- decode ---
    dec = sub.add_parser("decode", help="Rebuild a log line from its identifier and arguments.")
    dec.add_argument("table", help="Viewer config file.")
    dec.add_argument("identifier", type=int, help="Logged message identifier.")
    dec.add_argument("args", nargs="*", help="Logged arguments, in placeholder order.")

    # --- show ---
    show = sub.add_parser("show", help="List the entries of a viewer config.")
    show.add_argument("table", help="Viewer config file.")
    show.add_argument("--tag", default=None, help="Only entries with this tag.")
    show.add_argument(
        "--min-level",
        dest="min_level",
        choices=LogLevel.names(),
        default=None,
        help="Only entries at or above this level.",
    )
    show.add_argument("--json", dest="json_output", action="store_true", help="Print entries as JSON.")

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate a 'generate' namespace into configuration overrides.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Overrides; None values mean "not given".
    """
    overrides: Dict[str, Any] = {
        "source_root": args.source_root,
        "output_path": args.output_path,
        "groups_file": args.groups_file,
        "protolog_class": args.protolog_class,
        "group_class": args.group_class,
    }

    if args.extensions:
        overrides["extensions"] = _split_csv(args.extensions)
    if args.include_patterns:
        overrides["include_patterns"] = _split_csv(args.include_patterns)
    if args.exclude_patterns:
        overrides["exclude_patterns"] = _split_csv(args.exclude_patterns)

    return overrides

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _split_csv(value: Optional[str]) -> Optional[List[str]]:
    """Convert a comma-separated string into a list of stripped items."""
    if value is None:
        return None
    parts = [x.strip() for x in value.split(",")]
    return [x for x in parts if x]
