from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration resolution
(defaults, project file, CLI overrides), command dispatch and result
rendering.
"""

import json
import logging
import os
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from compactlog.core.decoder import ViewerConfigDecoder
from compactlog.core.parser import ViewerConfigParser
from compactlog.core.pipeline.engine import run_generate
from compactlog.core.pipeline.validator import validate_config
from compactlog.domain.config import get_default_config, load_config
from compactlog.domain.errors import CompactLogError
from compactlog.domain.log_level import LogLevel
from compactlog.domain.models import ConfigEntry
from compactlog.domain.pipeline_models import GenerationResult
from compactlog.infra.logging import LoggingConfig, configure_logging, get_logger
from compactlog.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the CLI workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    log_level = logging.DEBUG if args.debug else logging.INFO
    configure_logging(LoggingConfig(level=log_level, console=True, log_file=args.log_file))

    if args.command == "generate":
        return _cmd_generate(args)
    if args.command == "decode":
        return _cmd_decode(args)
    return _cmd_show(args)

# -----------------------------------------------------------------------------
# COMMANDS
# -----------------------------------------------------------------------------

def _cmd_generate(args: Any) -> int:
    base_conf = get_default_config() if args.use_defaults else load_config(args.config_path)
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))

    clean_conf, warnings = validate_config(raw_conf, strict=False)
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return 0

    source_root = clean_conf["source_root"]
    if not os.path.isdir(source_root):
        msg = f"Source root does not exist: {source_root}"
        logger.error(msg)
        print(f"ERROR: {msg}", file=sys.stderr)
        return 2

    logger.info(f"Scanning sources under {source_root}")
    try:
        result = run_generate(clean_conf, overwrite=bool(args.overwrite), dry_run=bool(args.dry_run))
    except KeyboardInterrupt:
        logger.warning("Generation interrupted by user.")
        return 130

    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_generation_summary(result)

    return 0 if result.ok else 1


def _cmd_decode(args: Any) -> int:
    try:
        table = _read_table(args.table)
        line = ViewerConfigDecoder(table).decode(args.identifier, args.args)
    except (OSError, CompactLogError) as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    print(line)
    return 0


def _cmd_show(args: Any) -> int:
    try:
        table = _read_table(args.table)
    except (OSError, CompactLogError) as e:
        logger.error(str(e))
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    min_level = LogLevel.from_name(args.min_level) if args.min_level else None
    rows = [
        (identifier, entry)
        for identifier, entry in sorted(table.items())
        if (args.tag is None or entry.tag == args.tag)
        and (min_level is None or entry.level >= min_level)
    ]

    if args.json_output:
        payload = {str(i): _entry_to_dict(e) for i, e in rows}
        print(json.dumps(payload, ensure_ascii=False, indent=2))
    else:
        for identifier, entry in rows:
            print(f"{identifier:>11}  {entry.level.name:<7}  {entry.tag}: {entry.message}")
    return 0

# -----------------------------------------------------------------------------
# HELPERS
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow merge of the non-None overrides into the base configuration."""
    out = dict(base)
    for k, v in overrides.items():
        if v is not None:
            out[k] = v
    return out


def _read_table(path: str) -> Dict[int, ConfigEntry]:
    with open(path, "rb") as f:
        return ViewerConfigParser().parse(f.read())


def _entry_to_dict(entry: ConfigEntry) -> Dict[str, str]:
    return {"message": entry.message, "level": entry.level.name, "tag": entry.tag}


def _print_generation_summary(result: GenerationResult) -> None:
    """Render a GenerationResult as a terminal report."""
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        for err in result.errors:
            print(f"  - {err.rel_path}: {err.error}", file=sys.stderr)
        return

    if result.dry_run:
        print(f"Dry run: would write {result.entries} entries to {result.output_path}")
    else:
        print(f"Viewer config written: {result.output_path}")

    print(f"Files scanned: {result.files_scanned}")
    print(f"Calls compacted: {result.call_sites}")
    print(f"Calls skipped (disabled groups): {result.skipped_calls}")
    print(f"Table entries: {result.entries}")
    if result.collisions:
        print(f"Identifier collisions: {result.collisions}")


if __name__ == "__main__":
    sys.exit(main())
