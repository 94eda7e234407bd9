from __future__ import annotations

"""
Viewer Config Generation Engine.

Orchestrates a complete compaction run: resolves log groups, discovers the
source units, feeds them through the builder and persists the viewer config.
Per-file failures are collected rather than raised; any failure aborts the
write, since a partial table would leave identifiers undecodable.
"""

import logging
import os
from typing import Any, Dict, List

from compactlog.core.analysis.call_processor import PythonCallProcessor
from compactlog.core.analysis.groups import groups_from_mapping, load_groups
from compactlog.core.builder import ViewerConfigBuilder
from compactlog.core.services.scanner import (
    prepare_filtering_rules,
    read_source,
    yield_source_files,
)
from compactlog.domain.errors import CompactLogError
from compactlog.domain.models import LogGroup, SourceUnit
from compactlog.domain.pipeline_models import GenerationResult, SourceError
from compactlog.infra.fs import write_text_atomic

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def run_generate(
        config: Dict[str, Any],
        *,
        overwrite: bool = False,
        dry_run: bool = False,
) -> GenerationResult:
    """
    Generate the viewer config for a source tree.

    Args:
        config: Validated configuration (see ``validate_config``).
        overwrite: Replace an existing viewer config at the output path.
        dry_run: Run the full scan but skip writing the table.

    Returns:
        GenerationResult: Outcome and statistics of the run.
    """
    output_path = config["output_path"]

    # 1. Group Resolution
    try:
        groups = resolve_groups(config)
    except CompactLogError as e:
        logger.error(f"Log group resolution failed: {e}")
        return GenerationResult(ok=False, error=str(e), output_path=output_path, dry_run=dry_run)

    processor = PythonCallProcessor(
        groups,
        protolog_class=config["protolog_class"],
        group_class=config["group_class"],
    )
    builder = ViewerConfigBuilder(processor)

    # 2. Discovery and Extraction
    include_rx, exclude_rx = prepare_filtering_rules(
        config["include_patterns"], config["exclude_patterns"]
    )
    errors: List[SourceError] = []
    files_scanned = 0

    for file_info in yield_source_files(
            config["source_root"], config["extensions"], include_rx, exclude_rx
    ):
        rel_path = file_info["rel_path"]
        files_scanned += 1
        try:
            source = read_source(file_info["file_path"])
            builder.process_unit(SourceUnit(path=rel_path, source=source))
        except (OSError, UnicodeDecodeError) as e:
            errors.append(SourceError(rel_path, f"Read error: {e}"))
        except SyntaxError as e:
            errors.append(SourceError(rel_path, f"SyntaxError: {e.msg} (line {e.lineno})"))
        except CompactLogError as e:
            errors.append(SourceError(rel_path, str(e)))

    logger.info(
        f"Scanned {files_scanned} files: {builder.processed_calls} calls compacted, "
        f"{builder.skipped_calls} skipped (disabled groups)"
    )

    stats = dict(
        output_path=output_path,
        files_scanned=files_scanned,
        call_sites=builder.processed_calls,
        skipped_calls=builder.skipped_calls,
        entries=len(builder.entries),
        collisions=builder.collisions,
        errors=errors,
        dry_run=dry_run,
    )

    if errors:
        for err in errors:
            logger.error(f"{err.rel_path}: {err.error}")
        return GenerationResult(
            ok=False, error=f"{len(errors)} source file(s) could not be processed.", **stats
        )

    # 3. Persistence
    if dry_run:
        logger.info(f"Dry run: viewer config not written to {output_path}")
        return GenerationResult(ok=True, **stats)

    if os.path.exists(output_path) and not overwrite:
        msg = f"Output file already exists: {output_path}"
        logger.error(msg)
        return GenerationResult(ok=False, error=msg, **stats)

    try:
        write_text_atomic(output_path, builder.build())
    except OSError as e:
        logger.error(f"Failed to write viewer config: {e}")
        return GenerationResult(ok=False, error=str(e), **stats)

    logger.info(f"Viewer config with {stats['entries']} entries written to {output_path}")
    return GenerationResult(ok=True, **stats)


def resolve_groups(config: Dict[str, Any]) -> Dict[str, LogGroup]:
    """
    Merge inline group declarations with those of the groups file.

    Groups from the file override inline groups of the same name.

    Raises:
        GroupRegistryError: If any declaration is malformed.
    """
    groups = groups_from_mapping(config.get("groups") or {})
    groups_file = config.get("groups_file")
    if groups_file:
        groups.update(load_groups(groups_file))

    if not groups:
        logger.warning("No log groups declared; every log call will be rejected.")
    return groups
