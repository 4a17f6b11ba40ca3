"""Analysis pipeline - scan, analyze, aggregate, persist.

One call to run_analysis builds every artifact in memory and only then
writes them under <project>/ai-analysis/. The loaders at the bottom read
those artifacts back for the work and status commands.
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable, Optional

from .aggregate import DependencyGraph, MetricsAggregate
from .analyzer import AnalysisResult, SourceFacts, DEFAULT_FACTS, analyze_source_file
from .backlog import Backlog, Task, generate_task_backlog
from .classifier import CONFIG, SOURCE, analyzer_kind
from .context import MachineContext
from .errors import ArtifactError, BacklogNotFoundError, TaskNotFoundError
from .logging import get_logger
from .manifests import inspect_config_file
from .prompts import compose_task_prompt
from .report import generate_summary
from .scanner import DEFAULT_IGNORE_PATTERNS, CodeInventory, scan_directory

ANALYSIS_DIR = "ai-analysis"
ANALYSIS_SUMMARY_FILE = "analysis_summary.md"
MACHINE_CONTEXT_FILE = "machine_context.json"
TASK_BACKLOG_FILE = "task_backlog.json"
CODE_INVENTORY_FILE = "code_inventory.json"
DEPENDENCY_MAP_FILE = "dependency_map.json"
METRICS_FILE = "code_metrics.json"

logger = get_logger("pipeline")


@dataclass
class AnalysisRun:
    """Outcome of one analyze pass."""

    analysis_dir: Path
    context: MachineContext
    backlog: Backlog


def _utcnow() -> str:
    return datetime.now(timezone.utc).isoformat()


def _analyze_config(path: str) -> AnalysisResult:
    try:
        config_type, content = inspect_config_file(path)
    except (OSError, ValueError) as e:
        return AnalysisResult(kind=CONFIG, error=str(e))
    return AnalysisResult(kind=CONFIG, config_type=config_type, content=content)


def analyze_files(
    inventory: CodeInventory,
    facts: SourceFacts = DEFAULT_FACTS,
) -> tuple[dict[str, AnalysisResult], MetricsAggregate, DependencyGraph]:
    """Dispatch each file to its analyzer and fold results in scan order."""
    analyses: dict[str, AnalysisResult] = {}
    metrics = MetricsAggregate()
    dependencies = DependencyGraph()

    for record in inventory.files:
        kind = analyzer_kind(record.relative_path)
        if kind == SOURCE:
            result = analyze_source_file(record.path, facts)
        elif kind == CONFIG:
            result = _analyze_config(record.path)
        else:
            continue

        if result.error:
            logger.warning("Could not analyze %s: %s", record.relative_path, result.error)

        analyses[record.relative_path] = result
        metrics.add(record.relative_path, result)
        dependencies.add(record.relative_path, result.imports)

    return analyses, metrics, dependencies


def _dump_json(data: Any) -> str:
    return json.dumps(data, indent=2, ensure_ascii=False)


def _write_artifacts(analysis_dir: Path, artifacts: dict[str, str]) -> None:
    """Write each artifact to a temp sibling, then move it into place."""
    analysis_dir.mkdir(parents=True, exist_ok=True)
    for name, text in artifacts.items():
        target = analysis_dir / name
        tmp = target.with_name(f".{name}.tmp")
        tmp.write_text(text, encoding="utf-8")
        os.replace(tmp, target)


def run_analysis(
    directory: str | Path,
    ignore_patterns: Iterable[str] = (),
    facts: SourceFacts = DEFAULT_FACTS,
    now: Optional[str] = None,
) -> AnalysisRun:
    """Analyze a project and write all six artifacts to <directory>/ai-analysis.

    ignore_patterns extends the default ignore set. Raises ScanError when
    the directory does not exist; per-file failures never stop the run.
    """
    timestamp = now or _utcnow()
    root = Path(directory).resolve()
    patterns = (*ignore_patterns, *DEFAULT_IGNORE_PATTERNS)

    logger.info("Starting analysis of %s", root)
    inventory = CodeInventory(scan_directory(root, patterns, exclude_dirs=[ANALYSIS_DIR]))
    logger.info("Inventoried %d files", inventory.total_files)

    analyses, metrics, dependencies = analyze_files(inventory, facts)
    logger.debug(
        "Analyzed %d files: %d LOC, complexity %d",
        len(analyses),
        metrics.total_lines_of_code,
        metrics.total_complexity,
    )

    context = MachineContext(
        timestamp=timestamp,
        project_path=str(root),
        inventory=inventory,
        analyses=analyses,
        dependencies=dependencies,
        metrics=metrics,
    )
    backlog = generate_task_backlog(context, generated_at=timestamp)
    summary = generate_summary(inventory, analyses, dependencies, metrics, str(root), timestamp)

    analysis_dir = root / ANALYSIS_DIR
    _write_artifacts(
        analysis_dir,
        {
            CODE_INVENTORY_FILE: _dump_json(inventory.to_dict()),
            DEPENDENCY_MAP_FILE: _dump_json(dependencies.to_dict()),
            METRICS_FILE: _dump_json(metrics.to_dict()),
            ANALYSIS_SUMMARY_FILE: summary,
            MACHINE_CONTEXT_FILE: _dump_json(context.to_dict()),
            TASK_BACKLOG_FILE: _dump_json(backlog.to_dict()),
        },
    )
    logger.info("Analysis complete, results saved in %s", analysis_dir)

    return AnalysisRun(analysis_dir=analysis_dir, context=context, backlog=backlog)


def _read_json_object(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        raise ArtifactError(f"Could not read {path}: {e}") from e
    if not isinstance(data, dict):
        raise ArtifactError(f"Could not read {path}: expected a JSON object")
    return data


def load_context(analysis_dir: str | Path) -> Optional[dict[str, Any]]:
    """Read machine_context.json, or None if the directory has none.

    Raises ArtifactError when the file is not a JSON object.
    """
    path = Path(analysis_dir) / MACHINE_CONTEXT_FILE
    if not path.is_file():
        return None
    return _read_json_object(path)


def load_backlog(analysis_dir: str | Path) -> Backlog:
    """Read task_backlog.json back into a Backlog.

    A hand-edited file with an unknown priority, status or effort, or a
    task without an id, raises ArtifactError naming the file.
    """
    path = Path(analysis_dir) / TASK_BACKLOG_FILE
    if not path.is_file():
        raise BacklogNotFoundError(f'Task backlog not found at "{path}". Run \'analyze\' first.')
    data = _read_json_object(path)
    try:
        return Backlog.from_dict(data)
    except KeyError as e:
        raise ArtifactError(f"Invalid task in {path}: missing field {e}") from e
    except (ValueError, TypeError, AttributeError) as e:
        raise ArtifactError(f"Invalid task in {path}: {e}") from e


def get_task(analysis_dir: str | Path, task_id: str) -> Task:
    task = load_backlog(analysis_dir).find(task_id)
    if task is None:
        raise TaskNotFoundError(f"Task not found: {task_id}")
    return task


def task_prompt(analysis_dir: str | Path, task_id: str) -> str:
    """Compose the prompt for one task of a persisted backlog."""
    task = get_task(analysis_dir, task_id)
    return compose_task_prompt(task, load_context(analysis_dir))
