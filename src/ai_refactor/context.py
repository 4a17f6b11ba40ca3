"""Machine-readable context document for one analysis run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .aggregate import DependencyGraph, MetricsAggregate
from .analyzer import AnalysisResult
from .scanner import CodeInventory

ANALYSIS_VERSION = "3.0"


@dataclass
class MachineContext:
    """Everything later commands need to know about an analyzed project."""

    timestamp: str
    project_path: str
    inventory: CodeInventory
    analyses: dict[str, AnalysisResult]
    dependencies: DependencyGraph
    metrics: MetricsAggregate

    @property
    def has_tests(self) -> bool:
        return self.metrics.has_tests

    @property
    def complexity(self) -> int:
        return self.metrics.total_complexity

    def summary(self) -> dict[str, Any]:
        return {
            "fileCount": self.inventory.total_files,
            "totalSize": self.inventory.total_size,
            "linesOfCode": self.metrics.total_lines_of_code,
            "complexity": self.metrics.total_complexity,
            "frameworks": self.metrics.frameworks,
            "hasTests": self.metrics.has_tests,
        }

    def to_dict(self) -> dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "projectPath": self.project_path,
            "analysisVersion": ANALYSIS_VERSION,
            "summary": self.summary(),
            "files": {path: a.to_dict() for path, a in self.analyses.items()},
            "dependencies": self.dependencies.to_dict(),
            "metrics": self.metrics.to_dict(),
        }
