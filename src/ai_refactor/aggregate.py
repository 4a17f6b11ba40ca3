"""Project-wide aggregation of per-file analyses.

MetricsAggregate folds totals, frameworks and manifests; DependencyGraph
splits import specifiers into internal edges and external packages. Both
are built fresh for every analysis run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .analyzer import AnalysisResult
from .classifier import CONFIG


@dataclass
class ConfigFileEntry:
    """A manifest discovered during the scan."""

    file: str
    type: str
    content: Any

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file, "type": self.type, "content": self.content}


@dataclass
class MetricsAggregate:
    """Running project totals for one analysis pass."""

    total_lines_of_code: int = 0
    total_complexity: int = 0
    # dict keys as an insertion-ordered set
    _frameworks: dict[str, None] = field(default_factory=dict)
    has_tests: bool = False
    config_files: list[ConfigFileEntry] = field(default_factory=list)

    @property
    def frameworks(self) -> list[str]:
        return list(self._frameworks)

    def add(self, relative_path: str, result: AnalysisResult) -> None:
        """Fold one file's result in. Failed results contribute nothing."""
        if not result.ok:
            return

        if result.kind == CONFIG:
            self.config_files.append(
                ConfigFileEntry(file=relative_path, type=result.config_type, content=result.content)
            )
            return

        self.total_lines_of_code += result.lines_of_code
        self.total_complexity += result.complexity
        self.has_tests = self.has_tests or result.has_tests
        for fw in result.frameworks:
            self._frameworks.setdefault(fw, None)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalLinesOfCode": self.total_lines_of_code,
            "totalComplexity": self.total_complexity,
            "frameworks": self.frameworks,
            "hasTests": self.has_tests,
            "configFiles": [cf.to_dict() for cf in self.config_files],
        }


def is_internal(specifier: str) -> bool:
    """Relative specifiers ("./x", "../y") point at files inside the scan."""
    return specifier.startswith(".")


@dataclass
class DependencyGraph:
    """Importing file -> internal specifiers, plus the external package set."""

    internal: dict[str, list[str]] = field(default_factory=dict)
    _external: dict[str, None] = field(default_factory=dict)

    @property
    def external(self) -> list[str]:
        return [spec for spec in self._external if spec not in self.internal]

    def add(self, relative_path: str, imports: list[str]) -> None:
        for spec in imports:
            if is_internal(spec):
                self.internal.setdefault(relative_path, []).append(spec)
            else:
                self._external.setdefault(spec, None)

    def to_dict(self) -> dict[str, Any]:
        return {"internal": self.internal, "external": self.external}
