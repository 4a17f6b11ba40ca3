"""Markdown summary report for a finished analysis."""

from __future__ import annotations

from .aggregate import DependencyGraph, MetricsAggregate
from .analyzer import AnalysisResult
from .scanner import CodeInventory

HIGH_COMPLEXITY_THRESHOLD = 20
LARGE_FILE_LOC = 500
EXTERNAL_DEPS_SHOWN = 10


def high_complexity_files(analyses: dict[str, AnalysisResult]) -> list[str]:
    """Relative paths of files whose complexity exceeds the threshold."""
    return [p for p, a in analyses.items() if a.complexity > HIGH_COMPLEXITY_THRESHOLD]


def large_files(analyses: dict[str, AnalysisResult]) -> list[str]:
    return [p for p, a in analyses.items() if a.lines_of_code > LARGE_FILE_LOC]


def generate_summary(
    inventory: CodeInventory,
    analyses: dict[str, AnalysisResult],
    dependencies: DependencyGraph,
    metrics: MetricsAggregate,
    project_path: str,
    generated_at: str,
) -> str:
    """Render the human-readable analysis report. Pure: no I/O, no clock."""
    if metrics.frameworks:
        frameworks = f"- **Frameworks**: {', '.join(metrics.frameworks)}"
    else:
        frameworks = "- **Frameworks**: None detected"

    distribution = "\n".join(
        f"- **{ext}**: {count} files"
        for ext, count in sorted(inventory.file_types.items(), key=lambda x: -x[1])
    )

    config_files = "\n".join(f"- **{cf.file}**: {cf.type}" for cf in metrics.config_files) or "None found"

    external = dependencies.external
    external_lines = "\n".join(f"- {dep}" for dep in external[:EXTERNAL_DEPS_SHOWN])
    overflow = len(external) - EXTERNAL_DEPS_SHOWN
    external_more = f"... and {overflow} more" if overflow > 0 else ""

    testing = "Expand test coverage" if metrics.has_tests else "Add comprehensive testing"

    return f"""# AI Refactoring Analysis Report

## Project Overview
- **Project Path**: {project_path}
- **Analysis Date**: {generated_at}
- **Total Files**: {inventory.total_files}
- **Total Size**: {inventory.total_size / 1024:.2f} KB
- **Lines of Code**: {metrics.total_lines_of_code}
- **Total Complexity**: {metrics.total_complexity}

## Technology Stack
{frameworks}
- **Has Tests**: {"Yes" if metrics.has_tests else "No"}

## File Distribution
{distribution}

## Configuration Files
{config_files}

## External Dependencies
{external_lines}
{external_more}

## Potential Refactoring Areas

### Code Quality
- Files with high complexity (>{HIGH_COMPLEXITY_THRESHOLD}): {len(high_complexity_files(analyses))}
- Large files (>{LARGE_FILE_LOC} LOC): {len(large_files(analyses))}

### Architecture
- Internal dependencies: {len(dependencies.internal)} files have internal imports
- External dependencies: {len(external)} unique packages

### Recommendations
1. **Code Organization**: Review file structure and module organization
2. **Testing**: {testing}
3. **Documentation**: Add/update README and inline documentation
4. **Dependencies**: Audit and optimize external dependencies
5. **Performance**: Review large files and complex functions
6. **Standards**: Implement consistent coding standards and linting

## Next Steps
Use the generated task backlog to systematically address identified issues.
Each task is designed to be AI-assistable and includes relevant context.
"""
