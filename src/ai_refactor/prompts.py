"""Prompt templates and composition for backlog tasks.

Prompts are plain text handed to the user; nothing here talks to a model.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from .backlog import Task

TESTING_SETUP_PROMPT = (
    "Please help set up a comprehensive testing framework for this project. "
    "Analyze the current tech stack and recommend appropriate testing tools. "
    "Create basic test structure and configuration files."
)

COMPLEXITY_REFACTOR_PROMPT = (
    "Please analyze these high-complexity files and suggest refactoring strategies "
    "to reduce complexity while maintaining functionality."
)

PROMPT_FOOTER = "*Generated by AI Refactoring Tool v3.0*"


def project_context_line(context: Optional[dict[str, Any]]) -> str:
    """One sentence describing the analyzed project, empty without context."""
    if not context:
        return ""
    summary = context.get("summary", {})
    frameworks = ", ".join(summary.get("frameworks", [])) or "JavaScript"
    return (
        f"This is part of a {frameworks} project with {summary.get('fileCount', 0)} files "
        f"and {summary.get('linesOfCode', 0)} lines of code."
    )


def source_excerpts(source_files: list[str], base_dir: str | Path) -> str:
    """Embed each referenced file in a fenced block; missing ones are marked."""
    blocks = []
    for file in source_files:
        full_path = Path(base_dir) / file
        if full_path.is_file():
            content = full_path.read_text(encoding="utf-8", errors="replace")
            lang = os.path.splitext(file)[1][1:]
            blocks.append(f"### {file}\n```{lang}\n{content}\n```")
        else:
            blocks.append(f"### {file} (Not Found)")
    return "\n\n".join(blocks)


def compose_task_prompt(
    task: Task,
    context: Optional[dict[str, Any]] = None,
    base_dir: str | Path | None = None,
) -> str:
    """Build the full prompt for one task.

    Source files resolve against base_dir, else the analyzed project's path
    from context, else the current directory.
    """
    if base_dir is None:
        base_dir = (context or {}).get("projectPath") or os.getcwd()

    sources = source_excerpts(task.source_files, base_dir) if task.source_files else ""
    tags = ", ".join(task.tags) or "none"

    return f"""# Task: {task.title}

{task.description}

**Priority:** {task.priority.value}
**Estimated Effort:** {task.estimated_effort.value}
**Tags:** {tags}

## Context
{project_context_line(context)}

{task.prompt}

## Source Files
{sources or "No source files specified for this task."}

---
{PROMPT_FOOTER}"""
