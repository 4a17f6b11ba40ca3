"""AI Refactor Tool - heuristic codebase analysis and task prompts."""

__version__ = "3.0.0"
