"""File classification by extension and name."""

from __future__ import annotations

import os
from pathlib import Path

from .manifests import MANIFEST_TYPES

SUPPORTED_EXTENSIONS = {
    ".js", ".jsx", ".ts", ".tsx", ".vue", ".svelte", ".astro",
    ".json", ".md", ".css", ".scss", ".sass", ".less",
    ".html", ".htm", ".xml", ".yml", ".yaml", ".toml",
}

# Script extensions handed to the heuristic source analyzer
SOURCE_EXTENSIONS = {".js", ".jsx", ".ts", ".tsx", ".vue", ".svelte", ".astro"}

SOURCE = "source"
CONFIG = "config"


def is_text_file(path: str | Path) -> bool:
    """True if the path has an analyzable text extension."""
    return os.path.splitext(str(path))[1].lower() in SUPPORTED_EXTENSIONS


def analyzer_kind(path: str | Path) -> str | None:
    """Pick the analyzer for a path: "source", "config", or None for inventory only."""
    name = os.path.basename(str(path))
    if os.path.splitext(name)[1].lower() in SOURCE_EXTENSIONS:
        return SOURCE
    if name in MANIFEST_TYPES:
        return CONFIG
    return None
