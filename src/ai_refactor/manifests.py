"""Manifest inspection - tags ecosystem declaration files by name."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

# Manifest base name -> ecosystem tag
MANIFEST_TYPES = {
    "package.json": "npm",
    "composer.json": "composer",
    "requirements.txt": "python",
    "Gemfile": "ruby",
    "go.mod": "go",
    "Cargo.toml": "rust",
}

# Manifests whose content is kept as parsed JSON instead of raw text
STRUCTURED_MANIFESTS = {"package.json"}


def manifest_type(path: str | Path) -> str:
    """Return the ecosystem tag for a manifest path, or "unknown"."""
    return MANIFEST_TYPES.get(Path(path).name, "unknown")


def inspect_config_file(path: str | Path) -> tuple[str, Any]:
    """Read a manifest and return (ecosystem tag, content).

    package.json is parsed; a malformed one raises json.JSONDecodeError and
    the caller decides what to do with that file.
    """
    path = Path(path)
    content = path.read_text(encoding="utf-8")
    if path.name in STRUCTURED_MANIFESTS:
        return manifest_type(path), json.loads(content)
    return manifest_type(path), content
