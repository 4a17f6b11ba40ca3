"""Directory scanning - walks a project tree and fingerprints text files."""

from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Iterable

from .classifier import is_text_file
from .errors import ScanError
from .logging import get_logger

DEFAULT_IGNORE_PATTERNS = (".git", "node_modules", ".next", "dist", "build")

logger = get_logger("scanner")


@dataclass(frozen=True)
class FileRecord:
    """One scanned file. Created once per scan, never mutated."""

    path: str
    relative_path: str
    size: int
    modified: str
    hash: str

    @property
    def extension(self) -> str:
        return os.path.splitext(self.relative_path)[1]

    @property
    def directory(self) -> str:
        return os.path.dirname(self.relative_path) or "."

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "relativePath": self.relative_path,
            "size": self.size,
            "modified": self.modified,
            "hash": self.hash,
            "extension": self.extension,
            "directory": self.directory,
        }


@dataclass
class CodeInventory:
    """Every scanned file plus size totals and an extension histogram."""

    files: list[FileRecord]

    @property
    def total_files(self) -> int:
        return len(self.files)

    @property
    def total_size(self) -> int:
        return sum(f.size for f in self.files)

    @property
    def file_types(self) -> dict[str, int]:
        counts: dict[str, int] = {}
        for f in self.files:
            ext = f.extension or "no-extension"
            counts[ext] = counts.get(ext, 0) + 1
        return counts

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalFiles": self.total_files,
            "totalSize": self.total_size,
            "fileTypes": self.file_types,
            "files": [f.to_dict() for f in self.files],
        }


def fingerprint(path: str | Path) -> str:
    """MD5 hex digest of the file's full byte content."""
    digest = hashlib.md5()
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(65536), b""):
            digest.update(chunk)
    return digest.hexdigest()


def _is_ignored(name: str, ignore_patterns: Iterable[str]) -> bool:
    return any(pattern in name for pattern in ignore_patterns)


def scan_directory(
    root: str | Path,
    ignore_patterns: Iterable[str] = DEFAULT_IGNORE_PATTERNS,
    exclude_dirs: Iterable[str] = (),
) -> list[FileRecord]:
    """Walk root depth-first and return a FileRecord per analyzable file.

    Any file or directory whose base name contains one of ignore_patterns is
    skipped along with everything beneath it; exclude_dirs names directories
    to skip by exact name. Entries are visited in sorted order so an
    unchanged tree always scans the same way. Files that cannot be stat'ed
    or read (dangling links, permission errors) are logged and left out.
    """
    root = Path(root).resolve()
    if not root.is_dir():
        raise ScanError(f"Directory not found: {root}")

    patterns = tuple(ignore_patterns)
    excluded = set(exclude_dirs)
    records: list[FileRecord] = []

    for dirpath, dirnames, filenames in os.walk(root):
        dirnames[:] = sorted(
            d for d in dirnames if d not in excluded and not _is_ignored(d, patterns)
        )

        for fname in sorted(filenames):
            if _is_ignored(fname, patterns) or not is_text_file(fname):
                continue

            fpath = os.path.join(dirpath, fname)
            relative_path = Path(os.path.relpath(fpath, root)).as_posix()
            try:
                stat = os.stat(fpath)
                digest = fingerprint(fpath)
            except OSError as e:
                logger.warning("Skipping unreadable file %s: %s", relative_path, e)
                continue

            records.append(
                FileRecord(
                    path=fpath,
                    relative_path=relative_path,
                    size=stat.st_size,
                    modified=datetime.fromtimestamp(stat.st_mtime, tz=timezone.utc).isoformat(),
                    hash=digest,
                )
            )

    logger.debug("Scanned %s: %d analyzable files", root, len(records))
    return records
