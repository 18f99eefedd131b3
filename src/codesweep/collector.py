"""
Source file enumeration for a project root.
"""
from __future__ import annotations

import fnmatch
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional

DEFAULT_EXTENSIONS = [".js", ".ts", ".mjs", ".jsx", ".tsx"]
STYLE_EXTENSIONS = [".css", ".scss", ".sass", ".less"]
DEFAULT_IGNORED_DIRS = [
    "node_modules",
    ".git",
    "dist",
    "build",
    "out",
    ".vscode",
    "coverage",
    ".nyc_output",
    "lib",
    "types",
]


@dataclass(frozen=True)
class SourceFile:
    file_path: Path
    relative_path: str
    extension: str


def collect_source_files(
    root: Path,
    include: Optional[List[str]] = None,
    exclude: Optional[List[str]] = None,
    extensions: Optional[Iterable[str]] = None,
    ignored_dirs: Optional[Iterable[str]] = None,
) -> List[SourceFile]:
    """Walk ``root`` and return matching files sorted by relative path.

    Directories named in ``ignored_dirs`` or matching an ``exclude`` glob are
    not descended into. ``include`` globs, when given, must match the
    relative path of a file for it to be kept.
    """
    root = Path(root)
    include = list(include or [])
    exclude = list(exclude or [])
    exts = {e.lower() for e in (extensions if extensions is not None else DEFAULT_EXTENSIONS)}
    ignored = set(ignored_dirs if ignored_dirs is not None else DEFAULT_IGNORED_DIRS)

    collected: List[SourceFile] = []
    if not root.is_dir():
        return collected
    for dirpath, dirnames, filenames in os.walk(root):
        # prune ignored / excluded dirs
        for d in list(dirnames):
            rel = (Path(dirpath) / d).relative_to(root).as_posix()
            if d in ignored or _matches(rel, exclude) or _matches(rel + "/", exclude):
                dirnames.remove(d)
        for fn in filenames:
            f_path = Path(dirpath) / fn
            ext = f_path.suffix.lower()
            if ext not in exts:
                continue
            rel = f_path.relative_to(root).as_posix()
            if _matches(rel, exclude):
                continue
            if include and not _matches(rel, include):
                continue
            collected.append(SourceFile(file_path=f_path, relative_path=rel, extension=ext))
    collected.sort(key=lambda f: f.relative_path)
    return collected


def count_by_extension(files: Iterable[SourceFile]) -> Dict[str, int]:
    counts: Dict[str, int] = {}
    for f in files:
        counts[f.extension] = counts.get(f.extension, 0) + 1
    return dict(sorted(counts.items()))


def _matches(path: str, patterns: Iterable[str]) -> bool:
    return any(fnmatch.fnmatch(path, pat) for pat in patterns)
