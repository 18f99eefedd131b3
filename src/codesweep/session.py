"""
Scan sessions: the explicit hand-off between ``scan`` and ``remove``.

A scan produces a ``ScanSession`` which is written as JSON next to the
project (``<output>/findings.json``); ``remove`` loads it back instead of
relying on process-wide state.
"""
from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional

from .collector import collect_source_files, count_by_extension
from .config_loader import SweepConfig
from .css_index import MARKUP_EXTENSIONS, build_css_usage_index
from .findings import CONFIDENCE_ORDER, Finding
from .scanner import Scanner

SESSION_FILENAME = "findings.json"
SESSION_VERSION = "1.0"


@dataclass
class ScanSession:
    root: str
    generated_at: str
    files_scanned: int = 0
    findings: List[Finding] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": SESSION_VERSION,
            "root": self.root,
            "generated_at": self.generated_at,
            "files_scanned": self.files_scanned,
            "findings": [f.to_dict() for f in self.findings],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScanSession":
        return cls(
            root=str(data["root"]),
            generated_at=str(data.get("generated_at", "")),
            files_scanned=int(data.get("files_scanned", 0)),
            findings=[Finding.from_dict(item) for item in data.get("findings", [])],
        )


def run_scan(
    root: Path,
    config: Optional[SweepConfig] = None,
    log: Callable[[str], None] = print,
    should_cancel: Optional[Callable[[], bool]] = None,
) -> ScanSession:
    """Collect the project's source files and scan them one by one."""
    config = config or SweepConfig()
    root = Path(root).resolve()
    log("🧹 Dead code scan - starting analysis...")

    files = []
    for sub in config.paths:
        base = (root / sub).resolve()
        files.extend(
            collect_source_files(
                base,
                include=config.include,
                exclude=config.exclude,
                extensions=config.effective_extensions(),
                ignored_dirs=config.ignored_dirs,
            )
        )
    # the same file may be reachable from overlapping paths
    seen = set()
    unique = []
    for f in files:
        if f.file_path in seen:
            continue
        seen.add(f.file_path)
        unique.append(f)
    files = unique

    log(f"📁 Found {len(files)} source file(s)")
    for ext, count in count_by_extension(files).items():
        log(f"   {ext}: {count} file(s)")

    css_index = None
    if config.scan.css and config.scan.css_cross_file:
        css_index = build_css_usage_index(
            f.file_path
            for f in collect_source_files(
                root,
                exclude=config.exclude,
                extensions=sorted(MARKUP_EXTENSIONS),
                ignored_dirs=config.ignored_dirs,
            )
        )
    scanner = Scanner(css_index=css_index)

    session = ScanSession(
        root=str(root),
        generated_at=datetime.now(timezone.utc).isoformat(),
    )
    for f in files:
        if should_cancel is not None and should_cancel():
            log("⏹️  Scan cancelled")
            break
        found = scanner.scan_path(f.file_path, root)
        session.files_scanned += 1
        session.findings.extend(found)
        if found:
            log(f"🔍 {found[0].relative_path}: {len(found)} issue(s) found")
    return session


def save_session(session: ScanSession, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(session.to_dict(), ensure_ascii=False, indent=2), encoding="utf-8")
    return path


def load_session(path: Path) -> ScanSession:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No scan results at {path}; run 'codesweep scan' first")
    data = json.loads(path.read_text(encoding="utf-8"))
    return ScanSession.from_dict(data)


def filter_findings(
    findings: Iterable[Finding],
    kinds: Optional[Iterable[str]] = None,
    min_confidence: Optional[str] = None,
) -> List[Finding]:
    """Keep findings of the given kinds at or above ``min_confidence``."""
    wanted = set(kinds) if kinds else None
    limit = CONFIDENCE_ORDER.get(min_confidence, None) if min_confidence else None
    if min_confidence and limit is None:
        raise ValueError(f"Unknown confidence level: {min_confidence}")
    out: List[Finding] = []
    for f in findings:
        if wanted is not None and f.kind not in wanted:
            continue
        if limit is not None and CONFIDENCE_ORDER.get(f.confidence, 99) > limit:
            continue
        out.append(f)
    return out
