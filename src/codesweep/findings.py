"""
Finding / removal data model shared by the scanner and the remover.

A Finding is produced by the scanner for one file and handed by value to the
remover, which only reads ``line``, ``name``, ``kind`` and ``file_path``.
"""
from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Iterable, List

# Finding kinds
UNUSED_IMPORT = "unused-import"
UNUSED_FUNCTION = "unused-function"
UNUSED_VARIABLE = "unused-variable"
UNUSED_COMPONENT = "unused-component"
UNUSED_ROUTE = "unused-route"  # reserved, never produced by the scanner

KINDS = (UNUSED_IMPORT, UNUSED_FUNCTION, UNUSED_VARIABLE, UNUSED_COMPONENT, UNUSED_ROUTE)

# Confidence labels, most reliable first
HIGH = "high"
MEDIUM = "medium"
LOW = "low"

CONFIDENCE_ORDER = {HIGH: 0, MEDIUM: 1, LOW: 2}

# Categories; only dead-code is assigned today
DEAD_CODE = "dead-code"
RARELY_USED = "rarely-used"
TEST_ONLY = "test-only"


@dataclass(frozen=True)
class Finding:
    kind: str
    file_path: str
    relative_path: str
    line: int
    column: int
    name: str
    description: str
    confidence: str
    category: str = DEAD_CODE

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Finding":
        return cls(
            kind=str(data["kind"]),
            file_path=str(data["file_path"]),
            relative_path=str(data.get("relative_path") or data["file_path"]),
            line=int(data["line"]),
            column=int(data.get("column", 1)),
            name=str(data["name"]),
            description=str(data.get("description", "")),
            confidence=str(data.get("confidence", MEDIUM)),
            category=str(data.get("category", DEAD_CODE)),
        )


@dataclass
class RemovalOptions:
    """Switches for one removal run.

    ``confirm_each`` is honoured by whoever drives the run (the remover only
    consults the confirmation hook it is given when the flag is set).
    """

    create_backup: bool = False
    confirm_each: bool = False
    only_high_confidence: bool = False
    dry_run: bool = False


@dataclass
class RemovalResult:
    success: bool = True
    removed_count: int = 0
    errors: List[str] = field(default_factory=list)
    modified_files: List[str] = field(default_factory=list)
    skipped_files: List[str] = field(default_factory=list)


def group_by_file(findings: Iterable[Finding]) -> Dict[str, List[Finding]]:
    grouped: Dict[str, List[Finding]] = {}
    for finding in findings:
        grouped.setdefault(finding.file_path, []).append(finding)
    return grouped


def summarize(findings: Iterable[Finding]) -> Dict[str, Any]:
    by_kind: Dict[str, int] = {}
    by_confidence: Dict[str, int] = {}
    files = set()
    total = 0
    for finding in findings:
        total += 1
        by_kind[finding.kind] = by_kind.get(finding.kind, 0) + 1
        by_confidence[finding.confidence] = by_confidence.get(finding.confidence, 0) + 1
        files.add(finding.relative_path)
    return {
        "total": total,
        "by_kind": dict(sorted(by_kind.items())),
        "by_confidence": dict(
            sorted(by_confidence.items(), key=lambda kv: CONFIDENCE_ORDER.get(kv[0], 99))
        ),
        "files_affected": len(files),
    }
