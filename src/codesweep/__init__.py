"""
codesweep - find and remove probably-unused code in JS/TS/JSX projects

Simple API:

    from codesweep import scan_file, remove_dead_code, RemovalOptions

    # Scan one file's text
    findings = scan_file(source, "src/app.js", "app.js")
    for f in findings:
        print(f"{f.relative_path}:{f.line} {f.description}")

    # Remove the high-confidence ones, keeping a backup of each touched file
    result = remove_dead_code(findings, RemovalOptions(create_backup=True, only_high_confidence=True))
    print(f"Removed {result.removed_count} item(s)")
"""

from .findings import Finding, RemovalOptions, RemovalResult
from .remover import remove_dead_code
from .scanner import Scanner, scan_file
from .session import ScanSession, run_scan

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("codesweep")
except PackageNotFoundError:
    # Fallback for development/uninstalled package
    __version__ = "unknown"

__all__ = [
    "Finding",
    "RemovalOptions",
    "RemovalResult",
    "Scanner",
    "ScanSession",
    "remove_dead_code",
    "run_scan",
    "scan_file",
    "__version__",
]
