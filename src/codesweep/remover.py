"""
Line-range remover: deletes the source lines behind scanner findings.

Per file the findings are applied bottom-up (descending line number) so a
removal never shifts the line of a finding that is still pending. Each file
is read once, edited in memory and written once; a dry run stops before the
write. Failures are collected per finding and never stop the remaining work.
"""
from __future__ import annotations

import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Set, Tuple

from . import patterns as P
from .findings import (
    HIGH,
    UNUSED_COMPONENT,
    UNUSED_FUNCTION,
    UNUSED_IMPORT,
    UNUSED_VARIABLE,
    Finding,
    RemovalOptions,
    RemovalResult,
    group_by_file,
)

Log = Callable[[str], None]
ConfirmHook = Callable[[str, List[Finding]], bool]


@dataclass
class LineEdit:
    success: bool
    lines: List[str]
    reason: Optional[str] = None


@dataclass
class ContentEdit:
    content: str
    removed_count: int = 0
    errors: List[str] = field(default_factory=list)


def remove_dead_code(
    findings: Sequence[Finding],
    options: RemovalOptions,
    *,
    confirm: Optional[ConfirmHook] = None,
    log: Log = print,
    should_cancel: Optional[Callable[[], bool]] = None,
    clock: Callable[[], float] = time.time,
) -> RemovalResult:
    """Remove the lines behind ``findings`` from their files.

    Args:
        findings: scanner output, possibly spanning many files
        options: backup / confirmation / confidence / dry-run switches
        confirm: per-file approval hook, consulted only with ``options.confirm_each``
        log: sink for human-readable progress lines
        should_cancel: checked between files; a true result stops the run
        clock: seconds since the epoch, used for backup file names

    Returns:
        RemovalResult: counts, modified files and accumulated error strings
    """
    result = RemovalResult()
    try:
        log("🧹 Dead code removal - starting cleanup...")
        selected = list(findings)
        if options.only_high_confidence:
            selected = [f for f in selected if f.confidence == HIGH]
            log(f"🎯 High confidence only: {len(selected)}/{len(findings)}")
        if not selected:
            log("No issues to remove after filtering.")
            return result

        by_file = group_by_file(selected)
        log(f"📁 Will process {len(by_file)} file(s)")

        for file_path, file_findings in by_file.items():
            rel = file_findings[0].relative_path or file_path
            if should_cancel is not None and should_cancel():
                result.success = False
                log("⏹️  Cancelled; remaining files left untouched")
                break
            if options.confirm_each and confirm is not None:
                if not confirm(file_path, list(file_findings)):
                    result.skipped_files.append(file_path)
                    log(f"⏭️  Skipped {rel} (declined)")
                    continue
            try:
                removed, modified, errors = _process_file(
                    file_path, rel, file_findings, options, log, clock
                )
            except Exception as e:
                msg = f"Error processing {rel}: {e}"
                result.errors.append(msg)
                log(f"❌ {msg}")
                continue
            result.removed_count += removed
            result.errors.extend(errors)
            if modified:
                result.modified_files.append(file_path)
    except Exception as e:
        result.success = False
        result.errors.append(f"General error: {e}")
        log(f"❌ Fatal error: {e}")
    return result


def _process_file(
    file_path: str,
    rel: str,
    findings: List[Finding],
    options: RemovalOptions,
    log: Log,
    clock: Callable[[], float],
) -> Tuple[int, bool, List[str]]:
    path = Path(file_path)
    original = path.read_bytes().decode("utf-8")
    log(f"\n📄 Processing {rel}:")
    suffix = " [DRY RUN]" if options.dry_run else ""
    edit = remove_from_content(original, findings, log=log, suffix=suffix)
    modified = edit.removed_count > 0 and edit.content != original

    if options.dry_run:
        if edit.removed_count:
            log(f"  📝 [DRY RUN] Would remove {edit.removed_count} item(s)")
        return edit.removed_count, modified, edit.errors

    if modified:
        if options.create_backup:
            backup = write_backup(path, original, clock)
            log(f"  💾 Created backup: {backup.name}")
        path.write_bytes(edit.content.encode("utf-8"))
        log(f"  💾 File saved with {edit.removed_count} removal(s)")
    return edit.removed_count, modified, edit.errors


def remove_from_content(
    content: str,
    findings: Sequence[Finding],
    log: Optional[Log] = None,
    suffix: str = "",
) -> ContentEdit:
    """Apply ``findings`` (all for the same file) to ``content`` in memory."""
    lines = content.split("\n")
    ordered = sorted(findings, key=lambda f: f.line, reverse=True)
    import_names: Dict[int, Set[str]] = {}
    for f in findings:
        if f.kind == UNUSED_IMPORT:
            import_names.setdefault(f.line, set()).add(f.name)

    edit = ContentEdit(content=content)
    removed_at: Set[int] = set()
    for finding in ordered:
        if finding.line in removed_at:
            # same declaration reported twice (e.g. function + component, or
            # several names of one import); its lines are already gone
            edit.removed_count += 1
            if log:
                log(f"  ✅ {finding.kind}: {finding.name} (line {finding.line}, already removed){suffix}")
            continue
        try:
            step = remove_finding(lines, finding, import_names.get(finding.line, set()))
        except Exception as e:
            msg = f"Failed to remove {finding.name}: {e}"
            edit.errors.append(msg)
            if log:
                log(f"  ❌ {msg}")
            continue
        if step.success:
            lines = step.lines
            removed_at.add(finding.line)
            edit.removed_count += 1
            if log:
                log(f"  ✅ {finding.kind}: {finding.name} (line {finding.line}){suffix}")
        else:
            edit.errors.append(f"{finding.name}: {step.reason}")
            if log:
                log(f"  ⚠️  Failed to remove {finding.kind}: {finding.name} - {step.reason}")
    edit.content = "\n".join(lines)
    return edit


def remove_finding(
    lines: List[str], finding: Finding, import_names: Optional[Set[str]] = None
) -> LineEdit:
    """Delete the line range of one finding from ``lines`` (a new list is returned)."""
    index = finding.line - 1
    if index < 0 or index >= len(lines):
        return LineEdit(False, lines, "Invalid line number")
    if finding.kind == UNUSED_IMPORT:
        return _remove_import(lines, index, finding, import_names or set())
    if finding.kind == UNUSED_VARIABLE:
        return _remove_variable(lines, index, finding)
    if finding.kind in (UNUSED_FUNCTION, UNUSED_COMPONENT):
        return _remove_block(lines, index)
    return LineEdit(False, lines, f"Unsupported issue type: {finding.kind}")


def _remove_import(lines: List[str], index: int, finding: Finding, names: Set[str]) -> LineEdit:
    line = lines[index]
    if not line.strip().startswith("import"):
        return LineEdit(False, lines, "Line is not an import statement")
    m = P.IMPORT_RE.search(line)
    if m is None:
        return LineEdit(False, lines, "Import statement spans multiple lines")
    bound = {name for name, _ in P.import_bindings(m)}
    still_bound = bound - names - {finding.name}
    if still_bound:
        return LineEdit(
            False, lines, f"Import statement also binds {', '.join(sorted(still_bound))}"
        )
    return LineEdit(True, lines[:index] + lines[index + 1:])


def _remove_variable(lines: List[str], index: int, finding: Finding) -> LineEdit:
    line = lines[index]
    declared = re.search(
        r"\b(?:const|let|var)\s+" + re.escape(finding.name) + r"(?![\w$])", line
    )
    tail = line.rstrip()
    if declared and (tail.endswith(";") or tail.endswith(",")):
        return LineEdit(True, lines[:index] + lines[index + 1:])
    return LineEdit(False, lines, "Could not safely remove variable")


def _remove_block(lines: List[str], index: int) -> LineEdit:
    end = find_block_end(lines, index)
    if end == -1:
        return LineEdit(False, lines, "Could not determine function boundaries")
    return LineEdit(True, lines[:index] + lines[end + 1:])


def find_block_end(lines: Sequence[str], start: int) -> int:
    """Index of the line closing the construct that begins at ``start``.

    Counts ``{``/``}`` until the balance is back to zero after having opened.
    On the declaration line the balance is taken at the end of the line (so
    ``function f({ a }) {`` stays open); on later lines the construct ends at
    the brace that closes it, even if the same line opens another block.
    Braces inside quoted strings, template literals and comments are skipped
    (regex literals are not recognised). A construct that ends its statement
    with ``;`` before any brace opens (``const f = (x) => x + 1;``) ends on
    that line. Returns -1 when the balance never closes.
    """
    depth = 0
    opened = False
    state: Optional[str] = None  # None | quote char | "/*"
    for i in range(start, len(lines)):
        line = lines[i]
        if state in ("'", '"'):
            state = None
        last_code = ""
        j = 0
        n = len(line)
        while j < n:
            ch = line[j]
            if state == "/*":
                if line.startswith("*/", j):
                    state = None
                    j += 2
                else:
                    j += 1
                continue
            if state is not None:
                if ch == "\\":
                    j += 2
                    continue
                if ch == state:
                    state = None
                    last_code = ch
                j += 1
                continue
            if line.startswith("//", j):
                break
            if line.startswith("/*", j):
                state = "/*"
                j += 2
                continue
            if ch in "'\"`":
                state = ch
            elif ch == "{":
                depth += 1
                opened = True
            elif ch == "}":
                depth -= 1
                if opened and depth == 0 and i > start:
                    return i
            if not ch.isspace():
                last_code = ch
            j += 1
        if opened and depth <= 0:
            return i
        if not opened and state is None and last_code == ";":
            return i
    return -1


def write_backup(path: Path, content: str, clock: Callable[[], float] = time.time) -> Path:
    """Write ``content`` to ``<path>.backup.<unix-ms>`` and return the backup path."""
    stamp = int(clock() * 1000)
    backup = path.with_name(f"{path.name}.backup.{stamp}")
    while backup.exists():
        stamp += 1
        backup = path.with_name(f"{path.name}.backup.{stamp}")
    backup.write_bytes(content.encode("utf-8"))
    return backup
