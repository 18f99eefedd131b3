"""
Plain-text rendering of scan findings and removal results.
"""
from __future__ import annotations

from typing import Dict, List, Sequence

from .findings import (
    UNUSED_COMPONENT,
    UNUSED_FUNCTION,
    UNUSED_IMPORT,
    UNUSED_VARIABLE,
    Finding,
    RemovalOptions,
    RemovalResult,
    summarize,
)

ICONS = {
    UNUSED_IMPORT: "📦",
    UNUSED_FUNCTION: "🔧",
    UNUSED_VARIABLE: "📝",
    UNUSED_COMPONENT: "🧩",
}


def render_text_report(findings: Sequence[Finding]) -> str:
    lines = ["", "=" * 80, "📊 DEAD CODE ANALYSIS REPORT", "=" * 80]
    if not findings:
        lines.append("")
        lines.append("✅ No dead code found! Your codebase looks clean.")
        return "\n".join(lines) + "\n"

    summary = summarize(findings)
    by_kind = summary["by_kind"]
    lines += [
        "",
        "📈 SUMMARY:",
        f"   Total Issues: {summary['total']}",
        f"   Unused Imports: {by_kind.get(UNUSED_IMPORT, 0)}",
        f"   Unused Functions: {by_kind.get(UNUSED_FUNCTION, 0)}",
        f"   Unused Variables: {by_kind.get(UNUSED_VARIABLE, 0)}",
        f"   Unused Components: {by_kind.get(UNUSED_COMPONENT, 0)}",
        f"   Files Affected: {summary['files_affected']}",
        "",
        "🔍 DETAILED FINDINGS:",
    ]

    grouped: Dict[str, List[Finding]] = {}
    for f in findings:
        grouped.setdefault(f.relative_path, []).append(f)
    for rel in sorted(grouped):
        file_findings = grouped[rel]
        lines.append("")
        lines.append(f"📄 {rel} ({len(file_findings)} issue(s)):")
        for i, f in enumerate(file_findings, 1):
            icon = ICONS.get(f.kind, "❓")
            lines.append(
                f"   {i}. {icon} Line {f.line}:{f.column} - {f.description} [{f.confidence}]"
            )

    lines += [
        "",
        "💡 RECOMMENDATIONS:",
        "   • Review and remove unused imports to reduce bundle size",
        "   • Consider removing unused functions and variables",
        "   • Be cautious with functions that might be called dynamically",
        "",
        "⚠️  NOTE: This analysis may include false positives. Always review",
        "   suggestions carefully before making changes.",
    ]
    return "\n".join(lines) + "\n"


def render_removal_summary(result: RemovalResult, options: RemovalOptions) -> str:
    lines = [
        "",
        "📊 Removal Summary:",
        f"   Items removed: {result.removed_count}",
        f"   Files modified: {len(result.modified_files)}",
        f"   Files skipped: {len(result.skipped_files)}",
        f"   Errors: {len(result.errors)}",
    ]
    if options.dry_run:
        lines.append("")
        lines.append("🔍 This was a DRY RUN - no actual changes were made.")
    if result.errors:
        lines.append("")
        lines.append("❌ Errors encountered:")
        lines.extend(f"   • {err}" for err in result.errors)
    lines.append("")
    if options.dry_run:
        lines.append(
            f"🔍 Dry run complete: would remove {result.removed_count} item(s) "
            f"from {len(result.modified_files)} file(s)"
        )
    elif result.removed_count > 0:
        lines.append(
            f"✅ Removed {result.removed_count} dead code item(s) "
            f"from {len(result.modified_files)} file(s)"
        )
    else:
        lines.append("No items were removed.")
    return "\n".join(lines) + "\n"
