from codesweep.findings import HIGH, MEDIUM, Finding, RemovalOptions, RemovalResult, summarize
from codesweep.report import render_removal_summary, render_text_report


def _f(kind, rel, line, name, confidence=MEDIUM):
    return Finding(kind, f"/p/{rel}", rel, line, 1, name, f"{kind} {name}", confidence)


def test_empty_report():
    assert "No dead code found! Your codebase looks clean." in render_text_report([])


def test_report_groups_by_file():
    findings = [
        _f("unused-import", "b.js", 1, "x", HIGH),
        _f("unused-function", "a.js", 4, "f"),
        _f("unused-variable", "b.js", 7, "v"),
    ]
    text = render_text_report(findings)
    assert "Total Issues: 3" in text
    assert "Files Affected: 2" in text
    assert text.index("📄 a.js (1 issue(s)):") < text.index("📄 b.js (2 issue(s)):")
    assert "1. 📦 Line 1:1 - unused-import x [high]" in text
    assert "2. 📝 Line 7:1 - unused-variable v [medium]" in text


def test_summarize_counts():
    summary = summarize([_f("unused-import", "a.js", 1, "x", HIGH), _f("unused-import", "b.js", 1, "y")])
    assert summary == {
        "total": 2,
        "by_kind": {"unused-import": 2},
        "by_confidence": {"high": 1, "medium": 1},
        "files_affected": 2,
    }


def test_removal_summary():
    result = RemovalResult(removed_count=2, modified_files=["/p/a.js"], errors=["v: nope"])
    text = render_removal_summary(result, RemovalOptions())
    assert "Items removed: 2" in text
    assert "• v: nope" in text
    assert "✅ Removed 2 dead code item(s) from 1 file(s)" in text
    assert "DRY RUN" not in text

    dry = render_removal_summary(RemovalResult(), RemovalOptions(dry_run=True))
    assert "This was a DRY RUN" in dry
    assert "would remove 0 item(s) from 0 file(s)" in dry
