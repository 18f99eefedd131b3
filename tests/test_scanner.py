import pytest

from codesweep import scanner as sc
from codesweep.css_index import CssUsageIndex
from codesweep.findings import HIGH, LOW, MEDIUM
from codesweep.scanner import ANALYSIS_ERROR_NAME, Scanner, scan_file


def _scan(content: str, name: str = "app.js"):
    return scan_file(content, f"/proj/{name}", name)


def _kinds(findings):
    return {(f.kind, f.name) for f in findings}


def test_unused_named_import_only():
    src = "import { unusedImport } from './x';\nconst usedVariable = 1;\nconsole.log(usedVariable);\n"
    findings = _scan(src)
    assert len(findings) == 1
    f = findings[0]
    assert f.kind == "unused-import"
    assert f.name == "unusedImport"
    assert f.confidence == HIGH
    assert f.line == 1
    assert f.description == "Unused named import 'unusedImport' from './x'"


def test_single_line_statement_from_overview():
    src = "import { unusedImport } from './x'; const usedVariable = 1; console.log(usedVariable);"
    assert _kinds(_scan(src)) == {("unused-import", "unusedImport")}


def test_default_namespace_and_alias_imports():
    src = (
        "import React, { useState, useEffect } from 'react';\n"
        "import * as utils from './utils';\n"
        "import { a as b } from './m';\n"
        "useState(0);\n"
    )
    findings = _scan(src)
    assert _kinds(findings) == {
        ("unused-import", "React"),
        ("unused-import", "useEffect"),
        ("unused-import", "utils"),
        ("unused-import", "b"),
    }
    by_name = {f.name: f for f in findings}
    assert by_name["React"].description == "Unused default import 'React' from 'react'"
    assert by_name["utils"].description == "Unused namespace import 'utils' from './utils'"
    assert by_name["utils"].line == 2
    assert by_name["b"].line == 3


def test_comment_inside_import_list_is_not_a_binding():
    src = "import { a, // keep for later\n  b } from './m';\nb();\n"
    assert _kinds(_scan(src)) == {("unused-import", "a")}


def test_side_effect_import_is_not_reported():
    src = "import { a } from './a';\nimport './side-effect';\n"
    assert _kinds(_scan(src)) == {("unused-import", "a")}


def test_unused_function_reported_with_declaration_line():
    src = "// helpers\n\nfunction unusedFn() {\n  return 1;\n}\n"
    findings = _scan(src)
    assert len(findings) == 1
    f = findings[0]
    assert (f.kind, f.name, f.confidence, f.line) == ("unused-function", "unusedFn", MEDIUM, 3)
    assert f.description == "Function 'unusedFn' appears to be unused"


def test_called_function_is_used():
    src = "function helper() {\n  return 1;\n}\nhelper();\n"
    assert _scan(src) == []


def test_unused_arrow_function():
    src = "const add = (a, b) => a + b;\nconst inc = async x => x + 1;\ninc(1);\n"
    findings = _scan(src)
    assert _kinds(findings) == {("unused-function", "add")}
    assert findings[0].description == "Arrow function 'add' appears to be unused"


def test_unused_variable_only_for_unreferenced_binding():
    src = "const x = 'a';\nconst y = 'b';\nconsole.log(x);\n"
    findings = _scan(src)
    assert _kinds(findings) == {("unused-variable", "y")}
    assert findings[0].line == 2
    assert findings[0].confidence == MEDIUM


def test_typed_variable_in_typescript():
    src = "const limit: number = 10;\nlet label: string = 'x';\nconsole.log(label);\n"
    assert _kinds(_scan(src, "app.ts")) == {("unused-variable", "limit")}


def test_exports_suppress_function_and_variable_findings():
    src = (
        "export function helper() {\n  return 1;\n}\n"
        "export const LIMIT = 3;\n"
        "function legacy() {}\n"
        "module.exports = { legacy };\n"
    )
    assert _scan(src) == []


def test_export_of_other_name_does_not_suppress():
    src = "export function used() {}\nfunction stale() {}\n"
    assert _kinds(_scan(src)) == {("unused-function", "stale")}


def test_export_text_containing_name_suppresses():
    src = "export const helperList = [];\nfunction helper() {\n  return 1;\n}\n"
    assert _scan(src) == []


def test_dollar_identifiers_are_matched_whole():
    src = "const $el = 1;\nconst a$el = 2;\nconsole.log(a$el);\n"
    assert _kinds(_scan(src)) == {("unused-variable", "$el")}


def test_components_in_jsx():
    src = (
        "function Button() {\n"
        "  return <button>Hi</button>;\n"
        "}\n"
        "function Unused() {\n"
        "  return null;\n"
        "}\n"
        "export default function App() {\n"
        "  return <Button />;\n"
        "}\n"
    )
    findings = _scan(src, "App.jsx")
    components = {f.name for f in findings if f.kind == "unused-component"}
    assert components == {"Unused"}
    comp = next(f for f in findings if f.kind == "unused-component")
    assert comp.line == 4
    assert comp.description == "React component 'Unused' appears to be unused"
    assert "App" not in {f.name for f in findings}


def test_components_not_scanned_in_plain_js():
    src = "function Unused() {\n  return null;\n}\n"
    assert _kinds(_scan(src, "x.js")) == {("unused-function", "Unused")}


def test_empty_and_whitespace_files():
    assert _scan("") == []
    assert _scan("  \n\t\n") == []


def test_unknown_extension_is_ignored():
    assert _scan("const y = 1;", "notes.txt") == []


def test_analysis_error_becomes_low_finding(monkeypatch):
    def boom(*args, **kwargs):
        raise RuntimeError("bad regex day")

    monkeypatch.setattr(sc, "_find_unused_imports", boom)
    findings = _scan("const a = 1;\n")
    assert len(findings) == 1
    f = findings[0]
    assert f.name == ANALYSIS_ERROR_NAME
    assert f.confidence == LOW
    assert f.kind == "unused-variable"
    assert f.line == 1
    assert f.description == "Failed to analyze file: bad regex day"


def test_repeated_scans_give_same_result():
    src = "import { a } from './a';\nimport { b } from './b';\nb();\n"
    s = Scanner()
    first = s.scan_file(src, "/p/x.js", "x.js")
    second = s.scan_file(src, "/p/x.js", "x.js")
    assert first == second
    assert _kinds(first) == {("unused-import", "a")}


def test_css_without_index_reports_nothing():
    assert _scan(".card {\n  color: red;\n}\n", "site.css") == []


def test_css_with_index():
    css = ".used {\n}\n.stale {\n}\n#main {\n}\n"
    s = Scanner(css_index=CssUsageIndex(classes={"used"}))
    findings = s.scan_file(css, "/p/site.css", "site.css")
    by_name = {f.name: f for f in findings}
    assert set(by_name) == {"stale", "main"}
    assert by_name["stale"].line == 3
    assert by_name["stale"].description == "CSS class 'stale' appears to be unused"
    assert by_name["main"].line == 5
    assert by_name["main"].description == "CSS ID 'main' appears to be unused"
    assert all(f.kind == "unused-variable" for f in findings)


def test_scan_path_reads_file(tmp_path):
    p = tmp_path / "src" / "a.js"
    p.parent.mkdir()
    p.write_text("const unused = 1;\n", encoding="utf-8")
    findings = Scanner().scan_path(p, tmp_path)
    assert len(findings) == 1
    assert findings[0].relative_path == "src/a.js"
    assert findings[0].file_path == str(p)


def test_scan_path_undecodable_file(tmp_path):
    p = tmp_path / "bin.js"
    p.write_bytes(b"\xff\xfe\x00const")
    findings = Scanner().scan_path(p, tmp_path)
    assert [f.name for f in findings] == [ANALYSIS_ERROR_NAME]


@pytest.mark.parametrize(
    "name, expected",
    [
        ("lib.mjs", {("unused-function", "Unused")}),
        ("x.Ts", {("unused-function", "Unused")}),
        ("Card.tsx", {("unused-function", "Unused"), ("unused-component", "Unused")}),
        ("App.JSX", {("unused-function", "Unused"), ("unused-component", "Unused")}),
    ],
)
def test_dispatch_by_extension_ignores_case(name, expected):
    src = "function Unused() {\n  return null;\n}\n"
    assert _kinds(_scan(src, name)) == expected
