"""
Symbol-usage scanner: best-effort unused-symbol detection over JS/TS/JSX text.

Declarations are extracted with regular expressions and each one is
usage-checked against the same file's text with the declaration masked out:

 - imports: the bare name anywhere outside ``import`` lines (high confidence);
 - functions: a call site ``name(`` outside the declaration header;
 - variables: the bare name outside the declaration statement;
 - components (.jsx/.tsx): ``<Name`` JSX usage or the bare name.

Functions, variables and components that co-occur with any export statement
are treated as used. Nothing here understands scopes, so shadowed names and
dynamic calls produce both false positives and false negatives.
"""
from __future__ import annotations

from pathlib import Path
from typing import List, Optional

from . import patterns as P
from .css_index import CssUsageIndex
from .findings import (
    DEAD_CODE,
    HIGH,
    LOW,
    MEDIUM,
    UNUSED_COMPONENT,
    UNUSED_FUNCTION,
    UNUSED_IMPORT,
    UNUSED_VARIABLE,
    Finding,
)

SCRIPT_EXTENSIONS = {".js", ".ts", ".mjs"}
REACT_EXTENSIONS = {".jsx", ".tsx"}
STYLE_EXTENSIONS = {".css", ".scss", ".sass", ".less"}

ANALYSIS_ERROR_NAME = "Analysis Error"


class Scanner:
    """Per-file scanner; ``css_index`` enables CSS selector findings."""

    def __init__(self, css_index: Optional[CssUsageIndex] = None) -> None:
        self.css_index = css_index

    # --- public entry points ---
    def scan_file(self, content: str, file_path: str, relative_path: str) -> List[Finding]:
        if not content or not content.strip():
            return []
        try:
            ext = Path(file_path).suffix.lower()
            if ext in SCRIPT_EXTENSIONS:
                return self._scan_code(content, file_path, relative_path)
            if ext in REACT_EXTENSIONS:
                findings = self._scan_components(content, file_path, relative_path)
                findings.extend(self._scan_code(content, file_path, relative_path))
                return findings
            if ext in STYLE_EXTENSIONS:
                return self._scan_stylesheet(content, file_path, relative_path)
            return []
        except Exception as e:
            return [_analysis_error(file_path, relative_path, e)]

    def scan_path(self, path: Path, root: Path) -> List[Finding]:
        try:
            relative_path = path.relative_to(root).as_posix()
        except ValueError:
            relative_path = path.as_posix()
        try:
            content = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            return [_analysis_error(str(path), relative_path, e)]
        return self.scan_file(content, str(path), relative_path)

    # --- sub-scans ---
    def _scan_code(self, content: str, file_path: str, relative_path: str) -> List[Finding]:
        findings: List[Finding] = []
        findings.extend(_find_unused_imports(content, file_path, relative_path))
        findings.extend(_find_unused_functions(content, file_path, relative_path))
        findings.extend(_find_unused_variables(content, file_path, relative_path))
        return findings

    def _scan_components(self, content: str, file_path: str, relative_path: str) -> List[Finding]:
        findings: List[Finding] = []
        for m in P.find_all(P.COMPONENT_RE, content):
            name = m.group(1)
            if _is_component_used(name, content):
                continue
            findings.append(
                _finding(
                    UNUSED_COMPONENT,
                    file_path,
                    relative_path,
                    P.line_of(content, m.start(1)),
                    name,
                    f"React component '{name}' appears to be unused",
                    MEDIUM,
                )
            )
        return findings

    def _scan_stylesheet(self, content: str, file_path: str, relative_path: str) -> List[Finding]:
        findings: List[Finding] = []
        if self.css_index is None:
            # no markup/script index to check against: every selector counts as used
            return findings
        for pattern, label, used in (
            (P.CSS_CLASS_RE, "CSS class", self.css_index.uses_class),
            (P.CSS_ID_RE, "CSS ID", self.css_index.uses_id),
        ):
            for m in P.find_all(pattern, content):
                name = m.group(1)
                if used(name):
                    continue
                findings.append(
                    Finding(
                        kind=UNUSED_VARIABLE,
                        file_path=file_path,
                        relative_path=relative_path,
                        line=P.line_of(content, m.start()),
                        column=P.column_of(content, m.start()),
                        name=name,
                        description=f"{label} '{name}' appears to be unused",
                        confidence=MEDIUM,
                        category=DEAD_CODE,
                    )
                )
        return findings


def scan_file(content: str, file_path: str, relative_path: str) -> List[Finding]:
    """Scan one file's text; never raises."""
    return Scanner().scan_file(content, file_path, relative_path)


def _find_unused_imports(content: str, file_path: str, relative_path: str) -> List[Finding]:
    findings: List[Finding] = []
    without_imports = P.IMPORT_LINE_RE.sub("", content)
    for m in P.find_all(P.IMPORT_RE, content):
        line = P.line_of(content, m.start())
        module = m.group(4)
        for name, form in P.import_bindings(m):
            if _is_import_used(name, without_imports):
                continue
            findings.append(
                _finding(
                    UNUSED_IMPORT,
                    file_path,
                    relative_path,
                    line,
                    name,
                    f"Unused {form} import '{name}' from '{module}'",
                    HIGH,
                )
            )
    return findings


def _find_unused_functions(content: str, file_path: str, relative_path: str) -> List[Finding]:
    findings: List[Finding] = []
    for pattern, label in ((P.FUNCTION_RE, "Function"), (P.ARROW_FUNCTION_RE, "Arrow function")):
        for m in P.find_all(pattern, content):
            name = m.group(1)
            if _is_function_used(name, content):
                continue
            findings.append(
                _finding(
                    UNUSED_FUNCTION,
                    file_path,
                    relative_path,
                    P.line_of(content, m.start(1)),
                    name,
                    f"{label} '{name}' appears to be unused",
                    MEDIUM,
                )
            )
    return findings


def _find_unused_variables(content: str, file_path: str, relative_path: str) -> List[Finding]:
    findings: List[Finding] = []
    for m in P.find_all(P.VARIABLE_RE, content):
        name = m.group(1)
        if _is_variable_used(name, content):
            continue
        findings.append(
            _finding(
                UNUSED_VARIABLE,
                file_path,
                relative_path,
                P.line_of(content, m.start(1)),
                name,
                f"Variable '{name}' appears to be unused",
                MEDIUM,
            )
        )
    return findings


# --- usage checks ---
def _is_import_used(name: str, without_imports: str) -> bool:
    name = name.strip()
    if not name:
        return True
    return P.word_pattern(name).search(without_imports) is not None


def _is_exported(name: str, content: str) -> bool:
    # plain text co-occurrence: "helper" counts as exported next to "helperList"
    return any(name in m.group(0) for m in P.find_all(P.EXPORT_STATEMENT_RE, content))


def _is_function_used(name: str, content: str) -> bool:
    name = name.strip()
    if not name:
        return True
    if _is_exported(name, content):
        return True
    masked = P.function_header_pattern(name).sub("", content)
    masked = P.binding_header_pattern(name).sub("", masked)
    return P.call_pattern(name).search(masked) is not None


def _is_variable_used(name: str, content: str) -> bool:
    name = name.strip()
    if not name:
        return True
    if _is_exported(name, content):
        return True
    masked = P.variable_declaration_pattern(name).sub("", content)
    return P.word_pattern(name).search(masked) is not None


def _is_component_used(name: str, content: str) -> bool:
    name = name.strip()
    if not name:
        return True
    if _is_exported(name, content):
        return True
    if P.jsx_tag_pattern(name).search(content):
        return True
    masked = P.component_header_pattern(name).sub("", content)
    return P.word_pattern(name).search(masked) is not None


def _finding(
    kind: str,
    file_path: str,
    relative_path: str,
    line: int,
    name: str,
    description: str,
    confidence: str,
) -> Finding:
    return Finding(
        kind=kind,
        file_path=file_path,
        relative_path=relative_path,
        line=line,
        column=1,
        name=name,
        description=description,
        confidence=confidence,
        category=DEAD_CODE,
    )


def _analysis_error(file_path: str, relative_path: str, error: BaseException) -> Finding:
    return Finding(
        kind=UNUSED_VARIABLE,
        file_path=file_path,
        relative_path=relative_path,
        line=1,
        column=1,
        name=ANALYSIS_ERROR_NAME,
        description=f"Failed to analyze file: {error}",
        confidence=LOW,
        category=DEAD_CODE,
    )
