"""
Regex patterns for declaration extraction and usage checks.

Compiled ``re`` patterns keep no cursor between calls, so every scan through
``find_all`` starts from the top of the text it is given.
"""
from __future__ import annotations

import re
from typing import Iterator, List, Pattern, Tuple

IDENT = r"[a-zA-Z_$][a-zA-Z0-9_$]*"
# optional TypeScript annotation between a binding name and '='
TYPE_ANN = r"(?:\s*:[^=;\n]+)?"
GENERICS = r"(?:\s*<[^>(]*>)?"
_COMMENT_RE = re.compile(r"//[^\n]*|/\*.*?\*/", re.S)

# import X from 'm' | import {A, B} from 'm' | import * as N from 'm'
# and the combined "X, {A}" / "X, * as N" forms
IMPORT_RE = re.compile(
    r"import\s+(?:type\s+)?"
    r"(?:(" + IDENT + r")\s*(?:,\s*)?)?"
    r"(?:\{([^}]*)\}|\*\s+as\s+([^\s]+))?"
    r"\s*from\s*['\"]([^'\"]+)['\"]",
    re.M,
)
IMPORT_LINE_RE = re.compile(r"^import.*$", re.M)

FUNCTION_RE = re.compile(r"(?:^|\s)function\s+(" + IDENT + r")" + GENERICS + r"\s*\(", re.M)
ARROW_FUNCTION_RE = re.compile(
    r"(?:^|\s)(?:const|let|var)\s+(" + IDENT + r")" + TYPE_ANN + r"\s*=\s*(?:async\s+)?"
    r"(?:\([^)]*\)|" + IDENT + r")\s*=>",
    re.M,
)
# bindings whose initializer is a function are left to FUNCTION_RE / ARROW_FUNCTION_RE
VARIABLE_RE = re.compile(
    r"(?:^|\s)(?:const|let|var)\s+(" + IDENT + r")" + TYPE_ANN + r"\s*=(?![=>])"
    r"(?!\s*(?:async\s+)?(?:function\b|\([^)]*\)\s*=>|" + IDENT + r"\s*=>))",
    re.M,
)
COMPONENT_RE = re.compile(r"(?:^|\s)(?:function\s+|const\s+)([A-Z][a-zA-Z0-9_$]*)\s*(?:\(|=)", re.M)

# ES module exports plus CommonJS exports.x / module.exports
EXPORT_STATEMENT_RE = re.compile(
    r"(?<![\w$.])(?:export\b(?:\s*\{[^}]*\}|[^\n;]*)"
    r"|(?:module\.)?exports\b(?:\s*=\s*\{[^}]*\}|[^\n;]*))",
    re.M,
)

CSS_CLASS_RE = re.compile(r"\.([a-zA-Z_-][a-zA-Z0-9_-]*)\s*\{", re.M)
CSS_ID_RE = re.compile(r"#([a-zA-Z_-][a-zA-Z0-9_-]*)\s*\{", re.M)


def find_all(pattern: Pattern[str], text: str) -> Iterator[re.Match[str]]:
    """Yield every match of ``pattern`` in ``text`` from the start."""
    yield from pattern.finditer(text)


def line_of(text: str, offset: int) -> int:
    return text.count("\n", 0, offset) + 1


def column_of(text: str, offset: int) -> int:
    return offset - (text.rfind("\n", 0, offset) + 1) + 1


def word_pattern(name: str) -> Pattern[str]:
    # identifier boundaries; '$' counts as an identifier character
    return re.compile(r"(?<![\w$])" + re.escape(name) + r"(?![\w$])")


def call_pattern(name: str) -> Pattern[str]:
    return re.compile(r"(?<![\w$])" + re.escape(name) + r"\s*\(")


def jsx_tag_pattern(name: str) -> Pattern[str]:
    return re.compile("<" + re.escape(name) + r"[\s>/<]")


def function_header_pattern(name: str) -> Pattern[str]:
    return re.compile(
        r"(?:^|\s)function\s+" + re.escape(name) + GENERICS + r"\s*\([^{]*\{", re.M
    )


def binding_header_pattern(name: str) -> Pattern[str]:
    return re.compile(
        r"(?:^|\s)(?:const|let|var)\s+" + re.escape(name) + TYPE_ANN + r"\s*=", re.M
    )


def variable_declaration_pattern(name: str) -> Pattern[str]:
    # header through the end of the statement (first ';' or newline)
    return re.compile(
        r"(?:^|\s)(?:const|let|var)\s+" + re.escape(name) + TYPE_ANN + r"\s*=.*?[;\n]",
        re.M,
    )


def component_header_pattern(name: str) -> Pattern[str]:
    return re.compile(r"(?:^|\s)(?:function\s+|const\s+)" + re.escape(name) + r"\s*", re.M)


def import_bindings(match: re.Match[str]) -> List[Tuple[str, str]]:
    """Return ``(local_name, form)`` pairs bound by one IMPORT_RE match.

    ``form`` is ``"named"``, ``"default"`` or ``"namespace"``. Named entries
    written as ``A as B`` bind ``B``; a leading ``type`` modifier is dropped.
    """
    bindings: List[Tuple[str, str]] = []
    default, named, namespace = match.group(1), match.group(2), match.group(3)
    if default:
        bindings.append((default, "default"))
    if named:
        named = _COMMENT_RE.sub("", named)
        for entry in named.split(","):
            entry = " ".join(entry.split())
            if entry.startswith("type "):
                entry = entry[len("type "):]
            if " as " in entry:
                entry = entry.rsplit(" as ", 1)[1]
            if entry:
                bindings.append((entry, "named"))
    if namespace:
        bindings.append((namespace, "namespace"))
    return bindings
