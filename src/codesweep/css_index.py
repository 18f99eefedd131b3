"""
Cross-file usage index for CSS selectors.

Collects class and id tokens referenced from markup and script files so the
stylesheet scan can tell which ``.class {`` / ``#id {`` rules are referenced
anywhere. Opt-in: without an index the scanner reports every selector as used.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Set

from .patterns import find_all

MARKUP_EXTENSIONS = {".html", ".htm", ".js", ".jsx", ".ts", ".tsx", ".mjs", ".vue", ".svelte"}

_CLASS_ATTR_RE = re.compile(r"\bclass(?:Name)?\s*=\s*[{]?\s*[\"'`]([^\"'`]*)[\"'`]")
_ID_ATTR_RE = re.compile(r"\bid\s*=\s*[{]?\s*[\"'`]([^\"'`]*)[\"'`]")
_GET_BY_ID_RE = re.compile(r"getElementById\s*\(\s*[\"'`]([^\"'`]+)[\"'`]")
_CLASS_LIST_RE = re.compile(r"classList\.(?:add|remove|toggle|contains|replace)\s*\(([^)]*)\)")
_SELECTOR_CALL_RE = re.compile(
    r"(?:querySelector(?:All)?|closest|matches|\$)\s*\(\s*[\"'`]([^\"'`]+)[\"'`]"
)
_STRING_RE = re.compile(r"[\"'`]([^\"'`]*)[\"'`]")
_SELECTOR_TOKEN_RE = re.compile(r"([.#])([a-zA-Z_-][a-zA-Z0-9_-]*)")


@dataclass
class CssUsageIndex:
    classes: Set[str] = field(default_factory=set)
    ids: Set[str] = field(default_factory=set)

    def uses_class(self, name: str) -> bool:
        return name in self.classes

    def uses_id(self, name: str) -> bool:
        return name in self.ids

    def add_text(self, text: str) -> None:
        for m in find_all(_CLASS_ATTR_RE, text):
            self.classes.update(m.group(1).split())
        for m in find_all(_ID_ATTR_RE, text):
            self.ids.update(m.group(1).split())
        for m in find_all(_GET_BY_ID_RE, text):
            self.ids.add(m.group(1).strip())
        for m in find_all(_CLASS_LIST_RE, text):
            for s in find_all(_STRING_RE, m.group(1)):
                self.classes.update(s.group(1).split())
        for m in find_all(_SELECTOR_CALL_RE, text):
            for tok in find_all(_SELECTOR_TOKEN_RE, m.group(1)):
                (self.classes if tok.group(1) == "." else self.ids).add(tok.group(2))


def build_css_usage_index(files: Iterable[Path]) -> CssUsageIndex:
    index = CssUsageIndex()
    for path in files:
        if path.suffix.lower() not in MARKUP_EXTENSIONS:
            continue
        try:
            text = path.read_text(encoding="utf-8", errors="ignore")
        except OSError:
            continue
        index.add_text(text)
    return index
