import pytest

from codesweep import patterns as P


def _bindings(stmt: str):
    m = P.IMPORT_RE.search(stmt)
    assert m is not None, stmt
    return P.import_bindings(m), m.group(4)


@pytest.mark.parametrize(
    "stmt, bindings, module",
    [
        ("import React from 'react';", [("React", "default")], "react"),
        ("import { a, b } from \"./m\";", [("a", "named"), ("b", "named")], "./m"),
        ("import * as utils from './utils';", [("utils", "namespace")], "./utils"),
        (
            "import React, { useState, type Props, a as b } from 'react';",
            [("React", "default"), ("useState", "named"), ("Props", "named"), ("b", "named")],
            "react",
        ),
        ("import def, * as ns from 'pkg';", [("def", "default"), ("ns", "namespace")], "pkg"),
        ("import type { Config } from './types';", [("Config", "named")], "./types"),
        ("import {a,} from 'm'", [("a", "named")], "m"),
        ("import { a, // note\n b } from 'm';", [("a", "named"), ("b", "named")], "m"),
        ("import { a /* old */, c } from 'm';", [("a", "named"), ("c", "named")], "m"),
    ],
)
def test_import_forms(stmt, bindings, module):
    assert _bindings(stmt) == (bindings, module)


def test_side_effect_import_is_not_an_import_binding():
    assert P.IMPORT_RE.search("import './polyfills';") is None


def test_find_all_restarts_on_each_call():
    text = "function a() {}\nfunction b() {}\n"
    first = [m.group(1) for m in P.find_all(P.FUNCTION_RE, text)]
    second = [m.group(1) for m in P.find_all(P.FUNCTION_RE, text)]
    assert first == second == ["a", "b"]


def test_line_and_column():
    text = "one\ntwo\n  three"
    offset = text.index("three")
    assert P.line_of(text, offset) == 3
    assert P.column_of(text, offset) == 3
    assert P.line_of(text, 0) == 1
    assert P.column_of(text, 0) == 1


def test_word_pattern_treats_dollar_as_identifier():
    w = P.word_pattern("$el")
    assert w.search("$el.hide()")
    assert w.search("const a$el = 1") is None
    assert P.word_pattern("foo").search("foobar()") is None


def test_call_pattern_requires_parenthesis():
    c = P.call_pattern("run")
    assert c.search("run ()")
    assert c.search("const x = run;") is None
    assert c.search("rerun()") is None


def test_variable_pattern_skips_function_initializers():
    text = (
        "const a = 1;\n"
        "const f = function () {};\n"
        "const g = (x) => x;\n"
        "const h = async y => y;\n"
        "let same = a == 1;\n"
    )
    assert [m.group(1) for m in P.find_all(P.VARIABLE_RE, text)] == ["a", "same"]
    assert [m.group(1) for m in P.find_all(P.ARROW_FUNCTION_RE, text)] == ["g", "h"]


def test_export_statements():
    text = "export { a, b as c };\nexports.d = d;\nmodule.exports = { e };\nconst notexport = 1;\n"
    found = [m.group(0) for m in P.find_all(P.EXPORT_STATEMENT_RE, text)]
    assert found == ["export { a, b as c }", "exports.d = d", "module.exports = { e }"]


def test_jsx_tag_pattern():
    t = P.jsx_tag_pattern("Card")
    assert t.search("<Card />")
    assert t.search("<Card>")
    assert t.search("<CardList />") is None
