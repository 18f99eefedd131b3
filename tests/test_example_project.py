import shutil

from codesweep.config_loader import SweepConfig
from codesweep.findings import RemovalOptions
from codesweep.remover import remove_dead_code
from codesweep.session import run_scan


def _by_file(session):
    out = {}
    for f in session.findings:
        out.setdefault(f.relative_path, set()).add((f.kind, f.name, f.line))
    return out


def test_scan_example_project(example_project):
    session = run_scan(example_project, log=lambda s: None)
    assert session.files_scanned == 4
    found = _by_file(session)
    assert found == {
        "src/utils.js": {
            ("unused-import", "unusedHelper", 2),
            ("unused-function", "legacyDiscount", 8),
            ("unused-variable", "unusedLabel", 13),
        },
        "src/components/App.jsx": {
            ("unused-component", "OldBanner", 8),
            ("unused-import", "React", 1),
            ("unused-function", "OldBanner", 8),
            ("unused-function", "PriceTag", 4),
        },
    }


def test_scan_example_project_with_css(example_project):
    cfg = SweepConfig()
    cfg.scan.css = True
    cfg.scan.css_cross_file = True
    session = run_scan(example_project, cfg, log=lambda s: None)
    css = _by_file(session)["src/styles.css"]
    assert css == {("unused-variable", "legacy-card", 5)}


def test_remove_everything_in_copy(example_project, tmp_path):
    root = tmp_path / "proj"
    shutil.copytree(example_project, root)
    session = run_scan(root, log=lambda s: None)
    result = remove_dead_code(session.findings, RemovalOptions(), log=lambda s: None)

    utils = (root / "src" / "utils.js").read_text(encoding="utf-8")
    for gone in ("unusedHelper", "legacyDiscount", "unusedLabel"):
        assert gone not in utils
    assert "export function formatPrice" in utils
    assert "const TAX_RATE = 0.2;" in utils

    app = (root / "src" / "components" / "App.jsx").read_text(encoding="utf-8")
    assert "OldBanner" not in app
    assert app.startswith("import React, { useState } from 'react';")
    assert result.errors == ["React: Import statement also binds useState"]
    assert result.removed_count == 6
    assert sorted(result.modified_files) == sorted(
        [str(root.resolve() / "src" / "utils.js"), str(root.resolve() / "src" / "components" / "App.jsx")]
    )
    # the original fixture is untouched
    assert "legacyDiscount" in (example_project / "src" / "utils.js").read_text(encoding="utf-8")
