#!/usr/bin/env python3
"""
codesweep CLI

Subcommands:
  - scan:         find probably-unused imports/functions/variables/components
  - remove:       delete the lines behind the last scan's findings
  - init:         write an example codesweep.yaml
  - show-config:  print the effective configuration

``scan`` writes its findings to ``<output>/findings.json``; ``remove`` reads
that file, so the two steps can run in separate processes.
"""
from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .findings import KINDS, UNUSED_ROUTE, Finding


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="codesweep",
        description="Regex-based unused-code finder and remover for JS/TS/JSX sources",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="cmd")

    p_scan = sub.add_parser("scan", help="Scan a project and write findings.json")
    _add_common(p_scan)
    p_scan.add_argument("--output", default=None, help="Override output directory (default from config)")
    p_scan.add_argument("--css", action="store_true", help="Also scan stylesheets (findings need scan.css_cross_file)")

    p_rm = sub.add_parser(
        "remove",
        help="Remove dead code found by the last scan",
        description=(
            "Remove dead code found by the last scan. An import line is only deleted when "
            "every name it binds was reported unused; otherwise the finding is refused with "
            "\"Import statement also binds ...\"."
        ),
    )
    _add_common(p_rm)
    p_rm.add_argument("--session", default=None, help="Path to findings.json (default <output>/findings.json)")
    p_rm.add_argument("--dry-run", action="store_true", help="Compute removals without writing files")
    conf = p_rm.add_mutually_exclusive_group()
    conf.add_argument("--only-high-confidence", dest="high_only", action="store_true", default=None)
    conf.add_argument("--all-confidence", dest="high_only", action="store_false")
    bak = p_rm.add_mutually_exclusive_group()
    bak.add_argument("--backup", dest="backup", action="store_true", default=None)
    bak.add_argument("--no-backup", dest="backup", action="store_false")
    p_rm.add_argument("--confirm-each", action="store_true", default=None, help="Ask before each file")
    p_rm.add_argument(
        "--kind",
        action="append",
        default=[],
        choices=[k for k in KINDS if k != UNUSED_ROUTE],
        help="Only remove findings of this kind (repeatable)",
    )
    p_rm.add_argument("--yes", action="store_true", help="Confirm writing changes (required unless --dry-run)")

    p_init = sub.add_parser("init", help="Write an example codesweep.yaml")
    p_init.add_argument("--path", default=".", help="Directory to write into")
    p_init.add_argument("--force", action="store_true", help="Overwrite an existing codesweep.yaml")

    p_show = sub.add_parser("show-config", help="Print the effective configuration")
    _add_common(p_show)

    args = parser.parse_args(argv)

    if not args.cmd:
        parser.print_help()
        return 0

    if args.cmd == "init":
        return _cmd_init(args)
    if args.cmd == "show-config":
        from .config_loader import describe_config

        print(describe_config(_load(args)))
        return 0
    if args.cmd == "scan":
        return _cmd_scan(args)
    if args.cmd == "remove":
        return _cmd_remove(args)
    return 0


def _add_common(p: argparse.ArgumentParser) -> None:
    p.add_argument("--path", default=".", help="Project root")
    p.add_argument("--config", default=None, help="Config file (YAML or pyproject.toml)")


def _root(args: argparse.Namespace) -> Path:
    root = Path(args.path).resolve()
    if not root.exists() or not root.is_dir():
        raise SystemExit(f"Path does not exist or is not a directory: {root}")
    return root


def _load(args: argparse.Namespace):
    from .config_loader import load_config

    root = _root(args)
    try:
        return load_config(Path(args.config) if args.config else None, cwd=root)
    except (FileNotFoundError, ValueError, ImportError) as e:
        raise SystemExit(f"❌ Failed to load config: {e}")


def _cmd_init(args: argparse.Namespace) -> int:
    from .config_loader import save_example_config

    target = Path(args.path) / "codesweep.yaml"
    try:
        written = save_example_config(target, force=args.force)
    except FileExistsError as e:
        raise SystemExit(f"⚠️  {e} (use --force to overwrite)")
    print(f"✅ Config written: {written}")
    return 0


def _cmd_scan(args: argparse.Namespace) -> int:
    from .report import render_text_report
    from .session import SESSION_FILENAME, run_scan, save_session

    root = _root(args)
    config = _load(args)
    if args.css:
        config.scan.css = True
    out_dir = root / (args.output or config.output)

    session = run_scan(root, config)
    print(render_text_report(session.findings))
    path = save_session(session, out_dir / SESSION_FILENAME)
    print(f"💾 Findings written to {path}")
    return 0


def _cmd_remove(args: argparse.Namespace) -> int:
    from .remover import remove_dead_code
    from .report import render_removal_summary
    from .session import SESSION_FILENAME, filter_findings, load_session

    root = _root(args)
    config = _load(args)
    session_path = Path(args.session) if args.session else root / config.output / SESSION_FILENAME
    try:
        session = load_session(session_path)
    except (FileNotFoundError, ValueError, KeyError) as e:
        raise SystemExit(f"❌ {e}")

    options = config.removal.to_options(dry_run=args.dry_run)
    if args.high_only is not None:
        options.only_high_confidence = args.high_only
    if args.backup is not None:
        options.create_backup = args.backup
    if args.confirm_each is not None:
        options.confirm_each = args.confirm_each
    if not options.dry_run and not args.yes:
        raise SystemExit("Refusing to modify files without --yes (or use --dry-run).")

    findings = filter_findings(session.findings, kinds=args.kind or None)
    result = remove_dead_code(findings, options, confirm=_prompt_file)
    print(render_removal_summary(result, options))
    return 0 if result.success and not result.errors else 1


def _prompt_file(file_path: str, findings: List[Finding]) -> bool:
    rel = findings[0].relative_path if findings else file_path
    print(f"\nRemove {len(findings)} dead code item(s) from {rel}?")
    for f in findings:
        print(f"  • {f.kind}: {f.name} (line {f.line})")
    try:
        answer = input("Proceed? [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in {"y", "yes"}


if __name__ == "__main__":
    sys.exit(main())
