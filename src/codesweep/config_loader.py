"""
Configuration loader - YAML (codesweep.yaml) or [tool.codesweep] in pyproject.toml
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

try:
    import yaml
except ImportError:
    yaml = None

try:  # py3.11+
    import tomllib as tomli
except ImportError:
    try:
        import tomli
    except ImportError:
        tomli = None

from .collector import DEFAULT_EXTENSIONS, DEFAULT_IGNORED_DIRS, STYLE_EXTENSIONS
from .findings import RemovalOptions

CONFIG_FILENAMES = [
    "codesweep.yaml",
    "codesweep.yml",
    ".codesweep.yaml",
    ".codesweep.yml",
    "pyproject.toml",  # only with [tool.codesweep]
]


@dataclass
class ScanConfig:
    """Scanner switches"""
    # scan .css/.scss/.sass/.less files as well
    css: bool = False
    # check selectors against class/id usage collected from markup and script files;
    # without it every selector counts as used
    css_cross_file: bool = False


@dataclass
class RemovalConfig:
    """Removal defaults"""
    create_backups: bool = True
    confirm_each_file: bool = False
    only_high_confidence: bool = True

    def to_options(self, dry_run: bool = False) -> RemovalOptions:
        return RemovalOptions(
            create_backup=self.create_backups,
            confirm_each=self.confirm_each_file,
            only_high_confidence=self.only_high_confidence,
            dry_run=dry_run,
        )


@dataclass
class SweepConfig:
    paths: List[str] = field(default_factory=lambda: ["."])
    include: List[str] = field(default_factory=list)
    exclude: List[str] = field(default_factory=list)
    extensions: List[str] = field(default_factory=lambda: list(DEFAULT_EXTENSIONS))
    ignored_dirs: List[str] = field(default_factory=lambda: list(DEFAULT_IGNORED_DIRS))
    output: str = ".codesweep"
    scan: ScanConfig = field(default_factory=ScanConfig)
    removal: RemovalConfig = field(default_factory=RemovalConfig)

    def effective_extensions(self) -> List[str]:
        exts = list(self.extensions)
        if self.scan.css:
            exts.extend(e for e in STYLE_EXTENSIONS if e not in exts)
        return exts


def load_config(
    config_path: Optional[Path] = None,
    cwd: Optional[Path] = None,
    log: Callable[[str], None] = print,
) -> SweepConfig:
    """
    Load configuration

    Args:
        config_path: explicit config file; when None the working directory is searched
        cwd: directory to search (defaults to the process working directory)
        log: sink for the "found config" notice

    Returns:
        SweepConfig: the loaded configuration, or defaults when nothing is found
    """
    if config_path:
        return _load_config_file(Path(config_path))

    found_config = find_config_file(cwd)
    if found_config:
        log(f"Found config file: {found_config}")
        return _load_config_file(found_config)
    return SweepConfig()


def find_config_file(cwd: Optional[Path] = None) -> Optional[Path]:
    base = Path(cwd) if cwd is not None else Path.cwd()
    for name in CONFIG_FILENAMES:
        candidate = base / name
        if candidate.exists():
            if candidate.name == "pyproject.toml":
                if _has_sweep_config(candidate):
                    return candidate
                continue
            return candidate
    return None


def _load_config_file(config_path: Path) -> SweepConfig:
    if not config_path.exists():
        raise FileNotFoundError(f"Config file does not exist: {config_path}")

    suffix = config_path.suffix.lower()
    if suffix in [".yaml", ".yml"]:
        return _load_yaml_config(config_path)
    elif suffix == ".toml":
        return _load_toml_config(config_path)
    else:
        raise ValueError(f"Unsupported config file format: {suffix}")


def _load_yaml_config(config_path: Path) -> SweepConfig:
    if yaml is None:
        raise ImportError("PyYAML is required to read YAML config files: pip install pyyaml")

    with config_path.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f)

    if not data:
        return SweepConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Config root must be a mapping: {config_path}")
    return _parse_config_data(data)


def _load_toml_config(config_path: Path) -> SweepConfig:
    if tomli is None:
        raise ImportError("tomli is required to read TOML config files: pip install tomli")

    with config_path.open("rb") as f:
        data = tomli.load(f)

    # pyproject.toml keeps the settings under [tool.codesweep]
    if "tool" in data and "codesweep" in data["tool"]:
        config_data = data["tool"]["codesweep"]
    else:
        config_data = data
    return _parse_config_data(config_data)


def _has_sweep_config(pyproject_path: Path) -> bool:
    if tomli is None:
        return False
    try:
        with pyproject_path.open("rb") as f:
            data = tomli.load(f)
    except (OSError, ValueError):
        return False
    return "tool" in data and "codesweep" in data["tool"]


def _parse_config_data(data: Dict[str, Any]) -> SweepConfig:
    config = SweepConfig()

    if "paths" in data:
        config.paths = _str_list(data["paths"], "paths")
    if "include" in data:
        config.include = _str_list(data["include"], "include")
    if "exclude" in data:
        config.exclude = _str_list(data["exclude"], "exclude")
    if "extensions" in data:
        config.extensions = [
            e if e.startswith(".") else f".{e}" for e in _str_list(data["extensions"], "extensions")
        ]
    if "ignored_dirs" in data:
        config.ignored_dirs = _str_list(data["ignored_dirs"], "ignored_dirs")
    if "output" in data:
        config.output = str(data["output"])

    scan = data.get("scan") or {}
    if "css" in scan:
        config.scan.css = bool(scan["css"])
    if "css_cross_file" in scan:
        config.scan.css_cross_file = bool(scan["css_cross_file"])

    removal = data.get("removal") or {}
    if "create_backups" in removal:
        config.removal.create_backups = bool(removal["create_backups"])
    if "confirm_each_file" in removal:
        config.removal.confirm_each_file = bool(removal["confirm_each_file"])
    if "only_high_confidence" in removal:
        config.removal.only_high_confidence = bool(removal["only_high_confidence"])

    return config


def _str_list(value: Any, key: str) -> List[str]:
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list):
        raise ValueError(f"'{key}' must be a list of strings")
    return [str(v) for v in value]


def describe_config(config: SweepConfig) -> str:
    lines = [
        "📋 Effective configuration:",
        "━" * 50,
        f"  📂 Paths: {', '.join(config.paths)}",
        f"  📄 Extensions: {', '.join(config.effective_extensions())}",
        f"  ✅ Include: {', '.join(config.include) or '(all)'}",
        f"  🚫 Exclude: {', '.join(config.exclude) or '(none)'}",
        f"  🙈 Ignored dirs: {', '.join(config.ignored_dirs)}",
        f"  📁 Output: {config.output}",
        f"  🎨 CSS scan: {'on' if config.scan.css else 'off'}"
        f" (cross-file: {'on' if config.scan.css_cross_file else 'off'})",
        "  🧹 Removal:",
        f"    create_backups: {config.removal.create_backups}",
        f"    confirm_each_file: {config.removal.confirm_each_file}",
        f"    only_high_confidence: {config.removal.only_high_confidence}",
        "━" * 50,
    ]
    return "\n".join(lines)


def create_example_config() -> str:
    return """# codesweep configuration
paths:
  - "."
output: ".codesweep"

# file extensions to scan; directories named in ignored_dirs are never entered
extensions: [".js", ".ts", ".mjs", ".jsx", ".tsx"]
ignored_dirs: ["node_modules", ".git", "dist", "build", "out", ".vscode", "coverage", ".nyc_output", "lib", "types"]

# include/exclude globs, relative to each path
include: []
exclude:
  - "**/*.min.js"
  - "vendor/**"

scan:
  css: false             # also scan .css/.scss/.sass/.less
  css_cross_file: false  # report selectors unused by markup/script files

removal:
  create_backups: true        # write <file>.backup.<timestamp> before changing a file
  confirm_each_file: false    # ask before touching each file
  only_high_confidence: true  # unused imports only by default
"""


def save_example_config(output_path: Optional[Path] = None, force: bool = False) -> Path:
    if output_path is None:
        output_path = Path("codesweep.yaml")
    if output_path.exists() and not force:
        raise FileExistsError(f"Config file already exists: {output_path}")
    output_path.write_text(create_example_config(), encoding="utf-8")
    return output_path
