"""Load RoutesConfig from project files.

Sources, lowest precedence first: ``[tool.fileroutes]`` in pyproject.toml,
fileroutes.toml, fileroutes.yaml / fileroutes.yml, then keyword overrides.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import yaml

from fileroutes._errors import ConfigError
from fileroutes.config import RoutesConfig

_KNOWN_KEYS = frozenset({
    "routes_dir",
    "output",
    "write",
    "verbose",
    "externals",
    "annotate",
    "debounce_ms",
})

# Alternate option names accepted in config files
_ALIASES = {
    "dir": "routes_dir",
    "typescript": "annotate",
}


def load_config(root: Path, **overrides: object) -> RoutesConfig:
    """Load RoutesConfig for *root*, merging any config files found there.

    Overrides whose value is ``None`` are ignored so CLI defaults don't mask
    file settings.

    Raises:
        ConfigError: If a config file exists but cannot be parsed.

    """
    merged = _read_file_config(root)
    merged.update(_normalize({k: v for k, v in overrides.items() if v is not None}))

    if "output" in merged and not isinstance(merged["output"], Path):
        merged["output"] = Path(str(merged["output"]))
    if "externals" in merged:
        externals = merged["externals"]
        if isinstance(externals, str):
            externals = [externals]
        merged["externals"] = tuple(str(e) for e in externals)  # type: ignore[union-attr]

    return RoutesConfig(root=root, **merged)  # type: ignore[arg-type]


def _read_file_config(root: Path) -> dict[str, object]:
    result: dict[str, object] = {}

    pyproject = root / "pyproject.toml"
    if pyproject.is_file():
        tool = _parse_toml(pyproject).get("tool")
        if isinstance(tool, dict) and isinstance(tool.get("fileroutes"), dict):
            result.update(_normalize(tool["fileroutes"]))

    toml_path = root / "fileroutes.toml"
    if toml_path.is_file():
        result.update(_flatten_section(_parse_toml(toml_path)))

    for name in ("fileroutes.yaml", "fileroutes.yml"):
        path = root / name
        if path.is_file():
            result.update(_flatten_section(_parse_yaml(path)))
            break

    return result


def _parse_yaml(path: Path) -> dict[str, object]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        msg = f"Invalid YAML in {path}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path} must contain a mapping, got {type(data).__name__}"
        raise ConfigError(msg)
    return data


def _parse_toml(path: Path) -> dict[str, object]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {path}: {exc}"
        raise ConfigError(msg) from exc


def _flatten_section(data: dict[str, object]) -> dict[str, object]:
    """Accept both a top-level mapping and a ``fileroutes:`` section."""
    result = _normalize(data)
    section = data.get("fileroutes")
    if isinstance(section, dict):
        result.update(_normalize(section))
    return result


def _normalize(data: dict[str, object]) -> dict[str, object]:
    result: dict[str, object] = {}
    for key, value in data.items():
        key = _ALIASES.get(key, key)
        if key in _KNOWN_KEYS:
            result[key] = value
    return result
