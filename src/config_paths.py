"""Helpers to resolve configuration paths with optional run-specific results subdirectories."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Mapping

import yaml

REPO_ROOT = Path(__file__).resolve().parents[1]

CONFIG_ENV_VAR = "GHG_CALCULATOR_CONFIG_PATH"


def get_config_path(default: Path | None = None) -> Path:
    """Return the configuration path, honouring GHG_CALCULATOR_CONFIG_PATH when set."""

    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser().resolve()
    if default is not None:
        return default.resolve()
    return (REPO_ROOT / "config.yaml").resolve()


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load YAML config into a dict."""

    config_file = Path(config_path).expanduser().resolve() if config_path else get_config_path()
    if not config_file.is_file():
        raise FileNotFoundError(f"Config file not found: {config_file}")
    with config_file.open("r", encoding="utf-8") as handle:
        config = yaml.safe_load(handle) or {}
    if not isinstance(config, dict):
        raise ValueError(f"Config file {config_file} must contain a mapping at the top level.")
    return config


def sanitize_run_directory(value: str | None) -> str | None:
    """Clean a run-directory name so the result stays below ``results/``.

    Blank values collapse to ``None``; ``.`` and ``..`` segments are dropped and
    absolute paths are refused.
    """

    if value is None or not value.strip():
        return None
    path = Path(value.strip())
    if path.is_absolute():
        raise ValueError("results.run_directory must be a relative path.")
    kept = [part for part in path.parts if part not in (".", "..")]
    return "/".join(kept) or None


def get_results_run_directory(config: Mapping[str, object] | None) -> str | None:
    """Sanitised ``results.run_directory`` from the root config, if any."""

    results_cfg = config.get("results") if isinstance(config, Mapping) else None
    if not isinstance(results_cfg, Mapping):
        return None
    raw_value = results_cfg.get("run_directory")
    return None if raw_value is None else sanitize_run_directory(str(raw_value))


def apply_results_run_directory(
    path: Path,
    run_directory: str | None,
    *,
    repo_root: Path | None = None,
) -> Path:
    """Rewrite ``results/<rest>`` as ``results/<run_directory>/<rest>``.

    Paths outside ``<repo_root>/results`` come back absolute but otherwise unchanged.
    """

    if not run_directory:
        return path
    root = repo_root or REPO_ROOT
    absolute = path if path.is_absolute() else root / path
    try:
        rel = absolute.relative_to(root / "results")
    except ValueError:
        return absolute
    return (root / "results" / run_directory / rel).resolve()


def resolve_output_directory(
    config: Mapping[str, object],
    configured: str | Path | None,
    *,
    root: Path,
    default: str = "results/calculator",
) -> Path:
    """Absolute output directory for ``configured`` with the run directory applied."""

    root = root.resolve()
    output_dir = Path(configured or default)
    if not output_dir.is_absolute():
        output_dir = (root / output_dir).resolve()
    return apply_results_run_directory(
        output_dir,
        get_results_run_directory(config),
        repo_root=root,
    )
