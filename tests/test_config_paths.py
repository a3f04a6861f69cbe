from pathlib import Path

import pytest

from config_paths import (
    CONFIG_ENV_VAR,
    apply_results_run_directory,
    get_config_path,
    get_results_run_directory,
    load_config,
    resolve_output_directory,
    sanitize_run_directory,
)


def test_get_config_path_honours_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    override = tmp_path / "custom.yaml"
    monkeypatch.setenv(CONFIG_ENV_VAR, str(override))
    assert get_config_path() == override.resolve()


def test_get_config_path_uses_default_when_unset(tmp_path: Path):
    default = tmp_path / "config.yaml"
    assert get_config_path(default) == default.resolve()


def test_load_config_reads_yaml_and_validates(tmp_path: Path):
    path = tmp_path / "config.yaml"
    path.write_text("calculator:\n  defaults:\n    co2: 400\n", encoding="utf-8")
    assert load_config(path) == {"calculator": {"defaults": {"co2": 400}}}

    with pytest.raises(FileNotFoundError):
        load_config(tmp_path / "missing.yaml")

    path.write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(path)


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (None, None),
        ("  ", None),
        ("run_a", "run_a"),
        ("../escape/./me", "escape/me"),
        ("..", None),
    ],
)
def test_sanitize_run_directory(raw, expected):
    assert sanitize_run_directory(raw) == expected


def test_sanitize_run_directory_rejects_absolute_paths(tmp_path: Path):
    with pytest.raises(ValueError):
        sanitize_run_directory(str(tmp_path))


def test_run_directory_is_inserted_under_results(tmp_path: Path):
    root = tmp_path.resolve()
    config = {"results": {"run_directory": "trial"}}
    assert get_results_run_directory(config) == "trial"

    path = apply_results_run_directory(Path("results/calculator"), "trial", repo_root=root)
    assert path == root / "results" / "trial" / "calculator"

    untouched = apply_results_run_directory(Path("plots/x"), "trial", repo_root=root)
    assert untouched == root / "plots" / "x"

    resolved = resolve_output_directory(config, None, root=root)
    assert resolved == root / "results" / "trial" / "calculator"


def test_run_directory_leaves_paths_outside_repo_alone(tmp_path: Path):
    root = (tmp_path / "repo").resolve()
    elsewhere = (tmp_path / "elsewhere" / "results" / "calculator").resolve()
    assert apply_results_run_directory(elsewhere, "trial", repo_root=root) == elsewhere
    assert apply_results_run_directory(Path("results/calculator"), None, repo_root=root) == Path("results/calculator")

    nested = get_results_run_directory({"results": {"run_directory": "2025/./batch"}})
    assert nested == "2025/batch"
    assert apply_results_run_directory(Path("results"), nested, repo_root=root) == root / "results" / "2025" / "batch"
