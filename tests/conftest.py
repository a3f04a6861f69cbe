"""Ensure the project packages are importable during tests without installation."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

src_path = str(SRC)
if src_path not in sys.path:
    sys.path.insert(0, src_path)

scripts_path = str(ROOT / "scripts")
if scripts_path not in sys.path:
    sys.path.insert(0, scripts_path)


@pytest.fixture
def reset_inputs():
    from forcing_model import default_inputs

    return default_inputs()


@pytest.fixture(autouse=True)
def _isolate_config_env(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.delenv("GHG_CALCULATOR_CONFIG_PATH", raising=False)
