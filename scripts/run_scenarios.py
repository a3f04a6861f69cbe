"""Run every calculator scenario and sweep defined in ``config.yaml``.

Usage
-----
```bash
python scripts/run_scenarios.py
python scripts/run_scenarios.py --run-directory policy_check
```

Outputs land in ``calculator.output_directory`` (default ``results/calculator``),
inside ``results/<run_directory>/`` when a run directory is configured:

- ``summary.csv`` – one row per scenario (metrics, breakdown, inputs, air quality);
- ``<scenario>/forcing_breakdown.csv``, ``insights.txt``, ``display.csv`` and
  ``forcing_contributions.png``;
- ``sweeps/<name>.csv`` and ``sweeps/<name>.png`` for each configured sweep.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from _path_setup import ROOT

from calculator import run_from_config
from config_paths import get_config_path
from forcing_model import ConcentrationMustBePositive

LOGGER = logging.getLogger("run_scenarios")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Evaluate the scenarios listed in config.yaml.")
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument(
        "--run-directory",
        "--run-subdir",
        dest="run_directory",
        default=None,
        help="Override results.run_directory to target a specific run.",
    )
    args = parser.parse_args(argv)

    config_path = args.config or get_config_path(ROOT / "config.yaml")
    try:
        outputs = run_from_config(config_path, results_run_directory=args.run_directory)
    except FileNotFoundError as exc:
        LOGGER.error(str(exc))
        return 1
    except (ConcentrationMustBePositive, KeyError, TypeError, ValueError) as exc:
        LOGGER.error("Unable to run scenarios: %s", exc)
        return 1

    for label, output in outputs.items():
        result = output.result
        LOGGER.info(
            "%-20s forcing %.2f W/m² | ΔT %.2f °C | SLR %.2f m | air quality %s",
            label,
            result.total_forcing,
            result.delta_t,
            result.sea_level_rise,
            output.air_quality.label,
        )
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")
    sys.exit(main())
