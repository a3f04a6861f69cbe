"""Evaluate the forcing calculator for a single set of inputs.

Usage
-----
```bash
python scripts/run_calculator.py --reset
python scripts/run_calculator.py --co2 450 --renewables 70 --waste 40 --out results/manual
```

Inputs not given on the command line fall back to ``calculator.defaults`` in
``config.yaml`` (or the built-in reset values when no config exists). The script
logs the headline numbers, the insights and the air-quality category; with
``--out`` it also writes the breakdown CSV, insights text and a bar chart.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from _path_setup import ROOT

from calculator import baseline_from_config, defaults_from_config, evaluate
from config_paths import get_config_path, load_config
from forcing_model import RESET_DEFAULTS, ConcentrationMustBePositive, InputSet
from results_summary import SummarySettings, format_display, write_outputs

LOGGER = logging.getLogger("run_calculator")

INPUT_FLAGS: dict[str, tuple[str, str]] = {
    "co2": ("--co2", "CO₂ concentration (ppm)"),
    "ch4": ("--ch4", "CH₄ concentration (ppb)"),
    "n2o": ("--n2o", "N₂O concentration (ppb)"),
    "renewable_share": ("--renewables", "Renewable share of energy (0-100 %)"),
    "waste_reduction": ("--waste", "Waste reduction (0-100 %)"),
    "deforestation": ("--deforestation", "Deforestation intensity (unitless, >= 0)"),
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Estimate forcing, warming and sea-level rise.")
    for field, (flag, help_text) in INPUT_FLAGS.items():
        parser.add_argument(flag, dest=field, type=float, default=None, help=help_text)
    parser.add_argument(
        "--reset",
        action="store_true",
        help="Ignore config defaults and use the built-in reset values.",
    )
    parser.add_argument("--config", type=Path, default=None, help="Path to config.yaml")
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Directory for the breakdown CSV, insights and chart (nothing written if omitted).",
    )
    parser.add_argument("--no-plots", action="store_true", help="Skip the bar chart with --out.")
    return parser


def _load_calculator_section(config_path: Path) -> dict:
    if not config_path.exists():
        LOGGER.info("No config at %s; using built-in defaults", config_path)
        return {}
    return load_config(config_path).get("calculator") or {}


def main(argv: list[str] | None = None) -> int:
    args = _build_parser().parse_args(argv)
    config_path = args.config or get_config_path(ROOT / "config.yaml")

    try:
        calc_cfg = {} if args.reset else _load_calculator_section(config_path)
        defaults = dict(RESET_DEFAULTS) if args.reset else defaults_from_config(calc_cfg)
        baseline = baseline_from_config(calc_cfg)
        overrides = {
            field: getattr(args, field)
            for field in INPUT_FLAGS
            if getattr(args, field) is not None
        }
        inputs = InputSet.from_mapping(overrides, defaults=defaults)
        output = evaluate(inputs, baseline)
    except (ConcentrationMustBePositive, KeyError, TypeError, ValueError) as exc:
        LOGGER.error("Unable to evaluate calculator: %s", exc)
        return 1

    display = format_display(output.result)
    LOGGER.info(
        "Forcing %s W/m² | ΔT %s °C | sea-level rise %s m",
        display["total_forcing"],
        display["delta_t"],
        display["sea_level_rise"],
    )
    LOGGER.info("Breakdown (W/m²):\n%s", output.result.to_frame().to_string(index=False))
    LOGGER.info("Air quality: %s (level %d)", output.air_quality.label, output.air_quality.level)
    for line in output.insights:
        LOGGER.info("  %s", line)

    if args.out is not None:
        out_dir = args.out if args.out.is_absolute() else (ROOT / args.out)
        settings = SummarySettings(output_directory=out_dir, include_plots=not args.no_plots)
        write_outputs("manual", output.result, output.insights, output.air_quality, settings)
    return 0


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(name)s: %(message)s")
    sys.exit(main())
