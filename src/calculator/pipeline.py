"""Run the forcing model, insight rules and air-quality gauge as one pipeline.

``evaluate`` is the whole contract between the model and any front end: six
numbers in, one :class:`CalculatorOutput` out. Nothing is cached between calls.
``run_from_config`` evaluates the scenarios and sweeps listed in ``config.yaml``
and hands the results to :mod:`results_summary`.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import numpy as np

from config_paths import get_config_path, load_config
from forcing_model import (
    PRE_INDUSTRIAL,
    RESET_DEFAULTS,
    Baseline,
    ClimateResult,
    InputSet,
    ScenarioSpec,
    SweepSpec,
    compute_climate,
    results_to_frame,
    sweep,
)
from insights import AirQuality, classify_air_quality, generate_insights
from results_summary import plot_sweep, settings_from_config, write_outputs, write_summary_csv

LOGGER = logging.getLogger("calculator")
if not LOGGER.handlers:
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
    LOGGER.addHandler(handler)
LOGGER.setLevel(logging.INFO)
LOGGER.propagate = False

DEFAULT_SCENARIO_LABEL = "reset_defaults"


@dataclass(frozen=True)
class CalculatorOutput:
    """Everything a front end needs to render one evaluation."""

    result: ClimateResult
    insights: list[str]
    air_quality: AirQuality

    def to_dict(self) -> dict[str, object]:
        record: dict[str, object] = dict(self.result.to_dict())
        record["air_quality"] = self.air_quality.label
        record["air_quality_level"] = self.air_quality.level
        return record


def evaluate(inputs: InputSet, baseline: Baseline = PRE_INDUSTRIAL) -> CalculatorOutput:
    """Compute the climate result, insights and air quality for ``inputs``."""
    result = compute_climate(inputs, baseline)
    air_quality = classify_air_quality(inputs.renewable_share, inputs.waste_reduction)
    return CalculatorOutput(
        result=result,
        insights=generate_insights(result),
        air_quality=air_quality,
    )


def baseline_from_config(calc_cfg: Mapping[str, object]) -> Baseline:
    raw = calc_cfg.get("baseline")
    if raw is None:
        return PRE_INDUSTRIAL
    if not isinstance(raw, Mapping):
        raise TypeError("'calculator.baseline' must be a mapping of co2_0/ch4_0/n2o_0.")
    allowed = {f.name for f in fields(Baseline)}
    unknown = sorted(set(raw) - allowed)
    if unknown:
        raise KeyError(f"Unknown baseline keys {unknown}. Expected {sorted(allowed)}.")
    return Baseline(**{key: float(value) for key, value in raw.items()})


def defaults_from_config(calc_cfg: Mapping[str, object]) -> dict[str, float]:
    defaults = dict(RESET_DEFAULTS)
    raw = calc_cfg.get("defaults")
    if raw is None:
        return defaults
    if not isinstance(raw, Mapping):
        raise TypeError("'calculator.defaults' must be a mapping of input values.")
    merged = InputSet.from_mapping(raw, defaults=defaults)
    return merged.to_dict()


def scenarios_from_config(
    calc_cfg: Mapping[str, object],
    defaults: Mapping[str, float],
) -> list[ScenarioSpec]:
    """Scenario list from ``calculator.scenarios``; unspecified inputs use ``defaults``."""
    entries = calc_cfg.get("scenarios")
    if not entries:
        return [ScenarioSpec(DEFAULT_SCENARIO_LABEL, InputSet.from_mapping({}, defaults=defaults))]
    if not isinstance(entries, list):
        raise TypeError("'calculator.scenarios' must be a list of mappings.")
    specs: list[ScenarioSpec] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise TypeError(f"Scenario #{index} must be a mapping.")
        label = str(entry.get("name") or "").strip()
        if not label:
            raise ValueError(f"Scenario #{index} is missing a 'name'.")
        values = entry.get("inputs") or {}
        if not isinstance(values, Mapping):
            raise TypeError(f"Scenario '{label}' inputs must be a mapping.")
        specs.append(ScenarioSpec(label, InputSet.from_mapping(values, defaults=defaults)))
    return specs


def sweeps_from_config(
    calc_cfg: Mapping[str, object],
    defaults: Mapping[str, float],
) -> list[SweepSpec]:
    """Sweeps from ``calculator.sweeps``: either explicit ``values`` or ``start``/``stop``/``num``."""
    entries = calc_cfg.get("sweeps") or []
    if not isinstance(entries, list):
        raise TypeError("'calculator.sweeps' must be a list of mappings.")
    specs: list[SweepSpec] = []
    for index, entry in enumerate(entries):
        if not isinstance(entry, Mapping) or "field" not in entry:
            raise ValueError(f"Sweep #{index} must be a mapping with a 'field'.")
        field = str(entry["field"])
        if "values" in entry:
            values = np.asarray(entry["values"], dtype=float)
        else:
            try:
                start, stop = float(entry["start"]), float(entry["stop"])
            except KeyError as exc:
                raise ValueError(
                    f"Sweep '{field}' needs either 'values' or both 'start' and 'stop'."
                ) from exc
            values = np.linspace(start, stop, int(entry.get("num", 11)))
        base_values = entry.get("base") or {}
        base = InputSet.from_mapping(base_values, defaults=defaults)
        label = str(entry.get("name") or f"sweep_{field}")
        specs.append(SweepSpec(label=label, field=field, values=values, base=base))
    return specs


def run_from_config(
    config_path: Path | str | None = None,
    *,
    results_run_directory: str | None = None,
    write_outputs_enabled: bool = True,
) -> dict[str, CalculatorOutput]:
    """Evaluate the scenarios (and sweeps) defined in ``config.yaml``.

    Parameters
    ----------
    config_path:
        Path to the YAML configuration; defaults to :func:`config_paths.get_config_path`.
    results_run_directory:
        Overrides ``results.run_directory`` from the file when given.
    write_outputs_enabled:
        When ``False`` nothing is written to disk.

    Returns
    -------
    dict[str, CalculatorOutput]
        Mapping of scenario label to pipeline output.
    """

    config_path = Path(config_path) if config_path is not None else get_config_path()
    config: dict[str, Any] = load_config(config_path)
    calc_cfg = config.get("calculator") or {}
    if not isinstance(calc_cfg, Mapping):
        raise TypeError("'calculator' section in config.yaml must be a mapping.")
    if results_run_directory:
        results_cfg = config.get("results") or {}
        config["results"] = results_cfg
        if not isinstance(results_cfg, dict):
            raise TypeError("'results' section in config.yaml must be a mapping.")
        results_cfg["run_directory"] = results_run_directory

    baseline = baseline_from_config(calc_cfg)
    defaults = defaults_from_config(calc_cfg)
    scenarios = scenarios_from_config(calc_cfg, defaults)
    sweeps = sweeps_from_config(calc_cfg, defaults)

    outputs: dict[str, CalculatorOutput] = {}
    for spec in scenarios:
        if spec.label in outputs:
            raise ValueError(f"Duplicate scenario name '{spec.label}' in config.yaml.")
        LOGGER.info("Evaluating scenario '%s'", spec.label)
        outputs[spec.label] = evaluate(spec.inputs, baseline)

    if not write_outputs_enabled:
        return outputs

    settings = settings_from_config(config, config_path.resolve().parent)
    for label, output in outputs.items():
        write_outputs(label, output.result, output.insights, output.air_quality, settings)

    frame = results_to_frame({label: output.result for label, output in outputs.items()})
    frame["air_quality"] = [output.air_quality.label for output in outputs.values()]
    summary_path = write_summary_csv(frame, settings.output_directory, "summary")
    LOGGER.info("Scenario summary written to %s", summary_path)

    for spec in sweeps:
        LOGGER.info("Sweeping '%s' over %d values", spec.field, len(spec.values))
        sweep_frame = sweep(spec.base, spec.field, spec.values, baseline)
        sweep_dir = settings.output_directory / "sweeps"
        write_summary_csv(sweep_frame, sweep_dir, spec.label)
        if settings.include_plots:
            plot_sweep(
                sweep_frame,
                spec.field,
                output_path=sweep_dir,
                file_name=spec.label,
                plot_format=settings.plot_format,
            )
    return outputs


__all__ = [
    "DEFAULT_SCENARIO_LABEL",
    "CalculatorOutput",
    "baseline_from_config",
    "defaults_from_config",
    "evaluate",
    "run_from_config",
    "scenarios_from_config",
    "sweeps_from_config",
]
