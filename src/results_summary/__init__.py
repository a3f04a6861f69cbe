"""Write calculator results as tables, text and plots.

This is the presentation side of the calculator. It only consumes
:class:`forcing_model.ClimateResult` records, so it can be swapped for any other
renderer without touching the model.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import pandas as pd

from config_paths import resolve_output_directory
from forcing_model.aggregator import ClimateResult
from insights.air_quality import AirQuality

LOGGER = logging.getLogger("results.summary")

# Semicircle gauge: total arc length of the dashboard SVG path.
GAUGE_ARC_LENGTH = 126.0
GAUGE_COLOURS: tuple[str, ...] = ("#ff5a5a", "#ffc04d", "#4dd47a")
# Largest sea-level rise reachable within the slider ranges.
MAX_SEA_LEVEL_RISE = 1.77
BAR_COLOUR = "#bf4444"


@dataclass(slots=True)
class SummarySettings:
    output_directory: Path
    include_plots: bool = True
    plot_format: str = "png"
    max_sea_level_rise: float = MAX_SEA_LEVEL_RISE


def settings_from_config(config: Mapping[str, object], root: Path) -> SummarySettings:
    """Build summary settings from the ``calculator`` and ``results`` sections."""
    calc_cfg = config.get("calculator") or {}
    results_cfg = config.get("results") or {}
    if not isinstance(calc_cfg, Mapping) or not isinstance(results_cfg, Mapping):
        raise TypeError("'calculator' and 'results' must be mappings in config.yaml.")
    output_dir = resolve_output_directory(config, calc_cfg.get("output_directory"), root=root)
    return SummarySettings(
        output_directory=output_dir,
        include_plots=bool(results_cfg.get("include_plots", True)),
        plot_format=str(results_cfg.get("plot_format", "png")).lstrip(".") or "png",
        max_sea_level_rise=float(results_cfg.get("max_sea_level_rise", MAX_SEA_LEVEL_RISE)),
    )


def _safe_name(name: str) -> str:
    return re.sub(r"[^0-9a-zA-Z_]+", "_", name.strip().lower()).strip("_") or "scenario"


def format_display(result: ClimateResult) -> dict[str, str]:
    """Headline tiles rounded to two decimals."""
    return {
        "total_forcing": f"{result.total_forcing:.2f}",
        "delta_t": f"{result.delta_t:.2f}",
        "sea_level_rise": f"{result.sea_level_rise:.2f}",
    }


def sea_level_fill_percent(sea_level_rise: float, max_sea_level_rise: float = MAX_SEA_LEVEL_RISE) -> float:
    """Share of the sea-level tile to fill, capped at 100 %."""
    if max_sea_level_rise <= 0:
        raise ValueError("max_sea_level_rise must be positive.")
    return min(sea_level_rise / max_sea_level_rise * 100.0, 100.0)


def gauge_offset(level: int) -> float:
    """Dash offset for the air-quality gauge; 0 means a full arc."""
    if level not in (0, 1, 2):
        raise ValueError(f"Air-quality level must be 0, 1 or 2 (got {level!r}).")
    fill = (level / 2) * GAUGE_ARC_LENGTH
    return GAUGE_ARC_LENGTH - fill


def gauge_colour(level: int) -> str:
    if level not in (0, 1, 2):
        raise ValueError(f"Air-quality level must be 0, 1 or 2 (got {level!r}).")
    return GAUGE_COLOURS[level]


def insights_text(lines: Sequence[str]) -> str:
    """Insights as copy-ready plain text, one line each."""
    return "\n".join(line.strip() for line in lines)


def write_result_csv(result: ClimateResult, output_path: Path) -> Path:
    """Write the forcing breakdown plus total to ``output_path``."""
    frame = result.to_frame()
    total = pd.DataFrame({"source": ["Total"], "forcing_w_m2": [result.total_forcing]})
    frame = pd.concat([frame, total], ignore_index=True)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    with output_path.open("w", encoding="utf-8") as fh:
        fh.write("# unit: W/m2\n")
        frame.to_csv(fh, index=False)
    return output_path


def write_insights(lines: Sequence[str], output_path: Path) -> Path:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(insights_text(lines) + "\n", encoding="utf-8")
    return output_path


def write_summary_csv(frame: pd.DataFrame, output_dir: Path, name: str = "summary") -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    csv_path = output_dir / f"{_safe_name(name)}.csv"
    frame.to_csv(csv_path, index=False)
    return csv_path


def plot_contributions(
    breakdown: Mapping[str, float],
    *,
    output_path: Path,
    file_name: str,
    plot_format: str = "png",
    title: str = "Forcing contributions",
) -> Path:
    import matplotlib.pyplot as plt

    labels = list(breakdown.keys())
    values = [breakdown[label] for label in labels]
    x = np.arange(len(labels))

    fig, ax = plt.subplots(figsize=(6, 4.5))
    ax.bar(x, values, 0.6, color=BAR_COLOUR, alpha=0.3, edgecolor=BAR_COLOUR, linewidth=2)
    ax.axhline(0.0, color="black", linewidth=0.8)
    ax.set_xticks(x)
    ax.set_xticklabels(labels)
    ax.set_ylabel("Forcing contribution (W/m²)")
    ax.set_title(title)
    ax.grid(axis="y", linestyle="--", alpha=0.3)
    output_path.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    target = output_path / f"{file_name}.{plot_format}"
    fig.savefig(target, format=plot_format)
    plt.close(fig)
    return target


def plot_sweep(
    frame: pd.DataFrame,
    field: str,
    *,
    output_path: Path,
    file_name: str,
    plot_format: str = "png",
) -> Path:
    """Temperature and sea-level response to one swept input."""
    import matplotlib.pyplot as plt

    if frame.empty:
        raise ValueError(f"Sweep over '{field}' has no rows to plot.")

    fig, ax = plt.subplots(figsize=(7, 4.5))
    ax.plot(frame["value"], frame["delta_t"], marker="o", label="ΔT (°C)")
    ax.plot(frame["value"], frame["sea_level_rise"], marker="s", label="Sea-level rise (m)")
    ax.set_xlabel(field)
    ax.set_title(f"Sensitivity to {field}")
    ax.grid(True, linestyle="--", alpha=0.3)
    ax.legend()
    output_path.mkdir(parents=True, exist_ok=True)
    fig.tight_layout()
    target = output_path / f"{file_name}.{plot_format}"
    fig.savefig(target, format=plot_format)
    plt.close(fig)
    return target


def write_outputs(
    label: str,
    result: ClimateResult,
    lines: Sequence[str],
    air_quality: AirQuality,
    settings: SummarySettings,
) -> list[Path]:
    """Write breakdown, insights, display values and (optionally) a bar chart."""
    scenario_dir = settings.output_directory / _safe_name(label)
    written = [
        write_result_csv(result, scenario_dir / "forcing_breakdown.csv"),
        write_insights(lines, scenario_dir / "insights.txt"),
    ]

    display = {
        **format_display(result),
        "sea_level_fill_percent": sea_level_fill_percent(
            result.sea_level_rise, settings.max_sea_level_rise
        ),
        "air_quality": air_quality.label,
        "air_quality_level": air_quality.level,
        "air_quality_score": air_quality.score,
        "gauge_offset": gauge_offset(air_quality.level),
        "gauge_colour": gauge_colour(air_quality.level),
    }
    display_path = scenario_dir / "display.csv"
    pd.DataFrame([display]).to_csv(display_path, index=False)
    written.append(display_path)

    if settings.include_plots:
        written.append(
            plot_contributions(
                result.breakdown,
                output_path=scenario_dir,
                file_name="forcing_contributions",
                plot_format=settings.plot_format,
                title=f"Forcing contributions: {label}",
            )
        )
    else:
        LOGGER.debug("Plot generation disabled; skipping chart for '%s'", label)
    LOGGER.info("Wrote %d files for '%s' to %s", len(written), label, scenario_dir)
    return written


__all__ = [
    "GAUGE_ARC_LENGTH",
    "MAX_SEA_LEVEL_RISE",
    "SummarySettings",
    "format_display",
    "gauge_colour",
    "gauge_offset",
    "insights_text",
    "plot_contributions",
    "plot_sweep",
    "sea_level_fill_percent",
    "settings_from_config",
    "write_insights",
    "write_outputs",
    "write_result_csv",
    "write_summary_csv",
]
