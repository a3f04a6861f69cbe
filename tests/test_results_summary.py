from pathlib import Path

import pandas as pd
import pytest

from forcing_model import InputSet, compute_climate
from insights import classify_air_quality, generate_insights
from results_summary import (
    GAUGE_ARC_LENGTH,
    SummarySettings,
    format_display,
    gauge_colour,
    gauge_offset,
    insights_text,
    plot_sweep,
    sea_level_fill_percent,
    settings_from_config,
    write_outputs,
    write_result_csv,
)


def test_format_display_rounds_to_two_decimals(reset_inputs: InputSet):
    display = format_display(compute_climate(reset_inputs))
    assert display == {"total_forcing": "2.57", "delta_t": "2.05", "sea_level_rise": "0.62"}


def test_sea_level_fill_is_capped():
    assert sea_level_fill_percent(0.0) == 0.0
    assert sea_level_fill_percent(1.77 / 2) == pytest.approx(50.0)
    assert sea_level_fill_percent(5.0) == 100.0
    with pytest.raises(ValueError):
        sea_level_fill_percent(0.5, max_sea_level_rise=0.0)


def test_gauge_geometry_and_colours():
    assert gauge_offset(0) == GAUGE_ARC_LENGTH
    assert gauge_offset(1) == pytest.approx(GAUGE_ARC_LENGTH / 2)
    assert gauge_offset(2) == 0.0
    assert gauge_colour(0) == "#ff5a5a"
    assert gauge_colour(2) == "#4dd47a"
    with pytest.raises(ValueError):
        gauge_offset(3)


def test_insights_text_joins_lines():
    assert insights_text(["  first ", "second"]) == "first\nsecond"


def test_write_result_csv_appends_total(tmp_path: Path, reset_inputs: InputSet):
    result = compute_climate(reset_inputs)
    path = write_result_csv(result, tmp_path / "out" / "breakdown.csv")
    assert path.read_text(encoding="utf-8").startswith("# unit: W/m2")
    frame = pd.read_csv(path, comment="#")
    assert frame["source"].tolist() == ["CO2", "CH4", "N2O", "Land", "Total"]
    assert frame.iloc[-1]["forcing_w_m2"] == pytest.approx(result.total_forcing)


def test_write_outputs_creates_expected_files(tmp_path: Path, reset_inputs: InputSet):
    result = compute_climate(reset_inputs)
    lines = generate_insights(result)
    quality = classify_air_quality(reset_inputs.renewable_share, reset_inputs.waste_reduction)
    settings = SummarySettings(output_directory=tmp_path)

    written = write_outputs("Reset Defaults", result, lines, quality, settings)

    scenario_dir = tmp_path / "reset_defaults"
    names = {path.name for path in written}
    assert names == {
        "forcing_breakdown.csv",
        "insights.txt",
        "display.csv",
        "forcing_contributions.png",
    }
    assert all(path.parent == scenario_dir and path.exists() for path in written)
    assert (scenario_dir / "insights.txt").read_text(encoding="utf-8").splitlines() == lines
    display = pd.read_csv(scenario_dir / "display.csv")
    assert display.loc[0, "air_quality"] == "Low"
    assert display.loc[0, "gauge_offset"] == pytest.approx(GAUGE_ARC_LENGTH)


def test_write_outputs_respects_plot_switch(tmp_path: Path, reset_inputs: InputSet):
    result = compute_climate(reset_inputs)
    quality = classify_air_quality(20.0, 0.0)
    settings = SummarySettings(output_directory=tmp_path, include_plots=False)
    written = write_outputs("no_plots", result, [], quality, settings)
    assert not any(path.suffix == ".png" for path in written)


def test_plot_sweep_rejects_empty_frame(tmp_path: Path):
    with pytest.raises(ValueError):
        plot_sweep(pd.DataFrame(columns=["value", "delta_t"]), "co2", output_path=tmp_path, file_name="x")


def test_settings_from_config_applies_run_directory(tmp_path: Path):
    config = {
        "calculator": {"output_directory": "results/calc"},
        "results": {"run_directory": "trial", "include_plots": False, "plot_format": ".svg"},
    }
    settings = settings_from_config(config, tmp_path)
    assert settings.output_directory == tmp_path.resolve() / "results" / "trial" / "calc"
    assert settings.include_plots is False
    assert settings.plot_format == "svg"
