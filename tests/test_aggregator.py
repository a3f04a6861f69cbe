import itertools
import math

import pandas as pd
import pytest

from forcing_model import (
    BREAKDOWN_KEYS,
    Baseline,
    ClimateResult,
    ConcentrationMustBePositive,
    InputMustBeFinite,
    InputSet,
    compute_climate,
    compute_forcings,
    default_inputs,
)


def test_reset_defaults_reproduce_reference_result(reset_inputs: InputSet):
    result = compute_climate(reset_inputs)

    assert round(result.total_forcing, 2) == 2.57
    assert round(result.delta_t, 2) == 2.05
    assert round(result.sea_level_rise, 2) == 0.62
    assert result.breakdown["CO2"] == pytest.approx(1.81348, abs=1e-3)
    assert result.breakdown["CH4"] == pytest.approx(0.5276, abs=3e-3)
    assert result.breakdown["N2O"] == pytest.approx(0.1888, abs=3e-3)
    assert result.breakdown["Land"] == pytest.approx(0.036)
    assert result.inputs is reset_inputs


def test_effective_forcings_apply_policy_factors(reset_inputs: InputSet):
    raw = compute_forcings(reset_inputs)
    result = compute_climate(reset_inputs)
    ren = 1 - 0.6 * 0.2
    assert result.breakdown["CO2"] == pytest.approx(raw["CO2"] * ren * 0.95)
    assert result.breakdown["CH4"] == pytest.approx(raw["CH4"] * 1.0)
    assert result.breakdown["N2O"] == pytest.approx(raw["N2O"] * (0.9 * ren + 0.1))


def test_derived_metrics_follow_fixed_coefficients(reset_inputs: InputSet):
    result = compute_climate(reset_inputs.replace(waste_reduction=50, deforestation=2))
    assert result.total_forcing == pytest.approx(sum(result.breakdown.values()))
    assert result.delta_t == pytest.approx(result.total_forcing * 0.8)
    assert result.sea_level_rise == pytest.approx(result.delta_t * 0.3)


def test_breakdown_keys_keep_fixed_order(reset_inputs: InputSet):
    result = compute_climate(reset_inputs)
    assert tuple(result.breakdown) == BREAKDOWN_KEYS == ("CO2", "CH4", "N2O", "Land")


def test_total_forcing_floors_at_zero():
    inputs = InputSet(
        co2=150.0,
        ch4=400.0,
        n2o=200.0,
        renewable_share=100.0,
        waste_reduction=100.0,
        deforestation=0.0,
    )
    result = compute_climate(inputs)
    assert sum(result.breakdown.values()) < 0
    assert result.total_forcing == 0.0
    assert result.delta_t == 0.0
    assert result.sea_level_rise == 0.0


def test_total_forcing_never_negative_over_grid():
    grid = itertools.product(
        (100.0, 280.0, 420.0, 1000.0),
        (300.0, 722.0, 1900.0),
        (150.0, 270.0, 335.0),
        (0.0, 50.0, 100.0, 150.0),
        (0.0, 100.0),
        (-1.0, 0.0, 3.0),
    )
    for co2, ch4, n2o, ren, waste, deforest in grid:
        result = compute_climate(InputSet(co2, ch4, n2o, ren, waste, deforest))
        assert result.total_forcing >= 0
        assert result.delta_t >= 0
        assert result.sea_level_rise >= 0


def test_pipeline_is_idempotent(reset_inputs: InputSet):
    first = compute_climate(reset_inputs)
    second = compute_climate(reset_inputs)
    assert first == second
    assert first is not second
    assert first.breakdown is not second.breakdown


def test_custom_baseline_shifts_reference():
    inputs = default_inputs().replace(co2=560.0)
    shifted = compute_climate(inputs, Baseline(co2_0=560.0))
    assert shifted.breakdown["CO2"] == 0.0


def test_non_positive_concentration_is_rejected(reset_inputs: InputSet):
    with pytest.raises(ConcentrationMustBePositive):
        compute_climate(reset_inputs.replace(ch4=0.0))
    with pytest.raises(ConcentrationMustBePositive):
        compute_climate(reset_inputs, Baseline(n2o_0=-270.0))


def test_input_set_from_mapping_accepts_aliases_and_defaults():
    inputs = InputSet.from_mapping({"ren": 70, "waste": "40", "def": 2}, defaults=default_inputs().to_dict())
    assert inputs.renewable_share == 70.0
    assert inputs.waste_reduction == 40.0
    assert inputs.deforestation == 2.0
    assert inputs.co2 == 420.0


def test_input_set_from_mapping_reports_problems():
    with pytest.raises(KeyError, match="Missing"):
        InputSet.from_mapping({"co2": 400})
    with pytest.raises(KeyError, match="Unknown"):
        InputSet.from_mapping({"sulphur": 1}, defaults=default_inputs().to_dict())
    with pytest.raises(ValueError, match="numeric"):
        InputSet.from_mapping({"co2": "lots"}, defaults=default_inputs().to_dict())


def test_result_to_frame_and_dict(reset_inputs: InputSet):
    result = compute_climate(reset_inputs)
    frame = result.to_frame()
    assert isinstance(frame, pd.DataFrame)
    assert frame["source"].tolist() == ["CO2", "CH4", "N2O", "Land"]
    record = result.to_dict()
    assert record["delta_t"] == result.delta_t
    assert record["Land"] == result.breakdown["Land"]
    assert record["renewable_share"] == 20.0


def test_result_is_frozen(reset_inputs: InputSet):
    result = compute_climate(reset_inputs)
    assert isinstance(result, ClimateResult)
    with pytest.raises(AttributeError):
        result.delta_t = 0.0  # type: ignore[misc]
    with pytest.raises(TypeError):
        result.breakdown["CO2"] = 99.0  # type: ignore[index]
    assert result.total_forcing == pytest.approx(sum(result.breakdown.values()))


def test_result_is_hashable_and_copies_breakdown(reset_inputs: InputSet):
    source = {"CO2": 1.0, "CH4": 0.5, "N2O": 0.2, "Land": 0.0}
    result = ClimateResult(
        total_forcing=1.7,
        delta_t=1.36,
        sea_level_rise=0.408,
        breakdown=source,
        inputs=reset_inputs,
    )
    source["CO2"] = 50.0
    assert result.breakdown["CO2"] == 1.0
    assert hash(compute_climate(reset_inputs)) == hash(compute_climate(reset_inputs))
    assert {compute_climate(reset_inputs), compute_climate(reset_inputs)} == {compute_climate(reset_inputs)}


@pytest.mark.parametrize("name", ["renewable_share", "waste_reduction", "deforestation"])
@pytest.mark.parametrize("value", [math.nan, math.inf, -math.inf])
def test_non_finite_policy_inputs_are_rejected(reset_inputs: InputSet, name: str, value: float):
    with pytest.raises(InputMustBeFinite, match=name) as excinfo:
        reset_inputs.replace(**{name: value})
    assert isinstance(excinfo.value, ValueError)
    assert excinfo.value.name == name


def test_from_mapping_rejects_nan_text_for_policy_levers():
    with pytest.raises(InputMustBeFinite, match="renewable_share"):
        InputSet.from_mapping({"ren": "nan"}, defaults=default_inputs().to_dict())


def test_out_of_range_finite_policy_inputs_still_extrapolate(reset_inputs: InputSet):
    result = compute_climate(reset_inputs.replace(renewable_share=150.0, deforestation=-1.0))
    assert math.isfinite(result.total_forcing)
    assert result.breakdown["Land"] == pytest.approx(-0.12)
