"""Tests for request normalization."""

import pytest

from flood_risk.core.exceptions import AssetValidationError
from flood_risk.core.normalizer import RequestNormalizer, to_number
from flood_risk.utils.config import RiskConfig

ROW = {"name": "Plant", "coords": [121.5, 25.0], "asset_value": 1000, "type": "industry"}


@pytest.fixture()
def normalizer():
    return RequestNormalizer(RiskConfig())


def test_defaults_when_everything_missing(normalizer):
    params = normalizer.normalize_params({})
    assert params.scenario == "rcp8p5"
    assert params.year == 2050
    assert params.return_period == 100
    assert params.model == "0000GFDL_ESM2M"
    assert params.buffer_distance == 0.0
    assert params.sampling_mode == "point"


def test_valid_values_pass_through(normalizer):
    params = normalizer.normalize_params({
        "scenario": "rcp4p5",
        "year": "2030",
        "returnPeriod": "250",
        "model": "0000HadGEM2-ES",
        "bufferMeters": "1000",
    })
    assert params.scenario == "rcp4p5"
    assert params.year == 2030
    assert params.return_period == 250
    assert params.model == "0000HadGEM2-ES"
    assert params.buffer_distance == 1000.0
    assert params.sampling_mode == "max"


def test_snake_case_keys_accepted(normalizer):
    params = normalizer.normalize_params({"return_period": 10, "buffer_distance": 250})
    assert params.return_period == 10
    assert params.buffer_distance == 250.0


@pytest.mark.parametrize("scenario", [None, "", "   "])
def test_blank_scenario_defaults(normalizer, scenario):
    assert normalizer.normalize_scenario(scenario) == "rcp8p5"


@pytest.mark.parametrize("year", [None, "", "abc", float("nan"), float("inf"), 0])
def test_invalid_year_defaults(normalizer, year):
    assert normalizer.normalize_year(year) == 2050


@pytest.mark.parametrize("rp", [None, "", 0, 3, 200, 99.5, "ten", -100, 10000])
def test_unsupported_return_period_defaults(normalizer, rp):
    assert normalizer.normalize_return_period(rp) == 100


@pytest.mark.parametrize("rp", [1, 2, 5, 10, 25, 50, 100, 250, 500, 1000, "1000", 25.0])
def test_supported_return_periods_kept(normalizer, rp):
    assert normalizer.normalize_return_period(rp) == int(float(rp))


def test_legacy_return_periods():
    legacy = RequestNormalizer(RiskConfig(legacy_return_periods=True))
    assert legacy.normalize_return_period(10) == 25
    assert legacy.normalize_return_period(200) == 200
    assert legacy.normalize_return_period(None) == 25


@pytest.mark.parametrize("model", [None, "", "GFDL", "0000gfdl_esm2m", 42])
def test_unsupported_model_defaults(normalizer, model):
    assert normalizer.normalize_model(model) == "0000GFDL_ESM2M"


@pytest.mark.parametrize("raw,expected", [
    (-1, 0.0),
    ("-500", 0.0),
    (float("nan"), 0.0),
    (float("inf"), 0.0),
    ("abc", 0.0),
    (None, 0.0),
    (0, 0.0),
    (49999, 49999.0),
    (50000, 50000.0),
    (50001, 50000.0),
    ("1e9", 50000.0),
])
def test_buffer_clamped(normalizer, raw, expected):
    assert normalizer.normalize_buffer(raw) == expected


def test_assets_get_sequential_ids(normalizer, factories):
    assets = normalizer.normalize_assets(factories)
    assert [a.id for a in assets] == [1, 2, 3]
    assert assets[0].coords == [121.602908, 25.002766]
    assert assets[1].lon == 100.5604182 and assets[1].lat == 13.7325002
    assert assets[2].asset_value == 25000000.0


def test_asset_class_normalized(normalizer, factories):
    assets = normalizer.normalize_assets(factories)
    assert [a.asset_class for a in assets] == ["industry", "commercial", "industry"]


@pytest.mark.parametrize("bad", [
    {**ROW, "name": ""},
    {**ROW, "name": "   "},
    {**ROW, "coords": [121.5, 200]},
    {**ROW, "coords": [181, 25.0]},
    {"name": "Plant", "lat": 95, "lon": 10, "asset_value": 1},
    {"name": "Plant", "lat": 10, "asset_value": 1},
    {**ROW, "asset_value": -1},
    {**ROW, "asset_value": "lots"},
    {**ROW, "asset_value": float("inf")},
    {**ROW, "asset_value": None},
    "not a row",
])
def test_bad_rows_dropped(normalizer, bad):
    assets = normalizer.normalize_assets([bad, ROW])
    assert len(assets) == 1
    assert assets[0].id == 1
    assert assets[0].name == "Plant"


def test_ids_skip_nothing_after_drops(normalizer):
    rows = [ROW, {**ROW, "coords": [0, 200]}, {**ROW, "name": "Other"}]
    assets = normalizer.normalize_assets(rows)
    assert [(a.id, a.name) for a in assets] == [(1, "Plant"), (2, "Other")]


def test_empty_batch_rejected(normalizer):
    with pytest.raises(AssetValidationError):
        normalizer.normalize_assets([{**ROW, "name": ""}])
    with pytest.raises(AssetValidationError):
        normalizer.normalize_assets([])


def test_missing_asset_list_rejected(normalizer):
    with pytest.raises(AssetValidationError):
        normalizer.normalize({"scenario": "rcp4p5"})


def test_zero_value_asset_accepted(normalizer):
    assets = normalizer.normalize_assets([{**ROW, "asset_value": 0}])
    assert assets[0].asset_value == 0.0


@pytest.mark.parametrize("raw,expected", [
    ("12.5", 12.5), (" 3 ", 3.0), (7, 7.0), ("", None), (None, None),
    (True, None), ("x", None), (float("nan"), None), ([1], None),
])
def test_to_number(raw, expected):
    assert to_number(raw) == expected
