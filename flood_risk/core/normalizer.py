"""Request normalization: raw payload to query parameters and assets."""

import math
from typing import Any, Mapping, Optional

from loguru import logger

from flood_risk.core.exceptions import AssetValidationError
from flood_risk.core.models import Asset, QueryParameters
from flood_risk.utils.config import RiskConfig, settings
from flood_risk.utils.constants import (
    CLIMATE_MODELS,
    DEFAULT_ASSET_CLASS,
    LEGACY_DEFAULT_RETURN_PERIOD,
    LEGACY_RETURN_PERIODS,
    RETURN_PERIODS,
)


def to_number(value: Any) -> Optional[float]:
    """Coerce a raw value to a finite float, or None."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _first(row: Mapping, *keys: str) -> Any:
    for key in keys:
        if key in row and row[key] is not None:
            return row[key]
    return None


class RequestNormalizer:
    """Turn untyped request input into fully-defaulted, validated values."""

    SCENARIO_KEYS = ("scenario",)
    YEAR_KEYS = ("year",)
    RETURN_PERIOD_KEYS = ("returnPeriod", "return_period", "rp")
    MODEL_KEYS = ("model",)
    BUFFER_KEYS = ("bufferMeters", "buffer_distance", "buffer_m", "buffer")
    ASSET_KEYS = ("factories", "assets")

    NAME_KEYS = ("name",)
    LAT_KEYS = ("lat", "latitude")
    LON_KEYS = ("lon", "lng", "longitude")
    VALUE_KEYS = ("asset_value", "assetValue", "assetvalue", "value")
    CLASS_KEYS = ("type", "asset_class", "assetClass")

    def __init__(self, config: Optional[RiskConfig] = None):
        self.config = config or settings.risk
        if self.config.legacy_return_periods:
            self.return_periods = LEGACY_RETURN_PERIODS
            self.default_return_period = LEGACY_DEFAULT_RETURN_PERIOD
        else:
            self.return_periods = RETURN_PERIODS
            self.default_return_period = self.config.default_return_period

    def normalize(self, payload: Mapping) -> tuple:
        """Return (QueryParameters, assets) for a raw payload."""
        params = self.normalize_params(payload)
        assets = self.normalize_assets(_first(payload, *self.ASSET_KEYS))
        return params, assets

    def normalize_params(self, payload: Mapping) -> QueryParameters:
        return QueryParameters(
            scenario=self.normalize_scenario(_first(payload, *self.SCENARIO_KEYS)),
            year=self.normalize_year(_first(payload, *self.YEAR_KEYS)),
            return_period=self.normalize_return_period(_first(payload, *self.RETURN_PERIOD_KEYS)),
            model=self.normalize_model(_first(payload, *self.MODEL_KEYS)),
            buffer_distance=self.normalize_buffer(_first(payload, *self.BUFFER_KEYS)),
        )

    def normalize_scenario(self, value: Any) -> str:
        scenario = str(value).strip() if value is not None else ""
        return scenario or self.config.default_scenario

    def normalize_year(self, value: Any) -> int:
        year = to_number(value)
        if year is None or year <= 0:
            return self.config.default_year
        return int(year)

    def normalize_return_period(self, value: Any) -> int:
        rp = to_number(value)
        if rp is None or rp not in self.return_periods:
            if value not in (None, ""):
                logger.warning(f"Return period {value!r} is invalid. Defaulting to {self.default_return_period}.")
            return self.default_return_period
        return int(rp)

    def normalize_model(self, value: Any) -> str:
        model = str(value).strip() if value is not None else ""
        if model not in CLIMATE_MODELS:
            if model:
                logger.warning(f"Model {model!r} is not supported. Defaulting to {self.config.default_model}.")
            return self.config.default_model
        return model

    def normalize_buffer(self, value: Any) -> float:
        buffer = to_number(value)
        if buffer is None or buffer < 0:
            return 0.0
        return min(buffer, self.config.max_buffer_m)

    def normalize_assets(self, rows: Any) -> list:
        """Validate asset rows; malformed rows are dropped, ids run 1..n."""
        if not isinstance(rows, (list, tuple)):
            raise AssetValidationError("Request must include a list of assets.")

        assets = []
        for index, row in enumerate(rows):
            asset = self._parse_row(row, len(assets) + 1)
            if asset is None:
                logger.debug(f"Dropped asset row {index}: {row!r}")
                continue
            assets.append(asset)

        if not assets:
            raise AssetValidationError("No valid assets found.")

        if len(assets) < len(rows):
            logger.info(f"Accepted {len(assets)}/{len(rows)} asset rows")
        return assets

    def _parse_row(self, row: Any, asset_id: int) -> Optional[Asset]:
        if not isinstance(row, Mapping):
            return None

        name = str(_first(row, *self.NAME_KEYS) or "").strip()
        if not name:
            return None

        lon, lat = self._parse_coords(row)
        if lat is None or not -90 <= lat <= 90:
            return None
        if lon is None or not -180 <= lon <= 180:
            return None

        value = to_number(_first(row, *self.VALUE_KEYS))
        if value is None or value < 0:
            return None

        raw_class = str(_first(row, *self.CLASS_KEYS) or "").strip().lower()
        asset_class = "commercial" if raw_class == "commercial" else DEFAULT_ASSET_CLASS

        return Asset(
            id=asset_id,
            name=name,
            lon=lon,
            lat=lat,
            asset_value=value,
            asset_class=asset_class,
        )

    def _parse_coords(self, row: Mapping) -> tuple:
        coords = row.get("coords")
        if isinstance(coords, (list, tuple)) and len(coords) == 2:
            return to_number(coords[0]), to_number(coords[1])
        return to_number(_first(row, *self.LON_KEYS)), to_number(_first(row, *self.LAT_KEYS))


request_normalizer = RequestNormalizer()
