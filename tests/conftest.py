"""
Pytest configuration and fixtures for flood_risk tests.

FakeHazardProvider stands in for Earth Engine so no network I/O happens.
"""

from typing import Optional, Sequence

import pytest

from flood_risk.core.exceptions import HazardProviderError
from flood_risk.data_sources.base import DatasetHandle, HazardProvider


class FakeHazardProvider(HazardProvider):
    """In-memory hazard provider.

    sizes: dataset size per model filter (None is the broad set).
    point_depths: {asset_id: depth or None} for point sampling.
    buffered_depths: {asset_id: (mean, max)} for buffered sampling.
    fail_on: operation name that raises HazardProviderError.
    """

    def __init__(
        self,
        sizes: Optional[dict] = None,
        point_depths: Optional[dict] = None,
        buffered_depths: Optional[dict] = None,
        first_model: Optional[str] = "00000NorESM1-M",
        fail_on: Optional[str] = None,
    ):
        self.sizes = sizes if sizes is not None else {None: 4, "0000GFDL_ESM2M": 1}
        self.point_depths = point_depths or {}
        self.buffered_depths = buffered_depths or {}
        self.first_model = first_model
        self.fail_on = fail_on
        self.calls = []

    def _check(self, operation: str):
        self.calls.append(operation)
        if self.fail_on == operation:
            raise HazardProviderError(f"{operation} exploded", operation)

    def query_dataset(self, flood_type, scenario, return_period, year, model=None) -> DatasetHandle:
        self.calls.append("query_dataset")
        return DatasetHandle(flood_type, scenario, return_period, year, model)

    async def dataset_size(self, handle: DatasetHandle) -> int:
        self._check("dataset_size")
        return self.sizes.get(handle.model, 0)

    async def dataset_model(self, handle: DatasetHandle) -> Optional[str]:
        self._check("dataset_model")
        return self.first_model

    async def sample_point(self, handle: DatasetHandle, points: Sequence[tuple]) -> dict:
        self._check("sample_point")
        self.last_handle = handle
        return {i: self.point_depths[i] for i, _, _ in points if i in self.point_depths}

    async def sample_buffered(self, handle: DatasetHandle, points: Sequence[tuple], radius_m: float) -> dict:
        self._check("sample_buffered")
        self.last_handle = handle
        self.last_radius = radius_m
        return {i: self.buffered_depths[i] for i, _, _ in points if i in self.buffered_depths}


@pytest.fixture()
def provider():
    return FakeHazardProvider(point_depths={1: 0.5, 2: 0.0, 3: None})


@pytest.fixture()
def factories():
    return [
        {"name": "Kinpo Electronics (Taiwan)", "coords": [121.602908, 25.002766], "asset_value": 50000000, "type": "industry"},
        {"name": "Cal-Comp (Thailand)", "lat": 13.7325002, "lon": 100.5604182, "asset_value": 30000000, "type": "Commercial"},
        {"name": "Cal-Comp (Philippines)", "latitude": "14.0136501", "longitude": "121.1792173", "asset_value": "25000000"},
    ]
