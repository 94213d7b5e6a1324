"""Hazard data provider contract."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence


@dataclass(frozen=True)
class DatasetHandle:
    """Opaque reference to a filtered hazard dataset."""
    flood_type: str
    scenario: str
    return_period: int
    year: int
    model: Optional[str] = None
    collection: Any = field(default=None, compare=False, repr=False)


class HazardProvider(ABC):
    """
    Answers dataset and sampling requests for flood hazard rasters.

    `points` are (asset_id, lon, lat) tuples. Sampling results are keyed by
    asset id; an id missing from the result was dropped by the provider.
    Async methods raise HazardProviderError on failure.
    """

    @abstractmethod
    def query_dataset(
        self,
        flood_type: str,
        scenario: str,
        return_period: int,
        year: int,
        model: Optional[str] = None,
    ) -> DatasetHandle:
        ...

    @abstractmethod
    async def dataset_size(self, handle: DatasetHandle) -> int:
        ...

    @abstractmethod
    async def dataset_model(self, handle: DatasetHandle) -> Optional[str]:
        ...

    @abstractmethod
    async def sample_point(self, handle: DatasetHandle, points: Sequence[tuple]) -> dict:
        ...

    @abstractmethod
    async def sample_buffered(self, handle: DatasetHandle, points: Sequence[tuple], radius_m: float) -> dict:
        ...
