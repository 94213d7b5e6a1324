"""Spatial sampling of hazard depth at asset locations."""

import math
from typing import Optional, Sequence

from loguru import logger

from flood_risk.core.models import Asset, SampleResult
from flood_risk.data_sources.base import DatasetHandle, HazardProvider


def dry_if_missing(value: Optional[float]) -> float:
    """Absent or non-finite cell values read as 0 m (dry)."""
    if value is None:
        return 0.0
    try:
        depth = float(value)
    except (TypeError, ValueError):
        return 0.0
    return depth if math.isfinite(depth) else 0.0


class SpatialSampler:
    """Point or buffered (mean/max) depth sampling through a hazard provider."""

    def __init__(self, provider: HazardProvider):
        self.provider = provider

    async def sample(
        self,
        handle: DatasetHandle,
        assets: Sequence[Asset],
        buffer_distance: float = 0.0,
    ) -> dict:
        """Return {asset_id: SampleResult}; ids the provider dropped are absent."""
        points = [(a.id, a.lon, a.lat) for a in assets]

        if buffer_distance > 0:
            logger.info(f"Buffered sampling: {len(points)} assets, radius {buffer_distance:.0f} m")
            raw = await self.provider.sample_buffered(handle, points, buffer_distance)
            samples = {
                asset_id: SampleResult(
                    asset_id=asset_id,
                    depth_mean=dry_if_missing(mean),
                    depth_max=dry_if_missing(peak),
                )
                for asset_id, (mean, peak) in raw.items()
            }
        else:
            logger.info(f"Point sampling: {len(points)} assets")
            raw = await self.provider.sample_point(handle, points)
            samples = {
                asset_id: SampleResult(asset_id=asset_id, depth_point=dry_if_missing(depth))
                for asset_id, depth in raw.items()
            }

        requested = {a.id for a in assets}
        missing = requested - samples.keys()
        if missing:
            logger.warning(f"Provider returned no sample for asset ids {sorted(missing)}")

        return {asset_id: s for asset_id, s in samples.items() if asset_id in requested}
