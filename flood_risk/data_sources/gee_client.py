"""Google Earth Engine client for Aqueduct riverine flood hazard sampling."""

import asyncio
import json
from pathlib import Path
from typing import Any, Optional, Sequence

import ee
from loguru import logger

from flood_risk.core.exceptions import HazardProviderError, HazardProviderTimeout
from flood_risk.data_sources.base import DatasetHandle, HazardProvider
from flood_risk.utils.config import GEEConfig, settings
from flood_risk.utils.constants import GEE_DATASET_PROPERTIES

ASSET_ID_PROPERTY = "asset_id"


def parse_point_features(data: dict) -> dict:
    """Map a reduceRegions(mean) result to {asset_id: depth or None}."""
    samples = {}
    for feature in data.get("features", []):
        props = feature.get("properties", {})
        asset_id = props.get(ASSET_ID_PROPERTY)
        if asset_id is None:
            continue
        samples[int(asset_id)] = props.get("mean")
    return samples


def parse_buffered_features(data: dict) -> dict:
    """Map a reduceRegions(mean+max) result to {asset_id: (mean, max)}."""
    samples = {}
    for feature in data.get("features", []):
        props = feature.get("properties", {})
        asset_id = props.get(ASSET_ID_PROPERTY)
        if asset_id is None:
            continue
        samples[int(asset_id)] = (props.get("mean"), props.get("max"))
    return samples


class GEEClient(HazardProvider):
    """Hazard provider backed by WRI Aqueduct Flood Hazard Maps on GEE."""

    def __init__(self, config: Optional[GEEConfig] = None):
        self.config = config or settings.gee
        self.initialized = False
        self.project_id = self.config.project_id
        self.key_path = self.config.service_account_key
        self.timeout = self.config.timeout_seconds

    def authenticate(self) -> bool:
        """Authenticate with GEE using service account."""
        if self.initialized:
            return True

        try:
            if self.key_path and Path(self.key_path).exists():
                with open(self.key_path) as f:
                    sa = json.load(f)
                if not sa.get("private_key"):
                    raise ValueError("Key file looks wrong. Does it have a 'private_key' field?")
                credentials = ee.ServiceAccountCredentials(sa["client_email"], self.key_path)
                ee.Initialize(credentials=credentials, project=self.project_id)
                logger.info("GEE authenticated via service account")
            else:
                ee.Initialize(project=self.project_id)
                logger.info("GEE initialized with default credentials")

            self.initialized = True
            return True
        except Exception as e:
            logger.error(f"GEE auth failed: {e}")
            return False

    def query_dataset(
        self,
        flood_type: str,
        scenario: str,
        return_period: int,
        year: int,
        model: Optional[str] = None,
    ) -> DatasetHandle:
        """Build the filtered image collection (lazy, no request sent)."""
        self._require_initialized("query_dataset")
        props = GEE_DATASET_PROPERTIES
        collection = (
            ee.ImageCollection(self.config.collection)
            .filter(ee.Filter.eq(props["flood_type"], flood_type))
            .filter(ee.Filter.eq(props["scenario"], scenario))
            .filter(ee.Filter.eq(props["return_period"], return_period))
            .filter(ee.Filter.eq(props["year"], year))
        )
        if model:
            collection = collection.filter(ee.Filter.eq(props["model"], model))

        return DatasetHandle(
            flood_type=flood_type,
            scenario=scenario,
            return_period=return_period,
            year=year,
            model=model,
            collection=collection,
        )

    async def dataset_size(self, handle: DatasetHandle) -> int:
        count = await self._evaluate(handle.collection.size(), "dataset_size")
        return int(count or 0)

    async def dataset_model(self, handle: DatasetHandle) -> Optional[str]:
        first = ee.Image(handle.collection.first())
        return await self._evaluate(first.get(GEE_DATASET_PROPERTIES["model"]), "dataset_model")

    async def sample_point(self, handle: DatasetHandle, points: Sequence[tuple]) -> dict:
        self._require_initialized("sample_point")
        features = ee.FeatureCollection([
            ee.Feature(ee.Geometry.Point([lon, lat]), {ASSET_ID_PROPERTY: asset_id})
            for asset_id, lon, lat in points
        ])
        reduced = self._depth_image(handle).reduceRegions(
            collection=features,
            reducer=ee.Reducer.mean(),
            scale=self.config.scale_m,
        )
        data = await self._evaluate(reduced, "sample_point")
        return parse_point_features(data or {})

    async def sample_buffered(self, handle: DatasetHandle, points: Sequence[tuple], radius_m: float) -> dict:
        self._require_initialized("sample_buffered")
        features = ee.FeatureCollection([
            ee.Feature(ee.Geometry.Point([lon, lat]).buffer(radius_m), {ASSET_ID_PROPERTY: asset_id})
            for asset_id, lon, lat in points
        ])
        reducer = ee.Reducer.mean().combine(reducer2=ee.Reducer.max(), sharedInputs=True)
        reduced = self._depth_image(handle).reduceRegions(
            collection=features,
            reducer=reducer,
            scale=self.config.scale_m,
        )
        data = await self._evaluate(reduced, "sample_buffered")
        return parse_buffered_features(data or {})

    def _depth_image(self, handle: DatasetHandle) -> ee.Image:
        # Cells without data are dry.
        return ee.Image(handle.collection.first()).select(self.config.band).unmask(0)

    def _require_initialized(self, operation: str) -> None:
        # authenticate() blocks on the network; it runs at startup only.
        if not self.initialized:
            raise HazardProviderError("Earth Engine is not initialized", operation)

    async def _evaluate(self, obj: Any, operation: str) -> Any:
        """Run a blocking getInfo() off the event loop, with a timeout."""
        try:
            return await asyncio.wait_for(asyncio.to_thread(obj.getInfo), timeout=self.timeout)
        except asyncio.TimeoutError:
            logger.error(f"GEE {operation} timed out after {self.timeout}s")
            raise HazardProviderTimeout(f"Earth Engine did not respond within {self.timeout}s", operation)
        except ee.EEException as e:
            logger.error(f"GEE {operation} failed: {e}")
            raise HazardProviderError(str(e), operation) from e
        except Exception as e:
            logger.error(f"GEE {operation} request error: {e}")
            raise HazardProviderError(str(e), operation) from e


gee_client = GEEClient()
