"""Hazard dataset selection with model fallback."""

from dataclasses import dataclass
from typing import Optional

from loguru import logger

from flood_risk.core.models import QueryParameters
from flood_risk.data_sources.base import DatasetHandle, HazardProvider
from flood_risk.utils.constants import FLOOD_TYPE_RIVERINE


@dataclass(frozen=True)
class HazardPlan:
    """Dataset chosen for sampling."""
    handle: Optional[DatasetHandle]
    has_data: bool
    dataset_size: int = 0
    model_used: Optional[str] = None
    model_fallback: bool = False


class HazardQueryPlanner:
    """
    Select the hazard dataset for a set of query parameters.

    Model coverage is sparse: the requested model is preferred, but when it
    has no image for the scenario/year/return-period combination the broader
    set (any model) is used instead. An empty broad set is a coverage gap,
    reported through `has_data=False` rather than an error.
    """

    def __init__(self, provider: HazardProvider, flood_type: str = FLOOD_TYPE_RIVERINE):
        self.provider = provider
        self.flood_type = flood_type

    async def plan(self, params: QueryParameters) -> HazardPlan:
        broad = self.provider.query_dataset(
            self.flood_type, params.scenario, params.return_period, params.year,
        )
        size = await self.provider.dataset_size(broad)
        if size == 0:
            logger.warning(
                f"No hazard data for {params.scenario} / {params.year} / RP{params.return_period}"
            )
            return HazardPlan(handle=None, has_data=False)

        preferred = self.provider.query_dataset(
            self.flood_type, params.scenario, params.return_period, params.year, model=params.model,
        )
        preferred_size = await self.provider.dataset_size(preferred)
        if preferred_size > 0:
            logger.info(f"Using {preferred_size} image(s) for model {params.model}")
            return HazardPlan(
                handle=preferred,
                has_data=True,
                dataset_size=preferred_size,
                model_used=params.model,
            )

        model_used = await self.provider.dataset_model(broad)
        logger.warning(f"Model {params.model} has no coverage, falling back to {model_used or 'any model'}")
        return HazardPlan(
            handle=broad,
            has_data=True,
            dataset_size=size,
            model_used=model_used,
            model_fallback=True,
        )
