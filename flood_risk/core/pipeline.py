"""Flood risk pipeline: normalize, plan, sample, aggregate."""

from datetime import datetime, timezone
from typing import Mapping, Optional

from loguru import logger

from flood_risk.core.aggregator import RiskAggregator
from flood_risk.core.models import RiskResult
from flood_risk.core.normalizer import RequestNormalizer
from flood_risk.core.planner import HazardQueryPlanner
from flood_risk.core.sampler import SpatialSampler
from flood_risk.data_sources.base import HazardProvider


class RiskPipeline:
    """Per-request flood risk assessment over an injected hazard provider."""

    def __init__(
        self,
        provider: HazardProvider,
        normalizer: Optional[RequestNormalizer] = None,
        aggregator: Optional[RiskAggregator] = None,
    ):
        self.provider = provider
        self.normalizer = normalizer or RequestNormalizer()
        self.planner = HazardQueryPlanner(provider)
        self.sampler = SpatialSampler(provider)
        self.aggregator = aggregator or RiskAggregator()

    async def run(self, payload: Mapping) -> RiskResult:
        """
        Assess one request payload.

        Raises AssetValidationError before any provider call when no asset
        survives validation, and HazardProviderError when the provider fails;
        there is no partial result in either case.
        """
        start = datetime.now(timezone.utc)

        params, assets = self.normalizer.normalize(payload)
        logger.info(
            f"Calculating for: {params.scenario} / {params.year} / RP{params.return_period} / "
            f"{params.model} / buffer {params.buffer_distance:g} m ({len(assets)} assets)"
        )

        plan = await self.planner.plan(params)

        if not plan.has_data:
            records = self.aggregator.no_data(assets, params)
            return RiskResult(
                params=params,
                records=records,
                has_data=False,
                duration_seconds=self._elapsed(start),
                timestamp=start,
            )

        samples = await self.sampler.sample(plan.handle, assets, params.buffer_distance)
        records = self.aggregator.aggregate(assets, samples, params, plan.model_used)
        dropped = [a.id for a in assets if a.id not in samples]

        result = RiskResult(
            params=params,
            records=records,
            has_data=True,
            model_used=plan.model_used,
            model_fallback=plan.model_fallback,
            dropped_assets=dropped,
            duration_seconds=self._elapsed(start),
            timestamp=start,
        )
        summary = result.summary()
        logger.info(
            f"Risk done: {summary['asset_count']} assets, "
            f"loss {summary['total_financial_loss']:,.0f}, {result.duration_seconds:.2f}s"
        )
        return result

    def _elapsed(self, start: datetime) -> float:
        return (datetime.now(timezone.utc) - start).total_seconds()
