"""Join sampled depths with assets and turn them into losses."""

from typing import Optional, Sequence

from flood_risk.core.damage import damage_ratio, get_curve
from flood_risk.core.models import Asset, QueryParameters, RiskRecord
from flood_risk.utils.config import settings
from flood_risk.utils.constants import DEPTH_MODES, RISK_LEVELS


def classify_risk(financial_loss: float, threshold: float) -> str:
    if financial_loss > threshold:
        return RISK_LEVELS["high"]
    if financial_loss > 0:
        return RISK_LEVELS["medium"]
    return RISK_LEVELS["low"]


class RiskAggregator:
    """Apply damage curves per asset class and classify the loss."""

    def __init__(self, high_loss_threshold: Optional[float] = None):
        if high_loss_threshold is None:
            high_loss_threshold = settings.risk.high_loss_threshold
        self.high_loss_threshold = high_loss_threshold

    def aggregate(
        self,
        assets: Sequence[Asset],
        samples: dict,
        params: QueryParameters,
        model_used: Optional[str] = None,
    ) -> list:
        records = []
        for asset in assets:
            sample = samples.get(asset.id)
            if sample is None:
                continue

            depth = sample.depth_used
            ratio = damage_ratio(depth, get_curve(asset.asset_class))
            loss = asset.asset_value * ratio

            records.append(RiskRecord(
                asset=asset,
                depth_used=depth,
                depth_mean=sample.depth_mean,
                depth_max=sample.depth_max,
                depth_mode=sample.depth_mode,
                damage_ratio=ratio,
                financial_loss=loss,
                risk_level=classify_risk(loss, self.high_loss_threshold),
                model_used=model_used,
                return_period=params.return_period,
                buffer_distance=params.buffer_distance,
            ))
        return records

    def no_data(self, assets: Sequence[Asset], params: QueryParameters) -> list:
        """Records for a coverage gap: zero depth and loss, 'No Data' tier."""
        return [
            RiskRecord(
                asset=asset,
                depth_used=0.0,
                depth_mean=None,
                depth_max=None,
                depth_mode=DEPTH_MODES["none"],
                damage_ratio=0.0,
                financial_loss=0.0,
                risk_level=RISK_LEVELS["no_data"],
                model_used=None,
                return_period=params.return_period,
                buffer_distance=params.buffer_distance,
            )
            for asset in assets
        ]
