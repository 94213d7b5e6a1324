"""Data models for the risk pipeline."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from flood_risk.utils.constants import DEPTH_MODES, RISK_LEVELS


@dataclass(frozen=True)
class Asset:
    """Physical site under assessment."""
    id: int
    name: str
    lon: float
    lat: float
    asset_value: float
    asset_class: str = "industry"

    @property
    def coords(self) -> list:
        return [self.lon, self.lat]

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "coords": self.coords,
            "lat": self.lat,
            "lon": self.lon,
            "asset_value": self.asset_value,
            "type": self.asset_class,
        }


@dataclass(frozen=True)
class QueryParameters:
    """Normalized hazard query parameters."""
    scenario: str
    year: int
    return_period: int
    model: str
    buffer_distance: float = 0.0

    @property
    def sampling_mode(self) -> str:
        return DEPTH_MODES["point"] if self.buffer_distance == 0 else DEPTH_MODES["buffered"]

    def to_dict(self) -> dict:
        return {
            "scenario": self.scenario,
            "year": self.year,
            "return_period": self.return_period,
            "model": self.model,
            "buffer_distance": self.buffer_distance,
        }


@dataclass(frozen=True)
class SampleResult:
    """Sampled hazard depth for one asset."""
    asset_id: int
    depth_point: Optional[float] = None
    depth_mean: Optional[float] = None
    depth_max: Optional[float] = None

    @property
    def is_buffered(self) -> bool:
        return self.depth_max is not None

    @property
    def depth_used(self) -> float:
        if self.is_buffered:
            return self.depth_max
        return self.depth_point or 0.0

    @property
    def depth_mode(self) -> str:
        return DEPTH_MODES["buffered"] if self.is_buffered else DEPTH_MODES["point"]


@dataclass(frozen=True)
class RiskRecord:
    """Risk figures for one asset."""
    asset: Asset
    depth_used: float
    depth_mean: Optional[float]
    depth_max: Optional[float]
    depth_mode: str
    damage_ratio: float
    financial_loss: float
    risk_level: str
    model_used: Optional[str]
    return_period: int
    buffer_distance: float

    def to_dict(self) -> dict:
        return {
            **self.asset.to_dict(),
            "depth_used": self.depth_used,
            "depth_m": self.depth_used,
            "depth_mean": self.depth_mean,
            "depth_max": self.depth_max,
            "depth_mode": self.depth_mode,
            "damage_ratio": self.damage_ratio,
            "financial_loss": self.financial_loss,
            "risk_level": self.risk_level,
            "model_used": self.model_used,
            "return_period": self.return_period,
            "buffer_distance": self.buffer_distance,
        }


@dataclass
class RiskResult:
    """Complete pipeline output for one request."""
    params: QueryParameters
    records: list
    has_data: bool = True
    model_used: Optional[str] = None
    model_fallback: bool = False
    dropped_assets: list = field(default_factory=list)
    duration_seconds: float = 0.0
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def summary(self) -> dict:
        levels = {label: 0 for label in RISK_LEVELS.values()}
        for record in self.records:
            levels[record.risk_level] = levels.get(record.risk_level, 0) + 1

        total_value = sum(r.asset.asset_value for r in self.records)
        total_loss = sum(r.financial_loss for r in self.records)
        return {
            "asset_count": len(self.records),
            "total_asset_value": total_value,
            "total_financial_loss": total_loss,
            "portfolio_loss_ratio": total_loss / total_value if total_value else 0.0,
            "risk_levels": levels,
            "max_depth_m": max((r.depth_used for r in self.records), default=0.0),
        }

    def to_dict(self) -> dict:
        return {
            "params": self.params.to_dict(),
            "has_data": self.has_data,
            "model_used": self.model_used,
            "model_fallback": self.model_fallback,
            "dropped_assets": self.dropped_assets,
            "duration_seconds": self.duration_seconds,
            "timestamp": self.timestamp.isoformat(),
            "summary": self.summary(),
            "records": [r.to_dict() for r in self.records],
        }
