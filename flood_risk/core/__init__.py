"""Core module."""
from flood_risk.core.damage import DamageCurve, damage_ratio, get_curve
from flood_risk.core.exceptions import AssetValidationError, HazardProviderError, HazardProviderTimeout
from flood_risk.core.formatter import format_output
from flood_risk.core.models import Asset, QueryParameters, RiskRecord, RiskResult, SampleResult
from flood_risk.core.normalizer import RequestNormalizer, request_normalizer
from flood_risk.core.pipeline import RiskPipeline
