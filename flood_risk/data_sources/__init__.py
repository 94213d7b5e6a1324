"""Data sources module."""

from flood_risk.data_sources.base import DatasetHandle, HazardProvider
from flood_risk.data_sources.gee_client import GEEClient, gee_client

__all__ = ["DatasetHandle", "HazardProvider", "GEEClient", "gee_client"]
