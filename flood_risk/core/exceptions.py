"""Exceptions raised by the risk pipeline."""


class FloodRiskError(Exception):
    """Base class for pipeline errors."""


class AssetValidationError(FloodRiskError):
    """The request carries no usable asset."""


class HazardProviderError(FloodRiskError):
    """The hazard data provider failed a query or sampling call."""

    def __init__(self, message: str, operation: str = ""):
        super().__init__(message)
        self.message = message
        self.operation = operation


class HazardProviderTimeout(HazardProviderError):
    """The hazard data provider did not answer in time."""
