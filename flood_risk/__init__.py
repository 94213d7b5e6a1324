"""Flood Risk Scanner: riverine flood financial risk for asset portfolios."""

__version__ = "0.1.0"
