"""FastAPI application."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Any, Optional

from fastapi import Body, Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from pydantic import BaseModel

from flood_risk.core import RequestNormalizer, RiskPipeline
from flood_risk.core.exceptions import AssetValidationError, HazardProviderError, HazardProviderTimeout
from flood_risk.data_sources import GEEClient, HazardProvider
from flood_risk.utils.config import settings
from flood_risk.utils.constants import (
    CLIMATE_MODELS,
    DEMO_FACTORIES,
    SCENARIOS,
    YEARS,
)
from flood_risk.utils.logger import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    setup_logging()
    provider = GEEClient()
    if provider.authenticate():
        logger.info("Hazard provider ready")
    else:
        logger.error("Hazard provider failed to initialize; risk requests will fail")
    app.state.provider = provider
    yield


app = FastAPI(
    title="Flood Risk Scanner API",
    description="Riverine flood financial risk for asset portfolios",
    version=settings.app.version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.api.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


class RiskRecordOut(BaseModel):
    id: int
    name: str
    coords: list[float]
    lat: float
    lon: float
    asset_value: float
    type: str
    depth_used: float
    depth_m: float
    depth_mean: Optional[float] = None
    depth_max: Optional[float] = None
    depth_mode: str
    damage_ratio: float
    financial_loss: float
    risk_level: str
    model_used: Optional[str] = None
    return_period: int
    buffer_distance: float


def get_provider(request: Request) -> HazardProvider:
    provider = getattr(request.app.state, "provider", None)
    if provider is None:
        provider = GEEClient()
        request.app.state.provider = provider
    return provider


def get_normalizer() -> RequestNormalizer:
    return RequestNormalizer()


@app.exception_handler(AssetValidationError)
async def asset_validation_handler(request: Request, exc: AssetValidationError):
    return JSONResponse(status_code=400, content={"error": str(exc)})


@app.exception_handler(HazardProviderError)
async def provider_error_handler(request: Request, exc: HazardProviderError):
    status = 504 if isinstance(exc, HazardProviderTimeout) else 502
    logger.error(f"Provider error during {exc.operation or 'request'}: {exc.message}")
    return JSONResponse(status_code=status, content={"error": exc.message})


@app.get("/health")
async def health(provider: HazardProvider = Depends(get_provider)):
    """Health check endpoint."""
    ready = bool(getattr(provider, "initialized", True))
    return {
        "status": "healthy" if ready else "degraded",
        "hazard_provider": "connected" if ready else "disconnected",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


@app.get("/api/v1/options")
async def get_options(normalizer: RequestNormalizer = Depends(get_normalizer)):
    """Supported query parameter values."""
    risk = normalizer.config
    return {
        "scenarios": SCENARIOS,
        "years": YEARS,
        "return_periods": normalizer.return_periods,
        "models": CLIMATE_MODELS,
        "max_buffer_m": risk.max_buffer_m,
        "defaults": {
            "scenario": risk.default_scenario,
            "year": risk.default_year,
            "return_period": normalizer.default_return_period,
            "model": risk.default_model,
        },
    }


@app.get("/api/risk", response_model=list[RiskRecordOut])
async def risk_demo(
    request: Request,
    provider: HazardProvider = Depends(get_provider),
    normalizer: RequestNormalizer = Depends(get_normalizer),
):
    """Risk for the demo portfolio, parameters from the query string."""
    payload = {**request.query_params, "factories": DEMO_FACTORIES}
    result = await RiskPipeline(provider, normalizer).run(payload)
    return [r.to_dict() for r in result.records]


@app.post("/api/risk", response_model=list[RiskRecordOut])
async def risk(
    payload: dict[str, Any] = Body(...),
    provider: HazardProvider = Depends(get_provider),
    normalizer: RequestNormalizer = Depends(get_normalizer),
):
    """Risk records for an uploaded portfolio."""
    result = await RiskPipeline(provider, normalizer).run(payload)
    return [r.to_dict() for r in result.records]


@app.post("/api/v1/risk")
async def risk_report(
    payload: dict[str, Any] = Body(...),
    provider: HazardProvider = Depends(get_provider),
    normalizer: RequestNormalizer = Depends(get_normalizer),
):
    """Risk records plus resolved parameters and portfolio summary."""
    result = await RiskPipeline(provider, normalizer).run(payload)
    return result.to_dict()
