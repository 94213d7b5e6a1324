"""Configuration loader for Flood Risk Scanner."""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


class GEEConfig(BaseModel):
    project_id: Optional[str] = None
    service_account_key: Optional[str] = None
    collection: str = "WRI/Aqueduct_Flood_Hazard_Maps/V2"
    band: str = "inundation_depth"
    scale_m: int = 30
    timeout_seconds: float = 120.0


class APIConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 3001
    reload: bool = True
    workers: int = 1
    cors_origins: list[str] = ["*"]


class RiskConfig(BaseModel):
    default_scenario: str = "rcp8p5"
    default_year: int = 2050
    default_return_period: int = 100
    default_model: str = "0000GFDL_ESM2M"
    max_buffer_m: float = 50000.0
    # Same currency unit as asset_value.
    high_loss_threshold: float = 10_000_000.0
    legacy_return_periods: bool = False


class LoggingConfig(BaseModel):
    level: str = "DEBUG"
    format: str = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
    rotation: str = "10 MB"
    retention: str = "7 days"
    to_file: bool = True
    log_dir: str = "logs"
    file_name: str = "flood_risk.log"
    error_file_name: str = "flood_risk_errors.log"
    error_level: str = "ERROR"
    serialize: bool = False


class AppConfig(BaseModel):
    name: str = "flood_risk_scanner"
    version: str = "0.1.0"
    environment: str = "development"
    debug: bool = True


class Settings(BaseModel):
    app: AppConfig = AppConfig()
    logging: LoggingConfig = LoggingConfig()
    gee: GEEConfig = GEEConfig()
    api: APIConfig = APIConfig()
    risk: RiskConfig = RiskConfig()


def get_project_root() -> Path:
    return Path(__file__).parent.parent.parent


def load_yaml_config(env: str = "development") -> dict[str, Any]:
    config_path = get_project_root() / "config" / "environments" / f"{env}.yaml"
    if not config_path.exists():
        return {}
    with open(config_path, "r") as f:
        return yaml.safe_load(f) or {}


def get_settings(env: Optional[str] = None) -> Settings:
    env = env or os.getenv("APP_ENV", "development")
    yaml_config = load_yaml_config(env)

    # Override with env vars
    if os.getenv("GEE_PROJECT_ID"):
        yaml_config.setdefault("gee", {})["project_id"] = os.getenv("GEE_PROJECT_ID")
    if os.getenv("GEE_SERVICE_ACCOUNT_KEY"):
        yaml_config.setdefault("gee", {})["service_account_key"] = os.getenv("GEE_SERVICE_ACCOUNT_KEY")
    if os.getenv("GEE_TIMEOUT_SECONDS"):
        yaml_config.setdefault("gee", {})["timeout_seconds"] = os.getenv("GEE_TIMEOUT_SECONDS")
    if os.getenv("RISK_HIGH_LOSS_THRESHOLD"):
        yaml_config.setdefault("risk", {})["high_loss_threshold"] = os.getenv("RISK_HIGH_LOSS_THRESHOLD")
    if os.getenv("RISK_LEGACY_RETURN_PERIODS"):
        yaml_config.setdefault("risk", {})["legacy_return_periods"] = os.getenv("RISK_LEGACY_RETURN_PERIODS")

    return Settings(**yaml_config) if yaml_config else Settings()


settings = get_settings()
