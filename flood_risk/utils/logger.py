"""Loguru sinks for the API, the CLI and the pipeline."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from flood_risk.utils.config import LoggingConfig, get_project_root, settings


def resolve_log_dir(config: LoggingConfig) -> Path:
    """Relative log dirs live under the project root."""
    log_dir = Path(config.log_dir)
    if not log_dir.is_absolute():
        log_dir = get_project_root() / log_dir
    return log_dir


def setup_logging(config: Optional[LoggingConfig] = None) -> Optional[Path]:
    """Replace loguru's default sink; return the log dir when file sinks are on."""
    config = config or settings.logging
    logger.remove()

    logger.add(sys.stderr, format=config.format, level=config.level, colorize=True)

    log_dir = None
    if config.to_file:
        log_dir = resolve_log_dir(config)
        log_dir.mkdir(parents=True, exist_ok=True)

        file_sinks = [
            (config.file_name, config.level),
            (config.error_file_name, config.error_level),
        ]
        for file_name, level in file_sinks:
            logger.add(
                log_dir / file_name,
                format=config.format,
                level=level,
                rotation=config.rotation,
                retention=config.retention,
                compression="zip",
                serialize=config.serialize,
            )

    logger.info(
        f"Logging initialized for {settings.app.name} ({settings.app.environment}) - "
        f"Level: {config.level}, files: {log_dir or 'off'}"
    )
    return log_dir
