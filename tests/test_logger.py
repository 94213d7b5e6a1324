"""Tests for log sink setup."""

import pytest
from loguru import logger

from flood_risk.utils.config import LoggingConfig
from flood_risk.utils.logger import resolve_log_dir, setup_logging


@pytest.fixture()
def restore_logger():
    yield
    logger.remove()


def test_file_sinks_follow_config(tmp_path, restore_logger):
    config = LoggingConfig(
        level="INFO",
        log_dir=str(tmp_path / "logs"),
        file_name="risk.log",
        error_file_name="risk_errors.log",
    )
    log_dir = setup_logging(config)
    logger.info("sampled 3 assets")
    logger.error("provider failed")
    logger.remove()

    assert log_dir == tmp_path / "logs"
    main_log = (log_dir / "risk.log").read_text()
    error_log = (log_dir / "risk_errors.log").read_text()
    assert "sampled 3 assets" in main_log and "provider failed" in main_log
    assert "provider failed" in error_log
    assert "sampled 3 assets" not in error_log


def test_file_sinks_can_be_disabled(tmp_path, restore_logger):
    config = LoggingConfig(to_file=False, log_dir=str(tmp_path / "logs"))
    assert setup_logging(config) is None
    assert not (tmp_path / "logs").exists()


def test_relative_log_dir_under_project_root():
    log_dir = resolve_log_dir(LoggingConfig(log_dir="logs"))
    assert log_dir.is_absolute()
    assert log_dir.name == "logs"
