import logging
from logging.handlers import RotatingFileHandler

from core.config import Settings
from core.logger import configure_logging, log_file_path, logger


def _settings(tmp_path, **overrides):
    return Settings(database_url="sqlite://", secret_key="x" * 32, log_dir=str(tmp_path), **overrides)


def _file_handler():
    return next(h for h in logger.handlers if isinstance(h, RotatingFileHandler))


def test_level_and_rotation_come_from_settings(tmp_path):
    settings = _settings(tmp_path, log_level="warning", log_max_bytes=4096, log_backup_count=2)
    configure_logging(settings)

    assert logger.level == logging.WARNING
    handler = _file_handler()
    assert handler.baseFilename == str(log_file_path(settings))
    assert handler.maxBytes == 4096
    assert handler.backupCount == 2


def test_debug_overrides_level(tmp_path):
    configure_logging(_settings(tmp_path, log_level="ERROR", debug=True))
    assert logger.level == logging.DEBUG


def test_records_reach_the_log_file(tmp_path):
    settings = _settings(tmp_path / "nested")
    configure_logging(settings)

    logger.info("recipe service ready")
    _file_handler().flush()

    assert "recipe service ready" in log_file_path(settings).read_text(encoding="utf-8")
