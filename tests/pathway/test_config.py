import json
import logging

import pytest
from pydantic import ValidationError

from services.pathway_engine.config import EngineSettings
from services.pathway_engine.logging_config import CustomJsonFormatter, setup_logging


def test_settings_defaults_point_at_assets():
    settings = EngineSettings()
    assert settings.reference_data_path.endswith("reference_data.yml")
    assert settings.rules_path.endswith("recommendation_rules.yml")
    assert settings.max_items == 6


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("PATHWAY_MAX_ITEMS", "4")
    monkeypatch.setenv("PATHWAY_LOG_LEVEL", "DEBUG")

    settings = EngineSettings()

    assert settings.max_items == 4
    assert settings.log_level == "DEBUG"


def test_settings_reject_zero_items(monkeypatch):
    monkeypatch.setenv("PATHWAY_MAX_ITEMS", "0")
    with pytest.raises(ValidationError):
        EngineSettings()


def test_json_formatter_output():
    formatter = CustomJsonFormatter('%(timestamp)s %(level)s %(name)s %(message)s')
    record = logging.LogRecord("pathway", logging.WARNING, __file__, 12, "tier failed", None, None)

    payload = json.loads(formatter.format(record))

    assert payload["message"] == "tier failed"
    assert payload["level"] == "WARNING"
    assert payload["lineno"] == 12
    assert "timestamp" in payload


def test_setup_logging_installs_one_handler():
    root_logger = logging.getLogger()
    original_handlers = list(root_logger.handlers)
    original_level = root_logger.level
    try:
        setup_logging("DEBUG")
        setup_logging("INFO")
        json_handlers = [h for h in root_logger.handlers if isinstance(h.formatter, CustomJsonFormatter)]
        assert len(json_handlers) == 1
        assert root_logger.level == logging.INFO
    finally:
        root_logger.handlers = original_handlers
        root_logger.setLevel(original_level)
