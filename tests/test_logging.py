"""Tests for storeprovider.logging module."""

import json

import pytest
import structlog

from storeprovider import logging as store_logging
from storeprovider.errors import InvalidConfigError
from storeprovider.logging import (
    LogContext,
    bind_context,
    configure_logging,
    get_logger,
    unbind_context,
)


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.contextvars.clear_contextvars()
    structlog.reset_defaults()


class TestProcessors:
    def test_service_metadata_added(self):
        event = store_logging._add_service_metadata(None, "info", {"event": "x"})
        assert event["service.name"] == store_logging._SERVICE_NAME

    def test_service_metadata_not_overwritten(self):
        event = store_logging._add_service_metadata(None, "info", {"service.name": "other"})
        assert event["service.name"] == "other"

    def test_elasticsearch_renaming(self):
        event = store_logging._elasticsearch_compatible(
            None, "info", {"timestamp": "t", "level": "info", "event": "x"}
        )
        assert event == {"@timestamp": "t", "log.level": "info", "event": "x"}


class TestConfigureLogging:
    def test_json_output(self, capsys):
        configure_logging(level="INFO", json_format=True, service="documize")
        get_logger("storeprovider.test").info("provider_activated", store_type="mysql")

        line = capsys.readouterr().out.strip().splitlines()[-1]
        record = json.loads(line)
        assert record["event"] == "provider_activated"
        assert record["store_type"] == "mysql"
        assert record["service.name"] == "documize"
        assert record["log.level"] == "info"
        assert "@timestamp" in record

    def test_level_filters(self, capsys):
        configure_logging(level="WARNING", json_format=True)
        get_logger("storeprovider.test").info("hidden")
        assert "hidden" not in capsys.readouterr().out

    def test_bound_context_included(self, capsys):
        configure_logging(level="INFO", json_format=True)
        with LogContext(variant="mariadb"):
            get_logger("storeprovider.test").info("database_meta")
        get_logger("storeprovider.test").info("after")

        lines = [json.loads(line) for line in capsys.readouterr().out.strip().splitlines()]
        assert lines[-2]["variant"] == "mariadb"
        assert "variant" not in lines[-1]

    def test_bind_and_unbind(self, capsys):
        configure_logging(level="INFO", json_format=True)
        bind_context(database="documize")
        unbind_context("database")
        get_logger("storeprovider.test").info("checked")
        record = json.loads(capsys.readouterr().out.strip().splitlines()[-1])
        assert "database" not in record

    @pytest.mark.parametrize("level", ["debug", "Warning", "ERROR"])
    def test_level_names_case_insensitive(self, level):
        configure_logging(level=level, json_format=True)

    @pytest.mark.parametrize("level", ["LOUD", "", "Level 5"])
    def test_unknown_level_rejected(self, level):
        with pytest.raises(InvalidConfigError) as exc_info:
            configure_logging(level=level)
        assert exc_info.value.key == "log_level"
        assert exc_info.value.value == level
