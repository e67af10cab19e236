"""Tests for config and logging."""

import json
import logging
import os
import sys
from datetime import datetime
from pathlib import Path
from unittest.mock import patch

import pytest

from ledger_cycles.config import (
    DateConfig,
    ImportConfig,
    InstallmentConfig,
    LedgerConfig,
    OutputConfig,
)
from ledger_cycles.exceptions import ConfigurationError
from ledger_cycles.logging import JsonFormatter, get_logger, setup_logging
from ledger_cycles.models.ledger import EntryStatus, RoundingPolicy
from ledger_cycles.mutations import toggle_invoice_status
from ledger_cycles.store import LedgerDataStore


class TestSectionConfigs:
    """Tests for the individual config sections."""

    def test_date_defaults(self) -> None:
        assert DateConfig().normalized_hour == 12

    @pytest.mark.parametrize("hour", [-1, 24])
    def test_date_hour_validated(self, hour: int) -> None:
        with pytest.raises(ConfigurationError):
            DateConfig(normalized_hour=hour)

    def test_installment_defaults(self) -> None:
        assert InstallmentConfig().rounding_policy == RoundingPolicy.INDEPENDENT

    def test_import_defaults(self) -> None:
        config = ImportConfig()

        assert config.date_format == "%d/%m/%Y"
        assert config.default_closing_day == 1

    def test_output_defaults(self) -> None:
        config = OutputConfig()

        assert config.json_output_dir == Path("output")
        assert config.pretty_json is False


class TestLedgerConfig:
    """Tests for LedgerConfig."""

    def test_default_values(self) -> None:
        config = LedgerConfig()

        assert isinstance(config.dates, DateConfig)
        assert isinstance(config.installments, InstallmentConfig)
        assert isinstance(config.importing, ImportConfig)
        assert isinstance(config.output, OutputConfig)
        assert config.seed is None
        assert config.locale == "pt_BR"
        assert config.log_level == "INFO"
        assert config.log_format == "standard"

    def test_from_env(self) -> None:
        env_vars = {
            "LOG_LEVEL": "DEBUG",
            "LOG_FORMAT": "json",
            "SEED": "12345",
            "FAKER_LOCALE": "en_US",
            "NORMALIZED_HOUR": "9",
            "STATEMENT_DATE_FORMAT": "%Y-%m-%d",
            "DEFAULT_CLOSING_DAY": "5",
            "ROUNDING_POLICY": "last_absorbs",
            "OUTPUT_DIR": "/data/output",
            "PRETTY_JSON": "true",
        }

        with patch.dict(os.environ, env_vars):
            config = LedgerConfig.from_env()

        assert config.log_level == "DEBUG"
        assert config.log_format == "json"
        assert config.seed == 12345
        assert config.locale == "en_US"
        assert config.dates.normalized_hour == 9
        assert config.importing.date_format == "%Y-%m-%d"
        assert config.importing.default_closing_day == 5
        assert config.installments.rounding_policy == RoundingPolicy.LAST_ABSORBS
        assert config.output.json_output_dir == Path("/data/output")
        assert config.output.pretty_json is True

    def test_from_env_defaults(self) -> None:
        keys = ["SEED", "ROUNDING_POLICY", "NORMALIZED_HOUR", "DEFAULT_CLOSING_DAY", "LOG_LEVEL"]
        with patch.dict(os.environ, {}, clear=False):
            for key in keys:
                os.environ.pop(key, None)
            config = LedgerConfig.from_env()

        assert config.seed is None
        assert config.installments.rounding_policy == RoundingPolicy.INDEPENDENT
        assert config.dates.normalized_hour == 12

    def test_from_env_unknown_policy(self) -> None:
        with patch.dict(os.environ, {"ROUNDING_POLICY": "banker"}):
            with pytest.raises(ConfigurationError):
                LedgerConfig.from_env()

    def test_from_env_bad_integer(self) -> None:
        with patch.dict(os.environ, {"NORMALIZED_HOUR": "noon"}):
            with pytest.raises(ConfigurationError):
                LedgerConfig.from_env()

    def test_from_env_bad_seed(self) -> None:
        with patch.dict(os.environ, {"SEED": "forty-two"}):
            with pytest.raises(ConfigurationError):
                LedgerConfig.from_env()

    def test_from_env_hour_out_of_range(self) -> None:
        with patch.dict(os.environ, {"NORMALIZED_HOUR": "30"}):
            with pytest.raises(ConfigurationError):
                LedgerConfig.from_env()


class TestLogging:
    """Tests for logging setup."""

    def test_setup_standard(self) -> None:
        setup_logging(level="DEBUG")

        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)
        assert logging.getLogger("faker").level == logging.WARNING

    def test_setup_json(self) -> None:
        setup_logging(level="info", format_type="json")

        root = logging.getLogger()
        assert root.level == logging.INFO
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_unknown_level_falls_back_to_info(self) -> None:
        setup_logging(level="CHATTY")

        assert logging.getLogger().level == logging.INFO

    def test_json_formatter_output(self) -> None:
        record = logging.LogRecord(
            name="ledger_cycles.test",
            level=logging.INFO,
            pathname=__file__,
            lineno=1,
            msg="applied %d entries",
            args=(3,),
            exc_info=None,
        )
        record.extra = {"user_id": "u1"}

        data = json.loads(JsonFormatter().format(record))

        assert data["level"] == "INFO"
        assert data["logger"] == "ledger_cycles.test"
        assert data["message"] == "applied 3 entries"
        assert data["user_id"] == "u1"
        assert "timestamp" in data

    def test_json_formatter_exception(self) -> None:
        try:
            raise ValueError("boom")
        except ValueError:
            record = logging.LogRecord("x", logging.ERROR, __file__, 1, "failed", (), sys.exc_info())

        data = json.loads(JsonFormatter().format(record))

        assert "ValueError: boom" in data["exception"]

    def test_get_logger(self) -> None:
        logger = get_logger("ledger_cycles.something")

        assert logger.name == "ledger_cycles.something"

    def test_get_logger_with_context(self) -> None:
        logger = get_logger("ledger_cycles.store", user_id="u1")

        assert isinstance(logger, logging.LoggerAdapter)
        assert logger.extra == {"user_id": "u1"}


class TestLedgerContext:
    """Tests for ledger identifiers carried on log records."""

    def test_json_formatter_lifts_context_fields(self) -> None:
        record = logging.LogRecord("ledger_cycles.x", logging.INFO, __file__, 1, "toggled", (), None)
        record.card_id = "card-1"
        record.invoice_month = "2024-03"
        record.group_id = None

        data = json.loads(JsonFormatter().format(record))

        assert data["card_id"] == "card-1"
        assert data["invoice_month"] == "2024-03"
        assert "group_id" not in data

    def test_store_batch_record_carries_user(self, caplog, sample_card, make_entry) -> None:
        store = LedgerDataStore()
        store.add_card("user-9", sample_card)

        with caplog.at_level(logging.INFO, logger="ledger_cycles.store"):
            store.add_entry("user-9", make_entry(datetime(2024, 3, 1, 12)))

        [record] = [r for r in caplog.records if r.name == "ledger_cycles.store.ledger"]
        assert record.user_id == "user-9"
        assert json.loads(JsonFormatter().format(record))["user_id"] == "user-9"

    def test_invoice_toggle_record_carries_card(self, caplog, sample_card, make_entry) -> None:
        entries = [make_entry(datetime(2024, 3, 1, 12))]

        with caplog.at_level(logging.INFO, logger="ledger_cycles.mutations"):
            toggle_invoice_status(sample_card.card_id, 3, 2024, entries, [sample_card], EntryStatus.COMPLETED)

        [record] = [r for r in caplog.records if r.name == "ledger_cycles.mutations.status"]
        assert record.card_id == sample_card.card_id
        assert record.invoice_month == "2024-03"
