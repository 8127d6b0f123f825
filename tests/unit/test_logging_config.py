"""Unit tests for prioritysim logging configuration."""

from __future__ import annotations

import json
import logging
from logging.handlers import RotatingFileHandler
from unittest import mock

import prioritysim
from prioritysim.logging_config import LOGGER_NAME, JsonFormatter, SimClockFilter, _get_level, _get_logger


class TestSilentByDefault:
    def test_logger_has_null_handler(self):
        logger = logging.getLogger(LOGGER_NAME)
        assert any(isinstance(h, logging.NullHandler) for h in logger.handlers)

    def test_run_produces_no_output(self, capfd, constant_variates):
        config = prioritysim.SimulationConfig(
            sources=[prioritysim.SourceConfig(1.0, 1.0)],
            devices=[prioritysim.DeviceConfig(0.5)],
            buffer_capacity=1,
            max_served=3,
        )
        prioritysim.Simulation(config, variates=constant_variates).run()

        captured = capfd.readouterr()
        assert captured.out == ""
        assert captured.err == ""


class TestHelpers:
    def test_console_logging_sets_level(self):
        prioritysim.enable_console_logging(level="DEBUG")
        logger = _get_logger()
        assert logger.level == logging.DEBUG
        assert any(type(h) is logging.StreamHandler for h in logger.handlers)

    def test_file_logging_creates_parent_dirs(self, tmp_path):
        path = tmp_path / "nested" / "run.log"
        handler = prioritysim.enable_file_logging(path, level="INFO")

        logging.getLogger("prioritysim.simulation").info("hello")
        handler.flush()

        assert isinstance(handler, RotatingFileHandler)
        assert "hello" in path.read_text()

    def test_json_file_logging(self, tmp_path):
        path = tmp_path / "run.json"
        handler = prioritysim.enable_file_logging(path, json_lines=True)

        logging.getLogger("prioritysim.simulation").info("tick", extra={"sim_time": 2.5})
        handler.flush()

        record = json.loads(path.read_text().splitlines()[0])
        assert record["message"] == "tick"
        assert record["sim_time"] == 2.5
        assert record["logger"] == "prioritysim.simulation"

    def test_text_lines_carry_simulated_clock(self, tmp_path):
        path = tmp_path / "run.log"
        handler = prioritysim.enable_file_logging(path)

        logger = logging.getLogger("prioritysim.simulation")
        logger.info("departure", extra={"sim_time": 3.5})
        logger.info("stopped")
        handler.flush()

        first, second = path.read_text().splitlines()
        assert "[t=3.5000] departure" in first
        assert "[t=-] stopped" in second

    def test_set_module_level(self):
        prioritysim.set_module_level("entities.buffer", "WARNING")
        assert logging.getLogger("prioritysim.entities.buffer").level == logging.WARNING
        logging.getLogger("prioritysim.entities.buffer").setLevel(logging.NOTSET)

    def test_disable_logging(self):
        prioritysim.enable_console_logging()
        prioritysim.disable_logging()
        logger = _get_logger()
        assert all(isinstance(h, logging.NullHandler) for h in logger.handlers)
        assert logger.level > logging.CRITICAL

    def test_get_level(self):
        assert _get_level("warning") == logging.WARNING
        assert _get_level(15) == 15
        assert _get_level("bogus") == logging.INFO


class TestJsonFormatter:
    def test_omits_sim_time_when_absent(self):
        record = logging.LogRecord("prioritysim", logging.INFO, __file__, 1, "msg %d", (3,), None)
        payload = json.loads(JsonFormatter().format(record))
        assert payload["message"] == "msg 3"
        assert "sim_time" not in payload


class TestSimClockFilter:
    def test_marks_records_without_sim_time(self):
        record = logging.LogRecord("prioritysim", logging.INFO, __file__, 1, "msg", (), None)
        assert SimClockFilter().filter(record)
        assert record.sim_clock == "-"


class TestConfigureFromEnv:
    def test_noop_without_env(self):
        with mock.patch.dict("os.environ", {}, clear=True):
            prioritysim.configure_from_env()
        assert all(isinstance(h, logging.NullHandler) for h in _get_logger().handlers)

    def test_level_enables_console(self):
        with mock.patch.dict("os.environ", {"PS_LOGGING": "debug"}, clear=True):
            prioritysim.configure_from_env()
        assert _get_logger().level == logging.DEBUG

    def test_file_from_env(self, tmp_path):
        path = tmp_path / "env.log"
        with mock.patch.dict("os.environ", {"PS_LOG_FILE": str(path)}, clear=True):
            prioritysim.configure_from_env()
        assert any(isinstance(h, RotatingFileHandler) for h in _get_logger().handlers)
