"""Unit tests for logging setup."""

import io
import json
import logging
from collections.abc import Iterator

import pytest

from uiforge.utils.logging import (
    ROOT_LOGGER_NAME,
    HumanFormatter,
    JSONFormatter,
    LogMode,
    UIForgeLogger,
    VerboseFormatter,
    configure_from_cli,
    get_logger,
    setup_logging,
)


def make_record(msg: str = "hello", level: int = logging.INFO) -> logging.LogRecord:
    """Build a LogRecord under the uiforge namespace."""
    return logging.LogRecord("uiforge.engines", level, __file__, 1, msg, (), None)


@pytest.fixture(autouse=True)
def reset_root_logger() -> Iterator[None]:
    """Restore the uiforge logger after each test."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    handlers, level, propagate = list(logger.handlers), logger.level, logger.propagate
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)
    logger.propagate = propagate


class TestFormatters:
    """Tests for the three output formats."""

    def test_human_plain(self) -> None:
        assert HumanFormatter(use_colors=False).format(make_record()) == "[INFO] hello"

    def test_human_colored(self) -> None:
        output = HumanFormatter(use_colors=True).format(make_record(level=logging.ERROR))

        assert output.startswith("\033[31m[ERROR]")
        assert output.endswith(" hello")

    def test_verbose_includes_logger_name(self) -> None:
        output = VerboseFormatter(use_colors=False).format(make_record())

        assert output.startswith("[INFO][")
        assert output.endswith("] uiforge.engines: hello")

    def test_json_fields(self) -> None:
        data = json.loads(JSONFormatter().format(make_record("done")))

        assert data["level"] == "INFO"
        assert data["logger"] == "uiforge.engines"
        assert data["msg"] == "done"
        assert data["ts"].endswith("+00:00")

    def test_json_extra_data(self) -> None:
        record = make_record()
        record.extra_data = {"files": 3}  # type: ignore[attr-defined]

        assert json.loads(JSONFormatter().format(record))["files"] == 3


class TestSetupLogging:
    """Tests for logger configuration."""

    def test_human_mode_writes_to_stream(self) -> None:
        stream = io.StringIO()
        setup_logging(LogMode.HUMAN, logging.INFO, stream=stream)

        logging.getLogger("uiforge.engines.analysis").info("Analyzing")

        assert stream.getvalue() == "[INFO] Analyzing\n"

    def test_level_filters(self) -> None:
        stream = io.StringIO()
        setup_logging(LogMode.HUMAN, logging.WARNING, stream=stream)

        logger = get_logger()
        logger.info("hidden")
        logger.warning("shown")

        assert stream.getvalue() == "[WARNING] shown\n"

    def test_reconfiguring_replaces_handlers(self) -> None:
        setup_logging(stream=io.StringIO())
        setup_logging(stream=io.StringIO())

        assert len(logging.getLogger(ROOT_LOGGER_NAME).handlers) == 1

    def test_structured_logging_in_json_mode(self) -> None:
        """Test that keyword data is merged into JSON records."""
        stream = io.StringIO()
        setup_logging(LogMode.JSON, logging.INFO, stream=stream)

        logger = get_logger()
        assert isinstance(logger, UIForgeLogger)
        logger.structured(logging.INFO, "Migration finished", phases=2)

        data = json.loads(stream.getvalue())
        assert data["msg"] == "Migration finished"
        assert data["phases"] == 2

    def test_structured_respects_level(self) -> None:
        stream = io.StringIO()
        setup_logging(LogMode.JSON, logging.ERROR, stream=stream)

        get_logger().structured(logging.INFO, "ignored", x=1)

        assert stream.getvalue() == ""


class TestConfigureFromCli:
    """Tests for CLI flag mapping."""

    @pytest.mark.parametrize(
        ("flags", "level"),
        [
            ({}, logging.INFO),
            ({"verbose": True}, logging.DEBUG),
            ({"quiet": True}, logging.WARNING),
            ({"ci": True}, logging.INFO),
        ],
    )
    def test_levels(self, flags: dict[str, bool], level: int) -> None:
        configure_from_cli(**flags)

        assert logging.getLogger(ROOT_LOGGER_NAME).level == level

    def test_ci_uses_json(self) -> None:
        configure_from_cli(ci=True)

        handler = logging.getLogger(ROOT_LOGGER_NAME).handlers[0]
        assert isinstance(handler.formatter, JSONFormatter)

    def test_verbose_uses_verbose_formatter(self) -> None:
        configure_from_cli(verbose=True)

        handler = logging.getLogger(ROOT_LOGGER_NAME).handlers[0]
        assert isinstance(handler.formatter, VerboseFormatter)
