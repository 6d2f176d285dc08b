"""Tests for correlation-aware logging."""

import logging

import pytest

from tag_soup_parser.shared import CorrelationLogger, get_logger, set_package_level


class TestCorrelationLogger:
    """Tests for correlation-aware logging."""

    def test_component_defaults_to_module_name(self) -> None:
        """Test the component is derived from the logger name."""
        logger = get_logger("tag_soup_parser.tokenization.tokenizer")
        assert isinstance(logger, CorrelationLogger)
        assert logger.component == "tokenizer"
        assert logger.correlation_id is None

    def test_records_carry_correlation_info(self, caplog: pytest.LogCaptureFixture) -> None:
        """Test component and correlation ID are attached to records."""
        logger = get_logger("tag_soup_parser.test", correlation_id="req-7", component="unit")
        with caplog.at_level(logging.DEBUG, logger="tag_soup_parser.test"):
            logger.debug("scanning", extra={"position": 3})
            logger.warning("odd input")
        assert [record.levelname for record in caplog.records] == ["DEBUG", "WARNING"]
        record = caplog.records[0]
        assert record.component == "unit"
        assert record.correlation_id == "req-7"
        assert record.position == 3

    def test_is_debug_enabled(self) -> None:
        """Test the debug check follows the logger level."""
        logger = get_logger("tag_soup_parser.level_check")
        logger.logger.setLevel(logging.INFO)
        assert not logger.is_debug_enabled()
        logger.logger.setLevel(logging.DEBUG)
        assert logger.is_debug_enabled()
        logger.logger.setLevel(logging.NOTSET)

    def test_set_package_level(self) -> None:
        """Test the package logger level can be set by name."""
        package_logger = logging.getLogger("tag_soup_parser")
        previous = package_logger.level
        try:
            set_package_level("warning")
            assert package_logger.level == logging.WARNING
            set_package_level(logging.ERROR)
            assert package_logger.level == logging.ERROR
        finally:
            package_logger.setLevel(previous)

    def test_set_package_level_invalid(self) -> None:
        """Test unknown level names are rejected."""
        with pytest.raises(ValueError, match="logging level must be one of"):
            set_package_level("LOUD")
