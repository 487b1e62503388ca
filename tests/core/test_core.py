"""
Tests for core plumbing: cascades, logging, and IR serialization.
"""

from sbct.core.cascade import first_match
from sbct.core.context import TransformRequest
from sbct.core.logging import (
    LogChannel,
    LogLevel,
    configure_logging,
    get_current_config,
    get_logger,
    get_pass_logger,
)
from sbct.ir.serialization import from_json, to_json


class TestFirstMatch:
    """Ordered strategies."""

    def test_first_non_empty_wins(self):
        """None and blank results defer to the next strategy."""
        strategies = (lambda t: None, lambda t: "  ", lambda t: f" {t} ", lambda t: "later")
        assert first_match(strategies, "x") == "x"

    def test_nothing_matches(self):
        """No strategy, no value."""
        assert first_match((lambda t: None,), "x") is None
        assert first_match((), "x") is None


class TestLogging:
    """Channel loggers."""

    def test_level_parsing(self):
        """Unknown levels fall back to INFO."""
        assert LogLevel.from_string("verbose") == LogLevel.VERBOSE
        assert LogLevel.from_string(" DEBUG ") == LogLevel.DEBUG
        assert LogLevel.from_string("loud") == LogLevel.INFO

    def test_pass_channel_from_prefix(self):
        """Pass loggers pick their channel from the pNN prefix."""
        assert get_pass_logger("p20_extract_fields").channel == LogChannel.EXTRACT
        assert get_pass_logger("p40_validate").channel == LogChannel.VALIDATE
        assert get_pass_logger("p99_unknown").channel == LogChannel.PIPELINE

    def test_channel_from_string(self):
        """Channel names are case-insensitive; unknown names go to SYSTEM."""
        assert get_logger("compose").channel == LogChannel.COMPOSE
        assert get_logger("nonsense").channel == LogChannel.SYSTEM

    def test_bind_keeps_channel(self):
        """Bound loggers keep their channel and pass."""
        bound = get_pass_logger("p20_extract_fields").bind(block=3)
        assert bound.channel == LogChannel.EXTRACT
        assert bound.pass_name == "p20_extract_fields"

    def test_configure_channels(self):
        """Channel names parse from strings; unknown ones are dropped."""
        configure_logging(level="debug", format="json", channels=["extract", "Correct", "bogus"], force=True)
        try:
            assert get_current_config() == {
                "level": "DEBUG",
                "format": "json",
                "channels": ["CORRECT", "EXTRACT"],
            }
        finally:
            configure_logging(level="silent", force=True)


class TestSerialization:
    """JSON export."""

    def test_result_json(self, engine, owen_text):
        """A result survives a JSON trip with its entities."""
        result = engine.transform(TransformRequest(text=owen_text))
        restored = from_json(to_json(result))

        assert restored.entities == result.entities
        assert restored.status == result.status
