"""
Tests for reply and nickname formatting.
"""

from src.price_ticker.formatters import (
    HELP_TEXT,
    format_nickname,
    format_price,
    format_price_reply,
    format_status_payload,
    format_trend_reply,
)
from src.price_ticker.state import Trend


class TestFormatters:
    """Test text helpers."""

    def test_format_price_rounds_to_four_places(self):
        assert format_price(1.23456) == "₱1.2346"
        assert format_price(3) == "₱3.0000"

    def test_nickname(self):
        assert format_nickname("ASTER", 55.5, Trend.UP) == "ASTER ⬈ ₱55.5000"

    def test_price_reply(self, state):
        state.last_price = 2.5
        assert format_price_reply(state) == "ASTER Price: ₱2.5000 ⬈"

    def test_trend_reply(self, state):
        state.trend = Trend.DOWN
        assert format_trend_reply(state) == "Current trend: ⬊"

    def test_status_payload_seconds_are_whole(self, state):
        state.refresh_interval_ms = 7000
        assert format_status_payload(state)["interval_seconds"] == 7

    def test_help_lists_every_command(self):
        for command in ["!price", "!trend", "!setpool", "!setinterval", "!help"]:
            assert f"`{command}" in HELP_TEXT
