"""Tests for the display helpers."""

import pytest

from techboard.modules.fallback import generate_fallback_record
from techboard.modules.indicators import (
    format_percentage,
    format_price,
    price_position,
    rsi_zone,
    sign_label,
    summarize,
    trend_from_moving_averages,
)
from techboard.modules.sanitizer import sanitize_payload


class TestFormatting:
    def test_price_precision(self):
        assert format_price(211.5301) == "211.53"
        assert format_price(100) == "100.00"
        assert format_price(12.34567) == "12.346"
        assert format_price(0) == "0.000"

    def test_percentage_sign(self):
        assert format_percentage(12.5) == "+12.50%"
        assert format_percentage(0) == "+0.00%"
        assert format_percentage(-3.456) == "-3.46%"


class TestPricePosition:
    def test_midpoint(self):
        assert price_position(150, 100, 200) == 50.0

    def test_empty_range(self):
        assert price_position(0, 0, 0) == 50.0

    @pytest.mark.parametrize("current,expected", [(50, 0.0), (250, 100.0)])
    def test_clamped(self, current, expected):
        assert price_position(current, 100, 200) == expected

    def test_inverted_range_still_clamped(self):
        assert 0 <= price_position(150, 200, 100) <= 100


class TestLabels:
    def test_trend_from_moving_averages(self):
        assert trend_from_moving_averages(110, 100, 120) == "bullish"
        assert trend_from_moving_averages(90, 100, 80) == "bearish"
        assert trend_from_moving_averages(110, 100, 105) == "neutral"

    @pytest.mark.parametrize("value,zone", [(85, "overbought"), (70, "neutral"), (30, "neutral"), (12, "oversold")])
    def test_rsi_zone(self, value, zone):
        assert rsi_zone(value) == zone

    def test_sign_label(self):
        assert sign_label(0.2) == "positive"
        assert sign_label(-0.2) == "negative"
        assert sign_label(0) == "flat"
        assert sign_label(5, threshold=10) == "negative"


class TestSummary:
    def test_fallback_summary(self):
        summary = summarize(generate_fallback_record("AAPL"))
        assert summary.price == "211.53"
        assert summary.trend == "neutral"
        assert summary.trend_change == "+57.00%"
        assert summary.rsi_zone == "neutral"
        assert summary.macd_momentum == "negative"
        assert 0 <= summary.range_position <= 100

    def test_default_record_summary(self):
        summary = summarize(sanitize_payload({}))
        assert summary.price == "0.000"
        assert summary.range_position == 50.0
        assert summary.moving_average_trend == "neutral"
        assert summary.macd_momentum == "flat"
