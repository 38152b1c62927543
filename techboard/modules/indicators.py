# ==============================================================================
# FILE: techboard/modules/indicators.py
# ==============================================================================
# --- Description:
# Display helpers derived from a TechnicalRecord: price formatting, the
# marker position inside the 52-week range, and simple trend/RSI labels.

from techboard.models import TechnicalRecord, TechnicalSummary

RSI_OVERBOUGHT = 70
RSI_OVERSOLD = 30


def format_price(price: float) -> str:
    return f"{price:.2f}" if price >= 100 else f"{price:.3f}"


def format_percentage(value: float) -> str:
    sign = "+" if value >= 0 else ""
    return f"{sign}{value:.2f}%"


def price_position(current: float, low: float, high: float) -> float:
    """
    Position of `current` inside [low, high] as a percentage.

    Returns 50 for an empty range. The result is clamped to 0-100 because
    the record does not guarantee low <= current <= high.
    """
    span = high - low
    if span == 0:
        return 50.0
    position = (current - low) / span * 100
    return min(max(position, 0.0), 100.0)


def trend_from_moving_averages(ma50: float, ma200: float, current_price: float) -> str:
    if current_price > ma50 and ma50 > ma200:
        return "bullish"
    if current_price < ma50 and ma50 < ma200:
        return "bearish"
    return "neutral"


def rsi_zone(value: float) -> str:
    if value > RSI_OVERBOUGHT:
        return "overbought"
    if value < RSI_OVERSOLD:
        return "oversold"
    return "neutral"


def sign_label(value: float, threshold: float = 0) -> str:
    if value > threshold:
        return "positive"
    if value < threshold:
        return "negative"
    return "flat"


def summarize(record: TechnicalRecord) -> TechnicalSummary:
    """Builds the display summary for a sanitized record."""
    ma = record.moving_averages
    return TechnicalSummary(
        price=format_price(record.current_price),
        range_low=f"{record.week_low:.2f}",
        range_high=f"{record.week_high:.2f}",
        range_position=round(price_position(record.current_price, record.week_low, record.week_high), 2),
        trend=record.overall_trend.value,
        trend_change=format_percentage(record.overall_trend.percentage),
        moving_average_trend=trend_from_moving_averages(ma.day50, ma.day200, record.current_price),
        rsi_zone=rsi_zone(record.rsi.value),
        macd_histogram=f"{record.macd.histogram:.2f}",
        macd_momentum=sign_label(record.macd.histogram),
    )
