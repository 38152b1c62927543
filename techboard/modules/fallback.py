# ==============================================================================
# FILE: techboard/modules/fallback.py
# ==============================================================================
# --- Description:
# Placeholder technical records used when live data cannot be fetched or
# parsed. Values are static per symbol so the dashboard always has something
# plausible to render; they are not market data.

from techboard.models import TechnicalRecord
from techboard.symbol_normalizer import normalize_symbol

# 52-week range is derived from the base price
WEEK_HIGH_FACTOR = 1.01
WEEK_LOW_FACTOR = 0.93

FALLBACK_PROFILES = {
    'AAPL': {
        'price': 211.53,
        'trend': ('neutral', 57),
        'moving_averages': ('strong', 211.79, 211.38),
        'rsi': 43.8,
        'macd': (0.02, 0.07, -0.05),
        'fundamentals': (27.99, '$2.5T', '0.05%', 1.29),
    },
}

GENERIC_PROFILE = {
    'price': 450.31,
    'trend': ('bearish', 29),
    'moving_averages': ('neutral', 452.48, 452.38),
    'rsi': 34.9,
    'macd': (-0.49, -0.30, -0.19),
    'fundamentals': (34.06, '$2.5T', '0.02%', 0.93),
}


def generate_fallback_record(symbol: str) -> TechnicalRecord:
    """
    Returns the placeholder record for `symbol`.

    Known symbols get their own profile, everything else (including an empty
    symbol) gets the generic one. This function does not fail.
    """
    profile = FALLBACK_PROFILES.get(normalize_symbol(symbol or ''), GENERIC_PROFILE)

    price = profile['price']
    trend_value, trend_pct = profile['trend']
    ma_status, day50, day200 = profile['moving_averages']
    macd_value, macd_signal, macd_hist = profile['macd']
    pe_ratio, market_cap, dividend_yield, beta = profile['fundamentals']

    return TechnicalRecord(
        current_price=price,
        week_high=price * WEEK_HIGH_FACTOR,
        week_low=price * WEEK_LOW_FACTOR,
        overall_trend={'value': trend_value, 'percentage': trend_pct},
        moving_averages={'status': ma_status, 'day50': day50, 'day200': day200},
        rsi={'value': profile['rsi'], 'status': 'neutral'},
        macd={'value': macd_value, 'signal': macd_signal, 'histogram': macd_hist, 'status': 'neutral'},
        fundamentals={
            'pe_ratio': pe_ratio,
            'market_cap': market_cap,
            'dividend_yield': dividend_yield,
            'beta': beta,
        },
    )
