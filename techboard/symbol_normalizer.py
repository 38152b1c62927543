# ==============================================================================
# FILE: techboard/symbol_normalizer.py
# ==============================================================================
# Ticker normalization and validation for analysis requests

import re

# Common display variations that map onto a listed ticker
SYMBOL_ALIASES = {
    'APPLE': 'AAPL',
    'MICROSOFT': 'MSFT',
    'GOOGLE': 'GOOGL',
    'ALPHABET': 'GOOGL',
    'AMAZON': 'AMZN',
    'NVIDIA': 'NVDA',
    'TESLA': 'TSLA',
    'FACEBOOK': 'META',
}

# Exchange prefixes/suffixes some clients attach to a ticker
EXCHANGE_PREFIXES = ('NASDAQ:', 'NYSE:', 'AMEX:', 'ARCA:')
EXCHANGE_SUFFIXES = (' US EQUITY', ' EQUITY', '.US')

# Letters, optionally a share-class part like BRK.B or BF-B
_TICKER_PATTERN = re.compile(r'^[A-Z]{1,5}([.\-][A-Z]{1,2})?$')


def normalize_symbol(symbol: str) -> str:
    """
    Normalize a ticker to its canonical upper-case form

    Args:
        symbol: The raw symbol as entered by the user

    Returns:
        Normalized symbol string
    """
    if not symbol:
        return symbol

    symbol = symbol.upper().strip()

    for prefix in EXCHANGE_PREFIXES:
        if symbol.startswith(prefix):
            symbol = symbol[len(prefix):]
            break

    for suffix in EXCHANGE_SUFFIXES:
        if symbol.endswith(suffix):
            symbol = symbol[:-len(suffix)]
            break

    symbol = symbol.strip()
    return SYMBOL_ALIASES.get(symbol, symbol)


def validate_symbol(symbol: str) -> bool:
    """
    Validate if a symbol appears to be a listed stock ticker

    Args:
        symbol: The symbol to validate (normalized or not)

    Returns:
        True if symbol appears valid, False otherwise
    """
    if not symbol or not symbol.strip():
        return False

    return bool(_TICKER_PATTERN.match(normalize_symbol(symbol)))
