"""Tests for ticker normalization."""

import pytest

from techboard.symbol_normalizer import SYMBOL_ALIASES, normalize_symbol, validate_symbol


class TestNormalizeSymbol:
    @pytest.mark.parametrize("raw,expected", [
        ("aapl", "AAPL"),
        ("  msft ", "MSFT"),
        ("NASDAQ:NVDA", "NVDA"),
        ("IBM US Equity", "IBM"),
        ("apple", "AAPL"),
        ("facebook", "META"),
        ("BRK.B", "BRK.B"),
    ])
    def test_normalizes(self, raw, expected):
        assert normalize_symbol(raw) == expected

    def test_empty_passthrough(self):
        assert normalize_symbol("") == ""


class TestValidateSymbol:
    @pytest.mark.parametrize("symbol", ["AAPL", "f", "brk.b", "BF-B", "nyse:ge", "Tesla"])
    def test_valid(self, symbol):
        assert validate_symbol(symbol)

    @pytest.mark.parametrize("symbol", ["", "   ", "123", "TOOLONG", "AA PL", "$$$", None])
    def test_invalid(self, symbol):
        assert not validate_symbol(symbol)


class TestAliasTable:
    def test_aliases_map_names_to_other_tickers(self):
        assert all(name != ticker for name, ticker in SYMBOL_ALIASES.items())

    def test_ticker_without_alias_kept(self):
        assert normalize_symbol("meta") == "META"
