"""Shared fixtures for TechBoard tests."""

import json
import sys
from pathlib import Path

import pytest

# Ensure project root is importable
ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))


@pytest.fixture
def full_payload():
    """A complete, well-formed model answer."""
    return {
        "currentPrice": 189.84,
        "weekHigh": 199.62,
        "weekLow": 164.08,
        "overallTrend": {"value": "bullish", "percentage": 12.5},
        "movingAverages": {"status": "bullish", "day50": 185.1, "day200": 178.3},
        "rsi": {"value": 61.2, "status": "neutral"},
        "macd": {"value": 1.24, "signal": 0.98, "histogram": 0.26, "status": "bullish"},
        "fundamentals": {
            "peRatio": 29.4,
            "marketCap": "$2.9T",
            "dividendYield": "0.51%",
            "beta": 1.21,
        },
    }


@pytest.fixture
def fenced_response(full_payload):
    """The same answer the way models often send it back."""
    body = json.dumps(full_payload, indent=2)
    return (
        "```json\n"
        "/* technical snapshot */\n"
        + body.replace('"beta": 1.21', '"beta": 1.21 // five-year monthly')
        + "\n```"
    )
