# ==============================================================================
# FILE: techboard/modules/prompt_builder.py
# ==============================================================================
# --- Description:
# Builds the chat-completion request that asks the model for a technical
# analysis of one ticker. The payload is a pure function of the symbol and
# the request settings, so the same symbol always yields the same request.

from typing import Optional

from techboard.config import Settings, settings as default_settings

SYSTEM_PROMPT = (
    "You are a financial analyst specializing in technical stock analysis. "
    "Return ONLY valid JSON without any explanations, comments, or code blocks. "
    "The JSON must be valid and properly formatted with double quotes for all property names. "
    "If you cannot find specific data, provide reasonable default values based on market trends "
    "rather than using null with comments."
)

TARGET_SCHEMA = """{
  "currentPrice": number,
  "weekHigh": number,
  "weekLow": number,
  "overallTrend": {
    "value": "bullish|bearish|neutral",
    "percentage": number
  },
  "movingAverages": {
    "status": "bullish|bearish|neutral",
    "day50": number,
    "day200": number
  },
  "rsi": {
    "value": number,
    "status": "overbought|neutral|oversold"
  },
  "macd": {
    "value": number,
    "signal": number,
    "histogram": number,
    "status": "bullish|bearish|neutral"
  },
  "fundamentals": {
    "peRatio": number,
    "marketCap": "string",
    "dividendYield": "string",
    "beta": number
  }
}"""

# The seven data groups the record is assembled from
DATA_GROUPS = (
    "Current price",
    "52-week range (high and low)",
    "Overall trend (bullish, bearish, or neutral) with percentage value",
    "Moving averages: 50-day and 200-day values and overall status (bullish, bearish, neutral)",
    "RSI value and status",
    "MACD values (main, signal, histogram) and status",
    "P/E ratio, market cap (in billions), dividend yield (as percentage), and beta",
)


def build_user_prompt(symbol: str) -> str:
    """Compose the user instruction for a single ticker."""
    groups = "\n".join(f"{i}. {group}" for i, group in enumerate(DATA_GROUPS, 1))
    return (
        f"Provide detailed technical analysis for {symbol} stock. Include:\n"
        f"{groups}\n\n"
        "Format response as valid, properly formatted JSON with the following structure:\n"
        f"{TARGET_SCHEMA}\n\n"
        "IMPORTANT: Do not include any explanations, comments or markdown formatting. "
        "Return only valid JSON. If you cannot find a specific value, use a sensible default "
        "instead of null or comments."
    )


def build_completion_request(symbol: str, settings: Optional[Settings] = None) -> dict:
    """
    Builds the completion payload for `symbol`.

    The symbol is expected to be validated by the caller. No network call
    happens here; the payload is handed to the transport as-is.
    """
    cfg = settings or default_settings
    return {
        "model": cfg.perplexity_model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": build_user_prompt(symbol)},
        ],
        "temperature": cfg.temperature,
        "max_tokens": cfg.max_tokens,
        "search_recency_filter": cfg.search_recency_filter,
    }
