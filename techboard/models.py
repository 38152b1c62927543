# ==============================================================================
# FILE: techboard/models.py
# ==============================================================================
# --- Description:
# Pydantic models for the sanitized technical record and API responses.
# Attribute names are snake_case; the wire format uses the camelCase aliases.
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class TrendLabel(str, Enum):
    BULLISH = "bullish"
    BEARISH = "bearish"
    NEUTRAL = "neutral"


class RsiLabel(str, Enum):
    OVERBOUGHT = "overbought"
    NEUTRAL = "neutral"
    OVERSOLD = "oversold"


class PanelStatus(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True, use_enum_values=True, validate_default=True)


class OverallTrend(_WireModel):
    value: TrendLabel = TrendLabel.NEUTRAL
    percentage: float = 0


class MovingAverages(_WireModel):
    # free-form label, the model sometimes answers "strong"
    status: str = "neutral"
    day50: float = 0
    day200: float = 0


class RsiReading(_WireModel):
    value: float = 50
    status: RsiLabel = RsiLabel.NEUTRAL


class MacdReading(_WireModel):
    value: float = 0
    signal: float = 0
    histogram: float = 0
    status: TrendLabel = TrendLabel.NEUTRAL


class Fundamentals(_WireModel):
    pe_ratio: float = Field(0, alias="peRatio")
    market_cap: str = Field("N/A", alias="marketCap")
    dividend_yield: str = Field("N/A", alias="dividendYield")
    beta: float = 1


class TechnicalRecord(_WireModel):
    """Fully populated technical/fundamental snapshot for one symbol."""

    current_price: float = Field(0, ge=0, alias="currentPrice")
    week_high: float = Field(0, ge=0, alias="weekHigh")
    week_low: float = Field(0, ge=0, alias="weekLow")
    overall_trend: OverallTrend = Field(default_factory=OverallTrend, alias="overallTrend")
    moving_averages: MovingAverages = Field(default_factory=MovingAverages, alias="movingAverages")
    rsi: RsiReading = Field(default_factory=RsiReading)
    macd: MacdReading = Field(default_factory=MacdReading)
    fundamentals: Fundamentals = Field(default_factory=Fundamentals)

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True)


class TechnicalSummary(BaseModel):
    """Display-ready values derived from a TechnicalRecord."""

    price: str
    range_low: str
    range_high: str
    range_position: float
    trend: str
    trend_change: str
    moving_average_trend: str
    rsi_zone: str
    macd_histogram: str
    macd_momentum: str


class PanelResponse(BaseModel):
    symbol: str
    status: PanelStatus
    error: Optional[str] = None
    data: Optional[TechnicalRecord] = None
    defaulted_fields: List[str] = []
    fallback: bool = False
