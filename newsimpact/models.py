"""
Typed records produced by the impact engine.

Every record exposes to_dict() returning the camelCase shape the API
layer serializes to JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Sector(str, Enum):
    TECHNOLOGY = "Technology"
    HEALTHCARE = "Healthcare"
    FINANCIAL_SERVICES = "Financial Services"
    CONSUMER_DISCRETIONARY = "Consumer Discretionary"
    CONSUMER_STAPLES = "Consumer Staples"
    ENERGY = "Energy"
    INDUSTRIALS = "Industrials"
    MATERIALS = "Materials"
    REAL_ESTATE = "Real Estate"
    UTILITIES = "Utilities"


class ImpactLevel(str, Enum):
    """Shared by stock impact levels and sentiment labels."""

    VERY_NEGATIVE = "Very Negative"
    NEGATIVE = "Negative"
    NEUTRAL = "Neutral"
    POSITIVE = "Positive"
    VERY_POSITIVE = "Very Positive"


SentimentLabel = ImpactLevel


class Timeframe(str, Enum):
    IMMEDIATE = "Immediate"
    SHORT_TERM = "Short-term"
    MEDIUM_TERM = "Medium-term"
    LONG_TERM = "Long-term"


@dataclass(frozen=True)
class CompanyRecord:
    ticker: str
    name: str
    sector: Sector
    market_cap: int


@dataclass(frozen=True)
class RelevanceEntry:
    ticker: str
    raw_score: float


@dataclass(frozen=True)
class SentimentResult:
    score: float
    label: SentimentLabel
    confidence: float
    raw: float = 0.0
    matches: int = 0

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "label": self.label.value,
            "confidence": self.confidence,
        }


@dataclass(frozen=True)
class ModelFactors:
    company_mentions: int
    sector_relevance: float
    news_relevance: float
    volatility_factor: float


@dataclass(frozen=True)
class PriceTarget:
    current: float
    predicted: float
    change: float
    change_percent: float

    def to_dict(self) -> dict:
        return {
            "current": self.current,
            "predicted": self.predicted,
            "change": self.change,
            "changePercent": self.change_percent,
        }


@dataclass
class StockImpact:
    ticker: str
    company_name: str
    impact_score: float
    impact_level: ImpactLevel
    confidence: float
    timeframe: Timeframe
    reasoning: List[str] = field(default_factory=list)
    price_target: Optional[PriceTarget] = None

    @property
    def extremity(self) -> float:
        """Distance from the neutral midpoint; used for ordering."""
        return abs(self.impact_score - 0.5)

    def to_dict(self) -> dict:
        return {
            "ticker": self.ticker,
            "companyName": self.company_name,
            "impactScore": self.impact_score,
            "impactLevel": self.impact_level.value,
            "confidence": self.confidence,
            "timeframe": self.timeframe.value,
            "reasoning": list(self.reasoning),
            "priceTarget": self.price_target.to_dict() if self.price_target else None,
        }


@dataclass
class SectorImpact:
    name: Sector
    impact_score: float
    affected_stocks: List[str] = field(default_factory=list)
    reasoning: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.name.value,
            "impactScore": self.impact_score,
            "affectedStocks": list(self.affected_stocks),
            "reasoning": self.reasoning,
        }


@dataclass
class Timeline:
    immediate: List[str] = field(default_factory=list)
    short_term: List[str] = field(default_factory=list)
    long_term: List[str] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "immediate": list(self.immediate),
            "shortTerm": list(self.short_term),
            "longTerm": list(self.long_term),
        }


@dataclass
class AnalysisResult:
    stock_impacts: List[StockImpact]
    sector_impacts: List[SectorImpact]
    overall_market_sentiment: SentimentResult
    key_insights: List[str]
    risk_factors: List[str]
    opportunities: List[str]
    timeline: Timeline

    def to_dict(self) -> dict:
        return {
            "stockImpacts": [s.to_dict() for s in self.stock_impacts],
            "sectorImpacts": [s.to_dict() for s in self.sector_impacts],
            "overallMarketSentiment": self.overall_market_sentiment.to_dict(),
            "keyInsights": list(self.key_insights),
            "riskFactors": list(self.risk_factors),
            "opportunities": list(self.opportunities),
            "timeline": self.timeline.to_dict(),
        }
