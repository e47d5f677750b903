"""
Multi-factor impact prediction model.

For each connected company, combines article sentiment, direct mention
count, sector relevance, market-cap volatility and a news-relevance
multiplier into an impact score in [0, 1] (0.5 = no impact), then derives
a confidence, a price target and a timeframe from it.

The confidence carries a "historical accuracy" jitter drawn from a
JitterSource. Production uses RandomJitter; tests pin it with FixedJitter.
This is the only source of non-determinism in the engine.
"""

import random
from typing import List, Optional

from loguru import logger

from newsimpact.analysis import relevance
from newsimpact.config import (
    CONFIDENCE,
    IMMEDIATE_KEYWORDS,
    IMPACT_LEVEL_THRESHOLDS,
    IMPACT_VOLATILITY,
    JITTER_RANGE,
    LARGE_CAP_THRESHOLD,
    LONG_TERM_KEYWORDS,
    MENTION_BOOST_CAP,
    MENTION_BOOST_PER_MENTION,
    PRICE_CHANGE_RANGE_PCT,
    PRICE_VOLATILITY,
    SECTOR_BLEND_WEIGHT,
    SHORT_TERM_KEYWORDS,
    STABLE_CAP_THRESHOLD,
    STRUCTURAL_KEYWORDS,
)
from newsimpact.models import (
    CompanyRecord,
    ImpactLevel,
    ModelFactors,
    PriceTarget,
    SentimentResult,
    StockImpact,
    Timeframe,
)
from newsimpact.reference import MarketReferenceData
from newsimpact.scoring.narrative import stock_reasoning


# ── Jitter sources ──────────────────────────────────────────────────

class RandomJitter:
    """Uniform draw from JITTER_RANGE. Pass a seed for reproducible runs."""

    def __init__(self, seed: Optional[int] = None, low: float = None, high: float = None):
        self._rng = random.Random(seed)
        self.low = JITTER_RANGE[0] if low is None else low
        self.high = JITTER_RANGE[1] if high is None else high

    def next_uniform(self) -> float:
        return self._rng.uniform(self.low, self.high)


class FixedJitter:
    """Always returns the same value."""

    def __init__(self, value: float = 0.875):
        self.value = value

    def next_uniform(self) -> float:
        return self.value


def _is_large_cap(company: CompanyRecord) -> bool:
    return company.market_cap > LARGE_CAP_THRESHOLD


def _clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    return max(low, min(high, value))


def impact_level(score: float) -> ImpactLevel:
    for threshold, level in IMPACT_LEVEL_THRESHOLDS:
        if score > threshold:
            return ImpactLevel(level)
    return ImpactLevel.VERY_NEGATIVE


def determine_timeframe(text: str, impact_score: float, confidence: float) -> Timeframe:
    """First matching rule wins: immediate, short, long, then a confidence default."""
    if any(k in text for k in IMMEDIATE_KEYWORDS):
        return Timeframe.IMMEDIATE

    high_impact = abs(impact_score - 0.5) > 0.25
    if any(k in text for k in SHORT_TERM_KEYWORDS) or (high_impact and confidence > 0.8):
        return Timeframe.SHORT_TERM

    if any(k in text for k in LONG_TERM_KEYWORDS) or any(k in text for k in STRUCTURAL_KEYWORDS):
        return Timeframe.LONG_TERM

    return Timeframe.SHORT_TERM if confidence > 0.7 else Timeframe.MEDIUM_TERM


class PredictionModel:
    """
    Per-company model over one article.

    Factors are computed at construction. The confidence is drawn lazily
    once and reused, so the price target and timeframe agree with the
    reported confidence.
    """

    def __init__(
        self,
        company: CompanyRecord,
        text: str,
        sentiment: SentimentResult,
        ref: MarketReferenceData,
        jitter,
    ):
        self.company = company
        self.text = text
        self.sentiment = sentiment
        self.ref = ref
        self.jitter = jitter
        self.factors = ModelFactors(
            company_mentions=relevance.count_company_mentions(text, company),
            sector_relevance=relevance.sector_relevance(text, company.sector, ref),
            news_relevance=relevance.news_relevance(text, company, ref),
            volatility_factor=(IMPACT_VOLATILITY["large_cap"] if _is_large_cap(company)
                               else IMPACT_VOLATILITY["other"]),
        )
        self._confidence = None

    @property
    def ticker(self) -> str:
        return self.company.ticker

    def impact_score(self) -> float:
        f = self.factors
        score = self.sentiment.score

        mention_boost = min(MENTION_BOOST_CAP, f.company_mentions * MENTION_BOOST_PER_MENTION)
        score = min(1.0, score + mention_boost)

        score = score * (1 - SECTOR_BLEND_WEIGHT) + f.sector_relevance * SECTOR_BLEND_WEIGHT

        score = 0.5 + (score - 0.5) * f.volatility_factor
        score = 0.5 + (score - 0.5) * f.news_relevance

        return _clamp(score)

    def confidence(self) -> float:
        if self._confidence is None:
            self._confidence = self._compute_confidence()
        return self._confidence

    def _compute_confidence(self) -> float:
        f = self.factors
        strength = abs(self.sentiment.score - 0.5) * 2
        confidence = CONFIDENCE["base"] + strength * CONFIDENCE["sentiment_weight"]

        confidence += min(CONFIDENCE["mention_cap"],
                          f.company_mentions * CONFIDENCE["mention_per_mention"])
        confidence += f.sector_relevance * CONFIDENCE["sector_weight"]

        if self.company.market_cap > STABLE_CAP_THRESHOLD:
            confidence *= CONFIDENCE["stable_factor"]
        else:
            confidence *= CONFIDENCE["unstable_factor"]

        confidence *= self.jitter.next_uniform()

        return _clamp(confidence, CONFIDENCE["floor"], CONFIDENCE["ceiling"])

    def price_target(self, impact_score: float = None) -> PriceTarget:
        """Project a price from the static base price and the impact score."""
        if impact_score is None:
            impact_score = self.impact_score()

        base = self.ref.base_price(self.ticker)

        change_pct = (impact_score - 0.5) * PRICE_CHANGE_RANGE_PCT
        change_pct *= PRICE_VOLATILITY["large_cap"] if _is_large_cap(self.company) else PRICE_VOLATILITY["other"]
        change_pct *= self.factors.news_relevance
        change_pct *= 0.5 + self.confidence() * 0.5
        change_pct *= self.ref.sector_volatility(self.company.sector)

        predicted = base * (1 + change_pct / 100)

        return PriceTarget(
            current=round(base, 2),
            predicted=round(predicted, 2),
            change=round(predicted - base, 2),
            change_percent=round(change_pct, 2),
        )

    def timeframe(self, impact_score: float = None) -> Timeframe:
        if impact_score is None:
            impact_score = self.impact_score()
        return determine_timeframe(self.text, impact_score, self.confidence())


def build_model(
    ticker: str,
    company: CompanyRecord,
    text: str,
    sentiment: SentimentResult,
    ref: MarketReferenceData,
    jitter=None,
) -> PredictionModel:
    if company.ticker != ticker:
        raise ValueError(f"Company record {company.ticker} does not match ticker {ticker}")
    return PredictionModel(company, text, sentiment, ref, jitter or RandomJitter())


def generate_stock_impacts(
    tickers: List[str],
    text: str,
    sentiment: SentimentResult,
    ref: MarketReferenceData,
    jitter=None,
) -> List[StockImpact]:
    """
    Build a StockImpact per known ticker, most extreme first.

    Tickers missing from the registry are skipped.
    """
    jitter = jitter or RandomJitter()
    impacts = []

    for ticker in tickers:
        company = ref.company(ticker)
        if company is None:
            logger.debug(f"Skipping {ticker}: not in company registry")
            continue

        model = build_model(ticker, company, text, sentiment, ref, jitter)
        score = model.impact_score()
        confidence = model.confidence()

        impacts.append(StockImpact(
            ticker=ticker,
            company_name=company.name,
            impact_score=score,
            impact_level=impact_level(score),
            confidence=confidence,
            timeframe=model.timeframe(score),
            reasoning=stock_reasoning(model, text),
            price_target=model.price_target(score),
        ))
        logger.debug(f"{ticker}: impact {score:.3f}, confidence {confidence:.3f}, "
                     f"factors {model.factors}")

    impacts.sort(key=lambda s: s.extremity, reverse=True)
    return impacts
