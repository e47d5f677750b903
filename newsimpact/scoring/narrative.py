"""
Human-readable narrative built from the numeric model outputs.

Every list here is produced from fixed templates: per-stock reasoning,
sector summaries, key insights, risk factors and opportunities, plus a
constant timeline skeleton.
"""

from typing import List

from newsimpact.analysis import relevance
from newsimpact.config import (
    BUSINESS_FACTORS,
    LARGE_CAP_THRESHOLD,
    MAX_INSIGHTS,
    MAX_OPPORTUNITIES,
    MAX_REASONS,
    MAX_RISKS,
    MAX_SECTOR_STOCKS,
    MID_LARGE_CAP_THRESHOLD,
    TIMELINE,
)
from newsimpact.models import (
    SectorImpact,
    Sector,
    SentimentResult,
    StockImpact,
    Timeframe,
    Timeline,
)
from newsimpact.reference import MarketReferenceData


# ── Stock reasoning ─────────────────────────────────────────────────

def business_factors(text: str) -> List[str]:
    return [name for name, keywords in BUSINESS_FACTORS if any(k in text for k in keywords)]


def stock_reasoning(model, text: str) -> List[str]:
    """Up to MAX_REASONS explanations for one PredictionModel."""
    company = model.company
    sentiment = model.sentiment
    factors = model.factors
    sector = company.sector.value
    reasons = []

    industry_hits = relevance.matched_industry_keywords(text, company.sector, model.ref)
    if industry_hits:
        reasons.append(f"Strong {sector} sector relevance with {len(industry_hits)} "
                       f"industry keywords identified")
    else:
        reasons.append(f"Indirect {sector} sector exposure to market developments")

    pct = round(sentiment.score * 100)
    if sentiment.score > 0.7:
        reasons.append(f"Strong positive sentiment ({pct}%) creates significant upside potential")
    elif sentiment.score > 0.6:
        reasons.append("Moderate positive sentiment likely to support stock performance")
    elif sentiment.score < 0.3:
        reasons.append(f"Negative sentiment ({pct}%) may create downward pressure")
    elif sentiment.score < 0.4:
        reasons.append("Cautious sentiment suggests potential volatility ahead")

    if factors.company_mentions > 2:
        reasons.append(f"High news relevance with {factors.company_mentions} direct company mentions")
    elif factors.company_mentions > 0:
        reasons.append("Moderate news relevance with direct company references")

    if company.market_cap > LARGE_CAP_THRESHOLD:
        reasons.append("Large-cap stability may moderate price movements but ensure sustained impact")
    elif company.market_cap > MID_LARGE_CAP_THRESHOLD:
        reasons.append("Mid-to-large cap positioning allows for meaningful price discovery")
    else:
        reasons.append("Smaller market cap may amplify price reactions to news developments")

    drivers = business_factors(text)
    if drivers:
        reasons.append(f"Key business drivers identified: {', '.join(drivers)}")

    if factors.news_relevance > 1.3:
        reasons.append("High news relevance score suggests strong correlation with stock performance")

    return reasons[:MAX_REASONS]


# ── Sectors ─────────────────────────────────────────────────────────

def sector_reasoning(sector: Sector, text: str, sentiment: SentimentResult,
                     ref: MarketReferenceData) -> str:
    matched = relevance.matched_sector_keywords(text, sector, ref)
    if matched:
        direction = "benefit" if sentiment.score > 0.5 else "challenge"
        return (f"Sector directly mentioned with keywords: {', '.join(matched[:3])}. "
                f"{sentiment.label.value} sentiment expected to {direction} sector performance.")
    return (f"Indirect sector exposure through market dynamics. Overall "
            f"{sentiment.label.value.lower()} sentiment may influence sector performance.")


def generate_sector_impacts(sectors: List[Sector], text: str, sentiment: SentimentResult,
                            ref: MarketReferenceData) -> List[SectorImpact]:
    impacts = []
    for sector in sectors:
        score = (sentiment.score + relevance.sector_relevance(text, sector, ref)) / 2
        impacts.append(SectorImpact(
            name=sector,
            impact_score=score,
            affected_stocks=ref.companies_in_sector(sector)[:MAX_SECTOR_STOCKS],
            reasoning=sector_reasoning(sector, text, sentiment, ref),
        ))
    return impacts


# ── Insights, risks, opportunities ──────────────────────────────────

def key_insights(stock_impacts: List[StockImpact], sector_impacts: List[SectorImpact]) -> List[str]:
    insights = []

    top_positive = [s for s in stock_impacts if s.impact_score > 0.6][:2]
    top_negative = [s for s in stock_impacts if s.impact_score < 0.4][:2]

    if top_positive:
        names = " and ".join(s.ticker for s in top_positive)
        insights.append(f"{names} show strongest positive impact potential with high confidence levels.")

    if top_negative:
        names = " and ".join(s.ticker for s in top_negative)
        insights.append(f"{names} may face headwinds based on the analysis.")

    if sector_impacts:
        top_sector = max(sector_impacts, key=lambda s: abs(s.impact_score - 0.5))
        insights.append(f"{top_sector.name.value} sector shows the most significant exposure "
                        f"to these developments.")

    immediate = sum(1 for s in stock_impacts if s.timeframe == Timeframe.IMMEDIATE)
    if immediate:
        insights.append(f"{immediate} stocks expected to see immediate market reaction within 24 hours.")

    if stock_impacts:
        positive = sum(1 for s in stock_impacts if s.impact_score > 0.5)
        share = round(positive / len(stock_impacts) * 100)
        insights.append(f"Market sentiment analysis suggests {share}% of analyzed stocks may "
                        f"benefit from these developments.")
    else:
        insights.append("No individual stocks show a material connection to this news.")

    return insights[:MAX_INSIGHTS]


def risk_factors(text: str, sentiment: SentimentResult) -> List[str]:
    risks = []

    if "regulation" in text or "policy" in text:
        risks.append("Regulatory uncertainty may create additional volatility")

    if "inflation" in text or "interest rate" in text:
        risks.append("Macroeconomic factors could amplify market reactions")

    if sentiment.confidence < 0.7:
        risks.append("Analysis confidence is moderate due to limited information")

    if "geopolitical" in text or "trade" in text:
        risks.append("Geopolitical tensions may affect international market exposure")

    # The generic caveat always survives the cap.
    return risks[:MAX_RISKS - 1] + ["Market conditions can change rapidly, affecting prediction accuracy"]


def opportunities(text: str, sentiment: SentimentResult) -> List[str]:
    found = []

    if sentiment.score > 0.6:
        found.append("Strong positive sentiment creates potential for momentum-driven gains")

    if "innovation" in text or "technology" in text:
        found.append("Technology sector developments may create long-term growth opportunities")

    if "earnings" in text or "revenue" in text:
        found.append("Financial performance improvements could drive sustained price appreciation")

    if "merger" in text or "acquisition" in text:
        found.append("Corporate activity may create value for shareholders")

    return found[:MAX_OPPORTUNITIES - 1] + ["Market volatility creates potential entry points for long-term investors"]


def build_timeline() -> Timeline:
    """Fixed three-bucket timeline; independent of the article."""
    return Timeline(
        immediate=list(TIMELINE["immediate"]),
        short_term=list(TIMELINE["short_term"]),
        long_term=list(TIMELINE["long_term"]),
    )
