"""
Main orchestrator: runs one article through relevance, sentiment,
impact modelling and narrative synthesis.

ImpactEngine holds only read-only reference data and a jitter source,
so a single instance can serve concurrent callers.
"""

import time

import pandas as pd
from loguru import logger

from newsimpact.analysis.relevance import identify_affected_sectors, identify_connected_stocks
from newsimpact.analysis.sentiment import analyze_sentiment
from newsimpact.models import AnalysisResult
from newsimpact.reference import DEFAULT_REFERENCE, MarketReferenceData
from newsimpact.scoring import narrative
from newsimpact.scoring.impact_model import RandomJitter, generate_stock_impacts

BATCH_COLUMNS = [
    "article", "headline", "sentiment_label", "sentiment_score",
    "ticker", "company", "impact_score", "impact_level", "confidence",
    "timeframe", "current_price", "predicted_price", "change_percent",
]


class ImpactEngine:
    """
    Args:
        reference: Market reference tables (defaults to the built-in set).
        jitter: Object with next_uniform() used for the confidence jitter.
    """

    def __init__(self, reference: MarketReferenceData = None, jitter=None):
        self.reference = reference or DEFAULT_REFERENCE
        self.jitter = jitter or RandomJitter()

    def analyze_article_impact(self, headline: str, full_text: str) -> AnalysisResult:
        """
        Analyze one article.

        Never raises for string input; empty text yields an empty
        stock list, default sectors and neutral sentiment.
        """
        ref = self.reference
        text = f"{headline or ''} {full_text or ''}".lower()

        tickers = identify_connected_stocks(text, ref)
        sectors = identify_affected_sectors(text, ref)
        sentiment = analyze_sentiment(text, ref)

        stock_impacts = generate_stock_impacts(tickers, text, sentiment, ref, self.jitter)
        sector_impacts = narrative.generate_sector_impacts(sectors, text, sentiment, ref)

        logger.debug(f"Analyzed {len(text)} chars: {len(stock_impacts)} stocks, "
                     f"{len(sector_impacts)} sectors, sentiment {sentiment.label.value}")

        return AnalysisResult(
            stock_impacts=stock_impacts,
            sector_impacts=sector_impacts,
            overall_market_sentiment=sentiment,
            key_insights=narrative.key_insights(stock_impacts, sector_impacts),
            risk_factors=narrative.risk_factors(text, sentiment),
            opportunities=narrative.opportunities(text, sentiment),
            timeline=narrative.build_timeline(),
        )

    def analyze_batch(self, articles: pd.DataFrame, progress_callback=None) -> pd.DataFrame:
        """
        Analyze a DataFrame with `headline` and `text` columns.

        Returns one row per (article, stock impact); articles without
        stock impacts still get one row with empty stock columns.
        """
        def _log(msg):
            logger.info(msg)
            if progress_callback:
                progress_callback(msg)

        if "headline" not in articles.columns:
            raise ValueError("Batch input needs a 'headline' column")

        start = time.time()
        rows = []
        texts = articles["text"] if "text" in articles.columns else pd.Series("", index=articles.index)

        for i, (headline, body) in enumerate(zip(articles["headline"], texts)):
            headline = "" if pd.isna(headline) else str(headline)
            body = "" if pd.isna(body) else str(body)
            result = self.analyze_article_impact(headline, body)
            sent = result.overall_market_sentiment

            base = {
                "article": i,
                "headline": headline,
                "sentiment_label": sent.label.value,
                "sentiment_score": round(sent.score, 3),
            }
            if not result.stock_impacts:
                rows.append(base)
            for impact in result.stock_impacts:
                target = impact.price_target
                rows.append({
                    **base,
                    "ticker": impact.ticker,
                    "company": impact.company_name,
                    "impact_score": round(impact.impact_score, 3),
                    "impact_level": impact.impact_level.value,
                    "confidence": round(impact.confidence, 3),
                    "timeframe": impact.timeframe.value,
                    "current_price": target.current if target else None,
                    "predicted_price": target.predicted if target else None,
                    "change_percent": target.change_percent if target else None,
                })

        _log(f"Batch complete: {len(articles)} articles in {time.time() - start:.2f}s")
        return pd.DataFrame(rows, columns=BATCH_COLUMNS)


def analyze_article_impact(headline: str, full_text: str,
                           reference: MarketReferenceData = None, jitter=None) -> AnalysisResult:
    """Convenience wrapper around a one-off ImpactEngine."""
    return ImpactEngine(reference, jitter).analyze_article_impact(headline, full_text)
