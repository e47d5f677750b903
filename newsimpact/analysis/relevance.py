"""
Entity and sector relevance extraction.

Scores every known company against the article text using weighted
ticker, name, sector, industry and competitor matches, then keeps the
strongest candidates. All matching is substring based on the already
lowercased combined headline + body, so "banking" also matches "bank".
"""

import re
from functools import lru_cache
from typing import List

from loguru import logger

from newsimpact.config import (
    BROAD_MARKET_DEFAULT_TICKERS,
    BROAD_MARKET_KEYWORDS,
    DEFAULT_SECTORS,
    MAX_AFFECTED_SECTORS,
    MAX_CONNECTED_STOCKS,
    MIN_NAME_WORD_LENGTH,
    NEWS_RELEVANCE,
    RELEVANCE_THRESHOLD,
    RELEVANCE_WEIGHTS,
    SECTOR_RELEVANCE_PER_MATCH,
)
from newsimpact.models import CompanyRecord, RelevanceEntry, Sector
from newsimpact.reference import MarketReferenceData


@lru_cache(maxsize=256)
def _ticker_pattern(ticker: str) -> "re.Pattern":
    return re.compile(r"\b" + re.escape(ticker.lower()) + r"\b")


def name_words(name: str, distinct: bool = True) -> List[str]:
    """
    Lowercase words of a display name longer than 3 characters. With
    distinct=False repeated words are kept, one entry per occurrence.
    """
    words = []
    for word in name.lower().split(" "):
        if len(word) >= MIN_NAME_WORD_LENGTH and (not distinct or word not in words):
            words.append(word)
    return words


def _matches(text: str, keywords) -> List[str]:
    return [k for k in keywords if k.lower() in text]


def has_ticker_mention(text: str, ticker: str) -> bool:
    """True if the ticker appears as a bare token or as $TICKER."""
    return bool(_ticker_pattern(ticker).search(text)) or f"${ticker.lower()}" in text


def ticker_token_count(text: str, ticker: str) -> int:
    return len(_ticker_pattern(ticker).findall(text))


def count_company_mentions(text: str, company: CompanyRecord) -> int:
    """
    Count raw occurrences of a company in the text.

    Ticker tokens, $TICKER forms and every name word are counted
    independently, so "$aapl" contributes to both the token and the
    cashtag counts.
    """
    count = ticker_token_count(text, company.ticker)
    count += text.count(f"${company.ticker.lower()}")
    for word in name_words(company.name, distinct=False):
        count += text.count(word)
    return count


def matched_sector_keywords(text: str, sector: Sector, ref: MarketReferenceData) -> List[str]:
    return _matches(text, ref.sector_keywords(sector))


def matched_industry_keywords(text: str, sector: Sector, ref: MarketReferenceData) -> List[str]:
    return _matches(text, ref.industry_keywords(sector))


def matched_competitors(text: str, ticker: str, ref: MarketReferenceData) -> List[str]:
    return _matches(text, ref.competitors(ticker))


def sector_relevance(text: str, sector: Sector, ref: MarketReferenceData) -> float:
    """Sector keyword matches scaled to [0, 1]."""
    matches = len(matched_sector_keywords(text, sector, ref))
    return min(1.0, matches * SECTOR_RELEVANCE_PER_MATCH)


def news_relevance(text: str, company: CompanyRecord, ref: MarketReferenceData) -> float:
    """
    Multiplier in [1.0, 2.0] expressing how squarely the article targets
    this company rather than its sector in general.
    """
    relevance = NEWS_RELEVANCE["base"]

    if ticker_token_count(text, company.ticker) > 0:
        relevance += NEWS_RELEVANCE["ticker_bonus"]

    industry_matches = len(matched_industry_keywords(text, company.sector, ref))
    relevance += min(NEWS_RELEVANCE["industry_cap"],
                     industry_matches * NEWS_RELEVANCE["industry_per_match"])

    if matched_competitors(text, company.ticker, ref):
        relevance += NEWS_RELEVANCE["competitor_bonus"]

    return min(NEWS_RELEVANCE["max"], relevance)


def relevance_score(text: str, company: CompanyRecord, ref: MarketReferenceData) -> float:
    """Weighted relevance of one company to the text."""
    score = 0.0

    if has_ticker_mention(text, company.ticker):
        score += RELEVANCE_WEIGHTS["ticker"]

    name_hits = sum(1 for word in name_words(company.name) if word in text)
    score += name_hits * RELEVANCE_WEIGHTS["name_word"]

    score += len(matched_sector_keywords(text, company.sector, ref)) * RELEVANCE_WEIGHTS["sector"]
    score += len(matched_industry_keywords(text, company.sector, ref)) * RELEVANCE_WEIGHTS["industry"]
    score += len(matched_competitors(text, company.ticker, ref)) * RELEVANCE_WEIGHTS["competitor"]

    return score


def score_companies(text: str, ref: MarketReferenceData) -> List[RelevanceEntry]:
    """All companies with a positive score, strongest first (stable on registry order)."""
    entries = []
    for ticker, company in ref.companies.items():
        score = relevance_score(text, company, ref)
        if score > 0:
            entries.append(RelevanceEntry(ticker, score))
    entries.sort(key=lambda e: e.raw_score, reverse=True)
    return entries


def identify_connected_stocks(text: str, ref: MarketReferenceData) -> List[str]:
    """
    Tickers meaningfully connected to the text, strongest first.

    Returns at most MAX_CONNECTED_STOCKS tickers. With no candidate over
    the threshold, broad macro news falls back to a fixed set of market
    leaders and anything else yields an empty list.
    """
    ranked = [e for e in score_companies(text, ref) if e.raw_score >= RELEVANCE_THRESHOLD]

    if ranked:
        logger.debug("Relevance: " + ", ".join(f"{e.ticker}={e.raw_score:g}" for e in ranked))
        return [e.ticker for e in ranked[:MAX_CONNECTED_STOCKS]]

    if any(keyword in text for keyword in BROAD_MARKET_KEYWORDS):
        defaults = [t for t in BROAD_MARKET_DEFAULT_TICKERS if t in ref.companies]
        logger.debug(f"No direct connections; broad market news -> {defaults}")
        return defaults

    return []


def identify_affected_sectors(text: str, ref: MarketReferenceData) -> List[Sector]:
    """Sectors with at least one keyword in the text, or the default trio."""
    affected = [
        sector for sector in ref.sectors()
        if any(keyword in text for keyword in ref.sector_keywords(sector))
    ]

    if not affected:
        affected = [Sector(s) for s in DEFAULT_SECTORS]

    return affected[:MAX_AFFECTED_SECTORS]
