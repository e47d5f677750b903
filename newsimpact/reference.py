"""
Market reference data: the immutable tables the engine reads.

MarketReferenceData consolidates the company registry, keyword tables,
sentiment lexicon, competitor map, base prices and sector volatility into
one value object. Build it once at start-up with load_reference_data()
and pass it into the engine; tests construct their own.
"""

import json
import os
from dataclasses import dataclass, replace
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from loguru import logger

from newsimpact import config
from newsimpact.models import CompanyRecord, Sector


def _freeze_keywords(table: Mapping) -> Mapping:
    return MappingProxyType({
        Sector(sector): tuple(keywords) for sector, keywords in table.items()
    })


@dataclass(frozen=True)
class MarketReferenceData:
    companies: Mapping[str, CompanyRecord]
    sector_keyword_table: Mapping[Sector, Tuple[str, ...]]
    industry_keyword_table: Mapping[Sector, Tuple[str, ...]]
    lexicon: Mapping[str, Mapping[str, Tuple[str, ...]]]
    intensity_weights: Mapping[str, int]
    competitor_table: Mapping[str, Tuple[str, ...]]
    base_prices: Mapping[str, float]
    sector_volatility_table: Mapping[Sector, float]
    default_base_price: float = config.DEFAULT_BASE_PRICE
    default_sector_volatility: float = config.DEFAULT_SECTOR_VOLATILITY

    # ── Accessors ───────────────────────────────────────────────────
    def company(self, ticker: str) -> Optional[CompanyRecord]:
        return self.companies.get(ticker)

    def sectors(self) -> List[Sector]:
        return list(self.sector_keyword_table.keys())

    def sector_keywords(self, sector: Sector) -> Tuple[str, ...]:
        return self.sector_keyword_table.get(sector, ())

    def industry_keywords(self, sector: Sector) -> Tuple[str, ...]:
        return self.industry_keyword_table.get(sector, ())

    def competitors(self, ticker: str) -> Tuple[str, ...]:
        return self.competitor_table.get(ticker, ())

    def base_price(self, ticker: str) -> float:
        """Static reference price; unknown tickers get the default."""
        return float(self.base_prices.get(ticker, self.default_base_price))

    def sector_volatility(self, sector: Sector) -> float:
        return self.sector_volatility_table.get(sector, self.default_sector_volatility)

    def companies_in_sector(self, sector: Sector) -> List[str]:
        return [t for t, c in self.companies.items() if c.sector == sector]

    def with_base_prices(self, prices: Dict[str, float]) -> "MarketReferenceData":
        """Return a copy with the given prices overlaid on the base table."""
        merged = dict(self.base_prices)
        merged.update({t: float(p) for t, p in prices.items() if p and p > 0})
        return replace(self, base_prices=MappingProxyType(merged))


def build_reference_data(
    companies: dict = None,
    sector_keywords: dict = None,
    industry_keywords: dict = None,
    lexicon: dict = None,
    competitors: dict = None,
    base_prices: dict = None,
    sector_volatility: dict = None,
) -> MarketReferenceData:
    """
    Build a MarketReferenceData from plain tables.

    Any table left as None falls back to the defaults in newsimpact.config.
    `companies` maps ticker -> (name, sector, market_cap).
    """
    companies = config.COMPANIES if companies is None else companies
    sector_keywords = config.SECTOR_KEYWORDS if sector_keywords is None else sector_keywords
    industry_keywords = config.INDUSTRY_KEYWORDS if industry_keywords is None else industry_keywords
    lexicon = config.SENTIMENT_LEXICON if lexicon is None else lexicon
    competitors = config.COMPETITORS if competitors is None else competitors
    base_prices = config.BASE_PRICES if base_prices is None else base_prices
    sector_volatility = config.SECTOR_VOLATILITY if sector_volatility is None else sector_volatility

    registry = {
        ticker: CompanyRecord(ticker, name, Sector(sector), int(market_cap))
        for ticker, (name, sector, market_cap) in companies.items()
    }

    return MarketReferenceData(
        companies=MappingProxyType(registry),
        sector_keyword_table=_freeze_keywords(sector_keywords),
        industry_keyword_table=_freeze_keywords(industry_keywords),
        lexicon=MappingProxyType({
            polarity: MappingProxyType({tier: tuple(words) for tier, words in tiers.items()})
            for polarity, tiers in lexicon.items()
        }),
        intensity_weights=MappingProxyType(dict(config.INTENSITY_WEIGHTS)),
        competitor_table=MappingProxyType({t: tuple(c) for t, c in competitors.items()}),
        base_prices=MappingProxyType({t: float(p) for t, p in base_prices.items()}),
        sector_volatility_table=MappingProxyType({
            Sector(s): float(v) for s, v in sector_volatility.items()
        }),
    )


def _apply_overrides(overrides: dict) -> dict:
    """Merge an override document into copies of the config tables."""
    companies = dict(config.COMPANIES)
    for ticker, entry in overrides.get("companies", {}).items():
        try:
            sector = Sector(entry["sector"]).value
            companies[ticker.upper()] = (entry["name"], sector, int(entry["market_cap"]))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping company override {ticker}: {e}")

    sector_volatility = dict(config.SECTOR_VOLATILITY)
    for sector, value in overrides.get("sector_volatility", {}).items():
        if sector not in config.SECTOR_KEYWORDS:
            logger.warning(f"Skipping volatility override for unknown sector {sector!r}")
            continue
        try:
            sector_volatility[sector] = float(value)
        except (TypeError, ValueError) as e:
            logger.warning(f"Skipping volatility override for {sector}: {e}")

    competitors = dict(config.COMPETITORS)
    for ticker, names in overrides.get("competitors", {}).items():
        if not isinstance(names, list):
            logger.warning(f"Skipping competitor override {ticker}: expected a list of names")
            continue
        try:
            competitors[ticker.upper()] = [n.lower() for n in names]
        except AttributeError as e:
            logger.warning(f"Skipping competitor override {ticker}: {e}")

    base_prices = dict(config.BASE_PRICES)
    for ticker, price in overrides.get("base_prices", {}).items():
        try:
            base_prices[ticker.upper()] = float(price)
        except (TypeError, ValueError) as e:
            logger.warning(f"Skipping base price override {ticker}: {e}")

    return {
        "companies": companies,
        "competitors": competitors,
        "base_prices": base_prices,
        "sector_volatility": sector_volatility,
    }


def load_reference_data(path: str = None) -> MarketReferenceData:
    """
    Load reference data once at process start.

    Reads the override file at `path` (or config.REFERENCE_OVERRIDES_PATH)
    if it exists. A malformed file is logged and ignored.
    """
    path = path or config.REFERENCE_OVERRIDES_PATH
    if not path or not os.path.exists(path):
        return build_reference_data()

    try:
        with open(path, "r", encoding="utf-8") as f:
            overrides = json.load(f)
        tables = _apply_overrides(overrides)
    except (OSError, json.JSONDecodeError, AttributeError, TypeError, ValueError) as e:
        logger.warning(f"Ignoring reference overrides at {path}: {e}")
        return build_reference_data()

    logger.info(f"Loaded reference overrides from {path} "
                f"({len(tables['companies'])} companies)")
    return build_reference_data(**tables)


DEFAULT_REFERENCE = build_reference_data()
