"""
Yahoo Finance last-price lookups with retries and caching.

Only used at start-up (CLI --live-prices) to refresh the base price
table. The impact engine itself never performs I/O.
"""

import time

import yfinance as yf
from loguru import logger

from newsimpact.config import PRICE_PERIOD, YAHOO_DELAY_SECONDS, YAHOO_MAX_RETRIES
from newsimpact.data.cache import get_cached_price, store_price


def get_last_price(ticker: str, period: str = None) -> float:
    """
    Most recent close for a ticker, or 0.0 if Yahoo has nothing.
    """
    period = period or PRICE_PERIOD
    cached = get_cached_price(ticker, period)
    if cached is not None:
        return cached

    for attempt in range(YAHOO_MAX_RETRIES):
        try:
            hist = yf.Ticker(ticker).history(period=period)
            if hist is None or hist.empty or "Close" not in hist.columns:
                return 0.0
            closes = hist["Close"].dropna()
            if closes.empty:
                return 0.0
            price = round(float(closes.iloc[-1]), 2)
            store_price(ticker, period, price)
            return price
        except Exception as e:
            if attempt < YAHOO_MAX_RETRIES - 1:
                wait = YAHOO_DELAY_SECONDS * (2 ** attempt)
                logger.debug(f"Yahoo retry {attempt+1} for {ticker} after {wait}s: {e}")
                time.sleep(wait)
            else:
                logger.warning(f"Yahoo failed for {ticker} after {YAHOO_MAX_RETRIES} attempts: {e}")
    return 0.0


def get_last_prices(tickers: list, period: str = None) -> dict:
    """
    Last close for each ticker. Tickers without a usable price are
    omitted so callers keep their static fallback.
    """
    prices = {}
    for i, ticker in enumerate(tickers):
        price = get_last_price(ticker, period)
        if price > 0:
            prices[ticker] = price
        if i + 1 < len(tickers):
            time.sleep(YAHOO_DELAY_SECONDS)

    logger.info(f"Yahoo prices: got {len(prices)}/{len(tickers)} tickers")
    return prices
