"""
Last-close price cache.

One JSON document per cache directory, keyed by "<TICKER>:<period>",
each entry holding the price and the time it was fetched. Entries older
than the TTL are treated as misses and overwritten on the next store.
"""

import json
import os
import time
from typing import Optional

from loguru import logger

from newsimpact.config import CACHE_DIR, CACHE_TTL_HOURS

PRICE_CACHE_FILE = "last_prices.json"


def _cache_file(cache_dir: str = None) -> str:
    return os.path.join(cache_dir or CACHE_DIR, PRICE_CACHE_FILE)


def _entry_key(ticker: str, period: str) -> str:
    return f"{ticker.upper()}:{period}"


def _load(path: str) -> dict:
    if not os.path.exists(path):
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            entries = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.debug(f"Unreadable price cache {path}: {e}")
        return {}
    return entries if isinstance(entries, dict) else {}


def get_cached_price(ticker: str, period: str, cache_dir: str = None,
                     ttl_hours: float = None) -> Optional[float]:
    """Cached close for ticker/period, or None if missing or stale."""
    ttl_hours = CACHE_TTL_HOURS if ttl_hours is None else ttl_hours
    entry = _load(_cache_file(cache_dir)).get(_entry_key(ticker, period))
    if not isinstance(entry, dict):
        return None
    try:
        age_hours = (time.time() - entry["fetched_at"]) / 3600
        if age_hours > ttl_hours:
            return None
        return float(entry["price"])
    except (KeyError, TypeError, ValueError):
        return None


def store_price(ticker: str, period: str, price: float, cache_dir: str = None):
    """Record a freshly fetched close. Write failures only log."""
    path = _cache_file(cache_dir)
    entries = _load(path)
    entries[_entry_key(ticker, period)] = {"price": price, "fetched_at": time.time()}
    try:
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(entries, f, indent=1, sort_keys=True)
    except OSError as e:
        logger.warning(f"Price cache write failed for {ticker}: {e}")
