"""
Lexicon sentiment scoring for news text.

Counts positive and negative keyword hits at three intensity tiers,
weights them (strong=3, moderate=2, mild=1) and normalizes the balance
to a signed value in [-1, 1]. The label is taken from that signed value;
the reported score is the same value rescaled to [0, 1].
"""

from loguru import logger

from newsimpact.config import SENTIMENT_LABEL_THRESHOLDS
from newsimpact.models import SentimentLabel, SentimentResult
from newsimpact.reference import MarketReferenceData


def label_for(raw: float) -> SentimentLabel:
    """Map a signed sentiment value in [-1, 1] to its label."""
    for threshold, label in SENTIMENT_LABEL_THRESHOLDS:
        if raw > threshold:
            return SentimentLabel(label)
    return SentimentLabel.VERY_NEGATIVE


def lexicon_balance(text: str, ref: MarketReferenceData) -> tuple:
    """
    Returns (weighted_sum, total_matches) for the text.

    Each keyword counts once regardless of how often it occurs.
    """
    weighted = 0
    total = 0
    for polarity, sign in (("positive", 1), ("negative", -1)):
        for tier, keywords in ref.lexicon.get(polarity, {}).items():
            matches = sum(1 for k in keywords if k in text)
            if matches:
                weighted += sign * matches * ref.intensity_weights.get(tier, 1)
                total += matches
    return weighted, total


def analyze_sentiment(text: str, ref: MarketReferenceData) -> SentimentResult:
    """
    Score the sentiment of lowercased text.

    Returns a SentimentResult with score in [0, 1] (0.5 = neutral),
    a label, and confidence in [0.3, 0.95] growing with match count.
    Text with no lexicon hits is neutral.
    """
    weighted, total = lexicon_balance(text or "", ref)

    if total > 0:
        raw = max(-1.0, min(1.0, weighted / (total * 2)))
    else:
        raw = 0.0

    confidence = min(0.95, max(0.3, total * 0.1 + 0.5))
    label = label_for(raw)

    logger.debug(f"Sentiment: {total} matches, weighted {weighted}, raw {raw:.3f} -> {label.value}")

    return SentimentResult(
        score=(raw + 1) / 2,
        label=label,
        confidence=confidence,
        raw=raw,
        matches=total,
    )
