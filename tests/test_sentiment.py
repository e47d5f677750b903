import sys
import os
import unittest

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from newsimpact.analysis.sentiment import analyze_sentiment, label_for, lexicon_balance
from newsimpact.models import SentimentLabel
from newsimpact.reference import DEFAULT_REFERENCE as REF


class TestSentimentLabels(unittest.TestCase):

    def test_label_boundaries(self):
        """Labels use strict greater-than on the signed value."""
        self.assertEqual(label_for(0.35), SentimentLabel.VERY_POSITIVE)
        self.assertEqual(label_for(0.3), SentimentLabel.POSITIVE)
        self.assertEqual(label_for(0.1), SentimentLabel.NEUTRAL)
        self.assertEqual(label_for(0.05), SentimentLabel.NEUTRAL)
        self.assertEqual(label_for(-0.1), SentimentLabel.NEGATIVE)
        self.assertEqual(label_for(-0.3), SentimentLabel.VERY_NEGATIVE)

    def test_label_from_signed_value_not_rescaled_score(self):
        # growth (+2) and slow (-1): raw 0.25 -> Positive, score 0.625
        result = analyze_sentiment("growth is slow", REF)
        self.assertAlmostEqual(result.raw, 0.25)
        self.assertAlmostEqual(result.score, 0.625)
        self.assertEqual(result.label, SentimentLabel.POSITIVE)


class TestAnalyzeSentiment(unittest.TestCase):

    def test_no_matches_is_neutral(self):
        result = analyze_sentiment("", REF)
        self.assertEqual(result.score, 0.5)
        self.assertEqual(result.label, SentimentLabel.NEUTRAL)
        self.assertEqual(result.confidence, 0.5)
        self.assertEqual(result.matches, 0)

    def test_single_strong_positive_clamps(self):
        result = analyze_sentiment("a record quarter", REF)
        self.assertEqual(result.raw, 1.0)
        self.assertEqual(result.score, 1.0)
        self.assertAlmostEqual(result.confidence, 0.6)

    def test_balanced_text(self):
        result = analyze_sentiment("growth offset by decline", REF)
        self.assertEqual(result.label, SentimentLabel.NEUTRAL)
        self.assertEqual(result.score, 0.5)
        self.assertAlmostEqual(result.confidence, 0.7)

    def test_negative_tiers(self):
        self.assertEqual(analyze_sentiment("stable despite concern", REF).label,
                         SentimentLabel.NEGATIVE)
        very_neg = analyze_sentiment("crash after stable run", REF)
        self.assertEqual(very_neg.label, SentimentLabel.VERY_NEGATIVE)
        self.assertAlmostEqual(very_neg.score, 0.25)

    def test_keyword_counted_once(self):
        self.assertEqual(lexicon_balance("surge surge surge", REF), (3, 1))

    def test_confidence_capped(self):
        text = " ".join(["breakthrough record surge soar rally boom exceptional outstanding",
                         "growth increase rise gain improve positive strong beat"])
        result = analyze_sentiment(text, REF)
        self.assertEqual(result.confidence, 0.95)
        self.assertTrue(0.0 <= result.score <= 1.0)


if __name__ == '__main__':
    unittest.main()
