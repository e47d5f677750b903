import sys
import os
import unittest

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from newsimpact.models import (
    ImpactLevel, Sector, SectorImpact, SentimentLabel, SentimentResult, StockImpact, Timeframe,
)
from newsimpact.reference import DEFAULT_REFERENCE as REF
from newsimpact.scoring import narrative
from newsimpact.scoring.impact_model import FixedJitter, build_model

UPBEAT = SentimentResult(score=0.8, label=SentimentLabel.VERY_POSITIVE, confidence=0.9)
GLOOMY = SentimentResult(score=0.2, label=SentimentLabel.VERY_NEGATIVE, confidence=0.5)


def _impact(ticker, score, timeframe=Timeframe.SHORT_TERM):
    return StockImpact(ticker=ticker, company_name=ticker, impact_score=score,
                       impact_level=ImpactLevel.NEUTRAL, confidence=0.7, timeframe=timeframe)


class TestStockReasoning(unittest.TestCase):

    def test_reasoning_templates(self):
        text = "apple apple apple earnings beat as software and cloud demand grows"
        model = build_model("AAPL", REF.company("AAPL"), text, UPBEAT, REF, FixedJitter())
        reasons = narrative.stock_reasoning(model, text)
        self.assertLessEqual(len(reasons), 5)
        self.assertTrue(reasons[0].startswith("Strong Technology sector relevance"))
        self.assertIn("Strong positive sentiment (80%) creates significant upside potential", reasons)
        self.assertIn("High news relevance with 3 direct company mentions", reasons)
        self.assertIn("Large-cap stability may moderate price movements but ensure sustained impact",
                      reasons)

    def test_indirect_exposure(self):
        model = build_model("JNJ", REF.company("JNJ"), "", GLOOMY, REF, FixedJitter())
        reasons = narrative.stock_reasoning(model, "")
        self.assertEqual(reasons[0], "Indirect Healthcare sector exposure to market developments")
        self.assertIn("Negative sentiment (20%) may create downward pressure", reasons)
        self.assertIn("Mid-to-large cap positioning allows for meaningful price discovery", reasons)

    def test_business_factors(self):
        text = "new regulation hits revenue while product launch faces competition"
        self.assertEqual(narrative.business_factors(text), [
            "financial performance", "regulatory environment",
            "competitive dynamics", "product development",
        ])


class TestSectorImpacts(unittest.TestCase):

    def test_sector_impact_fields(self):
        text = "bank credit payment news"
        impacts = narrative.generate_sector_impacts([Sector.FINANCIAL_SERVICES], text, UPBEAT, REF)
        fin = impacts[0]
        self.assertAlmostEqual(fin.impact_score, (0.8 + 0.6) / 2)
        self.assertEqual(fin.affected_stocks, ["JPM", "V", "MA", "BAC"])
        self.assertEqual(fin.reasoning,
                         "Sector directly mentioned with keywords: bank, credit, payment. "
                         "Very Positive sentiment expected to benefit sector performance.")

    def test_indirect_sector_reasoning(self):
        text = ""
        reasoning = narrative.sector_reasoning(Sector.ENERGY, text, GLOOMY, REF)
        self.assertEqual(reasoning, "Indirect sector exposure through market dynamics. "
                                    "Overall very negative sentiment may influence sector performance.")


class TestInsightsRisksOpportunities(unittest.TestCase):

    def test_insights(self):
        stocks = [_impact("AAPL", 0.9, Timeframe.IMMEDIATE), _impact("MSFT", 0.2), _impact("JPM", 0.55)]
        sectors = [SectorImpact(Sector.TECHNOLOGY, 0.55), SectorImpact(Sector.ENERGY, 0.95)]
        insights = narrative.key_insights(stocks, sectors)
        self.assertEqual(insights, [
            "AAPL show strongest positive impact potential with high confidence levels.",
            "MSFT may face headwinds based on the analysis.",
            "Energy sector shows the most significant exposure to these developments.",
            "1 stocks expected to see immediate market reaction within 24 hours.",
            "Market sentiment analysis suggests 67% of analyzed stocks may benefit from these developments.",
        ])

    def test_insights_without_stocks(self):
        insights = narrative.key_insights([], [])
        self.assertEqual(insights, ["No individual stocks show a material connection to this news."])

    def test_risks_keep_generic_caveat(self):
        text = "trade policy and inflation worries"
        risks = narrative.risk_factors(text, GLOOMY)
        self.assertEqual(len(risks), 4)
        self.assertEqual(risks[-1], "Market conditions can change rapidly, affecting prediction accuracy")
        self.assertEqual(narrative.risk_factors("", UPBEAT),
                         ["Market conditions can change rapidly, affecting prediction accuracy"])

    def test_opportunities(self):
        text = "merger adds technology and revenue"
        found = narrative.opportunities(text, UPBEAT)
        self.assertEqual(len(found), 4)
        self.assertEqual(found[0], "Strong positive sentiment creates potential for momentum-driven gains")
        self.assertEqual(found[-1], "Market volatility creates potential entry points for long-term investors")

    def test_timeline_is_constant(self):
        timeline = narrative.build_timeline()
        self.assertEqual(len(timeline.immediate), 3)
        self.assertEqual(timeline.short_term[0], "Earnings guidance adjustments from companies")
        self.assertEqual(timeline.to_dict(), narrative.build_timeline().to_dict())


if __name__ == '__main__':
    unittest.main()
