import sys
import os
import json
import tempfile
import unittest

# Add project root to path
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from newsimpact import config
from newsimpact.models import Sector
from newsimpact.reference import DEFAULT_REFERENCE, build_reference_data, load_reference_data


class TestMarketReferenceData(unittest.TestCase):

    def test_defaults_match_config(self):
        ref = DEFAULT_REFERENCE
        self.assertEqual(list(ref.companies), list(config.COMPANIES))
        self.assertEqual(ref.company("AAPL").sector, Sector.TECHNOLOGY)
        self.assertEqual(ref.base_price("BAC"), 32.0)
        self.assertEqual(ref.sector_volatility(Sector.UTILITIES), 0.6)
        self.assertEqual(ref.competitors("JPM"), ())
        self.assertEqual(ref.industry_keywords(Sector.UTILITIES), ())
        self.assertIn("AI", ref.industry_keywords(Sector.TECHNOLOGY))

    def test_tables_are_read_only(self):
        with self.assertRaises(TypeError):
            DEFAULT_REFERENCE.companies["XYZ"] = None
        with self.assertRaises(TypeError):
            DEFAULT_REFERENCE.base_prices["AAPL"] = 1.0

    def test_with_base_prices(self):
        updated = DEFAULT_REFERENCE.with_base_prices({"AAPL": 201.5, "MSFT": 0})
        self.assertEqual(updated.base_price("AAPL"), 201.5)
        self.assertEqual(updated.base_price("MSFT"), 350.0)
        self.assertEqual(DEFAULT_REFERENCE.base_price("AAPL"), 175.0)

    def test_fixture_tables(self):
        ref = build_reference_data(companies={"XYZ": ("Xyz Power Co", "Utilities", 10)})
        self.assertEqual(ref.companies_in_sector(Sector.UTILITIES), ["XYZ"])
        self.assertEqual(ref.base_price("XYZ"), 100.0)


class TestLoadReferenceData(unittest.TestCase):

    def _write(self, payload) -> str:
        fd, path = tempfile.mkstemp(suffix=".json")
        with os.fdopen(fd, "w") as f:
            f.write(payload if isinstance(payload, str) else json.dumps(payload))
        self.addCleanup(os.remove, path)
        return path

    def test_missing_file_gives_defaults(self):
        ref = load_reference_data("/nonexistent/overrides.json")
        self.assertEqual(list(ref.companies), list(config.COMPANIES))

    def test_overrides_merge(self):
        path = self._write({
            "companies": {
                "xom": {"name": "Exxon Mobil Corporation", "sector": "Energy",
                        "market_cap": 450_000_000_000},
                "BAD": {"name": "Nowhere", "sector": "Crypto", "market_cap": 1},
            },
            "base_prices": {"XOM": 110},
            "sector_volatility": {"Energy": 1.7, "Crypto": 9},
            "competitors": {"XOM": ["Chevron"]},
        })
        ref = load_reference_data(path)
        self.assertEqual(ref.company("XOM").sector, Sector.ENERGY)
        self.assertIsNone(ref.company("BAD"))
        self.assertEqual(ref.base_price("XOM"), 110.0)
        self.assertEqual(ref.sector_volatility(Sector.ENERGY), 1.7)
        self.assertEqual(ref.competitors("XOM"), ("chevron",))
        self.assertIn("AAPL", ref.companies)

    def test_malformed_file_ignored(self):
        path = self._write("{not json")
        ref = load_reference_data(path)
        self.assertEqual(list(ref.companies), list(config.COMPANIES))

    def test_bad_values_skipped(self):
        path = self._write({
            "base_prices": {"AAPL": "n/a", "MSFT": 410},
            "sector_volatility": {"Energy": None, "Utilities": "0.9"},
            "competitors": {"AAPL": "samsung", "XOM": [3], "JPM": ["Citigroup"]},
        })
        ref = load_reference_data(path)
        self.assertEqual(ref.base_price("AAPL"), 175.0)
        self.assertEqual(ref.base_price("MSFT"), 410.0)
        self.assertEqual(ref.sector_volatility(Sector.ENERGY), config.SECTOR_VOLATILITY["Energy"])
        self.assertEqual(ref.sector_volatility(Sector.UTILITIES), 0.9)
        self.assertEqual(ref.competitors("AAPL"), tuple(config.COMPETITORS["AAPL"]))
        self.assertEqual(ref.competitors("XOM"), ())
        self.assertEqual(ref.competitors("JPM"), ("citigroup",))

    def test_wrong_section_shape_ignored(self):
        path = self._write({"base_prices": ["AAPL", 1]})
        ref = load_reference_data(path)
        self.assertEqual(ref.base_price("AAPL"), 175.0)


if __name__ == '__main__':
    unittest.main()
