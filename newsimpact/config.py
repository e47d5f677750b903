"""Central configuration for the News Impact Analyzer."""

# ── Engine Version ────────────────────────────────────────────────
# Reported by `main.py --version`; kept in step with pyproject.toml
ENGINE_VERSION = "1.2.0"

# ── Company Registry ──────────────────────────────────────────────
# ticker -> (display name, sector, market cap in USD)
COMPANIES = {
    "AAPL":  ("Apple Inc.",               "Technology",             3_000_000_000_000),
    "MSFT":  ("Microsoft Corporation",    "Technology",             2_800_000_000_000),
    "GOOGL": ("Alphabet Inc.",            "Technology",             1_700_000_000_000),
    "AMZN":  ("Amazon.com Inc.",          "Consumer Discretionary", 1_500_000_000_000),
    "TSLA":  ("Tesla Inc.",               "Consumer Discretionary",   800_000_000_000),
    "META":  ("Meta Platforms Inc.",      "Technology",               750_000_000_000),
    "NVDA":  ("NVIDIA Corporation",       "Technology",             1_800_000_000_000),
    "JPM":   ("JPMorgan Chase & Co.",     "Financial Services",       450_000_000_000),
    "JNJ":   ("Johnson & Johnson",        "Healthcare",               400_000_000_000),
    "V":     ("Visa Inc.",                "Financial Services",       500_000_000_000),
    "PG":    ("Procter & Gamble Co.",     "Consumer Staples",         350_000_000_000),
    "UNH":   ("UnitedHealth Group Inc.",  "Healthcare",               480_000_000_000),
    "HD":    ("The Home Depot Inc.",      "Consumer Discretionary",   320_000_000_000),
    "MA":    ("Mastercard Inc.",          "Financial Services",       380_000_000_000),
    "BAC":   ("Bank of America Corp.",    "Financial Services",       280_000_000_000),
}

# ── Sector Keywords ───────────────────────────────────────────────
# Substring matched against lowercased text. "ai" deliberately stays short.
SECTOR_KEYWORDS = {
    "Technology": [
        "tech", "software", "ai", "artificial intelligence", "cloud",
        "digital", "innovation", "semiconductor", "chip",
    ],
    "Healthcare": [
        "health", "medical", "pharmaceutical", "drug", "biotech",
        "clinical", "fda", "treatment",
    ],
    "Financial Services": [
        "bank", "financial", "credit", "loan", "interest rate", "fed",
        "monetary", "payment",
    ],
    "Consumer Discretionary": [
        "retail", "consumer", "shopping", "e-commerce", "automotive",
        "electric vehicle",
    ],
    "Consumer Staples": ["food", "beverage", "household", "essential", "grocery"],
    "Energy": ["oil", "gas", "energy", "renewable", "solar", "wind", "petroleum"],
    "Industrials": ["manufacturing", "industrial", "aerospace", "defense", "transportation"],
    "Materials": ["mining", "metals", "chemicals", "materials", "commodities"],
    "Real Estate": ["real estate", "property", "reit", "housing", "construction"],
    "Utilities": ["utility", "electric", "power", "water", "gas utility"],
}

# Finer-grained per-sector vocabulary used for relevance and reasoning.
# Sectors missing here simply have no industry keywords.
INDUSTRY_KEYWORDS = {
    "Technology": [
        "innovation", "software", "hardware", "digital", "cloud", "AI",
        "data", "platform", "algorithm",
    ],
    "Healthcare": [
        "drug", "treatment", "clinical", "FDA", "medical", "pharmaceutical",
        "biotech", "vaccine",
    ],
    "Financial Services": [
        "banking", "lending", "credit", "financial", "payment", "fintech",
        "regulation", "interest",
    ],
    "Consumer Discretionary": [
        "retail", "brand", "consumer", "sales", "marketing", "e-commerce",
        "shopping", "automotive",
    ],
    "Consumer Staples": ["food", "beverage", "household", "grocery", "brand", "consumer goods"],
    "Energy": ["oil", "gas", "renewable", "solar", "wind", "battery", "electric", "carbon", "energy"],
    "Industrials": ["manufacturing", "industrial", "aerospace", "defense", "transportation", "logistics"],
}

# ── Competitors ───────────────────────────────────────────────────
COMPETITORS = {
    "AAPL":  ["samsung", "google", "microsoft", "amazon"],
    "MSFT":  ["apple", "google", "amazon", "oracle"],
    "GOOGL": ["apple", "microsoft", "amazon", "meta"],
    "AMZN":  ["microsoft", "google", "walmart", "alibaba"],
    "TSLA":  ["ford", "gm", "volkswagen", "toyota"],
    "META":  ["google", "apple", "twitter", "snapchat"],
    "NVDA":  ["amd", "intel", "qualcomm", "broadcom"],
}

# ── Sentiment Lexicon ─────────────────────────────────────────────
SENTIMENT_LEXICON = {
    "positive": {
        "strong":   ["breakthrough", "record", "surge", "soar", "rally", "boom",
                     "exceptional", "outstanding"],
        "moderate": ["growth", "increase", "rise", "gain", "improve", "positive",
                     "strong", "beat"],
        "mild":     ["stable", "steady", "maintain", "hold", "continue"],
    },
    "negative": {
        "strong":   ["crash", "plunge", "collapse", "disaster", "crisis",
                     "bankruptcy", "scandal"],
        "moderate": ["decline", "fall", "drop", "loss", "weak", "concern",
                     "worry", "miss"],
        "mild":     ["caution", "uncertainty", "challenge", "pressure", "slow"],
    },
}
INTENSITY_WEIGHTS = {"strong": 3, "moderate": 2, "mild": 1}

# ── Price Tables ──────────────────────────────────────────────────
BASE_PRICES = {
    "AAPL": 175, "MSFT": 350, "GOOGL": 140, "AMZN": 145, "TSLA": 240,
    "META": 320, "NVDA": 450, "JPM": 150, "JNJ": 160, "V": 250,
    "PG": 155, "UNH": 520, "HD": 330, "MA": 380, "BAC": 32,
}
DEFAULT_BASE_PRICE = 100.0

SECTOR_VOLATILITY = {
    "Technology":             1.2,
    "Healthcare":             0.9,
    "Financial Services":     1.1,
    "Consumer Discretionary": 1.3,
    "Consumer Staples":       0.7,
    "Energy":                 1.5,
    "Industrials":            1.0,
    "Materials":              1.4,
    "Real Estate":            0.8,
    "Utilities":              0.6,
}
DEFAULT_SECTOR_VOLATILITY = 1.0

# ═══════════════════════════════════════════════════════════════════
# RELEVANCE EXTRACTION
# Weights are behavioral contracts; retuning changes which companies
# surface for a given article.
# ═══════════════════════════════════════════════════════════════════
RELEVANCE_WEIGHTS = {
    "ticker":     10.0,   # bare token or $TICKER
    "name_word":   5.0,   # per distinct display-name word (> 3 chars)
    "sector":      2.0,   # per sector keyword
    "industry":    1.5,   # per industry keyword
    "competitor":  1.0,   # per competitor name
}
MIN_NAME_WORD_LENGTH = 4
RELEVANCE_THRESHOLD = 2.0
MAX_CONNECTED_STOCKS = 6

BROAD_MARKET_KEYWORDS = ["market", "economy", "fed", "inflation", "gdp", "recession", "bull", "bear"]
BROAD_MARKET_DEFAULT_TICKERS = ["AAPL", "MSFT", "GOOGL", "AMZN"]

DEFAULT_SECTORS = ["Technology", "Financial Services", "Healthcare"]
MAX_AFFECTED_SECTORS = 5
MAX_SECTOR_STOCKS = 4

# ═══════════════════════════════════════════════════════════════════
# IMPACT MODEL
# ═══════════════════════════════════════════════════════════════════
LARGE_CAP_THRESHOLD = 1_000_000_000_000      # > $1T
STABLE_CAP_THRESHOLD = 500_000_000_000       # > $500B
MID_LARGE_CAP_THRESHOLD = 100_000_000_000    # > $100B

MENTION_BOOST_PER_MENTION = 0.08
MENTION_BOOST_CAP = 0.3
SECTOR_RELEVANCE_PER_MATCH = 0.2
SECTOR_BLEND_WEIGHT = 0.4

IMPACT_VOLATILITY = {"large_cap": 0.85, "other": 1.15}
PRICE_VOLATILITY = {"large_cap": 0.7, "other": 1.3}

NEWS_RELEVANCE = {
    "base":                1.0,
    "ticker_bonus":        0.3,
    "industry_per_match":  0.08,
    "industry_cap":        0.4,
    "competitor_bonus":    0.15,
    "max":                 2.0,
}

CONFIDENCE = {
    "base":                 0.5,
    "sentiment_weight":     0.3,
    "mention_per_mention":  0.04,
    "mention_cap":          0.2,
    "sector_weight":        0.15,
    "stable_factor":        1.1,
    "unstable_factor":      0.95,
    "floor":                0.3,
    "ceiling":              0.95,
}

# "Historical accuracy" jitter applied to confidence; the only random draw.
JITTER_RANGE = (0.8, 0.95)

PRICE_CHANGE_RANGE_PCT = 25.0   # (score - 0.5) * 25 => +/-12.5%

IMPACT_LEVEL_THRESHOLDS = [
    (0.8, "Very Positive"),
    (0.6, "Positive"),
    (0.4, "Neutral"),
    (0.2, "Negative"),
]

SENTIMENT_LABEL_THRESHOLDS = [
    (0.3, "Very Positive"),
    (0.1, "Positive"),
    (-0.1, "Neutral"),
    (-0.3, "Negative"),
]

# ── Timeframe Keywords ────────────────────────────────────────────
IMMEDIATE_KEYWORDS = ["immediate", "today", "breaking", "urgent", "now", "just announced"]
SHORT_TERM_KEYWORDS = ["quarter", "earnings", "this week", "next week", "monthly"]
LONG_TERM_KEYWORDS = ["year", "years", "long-term", "strategic", "future", "roadmap", "vision"]
STRUCTURAL_KEYWORDS = ["regulation", "policy", "transformation"]

# ═══════════════════════════════════════════════════════════════════
# NARRATIVE
# ═══════════════════════════════════════════════════════════════════
MAX_REASONS = 5
MAX_INSIGHTS = 5
MAX_RISKS = 4
MAX_OPPORTUNITIES = 4

BUSINESS_FACTORS = [
    ("financial performance",  ["earnings", "revenue", "profit"]),
    ("regulatory environment", ["regulation", "policy", "compliance"]),
    ("competitive dynamics",   ["competition", "market share"]),
    ("product development",    ["innovation", "product", "launch"]),
]

TIMELINE = {
    "immediate": [
        "Initial market reaction and price discovery",
        "Trading volume spike in affected securities",
        "Analyst commentary and rating updates",
    ],
    "short_term": [
        "Earnings guidance adjustments from companies",
        "Sector rotation based on new information",
        "Options market activity reflecting sentiment shifts",
    ],
    "long_term": [
        "Fundamental business impact assessment",
        "Strategic positioning changes by companies",
        "Long-term valuation multiple adjustments",
    ],
}

# ── Caching ─────────────────────────────────────────────────────────
CACHE_DIR = ".cache"
CACHE_TTL_HOURS = 1  # Re-fetch after this many hours

# ── Rate Limiting ───────────────────────────────────────────────────
YAHOO_DELAY_SECONDS = 0.5
YAHOO_MAX_RETRIES = 3
PRICE_PERIOD = "5d"

# ═══════════════════════════════════════════════════════════════════
# REFERENCE OVERRIDES
# If reference_overrides.json exists in the project root (or the
# NEWSIMPACT_REFERENCE env var names a file), newsimpact.reference
# merges its companies / base_prices / sector_volatility / competitors
# into the tables above at load time.
# ═══════════════════════════════════════════════════════════════════
import os as _os

REFERENCE_OVERRIDES_PATH = _os.environ.get(
    "NEWSIMPACT_REFERENCE",
    _os.path.normpath(_os.path.join(_os.path.dirname(__file__), "..", "reference_overrides.json")),
)
