#!/usr/bin/env python3
"""
News Impact Analyzer - CLI Entry Point

Usage:
    python main.py analyze "Headline" --text "Body"   # Analyze one article
    python main.py analyze "Headline" --file body.txt --json
    python main.py batch articles.csv -o impacts.csv  # Analyze a CSV of articles
    python main.py companies                          # Show the company registry
"""

import argparse
import json
import sys

from loguru import logger

from newsimpact.config import ENGINE_VERSION


def setup_logging(verbose: bool = False):
    """Configure loguru logging."""
    logger.remove()
    level = "DEBUG" if verbose else "INFO"
    logger.add(
        sys.stderr,
        level=level,
        format="<green>{time:HH:mm:ss}</green> | <level>{level:<7}</level> | <level>{message}</level>",
    )
    logger.add(
        "newsimpact.log",
        level="DEBUG",
        rotation="10 MB",
        retention="7 days",
    )


def _build_engine(args):
    from newsimpact.pipeline.orchestrator import ImpactEngine
    from newsimpact.reference import load_reference_data
    from newsimpact.scoring.impact_model import RandomJitter

    reference = load_reference_data(args.reference)

    if args.live_prices:
        from newsimpact.data.yahoo_client import get_last_prices
        prices = get_last_prices(list(reference.companies))
        reference = reference.with_base_prices(prices)

    return ImpactEngine(reference, RandomJitter(args.seed))


def _read_body(args) -> str:
    if args.text is not None:
        return args.text
    if args.file == "-":
        return sys.stdin.read()
    if args.file:
        with open(args.file, "r", encoding="utf-8") as f:
            return f.read()
    return ""


def cmd_analyze(args):
    """Analyze a single article."""
    try:
        body = _read_body(args)
    except OSError as e:
        print(f"\nCould not read article text: {e}", file=sys.stderr)
        sys.exit(2)

    engine = _build_engine(args)
    result = engine.analyze_article_impact(args.headline, body)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return

    sent = result.overall_market_sentiment
    print("\n" + "=" * 70)
    print(f"  {args.headline[:66]}")
    print("=" * 70)
    print(f"  Market sentiment: {sent.label.value} "
          f"(score {sent.score:.2f}, confidence {sent.confidence:.2f})")

    if not result.stock_impacts:
        print("\n  No material stock impact detected.")

    for i, impact in enumerate(result.stock_impacts, 1):
        print(f"\n  #{i}. {impact.ticker} - {impact.company_name}")
        print(f"      {impact.impact_level.value} | Score: {impact.impact_score:.2f} | "
              f"Confidence: {impact.confidence:.2f} | {impact.timeframe.value}")
        target = impact.price_target
        if target:
            print(f"      ${target.current:.2f} -> ${target.predicted:.2f} "
                  f"({target.change_percent:+.2f}%)")
        for reason in impact.reasoning:
            print(f"      - {reason}")

    print("\n  Sectors:")
    for sector in result.sector_impacts:
        print(f"    {sector.name.value:<24} {sector.impact_score:.2f}  "
              f"[{', '.join(sector.affected_stocks)}]")

    for title, items in (("Key insights", result.key_insights),
                         ("Risks", result.risk_factors),
                         ("Opportunities", result.opportunities)):
        print(f"\n  {title}:")
        for item in items:
            print(f"    - {item}")
    print("=" * 70)


def cmd_batch(args):
    """Analyze a CSV of articles."""
    import pandas as pd

    try:
        articles = pd.read_csv(args.input)
    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        print(f"\nCould not read {args.input}: {e}", file=sys.stderr)
        sys.exit(2)

    engine = _build_engine(args)
    try:
        impacts = engine.analyze_batch(articles)
    except ValueError as e:
        print(f"\n{e}", file=sys.stderr)
        sys.exit(2)

    if args.output:
        impacts.to_csv(args.output, index=False)
        print(f"\nWrote {len(impacts)} rows to {args.output}")
    else:
        print(impacts.to_string(index=False))


def cmd_companies(args):
    """Show the company registry."""
    from newsimpact.reference import load_reference_data

    reference = load_reference_data(args.reference)
    print(f"\n  {'Ticker':<7} {'Company':<28} {'Sector':<24} {'Mkt Cap':>10} {'Base':>8}")
    print("  " + "-" * 81)
    for ticker, company in reference.companies.items():
        print(f"  {ticker:<7} {company.name:<28} {company.sector.value:<24} "
              f"{company.market_cap / 1e9:>9.0f}B ${reference.base_price(ticker):>7.2f}")


def main():
    parser = argparse.ArgumentParser(
        description="News Impact Analyzer - Estimate stock and sector impact of financial news",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py analyze "Apple Reports Record Q4 Earnings" --text "..."
  python main.py analyze "Fed raises rates" --file article.txt --json
  python main.py analyze "Tesla recalls Model Y" --seed 7      # reproducible confidence
  python main.py batch headlines.csv -o impacts.csv
  python main.py --reference my_overrides.json companies
        """,
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Verbose debug output")
    parser.add_argument("--version", action="version", version=f"newsimpact {ENGINE_VERSION}")
    parser.add_argument("--reference", default=None, help="JSON file overriding reference data")

    subparsers = parser.add_subparsers(dest="command", help="Command to run")

    # ── analyze command ─────────────────────────────────────────────
    an_parser = subparsers.add_parser("analyze", help="Analyze one article")
    an_parser.add_argument("headline", help="Article headline")
    body = an_parser.add_mutually_exclusive_group()
    body.add_argument("--text", default=None, help="Article body text")
    body.add_argument("--file", default=None, help="Read article body from file ('-' for stdin)")
    an_parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    an_parser.add_argument("--seed", type=int, default=None, help="Seed the confidence jitter")
    an_parser.add_argument("--live-prices", action="store_true", help="Use Yahoo last close as base price")

    # ── batch command ───────────────────────────────────────────────
    batch_parser = subparsers.add_parser("batch", help="Analyze a CSV with headline,text columns")
    batch_parser.add_argument("input", help="Input CSV path")
    batch_parser.add_argument("-o", "--output", default=None, help="Write results to CSV")
    batch_parser.add_argument("--seed", type=int, default=None, help="Seed the confidence jitter")
    batch_parser.add_argument("--live-prices", action="store_true", help="Use Yahoo last close as base price")

    # ── companies command ───────────────────────────────────────────
    subparsers.add_parser("companies", help="Show the company registry")

    args = parser.parse_args()

    if not args.command:
        parser.print_help()
        sys.exit(1)

    setup_logging(args.verbose)

    commands = {
        "analyze": cmd_analyze,
        "batch": cmd_batch,
        "companies": cmd_companies,
    }

    cmd_func = commands.get(args.command)
    if cmd_func:
        cmd_func(args)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
