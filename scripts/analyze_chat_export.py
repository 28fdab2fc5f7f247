#!/usr/bin/env python3
"""
Chat Export Analyzer

Parses a WhatsApp group export and reports:
1. Extraction stats (purpose, property type, price band, areas)
2. Mobile coverage (messages with a valid broker number)
3. Data quality of the raw export (score, status, suggestions)
4. Optionally, an auto-clean pass with before/after scores

Usage:
    python scripts/analyze_chat_export.py chat.txt

    # With options:
    python scripts/analyze_chat_export.py chat.txt \
        --clean \
        --json results.json \
        --top-areas 5
"""

import argparse
import json
import logging
import sys
from collections import Counter
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from dotenv import load_dotenv

load_dotenv()

from aqar.extraction import parse_chat_export
from aqar.quality import Text, analyze, auto_clean
from aqar.utils.config import get_settings

# Configure logging
logging.basicConfig(
    level=getattr(logging, get_settings().LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def analyze_chat_export(path: Path, clean: bool = False, top_areas: int = 10) -> dict:
    """Parse one export file and collect extraction and quality stats."""
    content = path.read_text(encoding="utf-8")
    messages = parse_chat_export(content)

    purposes = Counter(m.fields.purpose.value for m in messages)
    property_types = Counter(m.fields.property_type.value for m in messages)
    price_ranges = Counter(m.fields.price_range.value for m in messages)
    areas = Counter(m.fields.area for m in messages if m.fields.area)
    with_mobile = sum(1 for m in messages if m.fields.broker_mobile)

    report = analyze(Text(content))

    print(f"\n{'='*70}")
    print("CHAT EXPORT ANALYSIS")
    print(f"{'='*70}")
    print(f"File:         {path}")
    print(f"Messages:     {len(messages)}")
    print(f"With mobile:  {with_mobile}")
    print(f"{'='*70}\n")

    print("Purpose:")
    for purpose, count in purposes.most_common():
        print(f"  {purpose:<12} {count}")

    print("\nProperty type:")
    for property_type, count in property_types.most_common():
        print(f"  {property_type:<12} {count}")

    print("\nPrice range:")
    for price_range, count in price_ranges.most_common():
        print(f"  {price_range:<12} {count}")

    print(f"\nTop {top_areas} areas:")
    for area, count in areas.most_common(top_areas):
        print(f"  {area:<24} {count}")

    print("\n" + "="*70)
    print("DATA QUALITY")
    print("="*70)
    print(f"Score:  {report.score}/100 ({report.status.value})")
    for suggestion in report.suggestions:
        print(f"  - {suggestion}")

    results = {
        "file": str(path),
        "messages": len(messages),
        "with_mobile": with_mobile,
        "purpose": dict(purposes),
        "property_type": dict(property_types),
        "price_range": dict(price_ranges),
        "areas": dict(areas.most_common(top_areas)),
        "quality": report.to_dict(),
    }

    if clean:
        cleaning = auto_clean(Text(content))
        print(f"\nAuto-clean: {cleaning.original_score} -> {cleaning.final_score} ({cleaning.improvement:+d})")
        results["cleaning"] = {
            key: value
            for key, value in cleaning.to_dict().items()
            if key != "cleaned_content"
        }

    return results


def main():
    """Main entry point."""
    parser = argparse.ArgumentParser(
        description="Extract listings from a WhatsApp chat export and report data quality"
    )
    parser.add_argument(
        "export_file",
        type=Path,
        help="Path to the exported chat (.txt)"
    )
    parser.add_argument(
        "--clean",
        action="store_true",
        help="Also run an auto-clean pass and report the score change"
    )
    parser.add_argument(
        "--json",
        type=Path,
        default=None,
        help="Write results as JSON to this path"
    )
    parser.add_argument(
        "--top-areas",
        type=int,
        default=10,
        help="Number of areas to list (default: 10)"
    )

    args = parser.parse_args()

    if not args.export_file.exists():
        print(f"ERROR: File not found: {args.export_file}")
        sys.exit(1)

    results = analyze_chat_export(args.export_file, clean=args.clean, top_areas=args.top_areas)

    if args.json:
        args.json.write_text(json.dumps(results, ensure_ascii=False, indent=2, default=str), encoding="utf-8")
        print(f"\nResults saved to: {args.json}")


if __name__ == "__main__":
    main()
