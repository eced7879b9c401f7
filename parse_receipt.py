"""
Parse receipt OCR text from a file or stdin and print the result

Examples:
  python parse_receipt.py receipt.txt
  cat receipt.txt | python parse_receipt.py --json
  python parse_receipt.py receipt.txt --currency USD -v
"""

import argparse
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from currencies import format_money, get_currency
from receipt_parser import ReceiptParser
from utils import setup_logging


def print_summary(receipt, currency):
    print("=" * 50)
    print(receipt.restaurant_name)
    print("=" * 50)
    for item in receipt.items:
        name = f"{item.name} x{item.quantity}" if item.quantity > 1 else item.name
        print(f"{name:<36} {format_money(item.line_total, currency):>12}")
    print("-" * 50)
    print(f"{'Subtotal':<36} {format_money(receipt.subtotal, currency):>12}")
    print(f"{'Tax':<36} {format_money(receipt.tax, currency):>12}")
    print(f"{'Total':<36} {format_money(receipt.total, currency):>12}")
    print("-" * 50)
    print(f"type={receipt.receipt_type.value} layout={receipt.layout.value}")
    if receipt.is_placeholder:
        print("No items recognised - placeholder data shown")


def main():
    parser = argparse.ArgumentParser(
        description="Parse receipt OCR text into items, subtotal, tax and total",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("file", nargs="?",
                        help="Text file with OCR output (default: read stdin)")
    parser.add_argument("--json", action="store_true",
                        help="Print the parsed receipt as JSON")
    parser.add_argument("--currency",
                        help="Currency code for the summary (default: from config)")
    parser.add_argument("--config",
                        help="Path to a YAML config file")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Show per-line parsing decisions")
    args = parser.parse_args()

    receipt_parser = ReceiptParser(config_path=args.config)
    log_config = receipt_parser.config.get("logging", {})
    setup_logging(
        log_file=log_config.get("log_file"),
        level="DEBUG" if args.verbose else log_config.get("level", "INFO"),
        stream=sys.stderr,
    )

    if args.file:
        text = Path(args.file).read_text(encoding="utf-8")
    else:
        text = sys.stdin.read()

    receipt = receipt_parser.parse(text)

    if args.json:
        print(receipt.model_dump_json(indent=2))
        return

    code = args.currency or receipt_parser.config.get("split", {}).get("default_currency", "ZAR")
    try:
        currency = get_currency(code)
    except KeyError as e:
        parser.error(e.args[0])
    print_summary(receipt, currency)


if __name__ == "__main__":
    main()
