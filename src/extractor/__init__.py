"""
Extractor package — strategy-based line-item extractors.

Each extractor handles the item extraction logic for one receipt layout.
Merchant name and financial totals do not depend on layout and live in
metadata_extractor instead.

Usage (via factory)
-------------------
from extractor import ExtractorFactory
factory = ExtractorFactory()
for extractor in factory.get_extractors(layout):
    items = extractor.extract(lines, receipt_type)
"""

from extractor.factory import ExtractorFactory

__all__ = ["ExtractorFactory"]
