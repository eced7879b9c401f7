"""
Extractor Factory
=================
Routes a detected layout to the extraction strategies that should run.

    'column' → [ColumnExtractor]
    'inline' → [InlineExtractor]
    'hybrid' → [ColumnExtractor, InlineExtractor]   (richer result wins)

Usage
-----
    factory    = ExtractorFactory()
    extractors = factory.get_extractors(ReceiptLayout.HYBRID)
"""

from typing import Dict, Iterable, List, Optional, Tuple

from loguru import logger

from extractor.base_extractor import BaseExtractor
from extractor.column_extractor import ColumnExtractor
from extractor.inline_extractor import InlineExtractor
from receipt_models import ReceiptLayout


class ExtractorFactory:
    """
    Returns the extractors for a given receipt layout.

    Extractor instances hold only configuration, so one instance per
    strategy is created up front and shared across calls.
    """

    # ── Mapping: layout → strategy names, in evaluation order ─────────────────
    _STRATEGIES: Dict[ReceiptLayout, Tuple[str, ...]] = {
        ReceiptLayout.COLUMN: ("column",),
        ReceiptLayout.INLINE: ("inline",),
        ReceiptLayout.HYBRID: ("column", "inline"),
    }

    def __init__(self, column_keywords: Optional[Iterable[str]] = None):
        self._extractors: Dict[str, BaseExtractor] = {
            "column": ColumnExtractor(column_keywords),
            "inline": InlineExtractor(),
        }
        logger.debug(
            f"[ExtractorFactory] Initialised "
            f"{', '.join(type(e).__name__ for e in self._extractors.values())}"
        )

    def get_extractors(self, layout: ReceiptLayout) -> List[BaseExtractor]:
        """
        Extractors to run for this layout, in tie-break order.

        Parameters
        ----------
        layout : ReceiptLayout

        Returns
        -------
        List of BaseExtractor subclass instances
        """
        return [self._extractors[name] for name in self._STRATEGIES[layout]]

    @property
    def supported_layouts(self) -> list:
        """List of all supported layouts."""
        return list(self._STRATEGIES.keys())
