"""Block range scanning and report rendering."""

from .report import format_block_report, quote_message
from .scanner import BlockScanner, ScanDirection, ScanStats, block_range

__all__ = [
    "BlockScanner",
    "ScanDirection",
    "ScanStats",
    "block_range",
    "format_block_report",
    "quote_message",
]
