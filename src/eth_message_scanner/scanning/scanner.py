"""
Sequential block scanner.

Walks a contiguous range of block numbers, runs every transaction of each
block through the message detector, and yields a BlockReport only for
blocks that produced at least one accepted message.

Blocks are processed one at a time: a block is fully fetched and analyzed
before the next one is requested. A fixed pacing delay follows every
block, whether it produced output, produced nothing, or failed to fetch.
Failed blocks are logged once and skipped; nothing is retried.

Usage:
    from eth_message_scanner.scanning.scanner import BlockScanner, ScanDirection

    scanner = BlockScanner(source, detector, pacing_delay=0.25)
    for report in scanner.scan_recent(depth=100):
        print(report.block_number)
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Iterable, Iterator

from ..detection.models import BlockReport
from ..detection.pipeline import MessageDetector
from ..exceptions import BlockFetchError
from ..extraction.core.fetcher import LedgerSource

logger = logging.getLogger(__name__)


class ScanDirection(str, Enum):
    """Order in which the block range is walked."""

    DESCENDING = "descending"
    ASCENDING = "ascending"


def block_range(
    head: int, depth: int, direction: ScanDirection = ScanDirection.DESCENDING
) -> range:
    """
    Inclusive range of block numbers from ``head - depth`` to ``head``.

    Args:
        head: Chain head block number
        depth: Number of blocks below the head to include
        direction: Walk from the head down (default) or from the bottom up

    Returns:
        range covering depth + 1 blocks (fewer if the range would go below 0)
    """
    if depth < 0:
        raise ValueError(f"depth must be non-negative, got {depth}")

    start = max(head - depth, 0)
    if ScanDirection(direction) is ScanDirection.DESCENDING:
        return range(head, start - 1, -1)
    return range(start, head + 1)


@dataclass
class ScanStats:
    """Counters for a completed or running scan."""

    blocks_scanned: int = 0
    blocks_failed: int = 0
    transactions_analyzed: int = 0
    reports_emitted: int = 0
    messages_found: int = 0


class BlockScanner:
    """Drive the detection pipeline over a range of blocks."""

    def __init__(
        self,
        source: LedgerSource,
        detector: MessageDetector,
        pacing_delay: float = 0.25,
        sleep: Callable[[float], None] = time.sleep,
    ):
        if pacing_delay < 0:
            raise ValueError(f"pacing_delay must be non-negative, got {pacing_delay}")

        self.source = source
        self.detector = detector
        self.pacing_delay = pacing_delay
        self._sleep = sleep
        self.stats = ScanStats()

    def scan_block(self, block_number: int) -> BlockReport | None:
        """
        Fetch one block and analyze all of its transactions.

        Returns:
            BlockReport if any transaction yielded messages, otherwise None

        Raises:
            BlockFetchError: If the block cannot be fetched
        """
        transactions = self.source.block_transactions(block_number)

        findings = []
        for transaction in transactions:
            finding = self.detector.analyze_transaction(transaction)
            if finding is not None:
                findings.append(finding)

        self.stats.transactions_analyzed += len(transactions)

        if not findings:
            return None
        return BlockReport(block_number=block_number, findings=tuple(findings))

    def scan(self, block_numbers: Iterable[int]) -> Iterator[BlockReport]:
        """
        Scan blocks in the given order, yielding non-empty reports.

        A block that fails to fetch is logged and skipped. The pacing delay
        is applied after every block.
        """
        self.stats = ScanStats()

        for block_number in block_numbers:
            try:
                report = self.scan_block(block_number)
            except BlockFetchError as e:
                logger.error(str(e))
                self.stats.blocks_failed += 1
                report = None
            else:
                self.stats.blocks_scanned += 1

            if report is not None:
                self.stats.reports_emitted += 1
                self.stats.messages_found += report.message_count
                yield report

            self._sleep(self.pacing_delay)

        logger.info(
            f"Scan complete: {self.stats.blocks_scanned} blocks scanned "
            f"({self.stats.blocks_failed} failed), "
            f"{self.stats.transactions_analyzed} transactions analyzed, "
            f"{self.stats.messages_found} messages in "
            f"{self.stats.reports_emitted} blocks"
        )

    def scan_recent(
        self, depth: int = 100, direction: ScanDirection = ScanDirection.DESCENDING
    ) -> Iterator[BlockReport]:
        """
        Scan the ``depth`` blocks below the current chain head, plus the head.

        The head is read once, before the first block is fetched. A failure
        to read it propagates to the caller.
        """
        head = self.source.current_head_block_number()
        blocks = block_range(head, depth, direction)

        logger.info(
            f"Scanning blocks {blocks[0]} to {blocks[-1]} "
            f"({len(blocks)} blocks, {ScanDirection(direction).value})"
        )
        return self.scan(blocks)
