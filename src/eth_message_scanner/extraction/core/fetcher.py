"""
Block fetching utilities.

This module defines the ledger source interface consumed by the scanner
and its Web3-backed implementation. Fetching is strictly sequential and
never retried; a block that cannot be fetched surfaces as BlockFetchError
so the scanner can log it and move on.
"""

import logging
from typing import Protocol

from ...detection.models import Transaction
from ...exceptions import BlockFetchError
from .normalization import normalize_transaction
from .utils import Web3ConnectionManager

logger = logging.getLogger(__name__)


class LedgerSource(Protocol):
    """Read-only, possibly failing source of blocks."""

    def current_head_block_number(self) -> int:
        """Return the current chain head block number."""
        ...

    def block_transactions(self, block_number: int) -> list[Transaction]:
        """Return the transactions of a block, raising BlockFetchError on failure."""
        ...


class Web3LedgerSource:
    """LedgerSource backed by a Web3 connection."""

    def __init__(self, manager: Web3ConnectionManager):
        self.manager = manager

    def current_head_block_number(self) -> int:
        """
        Fetch the chain head.

        Raises:
            LedgerConnectionError: If the head cannot be fetched
        """
        return self.manager.get_head_block_number()

    def block_transactions(self, block_number: int) -> list[Transaction]:
        """
        Fetch a block with full transactions and normalize each one.

        Args:
            block_number: Block number to fetch

        Returns:
            Transactions in block order

        Raises:
            BlockFetchError: If the block cannot be fetched or parsed
        """
        try:
            block = self.manager.get_block(block_number, full_transactions=True)
            transactions = [
                normalize_transaction(tx) for tx in block["transactions"]
            ]
        except Exception as e:
            raise BlockFetchError(block_number, e) from e

        logger.debug(
            f"Fetched block {block_number} with {len(transactions)} transactions"
        )
        return transactions
