"""
Utility functions for Ethereum block extraction.

This module provides:
- Web3 connection management with a single startup handshake
- RPC endpoint construction from a credential
- Logging setup for the CLI scripts
"""

import logging
from typing import Any

from web3 import Web3

from ...exceptions import LedgerConnectionError

# Configure module logger
logger = logging.getLogger(__name__)


def build_rpc_url(url_template: str, credential: str) -> str:
    """
    Build the RPC endpoint URL from a template and credential.

    Args:
        url_template: URL containing an {api_key} placeholder
        credential: API key for the RPC provider

    Returns:
        Formatted endpoint URL

    Example:
        >>> build_rpc_url("https://mainnet.infura.io/v3/{api_key}", "abc")
        'https://mainnet.infura.io/v3/abc'
    """
    return url_template.format(api_key=credential)


def redact_rpc_url(rpc_url: str, credential: str) -> str:
    """Hide the credential before an endpoint URL is logged."""
    if not credential:
        return rpc_url
    return rpc_url.replace(credential, "***")


class Web3ConnectionManager:
    """
    Manages the Web3 connection to an Ethereum node.

    The connection is verified once at construction. Requests are never
    retried: callers decide whether a failure is fatal or skippable.
    """

    def __init__(self, rpc_url: str, timeout: int = 30, display_url: str | None = None):
        """
        Initialize Web3 connection manager.

        Args:
            rpc_url: Ethereum RPC endpoint URL (e.g., Infura, Alchemy)
            timeout: Request timeout in seconds
            display_url: URL to show in logs and errors (e.g., with the key redacted)

        Raises:
            ValueError: If RPC URL is invalid
            LedgerConnectionError: If the connection cannot be established
        """
        if not rpc_url or rpc_url == "PLACEHOLDER_RPC_URL":
            raise ValueError(
                "Invalid RPC URL. Please configure a valid Ethereum RPC endpoint "
                "in configs/scanner_config.yaml or pass via --rpc-url"
            )

        self.rpc_url = rpc_url
        self.display_url = display_url or rpc_url
        self.timeout = timeout

        # Initialize Web3 provider with timeout
        self.w3 = Web3(Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": timeout}))

        # Verify connection
        try:
            connected = self.w3.is_connected()
        except Exception as e:
            raise LedgerConnectionError(
                f"Connection error for {self.display_url}: {e}"
            ) from e

        if not connected:
            raise LedgerConnectionError(
                f"Failed to connect to Ethereum node at {self.display_url}"
            )

        logger.info(f"Connected to Ethereum node at {self.display_url}")

    def get_head_block_number(self) -> int:
        """
        Fetch the current chain head block number.

        Raises:
            LedgerConnectionError: If the head block cannot be fetched
        """
        try:
            head = self.w3.eth.block_number
        except Exception as e:
            raise LedgerConnectionError(f"Block header error: {e}") from e

        logger.debug(f"Chain head is block {head}")
        return int(head)

    def get_block(self, block_number: int, full_transactions: bool = True) -> Any:
        """
        Fetch a block by number.

        Args:
            block_number: Block number
            full_transactions: Include full transaction objects instead of hashes

        Returns:
            Web3 block object (AttributeDict)

        Raises:
            Exception: Whatever the provider raises; no retry is attempted
        """
        logger.debug(f"Fetching block: {block_number}")
        return self.w3.eth.get_block(block_number, full_transactions=full_transactions)


def setup_logging(level: str = "INFO", log_format: str | None = None) -> None:
    """
    Configure logging for scanner scripts.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Custom log format string. Uses default if None.
    """
    if log_format is None:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format=log_format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    # Reduce noise from web3 and urllib3 loggers
    logging.getLogger("web3").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
