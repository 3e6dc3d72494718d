"""
Exception types raised by the scanner.

Startup failures (missing credential, connection problems) are fatal and are
only handled by the CLI scripts. Block fetch failures are recovered by the
scanner, which logs them and moves on to the next block.
"""


class ScannerError(Exception):
    """Base class for scanner errors."""


class MissingCredentialError(ScannerError):
    """Raised when the RPC credential is not configured."""

    def __init__(self, env_var: str):
        self.env_var = env_var
        super().__init__(f"{env_var} not found in environment or .env file")


class LedgerConnectionError(ScannerError, ValueError):
    """Raised when the Ethereum node cannot be reached or queried at startup."""


class BlockFetchError(ScannerError):
    """Raised when a single block cannot be fetched from the node."""

    def __init__(self, block_number: int, reason: object):
        self.block_number = block_number
        self.reason = reason
        super().__init__(f"Block {block_number} fetch error: {reason}")
