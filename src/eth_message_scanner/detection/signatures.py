"""
Recognize well-known contract call selectors.

Payloads that start with the 4-byte selector of a common token or NFT
function are structured ABI calls, not free text, so they are skipped
before decoding.

Usage:
    from eth_message_scanner.detection.signatures import SignatureFilter

    signature_filter = SignatureFilter()
    signature_filter.is_contract_call(bytes.fromhex("a9059cbb" + "00" * 64))  # True
"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

logger = logging.getLogger(__name__)

SELECTOR_LENGTH = 4

# First 4 bytes of keccak256 of the function signature
DEFAULT_SIGNATURES: Mapping[str, str] = MappingProxyType(
    {
        "a9059cbb": "ERC20 transfer",
        "23b872dd": "ERC20 transferFrom",
        "095ea7b3": "ERC20 approve",
        "42842e0e": "ERC721 safeTransferFrom",
        "b88d4fde": "ERC721 safeTransferFrom with data",
        "a22cb465": "setApprovalForAll",
        "6352211e": "ownerOf (ERC721)",
        "70a08231": "balanceOf",
        "06fdde03": "name()",
        "95d89b41": "symbol()",
    }
)


def _normalize_selector(selector: str) -> str:
    """Lower-case a selector and strip an optional 0x prefix."""
    cleaned = selector.lower()
    if cleaned.startswith("0x"):
        cleaned = cleaned[2:]

    if len(cleaned) != SELECTOR_LENGTH * 2:
        raise ValueError(
            f"Invalid selector {selector!r}: expected {SELECTOR_LENGTH * 2} hex chars"
        )
    try:
        bytes.fromhex(cleaned)
    except ValueError as e:
        raise ValueError(f"Invalid selector {selector!r}: not hex") from e

    return cleaned


class SignatureFilter:
    """
    Membership test for known function selectors.

    The table is copied and frozen at construction, so a filter never
    changes after it is built. Names are kept for labeling only and play
    no part in the filter decision.
    """

    def __init__(self, table: Mapping[str, str] | None = None):
        if table is None:
            table = DEFAULT_SIGNATURES

        self._table: Mapping[str, str] = MappingProxyType(
            {_normalize_selector(sig): name for sig, name in table.items()}
        )

    @property
    def table(self) -> Mapping[str, str]:
        return self._table

    def __len__(self) -> int:
        return len(self._table)

    def __contains__(self, selector: object) -> bool:
        return isinstance(selector, str) and selector.lower() in self._table

    def is_contract_call(self, payload: bytes) -> bool:
        """
        Check whether a payload starts with a known function selector.

        Args:
            payload: Raw transaction data

        Returns:
            True if the first 4 bytes match a table entry. Payloads shorter
            than 4 bytes never match.
        """
        if len(payload) < SELECTOR_LENGTH:
            return False
        return payload[:SELECTOR_LENGTH].hex() in self._table

    def label(self, payload: bytes) -> str | None:
        """Return the function name for a matching payload, or None."""
        if len(payload) < SELECTOR_LENGTH:
            return None
        return self._table.get(payload[:SELECTOR_LENGTH].hex())

    def extended(self, extra: Mapping[str, str]) -> "SignatureFilter":
        """Return a new filter with additional selectors; self is unchanged."""
        merged = dict(self._table)
        merged.update({_normalize_selector(sig): name for sig, name in extra.items()})
        return SignatureFilter(merged)


def load_signature_table(path: str | Path) -> dict[str, str]:
    """
    Load additional function selectors from a JSON file.

    The file must contain a single object mapping hex selectors
    (with or without 0x prefix) to human-readable names.

    Args:
        path: Path to the JSON file

    Returns:
        Mapping of normalized selector to name

    Raises:
        FileNotFoundError: If the file does not exist
        json.JSONDecodeError: If the file is not valid JSON
        ValueError: If the JSON is not an object or a selector is malformed

    Example:
        >>> extra = load_signature_table("configs/signatures.json")
        >>> signature_filter = SignatureFilter().extended(extra)
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Signature table not found: {path}")

    try:
        with open(path, "r") as f:
            raw = json.load(f)
    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in signature table {path}: {e}")
        raise

    if not isinstance(raw, dict):
        raise ValueError(
            f"Signature table {path} must be a JSON object, got {type(raw).__name__}"
        )

    table = {_normalize_selector(sig): str(name) for sig, name in raw.items()}
    logger.debug(f"Loaded {len(table)} function selectors from {path}")
    return table
