"""
Data normalization utilities for Ethereum transaction processing.

This module converts hex fields coming from Web3.py (HexBytes), JSON
fixtures (hex strings), or raw bytes into a single representation, and
reduces full transaction objects to the immutable records the detection
pipeline consumes.

Usage:
    from eth_message_scanner.extraction.core.normalization import (
        normalize_hex_field,
        normalize_transaction,
    )

    payload = normalize_hex_field(tx["input"])
    transaction = normalize_transaction(tx)
"""

import logging
from typing import Any, Mapping

from hexbytes import HexBytes
from web3 import Web3

from ...detection.models import Transaction

logger = logging.getLogger(__name__)


def normalize_hex_field(hex_string: str | HexBytes | bytes | None) -> bytes:
    """
    Normalize a hex field to bytes, handling various input formats.

    It handles:
    - Strings with 0x prefix: "0x1234..."
    - Strings without 0x prefix: "1234..."
    - HexBytes objects (from Web3.py)
    - Raw bytes objects
    - Empty values: "0x", "", None

    Args:
        hex_string: Hex data in any supported format

    Returns:
        Raw bytes representation of the hex data

    Raises:
        ValueError: If the input cannot be parsed as hex data

    Examples:
        >>> normalize_hex_field("0x1234")
        b'\\x12\\x34'
        >>> normalize_hex_field(HexBytes("0x1234"))
        b'\\x12\\x34'
    """
    if hex_string is None:
        return b""

    # HexBytes subclasses bytes; always hand back plain bytes
    if isinstance(hex_string, (bytes, bytearray)):
        return bytes(hex_string)

    if isinstance(hex_string, str):
        hex_clean = hex_string[2:] if hex_string.startswith("0x") else hex_string

        if not hex_clean:
            return b""

        try:
            return bytes.fromhex(hex_clean)
        except ValueError as e:
            raise ValueError(f"Invalid hex string: {hex_string}") from e

    raise ValueError(f"Unsupported hex field type: {type(hex_string)}")


def normalize_hex_string(
    hex_data: str | HexBytes | bytes | None, with_prefix: bool = True
) -> str:
    """
    Normalize hex data to a consistent string format.

    Args:
        hex_data: Hex data in any supported format
        with_prefix: If True, include '0x' prefix in output

    Returns:
        Hex string in consistent format

    Examples:
        >>> normalize_hex_string("1234", with_prefix=True)
        '0x1234'
        >>> normalize_hex_string(HexBytes("0x1234"), with_prefix=False)
        '1234'
    """
    hex_str = normalize_hex_field(hex_data).hex()
    return f"0x{hex_str}" if with_prefix else hex_str


def normalize_address(address: str | None) -> str | None:
    """Checksum an address, keeping None (contract creation) as None."""
    if not address:
        return None
    return Web3.to_checksum_address(address)


def normalize_transaction(raw: Mapping[str, Any]) -> Transaction:
    """
    Reduce a transaction object to the fields the scanner inspects.

    Accepts Web3.py AttributeDicts as well as plain dicts loaded from JSON.
    The payload is read from "input" (Web3.py) or "data" (raw JSON-RPC).

    Args:
        raw: Transaction data

    Returns:
        Immutable Transaction record

    Raises:
        ValueError: If the hash is missing or a hex field is malformed
    """
    tx_hash = raw.get("hash")
    if not tx_hash:
        raise ValueError("Transaction has no 'hash' field")

    payload_field = raw.get("input")
    if payload_field is None:
        payload_field = raw.get("data")

    return Transaction(
        tx_hash=normalize_hex_string(tx_hash),
        to=normalize_address(raw.get("to")),
        payload=normalize_hex_field(payload_field),
    )
