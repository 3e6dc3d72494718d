"""
Decode raw payload bytes into printable text.

Two interchangeable strategies are provided:
- codepoint: UTF-8 decoding that skips invalid bytes and drops every
  non-printable codepoint (Unicode-aware)
- ascii: keeps bytes in the printable ASCII range and turns everything
  else into a space

Both collapse whitespace runs to a single space and trim the result.
Decoding never fails; pure binary noise decodes to an empty or sparse string.

Usage:
    from eth_message_scanner.detection.decoding import get_decoder

    decode = get_decoder("ascii")
    decode(b"\\x00\\x00hello\\x01world")  # "hello world"
"""

from typing import Callable

Decoder = Callable[[bytes], str]

ASCII_PRINTABLE_MIN = 32
ASCII_PRINTABLE_MAX = 126
REPLACEMENT_CHARACTER = "\ufffd"


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace to single spaces and trim both ends."""
    return " ".join(text.split())


def decode_codepoints(data: bytes) -> str:
    """
    Decode bytes as UTF-8, keeping only printable codepoints.

    Invalid bytes are skipped and decoding resumes at the next byte.
    The replacement character is treated as an invalid sequence and dropped.

    Args:
        data: Raw payload bytes

    Returns:
        Whitespace-normalized printable text (possibly empty)
    """
    text = bytes(data).decode("utf-8", errors="ignore")
    kept = "".join(
        char for char in text if char.isprintable() and char != REPLACEMENT_CHARACTER
    )
    return collapse_whitespace(kept)


def decode_ascii(data: bytes) -> str:
    """
    Keep printable ASCII bytes, replacing every other byte with a space.

    Args:
        data: Raw payload bytes

    Returns:
        Whitespace-normalized ASCII text (possibly empty)
    """
    kept = "".join(
        chr(byte) if ASCII_PRINTABLE_MIN <= byte <= ASCII_PRINTABLE_MAX else " "
        for byte in data
    )
    return collapse_whitespace(kept)


DECODERS: dict[str, Decoder] = {
    "codepoint": decode_codepoints,
    "ascii": decode_ascii,
}


def get_decoder(strategy: str) -> Decoder:
    """
    Look up a decoding strategy by name.

    Raises:
        ValueError: If the strategy is unknown
    """
    try:
        return DECODERS[strategy]
    except KeyError:
        raise ValueError(
            f"Unknown decoding strategy: {strategy!r} "
            f"(expected one of {', '.join(DECODERS)})"
        ) from None
