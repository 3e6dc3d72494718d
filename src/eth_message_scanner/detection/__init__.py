"""
Message detection for transaction payloads.

This module turns raw transaction data into accepted messages:
- Signature filtering of well-known contract calls
- Best-effort byte decoding into printable text
- Candidate extraction of letter/digit/space runs
- Heuristic classification of candidates as plausible messages

Usage:
    from eth_message_scanner.detection import MessageDetector

    detector = MessageDetector()
    messages = detector.analyze_payload(b"hello world this is a test")
"""

from .candidates import CandidateExtractor
from .classifier import ClassifierConfig, MessageClassifier, letter_ratio
from .decoding import decode_ascii, decode_codepoints, get_decoder
from .models import BlockReport, Transaction, TransactionFinding
from .pipeline import MessageDetector, PayloadAnalysis
from .signatures import DEFAULT_SIGNATURES, SignatureFilter, load_signature_table

__all__ = [
    # Data model
    "Transaction",
    "TransactionFinding",
    "BlockReport",
    # Pipeline stages
    "SignatureFilter",
    "DEFAULT_SIGNATURES",
    "load_signature_table",
    "decode_codepoints",
    "decode_ascii",
    "get_decoder",
    "CandidateExtractor",
    "ClassifierConfig",
    "MessageClassifier",
    "letter_ratio",
    # Orchestration
    "MessageDetector",
    "PayloadAnalysis",
]
