"""
Message detection pipeline.

Runs one payload through signature filtering, decoding, candidate
extraction, and classification. The detector is stateless across
transactions: each call works only on the bytes it is given.

Usage:
    from eth_message_scanner.detection.pipeline import MessageDetector

    detector = MessageDetector.from_config(config.detection)
    finding = detector.analyze_transaction(transaction)
"""

import logging
from dataclasses import dataclass, field

from ..config import DetectionConfig
from .candidates import CandidateExtractor
from .classifier import ClassifierConfig, MessageClassifier
from .decoding import Decoder, decode_codepoints, get_decoder
from .models import Transaction, TransactionFinding
from .signatures import SignatureFilter, load_signature_table

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PayloadAnalysis:
    """Every intermediate stage of the pipeline for one payload."""

    payload_length: int
    signature: str | None = None
    decoded: str = ""
    candidates: tuple[str, ...] = field(default_factory=tuple)
    accepted: tuple[str, ...] = field(default_factory=tuple)

    @property
    def skipped(self) -> bool:
        """True if the payload was empty or a known contract call."""
        return self.payload_length == 0 or self.signature is not None


class MessageDetector:
    """
    Find plausible human-readable messages in transaction payloads.

    All collaborators are passed in at construction so each stage can be
    swapped or configured independently.
    """

    def __init__(
        self,
        signature_filter: SignatureFilter | None = None,
        decoder: Decoder = decode_codepoints,
        extractor: CandidateExtractor | None = None,
        classifier: MessageClassifier | None = None,
    ):
        self.signature_filter = signature_filter or SignatureFilter()
        self.decoder = decoder
        self.extractor = extractor or CandidateExtractor()
        self.classifier = classifier or MessageClassifier()

    @classmethod
    def from_config(cls, config: DetectionConfig) -> "MessageDetector":
        """
        Build a detector from the detection section of the scanner config.

        Raises:
            ValueError: If a threshold or strategy is invalid
            FileNotFoundError: If signatures_file is set but missing
        """
        signature_filter = SignatureFilter()
        if config.signatures_file:
            extra = load_signature_table(config.signatures_file)
            signature_filter = signature_filter.extended(extra)
            logger.info(
                f"Loaded {len(extra)} extra function selectors "
                f"({len(signature_filter)} total)"
            )

        classifier_config = ClassifierConfig(
            min_words=config.min_words,
            min_word_length=config.min_word_length,
            letter_ratio=config.letter_ratio,
            with_letter_ratio_check=config.with_letter_ratio_check,
            require_vowel=config.require_vowel,
        )

        return cls(
            signature_filter=signature_filter,
            decoder=get_decoder(config.strategy),
            extractor=CandidateExtractor(config.min_message_length),
            classifier=MessageClassifier(classifier_config),
        )

    def analyze_payload(self, payload: bytes) -> list[str]:
        """
        Return the accepted messages in a payload, in order of appearance.

        Empty payloads and known contract calls yield no messages and are
        never decoded.
        """
        if not payload or self.signature_filter.is_contract_call(payload):
            return []

        decoded = self.decoder(payload)
        return [
            candidate
            for candidate in self.extractor.extract(decoded)
            if self.classifier.is_valid_message(candidate)
        ]

    def analyze_transaction(self, transaction: Transaction) -> TransactionFinding | None:
        """
        Run the pipeline on one transaction.

        Returns:
            A finding with at least one message, or None if nothing was accepted
        """
        messages = self.analyze_payload(transaction.payload)
        if not messages:
            return None

        logger.debug(
            f"Transaction {transaction.tx_hash[:10]}... yielded {len(messages)} message(s)"
        )
        return TransactionFinding(
            tx_hash=transaction.tx_hash,
            to=transaction.to,
            messages=tuple(messages),
        )

    def inspect_payload(self, payload: bytes) -> PayloadAnalysis:
        """
        Run the pipeline and keep every intermediate stage.

        Used for forensic inspection of a single payload; the accepted
        messages are identical to analyze_payload().
        """
        if not payload:
            return PayloadAnalysis(payload_length=0)

        signature = self.signature_filter.label(payload)
        if signature is not None:
            return PayloadAnalysis(payload_length=len(payload), signature=signature)

        decoded = self.decoder(payload)
        candidates = tuple(self.extractor.extract(decoded))
        accepted = tuple(c for c in candidates if self.classifier.is_valid_message(c))

        return PayloadAnalysis(
            payload_length=len(payload),
            decoded=decoded,
            candidates=candidates,
            accepted=accepted,
        )
