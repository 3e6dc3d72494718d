"""
Immutable records passed through the detection pipeline.

None of these outlive the processing of the block they belong to.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Transaction:
    """A transaction reduced to the fields the scanner inspects."""

    tx_hash: str
    to: str | None
    payload: bytes


@dataclass(frozen=True)
class TransactionFinding:
    """Accepted messages found in a single transaction's payload."""

    tx_hash: str
    to: str | None
    messages: tuple[str, ...]


@dataclass(frozen=True)
class BlockReport:
    """All findings for one block. Only built when findings is non-empty."""

    block_number: int
    findings: tuple[TransactionFinding, ...]

    @property
    def message_count(self) -> int:
        return sum(len(finding.messages) for finding in self.findings)
