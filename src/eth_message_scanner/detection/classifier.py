"""
Heuristic classifier for candidate messages.

Decides whether a candidate looks like natural-language text rather than
incidental noise, using only word counts, word lengths, the share of
letters, and the presence of vowels. There are no dictionaries and no
language models; the same input always yields the same verdict.

Two strictness levels are supported:
- strict (default): letter-ratio check and a vowel in every valid word
- lenient: a valid word only needs to be long enough and contain a letter

Usage:
    from eth_message_scanner.detection.classifier import (
        ClassifierConfig,
        MessageClassifier,
    )

    classifier = MessageClassifier(ClassifierConfig())
    classifier.is_valid_message("hello world")  # True
    classifier.is_valid_message("xk qz 99")  # False
"""

import logging
from dataclasses import dataclass

logger = logging.getLogger(__name__)

VOWELS = frozenset("aeiou")


@dataclass(frozen=True)
class ClassifierConfig:
    """Thresholds for the message heuristics."""

    min_words: int = 2  # Minimum (valid) words in a message
    min_word_length: int = 3  # Minimum characters in a valid word
    letter_ratio: float = 0.6  # Minimum share of letters among non-space chars
    with_letter_ratio_check: bool = True
    require_vowel: bool = True

    def __post_init__(self):
        """Validate configuration values."""
        if self.min_words <= 0:
            raise ValueError(f"min_words must be positive, got {self.min_words}")
        if self.min_word_length <= 0:
            raise ValueError(
                f"min_word_length must be positive, got {self.min_word_length}"
            )
        if not 0 <= self.letter_ratio <= 1:
            raise ValueError(f"letter_ratio must be in [0, 1], got {self.letter_ratio}")

    @classmethod
    def lenient(cls, **overrides) -> "ClassifierConfig":
        """Lighter variant without the letter-ratio and vowel checks."""
        overrides.setdefault("with_letter_ratio_check", False)
        overrides.setdefault("require_vowel", False)
        return cls(**overrides)


def letter_ratio(text: str) -> float:
    """
    Share of letters among the non-whitespace characters of ``text``.

    Returns 0.0 when there are no non-whitespace characters.
    """
    letters = 0
    total = 0
    for char in text:
        if char.isspace():
            continue
        total += 1
        if char.isalpha():
            letters += 1

    if total == 0:
        return 0.0
    return letters / total


def has_letter(word: str) -> bool:
    return any(char.isalpha() for char in word)


def has_vowel(word: str) -> bool:
    return any(char.lower() in VOWELS for char in word)


class MessageClassifier:
    """Accept or reject candidate messages."""

    def __init__(self, config: ClassifierConfig | None = None):
        self.config = config or ClassifierConfig()

    def is_valid_word(self, word: str) -> bool:
        """Check one whitespace-delimited word against the word heuristics."""
        if len(word) < self.config.min_word_length or not has_letter(word):
            return False
        if self.config.require_vowel and not has_vowel(word):
            return False
        return True

    def is_valid_message(self, candidate: str) -> bool:
        """
        Apply the ordered heuristics to one candidate.

        1. Reject if fewer than ``min_words`` words.
        2. If enabled, reject if the letter ratio is below ``letter_ratio``.
        3. Accept iff at least ``min_words`` words are valid.

        Args:
            candidate: Candidate message text

        Returns:
            True if the candidate is a plausible message
        """
        words = candidate.split()
        if len(words) < self.config.min_words:
            return False

        if self.config.with_letter_ratio_check:
            ratio = letter_ratio(candidate)
            if ratio < self.config.letter_ratio:
                logger.debug(f"Rejected {candidate!r}: letter ratio {ratio:.2f}")
                return False

        valid_words = sum(1 for word in words if self.is_valid_word(word))
        return valid_words >= self.config.min_words
