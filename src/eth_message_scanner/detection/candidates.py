"""
Extract candidate messages from decoded text.

A candidate is a maximal run of letters, digits, and whitespace that is at
least ``min_length`` characters long. Matches are leftmost-longest and never
overlap, so a long run is reported once rather than as several sub-runs.
"""

import re


class CandidateExtractor:
    """Find letter/digit/whitespace runs in decoded text."""

    def __init__(self, min_length: int = 4):
        if min_length < 1:
            raise ValueError(f"min_length must be positive, got {min_length}")

        self.min_length = min_length
        # [^\W_] is a Unicode letter or digit; underscore is excluded
        self._pattern = re.compile(rf"(?:[^\W_]|\s){{{min_length},}}")

    def extract(self, text: str) -> list[str]:
        """Return all candidate substrings in order of appearance."""
        return [match.group() for match in self._pattern.finditer(text)]

    def spans(self, text: str) -> list[tuple[int, int]]:
        """Return the (start, end) offsets of each candidate in ``text``."""
        return [match.span() for match in self._pattern.finditer(text)]
