"""
Unit tests for candidate extraction from decoded text.
"""

import pytest

from eth_message_scanner.detection.candidates import CandidateExtractor


@pytest.fixture
def extractor() -> CandidateExtractor:
    """Extractor with the default minimum length of 4."""
    return CandidateExtractor()


class TestCandidateExtraction:
    """Test letter/digit/whitespace run extraction."""

    def test_whole_text_is_one_candidate(self, extractor):
        """Test that an unbroken run is reported once."""
        assert extractor.extract("hello world") == ["hello world"]

    def test_longest_match(self, extractor):
        """Test that a long run is not split into overlapping sub-runs."""
        assert extractor.extract("abcdefghij") == ["abcdefghij"]

    def test_punctuation_splits_candidates(self, extractor):
        """Test that punctuation ends a run and short runs are dropped."""
        assert extractor.extract("ab, hello!") == [" hello"]
        assert extractor.extract("hello world, good morning!") == [
            "hello world",
            " good morning",
        ]

    def test_short_text_yields_nothing(self, extractor):
        """Test that runs below the minimum length are ignored."""
        assert extractor.extract("abc") == []
        assert extractor.extract("") == []
        assert extractor.extract("!@#$%^&*()") == []

    def test_underscore_is_not_a_letter(self, extractor):
        """Test that underscores break runs."""
        assert extractor.extract("hello_world") == ["hello", "world"]
        assert extractor.extract("foo_bar_baz") == []

    def test_digits_are_included(self, extractor):
        """Test that digits are part of a run."""
        assert extractor.extract("block 19000000 rocks") == ["block 19000000 rocks"]

    def test_unicode_letters(self, extractor):
        """Test that non-ASCII letters are part of a run."""
        assert extractor.extract("héllo wörld") == ["héllo wörld"]

    def test_custom_min_length(self):
        """Test a shorter minimum candidate length."""
        extractor = CandidateExtractor(min_length=2)
        assert extractor.extract("ab, cd") == ["ab", " cd"]

    def test_invalid_min_length(self):
        """Test that a non-positive minimum length is rejected."""
        with pytest.raises(ValueError, match="min_length must be positive"):
            CandidateExtractor(min_length=0)


class TestCandidateSpans:
    """Test candidate offsets in the source text."""

    def test_spans_do_not_overlap(self, extractor):
        """Test that no position in the text is covered twice."""
        text = "gm frens, building in public! 12345 ok; vitalik pls respond"
        spans = extractor.spans(text)

        assert spans
        for (_, end), (next_start, _) in zip(spans, spans[1:]):
            assert end <= next_start

        covered = [pos for start, end in spans for pos in range(start, end)]
        assert len(covered) == len(set(covered))

    def test_spans_match_candidates(self, extractor):
        """Test that spans slice out exactly the extracted candidates."""
        text = "hello world, good morning! x"
        spans = extractor.spans(text)

        assert [text[start:end] for start, end in spans] == extractor.extract(text)
