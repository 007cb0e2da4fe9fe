"""Tests for word counting and word-limit truncation."""

from debate_engine.utils import count_words, enforce_word_limit


def test_count_words_handles_irregular_whitespace() -> None:
    assert count_words("") == 0
    assert count_words("   ") == 0
    assert count_words("  a  b   c ") == 3
    assert count_words("one\ntwo\tthree") == 3


def test_text_within_limit_is_returned_unchanged() -> None:
    text = "  Exactly   four words here "
    assert enforce_word_limit(text, 4) == text


def test_text_over_limit_is_truncated_with_ellipsis() -> None:
    result = enforce_word_limit("one two  three\nfour five", 3)

    assert result == "one two three..."
    assert count_words(result) == 3


def test_truncation_is_idempotent() -> None:
    text = " ".join(f"word{i}" for i in range(50))
    once = enforce_word_limit(text, 10)

    assert enforce_word_limit(once, 10) == once
