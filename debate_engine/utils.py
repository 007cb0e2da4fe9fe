"""Utility functions for the debate engine."""

ELLIPSIS = "..."


def count_words(text: str) -> int:
    """Count whitespace-delimited words.

    Args:
        text: Text to count

    Returns:
        Number of non-empty tokens after trimming
    """
    return len(text.split())


def enforce_word_limit(text: str, max_words: int) -> str:
    """Truncate text to at most ``max_words`` words.

    Text within the limit is returned unchanged. Longer text keeps its first
    ``max_words`` words joined by single spaces, followed by an ellipsis that
    is attached to the last word so it never counts as an extra word.

    Args:
        text: Generated content
        max_words: Word budget for the turn

    Returns:
        The original or truncated text
    """
    words = text.split()
    if len(words) <= max_words:
        return text
    return " ".join(words[:max_words]) + ELLIPSIS
