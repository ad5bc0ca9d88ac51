def count_words(content: str) -> int:
    """Whitespace-separated token count, as shown in the editor."""
    return len((content or "").split())
