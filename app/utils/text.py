import unicodedata


def fold(value: str) -> str:
    """Accent- and case-insensitive form of ``value`` used for searching."""
    decomposed = unicodedata.normalize("NFD", value or "")
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return stripped.casefold()


def folded_contains(haystack: str, needle: str) -> bool:
    return fold(needle) in fold(haystack)
