"""
Name normalization utilities.
"""
import re
import unicodedata

_WHITESPACE_RE = re.compile(r"\s+")


def normalize_for_comparison(text: str) -> str:
    """
    Normalize text for comparison by removing accents/diacritics and converting to lowercase.

    Examples:
        "José" -> "jose"
        "Müller" -> "muller"
        "García" -> "garcia"
    """
    if not text:
        return ""
    # Normalize to NFD (decomposed form) to separate base characters from diacritics
    nfd = unicodedata.normalize('NFD', text.lower())
    return ''.join(char for char in nfd if not unicodedata.combining(char))


def slugify(name: str) -> str:
    """
    Turn a display name into a URL-safe slug for anchors and links.

    Examples:
        "José Álvarez" -> "jose-alvarez"
        "Ada  Lovelace" -> "ada-lovelace"
    """
    return _WHITESPACE_RE.sub("-", normalize_for_comparison(name))
