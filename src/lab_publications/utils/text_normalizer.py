"""
LaTeX text decoding for BibTeX field values.

dblp escapes non-ASCII letters and a handful of special characters with
LaTeX markup, e.g. ``Erd{\\H{o}}s``, ``Jos{\\'{e}}`` or ``R\\&D``. This
module turns such values into plain, NFC-composed Unicode text suitable for
display, using pylatexenc for the LaTeX itself.

The converter is run a bounded number of times, stopping as soon as no
markup is left or a pass changes nothing. Malformed markup is passed
through best effort, never rejected.
"""
import logging
import re
import unicodedata
from typing import Optional

from pylatexenc.latex2text import LatexNodes2Text

logger = logging.getLogger(__name__)

MAX_PASSES = 10

# Stand-in for a literal tilde; a bare ~ is a LaTeX tie
TILDE_PLACEHOLDER = "\ue000"

CEDILLAS = {"c": "\u00e7", "C": "\u00c7"}

_latex_converter = LatexNodes2Text()

# \c on a letter other than c/C drops the escape and keeps the letter
_CEDILLA_RE = re.compile(r"\\c(?:\s*\{\s*([A-Za-z])\s*\}|\s+([A-Za-z]))")
# dotless i/j become plain letters so a surrounding accent composes
_DOTLESS_RE = re.compile(r"\\([ij])(?![A-Za-z])(?:\{\})?")
_LITERAL_TILDE_RE = re.compile(r"\\~\{\}")
# a bare % in a field value is text, not a LaTeX comment
_BARE_PERCENT_RE = re.compile(r"(?<!\\)%")
_MARKUP_RE = re.compile(r"[\\{}]")
_WHITESPACE_RE = re.compile(r"\s+")


def _cedilla(match: "re.Match[str]") -> str:
    letter = match.group(1) or match.group(2)
    return CEDILLAS.get(letter, letter)


def _decode_pass(text: str) -> str:
    text = _CEDILLA_RE.sub(_cedilla, text)
    text = _DOTLESS_RE.sub(r"\1", text)
    text = _LITERAL_TILDE_RE.sub(TILDE_PLACEHOLDER, text)
    text = _BARE_PERCENT_RE.sub(r"\\%", text)
    try:
        text = _latex_converter.latex_to_text(text)
    except Exception as e:
        logger.debug(f"pylatexenc could not convert {text!r}: {str(e)}")
    return _WHITESPACE_RE.sub(" ", text).strip()


def decode_latex(raw: Optional[str], max_passes: int = MAX_PASSES) -> str:
    """
    Decode LaTeX markup in a BibTeX value into plain Unicode text.

    Examples:
        "Erd\\H{o}s"          -> "Erdős"
        "{NASA}"              -> "NASA"
        "Fran\\c{c}ois"       -> "François"
        "Research \\& Design" -> "Research & Design"

    Args:
        raw: Field value as it appears between the BibTeX delimiters
        max_passes: Upper bound on conversion passes

    Returns:
        Decoded text, whitespace-collapsed and trimmed
    """
    if not raw:
        return ""

    text = _WHITESPACE_RE.sub(" ", raw).strip()
    for _ in range(max_passes):
        if not _MARKUP_RE.search(text):
            break
        decoded = _decode_pass(text)
        if decoded == text:
            break
        text = decoded

    text = text.replace(TILDE_PLACEHOLDER, "~")
    return unicodedata.normalize("NFC", text)
