"""
Entry splitting and field extraction on top of bibtexparser.

dblp starts every entry at column 0. The document is cut into one chunk per
entry and each chunk is handed to bibtexparser on its own, so a broken record
is skipped alone and its source text can be kept for "copy citation".
Values come back with their outer delimiters removed and their inner text
untouched; decoding LaTeX markup is the caller's job.
"""
import logging
import re
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple

import bibtexparser
from bibtexparser.bparser import BibTexParser

logger = logging.getLogger(__name__)

_ENTRY_START_RE = re.compile(r"^@[ \t]*([A-Za-z]+)[ \t]*([{(])?", re.MULTILINE)
_AND_RE = re.compile(r"and", re.IGNORECASE)

SKIPPED_ENTRY_TYPES = {"comment", "preamble"}
CLOSERS = {"{": "}", "(": ")"}


@dataclass
class RawEntry:
    """An entry as written in the document, before any interpretation."""
    entry_type: str
    key: str
    fields: Dict[str, str] = field(default_factory=dict)
    source: str = ""

    def get(self, name: str, default: str = "") -> str:
        return self.fields.get(name.lower(), default)


def split_entries(text: str) -> Iterator[Tuple[str, str]]:
    """Yield ``(entry_type, chunk)`` for every ``@`` at the start of a line."""
    text = text.replace("\r\n", "\n")
    starts = list(_ENTRY_START_RE.finditer(text))
    for i, match in enumerate(starts):
        end = starts[i + 1].start() if i + 1 < len(starts) else len(text)
        yield match.group(1), text[match.start():end]


def _trim_source(chunk: str) -> str:
    """Drop anything after the entry's closing delimiter."""
    match = _ENTRY_START_RE.match(chunk)
    closer = CLOSERS.get(match.group(2) or "{", "}")
    end = chunk.rfind(closer)
    if end == -1:
        return chunk.rstrip()
    return chunk[:end + 1]


def _new_parser() -> BibTexParser:
    return BibTexParser(common_strings=True, ignore_nonstandard_types=False)


def _parse_chunk(entry_type: str, chunk: str, strings: List[str]) -> Optional[RawEntry]:
    # @string definitions seen so far are replayed ahead of the entry
    try:
        database = bibtexparser.loads("\n".join(strings + [chunk]), parser=_new_parser())
    except Exception as e:
        logger.debug(f"bibtexparser rejected @{entry_type} entry: {str(e)}")
        return None

    if len(database.entries) != 1:
        return None
    record = database.entries[0]
    key = (record.get("ID") or "").strip()
    if not key:
        return None

    fields = {
        name.lower(): value
        for name, value in record.items()
        if name not in ("ENTRYTYPE", "ID")
    }
    return RawEntry(entry_type=entry_type, key=key, fields=fields, source=_trim_source(chunk))


def parse_bibtex(text: str) -> List[RawEntry]:
    """
    Parse a bibliography document into raw entries, in document order.

    ``@comment`` and ``@preamble`` blocks are ignored and ``@string`` macros
    apply to the entries after them. An entry bibtexparser cannot read is
    logged and skipped; the rest of the document is still parsed.
    """
    entries = []
    strings: List[str] = []

    for entry_type, chunk in split_entries(text or ""):
        kind = entry_type.lower()
        if kind in SKIPPED_ENTRY_TYPES:
            continue
        if kind == "string":
            strings.append(chunk)
            continue

        entry = _parse_chunk(entry_type, chunk, strings)
        if entry is None:
            first_line = chunk.splitlines()[0]
            logger.warning(f"Skipping malformed BibTeX entry @{entry_type}: {first_line[:80]!r}")
            continue
        entries.append(entry)

    return entries


def split_authors(raw: str) -> List[str]:
    """
    Split a BibTeX name list on the word ``and``.

    Only ``and`` at brace depth 0 separates names, so a braced corporate
    author like ``{Barnes and Noble}`` stays whole. Empty names produced by
    stray separators are dropped. Names are returned undecoded.

    Examples:
        "Alice Smith and Bob Jones" -> ["Alice Smith", "Bob Jones"]
        "and Alice Smith AND  Bob"  -> ["Alice Smith", "Bob"]
    """
    names: List[str] = []
    current: List[str] = []
    word: List[str] = []
    depth = 0

    def end_word() -> None:
        if not word:
            return
        token = "".join(word)
        word.clear()
        if _AND_RE.fullmatch(token):
            names.append(" ".join(current))
            current.clear()
        else:
            current.append(token)

    for ch in raw or "":
        if ch == "{":
            depth += 1
        elif ch == "}":
            depth = max(depth - 1, 0)
        if ch.isspace() and depth == 0:
            end_word()
        else:
            word.append(ch)
    end_word()
    names.append(" ".join(current))

    return [name.strip() for name in names if name.strip()]
