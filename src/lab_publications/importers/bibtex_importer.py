"""BibTeX importer for dblp publication lists."""
import logging
import re
from typing import List, Optional

from ..config_loader import Config
from ..models import Publication
from ..utils.error_handling import returns_on_error
from ..utils.text_normalizer import decode_latex
from .base import PublicationImporter
from .bibtex_parser import RawEntry, parse_bibtex, split_authors

logger = logging.getLogger(__name__)

# Venue fields in order of preference
VENUE_FIELDS = ("journal", "booktitle", "school")

_URL_SCHEME_RE = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")
_YEAR_RE = re.compile(r"[0-9]+")


class BibTeXImporter(PublicationImporter):
    """
    Parses a dblp ``.bib`` export into Publications.

    Entries are dropped when they are preprints (CoRR venue or key) or older
    than ``min_year``. The result keeps document order.
    """

    def __init__(
        self,
        min_year: Optional[int] = None,
        venue_marker: str = Config.PREPRINT_VENUE_MARKER,
        key_marker: str = Config.PREPRINT_KEY_MARKER,
    ):
        self.min_year = Config.MIN_YEAR if min_year is None else min_year
        self.venue_marker = venue_marker.lower()
        self.key_marker = key_marker.lower()

    @returns_on_error(list)
    def parse(self, content: str) -> List[Publication]:
        publications = []
        skipped = 0

        for entry in parse_bibtex(content or ""):
            pub = self._convert_entry(entry)
            if pub:
                publications.append(pub)
            else:
                skipped += 1

        logger.debug(f"Parsed {len(publications)} publications, skipped {skipped} entries")
        return publications

    def _convert_entry(self, entry: RawEntry) -> Optional[Publication]:
        """Map one raw entry to a Publication, or None when it is filtered out."""
        venue = self._get_venue(entry)
        if self.is_preprint(entry.key, venue):
            logger.debug(f"Skipping preprint {entry.key}")
            return None

        year = self._parse_year(entry.get("year"))
        if year is None or year < self.min_year:
            logger.debug(f"Skipping {entry.key}: year {entry.get('year')!r} before {self.min_year}")
            return None

        authors = tuple(
            name for name in (decode_latex(a) for a in split_authors(entry.get("author")))
            if name
        )

        return Publication(
            type=entry.entry_type,
            key=entry.key,
            title=decode_latex(entry.get("title")),
            authors=authors,
            year=str(year),
            venue=venue,
            url=decode_latex(entry.get("url")),
            doi=self._get_doi(entry.get("doi")),
            bibtex=entry.source,
        )

    def is_preprint(self, key: str, venue: str) -> bool:
        return self.venue_marker in venue.lower() or self.key_marker in key.lower()

    def _get_venue(self, entry: RawEntry) -> str:
        for name in VENUE_FIELDS:
            value = decode_latex(entry.get(name))
            if value:
                return value
        return ""

    @staticmethod
    def _parse_year(raw: str) -> Optional[int]:
        text = decode_latex(raw)
        if not _YEAR_RE.fullmatch(text):
            return None
        return int(text)

    @staticmethod
    def _get_doi(raw: str) -> str:
        """Keep DOI URLs verbatim; LaTeX escaping never applies inside a URL."""
        value = raw.strip()
        if _URL_SCHEME_RE.match(value):
            return value
        return decode_latex(value)
