"""Data models for the publication list."""
from dataclasses import dataclass, field
from typing import Any, Dict, Tuple


@dataclass(frozen=True)
class Publication:
    """One peer-reviewed publication parsed from a dblp BibTeX entry."""
    type: str
    key: str
    title: str
    authors: Tuple[str, ...]
    year: str
    venue: str
    url: str = ""
    doi: str = ""
    bibtex: str = field(default="", repr=False)

    @property
    def year_value(self) -> int:
        return int(self.year)

    def to_dict(self) -> Dict[str, Any]:
        """Return a JSON-serialisable representation."""
        return {
            "type": self.type,
            "key": self.key,
            "title": self.title,
            "authors": list(self.authors),
            "year": self.year,
            "venue": self.venue,
            "url": self.url,
            "doi": self.doi,
            "bibtex": self.bibtex,
        }
