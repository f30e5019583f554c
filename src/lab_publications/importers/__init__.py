from .base import PublicationImporter
from .bibtex_importer import BibTeXImporter
from .bibtex_parser import RawEntry, parse_bibtex, split_authors, split_entries

__all__ = [
    'PublicationImporter',
    'BibTeXImporter',
    'RawEntry',
    'parse_bibtex',
    'split_authors',
    'split_entries',
]
