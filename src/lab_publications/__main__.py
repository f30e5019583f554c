"""Command line entry point: print the lab's publication list."""
import argparse
import json
import logging
import sys
from typing import List, Optional

from .config_loader import Config
from .service import get_publications
from .utils.logging_setup import setup_logging
from .web import filter_by_author


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="lab_publications",
        description=f"List publications from {Config.bib_url()}",
    )
    output = parser.add_mutually_exclusive_group()
    output.add_argument("--json", action="store_true", help="print JSON records")
    output.add_argument("--bibtex", action="store_true", help="print the BibTeX entries")
    parser.add_argument("--author", help="only publications by this author slug, e.g. jose-alvarez")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(Config.LOG_DIR, logging.DEBUG if args.verbose else Config.LOG_LEVEL)

    publications = get_publications()
    if args.author:
        publications = filter_by_author(publications, args.author)

    if args.json:
        json.dump([pub.to_dict() for pub in publications], sys.stdout, ensure_ascii=False, indent=2)
        print()
    elif args.bibtex:
        print("\n\n".join(pub.bibtex for pub in publications))
    else:
        for pub in publications:
            print(f"{pub.year}  {', '.join(pub.authors)}. {pub.title}. {pub.venue}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
