"""Pytest configuration and fixtures."""
import os
from typing import Callable

import pytest

from lab_publications.models import Publication

# Sample dblp export: two peer-reviewed papers, one CoRR preprint, one
# paper from before the cutoff year.
SAMPLE_BIBTEX = r"""@article{DBLP:journals/tro/SmithJ18,
  author       = {Alice Smith and
                  Bob Jones},
  title        = {Robust Mapping with {LiDAR}},
  journal      = {{IEEE} Trans. Robotics},
  volume       = {34},
  year         = {2018},
  url          = {https://doi.org/10.1109/TRO.2018.1},
  doi          = {10.1109/TRO.2018.1},
  timestamp    = {Mon, 01 Jan 2019 00:00:00 +0100},
  biburl       = {https://dblp.org/rec/journals/tro/SmithJ18.bib},
  bibsource    = {dblp computer science bibliography, https://dblp.org}
}

@inproceedings{DBLP:conf/icra/AlvarezS22,
  author       = {Jos{\'{e}} {\'{A}}lvarez and
                  Alice Smith},
  title        = {Learning to Navigate in Erd{\H{o}}s Graphs},
  booktitle    = {{IEEE} International Conference on Robotics and Automation, {ICRA}
                  2022},
  pages        = {1--8},
  publisher    = {{IEEE}},
  year         = {2022},
  url          = {https://doi.org/10.1109/ICRA.2022.2},
  doi          = {https://doi.org/10.1109/ICRA.2022.2}
}

@article{DBLP:journals/corr/abs-2101-00001,
  author       = {Alice Smith},
  title        = {A Preprint},
  journal      = {CoRR},
  volume       = {abs/2101.00001},
  year         = {2021}
}

@phdthesis{DBLP:phd/us/Jones13,
  author       = {Bob Jones},
  title        = {Old Work},
  school       = {Some University},
  year         = {2013}
}
"""


def bib_entry(key: str = "DBLP:conf/test/Entry", year: str = "2020",
              entry_type: str = "inproceedings", **fields: str) -> str:
    """Build one BibTeX entry with sensible defaults for the fields not given."""
    fields.setdefault("author", "Alice Smith")
    fields.setdefault("title", f"Paper {key}")
    fields.setdefault("booktitle", "Proc. Test Conference")
    lines = [f"@{entry_type}{{{key},"]
    for name, value in fields.items():
        lines.append(f"  {name} = {{{value}}},")
    lines.append(f"  year = {{{year}}}")
    lines.append("}")
    return "\n".join(lines) + "\n"


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def sample_bibtex() -> str:
    return SAMPLE_BIBTEX


@pytest.fixture
def make_entry() -> Callable[..., str]:
    return bib_entry


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_publication() -> Callable[..., Publication]:
    """Factory for Publication records with overridable fields."""
    def factory(**overrides) -> Publication:
        values = {
            "type": "article",
            "key": "DBLP:journals/test/X20",
            "title": "A Title",
            "authors": ("Alice Smith",),
            "year": "2020",
            "venue": "Journal of Testing",
            "url": "",
            "doi": "",
            "bibtex": "@article{DBLP:journals/test/X20}",
        }
        values.update(overrides)
        return Publication(**values)
    return factory


@pytest.fixture(autouse=True)
def mock_environment_vars() -> None:
    """Set up test environment variables."""
    os.environ.update({
        "LOG_LEVEL": "WARNING",
    })
