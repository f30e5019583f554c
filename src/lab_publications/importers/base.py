"""Base class for publication importers."""
from abc import ABC, abstractmethod
from typing import List
from ..models import Publication

class PublicationImporter(ABC):
    """Abstract base class for turning a bibliography document into Publications."""

    @abstractmethod
    def parse(self, content: str) -> List[Publication]:
        """Parse string content into a list of Publications."""
        pass
