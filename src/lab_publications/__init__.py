"""Publication list for the lab website, fetched from dblp."""
from .config_loader import Config
from .models import Publication
from .name_utils import slugify
from .service import PublicationService, fetch_publications, get_publications
from .utils.text_normalizer import decode_latex

__version__ = "1.0.0"
__all__ = [
    "Config",
    "Publication",
    "PublicationService",
    "decode_latex",
    "fetch_publications",
    "get_publications",
    "slugify",
]
