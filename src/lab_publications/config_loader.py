"""Configuration loader with environment variable support."""
import os
from typing import Final

from dotenv import load_dotenv

# Load environment variables from .env file if it exists
load_dotenv()


class Config:
    """Application configuration."""

    # dblp source
    DBLP_HOST: str = os.getenv("DBLP_HOST", "dblp.org")
    DBLP_PID: str = os.getenv("DBLP_PID", "43/2125")

    # Filtering
    MIN_YEAR: int = int(os.getenv("PUBLICATIONS_MIN_YEAR", "2014"))
    # dblp files arXiv preprints under the "CoRR" venue and "journals/corr/" keys
    PREPRINT_VENUE_MARKER: Final[str] = "corr"
    PREPRINT_KEY_MARKER: Final[str] = "corr/"

    # Fetching and caching
    CACHE_TTL_SECONDS: float = float(os.getenv("PUBLICATIONS_CACHE_TTL", "300"))
    REQUEST_TIMEOUT: float = float(os.getenv("PUBLICATIONS_REQUEST_TIMEOUT", "10"))
    FETCH_RETRIES: int = int(os.getenv("PUBLICATIONS_FETCH_RETRIES", "0"))
    RETRY_BACKOFF: float = float(os.getenv("PUBLICATIONS_RETRY_BACKOFF", "0.5"))

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_DIR: str = os.getenv("LOG_DIR", "")

    @classmethod
    def bib_url(cls) -> str:
        """Get the URL of the researcher's BibTeX export."""
        return f"https://{cls.DBLP_HOST}/pid/{cls.DBLP_PID}.bib"
