"""
Publication fetching with an in-memory cache.

``fetch_publications()`` is the entry point page renderers call. It never
raises: when dblp cannot be reached it falls back to the last good list, or to
an empty list if there never was one.
"""
import asyncio
import logging
import threading
from typing import List, Optional

from .api_utils import async_retry, fetch_text
from .cache import PublicationCache
from .config_loader import Config
from .importers import BibTeXImporter, PublicationImporter
from .models import Publication

logger = logging.getLogger(__name__)


def sort_by_year(publications: List[Publication]) -> List[Publication]:
    """Newest first; entries from the same year keep their document order."""
    return sorted(publications, key=lambda pub: pub.year_value, reverse=True)


class PublicationService:
    """Fetches, parses and caches one researcher's dblp publication list."""

    def __init__(
        self,
        url: Optional[str] = None,
        cache: Optional[PublicationCache] = None,
        importer: Optional[PublicationImporter] = None,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
    ):
        self.url = url or Config.bib_url()
        self.cache = cache if cache is not None else PublicationCache()
        self.importer = importer if importer is not None else BibTeXImporter()
        self.timeout = Config.REQUEST_TIMEOUT if timeout is None else timeout
        self.max_retries = Config.FETCH_RETRIES if max_retries is None else max_retries
        self._download = async_retry(
            max_retries=self.max_retries,
            backoff_factor=Config.RETRY_BACKOFF,
        )(self._download_once)
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._loop_lock = threading.Lock()
        self._refresh_lock: Optional[asyncio.Lock] = None

    def _get_loop(self) -> asyncio.AbstractEventLoop:
        """Return the service's own event loop, starting its thread on first use."""
        loop = self._loop
        if loop is None:
            with self._loop_lock:
                loop = self._loop
                if loop is None:
                    loop = asyncio.new_event_loop()
                    thread = threading.Thread(
                        target=loop.run_forever,
                        name="publication-refresh",
                        daemon=True,
                    )
                    thread.start()
                    self._loop = loop
        return loop

    async def _download_once(self) -> str:
        return await fetch_text(self.url, self.timeout)

    async def fetch_publications(self) -> List[Publication]:
        """
        Return the current publication list, newest first.

        Served from cache while it is younger than the TTL. Otherwise dblp is
        queried on the service's own loop, so every caller, whatever thread
        or event loop it runs on, shares a single in-flight request.
        """
        cached = self.cache.get_fresh()
        if cached is not None:
            logger.info("Serving publications from cache...")
            return cached

        future = asyncio.run_coroutine_threadsafe(self._refresh_once(), self._get_loop())
        return await asyncio.wrap_future(future)

    def get_publications(self) -> List[Publication]:
        """
        Blocking variant of ``fetch_publications``.

        Safe to call from any thread, including Flask workers. Called from
        inside a coroutine it blocks that event loop until the refresh is
        done; await ``fetch_publications()`` there instead.
        """
        cached = self.cache.get_fresh()
        if cached is not None:
            logger.info("Serving publications from cache...")
            return cached

        future = asyncio.run_coroutine_threadsafe(self._refresh_once(), self._get_loop())
        return future.result()

    async def _refresh_once(self) -> List[Publication]:
        # Runs on the service loop only, so the lock is never shared across loops
        lock = self._refresh_lock
        if lock is None:
            lock = self._refresh_lock = asyncio.Lock()

        async with lock:
            # Another caller may have refreshed while we waited
            cached = self.cache.get_fresh()
            if cached is not None:
                logger.info("Serving publications from cache...")
                return cached
            return await self._refresh()

    async def _refresh(self) -> List[Publication]:
        try:
            logger.info(f"Fetching publications from {self.url}...")
            text = await self._download()
            publications = sort_by_year(self.importer.parse(text))
            self.cache.store(publications)
            logger.info(f"Fetched {len(publications)} publications")
            return publications
        except Exception as e:
            logger.error(f"Error fetching publications: {str(e)}", exc_info=True)
            stale = self.cache.get_stale()
            if stale is not None:
                logger.warning("Serving stale cache due to fetch error.")
                return stale
            return []


_service: Optional[PublicationService] = None
_service_lock = threading.Lock()


def _get_service() -> PublicationService:
    """Return the process-wide service, creating it on first use."""
    global _service
    if _service is None:
        with _service_lock:
            if _service is None:
                _service = PublicationService()
    return _service


async def fetch_publications() -> List[Publication]:
    """Return the lab's publication list, newest first. Never raises."""
    return await _get_service().fetch_publications()


def get_publications() -> List[Publication]:
    """
    Blocking variant of ``fetch_publications`` for synchronous callers.

    Works from any thread. Inside a coroutine, await ``fetch_publications()``
    instead; this call would block the caller's event loop while it waits.
    """
    return _get_service().get_publications()
