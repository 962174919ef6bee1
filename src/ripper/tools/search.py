"""
Crawl-and-score pipeline for File Ripper.

``search`` runs one complete pass: crawl the root, score every file name
against the query, select and rank. ``SearchSession`` is what a presentation
layer holds on to between triggers; it owns the current root and, when crawl
caching is enabled, the last crawl.
"""

import os
import time
import threading
from pathlib import Path
from typing import List, Optional, Union
import logging

from ..models.candidate import CandidateEntry
from ..models.config import RipperConfig
from ..models.search_request import SearchRequest
from ..models.search_results import SearchResults
from .cancellation import CancellationToken
from .crawler import Crawler, list_directory
from .scorer import score_all, select_matches


logger = logging.getLogger(__name__)


def _build_request(root: Union[str, Path], query: str, config: RipperConfig) -> SearchRequest:
    return SearchRequest(
        root=str(root),
        query=query,
        threshold=config.scoring.threshold,
        max_results=config.scoring.max_results
    )


def _rank(request: SearchRequest, candidates: List[CandidateEntry], config: RipperConfig,
          cancel_token: Optional[CancellationToken]) -> List[CandidateEntry]:
    scoring = config.scoring
    score_all(request.query, candidates,
              ignore_case=scoring.ignore_case,
              compare_stem=scoring.compare_stem,
              cancel_token=cancel_token)
    return select_matches(request.query, candidates,
                          threshold=request.threshold,
                          max_results=request.max_results,
                          compare_stem=scoring.compare_stem,
                          ignore_case=scoring.ignore_case)


def search(root: Union[str, Path], query: str, config: Optional[RipperConfig] = None,
           cancel_token: Optional[CancellationToken] = None) -> SearchResults:
    """
    Crawl root and rank every file beneath it by similarity to query.

    Args:
        root: Directory whose subtree is searched
        query: Text compared against each file name
        config: Settings (optional)
        cancel_token: Optional token to abandon the pass

    Returns:
        SearchResults with matches in ascending score order

    Raises:
        InvalidPath: If root is not an existing directory
        DirectoryUnreadable: If a directory cannot be listed
        SearchCancelled: If the token is cancelled
    """
    config = config or RipperConfig()
    request = _build_request(root, query, config)
    start_time = time.perf_counter()

    crawler = Crawler(config.crawl)
    candidates = crawler.crawl(request.root, cancel_token)
    matches = _rank(request, candidates, config, cancel_token)

    results = SearchResults(
        request=request,
        matches=matches,
        total_scanned=len(candidates),
        execution_time=time.perf_counter() - start_time,
        warnings=list(crawler.warnings)
    )
    logger.info(str(results))
    return results


class SearchSession:
    """
    Holds the state a browsing front end keeps between triggers.

    By default every trigger re-crawls from scratch. With ``search.cache_crawl``
    the crawl is reused until the root changes or ``invalidate`` is called, and
    each trigger only re-scores it. Starting a trigger cancels the previous
    trigger's token, so a pass still running on another thread is abandoned.
    """

    def __init__(self, root: Union[str, Path], config: Optional[RipperConfig] = None):
        self.config = config or RipperConfig()
        self._root = self._normalize(root)
        self._cached: Optional[List[CandidateEntry]] = None
        self._cached_warnings: List[str] = []
        self._token: Optional[CancellationToken] = None
        self._lock = threading.Lock()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @staticmethod
    def _normalize(root: Union[str, Path]) -> str:
        path = Path(root).expanduser()
        try:
            return str(path.resolve())
        except (OSError, RuntimeError):
            # the crawler reports the failure on the next trigger
            return os.path.abspath(path)

    @property
    def root(self) -> str:
        return self._root

    def change_root(self, root: Union[str, Path]) -> str:
        """Point the session at a new directory, dropping any cached crawl."""
        new_root = self._normalize(root)
        if new_root != self._root:
            self.logger.info(f"Root changed: {self._root} -> {new_root}")
            self._root = new_root
            self.invalidate()
        return self._root

    def parent(self) -> str:
        """Move the root to its parent directory."""
        return self.change_root(Path(self._root).parent)

    def enter(self, name: str) -> str:
        """Move the root into one of its subdirectories."""
        return self.change_root(Path(self._root) / name)

    def list_root(self):
        """List the current root for browsing; see crawler.list_directory."""
        return list_directory(self._root)

    def invalidate(self) -> None:
        """Drop the cached crawl so the next trigger crawls again."""
        self._cached = None
        self._cached_warnings = []

    def cancel(self) -> None:
        """Cancel the pass started by the latest trigger, if any."""
        with self._lock:
            if self._token is not None:
                self._token.cancel()

    def _next_token(self) -> CancellationToken:
        with self._lock:
            if self._token is not None:
                self._token.cancel()
            self._token = CancellationToken()
            return self._token

    def trigger(self, query: str) -> SearchResults:
        """
        Run one crawl-and-score pass for query against the current root.

        Raises:
            InvalidPath, DirectoryUnreadable: If the crawl fails
            SearchCancelled: If a newer trigger superseded this one
        """
        token = self._next_token()

        if not self.config.search.cache_crawl:
            return search(self._root, query, self.config, cancel_token=token)

        request = _build_request(self._root, query, self.config)
        start_time = time.perf_counter()

        if self._cached is None:
            crawler = Crawler(self.config.crawl)
            self._cached = crawler.crawl(self._root, token)
            self._cached_warnings = list(crawler.warnings)
        else:
            self.logger.debug(f"Re-scoring {len(self._cached)} cached candidates")

        matches = _rank(request, self._cached, self.config, token)

        return SearchResults(
            request=request,
            matches=matches,
            total_scanned=len(self._cached),
            execution_time=time.perf_counter() - start_time,
            warnings=list(self._cached_warnings)
        )
