"""
Search tools for File Ripper.

This module contains the crawler that collects candidate files, the
edit-distance scorer that ranks them, and the pipeline that joins the two.
"""

from .cancellation import CancellationToken
from .crawler import Crawler, crawl, list_directory, resolve_root
from .scorer import levenshtein_distance, score_all, select_matches, within_threshold
from .search import SearchSession, search

__all__ = [
    'CancellationToken',
    'Crawler',
    'crawl',
    'list_directory',
    'resolve_root',
    'levenshtein_distance',
    'score_all',
    'select_matches',
    'within_threshold',
    'SearchSession',
    'search'
]
