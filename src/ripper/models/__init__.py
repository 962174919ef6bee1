"""
Data models for File Ripper.

This module contains all the core data structures used throughout the system.
"""

from .candidate import CandidateEntry
from .search_request import SearchRequest
from .search_results import SearchResults
from .config import RipperConfig, CrawlConfig, ScoringConfig, SearchConfig, EncodingPolicy

__all__ = [
    'CandidateEntry',
    'SearchRequest',
    'SearchResults',
    'RipperConfig',
    'CrawlConfig',
    'ScoringConfig',
    'SearchConfig',
    'EncodingPolicy'
]
