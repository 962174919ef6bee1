"""
Exception hierarchy for File Ripper.

Crawl failures are raised as recoverable exceptions so the caller can decide
whether to show a partial result, retry, or surface a message.
"""

from typing import List, Optional


class RipperError(Exception):
    """Base class for all File Ripper errors."""
    pass


class CrawlError(RipperError):
    """Raised when a directory tree cannot be crawled."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.path = path


class InvalidPath(CrawlError):
    """Raised when the crawl root does not exist or is not a directory."""
    pass


class DirectoryUnreadable(CrawlError):
    """
    Raised when the root or a nested directory cannot be listed.

    Attributes:
        path: Directory that could not be listed
        cause: The underlying OSError
        partial: Entries collected before the failure
    """

    def __init__(self, path: str, cause: OSError, partial: Optional[List] = None):
        super().__init__(f"Cannot read directory {path}: {cause.strerror or cause}", path)
        self.cause = cause
        self.partial = partial if partial is not None else []


class EncodingError(CrawlError):
    """Raised when a filesystem entry name is not representable as UTF-8 text."""
    pass


class SearchCancelled(RipperError):
    """Raised when a crawl or scoring pass is superseded by a newer trigger."""
    pass


class ConfigurationError(RipperError):
    """Raised when configuration parsing or validation fails."""
    pass
