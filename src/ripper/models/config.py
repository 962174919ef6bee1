"""
Configuration data models for File Ripper.

This module defines the settings that shape a crawl-and-score pass: how the
crawler treats links, unreadable directories and undecodable names, how names
are compared and selected, and how the search session caches crawls.
"""

from typing import Dict, List, Optional, Any
from enum import Enum
import logging
from pydantic import BaseModel, Field, field_validator


class EncodingPolicy(Enum):
    """What to do with file names that are not valid UTF-8 text."""
    SKIP = "skip"
    REPLACE = "replace"


class CrawlConfig(BaseModel):
    """
    Crawler settings.

    Attributes:
        follow_symlinks: Descend into symbolic links that point to directories
        skip_unreadable: Skip directories that cannot be listed instead of failing
        encoding_policy: Handling of names that are not valid UTF-8
        max_files: Maximum number of files collected by one crawl
    """

    follow_symlinks: bool = Field(False, description="Descend into symlinked directories")
    skip_unreadable: bool = Field(False, description="Skip unreadable directories instead of failing")
    encoding_policy: EncodingPolicy = Field(EncodingPolicy.SKIP, description="Handling of undecodable names")
    max_files: int = Field(200000, gt=0, description="Maximum number of files collected")

    @field_validator('encoding_policy', mode='before')
    @classmethod
    def validate_encoding_policy(cls, v) -> EncodingPolicy:
        """Validate and convert encoding policy to enum."""
        if isinstance(v, str):
            try:
                return EncodingPolicy(v.lower())
            except ValueError:
                raise ValueError(f"Invalid encoding policy: {v}")
        return v

    def to_dict(self) -> Dict[str, Any]:
        data = self.model_dump()
        data['encoding_policy'] = self.encoding_policy.value
        return data


class ScoringConfig(BaseModel):
    """
    Scoring and selection settings.

    Attributes:
        ignore_case: Lower-case query and names before comparing
        compare_stem: Compare the query with the name minus its extension
        threshold: Keep candidates whose distance is at most this fraction of
            the longer of query and name; None keeps every candidate
        max_results: Maximum number of ranked results; None means unlimited
    """

    ignore_case: bool = Field(False, description="Compare lower-cased strings")
    compare_stem: bool = Field(True, description="Compare against the name without its extension")
    threshold: Optional[float] = Field(None, ge=0.0, le=1.0, description="Similarity cut-off")
    max_results: Optional[int] = Field(100, gt=0, description="Maximum number of ranked results")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class SearchConfig(BaseModel):
    """
    Search session settings.

    Attributes:
        cache_crawl: Keep the crawl until the root changes and only re-score
            on each trigger
    """

    cache_crawl: bool = Field(False, description="Reuse the crawl until the root changes")

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class LoggingConfig(BaseModel):
    """Logging settings applied by the command line entry point."""

    level: str = Field("WARNING", description="Root log level")

    @field_validator('level')
    @classmethod
    def validate_level(cls, v: str) -> str:
        level = v.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Invalid log level: {v}")
        return level

    def get_level(self) -> int:
        return logging.getLevelName(self.level)

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump()


class RipperConfig(BaseModel):
    """
    Main configuration class for File Ripper.

    Attributes:
        crawl: Crawler settings
        scoring: Scoring and selection settings
        search: Search session settings
        logging: Logging settings
    """

    crawl: CrawlConfig = Field(default_factory=CrawlConfig, description="Crawler settings")
    scoring: ScoringConfig = Field(default_factory=ScoringConfig, description="Scoring settings")
    search: SearchConfig = Field(default_factory=SearchConfig, description="Search session settings")
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging settings")

    def validate_configuration(self) -> List[str]:
        """
        Check for settings that are valid but likely to cause trouble.

        Returns:
            List of warning messages
        """
        warnings = []

        if self.crawl.follow_symlinks:
            warnings.append("Following symbolic links may crawl outside the chosen root")

        if self.crawl.max_files > 1000000:
            warnings.append("Very high max_files limit may make every search slow")

        if self.scoring.threshold == 0.0:
            warnings.append("A threshold of 0 only keeps exact name matches")

        if self.crawl.skip_unreadable:
            warnings.append("Unreadable directories will be skipped; results may be incomplete")

        return warnings

    def to_dict(self) -> Dict[str, Any]:
        """Convert configuration to dictionary representation."""
        return {
            'crawl': self.crawl.to_dict(),
            'scoring': self.scoring.to_dict(),
            'search': self.search.to_dict(),
            'logging': self.logging.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'RipperConfig':
        """Create configuration from dictionary representation."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        parts = [f"Follow symlinks: {self.crawl.follow_symlinks}"]
        parts.append(f"Skip unreadable: {self.crawl.skip_unreadable}")
        parts.append(f"Threshold: {self.scoring.threshold}")
        parts.append(f"Cache crawl: {self.search.cache_crawl}")
        return " | ".join(parts)
