"""
Search request data model for File Ripper.

A request is what the presentation layer hands over on every trigger: the
directory to crawl and the text to rank file names against.
"""

import os
from typing import Dict, Any, Optional
from pathlib import Path
from pydantic import BaseModel, Field, field_validator


class SearchRequest(BaseModel):
    """
    Represents one crawl-and-score trigger.

    Attributes:
        root: Directory whose subtree is crawled
        query: Text compared against every file name (may be empty)
        threshold: Optional similarity cut-off as a fraction of the longer string
        max_results: Optional cap on the number of ranked results
    """

    root: str = Field(..., description="Directory whose subtree is crawled")
    query: str = Field("", description="Text compared against every file name")
    threshold: Optional[float] = Field(None, ge=0.0, le=1.0, description="Similarity cut-off")
    max_results: Optional[int] = Field(None, gt=0, description="Maximum number of results")

    @field_validator('root')
    @classmethod
    def validate_root(cls, v: str) -> str:
        """Normalise the root to an absolute path."""
        if not v or not v.strip():
            raise ValueError("Search root cannot be empty")
        path = Path(v).expanduser()
        try:
            return str(path.resolve())
        except (OSError, RuntimeError):
            return os.path.abspath(path)

    def has_query(self) -> bool:
        """Check whether any text was entered."""
        return self.query != ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert the request to a dictionary representation."""
        return self.model_dump()

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'SearchRequest':
        """Create a SearchRequest from a dictionary."""
        return cls.model_validate(data)

    def __str__(self) -> str:
        parts = [f"Query: '{self.query}'", f"Root: {self.root}"]
        if self.threshold is not None:
            parts.append(f"Threshold: {self.threshold}")
        if self.max_results is not None:
            parts.append(f"Max results: {self.max_results}")
        return " | ".join(parts)
