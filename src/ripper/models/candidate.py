"""
Candidate data model for File Ripper.

A candidate is one regular file discovered by a crawl. It carries the base name
that is compared against the query, the absolute path used for display, and the
edit distance from the most recent scoring pass.
"""

from typing import Dict, Any, Optional
from pathlib import Path
from pydantic import BaseModel, Field, field_validator, model_validator


class CandidateEntry(BaseModel):
    """
    One file found by the crawler.

    The score starts out equal to ``len(name)``, the distance from the empty
    query, and is overwritten by every scoring pass. It only has meaning relative
    to the query it was last scored against.

    Attributes:
        name: Base name of the file, the comparison key
        full_path: Absolute path of the file, never compared
        score: Edit distance to the last query (lower is better)
    """

    name: str = Field(..., min_length=1, description="Base name of the file")
    full_path: str = Field(..., min_length=1, description="Absolute path of the file")
    score: int = Field(..., ge=0, description="Edit distance to the last scored query")

    @model_validator(mode='before')
    @classmethod
    def default_score(cls, data: Any) -> Any:
        """Initialise an absent score to the length of the name."""
        if isinstance(data, dict) and data.get('score') is None:
            data = dict(data)
            data['score'] = len(data.get('name') or '')
        return data

    @field_validator('name')
    @classmethod
    def validate_name(cls, v: str) -> str:
        """A base name never contains a path separator."""
        if '/' in v:
            raise ValueError(f"Candidate name must be a base name, got: {v}")
        return v

    def reset_score(self) -> None:
        """Restore the not-yet-compared score."""
        self.score = len(self.name)

    def get_directory(self) -> str:
        """Get the directory containing this file."""
        return str(Path(self.full_path).parent)

    def get_extension(self) -> Optional[str]:
        """Get the lower-cased file extension, if any."""
        suffix = Path(self.name).suffix
        return suffix.lower() if suffix else None

    def to_dict(self) -> Dict[str, Any]:
        """Convert candidate to dictionary representation."""
        data = self.model_dump()
        data['directory'] = self.get_directory()
        data['extension'] = self.get_extension()
        return data

    def __str__(self) -> str:
        return f"{self.name} (score: {self.score}) | {self.full_path}"
