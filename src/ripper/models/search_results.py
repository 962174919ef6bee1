"""
Search results data model for File Ripper.

Holds the ranked candidate list produced by one crawl-and-score pass together
with execution metadata and any non-fatal warnings recorded during the crawl.
"""

from typing import Dict, List, Optional, Any
from datetime import datetime
from pydantic import BaseModel, Field

from .candidate import CandidateEntry
from .search_request import SearchRequest


class SearchResults(BaseModel):
    """
    Complete results from one trigger.

    Attributes:
        request: The request that produced these results
        matches: Candidates in ascending score order (best match first)
        total_scanned: Number of files found by the crawl
        execution_time: Time taken by crawl and scoring in seconds
        timestamp: When the pass ran
        warnings: Non-fatal problems recorded during the crawl
    """

    request: SearchRequest = Field(..., description="The request that produced these results")
    matches: List[CandidateEntry] = Field(default_factory=list, description="Ranked candidates")
    total_scanned: int = Field(0, ge=0, description="Number of files found by the crawl")
    execution_time: float = Field(0.0, ge=0.0, description="Time taken by the pass")
    timestamp: datetime = Field(default_factory=datetime.now, description="When the pass ran")
    warnings: List[str] = Field(default_factory=list, description="Non-fatal crawl problems")

    def get_match_count(self) -> int:
        """Get the number of ranked matches."""
        return len(self.matches)

    def get_best_match(self) -> Optional[CandidateEntry]:
        """Get the lowest-scoring candidate, if any."""
        return self.matches[0] if self.matches else None

    def get_top_matches(self, n: int = 10) -> List[CandidateEntry]:
        """Get the N best matches."""
        return sorted(self.matches, key=lambda m: m.score)[:n]

    def get_exact_matches(self) -> List[CandidateEntry]:
        """Get candidates whose name equals the query."""
        return [match for match in self.matches if match.score == 0]

    def get_paths(self) -> List[str]:
        """Get full paths in ranked order."""
        return [match.full_path for match in self.matches]

    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    def add_warning(self, warning: str) -> None:
        self.warnings.append(warning)

    def filter_by_score(self, max_score: int) -> None:
        """Remove matches whose distance exceeds max_score."""
        self.matches = [match for match in self.matches if match.score <= max_score]

    def limit_results(self, max_results: int) -> None:
        """Limit the number of results to the specified maximum."""
        if max_results > 0:
            self.matches = self.matches[:max_results]

    def to_dict(self) -> Dict[str, Any]:
        """Convert search results to dictionary representation."""
        data = self.model_dump()
        data['request'] = self.request.to_dict()
        data['matches'] = [match.to_dict() for match in self.matches]
        data['match_count'] = self.get_match_count()
        data['timestamp'] = self.timestamp.isoformat()
        data['has_warnings'] = self.has_warnings()
        return data

    def __str__(self) -> str:
        parts = [f"Found {self.get_match_count()} matches"]
        parts.append(f"Scanned {self.total_scanned} files")
        parts.append(f"Took {self.execution_time:.2f}s")

        if self.has_warnings():
            parts.append(f"Warnings: {len(self.warnings)}")

        return " | ".join(parts)
