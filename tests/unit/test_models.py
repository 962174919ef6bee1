"""
Unit tests for the data models.

Tests the CandidateEntry, SearchRequest and SearchResults classes to ensure
proper validation, defaults and helper behaviour.
"""

import pytest
from datetime import datetime
from pathlib import Path
from pydantic import ValidationError

from ripper.models.candidate import CandidateEntry
from ripper.models.search_request import SearchRequest
from ripper.models.search_results import SearchResults


class TestCandidateEntry:
    """Test cases for CandidateEntry class."""

    def test_score_defaults_to_name_length(self):
        entry = CandidateEntry(name="notes.txt", full_path="/data/notes.txt")
        assert entry.score == 9

    def test_explicit_score(self):
        entry = CandidateEntry(name="notes.txt", full_path="/data/notes.txt", score=2)
        assert entry.score == 2

    def test_none_score_uses_default(self):
        entry = CandidateEntry.model_validate({'name': "abc", 'full_path': "/abc", 'score': None})
        assert entry.score == 3

    def test_negative_score_rejected(self):
        with pytest.raises(ValidationError):
            CandidateEntry(name="a", full_path="/a", score=-1)

    def test_empty_name_rejected(self):
        with pytest.raises(ValidationError):
            CandidateEntry(name="", full_path="/a")

    def test_name_with_separator_rejected(self):
        with pytest.raises(ValidationError, match="base name"):
            CandidateEntry(name="dir/file.txt", full_path="/dir/file.txt")

    def test_score_is_mutable(self):
        entry = CandidateEntry(name="abc", full_path="/abc")
        entry.score = 0
        assert entry.score == 0

        entry.reset_score()
        assert entry.score == 3

    def test_helpers(self):
        entry = CandidateEntry(name="Report.PDF", full_path="/docs/Report.PDF")

        assert entry.get_directory() == str(Path("/docs/Report.PDF").parent)
        assert entry.get_extension() == ".pdf"
        assert CandidateEntry(name="Makefile", full_path="/Makefile").get_extension() is None

    def test_to_dict(self):
        data = CandidateEntry(name="a.py", full_path="/src/a.py").to_dict()

        assert data['name'] == "a.py"
        assert data['score'] == 4
        assert data['extension'] == ".py"

    def test_str(self):
        entry = CandidateEntry(name="a.py", full_path="/src/a.py", score=1)
        assert str(entry) == "a.py (score: 1) | /src/a.py"


class TestSearchRequest:
    """Test cases for SearchRequest class."""

    def test_root_is_resolved(self, tmp_path):
        request = SearchRequest(root=str(tmp_path / "x" / ".."), query="notes")
        assert request.root == str(tmp_path.resolve())

    def test_empty_root_rejected(self):
        with pytest.raises(ValidationError, match="cannot be empty"):
            SearchRequest(root="  ", query="notes")

    def test_empty_query_allowed(self, tmp_path):
        request = SearchRequest(root=str(tmp_path))
        assert request.query == ""
        assert request.has_query() is False

    def test_threshold_bounds(self, tmp_path):
        with pytest.raises(ValidationError):
            SearchRequest(root=str(tmp_path), threshold=1.5)
        with pytest.raises(ValidationError):
            SearchRequest(root=str(tmp_path), max_results=0)

    def test_round_trip_dict(self, tmp_path):
        request = SearchRequest(root=str(tmp_path), query="q", threshold=0.4, max_results=5)
        assert SearchRequest.from_dict(request.to_dict()) == request

    def test_str(self, tmp_path):
        text = str(SearchRequest(root=str(tmp_path), query="notes", max_results=3))
        assert "Query: 'notes'" in text
        assert "Max results: 3" in text


class TestSearchResults:
    """Test cases for SearchResults class."""

    def setup_method(self):
        """Set up test fixtures."""
        self.request = SearchRequest(root="/", query="notes")
        self.matches = [
            CandidateEntry(name="notes.txt", full_path="/notes.txt", score=0),
            CandidateEntry(name="notesfinal.txt", full_path="/notesfinal.txt", score=5),
            CandidateEntry(name="report.pdf", full_path="/report.pdf", score=6),
        ]
        self.results = SearchResults(request=self.request, matches=self.matches, total_scanned=3)

    def test_basic_accessors(self):
        assert self.results.get_match_count() == 3
        assert self.results.get_best_match().name == "notes.txt"
        assert self.results.get_exact_matches() == [self.matches[0]]
        assert self.results.get_paths() == ["/notes.txt", "/notesfinal.txt", "/report.pdf"]
        assert isinstance(self.results.timestamp, datetime)

    def test_top_matches(self):
        assert [m.name for m in self.results.get_top_matches(2)] == ["notes.txt", "notesfinal.txt"]

    def test_empty_results(self):
        results = SearchResults(request=self.request)
        assert results.get_best_match() is None
        assert results.get_match_count() == 0

    def test_filter_by_score(self):
        self.results.filter_by_score(5)
        assert [m.name for m in self.results.matches] == ["notes.txt", "notesfinal.txt"]

    def test_limit_results(self):
        self.results.limit_results(1)
        assert self.results.get_match_count() == 1

        self.results.limit_results(0)
        assert self.results.get_match_count() == 1

    def test_warnings(self):
        assert self.results.has_warnings() is False
        self.results.add_warning("skipped /locked")
        assert self.results.has_warnings() is True
        assert "Warnings: 1" in str(self.results)

    def test_to_dict(self):
        data = self.results.to_dict()

        assert data['match_count'] == 3
        assert data['request']['query'] == "notes"
        assert data['matches'][0]['name'] == "notes.txt"
        assert isinstance(data['timestamp'], str)

    def test_str(self):
        text = str(self.results)
        assert "Found 3 matches" in text
        assert "Scanned 3 files" in text
