"""
Unit tests for the crawl-and-score pipeline.

Tests the search function end to end and the SearchSession used by a
browsing front end: re-crawling, crawl caching, root navigation and
cancellation of superseded triggers.
"""

import os
import sys
import tempfile
import shutil
from pathlib import Path
from unittest.mock import patch
import pytest

from ripper.errors import DirectoryUnreadable, InvalidPath, SearchCancelled
from ripper.models.config import RipperConfig
from ripper.tools.search import SearchSession, search


class TestSearch:
    """Test cases for the search function."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.test_root = Path(self.temp_dir).resolve()
        for name in ["notes.txt", "report.pdf", "notesfinal.txt"]:
            (self.test_root / name).write_text(name)

    def teardown_method(self):
        """Clean up test fixtures."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_end_to_end_ranking(self):
        results = search(self.test_root, "notes")

        assert [m.name for m in results.matches] == ["notes.txt", "notesfinal.txt", "report.pdf"]
        scores = [m.score for m in results.matches]
        assert scores[0] == 0
        assert scores[1] == 5
        assert scores[2] >= 6
        assert results.total_scanned == 3

    def test_full_name_comparison(self):
        config = RipperConfig.from_dict({'scoring': {'compare_stem': False}})

        results = search(self.test_root, "notes", config)

        assert [(m.name, m.score) for m in results.matches] == [
            ("notes.txt", 4), ("report.pdf", 8), ("notesfinal.txt", 9)
        ]

    def test_threshold_excludes_poor_matches(self):
        config = RipperConfig.from_dict({'scoring': {'threshold': 0.5}})

        results = search(self.test_root, "notes", config)

        assert [m.name for m in results.matches] == ["notes.txt", "notesfinal.txt"]
        assert results.total_scanned == 3

    def test_max_results(self):
        config = RipperConfig.from_dict({'scoring': {'max_results': 1}})

        results = search(self.test_root, "notes", config)

        assert [m.name for m in results.matches] == ["notes.txt"]

    def test_nested_files_are_found(self):
        (self.test_root / "archive" / "old").mkdir(parents=True)
        (self.test_root / "archive" / "old" / "notes.md").write_text("old")

        results = search(self.test_root, "notes")

        assert results.get_exact_matches()[0].name in {"notes.txt", "notes.md"}
        assert results.total_scanned == 4

    def test_request_recorded(self):
        results = search(str(self.test_root), "notes")

        assert results.request.root == str(self.test_root)
        assert results.request.query == "notes"
        assert results.execution_time >= 0.0

    def test_invalid_root(self):
        with pytest.raises(InvalidPath):
            search(self.test_root / "missing", "notes")

    @pytest.mark.skipif(sys.platform == "win32", reason="POSIX symlinks")
    def test_symlink_loop_root(self):
        loop = self.test_root / "loop"
        os.symlink(loop, loop)

        with pytest.raises(InvalidPath):
            search(loop, "notes")
        with pytest.raises(InvalidPath):
            SearchSession(loop).trigger("notes")

    def test_inaccessible_root_is_reported(self):
        real_stat = os.stat
        root = str(self.test_root)

        def denied(path, *args, **kwargs):
            if os.fspath(path) == root:
                raise PermissionError(13, "Permission denied", root)
            return real_stat(path, *args, **kwargs)

        with patch("ripper.tools.crawler.os.stat", side_effect=denied):
            with pytest.raises(DirectoryUnreadable):
                search(self.test_root, "notes")

    def test_unreadable_directory_is_reported(self):
        (self.test_root / "locked").mkdir()
        real_scandir = os.scandir
        locked = str(self.test_root / "locked")

        def fake_scandir(path):
            if os.fspath(path) == locked:
                raise PermissionError(13, "Permission denied", locked)
            return real_scandir(path)

        with patch("ripper.tools.crawler.os.scandir", side_effect=fake_scandir):
            with pytest.raises(DirectoryUnreadable):
                search(self.test_root, "notes")

            config = RipperConfig.from_dict({'crawl': {'skip_unreadable': True}})
            results = search(self.test_root, "notes", config)

        assert results.has_warnings()
        assert results.get_match_count() == 3


class TestSearchSession:
    """Test cases for SearchSession."""

    def setup_method(self):
        """Set up test fixtures."""
        self.temp_dir = tempfile.mkdtemp()
        self.test_root = Path(self.temp_dir).resolve()
        (self.test_root / "docs").mkdir()
        (self.test_root / "docs" / "notes.txt").write_text("notes")
        (self.test_root / "readme.md").write_text("readme")

    def teardown_method(self):
        """Clean up test fixtures."""
        if os.path.exists(self.temp_dir):
            shutil.rmtree(self.temp_dir)

    def test_trigger_recrawls_every_time(self):
        session = SearchSession(self.test_root)
        assert session.trigger("notes").total_scanned == 2

        (self.test_root / "docs" / "new.txt").write_text("new")

        assert session.trigger("notes").total_scanned == 3

    def test_cached_crawl_until_root_changes(self):
        config = RipperConfig.from_dict({'search': {'cache_crawl': True}})
        session = SearchSession(self.test_root, config)
        assert session.trigger("notes").total_scanned == 2

        (self.test_root / "docs" / "new.txt").write_text("new")

        cached = session.trigger("readme")
        assert cached.total_scanned == 2
        assert cached.get_best_match().name == "readme.md"

        session.invalidate()
        assert session.trigger("notes").total_scanned == 3

    def test_cached_crawl_is_rescored(self):
        config = RipperConfig.from_dict({'search': {'cache_crawl': True}})
        session = SearchSession(self.test_root, config)

        assert session.trigger("notes").get_best_match().name == "notes.txt"
        assert session.trigger("readme").get_best_match().name == "readme.md"

    def test_navigation(self):
        session = SearchSession(self.test_root)

        assert session.enter("docs") == str(self.test_root / "docs")
        assert session.trigger("notes").total_scanned == 1

        assert session.parent() == str(self.test_root)
        assert session.trigger("notes").total_scanned == 2

    def test_change_root_drops_cache(self):
        config = RipperConfig.from_dict({'search': {'cache_crawl': True}})
        session = SearchSession(self.test_root, config)
        session.trigger("notes")

        session.change_root(self.test_root / "docs")

        assert session.trigger("notes").total_scanned == 1

    def test_list_root(self):
        session = SearchSession(self.test_root)
        assert session.list_root() == [("docs", True), ("readme.md", False)]

    def test_new_trigger_cancels_previous(self):
        session = SearchSession(self.test_root)
        first = session._next_token()

        session.trigger("notes")

        assert first.cancelled is True

    def test_superseded_pass_raises(self):
        session = SearchSession(self.test_root)
        real_next = session._next_token

        def cancelled_token():
            token = real_next()
            token.cancel()
            return token

        with patch.object(session, "_next_token", side_effect=cancelled_token):
            with pytest.raises(SearchCancelled):
                session.trigger("notes")
