"""
Filesystem crawler for File Ripper.

This module enumerates every regular file beneath a root directory into a flat
list of candidates. Traversal is depth-first and pre-order: when a subdirectory
is met in a listing, its whole subtree is collected before the next sibling.
An explicit stack of open listings replaces call-stack recursion, and every
directory entered is remembered by device and inode so symlink cycles end.
"""

import os
import stat
from pathlib import Path
from typing import Dict, List, Optional, Iterator, Set, Tuple, Union
import logging

from ..errors import DirectoryUnreadable, EncodingError, InvalidPath
from ..models.candidate import CandidateEntry
from ..models.config import CrawlConfig, EncodingPolicy
from .cancellation import CancellationToken


logger = logging.getLogger(__name__)

DirectoryIdentity = Tuple[int, int]


def check_name(name: str) -> str:
    """
    Ensure a filesystem name is representable as UTF-8 text.

    Undecodable bytes surface in ``os.scandir`` results as lone surrogates,
    which cannot be encoded.

    Raises:
        EncodingError: If the name cannot be encoded as UTF-8
    """
    try:
        name.encode('utf-8')
    except UnicodeEncodeError as e:
        raise EncodingError(f"File name is not valid UTF-8: {name!r}") from e
    return name


def _lossy(text: str) -> str:
    return os.fsencode(text).decode('utf-8', 'replace')


def resolve_root(root: Union[str, Path]) -> Path:
    """
    Resolve a directory to browse or crawl.

    Args:
        root: Directory path, "~" is expanded

    Returns:
        The absolute, resolved directory path

    Raises:
        InvalidPath: If root is blank, missing, not a directory or a symlink loop
        DirectoryUnreadable: If a parent directory denies access
    """
    if not str(root).strip():
        raise InvalidPath("Crawl root cannot be empty", str(root))

    root_path = Path(root).expanduser()
    try:
        root_path = root_path.resolve()
        mode = os.stat(root_path).st_mode
    except RuntimeError as e:
        raise InvalidPath(f"Symlink loop at root: {root_path}", str(root_path)) from e
    except FileNotFoundError as e:
        raise InvalidPath(f"Root directory does not exist: {root_path}", str(root_path)) from e
    except PermissionError as e:
        raise DirectoryUnreadable(str(root_path), e, partial=[]) from e
    except OSError as e:
        raise InvalidPath(f"Cannot access root {root_path}: {e.strerror or e}", str(root_path)) from e

    if not stat.S_ISDIR(mode):
        raise InvalidPath(f"Root path is not a directory: {root_path}", str(root_path))
    return root_path


class Crawler:
    """
    Recursive filesystem crawler that materialises leaf files as candidates.

    A directory that cannot be listed raises DirectoryUnreadable carrying the
    entries collected so far, unless ``skip_unreadable`` is configured, in which
    case it is logged, recorded in ``warnings`` and skipped.
    """

    def __init__(self, config: Optional[CrawlConfig] = None):
        """
        Initialize the crawler.

        Args:
            config: Crawl settings; defaults are used when omitted
        """
        self.config = config or CrawlConfig()
        self.warnings: List[str] = []
        self._stats = self._empty_stats()

    def crawl(self, root: Union[str, Path],
              cancel_token: Optional[CancellationToken] = None) -> List[CandidateEntry]:
        """
        Collect every regular file beneath root.

        Args:
            root: Directory to crawl
            cancel_token: Optional token checked between entries

        Returns:
            Candidates in traversal order, each scored with len(name)

        Raises:
            InvalidPath: If root does not exist or is not a directory
            DirectoryUnreadable: If a directory cannot be listed
            SearchCancelled: If the token is cancelled mid-crawl
        """
        root_path = self._validate_root(root)
        logger.info(f"Crawling directory tree: {root_path}")

        candidates: List[CandidateEntry] = []
        visited: Set[DirectoryIdentity] = {self._identity_of(root_path, candidates)}
        stack: List[Iterator[os.DirEntry]] = [self._list(str(root_path), candidates, is_root=True)]

        while stack:
            if cancel_token is not None:
                cancel_token.raise_if_cancelled()

            entry = next(stack[-1], None)
            if entry is None:
                stack.pop()
                continue

            if self._is_directory(entry):
                listing = self._enter(entry, visited, candidates)
                if listing is not None:
                    stack.append(listing)
                continue

            if not self._is_regular_file(entry):
                logger.debug(f"Skipping non-regular entry: {entry.path}")
                self._stats['entries_skipped'] += 1
                continue

            if len(candidates) >= self.config.max_files:
                self._warn(f"Reached maximum file limit: {self.config.max_files}")
                break

            candidate = self._create_candidate(entry)
            if candidate is None:
                continue

            candidates.append(candidate)
            self._stats['files_found'] += 1

        logger.info(f"Crawl of {root_path} found {len(candidates)} files")
        return candidates

    def _validate_root(self, root: Union[str, Path]) -> Path:
        try:
            return resolve_root(root)
        except DirectoryUnreadable:
            self._stats['errors'] += 1
            raise

    def _list(self, path: str, candidates: List[CandidateEntry],
              is_root: bool = False) -> Optional[Iterator[os.DirEntry]]:
        """
        Read one directory listing in full.

        Returns:
            Iterator over the entries, or None if the directory was skipped
        """
        try:
            with os.scandir(path) as it:
                entries = list(it)
        except OSError as e:
            return self._unreadable(path, e, candidates, is_root)

        self._stats['directories_traversed'] += 1
        return iter(entries)

    def _enter(self, entry: os.DirEntry, visited: Set[DirectoryIdentity],
               candidates: List[CandidateEntry]) -> Optional[Iterator[os.DirEntry]]:
        try:
            identity = self._identity(entry.stat(follow_symlinks=True))
        except OSError as e:
            return self._unreadable(entry.path, e, candidates)

        if identity in visited:
            self._warn(f"Skipping already visited directory (symlink cycle?): {entry.path}")
            self._stats['entries_skipped'] += 1
            return None

        visited.add(identity)
        return self._list(entry.path, candidates)

    def _unreadable(self, path: str, error: OSError, candidates: List[CandidateEntry],
                    is_root: bool = False) -> None:
        self._stats['errors'] += 1
        if self.config.skip_unreadable and not is_root:
            self._warn(f"Skipping unreadable directory {path}: {error}")
            return None

        logger.error(f"Cannot read directory {path}: {error}")
        raise DirectoryUnreadable(path, error, partial=list(candidates)) from error

    def _identity_of(self, path: Path, candidates: List[CandidateEntry]) -> DirectoryIdentity:
        try:
            return self._identity(path.stat())
        except OSError as e:
            self._stats['errors'] += 1
            raise DirectoryUnreadable(str(path), e, partial=list(candidates)) from e

    @staticmethod
    def _identity(stat_result: os.stat_result) -> DirectoryIdentity:
        return (stat_result.st_dev, stat_result.st_ino)

    def _is_directory(self, entry: os.DirEntry) -> bool:
        try:
            return entry.is_dir(follow_symlinks=self.config.follow_symlinks)
        except OSError:
            return False

    @staticmethod
    def _is_regular_file(entry: os.DirEntry) -> bool:
        try:
            return entry.is_file(follow_symlinks=True)
        except OSError:
            return False

    def _create_candidate(self, entry: os.DirEntry) -> Optional[CandidateEntry]:
        """
        Build a candidate, applying the encoding policy to undecodable names.

        Args:
            entry: Directory entry of a regular file

        Returns:
            CandidateEntry, or None if the entry was skipped
        """
        name, full_path = entry.name, entry.path
        try:
            check_name(name)
            check_name(full_path)
        except EncodingError as e:
            if self.config.encoding_policy is EncodingPolicy.SKIP:
                self._warn(f"Skipping entry with undecodable name: {e}")
                self._stats['entries_skipped'] += 1
                return None
            logger.debug(f"Using lossy name for {full_path!r}")
            name, full_path = _lossy(name), _lossy(full_path)

        return CandidateEntry(name=name, full_path=full_path)

    def _warn(self, message: str) -> None:
        logger.warning(message)
        self.warnings.append(message)

    @staticmethod
    def _empty_stats() -> Dict[str, int]:
        return {
            'files_found': 0,
            'directories_traversed': 0,
            'entries_skipped': 0,
            'errors': 0
        }

    def get_stats(self) -> Dict[str, int]:
        """
        Get statistics about the crawl.

        Returns:
            Dictionary containing operation statistics
        """
        return self._stats.copy()

    def reset_stats(self) -> None:
        """Reset the statistics counters and recorded warnings."""
        self._stats = self._empty_stats()
        self.warnings = []


def crawl(root: Union[str, Path], config: Optional[CrawlConfig] = None,
          cancel_token: Optional[CancellationToken] = None) -> List[CandidateEntry]:
    """
    Convenience function to crawl a directory tree.

    Args:
        root: Directory to crawl
        config: Crawl settings (optional)
        cancel_token: Optional cancellation token

    Returns:
        List of candidates in traversal order
    """
    return Crawler(config).crawl(root, cancel_token)


def list_directory(path: Union[str, Path]) -> List[Tuple[str, bool]]:
    """
    List the immediate children of a directory for browsing.

    Args:
        path: Directory to list

    Returns:
        (name, is_directory) pairs, directories first, each group sorted by name

    Raises:
        InvalidPath: If path does not exist or is not a directory
        DirectoryUnreadable: If the directory cannot be listed
    """
    dir_path = resolve_root(path)

    try:
        with os.scandir(dir_path) as it:
            children = [(entry.name, entry.is_dir()) for entry in it]
    except OSError as e:
        raise DirectoryUnreadable(str(dir_path), e) from e

    return sorted(children, key=lambda child: (not child[1], child[0]))
