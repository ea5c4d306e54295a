# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitFileLog, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Generator, Iterable

from gitfilelog.appconsts import *
from gitfilelog.commitfilter import CommitFilter, normalizeFilter
from gitfilelog.commitlog import commitRange, queryCommits
from gitfilelog.historyentry import FileHistoryEntry
from gitfilelog.porcelain import *

_logger = logging.getLogger(__name__)


class FileHistory:
    """
    A file's history of relevant commits or blobs, following renames.

    Relevant commits are those in which the file was created, changed, or
    renamed. Merge commits are never relevant. Renames are only followed
    across single-parent commits.

    Nothing is computed until you iterate over `relevantCommits()` or
    `relevantBlobs()`. Each call walks the history from scratch.
    """

    repo: Repository
    queryFilter: CommitFilter
    path: str
    exactRenamesOnly: bool

    @staticmethod
    def dummyProgressCallback(n: int):
        pass

    def __init__(
            self,
            repo: Repository,
            path: str,
            queryFilter: CommitFilter | None = None,
            *,
            exactRenamesOnly: bool = False,
            progressCallback: Callable[[int], None] | None = None,
    ):
        if not isinstance(repo, Repository):
            raise TypeError(f"repo must be a Repository, not {type(repo).__name__}")
        if not isinstance(path, str):
            raise TypeError(f"path must be a str, not {type(path).__name__}")
        if not path:
            raise ValueError("path must not be empty")
        if queryFilter is None:
            queryFilter = CommitFilter()

        self.repo = repo
        self.path = path
        self.queryFilter = normalizeFilter(queryFilter)
        self.exactRenamesOnly = exactRenamesOnly
        self.progressCallback = progressCallback or FileHistory.dummyProgressCallback

    def __repr__(self):
        return f"FileHistory({self.path!r}, {self.queryFilter})"

    def __iter__(self):
        return self.relevantCommits()

    def relevantCommits(self) -> Generator[FileHistoryEntry, None, None]:
        """
        Produce the file's history entries, newest first.

        Each entry carries the path that the file had at that point in
        history, so entries past a rename report the file's old name.
        """

        queryFilter = self.queryFilter
        path = self.path
        visitedBounds: set[Oid] = set()
        numEntries = 0
        numRuns = 0
        timeStart = time.perf_counter()

        while True:
            commits = commitRange(queryCommits(self.repo, queryFilter), path)
            if not commits:
                break

            if APP_DEBUG:
                assert len({c.id for c in commits}) == len(commits), "commit range visits a commit twice"

            numRuns += 1
            numEntries += len(commits)
            for commit in commits:
                yield FileHistoryEntry(path, commit)
            self.progressCallback(numEntries)

            # See if the file was renamed in the oldest commit of this run.
            # Root commits and merge commits are dead ends.
            oldestCommit = commits[-1]
            if len(oldestCommit.parent_ids) != 1:
                break

            parentCommit = oldestCommit.parents[0]
            oldPath = self._findRenameSource(parentCommit, oldestCommit, path)
            if not oldPath:
                break

            _logger.debug(f"{id7(oldestCommit)} renamed {oldPath} -> {path}")

            # Keep walking from the parent commit, under the file's old name.
            assert parentCommit.id not in visitedBounds, f"file history isn't making progress at {id7(parentCommit)}"
            visitedBounds.add(parentCommit.id)
            queryFilter = normalizeFilter(queryFilter, since=parentCommit)
            path = oldPath

        timeTaken = int(1000 * (time.perf_counter() - timeStart))
        _logger.debug(f"{self.path}: {numEntries} relevant commits, {numRuns} names ({timeTaken} ms)")

    def relevantBlobs(self) -> Generator[Blob, None, None]:
        """
        Produce the successive contents of the file, newest first, skipping
        commits in which the file was only renamed.
        """
        return relevantBlobs(self.relevantCommits())

    def _findRenameSource(self, parentCommit: Commit, commit: Commit, path: str) -> str:
        """
        Return the path that the file at `path` in `commit` had in
        `parentCommit`, if `commit` renamed it. Otherwise, return "".
        """

        treeBelow = parentCommit.tree
        treeAbove = commit.tree

        # A rename implies that the path is new in this commit.
        if lookupEntry(treeBelow, path) is not None:
            return ""

        blobId = treeAbove[path].id
        diff: Diff = treeBelow.diff_to_tree(treeAbove)

        # If we're lucky, the commit has renamed the file without modifying it.
        # (This lets us bypass find_similar and save a ton of time.)
        adds, dels = 0, 0
        delta: DiffDelta
        for delta in diff.deltas:
            if delta.status == DeltaStatus.DELETED:
                dels += 1
                if delta.old_file.id == blobId:
                    return delta.old_file.path
            elif delta.status == DeltaStatus.ADDED:
                adds += 1

        # For a rename to occur, we need at least an add and a del.
        if self.exactRenamesOnly or adds == 0 or dels == 0:
            return ""

        # Fall back to find_similar. Slow!
        diff.find_similar(DiffFind.FIND_RENAMES)
        for delta in diff.deltas:
            if delta.status == DeltaStatus.RENAMED and delta.new_file.path == path:
                return delta.old_file.path

        return ""


def relevantBlobs(history: Iterable[FileHistoryEntry]) -> Generator[Blob, None, None]:
    """
    Map history entries to the distinct file contents they point to.

    Consecutive entries that point to the same blob (typically a rename that
    didn't touch the file's contents) only produce the blob once.
    """

    lastBlobId = NULL_OID

    for entry in history:
        blob = entry.target
        if not isinstance(blob, Blob) or blob.id == lastBlobId:
            continue
        lastBlobId = blob.id
        yield blob


def getFileHistory(repo: Repository, path: str, queryFilter: CommitFilter | None = None) -> FileHistory:
    return FileHistory(repo, path, queryFilter)


def fileHistory(repo: Repository, path: str, queryFilter: CommitFilter | None = None) -> Generator[FileHistoryEntry, None, None]:
    """
    Shorthand for `FileHistory(repo, path, queryFilter).relevantCommits()`.
    Arguments are checked right away, even though the history is produced lazily.
    """
    return FileHistory(repo, path, queryFilter).relevantCommits()
