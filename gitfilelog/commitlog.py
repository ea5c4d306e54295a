# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitFileLog, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator, Sequence

from gitfilelog.commitfilter import CommitFilter
from gitfilelog.porcelain import *

_logger = logging.getLogger(__name__)


def _tipList(refs: CommitRef | Sequence[CommitRef] | None) -> list[CommitRef]:
    if refs is None:
        return []
    if isinstance(refs, Commit | Oid | str):
        return [refs]
    return list(refs)


def queryCommits(repo: Repository, queryFilter: CommitFilter) -> Iterator[Commit]:
    """
    Walk the commit log as described by `queryFilter`.

    The walker is set up right away (so that bad revspecs blow up here), but
    commits are only produced as the caller consumes them.
    """

    sinceTips = _tipList(queryFilter.since)
    untilTips = _tipList(queryFilter.until)

    if not sinceTips:
        if repo.head_is_unborn:
            # Nothing to walk in an empty repository
            return iter(())
        sinceTips = ["HEAD"]

    pushIds = [peelCommit(repo, ref).id for ref in sinceTips]
    hideIds = [peelCommit(repo, ref).id for ref in untilTips]

    walker: Walker = repo.walk(pushIds[0], queryFilter.sortBy)
    for oid in pushIds[1:]:
        walker.push(oid)
    for oid in hideIds:
        walker.hide(oid)
    if queryFilter.firstParentOnly:
        walker.simplify_first_parent()

    return walker


def isRootCommit(commit: Commit) -> bool:
    return not commit.parent_ids


def isMergeCommit(commit: Commit) -> bool:
    return len(commit.parent_ids) > 1


def isFileNewOrChanged(commit: Commit, path: str, entry: Object | None = None) -> bool:
    """
    True if `path` is absent from the commit's parents, or if it points to
    a different object there. `entry` is the object at `path` in the commit's
    own tree, if you've already looked it up.
    """

    if entry is None:
        entry = lookupEntry(commit.tree, path)
        assert entry is not None, f"{path} isn't in {id7(commit)}"

    for parent in commit.parents:
        parentEntry = lookupEntry(parent.tree, path)
        if parentEntry is not None and parentEntry.id == entry.id:
            return False
    return True


def commitRange(commits: Iterable[Commit], path: str) -> list[Commit]:
    """
    Cut the run of commits in which `path` was created or changed, newest first.

    Commits are consumed for as long as `path` exists in their trees. The run
    ends for good at the first commit that doesn't have `path`, even if the
    path shows up again further down the log.

    Merge commits are never part of the run, even if they changed the file.
    """

    relevant = []
    numVisited = 0

    for commit in commits:
        entry = lookupEntry(commit.tree, path)
        if entry is None:
            break
        numVisited += 1

        if isRootCommit(commit):
            relevant.append(commit)
        elif not isMergeCommit(commit) and isFileNewOrChanged(commit, path, entry):
            relevant.append(commit)

    _logger.debug(f"{path}: {numVisited} commits visited, {len(relevant)} were relevant")
    return relevant
