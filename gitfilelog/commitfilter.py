# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitFileLog, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Sequence

from gitfilelog.porcelain import *

_logger = logging.getLogger(__name__)

DEFAULT_SORT_STRATEGY = SortMode.TIME

ALLOWED_SORT_STRATEGIES = (SortMode.TOPOLOGICAL, SortMode.TIME)
"""
Sort strategies that keep the commit log newest-first, which the file history
relies on (the last commit of a range must be its oldest).
Combinations such as TOPOLOGICAL|TIME or anything involving REVERSE aren't
allowed.
"""


@dataclasses.dataclass(frozen=True)
class CommitFilter:
    """
    How to walk the commit log.

    `since` is where the walk starts: a commit (or sequence of commits) whose
    ancestry is included. None means HEAD.

    `until` is a commit (or sequence of commits) whose ancestry is excluded
    from the walk. None means walk all the way down to the root commits.
    """

    sortBy: SortMode = DEFAULT_SORT_STRATEGY
    since: CommitRef | Sequence[CommitRef] | None = None
    until: CommitRef | Sequence[CommitRef] | None = None
    firstParentOnly: bool = False


def normalizeFilter(baseFilter: CommitFilter, since: CommitRef | None = None) -> CommitFilter:
    """
    Make a copy of `baseFilter` that's safe to use for file history.

    Unsupported sort strategies are silently replaced with the default
    (chronological) strategy. If `since` is given, it replaces the base
    filter's starting point.
    """

    if not isinstance(baseFilter, CommitFilter):
        raise TypeError(f"expected CommitFilter, got {type(baseFilter).__name__}")

    sortBy = baseFilter.sortBy
    if sortBy not in ALLOWED_SORT_STRATEGIES:
        _logger.debug(f"Unsupported sort strategy {sortBy!r} for file history, using {DEFAULT_SORT_STRATEGY!r}")
        sortBy = DEFAULT_SORT_STRATEGY

    return CommitFilter(
        sortBy=sortBy,
        since=since if since is not None else baseFilter.since,
        until=baseFilter.until,
        firstParentOnly=baseFilter.firstParentOnly,
    )
