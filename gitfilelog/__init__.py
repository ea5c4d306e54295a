# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitFileLog, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
List the commits that changed a file, following the file across renames
(like `git log --follow`).

CAVEATS: Renames are not followed across merge commits. Copies are not
detected. If the file was deleted then recreated under the same name, its
history stops at the recreation.
"""

from gitfilelog.commitfilter import (
    ALLOWED_SORT_STRATEGIES,
    DEFAULT_SORT_STRATEGY,
    CommitFilter,
    normalizeFilter,
)
from gitfilelog.filehistory import (
    FileHistory,
    fileHistory,
    getFileHistory,
    relevantBlobs,
)
from gitfilelog.historyentry import FileHistoryEntry
