# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitFileLog, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import dataclasses

from gitfilelog.porcelain import *


@dataclasses.dataclass(frozen=True)
class FileHistoryEntry:
    path: str
    "The file's path relative to the repository's root, as it was in `commit`."

    commit: Commit
    "The commit in which the file was created, changed, or renamed to `path`."

    def __repr__(self):
        return f"({id7(self.commit)},{self.path})"

    @property
    def commitId(self) -> Oid:
        return self.commit.id

    @property
    def target(self) -> Object | None:
        return lookupEntry(self.commit.tree, self.path)
