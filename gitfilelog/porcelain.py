# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitFileLog, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

"""
Thin layer over pygit2.

Everything GitFileLog needs from the object store goes through the names
exported here, so the rest of the package can just `import *` this module.
"""

from __future__ import annotations as _annotations

from os import PathLike as _PathLike

from pygit2 import (
    Blob,
    Commit,
    Diff,
    DiffDelta,
    GitError,
    Object,
    Oid,
    Repository,
    Signature,
    Tree,
    Walker,
)
from pygit2.enums import (
    DeltaStatus,
    DiffFind,
    FileMode,
    RepositoryOpenFlag,
    SortMode,
)

NULL_OID = Oid(raw=b"\x00" * 20)

CommitRef = Commit | Oid | str
"""
Anything that can be peeled to a commit: a Commit, its Oid, or a revspec
such as "HEAD~2", "master" or a (possibly abbreviated) hex hash.
"""


def id7(obj: Oid | Object | None) -> str:
    """ Abbreviated hash for display and logging. """
    if obj is None:
        return "(none)"
    if isinstance(obj, Object):
        obj = obj.id
    return str(obj)[:7]


def lookupEntry(tree: Tree, path: str) -> Object | None:
    """
    Resolve a slash-separated path through nested subtrees.
    Return None if the path doesn't exist in this tree.
    """
    try:
        return tree[path]
    except KeyError:
        return None


def peelCommit(repo: Repository, ref: CommitRef) -> Commit:
    if isinstance(ref, Commit):
        return ref
    elif isinstance(ref, Oid):
        return repo[ref].peel(Commit)
    elif isinstance(ref, str):
        return repo.revparse_single(ref).peel(Commit)
    else:
        raise TypeError(f"can't peel {type(ref).__name__} to a commit")


class Repo(Repository):
    def peelCommit(self, ref: CommitRef) -> Commit:
        return peelCommit(self, ref)

    def fileHistory(self, path: str, queryFilter=None):
        """
        Get the history of the file at `path` (relative to the repository's
        root), following renames. See `gitfilelog.filehistory.FileHistory`.
        """
        from gitfilelog.filehistory import FileHistory
        return FileHistory(self, path, queryFilter)


class RepoContext:
    """
    Open a repository for the duration of a `with` block, then free it
    so that libgit2 lets go of its file handles.
    """

    def __init__(self, repoOrPath: Repo | str | _PathLike, flags=RepositoryOpenFlag.NO_SEARCH):
        if isinstance(repoOrPath, Repository):
            self.repo = repoOrPath
        else:
            self.repo = Repo(repoOrPath, flags)

    def __enter__(self) -> Repo:
        return self.repo

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.repo.free()
