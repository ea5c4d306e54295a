# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitFileLog, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations

import hashlib

import pygit2
import pytest

from gitfilelog.porcelain import *

TEST_SIGNATURE = Signature("Test Person", "toto@example.com", 1672600000, 0)


class RepoBuilder:
    """
    Grow a repository one commit at a time without touching the workdir.

    Every new commit becomes the tip of `master` (and therefore HEAD), and
    commit times increase by one minute per commit unless told otherwise.
    """

    def __init__(self, path: str):
        pygit2.init_repository(path, initial_head="master").free()
        self.repo = Repo(path)
        self.clock = TEST_SIGNATURE.time
        self.head: Commit | None = None

    def __enter__(self) -> RepoBuilder:
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.repo.free()

    def commit(
            self,
            message: str,
            changes: dict[str, str | None] | None = None,
            moves: dict[str, str] | None = None,
            parents: list[Commit] | None = None,
            when: int = 0,
    ) -> Commit:
        """
        `changes` maps paths to their new text contents (None deletes the path).
        `moves` maps old paths to new paths. Moves are applied before changes.
        The index is seeded from the first parent's tree.
        """

        repo = self.repo

        if parents is None:
            parents = [self.head] if self.head is not None else []

        index = pygit2.Index()
        if parents:
            index.read_tree(parents[0].tree)

        for oldPath, newPath in (moves or {}).items():
            entry = index[oldPath]
            index.remove(oldPath)
            index.add(pygit2.IndexEntry(newPath, entry.id, entry.mode))

        for path, text in (changes or {}).items():
            if text is None:
                index.remove(path)
            else:
                blobId = repo.create_blob(text.encode("utf-8"))
                index.add(pygit2.IndexEntry(path, blobId, FileMode.BLOB))

        treeId = index.write_tree(repo)

        if not when:
            self.clock += 60
            when = self.clock
        sig = Signature(TEST_SIGNATURE.name, TEST_SIGNATURE.email, when, 0)

        oid = repo.create_commit(None, sig, sig, message, treeId, [p.id for p in parents])
        repo.references.create("refs/heads/master", oid, force=True)

        self.head = repo[oid].peel(Commit)
        return self.head

    def change(self, path: str, text: str, **kwargs) -> Commit:
        return self.commit(f"Changed {path}", {path: text}, **kwargs)

    def move(self, oldPath: str, newPath: str, text: str | None = None) -> Commit:
        changes = {newPath: text} if text is not None else None
        return self.commit(f"Moved {oldPath} to {newPath}", changes, moves={oldPath: newPath})


class MockBlob:
    def __init__(self, data: str):
        self.data = data.encode()
        realHash = hashlib.sha1(f'blob {len(self.data)}'.encode() + b'\0' + self.data)
        self.id = Oid(hex=realHash.hexdigest())


class MockTree(dict):
    pass


class MockCommit:
    def __init__(self, name: str, parents: list[MockCommit]):
        self.id = Oid(hex=hashlib.sha1(name.encode()).hexdigest())
        self.name = name
        self.parents = parents
        self.parent_ids = [p.id for p in parents]
        self.tree = MockTree()

    def __repr__(self):
        return self.name


def makeLinearMockHistory(textGraph: str, blobDefs: str, path: str) -> list[MockCommit]:
    """
    Build a chain of mock commits from a definition such as "a-b-c", newest
    first. `blobDefs` gives the file's contents at each commit; an underscore
    means that the path does not exist in that commit's tree.
    """

    names = textGraph.split("-")
    blobTexts = blobDefs.split()

    sequence: list[MockCommit] = []
    parent = []
    for name, blobText in reversed(list(zip(names, blobTexts, strict=True))):
        commit = MockCommit(name, parent)
        if blobText != "_":
            commit.tree[path] = MockBlob(blobText)
        sequence.insert(0, commit)
        parent = [commit]

    return sequence

