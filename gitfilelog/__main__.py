# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitFileLog, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

from __future__ import annotations as _annotations

import logging as _logging
import sys as _sys
from contextlib import suppress
from pathlib import Path

from gitfilelog.appconsts import APP_DISPLAY_NAME, APP_VERSION
from gitfilelog.commitfilter import CommitFilter
from gitfilelog.filehistory import FileHistory
from gitfilelog.porcelain import *


def fileLogCommandLineTool(argv=None):
    from argparse import ArgumentParser
    from pygit2 import discover_repository

    parser = ArgumentParser(description=f"{APP_DISPLAY_NAME} {APP_VERSION}: list the commits that changed a file, following renames")
    parser.add_argument("path", help="File path")
    parser.add_argument("-C", "--repo", action="store", default="", help="Repository (default: discovered from the file's location)")
    parser.add_argument("--since", action="store", default=None, help="Start walking from this revision (default: HEAD)")
    parser.add_argument("--until", action="store", default=None, help="Exclude commits reachable from this revision")
    parser.add_argument("--topo", action="store_true", help="Topological order instead of chronological order")
    parser.add_argument("--first-parent", action="store_true", help="Follow first parents only")
    parser.add_argument("--exact-renames", action="store_true", help="Only follow renames that don't change the file's contents")
    parser.add_argument("-b", "--blobs", action="store_true", help="Print the file's successive blobs instead of commits")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args(argv)

    _logging.basicConfig(
        stream=_sys.stderr,
        level=_logging.DEBUG if args.verbose else _logging.WARNING,
        format='%(levelname).1s %(asctime)s %(filename)-16s | %(message)s',
        datefmt="%H:%M:%S")
    _logging.captureWarnings(True)

    repoPath = args.repo or discover_repository(str(Path(args.path).resolve().parent))
    if not repoPath:
        parser.error(f"{args.path} isn't in a git repository")

    with RepoContext(repoPath, flags=RepositoryOpenFlag.DEFAULT) as repo:
        relPath = Path(args.path)
        if repo.workdir:
            with suppress(ValueError):
                relPath = relPath.resolve().relative_to(Path(repo.workdir).resolve())

        queryFilter = CommitFilter(
            sortBy=SortMode.TOPOLOGICAL if args.topo else SortMode.TIME,
            since=args.since,
            until=args.until,
            firstParentOnly=args.first_parent)

        history = FileHistory(repo, relPath.as_posix(), queryFilter, exactRenamesOnly=args.exact_renames)

        if args.blobs:
            for blob in history.relevantBlobs():
                print(f"{id7(blob)} {blob.size:8d}")
        else:
            for entry in history.relevantCommits():
                summary = entry.commit.message.split("\n", 1)[0]
                print(f"{id7(entry.commit)} {entry.path:30} {summary}")

    return 0


if __name__ == '__main__':
    _sys.exit(fileLogCommandLineTool())
