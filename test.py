#!/usr/bin/env python3
# -----------------------------------------------------------------------------
# Copyright (C) 2025 Iliyas Jorio.
# This file is part of GitFileLog, distributed under the GNU GPL v3.
# For full terms, see the included LICENSE file.
# -----------------------------------------------------------------------------

import argparse
import os
import sys
from pathlib import Path

import pytest


def run():
    thisFile = Path(__file__)
    os.chdir(thisFile.parent)

    parser = argparse.ArgumentParser(description="Kick off GitFileLog test suite",
                                     epilog="Additional arguments are forwarded to pytest (see: pytest --help).")
    parser.add_argument("--cov", action="store_true", help="produce coverage report")
    parser.add_argument("-1", dest="single", action="store_true", help="run a single test at a time (no parallel tests)")
    args, forwardArgs = parser.parse_known_args()

    os.environ["APP_TESTMODE"] = "1"

    if not args.single:
        forwardArgs = ["-n", "auto"] + forwardArgs

    if args.cov:
        forwardArgs = ["--cov=gitfilelog", "--cov-report=term", "--cov-report=html"] + forwardArgs

    exitCode = pytest.main(forwardArgs)
    sys.exit(exitCode)


if __name__ == '__main__':
    run()
