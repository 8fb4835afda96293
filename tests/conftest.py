"""Shared test fixtures — sample diffs and temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def sample_diff_addition() -> str:
    """A single hunk with one added line between two context lines."""
    return textwrap.dedent("""\
        --- a/f.txt
        +++ b/f.txt
        @@ -1,2 +1,3 @@
         line1
        +line2
         line3
    """)


@pytest.fixture
def sample_diff_modified() -> str:
    """A hunk replacing one line, with surrounding context."""
    return textwrap.dedent("""\
        diff --git a/app.py b/app.py
        index 1234567..abcdef0 100644
        --- a/app.py
        +++ b/app.py
        @@ -10,3 +10,3 @@ def main():
             setup()
        -    run("the quick fox")
        +    run("the slow fox")
             teardown()
    """)


@pytest.fixture
def sample_diff_new_file() -> str:
    """The synthesized diff shape used for untracked files."""
    return "--- /dev/null\n+++ b/new.txt\n@@ -0,0 +1,2 @@\n+a\n+b"


@pytest.fixture
def sample_diff_deleted_file() -> str:
    return textwrap.dedent("""\
        diff --git a/old.py b/old.py
        deleted file mode 100644
        index abc..000 100644
        --- a/old.py
        +++ /dev/null
        @@ -1,3 +0,0 @@
        -line one
        -line two
        -line three
    """)


@pytest.fixture
def sample_diff_uneven_block() -> str:
    """Three deletes replaced by one add, then a pure addition after context."""
    return textwrap.dedent("""\
        --- a/notes.md
        +++ b/notes.md
        @@ -4,5 +4,4 @@
         intro
        -alpha
        -beta
        -gamma
        +ALPHA
         middle
        +tail
    """)


@pytest.fixture
def sample_diff_two_hunks() -> str:
    return textwrap.dedent("""\
        --- a/lib.py
        +++ b/lib.py
        @@ -1,3 +1,3 @@
         import os
        -import sys
        +import re
         import json
        @@ -20,2 +20,3 @@ class Loader:
             pass
        +    # loaded
             return
    """)


@pytest.fixture
def sample_diff_no_newline() -> str:
    """A diff with 'No newline at end of file' marker."""
    return textwrap.dedent("""\
        --- a/data.txt
        +++ b/data.txt
        @@ -1 +1 @@
        -old last line
        \\ No newline at end of file
        +new last line
        \\ No newline at end of file
    """)


@pytest.fixture
def sample_diff_multi_file(sample_diff_modified, sample_diff_deleted_file) -> str:
    return sample_diff_modified + sample_diff_deleted_file


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, capture_output=True, check=True)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository with one committed file."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    _git(tmp_path, "config", "user.email", "test@test.com")
    _git(tmp_path, "config", "user.name", "Test")
    _git(tmp_path, "config", "commit.gpgsign", "false")
    (tmp_path / "README.md").write_text("# Test\n")
    (tmp_path / "obsolete.txt").write_text("remove me\n")
    _git(tmp_path, "add", ".")
    _git(tmp_path, "commit", "-m", "init")
    return tmp_path
