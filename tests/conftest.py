"""Shared test fixtures — sample diffs and temp git repos."""

from __future__ import annotations

import subprocess
import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def sample_diff_modified() -> str:
    """A single-hunk modification."""
    return textwrap.dedent("""\
        diff --git a/src/Example.php b/src/Example.php
        index 1234567..abcdefg 100644
        --- a/src/Example.php
        +++ b/src/Example.php
        @@ -1,6 +1,7 @@
         <?php

         class Example
         {
        -    public function old(): void {}
        +    public function new(): void {}
        +    public function added(): void {}
         }
    """)


@pytest.fixture
def sample_diff_hunk_lines() -> str:
    """Context, blank context, remove, add, context."""
    return textwrap.dedent("""\
        diff --git a/src/Example.php b/src/Example.php
        index 1234567..abcdefg 100644
        --- a/src/Example.php
        +++ b/src/Example.php
        @@ -1,4 +1,4 @@
         <?php

        -class Old {}
        +class New {}
         // end
    """)


@pytest.fixture
def sample_diff_added() -> str:
    """A diff that adds a new file."""
    return textwrap.dedent("""\
        diff --git a/src/NewFile.php b/src/NewFile.php
        new file mode 100644
        index 0000000..1234567
        --- /dev/null
        +++ b/src/NewFile.php
        @@ -0,0 +1,5 @@
        +<?php
        +
        +class NewFile
        +{
        +}
    """)


@pytest.fixture
def sample_diff_deleted() -> str:
    """A diff that deletes a file."""
    return textwrap.dedent("""\
        diff --git a/src/OldFile.php b/src/OldFile.php
        deleted file mode 100644
        index 1234567..0000000
        --- a/src/OldFile.php
        +++ /dev/null
        @@ -1,5 +0,0 @@
        -<?php
        -
        -class OldFile
        -{
        -}
    """)


@pytest.fixture
def sample_diff_rename() -> str:
    """A diff with a renamed and edited file."""
    return textwrap.dedent("""\
        diff --git a/src/OldName.php b/src/NewName.php
        similarity index 95%
        rename from src/OldName.php
        rename to src/NewName.php
        index 1234567..abcdefg 100644
        --- a/src/OldName.php
        +++ b/src/NewName.php
        @@ -1,3 +1,3 @@
         <?php

        -class OldName {}
        +class NewName {}
    """)


@pytest.fixture
def sample_diff_multiple() -> str:
    """Two files: one modified, one added."""
    return textwrap.dedent("""\
        diff --git a/src/FileA.php b/src/FileA.php
        index 1234567..abcdefg 100644
        --- a/src/FileA.php
        +++ b/src/FileA.php
        @@ -1,3 +1,3 @@
         <?php
        -// old comment
        +// new comment
         class FileA {}
        diff --git a/src/FileB.php b/src/FileB.php
        new file mode 100644
        index 0000000..1234567
        --- /dev/null
        +++ b/src/FileB.php
        @@ -0,0 +1,2 @@
        +<?php
        +class FileB {}
    """)


@pytest.fixture
def sample_diff_binary() -> str:
    """A diff with a binary file."""
    return textwrap.dedent("""\
        diff --git a/image.png b/image.png
        new file mode 100644
        index 0000000..abc1234
        Binary files /dev/null and b/image.png differ
    """)


@pytest.fixture
def sample_diff_no_newline() -> str:
    """A diff with 'No newline at end of file' markers."""
    return textwrap.dedent("""\
        diff --git a/data.txt b/data.txt
        index 1234567..abcdefg 100644
        --- a/data.txt
        +++ b/data.txt
        @@ -1 +1 @@
        -old last line
        \\ No newline at end of file
        +new last line
        \\ No newline at end of file
    """)


def _git(repo: Path, *args: str) -> None:
    subprocess.run(["git", *args], cwd=repo, capture_output=True, check=True)


@pytest.fixture
def tmp_git_repo(tmp_path: Path) -> Path:
    """Create a temporary git repository on branch ``main`` with one commit."""
    subprocess.run(["git", "init", str(tmp_path)], capture_output=True, check=True)
    _git(tmp_path, "symbolic-ref", "HEAD", "refs/heads/main")
    _git(tmp_path, "config", "user.email", "test@test.com")
    _git(tmp_path, "config", "user.name", "Test")
    _git(tmp_path, "config", "commit.gpgsign", "false")
    (tmp_path / "README.md").write_text("# Test\n")
    (tmp_path / "app.py").write_text("def main():\n    return 1\n")
    (tmp_path / "legacy.py").write_text("OLD = True\n")
    _git(tmp_path, "add", ".")
    _git(tmp_path, "commit", "-m", "init")
    return tmp_path


@pytest.fixture
def feature_branch_repo(tmp_git_repo: Path) -> Path:
    """tmp_git_repo plus a ``feature`` branch touching every file status."""
    repo = tmp_git_repo
    _git(repo, "checkout", "-b", "feature")
    (repo / "app.py").write_text("def main():\n    return 2\n")
    (repo / "new_module.py").write_text("VALUE = 42\n")
    _git(repo, "rm", "-q", "legacy.py")
    _git(repo, "add", ".")
    _git(repo, "commit", "-m", "feature work")
    return repo
