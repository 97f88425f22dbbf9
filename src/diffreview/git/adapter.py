"""Git subprocess wrapper — ref diffs, staged diffs, file contents."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Optional, Sequence

logger = logging.getLogger(__name__)


class GitError(Exception):
    """Raised when git is unavailable or returns an unexpected error."""


def _git(args: list[str], cwd: Path, timeout: int) -> subprocess.CompletedProcess[str]:
    logger.debug("git %s", " ".join(args))
    try:
        return subprocess.run(
            ["git", *args],
            cwd=cwd,
            capture_output=True,
            text=True,
            timeout=timeout,
            encoding="utf-8",
            errors="replace",
        )
    except FileNotFoundError:
        raise GitError("git is not installed or not on PATH")
    except subprocess.TimeoutExpired:
        raise GitError(f"git command timed out after {timeout}s: git {' '.join(args)}")


def _run_git(args: list[str], cwd: Path, timeout: int = 30) -> str:
    """Run a git command and return stdout. Raises GitError on failure."""
    result = _git(args, cwd, timeout)
    if result.returncode != 0:
        raise GitError(f"git error: {result.stderr.strip() or 'exit code ' + str(result.returncode)}")
    return result.stdout


def _try_git(args: list[str], cwd: Path, timeout: int = 30) -> Optional[str]:
    """Like _run_git, but return None instead of raising on a non-zero exit."""
    result = _git(args, cwd, timeout)
    if result.returncode != 0:
        return None
    return result.stdout


def _with_paths(args: list[str], paths: Sequence[str]) -> list[str]:
    if paths:
        return [*args, "--", *paths]
    return args


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Return the root of the current git repository."""
    cwd = cwd or Path.cwd()
    out = _run_git(["rev-parse", "--show-toplevel"], cwd=cwd)
    return Path(out.strip())


def get_diff(
    repo_root: Path,
    base: str,
    head: str,
    paths: Sequence[str] = (),
    context_lines: int = 5,
) -> str:
    """Return the unified diff between two refs.

    Tries ``base...head`` (changes since the merge base) first and falls back
    to a direct ``base..head`` comparison.
    """
    unified = f"--unified={context_lines}"
    args = _with_paths(["diff", unified, "--no-color", f"{base}...{head}"], paths)
    out = _try_git(args, repo_root, timeout=60)
    if out is not None:
        return out

    logger.info("Three-dot diff %s...%s failed, retrying with two dots", base, head)
    args = _with_paths(["diff", unified, "--no-color", f"{base}..{head}"], paths)
    return _run_git(args, repo_root, timeout=60)


def get_staged_diff(
    repo_root: Path,
    base: str = "HEAD",
    paths: Sequence[str] = (),
    context_lines: int = 5,
) -> str:
    """Return the unified diff of staged changes (--cached) against *base*."""
    args = _with_paths(
        ["diff", "--cached", f"--unified={context_lines}", "--no-color", base],
        paths,
    )
    return _run_git(args, repo_root, timeout=60)


def get_file_content(repo_root: Path, ref: str, path: str) -> Optional[str]:
    """Return *path* as it exists at *ref*, or None if it does not."""
    return _try_git(["show", f"{ref}:{path}"], repo_root)


def get_staged_file_content(repo_root: Path, path: str) -> Optional[str]:
    """Return *path* as it exists in the index, or None."""
    return _try_git(["show", f":{path}"], repo_root)


def has_staged_changes(repo_root: Path) -> bool:
    # --quiet exits 1 when there are differences
    return _git(["diff", "--cached", "--quiet"], repo_root, 30).returncode == 1


def get_merge_base(repo_root: Path, ref1: str, ref2: str) -> Optional[str]:
    out = _try_git(["merge-base", ref1, ref2], repo_root)
    return out.strip() if out is not None else None


def ref_exists(repo_root: Path, ref: str) -> bool:
    return _try_git(["rev-parse", "--verify", "--quiet", ref], repo_root) is not None


def get_current_branch(repo_root: Path) -> Optional[str]:
    """Return the checked-out branch name, or None on a detached HEAD."""
    out = _try_git(["rev-parse", "--abbrev-ref", "HEAD"], repo_root)
    if out is None:
        return None
    branch = out.strip()
    return None if branch == "HEAD" else branch
