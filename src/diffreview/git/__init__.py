"""Git interface layer — diff parsing, models, subprocess adapter."""

from diffreview.git.adapter import (
    GitError,
    get_current_branch,
    get_diff,
    get_file_content,
    get_merge_base,
    get_repo_root,
    get_staged_diff,
    get_staged_file_content,
    has_staged_changes,
    ref_exists,
)
from diffreview.git.diff_parser import DiffParser, count_file_markers, parse
from diffreview.git.models import (
    AddedLine,
    ContextLine,
    DiffLine,
    FileChange,
    FileStatus,
    Hunk,
    LineKind,
    ParsedDiff,
    RemovedLine,
    Side,
)
from diffreview.git.resolver import DiffResolver

__all__ = [
    "AddedLine",
    "ContextLine",
    "DiffLine",
    "DiffParser",
    "DiffResolver",
    "FileChange",
    "FileStatus",
    "GitError",
    "Hunk",
    "LineKind",
    "ParsedDiff",
    "RemovedLine",
    "Side",
    "count_file_markers",
    "get_current_branch",
    "get_diff",
    "get_file_content",
    "get_merge_base",
    "get_repo_root",
    "get_staged_diff",
    "get_staged_file_content",
    "has_staged_changes",
    "parse",
    "ref_exists",
]
