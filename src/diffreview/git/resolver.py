"""Diff resolver — runs git, parses the output and loads whole-file contents."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Optional, Sequence

from diffreview.git import adapter
from diffreview.git.diff_parser import DiffParser
from diffreview.git.models import ParsedDiff

logger = logging.getLogger(__name__)


class DiffResolver:
    """Produce a fully populated ParsedDiff for a ref range or the index."""

    def __init__(
        self,
        repo_root: Path,
        *,
        context_lines: int = 5,
        parser: Optional[DiffParser] = None,
    ) -> None:
        self.repo_root = repo_root
        self.context_lines = context_lines
        self._parser = parser or DiffParser()

    def resolve(
        self, base: str = "main", head: str = "HEAD", paths: Sequence[str] = ()
    ) -> ParsedDiff:
        """Diff *base* against *head*."""
        text = adapter.get_diff(
            self.repo_root, base, head, paths, context_lines=self.context_lines
        )
        diff = self._parser.parse(text)
        logger.info("Parsed %d changed file(s) between %s and %s", diff.file_count, base, head)
        return self._load_contents(
            diff,
            base,
            lambda path: adapter.get_file_content(self.repo_root, head, path),
        ).with_refs(base, head)

    def resolve_staged(self, base: str = "HEAD", paths: Sequence[str] = ()) -> ParsedDiff:
        """Diff the index against *base*."""
        text = adapter.get_staged_diff(
            self.repo_root, base, paths, context_lines=self.context_lines
        )
        diff = self._parser.parse(text)
        logger.info("Parsed %d staged file(s) against %s", diff.file_count, base)
        return self._load_contents(
            diff,
            base,
            lambda path: adapter.get_staged_file_content(self.repo_root, path),
        ).with_refs(base, "staged")

    def _load_contents(
        self,
        diff: ParsedDiff,
        base: str,
        read_new: Callable[[str], Optional[str]],
    ) -> ParsedDiff:
        files = []
        for f in diff.files:
            old_content: Optional[str] = None
            new_content: Optional[str] = None
            if not f.is_added():
                old_content = adapter.get_file_content(
                    self.repo_root, base, f.old_path or f.path
                )
            if not f.is_deleted():
                new_content = read_new(f.path)
            files.append(f.with_contents(old_content, new_content))
        return diff.with_files(tuple(files))
