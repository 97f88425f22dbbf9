"""Unified diff parser — turns ``git diff`` output into a ParsedDiff.

The parser is lenient: a chunk whose ``diff --git`` header cannot be read is
dropped, and body lines it does not recognise (``\\ No newline at end of
file``, ``Binary files ... differ``) are skipped. It never raises on
malformed input.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Sequence, Tuple

from diffreview.git.models import (
    AddedLine,
    ContextLine,
    DiffLine,
    FileChange,
    FileStatus,
    Hunk,
    ParsedDiff,
    RemovedLine,
)

logger = logging.getLogger(__name__)

# --- Regex patterns for diff parsing ---

_FILE_MARKER_RE = re.compile(r"^diff --git ", re.MULTILINE)
# Prefixes: a/b (commits), c/i (cached/index), w (working tree)
_PATHS_RE = re.compile(r"^[a-z]/(.+?) [a-z]/(.+)$")
_HUNK_HEADER_RE = re.compile(
    r"^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@", re.ASCII
)
# Only these are trimmed around a chunk; form feeds and NBSP are line content
_CHUNK_WHITESPACE = " \t\n\r\0\x0b"

_STATUS_MARKERS: Tuple[Tuple[str, FileStatus], ...] = (
    ("new file mode", FileStatus.ADDED),
    ("deleted file mode", FileStatus.DELETED),
    ("similarity index", FileStatus.RENAMED),
    ("rename from", FileStatus.RENAMED),
)


def count_file_markers(diff_text: str) -> int:
    """Number of ``diff --git`` markers in *diff_text*.

    Callers wanting strict validation compare this with ``len(parse(text))``.
    """
    return len(_FILE_MARKER_RE.findall(diff_text))


def split_by_file(diff_text: str) -> List[str]:
    """Split raw diff text into one stripped chunk per file."""
    parts = _FILE_MARKER_RE.split(diff_text)
    return [chunk for chunk in (p.strip(_CHUNK_WHITESPACE) for p in parts) if chunk]


def extract_paths(first_line: str) -> Optional[Tuple[str, str]]:
    """Return ``(old_path, new_path)`` from ``a/old b/new``, or None."""
    m = _PATHS_RE.match(first_line.rstrip("\r"))
    if m is None:
        return None
    return m.group(1), m.group(2)


def determine_status(lines: Sequence[str], old_path: str, new_path: str) -> FileStatus:
    """Work out the change status from a chunk's metadata lines."""
    for line in lines:
        for marker, status in _STATUS_MARKERS:
            if line.startswith(marker):
                return status
    # Rename without an explicit marker
    if old_path != new_path:
        return FileStatus.RENAMED
    return FileStatus.MODIFIED


def classify_line(line: str, old_no: int, new_no: int) -> Tuple[Optional[DiffLine], int, int]:
    """Classify one hunk body line.

    Returns ``(line_or_none, next_old_no, next_new_no)``. Unrecognised lines
    yield None and leave both cursors where they were.
    """
    if line.startswith("+"):
        return AddedLine(content=line[1:], new_line_no=new_no), old_no, new_no + 1
    if line.startswith("-"):
        return RemovedLine(content=line[1:], old_line_no=old_no), old_no + 1, new_no
    if line == "" or line.startswith(" "):
        return (
            ContextLine(content=line[1:], old_line_no=old_no, new_line_no=new_no),
            old_no + 1,
            new_no + 1,
        )
    return None, old_no, new_no


def _parse_hunk_header(line: str) -> Optional[Tuple[int, int, int, int]]:
    m = _HUNK_HEADER_RE.match(line)
    if m is None:
        return None
    old_start = int(m.group(1))
    old_count = int(m.group(2)) if m.group(2) is not None else 1
    new_start = int(m.group(3))
    new_count = int(m.group(4)) if m.group(4) is not None else 1
    return old_start, old_count, new_start, new_count


def parse_hunks(lines: Sequence[str]) -> Tuple[Hunk, ...]:
    """Assemble the hunks of one file from the lines after its header line."""
    hunks: List[Hunk] = []
    header: Optional[Tuple[int, int, int, int]] = None
    body: List[DiffLine] = []
    old_no = new_no = 0

    for line in lines:
        parsed = _parse_hunk_header(line)
        if parsed is not None:
            if header is not None:
                hunks.append(Hunk(*header, lines=tuple(body)))
            header = parsed
            body = []
            old_no, new_no = parsed[0], parsed[2]
            continue

        # Metadata before the first hunk (index, mode, ---/+++)
        if header is None:
            continue

        diff_line, old_no, new_no = classify_line(line, old_no, new_no)
        if diff_line is not None:
            body.append(diff_line)

    if header is not None:
        hunks.append(Hunk(*header, lines=tuple(body)))
    return tuple(hunks)


class DiffParser:
    """Parse unified diff text into a :class:`ParsedDiff`.

    Holds no state between calls, so one instance can be shared::

        diff = DiffParser().parse(diff_text)
        for f in diff.files:
            ...
    """

    def parse(self, diff_text: str) -> ParsedDiff:
        if not diff_text.strip(_CHUNK_WHITESPACE):
            return ParsedDiff()

        files: List[FileChange] = []
        for chunk in split_by_file(diff_text):
            change = self._parse_chunk(chunk)
            if change is not None:
                files.append(change)
        return ParsedDiff(files=tuple(files))

    def _parse_chunk(self, chunk: str) -> Optional[FileChange]:
        first_line, _, rest = chunk.partition("\n")
        paths = extract_paths(first_line)
        if paths is None:
            logger.debug("Skipping diff chunk with unreadable header: %r", first_line)
            return None

        old_path, new_path = paths
        lines = rest.split("\n") if rest else []
        status = determine_status(_metadata_lines(lines), old_path, new_path)
        hunks = parse_hunks(lines)

        return FileChange(
            path=new_path,
            status=status,
            hunks=hunks,
            old_path=old_path if status is FileStatus.RENAMED and old_path != new_path else None,
        )


def _metadata_lines(lines: Sequence[str]) -> List[str]:
    """Lines before the first hunk header."""
    out: List[str] = []
    for line in lines:
        if _HUNK_HEADER_RE.match(line):
            break
        out.append(line)
    return out


def parse(diff_text: str) -> ParsedDiff:
    """Parse *diff_text*; shorthand for ``DiffParser().parse(diff_text)``."""
    return DiffParser().parse(diff_text)
