"""Data models for parsed diffs.

Every object here is frozen and built once during a single parse call.
Sequences are tuples so a parsed diff can be shared freely between threads.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional, Tuple, Union


class LineKind(str, Enum):
    CONTEXT = "context"
    ADD = "add"
    REMOVE = "remove"


class FileStatus(str, Enum):
    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    RENAMED = "renamed"


class Side(str, Enum):
    """Which version of a file a line number refers to."""

    OLD = "old"
    NEW = "new"


@dataclass(frozen=True, slots=True)
class ContextLine:
    """A line present unchanged in both versions."""

    content: str
    old_line_no: int
    new_line_no: int

    @property
    def kind(self) -> LineKind:
        return LineKind.CONTEXT


@dataclass(frozen=True, slots=True)
class AddedLine:
    """A line only present in the new version."""

    content: str
    new_line_no: int

    @property
    def kind(self) -> LineKind:
        return LineKind.ADD

    @property
    def old_line_no(self) -> None:
        return None


@dataclass(frozen=True, slots=True)
class RemovedLine:
    """A line only present in the old version."""

    content: str
    old_line_no: int

    @property
    def kind(self) -> LineKind:
        return LineKind.REMOVE

    @property
    def new_line_no(self) -> None:
        return None


DiffLine = Union[ContextLine, AddedLine, RemovedLine]


def line_to_dict(line: DiffLine) -> Dict[str, Any]:
    return {
        "type": line.kind.value,
        "content": line.content,
        "old_line": line.old_line_no,
        "new_line": line.new_line_no,
    }


def _line_no(line: DiffLine, side: Side) -> Optional[int]:
    return line.old_line_no if side is Side.OLD else line.new_line_no


@dataclass(frozen=True)
class Hunk:
    """One ``@@ -a,b +c,d @@`` block and its classified lines."""

    old_start: int
    old_count: int
    new_start: int
    new_count: int
    lines: Tuple[DiffLine, ...] = ()

    @property
    def added_count(self) -> int:
        return sum(1 for ln in self.lines if ln.kind is LineKind.ADD)

    @property
    def removed_count(self) -> int:
        return sum(1 for ln in self.lines if ln.kind is LineKind.REMOVE)

    @property
    def context_count(self) -> int:
        return sum(1 for ln in self.lines if ln.kind is LineKind.CONTEXT)

    @property
    def is_consistent(self) -> bool:
        """True if the body line counts agree with the header counts."""
        return (
            self.removed_count + self.context_count == self.old_count
            and self.added_count + self.context_count == self.new_count
        )

    def find_line(self, side: Side, line_no: int) -> Optional[DiffLine]:
        for line in self.lines:
            if _line_no(line, side) == line_no:
                return line
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "old_start": self.old_start,
            "old_count": self.old_count,
            "new_start": self.new_start,
            "new_count": self.new_count,
            "lines": [line_to_dict(ln) for ln in self.lines],
        }


@dataclass(frozen=True)
class FileChange:
    """A single file appearing in a diff.

    ``old_content`` / ``new_content`` are filled in by the diff resolver,
    never by the parser.
    """

    path: str
    status: FileStatus = FileStatus.MODIFIED
    hunks: Tuple[Hunk, ...] = ()
    old_path: Optional[str] = None  # set on renames only
    old_content: Optional[str] = field(default=None, repr=False, compare=False)
    new_content: Optional[str] = field(default=None, repr=False, compare=False)

    def is_added(self) -> bool:
        return self.status is FileStatus.ADDED

    def is_modified(self) -> bool:
        return self.status is FileStatus.MODIFIED

    def is_deleted(self) -> bool:
        return self.status is FileStatus.DELETED

    def is_renamed(self) -> bool:
        return self.status is FileStatus.RENAMED

    @property
    def added_count(self) -> int:
        return sum(h.added_count for h in self.hunks)

    @property
    def removed_count(self) -> int:
        return sum(h.removed_count for h in self.hunks)

    def iter_lines(self) -> Iterator[DiffLine]:
        for hunk in self.hunks:
            yield from hunk.lines

    def find_line(self, side: Side, line_no: int) -> Optional[DiffLine]:
        """Return the line carrying *line_no* on *side*, if the diff shows it."""
        for hunk in self.hunks:
            found = hunk.find_line(side, line_no)
            if found is not None:
                return found
        return None

    def with_contents(
        self, old_content: Optional[str], new_content: Optional[str]
    ) -> FileChange:
        return replace(self, old_content=old_content, new_content=new_content)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path": self.path,
            "status": self.status.value,
            "old_path": self.old_path,
            "hunks": [h.to_dict() for h in self.hunks],
        }


@dataclass(frozen=True)
class ParsedDiff:
    """Ordered collection of file changes.

    The refs being compared are attached by the caller via :meth:`with_refs`.
    """

    files: Tuple[FileChange, ...] = ()
    base_ref: Optional[str] = None
    head_ref: Optional[str] = None

    def __len__(self) -> int:
        return len(self.files)

    def __iter__(self) -> Iterator[FileChange]:
        return iter(self.files)

    @property
    def file_count(self) -> int:
        return len(self.files)

    @property
    def file_paths(self) -> List[str]:
        return [f.path for f in self.files]

    def is_empty(self) -> bool:
        return not self.files

    def get_file(self, path: str) -> Optional[FileChange]:
        for f in self.files:
            if f.path == path:
                return f
        return None

    def find_line(self, path: str, side: Side, line_no: int) -> Optional[DiffLine]:
        """Map a ``(path, side, line_no)`` anchor to the diff line it refers to."""
        f = self.get_file(path)
        if f is None:
            return None
        return f.find_line(side, line_no)

    def with_refs(self, base_ref: str, head_ref: str) -> ParsedDiff:
        return replace(self, base_ref=base_ref, head_ref=head_ref)

    def with_files(self, files: Tuple[FileChange, ...]) -> ParsedDiff:
        return replace(self, files=tuple(files))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "base_ref": self.base_ref,
            "head_ref": self.head_ref,
            "files": [f.to_dict() for f in self.files],
        }
