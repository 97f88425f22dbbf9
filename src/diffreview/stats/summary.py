"""Per-file and aggregate line statistics for a parsed diff."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List

from diffreview.git.models import FileStatus, LineKind, ParsedDiff


@dataclass
class FileStats:
    path: str
    status: FileStatus
    hunks: int = 0
    added: int = 0
    removed: int = 0
    context: int = 0


@dataclass
class DiffStats:
    """Totals across every file in a diff."""

    files: List[FileStats] = field(default_factory=list)
    by_status: Dict[FileStatus, int] = field(
        default_factory=lambda: {s: 0 for s in FileStatus}
    )

    @property
    def file_count(self) -> int:
        return len(self.files)

    @property
    def hunk_count(self) -> int:
        return sum(f.hunks for f in self.files)

    @property
    def added(self) -> int:
        return sum(f.added for f in self.files)

    @property
    def removed(self) -> int:
        return sum(f.removed for f in self.files)

    @property
    def context(self) -> int:
        return sum(f.context for f in self.files)

    def to_dict(self) -> Dict[str, object]:
        return {
            "files": self.file_count,
            "hunks": self.hunk_count,
            "added": self.added,
            "removed": self.removed,
            "context": self.context,
            "by_status": {s.value: n for s, n in self.by_status.items()},
        }


def summarize(diff: ParsedDiff) -> DiffStats:
    """Count files, hunks and lines in *diff*, grouped by file status."""
    stats = DiffStats()
    for change in diff.files:
        fs = FileStats(path=change.path, status=change.status, hunks=len(change.hunks))
        for line in change.iter_lines():
            if line.kind is LineKind.ADD:
                fs.added += 1
            elif line.kind is LineKind.REMOVE:
                fs.removed += 1
            else:
                fs.context += 1
        stats.files.append(fs)
        stats.by_status[change.status] += 1
    return stats
