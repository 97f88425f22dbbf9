"""Diff statistics."""

from diffreview.stats.summary import DiffStats, FileStats, summarize

__all__ = ["DiffStats", "FileStats", "summarize"]
