"""JSON serialisation of a parsed diff."""

from __future__ import annotations

import json
from typing import Any, Dict

from diffreview.git.models import ParsedDiff
from diffreview.stats.summary import summarize


def to_dict(diff: ParsedDiff, *, include_stats: bool = True) -> Dict[str, Any]:
    """Convert ParsedDiff to a JSON-serialisable dict."""
    data: Dict[str, Any] = {"version": "1.0", **diff.to_dict()}
    if include_stats:
        data["stats"] = summarize(diff).to_dict()
    return data


def render(diff: ParsedDiff, *, include_stats: bool = True) -> str:
    """Return formatted JSON string."""
    return json.dumps(to_dict(diff, include_stats=include_stats), indent=2)
