"""YAML serialisation of a parsed diff."""

from __future__ import annotations

import yaml

from diffreview.git.models import ParsedDiff
from diffreview.output.json_report import to_dict


def render(diff: ParsedDiff, *, include_stats: bool = True) -> str:
    return yaml.safe_dump(
        to_dict(diff, include_stats=include_stats),
        sort_keys=False,
        allow_unicode=True,
    )
