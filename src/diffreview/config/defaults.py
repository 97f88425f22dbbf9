"""Starter .diffreview.toml template."""

DEFAULT_TOML = """\
# diffreview configuration
version = "1.0"

[diff]
base_ref = "main"         # ref the changes are compared against
head_ref = "HEAD"
context_lines = 5         # passed to git diff --unified
staged = false            # true = diff the index against HEAD

[output]
format = "terminal"       # terminal | json | yaml
show_summary = true
"""
