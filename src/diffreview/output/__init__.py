"""Renderers for parsed diffs — terminal, JSON, YAML."""
