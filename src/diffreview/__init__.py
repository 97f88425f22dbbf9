"""diffreview — parse git unified diffs into a structured change model."""

__version__ = "0.1.0"
