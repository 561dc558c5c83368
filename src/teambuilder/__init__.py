"""Skill-coverage team builder backed by the Torre talent search."""

__version__ = "0.1.0"
