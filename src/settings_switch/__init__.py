"""
Settings Switch - named snapshots of a single JSON settings file.

Create, list, apply, validate and remove configurations, with a backup of
the target file taken before every apply.
"""

__version__ = "1.0.0"

__all__ = ["__version__"]
