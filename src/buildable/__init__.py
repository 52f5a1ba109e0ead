"""Buildable project showcase.

Ratings, leaderboards, trending lists and activity analytics for a
community project showcase.
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
