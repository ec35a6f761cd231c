"""
arcsite command-line interface.
"""

from arcsite import __version__

__all__ = ["__version__"]
