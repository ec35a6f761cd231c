"""
Developer tools for arcsite.
"""

from .hot_reload import RebuildEvent, SiteChangeHandler, SiteWatcher

__all__ = ['RebuildEvent', 'SiteChangeHandler', 'SiteWatcher']
