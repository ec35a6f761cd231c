"""
Template processing system for arcsite.

This module provides the directive engine that expands includes, loops,
conditionals and variables in site templates.
"""

from .engine import TemplateEngine, render
from .scope import Scope, to_text
from .store import DictTemplateStore, FileTemplateStore, TemplateStore

__all__ = [
    'TemplateEngine',
    'render',
    'Scope',
    'to_text',
    'TemplateStore',
    'FileTemplateStore',
    'DictTemplateStore',
]
