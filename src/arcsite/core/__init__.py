"""
Core arcsite Package

Contains core infrastructure components: the template engine, configuration
and error handling.
"""

from arcsite.core.exceptions import (
    ArcError,
    TemplateError,
    TemplateNotFoundError,
    IncludeRecursionError,
    ContentError,
    ConfigurationError,
    ErrorCode,
    ErrorContext,
    RecoverySuggestion
)

__all__ = [
    'ArcError',
    'TemplateError',
    'TemplateNotFoundError',
    'IncludeRecursionError',
    'ContentError',
    'ConfigurationError',
    'ErrorCode',
    'ErrorContext',
    'RecoverySuggestion',
]
