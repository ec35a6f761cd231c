"""
Core Exception Hierarchy for arcsite

Every failure during a build is an ``ArcError``. Errors carry a code, the
location they were raised at (document, template, include directive) and
optional recovery suggestions, so that the CLI can point the operator at the
file that needs fixing.
"""

import sys
import time
import uuid
import traceback
from enum import Enum
from typing import Dict, Any, Optional, List
from dataclasses import asdict, dataclass, field


class ErrorCode(Enum):
    """Error codes grouped by the stage that raises them."""

    # Template errors (1000-1999)
    TEMPLATE_NOT_FOUND = 1001
    TEMPLATE_INCLUDE_NOT_FOUND = 1002
    TEMPLATE_RECURSION_LIMIT = 1003
    TEMPLATE_READ_FAILED = 1004

    # Content errors (2000-2999)
    CONTENT_MISSING_TEMPLATE = 2001
    CONTENT_READ_FAILED = 2002

    # Configuration errors (3000-3999)
    CONFIG_INVALID_FORMAT = 3001
    CONFIG_INVALID_VALUE = 3003
    CONFIG_FILE_NOT_FOUND = 3004
    CONFIG_SCHEMA_VALIDATION = 3006

    # File system errors (6000-6999)
    FS_WRITE_FAILED = 6003

    UNKNOWN_ERROR = 9000


@dataclass
class ErrorContext:
    """Where an error happened."""

    operation: str = ""
    document: Optional[str] = None
    directive: Optional[str] = None
    template: Optional[str] = None
    file_path: Optional[str] = None
    correlation_id: Optional[str] = None
    timestamp: float = field(default_factory=time.time)
    user_context: Dict[str, Any] = field(default_factory=dict)

    def location(self) -> List[tuple]:
        """``(label, value)`` pairs for the location fields that are set."""
        pairs = (
            ("Document", self.document),
            ("Template", self.template),
            ("Directive", self.directive),
            ("File", self.file_path),
        )
        return [(label, value) for label, value in pairs if value]

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class RecoverySuggestion:
    """A step the operator can take to fix the error; lower priority first."""

    action: str
    description: str
    command: Optional[str] = None
    priority: int = 1


class ArcError(Exception):
    """
    Base exception for all arcsite errors.

    Errors are fatal to the current generation run. The first one raised
    aborts the build and reaches the CLI unchanged, apart from the document
    path stamped on by the content processor.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
        suggestions: Optional[List[RecoverySuggestion]] = None
    ):
        """
        Initialize arcsite error.

        Args:
            message: What went wrong
            error_code: Code identifying the kind of failure
            context: Location of the failure
            cause: Lower-level exception being wrapped, if any
            suggestions: Ways to fix the problem
        """
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.context = context or ErrorContext()
        self.cause = cause
        self.suggestions: List[RecoverySuggestion] = []
        self.traceback_text = traceback.format_exc() if sys.exc_info()[0] else ""

        for suggestion in suggestions or []:
            self.add_suggestion(suggestion)

        if not self.context.correlation_id:
            self.context.correlation_id = uuid.uuid4().hex[:8]

    def add_suggestion(self, suggestion: RecoverySuggestion) -> None:
        self.suggestions.append(suggestion)
        self.suggestions.sort(key=lambda s: s.priority)

    def with_document(self, document: str) -> 'ArcError':
        """Record the document being rendered when the error occurred."""
        if not self.context.document:
            self.context.document = document
        return self

    def get_user_message(self) -> str:
        """Plain-text description: message, code, location and suggestions."""
        lines = [self.message]
        if self.error_code != ErrorCode.UNKNOWN_ERROR:
            lines[0] += f" [{self.error_code.name.lower()} {self.error_code.value}]"

        lines.extend(f"  {label}: {value}" for label, value in self.context.location())

        for suggestion in self.suggestions:
            hint = f"  -> {suggestion.action}: {suggestion.description}"
            if suggestion.command:
                hint += f" (run: {suggestion.command})"
            lines.append(hint)

        return "\n".join(lines)

    def get_debug_info(self) -> Dict[str, Any]:
        """Everything known about the error, for ``--debug`` output."""
        info: Dict[str, Any] = {
            'error_type': type(self).__name__,
            'message': self.message,
            'error_code': self.error_code.value,
            'context': self.context.to_dict(),
            'suggestions': [asdict(s) for s in self.suggestions],
        }
        if self.cause is not None:
            info['cause'] = {'type': type(self.cause).__name__, 'message': str(self.cause)}
        if self.traceback_text:
            info['traceback'] = self.traceback_text
        return info


class TemplateError(ArcError):
    """Exception for template loading and expansion errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.TEMPLATE_NOT_FOUND,
        template: Optional[str] = None,
        directive: Optional[str] = None,
        **kwargs
    ):
        context = kwargs.pop('context', None) or ErrorContext(operation="render")
        context.template = template or context.template
        context.directive = directive or context.directive
        super().__init__(message, error_code=error_code, context=context, **kwargs)


class TemplateNotFoundError(TemplateError):
    """A template or included file does not exist in the template store."""

    def __init__(self, name: str, directive: Optional[str] = None, **kwargs):
        self.name = name
        if directive:
            message = f"Include file not found: {name}"
            kwargs.setdefault('error_code', ErrorCode.TEMPLATE_INCLUDE_NOT_FOUND)
        else:
            message = f"Template not found: {name}"

        super().__init__(message, template=name, directive=directive, **kwargs)

        self.add_suggestion(RecoverySuggestion(
            action="Check the templates directory",
            description=f"Create '{name}' in the templates directory or fix the name that refers to it."
        ))


class IncludeRecursionError(TemplateError):
    """Include directives nest deeper than the configured limit."""

    def __init__(self, chain: List[str], limit: int, **kwargs):
        self.chain = list(chain)
        self.limit = limit
        message = f"Include depth limit of {limit} exceeded: {' -> '.join(self.chain)}"

        super().__init__(
            message,
            error_code=ErrorCode.TEMPLATE_RECURSION_LIMIT,
            template=self.chain[-1] if self.chain else None,
            **kwargs
        )

        self.add_suggestion(RecoverySuggestion(
            action="Break the include cycle",
            description="A template includes itself directly or through other templates."
        ))
        self.add_suggestion(RecoverySuggestion(
            action="Raise the include limit",
            description="Deep but finite include chains need a larger build.max_include_depth.",
            command=f"arcsite build --max-include-depth {limit * 2}",
            priority=2
        ))


class ContentError(ArcError):
    """A content document cannot be read or rendered."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONTENT_READ_FAILED,
        document: Optional[str] = None,
        **kwargs
    ):
        context = kwargs.pop('context', None) or ErrorContext(operation="process_content")
        context.document = document or context.document
        super().__init__(message, error_code=error_code, context=context, **kwargs)

        if error_code == ErrorCode.CONTENT_MISSING_TEMPLATE:
            self.add_suggestion(RecoverySuggestion(
                action="Add a template to the frontmatter",
                description="Every document needs a 'template: <file>' line in its frontmatter."
            ))


class ConfigurationError(ArcError):
    """Invalid or unreadable configuration."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFIG_INVALID_FORMAT,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        **kwargs
    ):
        context = kwargs.pop('context', None) or ErrorContext(operation="load_config")
        if config_key:
            context.user_context.update(config_key=config_key, config_value=config_value)
        super().__init__(message, error_code=error_code, context=context, **kwargs)

        if error_code == ErrorCode.CONFIG_INVALID_VALUE:
            self.add_suggestion(RecoverySuggestion(
                action="Fix the setting",
                description=f"Correct {config_key or 'the value'} in arcsite.yaml, site.config or the ARCSITE_ environment."
            ))
        elif error_code == ErrorCode.CONFIG_FILE_NOT_FOUND:
            self.add_suggestion(RecoverySuggestion(
                action="Check the --config path",
                description="Omit --config to use arcsite.yaml from the working directory."
            ))
