"""
Template Engine

Expands arcsite's directive language into final text. Rendering runs four
stages in a fixed order, each producing a new string:

1. includes      ``{% include "header.html" %}``
2. loops         ``{% for post in posts %} ... {% endfor %}``
3. conditionals  ``{% if type == "post" %} ... {% endif %}``
4. variables     ``{{ title }}`` and ``{{ latest_post.title }}``

Blocks pair with the first closing tag that follows them, so nesting a block
of the same kind inside another is not supported. Placeholders whose name is
not bound anywhere in scope are left in the output untouched.
"""

import re
import logging
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Sequence

from arcsite.core.exceptions import IncludeRecursionError, TemplateNotFoundError
from arcsite.core.templates.scope import Scope, is_sequence, to_text
from arcsite.core.templates.store import TemplateStore


INCLUDE_PATTERN = re.compile(r'\{%\s*include\s+"([^"]+)"\s*%\}')
FOR_PATTERN = re.compile(
    r'\{%\s*for\s+(\w+)\s+in\s+([\w.]+)\s*%\}(.*?)\{%\s*endfor\s*%\}',
    re.DOTALL
)
IF_PATTERN = re.compile(
    r'\{%\s*if\s+([^%}]+)%\}(.*?)(?:\{%\s*endif\s*%\}|\Z)',
    re.DOTALL
)
NESTED_VARIABLE_PATTERN = re.compile(
    r'\{\{\s*([A-Za-z_][A-Za-z0-9_]*\.[A-Za-z0-9_.]+)\s*\}\}'
)
SIMPLE_VARIABLE_PATTERN = re.compile(r'\{\{\s*([^\s{}.]+)\s*\}\}')

CONTENT_VAR = 'content'
DEFAULT_MAX_INCLUDE_DEPTH = 32


class TemplateEngine:
    """
    Directive engine for site templates.

    Global variables are registered once per generation run, before any
    document is rendered, and are shared read-only by every render. Each
    call to ``process_template`` builds a private scope for its document.
    """

    def __init__(
        self,
        store: Optional[TemplateStore] = None,
        max_include_depth: int = DEFAULT_MAX_INCLUDE_DEPTH
    ):
        """
        Initialize the template engine.

        Args:
            store: Default template store used to resolve includes
            max_include_depth: Deepest include nesting allowed before the
                render fails with ``IncludeRecursionError``
        """
        self.logger = logging.getLogger(__name__)
        self.store = store
        self.max_include_depth = max_include_depth
        self._globals: Dict[str, Any] = {}

    def register_global_variable(self, name: str, value: Any) -> None:
        """
        Register a variable visible to every template.

        Args:
            name: Variable name
            value: String, mapping, sequence of mappings or ``None``
        """
        self._globals[name] = value

    @property
    def globals(self) -> Mapping[str, Any]:
        """Read-only view of the registered global variables."""
        return MappingProxyType(self._globals)

    def create_scope(
        self,
        page_variables: Optional[Mapping[str, Any]] = None,
        content: Optional[str] = None
    ) -> Scope:
        """Build the scope for one document render."""
        document = dict(page_variables or {})
        if content is not None:
            document[CONTENT_VAR] = content
        return Scope(self._globals, document)

    def process_template(
        self,
        template: str,
        page_variables: Optional[Mapping[str, Any]],
        content: Optional[str],
        store: Optional[TemplateStore] = None
    ) -> str:
        """
        Render a template for one document.

        Args:
            template: The template text
            page_variables: Document metadata from frontmatter
            content: Rendered body, bound as ``content``
            store: Template store for includes (defaults to the engine's)

        Returns:
            The final text with every directive expanded

        Raises:
            TemplateNotFoundError: If an included template does not exist
            IncludeRecursionError: If includes nest too deeply
        """
        scope = self.create_scope(page_variables, content)

        result = self.resolve_includes(template, store or self.store)
        result = self.expand_loops(result, scope)
        result = self.evaluate_conditionals(result, scope)
        result = self.substitute_variables(result, scope)

        return result

    def render(
        self,
        template: str,
        variables: Optional[Mapping[str, Any]] = None,
        store: Optional[TemplateStore] = None
    ) -> str:
        """Render ``template`` with ``variables`` and no document body."""
        return self.process_template(template, variables, None, store)

    def resolve_includes(
        self,
        text: str,
        store: Optional[TemplateStore],
        chain: Sequence[str] = ()
    ) -> str:
        """
        Replace every include directive with the included template's text.

        Included text has its own includes resolved before it is inserted.
        ``chain`` holds the names of the templates currently being included.
        Nesting is tracked on an explicit stack, so the depth limit is the
        only bound on include depth.
        """
        output = []
        # (text, scan position, include chain for that text)
        pending = [(text, 0, list(chain))]

        while pending:
            current, position, current_chain = pending.pop()
            match = INCLUDE_PATTERN.search(current, position)
            if match is None:
                output.append(current[position:])
                continue

            output.append(current[position:match.start()])
            name = match.group(1)
            directive = match.group(0)

            if len(current_chain) >= self.max_include_depth:
                raise IncludeRecursionError(current_chain + [name], self.max_include_depth)
            if store is None:
                raise TemplateNotFoundError(name, directive=directive)

            try:
                included = store.read(name)
            except TemplateNotFoundError as e:
                raise TemplateNotFoundError(name, directive=directive, cause=e) from e

            self.logger.debug(f"Including template '{name}' (depth {len(current_chain) + 1})")
            pending.append((current, match.end(), current_chain))
            pending.append((included, 0, current_chain + [name]))

        return ''.join(output)

    def expand_loops(self, text: str, scope: Scope) -> str:
        """
        Expand ``for`` blocks, leftmost first, until none remain.

        Each element of the collection gets a child scope binding the loop
        variable. Conditionals in the body are evaluated in that scope, then
        ``{{ item.field }}`` placeholders are replaced from the element.
        A collection that is not a sequence produces no output.
        """
        match = FOR_PATTERN.search(text)
        while match:
            item_var, collection_name, body = match.groups()
            collection = scope.resolve(collection_name)

            output = []
            if is_sequence(collection):
                for item in collection:
                    item_scope = scope.child(item_var, item)
                    item_text = self.evaluate_conditionals(body, item_scope)
                    output.append(self._substitute_loop_variables(item_text, item_var, item))
            else:
                self.logger.debug(f"Loop collection '{collection_name}' is not a sequence, dropping loop body")

            text = text[:match.start()] + ''.join(output) + text[match.end():]
            match = FOR_PATTERN.search(text)

        return text

    def _substitute_loop_variables(self, text: str, item_var: str, item: Any) -> str:
        """Replace ``{{ item_var.field }}`` with the element's field values."""
        if not isinstance(item, Mapping):
            return text

        pattern = re.compile(
            r'\{\{\s*' + re.escape(item_var) + r'\.([^\s{}.]+)\s*\}\}'
        )

        def replace_field(match: 're.Match[str]') -> str:
            return to_text(item.get(match.group(1)))

        return pattern.sub(replace_field, text)

    def evaluate_conditionals(self, text: str, scope: Scope) -> str:
        """
        Expand ``if`` blocks, leftmost first, until none remain.

        A block without a closing ``endif`` extends to the end of the text.
        """
        match = IF_PATTERN.search(text)
        while match:
            condition, body = match.groups()
            replacement = body if self.evaluate_condition(condition, scope) else ''

            text = text[:match.start()] + replacement + text[match.end():]
            match = IF_PATTERN.search(text)

        return text

    def evaluate_condition(self, condition: str, scope: Scope) -> bool:
        """
        Evaluate an ``if`` condition.

        ``left == right`` compares the string form of the variable ``left``
        with the literal ``right`` (one layer of quotes removed). Any other
        condition is a variable path that must resolve to a non-empty value.
        """
        condition = condition.strip()

        if '==' in condition:
            left, right = condition.split('==', 1)
            left = left.strip()
            right = _strip_quotes(right.strip())

            value = scope.resolve(left)
            return value is not None and to_text(value) == right

        value = scope.resolve(condition)
        return value is not None and to_text(value) != ''

    def substitute_variables(self, text: str, scope: Scope) -> str:
        """
        Replace variable placeholders.

        Dotted paths are resolved first and become ``""`` when absent. Simple
        names are then replaced only when bound; unknown placeholders stay
        in the output. A pass never rescans the values it inserted.
        """
        def replace_nested(match: 're.Match[str]') -> str:
            return to_text(scope.resolve(match.group(1)))

        def replace_simple(match: 're.Match[str]') -> str:
            name = match.group(1)
            if not scope.is_bound(name):
                return match.group(0)
            return to_text(scope.lookup(name))

        text = NESTED_VARIABLE_PATTERN.sub(replace_nested, text)
        return SIMPLE_VARIABLE_PATTERN.sub(replace_simple, text)


def _strip_quotes(value: str) -> str:
    """Remove one layer of matching single or double quotes."""
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ('"', "'"):
        return value[1:-1]
    return value


def render(
    template_text: str,
    document_vars: Optional[Mapping[str, Any]] = None,
    body_content: Optional[str] = None,
    template_store: Optional[TemplateStore] = None,
    global_vars: Optional[Mapping[str, Any]] = None
) -> str:
    """
    Render a template in a single call.

    Args:
        template_text: The template text
        document_vars: Document variables
        body_content: Rendered document body, bound as ``content``
        template_store: Store used to resolve includes
        global_vars: Variables shared by all documents

    Returns:
        The rendered text
    """
    engine = TemplateEngine(template_store)
    for name, value in (global_vars or {}).items():
        engine.register_global_variable(name, value)
    return engine.process_template(template_text, document_vars, body_content)
