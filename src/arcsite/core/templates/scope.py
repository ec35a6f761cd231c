"""
Variable Scope

Layered variable bindings used while expanding a template. Layers are
consulted innermost first: loop bindings, then document metadata, then the
global registrations shared by every document of a generation run.
"""

from types import MappingProxyType
from typing import Any, Dict, Iterator, List, Mapping, Optional


def to_text(value: Any) -> str:
    """Return the string form of a template value; ``None`` becomes ``""``."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    return str(value)


def is_sequence(value: Any) -> bool:
    """True for values a ``for`` loop can iterate. Strings are not sequences."""
    return isinstance(value, (list, tuple))


class Scope:
    """
    Ordered stack of read-only mappings.
    
    The global layer is wrapped in a ``MappingProxyType`` so a render can
    never write to it. ``child`` returns a new scope with one extra binding
    layer, which keeps loop variables private to a single iteration.
    """
    
    def __init__(
        self,
        globals: Optional[Mapping[str, Any]] = None,
        document: Optional[Mapping[str, Any]] = None,
        bindings: Optional[List[Mapping[str, Any]]] = None
    ):
        self._layers: List[Mapping[str, Any]] = [
            MappingProxyType(dict(globals or {})),
            MappingProxyType(dict(document or {})),
        ]
        for layer in bindings or []:
            self._layers.append(MappingProxyType(dict(layer)))
    
    def child(self, name: str, value: Any) -> 'Scope':
        """Create a scope that adds ``name`` on top of this one."""
        scope = Scope.__new__(Scope)
        scope._layers = self._layers + [MappingProxyType({name: value})]
        return scope
    
    def is_bound(self, name: str) -> bool:
        """Whether any layer defines ``name``, even as ``None``."""
        return any(name in layer for layer in self._layers)
    
    def lookup(self, name: str) -> Any:
        """Return the innermost definition of ``name``, or ``None``."""
        for layer in reversed(self._layers):
            if name in layer:
                return layer[name]
        return None
    
    def resolve(self, path: str) -> Any:
        """
        Resolve a variable path such as ``post.author.name``.
        
        A name bound verbatim wins over a dotted walk. Otherwise each segment
        indexes into the previous value; a missing segment or a non-mapping
        intermediate value resolves to ``None``.
        """
        if self.is_bound(path):
            return self.lookup(path)
        
        head, *rest = path.split('.')
        current = self.lookup(head)
        for part in rest:
            if not isinstance(current, Mapping):
                return None
            current = current.get(part)
            if current is None:
                return None
        return current
    
    def top_level_names(self) -> List[str]:
        """All bound names, each listed once."""
        seen: Dict[str, None] = {}
        for layer in self._layers:
            for name in layer:
                seen.setdefault(name, None)
        return list(seen)
    
    def __contains__(self, name: str) -> bool:
        return self.is_bound(name)
    
    def __iter__(self) -> Iterator[str]:
        return iter(self.top_level_names())
    
    def __repr__(self) -> str:
        return f"Scope(names={self.top_level_names()!r})"
