from typing import Dict, Optional

from monkey.types import Object


class Environment:
    """Represents a scope mapping identifiers to values.

    Environments form a chain from the innermost function-call scope out to
    the global scope. Lookups fall through to the enclosing scope; bindings
    are always made locally, so an inner binding shadows an outer one without
    modifying it.
    """
    def __init__(self, outer: Optional['Environment'] = None):
        self.outer = outer
        self.store: Dict[str, Object] = {}

    @classmethod
    def enclosed(cls, outer: 'Environment') -> 'Environment':
        return cls(outer=outer)

    def get(self, name: str) -> Optional[Object]:
        if name in self.store:
            return self.store[name]
        if self.outer is not None:
            return self.outer.get(name)
        return None

    def set(self, name: str, value: Object) -> Object:
        self.store[name] = value
        return value
