from typing import Any, Dict, Optional

from spartie.errors import undefined_variable
from spartie.tokens import Token


class Environment:
    """A scope mapping identifiers to values, linked to its enclosing scope.

    Lookups and assignments that miss locally walk outward through
    ``parent`` until the outermost scope. ``define`` never walks: it always
    binds locally, which is how inner scopes shadow outer names.
    """
    def __init__(self, parent: Optional['Environment'] = None):
        self.parent = parent
        self.values: Dict[str, Any] = {}

    @property
    def depth(self) -> int:
        depth = 0
        env = self.parent
        while env is not None:
            depth += 1
            env = env.parent
        return depth

    def define(self, name: str, value: Any) -> None:
        self.values[name] = value

    def resolve(self, name: str) -> Optional['Environment']:
        """Return the nearest scope that binds ``name``, or None."""
        env: Optional[Environment] = self
        while env is not None:
            if name in env.values:
                return env
            env = env.parent
        return None

    def is_defined(self, name: str) -> bool:
        return self.resolve(name) is not None

    def get(self, name: str, strict: bool = False) -> Any:
        # Unbound names read as null unless the caller asks for strict lookups
        env = self.resolve(name)
        if env is not None:
            return env.values[name]
        if strict:
            raise undefined_variable(name)
        return None

    def assign(self, name: Any, value: Any) -> None:
        """Rebind ``name`` in the nearest scope that already defines it.

        ``name`` may be a plain string or an identifier Token; a Token adds
        its source line to the error raised when the name is unbound.
        """
        if isinstance(name, Token):
            text, line = name.text, name.line
        else:
            text, line = name, None
        env = self.resolve(text)
        if env is None:
            raise undefined_variable(text, line)
        env.values[text] = value

    def __repr__(self) -> str:
        return f"<Environment depth={self.depth} names={sorted(self.values)}>"
