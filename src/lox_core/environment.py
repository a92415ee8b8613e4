"""Scope chain: variable storage with outward lookup."""

from __future__ import annotations

from dataclasses import dataclass, field

from .errors import UndefinedVariable
from .tokens import Token
from .values import Value


@dataclass
class Environment:
    """One scope frame, linked to the frame that encloses it.

    The global frame has no ``enclosing``.  Lookup and assignment search
    this frame first and then walk outward; a frame never sees its children.
    """

    enclosing: Environment | None = None
    values: dict[str, Value] = field(default_factory=dict)

    # -- Declaration ----------------------------------------------------

    def define(self, name: str, value: Value) -> None:
        """Bind *name* in this frame, replacing any existing binding here."""
        self.values[name] = value

    # -- Read / write ---------------------------------------------------

    def get(self, name: Token) -> Value:
        env: Environment | None = self
        while env is not None:
            if name.lexeme in env.values:
                return env.values[name.lexeme]
            env = env.enclosing
        raise UndefinedVariable(name)

    def assign(self, name: Token, value: Value) -> None:
        """Overwrite the nearest existing binding of *name*.

        Never creates a binding; an unknown name is an error.
        """
        env: Environment | None = self
        while env is not None:
            if name.lexeme in env.values:
                env.values[name.lexeme] = value
                return
            env = env.enclosing
        raise UndefinedVariable(name)

    # -- Introspection --------------------------------------------------

    def is_defined(self, name: str) -> bool:
        env: Environment | None = self
        while env is not None:
            if name in env.values:
                return True
            env = env.enclosing
        return False

    def bindings(self) -> dict[str, Value]:
        return dict(self.values)
