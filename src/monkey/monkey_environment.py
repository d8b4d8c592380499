"""
Lexically-scoped variable storage for the Monkey evaluator.

An `Environment` maps names to values and may point at an enclosing (outer)
environment. Lookups walk outward through the chain; writes always land in the
innermost scope, so a `let` inside a function shadows an outer binding rather
than changing it.

One environment is created per program run (the global scope) and one per
function call, enclosed by the scope the function was *defined* in. Closures
hold a reference to that defining scope, which keeps it alive for as long as
the function value is reachable.
"""

from __future__ import annotations

from monkey.monkey_object import Object


class Environment:
    def __init__(self, outer: Environment | None = None) -> None:
        self.store: dict[str, Object] = {}
        self.outer = outer

    def __repr__(self) -> str:
        names = ", ".join(sorted(self.store))
        return f"Environment([{names}], outer={'yes' if self.outer else 'no'})"

    def __contains__(self, name: object) -> bool:
        return self.get(str(name)) is not None

    def get(self, name: str) -> Object | None:
        env: Environment | None = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.outer
        return None

    def set(self, name: str, value: Object) -> Object:
        self.store[name] = value
        return value

    def bindings(self) -> dict[str, Object]:
        """Copy of the innermost scope only."""
        return dict(self.store)

    @classmethod
    def new_enclosed(cls, outer: Environment) -> Environment:
        return cls(outer=outer)


__all__ = ["Environment"]
