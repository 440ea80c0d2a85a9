"""Lexical scoping for minipas: a chain of name -> value maps. Lookups that miss locally fall through to the outer
environment. Each procedure call gets a fresh child of the environment its procedure was defined in.
"""


class Environment:
    """One scope in the chain. Names declared with `const` are recorded in self.constants."""

    def __init__(self, outer=None):
        self.store = {}
        self.constants = set()
        self.outer = outer

    def enclosed(self):
        """Returns a new child scope of this environment."""
        return Environment(outer=self)

    def resolve(self, name):
        """Returns the nearest environment in the chain that binds name, or None."""
        env = self
        while env is not None:
            if name in env.store:
                return env
            env = env.outer
        return None

    def get(self, name):
        """Returns the value bound to name, or None if it is unbound anywhere in the chain."""
        env = self.resolve(name)
        return env.store[name] if env is not None else None

    def declare(self, name, value, constant=False):
        """Binds name in this scope, shadowing any outer binding. Returns False (binding nothing) if name is already a
        constant in this scope.
        """
        if name in self.constants:
            return False

        self.store[name] = value
        if constant:
            self.constants.add(name)
        return True

    def is_constant(self, name):
        env = self.resolve(name)
        return env is not None and name in env.constants

    def assign(self, name, value):
        """Rebinds name in the scope that declared it. Returns False if name is unbound or constant."""
        env = self.resolve(name)
        if env is None or name in env.constants:
            return False

        env.store[name] = value
        return True

    def __contains__(self, name):
        return self.resolve(name) is not None

    def __repr__(self):
        return f"Environment({sorted(self.store)}, outer={self.outer!r})"
