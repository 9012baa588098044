"""Lexical scopes. An Environment is one scope of name -> value bindings plus an optional parent scope; chained together
they form the scope chain that identifier lookup walks and that closures capture.
"""


class Environment:
    """One scope in the chain. Parents are shared by reference: a Function value and every call made through it hold the
    same parent object, which lives as long as any of them does.
    """

    def __init__(self, parent=None):
        self.parent = parent
        self.store = {}

    @classmethod
    def new_enclosed(cls, parent):
        """Returns a new empty scope whose lookups fall back to parent."""
        return cls(parent)

    def get(self, name):
        """Returns the value bound to name in this scope or the nearest ancestor that binds it, or None if unbound."""
        env = self
        while env is not None:
            if name in env.store:
                return env.store[name]
            env = env.parent
        return None

    def set(self, name, value):
        """Binds name in this scope only, shadowing any ancestor binding. Returns value."""
        self.store[name] = value
        return value

    def __contains__(self, name):
        return self.get(name) is not None

    def __repr__(self):
        content = ", ".join(self.store)
        return f"[{content}]" + (f" < {self.parent!r}" if self.parent is not None else "")
