from lox.lang.error import UndefinedVariable


class Environment:
    """A scope: variable bindings plus an optional enclosing scope. Lookups and assignments walk outwards through the
    chain, while definitions only ever touch this scope.
    """

    def __init__(self, enclosing=None):
        self.values = {}
        self.enclosing = enclosing

    def define(self, name, value):
        """Binds name in this scope. Redefining a name simply overwrites it."""
        self.values[name] = value

    def get(self, name):
        """Returns the value bound to token name in the nearest scope that binds it."""
        if name.lexeme in self.values:
            return self.values[name.lexeme]
        if self.enclosing is not None:
            return self.enclosing.get(name)
        raise UndefinedVariable(name.lexeme, name.line)

    def assign(self, name, value):
        """Rebinds token name in the nearest scope that binds it. Never creates a binding."""
        if name.lexeme in self.values:
            self.values[name.lexeme] = value
        elif self.enclosing is not None:
            self.enclosing.assign(name, value)
        else:
            raise UndefinedVariable(name.lexeme, name.line)

    def __contains__(self, name):
        return name in self.values or (self.enclosing is not None and name in self.enclosing)

    def __repr__(self):
        return f"Environment({self.values!r}, enclosing={self.enclosing!r})"
