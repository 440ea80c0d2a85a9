"""Runtime values produced by the evaluator. Every value carries a type tag (used in error messages and for control
decisions such as "is this an error?") and an inspect rendering used by the shell to print results.

Booleans and null are canonical singletons (TRUE, FALSE, NULL): the evaluator always hands out these instances, never
fresh ones.
"""

from abc import ABC, abstractmethod


class Object(ABC):
    """Superclass of every runtime value."""
    TYPE = None

    @property
    def type(self):
        return self.TYPE

    @abstractmethod
    def inspect(self):
        """Human-readable rendering of this value."""

    def equals(self, other):
        """Value equality used by == and <>: same type tag and same payload."""
        return type(self) is type(other) and self.__dict__ == other.__dict__

    def __repr__(self):
        return f"{type(self).__name__}({self.inspect()!r})"


class Integer(Object):
    TYPE = "INTEGER"

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return str(self.value)


class Real(Object):
    TYPE = "REAL"

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return repr(self.value)


class String(Object):
    TYPE = "STRING"

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return self.value


class Boolean(Object):
    TYPE = "BOOLEAN"

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return "TRUE" if self.value else "FALSE"


class Null(Object):
    TYPE = "NULL"

    def inspect(self):
        return "NULL"


class ReturnValue(Object):
    """Carries a value out of the blocks between a return statement and its enclosing call."""
    TYPE = "RETURN_VALUE"

    def __init__(self, value):
        self.value = value

    def inspect(self):
        return self.value.inspect()


class Error(Object):
    """A runtime error. Stops evaluation of the enclosing scope just like a return does."""
    TYPE = "ERROR"

    def __init__(self, message):
        self.message = message

    def inspect(self):
        return f"[ERROR]: {self.message}"


class Procedure(Object):
    """A procedure value: parameters and body from the defining literal, plus the environment it closes over."""
    TYPE = "PROCEDURE"

    def __init__(self, literal, env):
        self.literal = literal
        self.env = env

    @property
    def name(self):
        return self.literal.name

    @property
    def parameters(self):
        return self.literal.parameters

    @property
    def body(self):
        return self.literal.body

    def inspect(self):
        return f"procedure {self.literal.signature()} begin\n  {self.body}\nend"

    def equals(self, other):
        return self is other


TRUE = Boolean(True)
FALSE = Boolean(False)
NULL = Null()


def from_bool(value):
    """Returns the canonical Boolean for a Python bool."""
    return TRUE if value else FALSE


def is_error(obj):
    return obj is not None and obj.type == Error.TYPE


def is_control(obj):
    """True for the values that cut evaluation short: errors and pending return values."""
    return obj is not None and obj.type in (Error.TYPE, ReturnValue.TYPE)


def is_truthy(obj):
    """Only false and null are falsy. Zero, empty strings and everything else count as true."""
    if obj is NULL or obj is FALSE:
        return False
    if isinstance(obj, Boolean):
        return obj.value
    return True
