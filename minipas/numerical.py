"""Signed 64-bit integer semantics for minipas. Python integers are unbounded, so literals are range-checked when parsed
and arithmetic results are wrapped back into range the way a two's-complement machine word would.

Source: https://en.wikipedia.org/wiki/Two%27s_complement
"""

INT_BITS = 64
INT_MIN = -(1 << (INT_BITS - 1))
INT_MAX = (1 << (INT_BITS - 1)) - 1


def parse_integer(literal):
    """Returns int(literal), raising ValueError if literal is not a base-10 integer that fits in 64 bits."""
    if not literal.isdigit():
        raise ValueError(f"invalid integer literal '{literal}'")

    value = int(literal)
    if not INT_MIN <= value <= INT_MAX:
        raise ValueError(f"integer literal '{literal}' out of range")
    return value


def parse_real(literal):
    """Returns float(literal). Accepts a trailing decimal point ("10.") as the lexer does."""
    return float(literal)


def wrap(value):
    """Wraps value into the signed 64-bit range."""
    value &= (1 << INT_BITS) - 1
    if value > INT_MAX:
        value -= 1 << INT_BITS
    return value


def truncated_div(dividend, divisor):
    """Integer division rounding toward zero (Python's // floors). divisor must be nonzero."""
    quotient = abs(dividend) // abs(divisor)
    if (dividend < 0) != (divisor < 0):
        quotient = -quotient
    return wrap(quotient)
