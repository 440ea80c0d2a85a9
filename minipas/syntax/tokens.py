"""Token definitions for the minipas language. A token is an immutable (kind, literal) pair; the kind's value doubles
as its display name in parser diagnostics.
"""

from dataclasses import dataclass
from enum import Enum


class TokenType(Enum):
    """Closed set of token kinds produced by the lexer."""
    EOF = "EOF"
    ILLEGAL = "ILLEGAL"

    IDENTIFIER = "IDENTIFIER"
    INTEGER = "INTEGER"
    REAL = "REAL"
    STRING = "STRING"

    VAR = "VAR"
    CONST = "CONST"
    INTEGER_KEYWORD = "INTEGER_KEYWORD"
    REAL_KEYWORD = "REAL_KEYWORD"

    PROGRAM = "PROGRAM"
    PROCEDURE = "PROCEDURE"
    BEGIN = "BEGIN"
    DO = "DO"
    END = "END"

    FOR = "FOR"
    TO = "TO"
    WHILE = "WHILE"

    IF = "IF"
    THEN = "THEN"
    ELSE = "ELSE"

    RETURN = "RETURN"
    TRUE = "TRUE"
    FALSE = "FALSE"
    NOT = "NOT"

    ASSIGN = ":="
    PLUS = "+"
    MINUS = "-"
    SLASH = "/"
    ASTERISK = "*"

    LESS_THAN = "<"
    GREATER_THAN = ">"
    LESS_THAN_EQUAL = "<="
    GREATER_THAN_EQUAL = ">="
    EQUAL = "=="
    DIFFERENT = "<>"

    COMMA = ","
    COLON = ":"
    SEMICOLON = ";"
    LEFT_PARENTHESIS = "("
    RIGHT_PARENTHESIS = ")"
    RIGHT_BRACE = "}"

    def __str__(self):
        return self.value


KEYWORDS = {
    "if": TokenType.IF,
    "do": TokenType.DO,
    "to": TokenType.TO,
    "var": TokenType.VAR,
    "for": TokenType.FOR,
    "end": TokenType.END,
    "not": TokenType.NOT,
    "else": TokenType.ELSE,
    "then": TokenType.THEN,
    "true": TokenType.TRUE,
    "real": TokenType.REAL_KEYWORD,
    "const": TokenType.CONST,
    "while": TokenType.WHILE,
    "begin": TokenType.BEGIN,
    "false": TokenType.FALSE,
    "return": TokenType.RETURN,
    "integer": TokenType.INTEGER_KEYWORD,
    "program": TokenType.PROGRAM,
    "procedure": TokenType.PROCEDURE,
}

TYPE_KEYWORDS = (TokenType.INTEGER_KEYWORD, TokenType.REAL_KEYWORD)


@dataclass(frozen=True)
class Token:
    kind: TokenType
    literal: str

    def __repr__(self):
        return f"Token({self.kind.name}, {self.literal!r})"


def lookup_identifier(text):
    """Returns the keyword kind for text (case-sensitive), or IDENTIFIER if text is not reserved."""
    return KEYWORDS.get(text, TokenType.IDENTIFIER)
