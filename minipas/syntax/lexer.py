"""Lexical analysis for minipas. The lexer is pull-based: callers ask for one token at a time with next_token, or
iterate over it to get every token up to and including end-of-input.

Tokens, roughly:

```
<identifier> ::= [a-zA-Z_]+                 ; checked against the keyword table
<integer>    ::= [0-9]+
<real>       ::= [0-9]+ "." [0-9]*          ; at most one decimal point
<string>     ::= '"' <char>* '"'
<comment>    ::= "{" <char>* "}"            ; skipped like whitespace
<operator>   ::= ":=" | "==" | "<=" | ">=" | "<>" | "+" | "-" | "*" | "/" | "<" | ">"
<punct>      ::= ":" | ";" | "," | "(" | ")" | "}"
```

Anything else is a one-character ILLEGAL token. A lone "=" is illegal too, since assignment is spelled ":=".
"""

from minipas.syntax.tokens import Token, TokenType, lookup_identifier


EOF_CHAR = ""
WHITESPACE = " \t\n\r"

SINGLE_CHARS = {
    "+": TokenType.PLUS,
    "-": TokenType.MINUS,
    "*": TokenType.ASTERISK,
    "/": TokenType.SLASH,
    "(": TokenType.LEFT_PARENTHESIS,
    ")": TokenType.RIGHT_PARENTHESIS,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ";": TokenType.SEMICOLON,
    ":": TokenType.COLON,
    "<": TokenType.LESS_THAN,
    ">": TokenType.GREATER_THAN,
    "=": TokenType.ILLEGAL,
}

# first char -> {second char: kind}; checked before SINGLE_CHARS
DOUBLE_CHARS = {
    ":": {"=": TokenType.ASSIGN},
    "=": {"=": TokenType.EQUAL},
    "<": {"=": TokenType.LESS_THAN_EQUAL, ">": TokenType.DIFFERENT},
    ">": {"=": TokenType.GREATER_THAN_EQUAL},
}


def is_letter(char):
    """ASCII letters and underscore. The colon check guards ':=' from being read as part of a name."""
    return ("a" <= char <= "z" or "A" <= char <= "Z" or char == "_") and char != ":"


def is_digit(char):
    return "0" <= char <= "9"


class Lexer:
    """Converts source text into Tokens. Once the input is exhausted, every call to next_token returns EOF."""

    def __init__(self, source):
        self.source = source
        self.position = 0       # index of self.char
        self.read_position = 0  # index of the character after self.char
        self.char = EOF_CHAR

        self.read_char()

    def read_char(self):
        if self.read_position >= len(self.source):
            self.char = EOF_CHAR
        else:
            self.char = self.source[self.read_position]

        self.position = self.read_position
        self.read_position += 1

    def peek_char(self):
        if self.read_position >= len(self.source):
            return EOF_CHAR
        return self.source[self.read_position]

    def next_token(self):
        """Returns the next Token and advances past it."""
        illegal = self.skip_ignored()
        if illegal is not None:
            return illegal

        char = self.char

        if char == EOF_CHAR:
            return Token(TokenType.EOF, "")

        if is_letter(char):
            literal = self._read_while(is_letter)
            return Token(lookup_identifier(literal), literal)

        if is_digit(char):
            return self._read_number()

        if char == "\"":
            return self._read_string()

        second = DOUBLE_CHARS.get(char, {}).get(self.peek_char())
        if second is not None:
            self.read_char()
            self.read_char()
            return Token(second, char + self.source[self.position - 1])

        self.read_char()
        return Token(SINGLE_CHARS.get(char, TokenType.ILLEGAL), char)

    def skip_ignored(self):
        """Skips whitespace and {...} comments. Returns an ILLEGAL token if a comment is never closed."""
        while True:
            while self.char != EOF_CHAR and self.char in WHITESPACE:
                self.read_char()

            if self.char != "{":
                return None

            while self.char not in ("}", EOF_CHAR):
                self.read_char()

            if self.char == EOF_CHAR:
                return Token(TokenType.ILLEGAL, "{")
            self.read_char()  # closing brace

    def _read_while(self, predicate):
        start = self.position
        while self.char != EOF_CHAR and predicate(self.char):
            self.read_char()
        return self.source[start:self.position]

    def _read_number(self):
        start = self.position
        self._read_while(is_digit)

        kind = TokenType.INTEGER
        if self.char == ".":
            kind = TokenType.REAL
            self.read_char()
            self._read_while(is_digit)

        return Token(kind, self.source[start:self.position])

    def _read_string(self):
        start = self.position
        self.read_char()  # opening quote

        content = self._read_while(lambda char: char != "\"")
        if self.char == EOF_CHAR:
            return Token(TokenType.ILLEGAL, self.source[start:self.position])

        self.read_char()  # closing quote
        return Token(TokenType.STRING, content)

    def __iter__(self):
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenType.EOF:
                return


def lex(source):
    """Returns a Lexer over source."""
    return Lexer(source)
