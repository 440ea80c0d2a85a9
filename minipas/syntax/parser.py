"""Parser for minipas: recursive descent for statements, precedence climbing (Pratt parsing) for expressions.

The parser never raises on bad input. Every problem is recorded in Parser.errors as a plain string and parsing carries
on, so one pass can report several independent syntax errors. Callers must not evaluate a Program whose parser has
errors.

Sources: https://en.wikipedia.org/wiki/Operator-precedence_parser#Pratt_parsing,
         https://journal.stuffwithstuff.com/2011/03/19/pratt-parsers-expression-parsing-made-easy/
"""

from enum import IntEnum

from minipas import numerical
from minipas.syntax import tree
from minipas.syntax.lexer import Lexer
from minipas.syntax.tokens import TYPE_KEYWORDS, TokenType


class Precedence(IntEnum):
    LOWEST = 1
    EQUALS = 2       # == <>
    LESSGREATER = 3  # < > <= >=
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # -x, not x
    CALL = 7         # proc(x)


PRECEDENCES = {
    TokenType.EQUAL: Precedence.EQUALS,
    TokenType.DIFFERENT: Precedence.EQUALS,
    TokenType.LESS_THAN: Precedence.LESSGREATER,
    TokenType.GREATER_THAN: Precedence.LESSGREATER,
    TokenType.LESS_THAN_EQUAL: Precedence.LESSGREATER,
    TokenType.GREATER_THAN_EQUAL: Precedence.LESSGREATER,
    TokenType.PLUS: Precedence.SUM,
    TokenType.MINUS: Precedence.SUM,
    TokenType.SLASH: Precedence.PRODUCT,
    TokenType.ASTERISK: Precedence.PRODUCT,
    TokenType.LEFT_PARENTHESIS: Precedence.CALL,
}


class Parser:
    """Builds a tree.Program from a Lexer, holding the current token plus one token of lookahead."""

    # token kind -> name of the method that parses an expression starting with that token
    PREFIX = {
        TokenType.IDENTIFIER: "parse_identifier",
        TokenType.INTEGER: "parse_integer_literal",
        TokenType.REAL: "parse_real_literal",
        TokenType.STRING: "parse_string_literal",
        TokenType.TRUE: "parse_boolean_literal",
        TokenType.FALSE: "parse_boolean_literal",
        TokenType.MINUS: "parse_prefix_expression",
        TokenType.NOT: "parse_prefix_expression",
        TokenType.LEFT_PARENTHESIS: "parse_grouped_expression",
        TokenType.IF: "parse_conditional_expression",
        TokenType.PROCEDURE: "parse_procedure_literal",
    }

    # token kind -> name of the method that folds that operator onto an already parsed left-hand side
    INFIX = {
        **{kind: "parse_infix_expression" for kind in PRECEDENCES},
        TokenType.LEFT_PARENTHESIS: "parse_call_expression",
    }

    def __init__(self, lexer):
        self.lexer = lexer
        self.errors = []

        self.current_token = None
        self.peek_token = None

        # fill current_token and peek_token
        self.next_token()
        self.next_token()

    def next_token(self):
        self.current_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def current_token_is(self, kind):
        return self.current_token.kind is kind

    def peek_token_is(self, kind):
        return self.peek_token.kind is kind

    def peek_precedence(self):
        return PRECEDENCES.get(self.peek_token.kind, Precedence.LOWEST)

    def current_precedence(self):
        return PRECEDENCES.get(self.current_token.kind, Precedence.LOWEST)

    def expect_peek(self, kind):
        """Advances if the next token is of kind; otherwise records an error and stays put."""
        if self.peek_token_is(kind):
            self.next_token()
            return True

        self.peek_error(kind)
        return False

    def expect_type(self):
        """Advances onto a type keyword. Returns the type token, or None (with an error recorded) if the next token
        is not a type keyword.
        """
        if self.peek_token.kind in TYPE_KEYWORDS:
            self.next_token()
            return self.current_token

        self.errors.append(f"expected type to be integer or real, got {self.peek_token.kind} instead")
        return None

    def peek_error(self, kind):
        self.errors.append(f"expected next token to be {kind}, got {self.peek_token.kind} instead")

    def parse_program(self):
        """Parses statements until end-of-input. Input nested past the interpreter's recursion limit is reported as
        an error and ends parsing.
        """
        program = tree.Program()

        try:
            while not self.current_token_is(TokenType.EOF):
                statement = self.parse_statement()
                if statement is not None:
                    program.statements.append(statement)
                self.next_token()
        except RecursionError:
            self.errors.append("input is nested too deeply")

        return program

    # statements

    def parse_statement(self):
        kind = self.current_token.kind

        if kind is TokenType.VAR:
            return self.parse_declaration(tree.VarStatement)
        elif kind is TokenType.CONST:
            return self.parse_declaration(tree.ConstStatement)
        elif kind is TokenType.RETURN:
            return self.parse_return_statement()
        elif kind is TokenType.IDENTIFIER and self.peek_token_is(TokenType.ASSIGN):
            return self.parse_assign_statement()
        return self.parse_expression_statement()

    def parse_declaration(self, cls):
        """`('var' | 'const') IDENTIFIER ':' TYPE ':=' EXPRESSION ';'`"""
        statement = cls(self.current_token)

        if not self.expect_peek(TokenType.IDENTIFIER):
            return None
        statement.name = tree.Identifier(self.current_token, self.current_token.literal)

        if not self.expect_peek(TokenType.COLON):
            return None

        statement.type = self.expect_type()
        if statement.type is None:
            return None
        statement.name.type = statement.type

        if not self.expect_peek(TokenType.ASSIGN):
            return None
        self.next_token()

        statement.value = self.parse_expression(Precedence.LOWEST)
        if statement.value is None:
            return None

        if not self.expect_peek(TokenType.SEMICOLON):
            return None
        return statement

    def parse_assign_statement(self):
        statement = tree.AssignStatement(self.current_token)
        statement.name = tree.Identifier(self.current_token, self.current_token.literal)

        self.next_token()  # onto :=
        self.next_token()

        statement.value = self.parse_expression(Precedence.LOWEST)
        if statement.value is None:
            return None

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return statement

    def parse_return_statement(self):
        statement = tree.ReturnStatement(self.current_token)
        self.next_token()

        statement.value = self.parse_expression(Precedence.LOWEST)
        if statement.value is None:
            return None

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()
        return statement

    def parse_expression_statement(self):
        statement = tree.ExpressionStatement(self.current_token)
        statement.expression = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenType.SEMICOLON):
            self.next_token()

        if statement.expression is None:
            return None
        return statement

    def parse_block_statement(self):
        """Parses statements after the current (opening) token up to `end` or end-of-input. Leaves the parser on the
        closing token.
        """
        block = tree.BlockStatement(self.current_token)
        self.next_token()

        while not self.current_token_is(TokenType.END) and not self.current_token_is(TokenType.EOF):
            statement = self.parse_statement()
            if statement is not None:
                block.statements.append(statement)
            self.next_token()

        return block

    # expressions

    def parse_expression(self, precedence):
        """Parses the prefix form at the current token, then folds infix operators that bind tighter than
        precedence onto it.
        """
        prefix = self.PREFIX.get(self.current_token.kind)
        if prefix is None:
            self.errors.append(f"no prefix parse function for {self.current_token.kind} found")
            return None

        left = getattr(self, prefix)()

        while not self.peek_token_is(TokenType.SEMICOLON) and precedence < self.peek_precedence():
            infix = self.INFIX.get(self.peek_token.kind)
            if infix is None or left is None:
                return left

            self.next_token()
            left = getattr(self, infix)(left)

        return left

    def parse_identifier(self):
        return tree.Identifier(self.current_token, self.current_token.literal)

    def parse_integer_literal(self):
        try:
            value = numerical.parse_integer(self.current_token.literal)
        except ValueError:
            self.errors.append(f"could not parse '{self.current_token.literal}' as integer")
            return None
        return tree.IntegerLiteral(self.current_token, value)

    def parse_real_literal(self):
        try:
            value = numerical.parse_real(self.current_token.literal)
        except ValueError:
            self.errors.append(f"could not parse '{self.current_token.literal}' as real")
            return None
        return tree.RealLiteral(self.current_token, value)

    def parse_string_literal(self):
        return tree.StringLiteral(self.current_token, self.current_token.literal)

    def parse_boolean_literal(self):
        return tree.BooleanLiteral(self.current_token, self.current_token_is(TokenType.TRUE))

    def parse_prefix_expression(self):
        expression = tree.PrefixExpression(self.current_token, self.current_token.literal)
        self.next_token()

        expression.right = self.parse_expression(Precedence.PREFIX)
        if expression.right is None:
            return None
        return expression

    def parse_infix_expression(self, left):
        expression = tree.InfixExpression(self.current_token, left, self.current_token.literal)
        precedence = self.current_precedence()
        self.next_token()

        expression.right = self.parse_expression(precedence)
        if expression.right is None:
            return None
        return expression

    def parse_grouped_expression(self):
        self.next_token()

        expression = self.parse_expression(Precedence.LOWEST)
        if not self.expect_peek(TokenType.RIGHT_PARENTHESIS):
            return None
        return expression

    def parse_conditional_expression(self):
        """`if CONDITION then BLOCK end [else BLOCK end]`"""
        expression = tree.ConditionalExpression(self.current_token)
        self.next_token()

        expression.condition = self.parse_expression(Precedence.LOWEST)
        if expression.condition is None:
            return None

        if not self.expect_peek(TokenType.THEN):
            return None
        expression.consequence = self.parse_block_statement()

        if self.current_token_is(TokenType.END) and self.peek_token_is(TokenType.ELSE):
            self.next_token()
            expression.alternative = self.parse_block_statement()

        return expression

    def parse_procedure_literal(self):
        """`procedure NAME(PARAM: TYPE, ...) begin BLOCK end`"""
        literal = tree.ProcedureLiteral(self.current_token)

        if not self.expect_peek(TokenType.IDENTIFIER):
            return None
        literal.name = self.current_token.literal

        if not self.expect_peek(TokenType.LEFT_PARENTHESIS):
            return None

        literal.parameters = self.parse_procedure_parameters()
        if literal.parameters is None:
            return None

        if not self.expect_peek(TokenType.BEGIN):
            return None
        literal.body = self.parse_block_statement()

        return literal

    def parse_procedure_parameters(self):
        """Parses `PARAM: TYPE, ...)` with the current token on the opening parenthesis. Returns None on error."""
        parameters = []

        if self.peek_token_is(TokenType.RIGHT_PARENTHESIS):
            self.next_token()
            return parameters

        while True:
            parameter = self.parse_parameter()
            if parameter is None:
                return None
            parameters.append(parameter)

            if not self.peek_token_is(TokenType.COMMA):
                break
            self.next_token()

        if not self.expect_peek(TokenType.RIGHT_PARENTHESIS):
            return None
        return parameters

    def parse_parameter(self):
        if not self.expect_peek(TokenType.IDENTIFIER):
            return None
        identifier = tree.Identifier(self.current_token, self.current_token.literal)

        if not self.expect_peek(TokenType.COLON):
            return None

        identifier.type = self.expect_type()
        if identifier.type is None:
            return None
        return identifier

    def parse_call_expression(self, procedure):
        expression = tree.CallExpression(self.current_token, procedure)

        expression.arguments = self.parse_call_arguments()
        if expression.arguments is None:
            return None
        return expression

    def parse_call_arguments(self):
        """Parses `ARG, ...)` with the current token on the opening parenthesis. Returns None on error."""
        arguments = []

        if self.peek_token_is(TokenType.RIGHT_PARENTHESIS):
            self.next_token()
            return arguments

        self.next_token()
        arguments.append(self.parse_expression(Precedence.LOWEST))

        while self.peek_token_is(TokenType.COMMA):
            self.next_token()
            self.next_token()
            arguments.append(self.parse_expression(Precedence.LOWEST))

        if not self.expect_peek(TokenType.RIGHT_PARENTHESIS) or None in arguments:
            return None
        return arguments


def parse(source):
    """Lexes and parses source. Returns (program, errors)."""
    parser = Parser(Lexer(source))
    program = parser.parse_program()
    return program, parser.errors
