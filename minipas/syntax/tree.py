"""Abstract syntax tree for minipas.

Every node keeps the token that introduced it (for diagnostics) and renders to a canonical string in which infix and
prefix expressions are fully parenthesized, so `a + b * c` renders as `(a + (b * c))`. Tests rely on that rendering to
check operator precedence.

```
<program>    ::= <statement>*
<statement>  ::= ("var" | "const") <identifier> ":" <type> ":=" <expression> ";"
               | <identifier> ":=" <expression> [";"]
               | "return" <expression> [";"]
               | <expression> [";"]
<type>       ::= "integer" | "real"
<block>      ::= <statement>* ("end" | <eof>)
<expression> ::= <literal> | <identifier> | <prefix-op> <expression> | <expression> <infix-op> <expression>
               | "(" <expression> ")" | <expression> "(" [<expression> ("," <expression>)*] ")"
               | "if" <expression> "then" <block> ["else" <block>]
               | "procedure" <identifier> "(" [<param> ("," <param>)*] ")" "begin" <block>
<param>      ::= <identifier> ":" <type>
```
"""

from abc import ABC, abstractmethod


class Node(ABC):
    """Superclass of every syntax tree node."""

    def __init__(self, token):
        self.token = token
        self._cls = type(self).__name__

    def token_literal(self):
        """Literal text of the token this node starts with."""
        return self.token.literal

    @abstractmethod
    def __str__(self):
        """Canonical rendering of this node."""

    @property
    def nodes(self):
        """Direct children of this node, in source order. Used by display."""
        return []

    def display(self, indents=0):
        """Recursively displays the tree rooted at this node with a readable format.

        Format:
        <Node>(expr='<expr>', nodes=[
            <Node>(expr='<expr>', nodes=[
                ...
                <Node>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{self._cls}(expr='{self}'"
        children = [node for node in self.nodes if node is not None]
        if children:
            result += ", nodes=["
            for node in children:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{self._cls}('{self}')"


class Statement(Node, ABC):
    """A node that can appear directly in a program or block."""


class Expression(Node, ABC):
    """A node that produces a value."""


class Program(Node):
    """Root of a parsed source: an ordered list of top-level statements."""

    def __init__(self, statements=None):
        super().__init__(None)
        self.statements = statements if statements is not None else []

    def token_literal(self):
        if self.statements:
            return self.statements[0].token_literal()
        return ""

    @property
    def nodes(self):
        return self.statements

    def __str__(self):
        return "".join(str(statement) for statement in self.statements)


class Identifier(Expression):
    """A name. Procedure parameters also carry their declared type token in type."""

    def __init__(self, token, value, type=None):
        super().__init__(token)
        self.value = value
        self.type = type

    def __str__(self):
        return self.value


class VarStatement(Statement):
    """`var NAME: TYPE := VALUE;`"""

    def __init__(self, token, name=None, type=None, value=None):
        super().__init__(token)
        self.name = name
        self.type = type
        self.value = value

    @property
    def nodes(self):
        return [self.name, self.value]

    def __str__(self):
        value = str(self.value) if self.value is not None else ""
        return f"{self.token_literal()} {self.name}: {self.type.literal} := {value};"


class ConstStatement(VarStatement):
    """`const NAME: TYPE := VALUE;` Same shape as VarStatement, but the binding cannot be reassigned."""


class AssignStatement(Statement):
    """`NAME := VALUE;` The token is the name's token."""

    def __init__(self, token, name=None, value=None):
        super().__init__(token)
        self.name = name
        self.value = value

    @property
    def nodes(self):
        return [self.name, self.value]

    def __str__(self):
        value = str(self.value) if self.value is not None else ""
        return f"{self.name} := {value};"


class ReturnStatement(Statement):

    def __init__(self, token, value=None):
        super().__init__(token)
        self.value = value

    @property
    def nodes(self):
        return [self.value]

    def __str__(self):
        value = str(self.value) if self.value is not None else ""
        return f"{self.token_literal()} {value};"


class ExpressionStatement(Statement):
    """Wraps a bare expression. The token is the expression's first token."""

    def __init__(self, token, expression=None):
        super().__init__(token)
        self.expression = expression

    @property
    def nodes(self):
        return [self.expression]

    def __str__(self):
        if self.expression is not None:
            return str(self.expression)
        return ""


class BlockStatement(Statement):
    """Statements between an opening keyword (then, else, begin) and the matching end."""

    def __init__(self, token, statements=None):
        super().__init__(token)
        self.statements = statements if statements is not None else []

    @property
    def nodes(self):
        return self.statements

    def __str__(self):
        return " ".join(str(statement) for statement in self.statements)


class IntegerLiteral(Expression):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    def __str__(self):
        return self.token_literal()


class RealLiteral(Expression):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    def __str__(self):
        return self.token_literal()


class StringLiteral(Expression):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    def __str__(self):
        return f"\"{self.value}\""


class BooleanLiteral(Expression):

    def __init__(self, token, value):
        super().__init__(token)
        self.value = value

    def __str__(self):
        return self.token_literal()


class PrefixExpression(Expression):
    """`-x` or `not x`."""

    def __init__(self, token, operator, right=None):
        super().__init__(token)
        self.operator = operator
        self.right = right

    @property
    def nodes(self):
        return [self.right]

    def __str__(self):
        separator = " " if self.operator.isalpha() else ""  # (not x), but (-x)
        return f"({self.operator}{separator}{self.right})"


class InfixExpression(Expression):

    def __init__(self, token, left, operator, right=None):
        super().__init__(token)
        self.left = left
        self.operator = operator
        self.right = right

    @property
    def nodes(self):
        return [self.left, self.right]

    def __str__(self):
        return f"({self.left} {self.operator} {self.right})"


class ConditionalExpression(Expression):
    """`if CONDITION then CONSEQUENCE end [else ALTERNATIVE end]`"""

    def __init__(self, token, condition=None, consequence=None, alternative=None):
        super().__init__(token)
        self.condition = condition
        self.consequence = consequence
        self.alternative = alternative

    @property
    def nodes(self):
        return [self.condition, self.consequence, self.alternative]

    def __str__(self):
        result = f"if {self.condition} then {self.consequence} end"
        if self.alternative is not None:
            result += f" else {self.alternative} end"
        return result


class ProcedureLiteral(Expression):
    """`procedure NAME(PARAM: TYPE, ...) begin BODY end`"""

    def __init__(self, token, name=None, parameters=None, body=None):
        super().__init__(token)
        self.name = name
        self.parameters = parameters if parameters is not None else []
        self.body = body

    @property
    def nodes(self):
        return self.parameters + [self.body]

    def signature(self):
        """`NAME(PARAM: TYPE, ...)`, shared with runtime procedure values."""
        parameters = ", ".join(f"{param}: {param.type.literal}" for param in self.parameters)
        return f"{self.name}({parameters})"

    def __str__(self):
        return f"{self.token_literal()} {self.signature()} begin {self.body} end"


class CallExpression(Expression):
    """`CALLEE(ARG, ...)`. The token is the opening parenthesis."""

    def __init__(self, token, procedure, arguments=None):
        super().__init__(token)
        self.procedure = procedure
        self.arguments = arguments if arguments is not None else []

    @property
    def nodes(self):
        return [self.procedure] + self.arguments

    def __str__(self):
        arguments = ", ".join(str(argument) for argument in self.arguments)
        return f"{self.procedure}({arguments})"
