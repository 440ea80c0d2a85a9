"""Session control for minipas. Feeds source to the parser and evaluator, either line by line from the shell or chunk
by chunk from a file, and keeps one global environment alive across inputs.
"""

from minipas.lang import objects
from minipas.lang.environment import Environment
from minipas.lang.error import GenericException
from minipas.lang.evaluator import evaluate
from minipas.syntax.lexer import Lexer
from minipas.syntax.parser import parse
from minipas.syntax.tokens import TokenType


class Session:
    """Governs a minipas session: parsing, evaluation, and the global environment."""
    SH_FILE = "<in>"  # command-line interpreter filename

    OPENERS = (TokenType.THEN, TokenType.ELSE, TokenType.BEGIN)
    CLOSERS = (TokenType.END,)
    # a line ending in one of these continues on the next
    TRAILERS = (TokenType.ASSIGN, TokenType.PLUS, TokenType.MINUS, TokenType.ASTERISK, TokenType.SLASH,
                TokenType.LESS_THAN, TokenType.GREATER_THAN, TokenType.LESS_THAN_EQUAL, TokenType.GREATER_THAN_EQUAL,
                TokenType.EQUAL, TokenType.DIFFERENT, TokenType.NOT, TokenType.COMMA, TokenType.COLON)

    def __init__(self, error_handler, path, cmd_line, show_ast=False, show_tree=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.show_ast = show_ast  # if set, results are canonical tree renderings instead of values
        self.show_tree = show_tree  # if set, results are indented node trees (Node.display) instead of values

        self.env = Environment()
        self.to_exec = {}  # dict of line num: (source, Program) to execute
        self.results = []  # renderings produced by run, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            exprs = []
            add_to_prev = False

            try:
                with open(path, "r") as file:
                    for line_num, line in enumerate(file):
                        __, add_to_prev = self.preprocess_line(line, line_num + 1, add_to_prev, exprs)
            except OSError:
                raise GenericException("'{}' could not be opened", path)

            for expr in exprs:
                self.add(*expr)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, line_num, add_to_prev, exprs=None):
        """Preprocesses a line from a file or command-line. In command-line mode, exprs can be ignored and line should
        already include any continued lines. In file mode, exprs collects (source, first line num) chunks, joining
        line onto the previous chunk if add_to_prev or if line starts with `else`. Returns the (possibly joined) source
        and whether it still needs more lines before it can be parsed.
        """
        line = line.rstrip()

        if exprs is not None:
            if (add_to_prev or Session.starts_with_else(line)) and exprs:
                prev, start = exprs.pop()
                line = prev + "\n" + line
                exprs.append((line, start))
            elif line.strip():
                exprs.append((line, line_num))
            else:
                return line, False

        return line, Session.is_incomplete(line)

    @staticmethod
    def is_incomplete(source):
        """Whether source has an unclosed parenthesis, block (then/else/begin without end) or comment, or ends in an
        operator, `:=`, comma or colon.
        """
        parens = 0
        blocks = 0
        last = None

        for token in Lexer(source):
            if token.kind is TokenType.LEFT_PARENTHESIS:
                parens += 1
            elif token.kind is TokenType.RIGHT_PARENTHESIS:
                parens -= 1
            elif token.kind in Session.OPENERS:
                blocks += 1
            elif token.kind in Session.CLOSERS:
                blocks -= 1
            elif token.kind is TokenType.ILLEGAL and token.literal == "{":
                return True

            if token.kind is not TokenType.EOF:
                last = token.kind

        return parens > 0 or blocks > 0 or last in Session.TRAILERS

    @staticmethod
    def starts_with_else(line):
        """Whether the first token of line is `else`, which in file mode always belongs to the chunk before it."""
        return Lexer(line).next_token().kind is TokenType.ELSE

    def add(self, source, line_num):
        """Parses source and queues it for run. Raises a GenericException listing every syntax error if it does not
        parse. Raises ValueError if source is blank.
        """
        if not source.strip():
            raise ValueError("source cannot be empty")

        self.error_handler.register_line(self.path, source, line_num)  # in case error is raised

        program, errors = parse(source)
        if errors:
            raise GenericException.syntax(errors)

        self.to_exec[line_num] = (source, program)

        self.error_handler.remove_line(self.path)  # error was not raised

    def run(self, echo=None):
        """Evaluates queued programs in order against the session environment. Each value produced by a top-level
        statement is rendered and appended to self.results, or passed to echo if given. Raises a GenericException on
        the first runtime error.
        """
        for line_num, (source, program) in list(self.to_exec.items()):
            self.error_handler.register_line(self.path, source, line_num)

            try:
                for rendering in self.execute(program):
                    if echo is not None:
                        echo(rendering)
                    else:
                        self.results.append(rendering)
            finally:
                del self.to_exec[line_num]

            self.error_handler.remove_line(self.path)

    def execute(self, program):
        """Yields the rendering of each top-level statement's value. A top-level return ends the program."""
        for statement in program.statements:
            if self.show_tree:
                yield statement.display()
                continue
            elif self.show_ast:
                yield str(statement)
                continue

            result = evaluate(statement, self.env)

            if objects.is_error(result):
                raise GenericException.runtime(result)
            elif isinstance(result, objects.ReturnValue):
                yield result.value.inspect()
                return
            elif result is not None:
                yield result.inspect()

    def pop(self):
        """Removes and returns the oldest result."""
        return self.results.pop(0)
