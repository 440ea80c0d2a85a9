"""Error reporting for the minipas front end. Syntax errors (parser diagnostics) and runtime errors (objects.Error
values) reach the user as GenericExceptions raised by Session and caught by ErrorHandler. If another type of error makes
it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """One or more user-facing messages sharing a label ("error", "syntax error", "runtime error")."""

    def __init__(self, msg, exprs=None, label="error", internal=False):
        """msg may contain {} placeholders, which are filled with the (bolded) snippets in exprs."""
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        if exprs:
            msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))

        self.msg = msg
        self.messages = [self.msg]
        self.label = label
        self.internal = internal

        super().__init__(self.msg)

    @classmethod
    def syntax(cls, diagnostics):
        """Bundles every parser diagnostic for one input into a single exception."""
        error = cls(diagnostics[0], label="syntax error")
        error.messages = list(diagnostics)
        return error

    @classmethod
    def runtime(cls, error_obj):
        """Wraps an evaluator objects.Error."""
        return cls(error_obj.message, label="runtime error")


class ErrorHandler:
    """Context manager that prints minipas errors instead of letting Python tracebacks escape. If fatal, the process
    exits after the first error; otherwise the error is reported and execution carries on.
    """
    ERROR = "red"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add/run."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    def format(self, error):
        """Returns the text printed for error: the registered source lines, then one labelled line per message."""
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += "".join(f"    {source_line}\n" for source_line in line.splitlines())
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        prefix = colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"]) if error.internal else ""
        label = colored(f"{error.label}: ", ErrorHandler.ERROR, attrs=["bold"])
        error_msg += "\n".join(prefix + label + msg for msg in error.messages)

        return error_msg

    def throw(self, error):
        """Prints error using error and self.traceback. error must be a GenericException, and self.traceback must be
        a dict of file: (line, line_num) representing origination of error.
        """
        print(self.format(error))

        if self.fatal:
            sys.exit(1)
        for path in self.traceback:  # if error occurred, reset traceback (no need if error is fatal)
            self.remove_line(path)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("input is nested too deeply, maximum recursion depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
            do_exit = True

        return not do_exit
