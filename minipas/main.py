"""minipas interpreter: runs .pas source files or an interactive shell. Also uses error handling context manager.
Called from the minipas console script.

Basic program flow:
    1. Lexer: turns source text into tokens (see minipas/syntax/lexer.py)
    2. Parser: builds a syntax tree from the tokens, collecting every syntax error it finds
       (see minipas/syntax/parser.py and minipas/syntax/tree.py)
    3. Evaluator: walks the tree in a persistent global environment and produces runtime values
       (see minipas/lang/evaluator.py)

Python version must be >=3.7, because error handling requires that dicts are insertion-ordered.
"""

import argparse
import sys

from minipas.lang.error import ErrorHandler
from minipas.lang.session import Session
from minipas.lang.shell import Shell


def main(argv=None):
    """Runs minipas interpreter. Called from minipas console script."""
    assert sys.version_info >= (3, 7), "minipas cannot be run with python < 3.7"

    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="minipas")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--ast", help="print the canonical rendering of each statement instead of evaluating it",
                            action="store_true")
        parser.add_argument("--tree", help="print the indented node tree of each statement instead of evaluating it",
                            action="store_true")
        args = parser.parse_args(argv)

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, show_ast=args.ast, show_tree=args.tree)
            sess.run(echo=print)

        else:
            sess = Session(error_handler, Session.SH_FILE, cmd_line=True, show_ast=args.ast, show_tree=args.tree)
            Shell(sess).cmdloop()


if __name__ == "__main__":
    main()
