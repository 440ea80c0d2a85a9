"""Handles interactive/command-line mode for the minipas interpreter. Uses cmd as backend."""

import cmd

from minipas.lang.session import Session


class Shell(cmd.Cmd):
    """minipas interpreter shell."""
    intro = "minipas interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary minipas input."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            source = f"{self._tmp_line}\n{line}" if self._tmp_line else line
            source, add_to_prev = Session.preprocess_line(source, self.line_num, bool(self._tmp_line))

            if add_to_prev:
                self._tmp_line = source
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            try:
                self.sess.add(source, self.line_num)
            except ValueError:
                return  # if line is empty, terminate

            self.sess.run()

            while self.sess.results:
                print(self.sess.pop())

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the minipas interpreter!\n\n"
              "minipas is a small Pascal-flavoured language with integers, reals, strings and \n"
              "booleans, var/const declarations, if/then/else blocks and procedures.\n\n"
              "Try it out by typing 'var x: integer := 5;'. This binds 5 to 'x'. Next, try \n"
              "typing 'x * 2 + 1'. This will print 11. Blocks close with 'end', and '{...}' \n"
              "is a comment.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
