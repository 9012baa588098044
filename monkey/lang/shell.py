"""Handles interactive/command-line mode for the Monkey interpreter. Uses cmd as backend."""

import cmd

from monkey.lang.session import Session


class Shell(cmd.Cmd):
    """Monkey interpreter shell."""
    intro = "Monkey interpreter :: Python backend\nType 'help' for more information."
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary Monkey input."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                try:
                    self.sess.add(line, self.line_num)
                except ValueError:
                    return  # if line is empty, terminate

                self.sess.run()

                while self.sess.results:
                    print(self.sess.pop())

    def do_mode(self, arg):
        """mode [eval|lex|parse]: shows or switches what the shell does with input."""
        with self.sess.error_handler:
            if arg:
                self.sess.mode = arg.strip()
            print(f"mode: {self.sess.mode}")

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the Monkey interpreter!\n\n"
              "Monkey has integers, booleans, strings, if/else, first-class functions with closures\n"
              "and let bindings, which persist from one line to the next.\n\n"
              "Try it out by typing 'let add = fn(a, b) { a + b };', then 'add(1, 2)'.\n"
              "Input that opens more braces than it closes continues on the next line.\n\n"
              "Commands: 'mode lex' dumps tokens, 'mode parse' dumps the parsed program,\n"
              "'mode eval' goes back to evaluating, 'exit' quits.")

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
