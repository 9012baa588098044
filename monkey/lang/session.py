"""Session control for the Monkey interpreter: runs source chunks through the lexer, parser and evaluator, either from a
file or line by line from the interactive shell.

A Session owns one root Environment for its whole lifetime, so `let` bindings made by one input are visible to the
next. Depending on its mode, a session evaluates its inputs or only dumps their tokens or parsed form.
"""

import logging
import re

from monkey.lang.error import EvaluationError, GenericException, ParserError
from monkey.runtime.builtins import BUILTINS
from monkey.runtime.environment import Environment
from monkey.runtime.evaluator import Evaluator
from monkey.runtime.object import Function, is_error
from monkey.syntax import ast
from monkey.syntax.lexer import Lexer
from monkey.syntax.parser import parse


logger = logging.getLogger(__name__)

STRING_LITERAL = re.compile(r"\"[^\"]*\"?")


class Session:
    """Governs a Monkey session, with control over the root scope and the processing mode."""
    SH_FILE = "<in>"  # command-line interpreter filename
    MODES = ("eval", "lex", "parse")

    def __init__(self, error_handler, path, mode="eval", cmd_line=False):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.mode = mode

        self.env = Environment()
        self.evaluator = Evaluator()

        self.to_exec = {}  # dict of line num: source chunks to execute
        self.results = []  # rendered results, oldest first

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    self.to_exec[1] = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path)

        elif not cmd_line:
            raise GenericException("'{}' is a reserved filename", Session.SH_FILE)

    @property
    def mode(self):
        return self._mode

    @mode.setter
    def mode(self, mode):
        if mode not in Session.MODES:
            raise GenericException("unknown mode '{}' (expected one of: {})", [mode, ", ".join(Session.MODES)])
        self._mode = mode

    @staticmethod
    def preprocess_line(line, add_to_prev):
        """Preprocesses a line from the command-line. Returns the line and whether the line continues on the next one,
        which is the case while it opens more braces/parentheses than it closes. add_to_prev is the text of the
        previous lines, if any, that this line continues.
        """
        line = line.rstrip()
        if add_to_prev:
            line = add_to_prev + "\n" + line

        code = STRING_LITERAL.sub("", line)
        opened = code.count("{") + code.count("(")
        closed = code.count("}") + code.count(")")
        return line, opened > closed

    def add(self, source, line_num):
        """Queues source to be executed by the next call to run."""
        if not source.strip():
            raise ValueError("cannot add empty source")
        self.to_exec[line_num] = source

    def run(self):
        """Executes every queued source chunk in order, appending non-empty renderings to self.results. Raises a
        GenericException on parser errors or when a chunk evaluates to a Monkey Error.
        """
        for line_num, source in list(self.to_exec.items()):
            if self.cmd_line:
                self.error_handler.register_line(self.path, source, line_num)  # in case error is raised

            try:
                result = self.execute(source)
            finally:
                del self.to_exec[line_num]

            if result is not None:
                self.results.append(result)

            self.error_handler.remove_line(self.path)

    def execute(self, source):
        """Processes one chunk according to self.mode and returns its rendering, or None if there is nothing to show."""
        logger.debug("%s: executing %r in %s mode", self.path, source, self.mode)

        if self.mode == "lex":
            return "\n".join(str(token) for token in Lexer(source))

        program, errors = parse(source)
        if errors:
            raise ParserError(errors)

        if self.mode == "parse":
            return str(program)

        self._check_shadowing(program)

        value = self.evaluator.evaluate(program, self.env)
        if is_error(value):
            raise EvaluationError(value)
        if isinstance(value, Function):
            return None
        return value.inspect()

    def pop(self):
        """Removes and returns the oldest pending result."""
        return self.results.pop(0)

    def _check_shadowing(self, program):
        """Warns about top-level lets that hide a builtin function."""
        for stmt in program.statements:
            if isinstance(stmt, ast.LetStatement) and stmt.name.value in BUILTINS:
                self.error_handler.warn("'{}' shadows a builtin function", stmt.name.value)
