"""Host-level error reporting for the Monkey interpreter. Only GenericExceptions should be encountered during running:
if another type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Runtime failures inside a Monkey program are not Python exceptions (see runtime/evaluator.py): they only become
GenericExceptions when a Session hands a top-level Error value to the host.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw a Monkey error/warning. exprs are formatted
    into msg's `{}` slots and bolded.
    """

    def __init__(self, msg, exprs=None, internal=False):
        if exprs is None:
            exprs = []
        if isinstance(exprs, str):
            exprs = [exprs]

        self.msg = msg.format(*(colored(str(expr), attrs=["bold"]) for expr in exprs))
        self.exprs = exprs
        self.internal = internal
        super().__init__(self.msg)


class ParserError(GenericException):
    """Raised when a program cannot be evaluated because the parser recorded errors. Keeps them in order."""

    def __init__(self, errors):
        self.errors = list(errors)
        super().__init__("parser errors:" + "".join("\n\t" + error.replace("{", "{{").replace("}", "}}")
                                                    for error in self.errors))


class EvaluationError(GenericException):
    """Raised by a Session when a top-level input evaluates to a Monkey Error value."""

    def __init__(self, error):
        self.error = error
        super().__init__("{}", error.message)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and raise custom Monkey errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, line, line_num):
        """Registers line in traceback given path. Should be called prior to Session add."""
        self.traceback[path] = (line, line_num)

    def remove_line(self, path):
        """Removes line from traceback given path. Should be called after successful Session add."""
        self.traceback[path] = (None, None)

    def warn(self, msg, exprs=None):
        """Generates and prints a warning message about the most recently registered line."""
        warning = GenericException(msg, exprs)

        location = ""
        for file, (line, line_num) in self.traceback.items():
            if line is not None:
                location = f"{file}:{line_num}: "

        warning_msg = colored(location, attrs=["bold"])
        warning_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + warning.msg
        print(warning_msg)

    def throw(self, error):
        """Prints error with self.traceback. error must be a GenericException, and self.traceback must be a dict of
        file: (line, line_num) representing origination of error.
        """
        error_msg = ""
        lines = 0
        for file, (line, line_num) in self.traceback.items():  # assumes dict is insertion-ordered
            if line:
                error_msg += f"  File '{file}', line {line_num}:\n"
                error_msg += f"    {line.strip()}\n"
                lines += 1

        if lines > 1:
            error_msg = "Traceback:\n" + error_msg

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if self.fatal:
            sys.exit(1)
        self.traceback = {file: (None, None) for file in self.traceback}  # no need if error is fatal

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum recursion depth exceeded during evaluation"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}: {}'", [exc_type.__name__, exc_val], internal=True))
            do_exit = True

        return not do_exit
