"""Runs the Monkey interpreter on a source file or in command-line mode. Also uses error handling context manager.
Installed as the `monkey` console script.

Python version must be >=3.10, because the evaluator dispatches on node and value types with structural pattern
matching.
"""

import argparse
import logging
import sys

from monkey.lang.error import ErrorHandler
from monkey.lang.session import Session
from monkey.lang.shell import Shell


def main(argv=None):
    """Runs Monkey interpreter. Called from monkey console script."""
    assert sys.version_info >= (3, 10), "monkey cannot be run with python < 3.10"

    with ErrorHandler() as error_handler:
        parser = argparse.ArgumentParser(prog="monkey")
        parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
        parser.add_argument("--mode", choices=Session.MODES, default="eval",
                            help="evaluate input, or only dump its tokens (lex) or parsed form (parse)")
        parser.add_argument("--recursion-limit", type=int, default=None,
                            help="host recursion limit; bounds how deeply Monkey programs can nest and recurse")
        parser.add_argument("--verbose", action="store_true", help="log lexer/parser/evaluator debug information")
        args = parser.parse_args(argv)

        if args.verbose:
            logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

        if args.recursion_limit is not None:
            sys.setrecursionlimit(args.recursion_limit)

        if args.file is not None:
            sess = Session(error_handler, args.file, args.mode, cmd_line=False)
            sess.run()

            for result in sess.results:
                print(result)

        else:
            Shell(Session(error_handler, Session.SH_FILE, args.mode, cmd_line=True)).cmdloop()


if __name__ == "__main__":
    main()
