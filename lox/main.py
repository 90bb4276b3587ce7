"""Runs the lox interpreter over a file, or in interactive mode. Called from the lox console script and from
`python -m lox`. Exit codes: 0 on success, 65 for scanner/parser errors, 66 for unreadable files and 70 for runtime
errors.
"""

import argparse

from lox.lang.error import ErrorHandler
from lox.lang.session import Session
from lox.lang.shell import Shell


def get_parser():
    parser = argparse.ArgumentParser(prog="lox", description="Tree-walking interpreter for the lox language.")
    parser.add_argument("command", choices=Session.COMMANDS + ("repl",),
                        help="pipeline stage to run: tokenize, parse, evaluate, run, or repl for interactive mode")
    parser.add_argument("file", nargs="?", help="file to interpret (not used by repl)")
    parser.add_argument("--no-color", action="store_true", help="never highlight error messages")
    return parser


def main(argv=None, out=None):
    """Runs lox with argv (sys.argv[1:] if None) and returns the process exit code."""
    parser = get_parser()
    args = parser.parse_args(argv)

    if args.command != "repl" and args.file is None:
        parser.error(f"the following arguments are required for {args.command}: file")

    with ErrorHandler(color=False if args.no_color else None) as error_handler:
        if args.command == "repl":
            Shell(Session(error_handler, "evaluate", out=out)).cmdloop()
            return 0

        sess = Session(error_handler, args.command, out=out)
        sess.execute(Session.read(args.file))

    return error_handler.exit_code
