"""Runs initscript files or the interactive shell, with the error handling context manager. Installed as the
initscript console script.
"""

import argparse

from initscript.lang.error import ErrorHandler
from initscript.lang.shell import Shell
from initscript.lang.session import Session


def build_parser():
    parser = argparse.ArgumentParser(prog="initscript", description="initscript interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to command-line mode)", nargs="?")
    parser.add_argument("-W", "--warnings", action="store_true",
                        help="warn about unbound variables and template placeholders")

    dump = parser.add_mutually_exclusive_group()
    dump.add_argument("--tokens", action="store_true", help="print the token stream of file instead of running it")
    dump.add_argument("--tree", action="store_true", help="print the syntax tree of file instead of running it")
    return parser


def main(argv=None):
    """Runs initscript interpreter. Called from the initscript console script."""
    with ErrorHandler() as error_handler:
        parser = build_parser()
        args = parser.parse_args(argv)

        if args.file is None and (args.tokens or args.tree):
            parser.error("--tokens and --tree need a file")

        if args.file is not None:
            sess = Session(error_handler, args.file, cmd_line=False, warnings=args.warnings)

            if args.tokens:
                print(sess.tokens())
            elif args.tree:
                print(sess.tree())
            else:
                sess.add()
                sess.run()

        else:
            Shell(Session(error_handler, Session.SH_FILE, cmd_line=True, warnings=args.warnings)).cmdloop()


if __name__ == "__main__":
    main()
