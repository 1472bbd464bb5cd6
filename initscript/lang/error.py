"""Error handling for initscript. Only GenericExceptions (and their subclasses) should be encountered during running: if
another type of error is raised and makes it all the way to ErrorHandler, it is assumed to be an internal issue.
"""

import sys

from termcolor import colored


class GenericException(Exception):
    """Templates an error/warning message so that it can be used to throw an initscript error/warning. exprs[0] should
    be the offending source snippet, and line/column its position (both 1-based) when known.
    """

    def __init__(self, msg, exprs=None, line=None, column=None, width=None, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ""
        if isinstance(exprs, str):
            exprs = [exprs]

        self.raw_msg = msg.format(*exprs)
        self.msg = msg.format(*(colored(expr, attrs=["bold"]) for expr in exprs))  # color expr snippets
        self.expr = exprs[0]

        self.line = line
        self.column = column
        self.width = width if width is not None else len(self.expr)  # number of highlighted characters
        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.raw_msg)


class ParseError(GenericException):
    """Malformed construct. token is the offending Token, expected what the parser wanted there (if anything)."""

    def __init__(self, msg, token, expected=None):
        super().__init__(msg, token.description, line=token.line, column=token.column, width=len(token.lexeme))
        self.token = token
        self.expected = expected


class EvaluationError(GenericException):
    """Superclass for errors raised while evaluating a program."""

    def __init__(self, msg, name, node=None):
        line, column = (node.line, node.column) if node is not None else (None, None)
        super().__init__(msg, name, line=line, column=column)
        self.name = name


class UnboundCallee(EvaluationError):
    """Call of a name that is not bound in the current frame."""

    def __init__(self, name, node=None):
        super().__init__("function '{}' is not defined", name, node)


class NotCallable(EvaluationError):
    """Call of a name that is bound to something other than a function."""

    def __init__(self, name, value, node=None):
        super().__init__("'{}' is not a function", name, node)
        self.value = value


class ErrorHandler:
    """Context manager that will silently suppress Python errors and report custom initscript errors/warnings."""
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, fatal=True):
        self.fatal = fatal
        self.traceback = {}  # path: {line_num: source line}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = {}

    def register_lines(self, path, source, first_line=1):
        """Registers the lines of source (starting at first_line) under path, for error display."""
        lines = self.traceback.setdefault(path, {})
        for offset, line in enumerate(source.splitlines()):
            lines[first_line + offset] = line

    def remove_lines(self, path):
        """Forgets registered lines of path. Should be called once they can no longer produce errors."""
        self.traceback[path] = {}

    def locate(self, error):
        """Returns (path, source line) where error happened, or (path, None) if the line is unknown."""
        for path, lines in self.traceback.items():
            if error.line in lines:
                return path, lines[error.line]
        return next(iter(self.traceback), "<unknown>"), None

    @staticmethod
    def diagnose(error, line, warning=False):
        """Returns the offending part of line highlighted and bolded, with a caret line under it."""
        color = ErrorHandler.WARNING if warning else ErrorHandler.ERROR

        start = max(error.column - 1, 0)
        end = max(min(start + error.width, len(line)), start + 1)

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], color, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), color, attrs=["bold"])

        return diagnosis

    def warn(self, *args, **kwargs):
        """Generates and prints runtime warning message based on args."""
        error = GenericException(*args, **kwargs)
        path, line = self.locate(error)

        where = f"{path}:{error.line}:{error.column}: " if error.line is not None else f"{path}: "
        error_msg = colored(where, attrs=["bold"])
        error_msg += colored("warning: ", ErrorHandler.WARNING, attrs=["bold"]) + error.msg

        print(error_msg)

        if line is not None and error.column is not None and error.diagnosis:
            print(ErrorHandler.diagnose(error, line, warning=True))

    def throw(self, error):
        """Throws error using error and self.traceback. error must be a GenericException."""
        error_msg = ""
        path, line = self.locate(error)
        if line is not None:
            error_msg += f"  File '{path}', line {error.line}:\n"
            error_msg += f"    {line.strip()}\n"

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.msg
        print(error_msg)

        if not error.internal and line is not None and error.column is not None and error.diagnosis:
            print(ErrorHandler.diagnose(error, line))

        if self.fatal:
            sys.exit(1)

        for path in self.traceback:  # the failed input can no longer produce errors
            self.traceback[path] = {}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(GenericException("keyboard interrupt"))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(GenericException("maximum call depth exceeded"))
        elif exc_type is not None and issubclass(exc_type, GenericException):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(GenericException("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
