"""Session control for initscript. Drives the lex -> parse -> evaluate pipeline, either for a whole script file or line
by line in command-line mode.
"""

from initscript.core.evaluator import Evaluator
from initscript.core.lexer import Lexer, tokenize
from initscript.core.parser import parse
from initscript.core.tokens import TokenKind
from initscript.lang.error import GenericException


class Session:
    """Governs an initscript session. One Evaluator lives for the whole session, so top-level declarations stay
    visible to later statements (and later shell lines).
    """
    SH_FILE = "<in>"  # command-line interpreter filename

    def __init__(self, error_handler, path, cmd_line, warnings=False, out=None):
        self.error_handler = error_handler
        self.error_handler.register_file(path)

        self.path = path          # used for error messages
        self.cmd_line = cmd_line  # whether or not in command-line mode
        self.source = ""

        self.evaluator = Evaluator(out, error_handler.warn if warnings else None)
        self.to_exec = []  # parsed statements waiting for run

        if self.cmd_line:
            self.error_handler.fatal = False

        if path != Session.SH_FILE:
            try:
                with open(path, "r") as file:
                    self.source = file.read()
            except OSError:
                raise GenericException("'{}' could not be opened", path, diagnosis=False)

        elif not cmd_line:
            raise GenericException("'<in>' is a reserved filename")

    @staticmethod
    def preprocess_line(line, add_to_prev):
        """Joins line onto add_to_prev (the pending incomplete input, "" if none). Returns the joined input and whether
        it is still incomplete: more opening than closing parentheses, an unclosed comment, string or template, or a
        trailing ':'. Brackets inside literals and comments do not count.
        """
        if add_to_prev:
            line = add_to_prev + "\n" + line

        lexer = Lexer(line)
        kinds = [token.kind for token in lexer.tokens()][:-1]  # without EOF

        incomplete = kinds.count(TokenKind.LEFT_PAREN) > kinds.count(TokenKind.RIGHT_PAREN)
        incomplete |= lexer.unterminated
        incomplete |= bool(kinds) and kinds[-1] is TokenKind.COLON
        return line, incomplete

    def add(self, source=None, line_num=1):
        """Lexes and parses source (the session file if None) and queues its statements. Execution is delayed until
        run is called. Raises ParseError on malformed input, in which case nothing is queued.
        """
        if source is None:
            source = self.source
        self.error_handler.register_lines(self.path, source, line_num)  # in case error is raised

        self.to_exec.extend(parse(tokenize(source, line_num)))

    def run(self):
        """Evaluates the queued statements. The queue is emptied even if evaluation raises."""
        program, self.to_exec = self.to_exec, []
        self.evaluator.evaluate(program)

        if self.cmd_line:
            self.error_handler.remove_lines(self.path)

    def tokens(self, source=None):
        """Token stream of source (the session file if None), one token per line."""
        if source is None:
            source = self.source
        return "\n".join(repr(token) for token in tokenize(source))

    def tree(self, source=None):
        """Syntax tree of source (the session file if None), one top-level statement per block."""
        if source is None:
            source = self.source
        self.error_handler.register_lines(self.path, source)
        return "\n".join(stmt.display() for stmt in parse(tokenize(source)))
