"""Token model shared by the lexer and the parser.

Every token carries a kind from the closed TokenKind enumeration, an optional payload (identifier name, string text,
raw number digits, boolean, raw template text, unknown character) and the 1-based line/column of its first character.
"""

from enum import Enum, auto


class TokenKind(Enum):
    """Lexical categories. Several keywords and symbols are reserved: they are lexed but no grammar rule uses them."""

    # keywords
    INIT = auto()
    IF = auto()
    ELIF = auto()
    ELSE = auto()
    FOR = auto()
    WHILE = auto()
    IN = auto()
    TRY = auto()
    CATCH = auto()
    FINALLY = auto()
    THROW = auto()
    CLASS = auto()
    EXTENDS = auto()
    FIXED = auto()
    SECURE = auto()
    RETURN = auto()
    RANGE = auto()
    LOG = auto()
    GET = auto()
    FROM = auto()

    # symbols
    LEFT_PAREN = auto()
    RIGHT_PAREN = auto()
    LEFT_BRACE = auto()
    RIGHT_BRACE = auto()
    LEFT_BRACKET = auto()
    RIGHT_BRACKET = auto()
    COLON = auto()
    SEMICOLON = auto()
    COMMA = auto()
    DOT = auto()
    ARROW = auto()          # ->
    STAR = auto()
    EQUAL = auto()
    DOUBLE_EQUAL = auto()
    NOT_EQUAL = auto()      # != and, for now, a bare !
    GREATER = auto()
    LESS = auto()
    GREATER_EQUAL = auto()
    LESS_EQUAL = auto()
    PLUS = auto()
    MINUS = auto()
    SLASH = auto()
    PERCENT = auto()
    QUESTION = auto()
    TERNARY_COLON = auto()
    ELLIPSIS = auto()

    # literals (payload in Token.value)
    IDENTIFIER = auto()
    STRING_LITERAL = auto()
    NUMBER_LITERAL = auto()
    BOOLEAN_LITERAL = auto()
    TEMPLATE_STRING = auto()
    NULL = auto()
    UNDEFINED = auto()

    COMMENT = auto()  # never produced

    EOF = auto()
    UNKNOWN = auto()


# (kind, value) pairs; value is None for plain keywords
KEYWORDS = {
    "init": (TokenKind.INIT, None),
    "if": (TokenKind.IF, None),
    "elif": (TokenKind.ELIF, None),
    "else": (TokenKind.ELSE, None),
    "for": (TokenKind.FOR, None),
    "while": (TokenKind.WHILE, None),
    "in": (TokenKind.IN, None),
    "try": (TokenKind.TRY, None),
    "catch": (TokenKind.CATCH, None),
    "finally": (TokenKind.FINALLY, None),
    "throw": (TokenKind.THROW, None),
    "class": (TokenKind.CLASS, None),
    "extends": (TokenKind.EXTENDS, None),
    "fixed": (TokenKind.FIXED, None),
    "secure": (TokenKind.SECURE, None),
    "return": (TokenKind.RETURN, None),
    "range": (TokenKind.RANGE, None),
    "log": (TokenKind.LOG, None),
    "get": (TokenKind.GET, None),
    "from": (TokenKind.FROM, None),
    "true": (TokenKind.BOOLEAN_LITERAL, True),
    "false": (TokenKind.BOOLEAN_LITERAL, False),
    "null": (TokenKind.NULL, None),
    "undefined": (TokenKind.UNDEFINED, None),
}

# keywords the grammar reserves but cannot parse yet
RESERVED = frozenset({
    TokenKind.IF, TokenKind.ELIF, TokenKind.ELSE, TokenKind.FOR, TokenKind.WHILE, TokenKind.IN, TokenKind.TRY,
    TokenKind.CATCH, TokenKind.FINALLY, TokenKind.THROW, TokenKind.CLASS, TokenKind.EXTENDS, TokenKind.FIXED,
    TokenKind.SECURE, TokenKind.RETURN, TokenKind.RANGE, TokenKind.GET, TokenKind.FROM,
})

SYMBOLS = {
    "(": TokenKind.LEFT_PAREN,
    ")": TokenKind.RIGHT_PAREN,
    "{": TokenKind.LEFT_BRACE,
    "}": TokenKind.RIGHT_BRACE,
    "[": TokenKind.LEFT_BRACKET,
    "]": TokenKind.RIGHT_BRACKET,
    ":": TokenKind.COLON,
    ";": TokenKind.SEMICOLON,
    ",": TokenKind.COMMA,
    ".": TokenKind.DOT,
    "*": TokenKind.STAR,
    "+": TokenKind.PLUS,
    "/": TokenKind.SLASH,
    "%": TokenKind.PERCENT,
    "?": TokenKind.QUESTION,
}

# first char: (second char, kind if matched, kind otherwise)
TWO_CHAR_SYMBOLS = {
    "-": (">", TokenKind.ARROW, TokenKind.MINUS),
    "=": ("=", TokenKind.DOUBLE_EQUAL, TokenKind.EQUAL),
    "!": ("=", TokenKind.NOT_EQUAL, TokenKind.NOT_EQUAL),
    ">": ("=", TokenKind.GREATER_EQUAL, TokenKind.GREATER),
    "<": ("=", TokenKind.LESS_EQUAL, TokenKind.LESS),
}


class Token:
    """A classified lexical unit. lexeme is the raw source text and is only used for diagnostics."""

    def __init__(self, kind, line, column, value=None, lexeme=""):
        self.kind = kind
        self.value = value
        self.line = line
        self.column = column
        self.lexeme = lexeme

    @property
    def description(self):
        """Short human-readable form used in error messages."""
        if self.kind is TokenKind.EOF:
            return "end of input"
        if self.kind is TokenKind.IDENTIFIER:
            return f"identifier '{self.value}'"
        if self.lexeme:
            return f"'{self.lexeme}'"
        return self.kind.name.lower()

    def __repr__(self):
        value = "" if self.value is None else f"({self.value!r})"
        return f"{self.kind.name}{value}@{self.line}:{self.column}"

    def __eq__(self, other):
        return (isinstance(other, Token) and (self.kind, self.value, self.line, self.column)
                == (other.kind, other.value, other.line, other.column))

    def __hash__(self):
        return hash((self.kind, self.value, self.line, self.column))
