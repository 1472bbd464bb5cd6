"""Lexical analysis for initscript. Turns source text into Tokens, one per next_token call.

The lexer never fails: characters it does not recognise become UNKNOWN tokens, and an unterminated string or template
becomes an EOF token at the position of its opening quote, leaving the parser to reject the program.

```
<whitespace> ::= " " | "\t" | "\r" | "\n"
<comment>    ::= "<*" <char>* "*>"               ; no nesting, unterminated comments run to end of input
<identifier> ::= [A-Za-z_$] [A-Za-z0-9_$]*       ; unless it is a keyword
<number>     ::= <digit>+ ["." <digit>*]
<string>     ::= ('"' | "'") <char>* ('"' | "'")
<template>   ::= "`" <char>* "`"                 ; ${name} placeholders are kept as raw text
```
"""

from initscript.core.tokens import KEYWORDS, SYMBOLS, TWO_CHAR_SYMBOLS, Token, TokenKind


WHITESPACE = " \t\r\n"
QUOTES = "\"'"
STRING_ESCAPES = {"n": "\n", "t": "\t", "\"": "\"", "'": "'", "\\": "\\"}
TEMPLATE_ESCAPES = {"n": "\n", "t": "\t", "`": "`", "$": "$", "\\": "\\"}


def is_identifier_start(char):
    return char.isascii() and (char.isalpha() or char in "_$")


def is_identifier_part(char):
    return char.isascii() and (char.isalnum() or char in "_$")


def is_digit(char):
    return "0" <= char <= "9"


class Lexer:
    """Character cursor over a source string. line can be set for sources that do not start on line 1 (shell input)."""

    def __init__(self, source, line=1):
        self.source = source
        self.position = 0
        self.line = line
        self.column = 1
        self.unterminated = False  # input ended inside a comment, string or template

    def next_token(self):
        """Returns the next Token. Once input is exhausted, every call returns EOF."""
        self._skip_whitespace_and_comments()

        start, line, column = self.position, self.line, self.column
        if self._at_end():
            return Token(TokenKind.EOF, line, column)

        char = self._advance()

        if char in SYMBOLS:
            kind, value = SYMBOLS[char], None
        elif char in TWO_CHAR_SYMBOLS:
            second, matched, single = TWO_CHAR_SYMBOLS[char]
            kind, value = (matched if self._match(second) else single), None
        elif char in QUOTES:
            return self._scan_quoted(start, line, column, QUOTES, STRING_ESCAPES, TokenKind.STRING_LITERAL)
        elif char == "`":
            return self._scan_quoted(start, line, column, "`", TEMPLATE_ESCAPES, TokenKind.TEMPLATE_STRING)
        elif is_digit(char):
            kind, value = TokenKind.NUMBER_LITERAL, self._scan_number(start)
        elif is_identifier_start(char):
            while not self._at_end() and is_identifier_part(self._peek()):
                self._advance()
            word = self.source[start:self.position]
            kind, value = KEYWORDS.get(word, (TokenKind.IDENTIFIER, word))
        else:
            kind, value = TokenKind.UNKNOWN, char

        return Token(kind, line, column, value, self.source[start:self.position])

    def tokens(self):
        """Yields tokens up to and including the first EOF."""
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                return

    def _scan_number(self, start):
        while not self._at_end() and is_digit(self._peek()):
            self._advance()
        if self._peek() == ".":
            self._advance()
            while not self._at_end() and is_digit(self._peek()):
                self._advance()
        return self.source[start:self.position]

    def _scan_quoted(self, start, line, column, closers, escapes, kind):
        """Scans a string or template body after its opening quote."""
        text = []
        while not self._at_end() and self._peek() not in closers:
            char = self._advance()
            if char == "\\" and not self._at_end():
                escaped = self._advance()
                text.append(escapes.get(escaped, escaped))
            else:
                text.append(char)

        if self._at_end():
            # unterminated: nothing follows, so later calls keep returning EOF
            self.unterminated = True
            return Token(TokenKind.EOF, line, column)

        self._advance()
        return Token(kind, line, column, "".join(text), self.source[start:self.position])

    def _skip_whitespace_and_comments(self):
        while not self._at_end():
            char = self._peek()
            if char in WHITESPACE:
                self._advance()
            elif char == "<" and self._peek(1) == "*":
                self._advance()
                self._advance()
                while not self._at_end() and not (self._peek() == "*" and self._peek(1) == ">"):
                    self._advance()
                if self._at_end():
                    self.unterminated = True
                else:
                    self._advance()
                    self._advance()
            else:
                break

    def _at_end(self):
        return self.position >= len(self.source)

    def _peek(self, offset=0):
        """Character offset places ahead, or "" past the end."""
        idx = self.position + offset
        return self.source[idx] if idx < len(self.source) else ""

    def _advance(self):
        char = self.source[self.position]
        self.position += 1
        if char == "\n":
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        return char

    def _match(self, expected):
        if self._peek() != expected:
            return False
        self._advance()
        return True


def tokenize(source, line=1):
    """Returns the full token list for source, always ending in exactly one EOF."""
    return list(Lexer(source, line).tokens())
