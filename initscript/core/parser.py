"""Recursive-descent parser for initscript. Consumes the token list produced by the lexer and returns the program as a
list of top-level statements.

```
<program>    ::= { <init> | <log> | <exprstmt> } EOF
<init>       ::= "init" IDENTIFIER "(" [ IDENTIFIER { "," IDENTIFIER } [","] ] ")" ":" [ <log> ]
<log>        ::= "log" "(" <expression> ")"
<exprstmt>   ::= <expression>                     ; must start with an identifier
<expression> ::= IDENTIFIER [ "(" [ <expression> { "," <expression> } [","] ] ")" ]
               | STRING_LITERAL
               | TEMPLATE_STRING
```

A function body is at most one log statement. Any malformed construct raises ParseError; there is no recovery, so one
bad statement rejects the whole program.
"""

from initscript.core.nodes import Call, ExprStmt, Init, Literal, Log, Template, Variable
from initscript.core.tokens import RESERVED, TokenKind
from initscript.lang.error import ParseError


class Parser:

    def __init__(self, tokens):
        """tokens must end in EOF (tokenize guarantees it)."""
        self.tokens = list(tokens)
        self.position = 0

        if not self.tokens or self.tokens[-1].kind is not TokenKind.EOF:
            raise ValueError("token sequence must end in EOF")

    def parse(self):
        """Parses the whole token sequence into a list of statements."""
        statements = []

        while not self._at_end():
            token = self._peek()
            if self._match(TokenKind.INIT):
                statements.append(self._parse_init(token))
            elif self._match(TokenKind.LOG):
                statements.append(self._parse_log(token))
            elif token.kind is TokenKind.IDENTIFIER:
                statements.append(ExprStmt(self._parse_expression(), token.line, token.column))
            else:
                raise self._unexpected(token, "unexpected {} at top level")

        return statements

    def _parse_init(self, keyword):
        name = self._advance()
        if name.kind is not TokenKind.IDENTIFIER:
            raise ParseError("expected function name after 'init', found {}", name, TokenKind.IDENTIFIER)

        self._expect(TokenKind.LEFT_PAREN, "expected '(' after function name, found {}")

        params = []
        while not self._check(TokenKind.RIGHT_PAREN):
            param = self._advance()
            if param.kind is not TokenKind.IDENTIFIER:
                raise ParseError("expected parameter name, found {}", param, TokenKind.IDENTIFIER)
            params.append(param.value)

            if not self._match(TokenKind.COMMA):
                break

        self._expect(TokenKind.RIGHT_PAREN, "expected ')' after parameters, found {}")
        self._expect(TokenKind.COLON, "expected ':' after function signature, found {}")

        body = []
        token = self._peek()
        if self._match(TokenKind.LOG):
            body.append(self._parse_log(token))

        return Init(name.value, params, body, keyword.line, keyword.column)

    def _parse_log(self, keyword):
        self._expect(TokenKind.LEFT_PAREN, "expected '(' after 'log', found {}")
        value = self._parse_expression()
        self._expect(TokenKind.RIGHT_PAREN, "expected ')' after expression, found {}")
        return Log(value, keyword.line, keyword.column)

    def _parse_expression(self):
        token = self._advance()

        if token.kind is TokenKind.IDENTIFIER:
            if not self._match(TokenKind.LEFT_PAREN):
                return Variable(token.value, token.line, token.column)

            arguments = []
            while not self._check(TokenKind.RIGHT_PAREN):
                arguments.append(self._parse_expression())
                if not self._match(TokenKind.COMMA):
                    break

            self._expect(TokenKind.RIGHT_PAREN, "expected ')' after arguments, found {}")
            return Call(token.value, arguments, token.line, token.column)

        elif token.kind is TokenKind.STRING_LITERAL:
            return Literal(token.value, token.line, token.column)

        elif token.kind is TokenKind.TEMPLATE_STRING:
            return Template(token.value, token.line, token.column)

        raise self._unexpected(token, "unexpected {} in expression")

    @staticmethod
    def _unexpected(token, msg):
        """ParseError for token in a position where no rule applies. Reserved keywords get a dedicated message."""
        if token.kind in RESERVED:
            return ParseError("{} is reserved but not yet supported", token)
        return ParseError(msg, token)

    def _peek(self):
        return self.tokens[self.position]

    def _advance(self):
        token = self.tokens[self.position]
        if token.kind is not TokenKind.EOF:  # never run past EOF
            self.position += 1
        return token

    def _at_end(self):
        return self._peek().kind is TokenKind.EOF

    def _check(self, kind):
        return self._peek().kind is kind

    def _match(self, kind):
        if self._check(kind):
            self._advance()
            return True
        return False

    def _expect(self, kind, msg):
        token = self._peek()
        if token.kind is not kind:
            raise ParseError(msg, token, kind)
        return self._advance()


def parse(tokens):
    """Returns the list of top-level statements for tokens. Raises ParseError on malformed input."""
    return Parser(tokens).parse()
