"""Abstract syntax tree nodes produced by the parser and walked by the evaluator.

```
<stmt> ::= Init(name, params, body)   ; function declaration
         | Log(value)                 ; the one built-in output statement
         | ExprStmt(expr)             ; expression evaluated for effect

<expr> ::= Literal(text) | Variable(name) | Call(callee, arguments) | Template(raw)
```

Nodes remember the line/column of the token they start at (for diagnostics). Positions are ignored by ==, so that
trees parsed from differently laid out sources compare equal.
"""

from abc import ABC


class Node(ABC):
    """Superclass for every statement and expression node."""
    fields = ()

    def __init__(self, line=None, column=None):
        self.line = line
        self.column = column
        self._cls = type(self).__name__

    @property
    def children(self):
        """Child nodes, in field order."""
        nodes = []
        for field in self.fields:
            value = getattr(self, field)
            if isinstance(value, Node):
                nodes.append(value)
            elif isinstance(value, list):
                nodes.extend(node for node in value if isinstance(node, Node))
        return nodes

    def display(self, indents=0):
        """Recursively displays the tree in a readable format.

        Format:
        <Node>(<field>=<value>, nodes=[
            <Node>(<field>=<value>)
        ])
        """
        attrs = ", ".join(f"{field}={getattr(self, field)!r}" for field in self.fields
                          if not isinstance(getattr(self, field), (Node, list)) or field == "params")
        result = f"{'    ' * indents}{self._cls}({attrs}"
        if self.children:
            result += (", " if attrs else "") + "nodes=["
            for node in self.children:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        attrs = ", ".join(f"{field}={getattr(self, field)!r}" for field in self.fields)
        return f"{self._cls}({attrs})"

    def __eq__(self, other):
        return type(self) is type(other) and all(getattr(self, f) == getattr(other, f) for f in self.fields)

    def __hash__(self):
        return hash(repr(self))


class Stmt(Node):
    """Superclass for statements."""


class Expr(Node):
    """Superclass for expressions."""


class Init(Stmt):
    """init NAME(PARAMS): BODY"""
    fields = ("name", "params", "body")

    def __init__(self, name, params, body, line=None, column=None):
        super().__init__(line, column)
        self.name = name
        self.params = list(params)
        self.body = list(body)


class Log(Stmt):
    fields = ("value",)

    def __init__(self, value, line=None, column=None):
        super().__init__(line, column)
        self.value = value


class ExprStmt(Stmt):
    fields = ("expr",)

    def __init__(self, expr, line=None, column=None):
        super().__init__(line, column)
        self.expr = expr


class Literal(Expr):
    """A realized string value."""
    fields = ("text",)

    def __init__(self, text, line=None, column=None):
        super().__init__(line, column)
        self.text = text


class Variable(Expr):
    fields = ("name",)

    def __init__(self, name, line=None, column=None):
        super().__init__(line, column)
        self.name = name


class Call(Expr):
    fields = ("callee", "arguments")

    def __init__(self, callee, arguments, line=None, column=None):
        super().__init__(line, column)
        self.callee = callee
        self.arguments = list(arguments)


class Template(Expr):
    """Raw template text; ${name} placeholders are resolved at evaluation time."""
    fields = ("raw",)

    def __init__(self, raw, line=None, column=None):
        super().__init__(line, column)
        self.raw = raw
