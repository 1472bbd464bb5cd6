"""Runtime values. str() of a value is its stringified form, as written by log and template interpolation."""


class Value:
    """Superclass for runtime values."""


class String(Value):

    def __init__(self, text):
        self.text = text

    def __str__(self):
        return self.text

    def __repr__(self):
        return f"String({self.text!r})"

    def __eq__(self, other):
        return isinstance(other, String) and other.text == self.text

    def __hash__(self):
        return hash(self.text)


class Function(Value):
    """First-class function. Captures no enclosing scope: calls run in a fresh copy of the evaluator's globals."""

    def __init__(self, params, body):
        self.params = list(params)
        self.body = list(body)

    def __str__(self):
        return "<function>"

    def __repr__(self):
        return f"Function(params={self.params!r})"

    def __eq__(self, other):
        return isinstance(other, Function) and (other.params, other.body) == (self.params, self.body)

    def __hash__(self):
        return hash(tuple(self.params))


class Null(Value):

    def __str__(self):
        return "null"

    def __repr__(self):
        return "NULL"

    def __eq__(self, other):
        return isinstance(other, Null)

    def __hash__(self):
        return hash(None)


NULL = Null()


def undefined(name):
    """Sentinel value read from an unbound variable."""
    return String(f"<undefined {name}>")
