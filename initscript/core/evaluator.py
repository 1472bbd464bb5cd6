"""Tree-walking evaluator for initscript.

Environment model: the evaluator owns a globals dict, filled only by top-level init declarations. Every run of a
program and every function call gets its own frame, a shallow copy of globals taken when it starts. Bindings made in a
frame (parameters, nested declarations) are dropped with the frame, and a call frame never sees the caller's locals.
"""

import sys

from initscript.core.nodes import Call, ExprStmt, Init, Literal, Log, Template, Variable
from initscript.core.values import NULL, Function, String, undefined
from initscript.lang.error import NotCallable, UnboundCallee


class Evaluator:
    """Executes programs (lists of statements). out is the stream log writes to (sys.stdout if None). on_warning, if
    given, is called with (msg, exprs, line=..., column=...) for reads of unbound names, plus width=... for template
    placeholders.
    """

    def __init__(self, out=None, on_warning=None):
        self.globals = {}
        self.out = out
        self.on_warning = on_warning

    def evaluate(self, program):
        """Runs program against a fresh top-level frame."""
        frame = dict(self.globals)
        for stmt in program:
            self.execute(stmt, frame, top_level=True)

    def execute(self, stmt, frame, top_level=False):
        if isinstance(stmt, Init):
            function = Function(stmt.params, stmt.body)
            frame[stmt.name] = function
            if top_level:
                self.globals[stmt.name] = function

        elif isinstance(stmt, Log):
            print(str(self.eval_expr(stmt.value, frame)), file=self.out if self.out is not None else sys.stdout)

        elif isinstance(stmt, ExprStmt):
            self.eval_expr(stmt.expr, frame)

        else:
            raise TypeError(f"cannot execute {stmt!r}")

    def eval_expr(self, expr, frame):
        """Reduces expr to a Value in frame."""
        if isinstance(expr, Literal):
            return String(expr.text)

        elif isinstance(expr, Template):
            return String(self.interpolate(expr, frame))

        elif isinstance(expr, Variable):
            if expr.name not in frame:
                self._warn("'{}' is not defined", expr.name, expr)
                return undefined(expr.name)
            return frame[expr.name]

        elif isinstance(expr, Call):
            return self.call(expr, frame)

        raise TypeError(f"cannot evaluate {expr!r}")

    def call(self, expr, frame):
        """Calls expr.callee with arguments evaluated in frame. Calls always produce NULL."""
        if expr.callee not in frame:
            raise UnboundCallee(expr.callee, expr)

        function = frame[expr.callee]
        if not isinstance(function, Function):
            raise NotCallable(expr.callee, function, expr)

        call_frame = dict(self.globals)
        for idx, arg in enumerate(expr.arguments):
            value = self.eval_expr(arg, frame)
            if idx < len(function.params):
                call_frame[function.params[idx]] = value

        for stmt in function.body:
            self.execute(stmt, call_frame)

        return NULL

    def interpolate(self, template, frame):
        """Substitutes every ${name} in template.raw with the stringified value of name in frame ("" if unbound)."""
        raw = template.raw
        result = []
        idx = 0

        while idx < len(raw):
            if raw[idx] == "$" and raw[idx + 1:idx + 2] == "{":
                end = raw.find("}", idx + 2)
                if end == -1:
                    end = len(raw)
                name = raw[idx + 2:end]

                if name in frame:
                    result.append(str(frame[name]))
                else:
                    line, column = self._placeholder_position(template, idx)
                    self._warn("placeholder '{}' is not defined", name, template, line, column, width=end + 1 - idx)
                idx = end + 1
            else:
                result.append(raw[idx])
                idx += 1

        return "".join(result)

    @staticmethod
    def _placeholder_position(template, idx):
        """Source line and column of the '${' at raw index idx. Off by the escape sequences in front of it."""
        if template.line is None or template.column is None:
            return template.line, template.column
        before = template.raw[:idx]
        newlines = before.count("\n")
        if newlines:
            return template.line + newlines, idx - before.rfind("\n")
        return template.line, template.column + 1 + idx

    def _warn(self, msg, name, node, line=None, column=None, **kwargs):
        if self.on_warning is not None:
            line = node.line if line is None else line
            column = node.column if column is None else column
            self.on_warning(msg, name, line=line, column=column, **kwargs)


def evaluate(program, out=None):
    """Runs program in a new Evaluator."""
    Evaluator(out).evaluate(program)
