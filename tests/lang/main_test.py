import io
import os
import re
import tempfile
import unittest
from contextlib import redirect_stdout
from unittest import mock

from initscript.main import main


ANSI = re.compile(r"\x1b\[[0-9;]*m")


class MainTestCase(unittest.TestCase):

    def setUp(self):
        self.tmp = tempfile.TemporaryDirectory()

    def tearDown(self):
        self.tmp.cleanup()

    def script(self, source):
        path = os.path.join(self.tmp.name, "script.is")
        with open(path, "w") as file:
            file.write(source)
        return path

    def run_main(self, *argv):
        out = io.StringIO()
        with redirect_stdout(out):
            main(list(argv))
        return ANSI.sub("", out.getvalue())

    def test_run_file(self):
        path = self.script('<* greeter *>\ninit greet(name):\n    log(`Hello, ${name}`)\n\ngreet("Joe")\ngreet("Ada")\n')
        self.assertEqual("Hello, Joe\nHello, Ada\n", self.run_main(path))

    def test_parse_error_is_fatal(self):
        path = self.script('log("never printed")\ninit f(a)\n    log(a)\n')
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit) as ctx:
            main([path])
        self.assertEqual(1, ctx.exception.code)

        output = ANSI.sub("", out.getvalue())
        self.assertNotIn("never printed", output)
        self.assertIn(f"File '{path}', line 3:", output)
        self.assertIn("error: expected ':' after function signature, found 'log'", output)

    def test_call_error_is_fatal(self):
        path = self.script('log("first")\nmissing()\nlog("second")\n')
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit):
            main([path])
        output = ANSI.sub("", out.getvalue())
        self.assertTrue(output.startswith("first\n"))
        self.assertIn("error: function 'missing' is not defined", output)
        self.assertNotIn("second", output)

    def test_missing_file(self):
        out = io.StringIO()
        with redirect_stdout(out), self.assertRaises(SystemExit):
            main([os.path.join(self.tmp.name, "nope.is")])
        self.assertIn("could not be opened", ANSI.sub("", out.getvalue()))

    def test_warnings(self):
        path = self.script("log(`Value: ${missing}`)\n")
        self.assertEqual("Value: \n", self.run_main(path))

        output = self.run_main("-W", path)
        self.assertIn(":1:13: warning: placeholder 'missing' is not defined", output)
        self.assertTrue(output.endswith("Value: \n"))

    def test_dumps(self):
        path = self.script('greet("Joe")')
        self.assertEqual("IDENTIFIER('greet')@1:1\nLEFT_PAREN@1:6\nSTRING_LITERAL('Joe')@1:7\nRIGHT_PAREN@1:12\n"
                         "EOF@1:13\n", self.run_main("--tokens", path))
        self.assertEqual("ExprStmt(nodes=[\n    Call(callee='greet', nodes=[\n        Literal(text='Joe')\n    ])\n])\n",
                         self.run_main("--tree", path))

    def test_dumps_need_file(self):
        with redirect_stdout(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            with mock.patch("sys.stderr", io.StringIO()):
                main(["--tokens"])
        self.assertEqual(2, ctx.exception.code)


if __name__ == '__main__':
    unittest.main()
