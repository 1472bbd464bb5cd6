import io
import re
import unittest
from contextlib import redirect_stdout

from initscript.lang.error import ErrorHandler
from initscript.lang.session import Session
from initscript.lang.shell import Shell


ANSI = re.compile(r"\x1b\[[0-9;]*m")


class ShellTestCase(unittest.TestCase):

    def run_shell(self, *lines):
        """Feeds lines to a fresh shell. Returns (shell, everything printed)."""
        out = io.StringIO()
        shell = Shell(Session(ErrorHandler(), Session.SH_FILE, cmd_line=True), stdin=io.StringIO(), stdout=out)
        with redirect_stdout(out):
            for line in lines:
                if shell.onecmd(line):
                    break
        return shell, ANSI.sub("", out.getvalue())

    def test_statements(self):
        __, output = self.run_shell('log("hi")', 'init greet(name): log(`Hello, ${name}`)', 'greet("Joe")')
        self.assertEqual("hi\nHello, Joe\n", output)

    def test_continuation(self):
        shell, output = self.run_shell("init greet(name):")
        self.assertEqual(shell.secondary_prompt, shell.prompt)
        self.assertEqual("", output)

        __, output = self.run_shell("init greet(name):", "    log(`Hello, ${name}`)", 'greet("Ada")', "log(", '"x"', ")")
        self.assertEqual("Hello, Ada\nx\n", output)

    def test_continuation_of_command_name(self):
        __, output = self.run_shell("log(", "exit", ")")
        self.assertEqual("<undefined exit>\n", output)

    def test_errors_do_not_exit(self):
        shell, output = self.run_shell("log(1)", 'missing("x")', 'log("still here")')
        self.assertIn("error: unexpected", output)
        self.assertIn("error: function 'missing' is not defined", output)
        self.assertTrue(output.endswith("still here\n"))
        self.assertEqual(shell._tmp_prompt, shell.prompt)

    def test_error_reports_shell_line(self):
        __, output = self.run_shell('log("a")', "log(1)")
        self.assertIn("File '<in>', line 2:", output)

    def test_failed_line_is_forgotten(self):
        shell, output = self.run_shell('log("a")', "nope()")
        self.assertIn("File '<in>', line 2:", output)
        self.assertEqual({}, shell.sess.error_handler.traceback[Session.SH_FILE])

    def test_empty_line_and_exit(self):
        shell, output = self.run_shell("")
        self.assertEqual("", output)
        self.assertTrue(shell.onecmd("exit"))
        with redirect_stdout(io.StringIO()):
            self.assertTrue(shell.onecmd("EOF"))

    def test_help(self):
        __, output = self.run_shell("help")
        self.assertIn("Welcome to the initscript interpreter!", output)

        __, output = self.run_shell("  ?  ")
        self.assertIn("Welcome to the initscript interpreter!", output)

    def test_functions_named_like_commands(self):
        shell, output = self.run_shell('init exit(): log("bye")', "exit()", 'init help(x): log(x)', 'help("me")',
                                       'log("after")')
        self.assertEqual("bye\nme\nafter\n", output)
        self.assertNotIn("Welcome", output)

    def test_brackets_inside_literals(self):
        shell, output = self.run_shell('log("(")', "log(`)`)", 'log("<*")', 'log("done")')
        self.assertEqual("(\n)\n<*\ndone\n", output)
        self.assertEqual(shell._tmp_prompt, shell.prompt)


if __name__ == '__main__':
    unittest.main()
