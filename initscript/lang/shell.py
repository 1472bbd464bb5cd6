"""Handles interactive/command-line mode for the initscript interpreter. Uses cmd as backend."""

import cmd


class Shell(cmd.Cmd):
    """initscript interpreter shell."""
    intro = "initscript interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations
    commands = ("exit", "EOF", "help", "?")  # whole-line shell commands

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self._first_line_num = 1
        self.line_num = 0

    def default(self, line):
        """Executes arbitrary initscript input."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if not self._tmp_line:
                self._first_line_num = self.line_num

            line, add_to_prev = self.sess.preprocess_line(line, self._tmp_line)

            if add_to_prev:
                self._tmp_line = line
                self.prompt = self.secondary_prompt
            else:
                self._tmp_line = ""
                self.prompt = self._tmp_prompt

                self.sess.add(line, self._first_line_num)
                self.sess.run()

    def onecmd(self, line):
        """Only a line that is exactly a shell command (or empty) is handled by cmd. Anything else, including
        continuation lines and calls such as exit() or help(x), is initscript input.
        """
        if self._tmp_line:
            return self.default(line)
        if not line.strip() or line.strip() in self.commands:
            return super().onecmd(line.strip())
        return self.default(line)

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the initscript interpreter!\n\n"
              "Declare functions with 'init', print with 'log' and call functions by name. \n"
              "Template strings (in back-ticks) substitute ${name} with the value of name.\n\n"
              "Try it out by typing 'init greet(name): log(`Hello, ${name}`)'. This will \n"
              "declare a function 'greet'. Next, try typing 'greet(\"Joe\")'. This will \n"
              "print 'Hello, Joe'.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
