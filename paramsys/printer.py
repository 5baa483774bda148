import typing

import rich, rich.console


class ParamPrinter:
    def __init__(self, stderr: bool = False):
        self.stack = []
        self.raw   = rich.console.Console(stderr=stderr)

    def reset(self):
        self.stack = []

    def indent(self, msg: str = None):
        msg = msg if msg is not None else "  "

        self.stack.append(msg)

    def unindent(self, times: int = None):
        if times is None:
            times = 1

        for _ in range(times):
            self.stack.pop()

    def print(self, *args, msg: typing.Any = None, no_indent: bool = False, **kwargs):
        if msg is None:
            msg = ""

        if no_indent:
            self.raw.print(str(msg), soft_wrap=True, *args, **kwargs)
        else:
            print_s, lines = "", str(msg).split('\n', maxsplit=-1)
            for i, s in enumerate(lines):
                newline = '\n' if (i != len(lines)-1) else ''
                print_s += f"{''.join(self.stack)}{s}{newline}"

            self.raw.print(print_s, soft_wrap=True, *args, **kwargs)

    def write(self, text: str):
        """ File-like sink: emits text verbatim, without markup or highlighting. """
        self.raw.file.write(text)

    def flush(self):
        self.raw.file.flush()

    def print_exception(self):
        self.raw.print_exception()


def get_tty_width() -> int:
    """
    Returns the width at which help text is wrapped: effectively unlimited
    when stdout is not a terminal, at least 80 columns otherwise.
    """

    if not cons.raw.is_terminal:
        return 10*1000

    return max(80, cons.raw.width)


cons = ParamPrinter()
cerr = ParamPrinter(stderr=True)
