"""
Usage Messages and Value Reports.

Formats the help message listing every registered parameter as

    --upwind-weight=SCALAR                        Relative weight of the upwind node. Default: 1.0

and dumps the effective configuration in three sections: parameters set at
run time, parameters left at their default, and run-time keys that no
registered parameter consumes.

Every printer writes to `out`, any object with a write() method; the
console printers from paramsys.printer are used when it is omitted.
"""

from typing import List, Optional, TextIO

from ..common import file_dump_yaml
from ..printer import cons, cerr, get_tty_width
from .context import ParamContext
from .keys import to_cli_flag
from .schema import ParamInfo, ParamKind


# column at which the usage text of a parameter starts
USAGE_COLUMN = 50

# indentation of wrapped usage lines
USAGE_INDENT = 52

# indentation of wrapped help preamble lines
PREAMBLE_INDENT = 2


def break_lines(msg: str, indent_width: int, max_width: int) -> str:
    """
    Greedy word wrap.

    Existing newlines are kept as hard breaks and the line after one starts
    without indentation. A line longer than max_width is broken at its last
    whitespace within the limit (the whitespace itself is dropped), or
    exactly at max_width if it has none. Continuation lines are indented by
    indent_width spaces.
    """
    indent = " " * indent_width

    result = []
    for line in msg.split("\n"):
        pieces, column = [], 0
        while column + len(line) > max_width:
            avail = max(1, max_width - column)
            cut   = line.rfind(" ", 1, avail + 1)
            for ws in "\t\r\f\v":
                cut = max(cut, line.rfind(ws, 1, avail + 1))

            if cut > 0:
                pieces.append(line[:cut])
                line = line[cut+1:]
            else:
                pieces.append(line[:avail])
                line = line[avail:]
            column = indent_width

        pieces.append(line)
        result.append(f"\n{indent}".join(pieces))

    return "\n".join(result)


def format_default(info: ParamInfo) -> str:
    if info.kind == ParamKind.BOOLEAN:
        return "false" if info.default_value == "0" else "true"
    if info.kind == ParamKind.STRING:
        return f'"{info.default_value}"'
    return info.default_value


def format_param_usage(info: ParamInfo, max_width: Optional[int] = None, flag: Optional[str] = None) -> str:
    """
    Render the help line of one parameter.

    Args:
        info: Registration record of the parameter.
        max_width: Wrap width; the terminal width when omitted.
        flag: Command line spelling; derived from the name when omitted.

    Returns:
        "    --name=TYPE" padded to USAGE_COLUMN, the usage text and, for
        parameters with a value, the default; wrapped with break_lines().
    """
    if max_width is None:
        max_width = get_tty_width()
    if flag is None:
        flag = to_cli_flag(info.name)

    message = f"    {flag}"
    if info.kind != ParamKind.FLAG:
        message += f"={info.kind.value}"

    message = f"{message}  ".ljust(USAGE_COLUMN)
    message += info.usage

    if info.kind != ParamKind.FLAG:
        if not message.endswith('.'):
            message += '.'
        message += f" Default: {format_default(info)}"

    return break_lines(message, USAGE_INDENT, max_width)


HELP_ENTRIES = [
    ("-h,--help",  ParamInfo(name="Help",    type_name="", usage="Print this help message and exit")),
    ("--help-all", ParamInfo(name="HelpAll", type_name="",
                             usage="Print all parameters, including obsolete, hidden and deprecated ones.")),
]


def print_usage(ctx: ParamContext, help_preamble: str, error_msg: str = "",
                out: Optional[TextIO] = None, show_all: bool = False) -> None:
    """
    Print the usage message: the error (if any), the preamble, then one line
    per registered parameter. Hidden parameters are only listed with
    show_all.
    """
    if out is None:
        out = cerr

    width = get_tty_width()

    text = ""
    if error_msg:
        text += f"{error_msg}\n\n"

    text += break_lines(help_preamble, PREAMBLE_INDENT, width)
    text += "\n"
    text += "Recognized options:\n"

    if help_preamble:
        for flag, info in HELP_ENTRIES:
            text += format_param_usage(info, width, flag) + "\n"

    for name in ctx.registry:
        info = ctx.registry.all_params[name]
        if show_all or not info.hidden:
            text += format_param_usage(info, width) + "\n"

    out.write(text)


def format_param_list(ctx: ParamContext, keys: List[str], print_defaults: bool = False) -> str:
    """ One 'key="value"' line per registered key, optionally with its default. """
    text = ""
    for key in keys:
        default = ctx.registry.all_params[key].default_value
        text += f'{key}="{ctx.effective_text(key)}"'
        if print_defaults:
            text += f' # default: "{default}"'
        text += "\n"
    return text


def format_unused(ctx: ParamContext, keys: List[str]) -> str:
    return "".join(f'{key}="{ctx.tree.get(key, "")}"\n' for key in keys)


def print_values(ctx: ParamContext, out: Optional[TextIO] = None) -> None:
    """Print every parameter with its effective value, one section per kind of origin."""
    if out is None:
        out = cons

    runtime, compile_time, unknown = ctx.partition()

    text = ""
    if runtime:
        text += "# [known parameters which were specified at run-time]\n"
        text += format_param_list(ctx, runtime, print_defaults=True)

    if compile_time:
        text += "# [parameters which were specified at compile-time]\n"
        text += format_param_list(ctx, compile_time)

    if unknown:
        text += "# [unused run-time specified parameters]\n"
        text += format_unused(ctx, unknown)

    out.write(text)
    out.flush()


def print_unused(ctx: ParamContext, out: Optional[TextIO] = None) -> bool:
    """
    Print the run-time keys that no registered parameter consumes.

    Returns:
        True if anything was printed.
    """
    if out is None:
        out = cons

    _, _, unknown = ctx.partition()
    if not unknown:
        return False

    out.write("# [unused run-time specified parameters]\n" + format_unused(ctx, unknown))
    out.flush()
    return True


def dump_values(ctx: ParamContext, filepath: str) -> None:
    """Write the three report sections to a YAML file."""
    file_dump_yaml(filepath, ctx.snapshot())
