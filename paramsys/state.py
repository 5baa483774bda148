"""
Process-wide parameter context.

Host programs that want the classic global parameter system use the
functions below; they all forward to one ParamContext owned by this module.
Code that needs isolation (libraries, tests) creates its own ParamContext
instead and calls the same operations on it.
"""

import sys, typing

from .params import parsers, reporter
from .params.context import ParamContext, ParamRef


gCTX: ParamContext = ParamContext()


def CTX() -> ParamContext:
    # pylint: disable=global-variable-not-assigned
    global gCTX
    return gCTX


def register(param: type, usage: str) -> None:
    CTX().register(param, usage)


def hide(param: ParamRef) -> None:
    CTX().hide(param)


def end_registration() -> None:
    CTX().end_registration()


def reset() -> None:
    CTX().reset()


def get(param: ParamRef, error_if_unregistered: bool = True) -> typing.Any:
    return CTX().get(param, error_if_unregistered)


def is_set(param: ParamRef, error_if_unregistered: bool = True) -> bool:
    return CTX().is_set(param, error_if_unregistered)


def set_default(param: ParamRef, value: typing.Any) -> None:
    CTX().set_default(param, value)


def get_lists() -> typing.Tuple[list, list]:
    return CTX().get_lists()


def parse_command_line_options(argv: typing.List[str] = None, help_preamble: str = "",
                               positional_handler: parsers.PositionalHandler = None) -> str:
    """ Parses argv (sys.argv[1:] by default) into the process-wide context. """
    if argv is None:
        argv = sys.argv[1:]

    return parsers.parse_command_line_options(CTX(), argv, help_preamble, positional_handler)


def parse_parameter_file(filepath: str, overwrite: bool = True) -> None:
    parsers.parse_parameter_file(CTX(), filepath, overwrite)


def print_usage(help_preamble: str, error_msg: str = "", out: typing.TextIO = None, show_all: bool = False) -> None:
    reporter.print_usage(CTX(), help_preamble, error_msg, out, show_all)


def print_values(out: typing.TextIO = None) -> None:
    reporter.print_values(CTX(), out)


def print_unused(out: typing.TextIO = None) -> bool:
    return reporter.print_unused(CTX(), out)
