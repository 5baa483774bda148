"""
Command Line and Parameter File Parsers.

Both parsers write raw "key -> value" text into the tree of a ParamContext;
typed interpretation happens later in ParamContext.get().

Command line
------------
    --upwind-weight=0.5      sets UpwindWeight to "0.5"
    -x=3                     sets the single-letter parameter X
    -h, --help, --help-all   print the usage message (needs a help preamble)

Any other token is handed to a positional argument handler.

Parameter files
---------------
INI-like, one "key = value" per line:

    # comment
    ; comment
    upwind-weight = 0.5          # trailing comment
    output-dir    = "run \\"1\\""
    newton.max-iterations = 20

Keys are canonicalized (dot-separated segments individually), values are
either unquoted (up to the first whitespace) or double-quoted with the
escapes \\n \\r \\t \\" and \\\\. [section] headers are not interpreted.
"""

from typing import Callable, List, Optional, Set, Tuple, Union

from ..common import file_read
from ..printer import cons, cerr
from .context import ParamContext
from .errors import DuplicateKeyError, ParameterSyntaxError, format_param
from .keys import (
    canonicalize,
    canonicalize_path,
    parse_key_token,
    parse_value_token,
    skip_leading_whitespace,
)
from .reporter import print_usage


HELP_CALLED = "Help called"

SetValue = Callable[[str, str], None]

# (set_value, seen_keys, argv, index, num_positional) -> count or (count, error message)
PositionalHandler = Callable[
    [SetValue, Set[str], List[str], int, int],
    Union[int, Tuple[int, str]],
]


def no_positional_parameters(set_value: SetValue, seen_keys: Set[str], argv: List[str],
                             index: int, num_positional: int) -> Tuple[int, str]:
    """Default positional handler: every positional argument is illegal."""
    # pylint: disable=unused-argument
    return 0, f'Illegal parameter "{argv[index]}".'


def _is_option(arg: str) -> bool:
    if arg.startswith("--"):
        return True
    # single-letter spelling produced by to_cli_flag(): -x=value
    return len(arg) >= 3 and arg[0] == '-' and arg[1].isalpha() and arg[2] == '='


def parse_command_line_options(
    ctx: ParamContext,
    argv: List[str],
    help_preamble: str = "",
    positional_handler: Optional[PositionalHandler] = None,
) -> str:
    """
    Parse command line arguments into the context's tree.

    Args:
        ctx: The parameter context to populate.
        argv: The arguments without the program name (sys.argv[1:]).
        help_preamble: If non-empty, -h/--help/--help-all print the usage
            message preceded by this text, and errors print it as well.
        positional_handler: Called for every argument that is not an option.
            It receives a callback to set tree values, the set of keys seen
            so far, argv, the index of the argument and the number of
            positional arguments handled before. It returns how many
            arguments it consumed, optionally paired with an error message;
            a count below one aborts parsing with that message.

    Returns:
        An empty string on success, HELP_CALLED after printing help, or a
        human-readable error message.

    Raises:
        InvalidKeyFormatError: An option name cannot be canonicalized.
        DuplicateKeyError: The same parameter is given twice.
    """
    if positional_handler is None:
        positional_handler = no_positional_parameters

    if help_preamble:
        for arg in argv:
            if arg in ("-h", "--help"):
                print_usage(ctx, help_preamble, out=cons)
                return HELP_CALLED
            if arg == "--help-all":
                print_usage(ctx, help_preamble, out=cons, show_all=True)
                return HELP_CALLED

    def fail(msg: str) -> str:
        if help_preamble:
            print_usage(ctx, help_preamble, error_msg=msg, out=cerr)
        return msg

    seen_keys: Set[str] = set()
    num_positional = 0

    i = 0
    while i < len(argv):
        arg = argv[i]

        if not _is_option(arg):
            result = positional_handler(ctx.tree.set, seen_keys, argv, i, num_positional)
            num_handled, error_msg = result if isinstance(result, tuple) else (result, "")
            if num_handled < 1:
                return fail(error_msg or f'Illegal parameter "{arg}".')

            num_positional += 1
            i += num_handled
            continue

        s = arg[2:] if arg.startswith("--") else arg[1:]
        if not s or not s[0].isalpha():
            return fail(
                f"Parameter name of argument {i+1} ('{arg}') is invalid because it does not start with a letter."
            )

        key, s = parse_key_token(s)
        name = canonicalize(key, True)

        if name in seen_keys:
            msg = f"Parameter {format_param(name)} specified multiple times as a command line parameter"
            fail(msg)
            raise DuplicateKeyError(msg)
        seen_keys.add(name)

        if not s.startswith('='):
            return fail(f"Parameter {format_param(name)} is missing a value. Please use {arg}=value.")

        ctx.tree.set(name, s[1:])
        i += 1

    return ""


def _is_comment(s: str) -> bool:
    return s.startswith('#') or s.startswith(';')


def parse_parameter_text(ctx: ParamContext, text: str, source: str = "<string>", overwrite: bool = True) -> None:
    """
    Parse INI-like parameter text into the context's tree.

    Args:
        ctx: The parameter context to populate.
        text: File contents.
        source: Name used in error messages.
        overwrite: Replace values already in the tree. When False, keys the
            tree already holds keep their value.

    Raises:
        InvalidKeyFormatError: A key cannot be canonicalized.
        DuplicateKeyError: A key appears twice in this text.
        MalformedQuotedStringError: A quoted value is broken.
        ParameterSyntaxError: A line is not "key = value [comment]".
    """
    seen_keys: Set[str] = set()

    for line_num, line in enumerate(text.split("\n"), start=1):
        error_prefix = f"{source}:{line_num}: "

        line = skip_leading_whitespace(line)
        if not line or _is_comment(line):
            continue

        key, line = parse_key_token(line)
        canonical_key = canonicalize_path(key, error_prefix)

        if canonical_key in seen_keys:
            raise DuplicateKeyError(
                f"{error_prefix}Parameter {format_param(canonical_key)} seen multiple times in the same file"
            )
        seen_keys.add(canonical_key)

        line = skip_leading_whitespace(line)
        if not line.startswith('='):
            raise ParameterSyntaxError(f"{error_prefix}Syntax error, expecting 'key=value'")

        line = skip_leading_whitespace(line[1:])
        if not line or _is_comment(line):
            raise ParameterSyntaxError(f"{error_prefix}Syntax error, expecting 'key=value'")

        value, line = parse_value_token(line, line.startswith('"'), error_prefix)

        line = skip_leading_whitespace(line)
        if line and not _is_comment(line):
            raise ParameterSyntaxError(f"{error_prefix}Syntax error, unexpected '{line}' after value")

        if overwrite or not ctx.tree.has_key(canonical_key):
            ctx.tree.set(canonical_key, value)


def parse_parameter_file(ctx: ParamContext, filepath: str, overwrite: bool = True) -> None:
    """
    Read parameters from an INI-like file; see parse_parameter_text().

    Raises:
        ParamSystemException: The file cannot be read.
    """
    parse_parameter_text(ctx, file_read(filepath), source=filepath, overwrite=overwrite)


__all__ = [
    'HELP_CALLED', 'PositionalHandler', 'no_positional_parameters',
    'parse_command_line_options', 'parse_parameter_text', 'parse_parameter_file',
]
