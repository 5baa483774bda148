"""
Run-time Parameter System.

Declare typed parameters with a compile-time default, override them from
the command line or INI-like files, and read them back through one typed
accessor:

    from paramsys.params import ParamContext, Parameter, parse_command_line_options

    class UpwindWeight(Parameter):
        value = 1.0

    ctx = ParamContext()
    ctx.register(UpwindWeight, "Relative weight of the upwind node.")
    ctx.end_registration()
    parse_command_line_options(ctx, ["--upwind-weight=0.5"])
    ctx.get(UpwindWeight)   # 0.5

Import Order
------------
The submodules are imported leaf-first: errors, keys, tree and schema have
no dependencies inside the package; registry builds on them; context
composes registry and tree; reporter and parsers operate on a context.
"""

from .errors import (
    ConflictingRegistrationError,
    DuplicateKeyError,
    InvalidKeyFormatError,
    LifecycleError,
    MalformedQuotedStringError,
    ParameterSyntaxError,
    ParameterValueError,
    ParamTreeError,
    RegistrationClosedError,
    RegistrationNotClosedError,
    UnknownParameterError,
)
from .keys import canonicalize, canonicalize_path, from_cli_flag, to_cli_flag
from .tree import ParamTree
from .schema import ParamInfo, ParamKind, Parameter, define
from .registry import ParamRegistry, RegistrationState
from .context import ParamContext
from .reporter import break_lines, format_param_usage, print_usage, print_values, print_unused, dump_values
from .parsers import (
    HELP_CALLED,
    parse_command_line_options,
    parse_parameter_file,
    parse_parameter_text,
)

__all__ = [
    'ConflictingRegistrationError', 'DuplicateKeyError', 'InvalidKeyFormatError',
    'LifecycleError', 'MalformedQuotedStringError', 'ParameterSyntaxError',
    'ParameterValueError', 'ParamTreeError', 'RegistrationClosedError',
    'RegistrationNotClosedError', 'UnknownParameterError',
    'canonicalize', 'canonicalize_path', 'from_cli_flag', 'to_cli_flag',
    'ParamTree', 'ParamInfo', 'ParamKind', 'Parameter', 'define',
    'ParamRegistry', 'RegistrationState', 'ParamContext',
    'break_lines', 'format_param_usage', 'print_usage', 'print_values', 'print_unused', 'dump_values',
    'HELP_CALLED', 'parse_command_line_options', 'parse_parameter_file', 'parse_parameter_text',
]
