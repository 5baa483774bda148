"""
Run-time Parameter Errors and Message Formatting.

Every failure of the parameter system is raised where it is detected. All
exceptions derive from ParamSystemException so that a host program can
report them uniformly; each also derives from the closest builtin
(ValueError, LookupError, RuntimeError) so generic handlers keep working.

Error Message Format
--------------------
- Parameter name in single quotes: 'UpwindWeight'
- Clear description of the problem
- File parser errors are prefixed with "<file>:<line>: "

Examples:
- "Parameter 'UpwindWeight' registered twice with non-matching characteristics"
- "case.ini:3: Parameter 'Alpha' seen multiple times in the same file"
- "Accessing parameter 'UpwindWieght' without prior registration is not
  allowed. Did you mean 'UpwindWeight'?"
"""

from typing import Any, List, Optional

from ..common import ParamSystemException
from .suggest import format_suggestion


class InvalidKeyFormatError(ParamSystemException, ValueError):
    """Raised for parameter names that cannot be canonicalized."""


class MalformedQuotedStringError(ParamSystemException, ValueError):
    """Raised for a quoted value with an unknown escape or no closing quote."""


class ParameterSyntaxError(ParamSystemException, ValueError):
    """Raised for a parameter file line that is not 'key = value'."""


class DuplicateKeyError(ParamSystemException, ValueError):
    """Raised when a key is given twice on one command line or in one file."""


class ParameterValueError(ParamSystemException, ValueError):
    """Raised when a textual value cannot be coerced to the declared type."""


class ParamTreeError(ParamSystemException, ValueError):
    """Raised when a path would turn a leaf into a sub-tree or vice versa."""


class ConflictingRegistrationError(ParamSystemException, ValueError):
    """Raised when a name is registered again with a different type or usage."""


class UnknownParameterError(ParamSystemException, LookupError):
    """Raised when resolving, hiding or re-defaulting an unregistered name."""


class LifecycleError(ParamSystemException, RuntimeError):
    """Raised for operations attempted in the wrong registration state."""


class RegistrationNotClosedError(LifecycleError):
    """Raised when parameters are read before registration was closed."""


class RegistrationClosedError(LifecycleError):
    """Raised when registering, hiding or closing after registration was closed."""


def format_param(name: str) -> str:
    """Format a parameter name for error messages."""
    return f"'{name}'"


def format_value(value: Any) -> str:
    """Format a value for error messages."""
    if isinstance(value, str):
        return f'"{value}"'
    return str(value)


def unknown_param_error(param: str, suggestions: Optional[List[str]] = None, action: str = "Accessing") -> str:
    """
    Create an error message for an unregistered parameter with suggestions.

    Args:
        param: The unknown parameter name.
        suggestions: Optional list of similar registered parameter names.
        action: Verb phrase describing what was attempted.

    Returns:
        Formatted error message with "Did you mean?" if suggestions available.
    """
    base_msg = f"{action} parameter {format_param(param)} without prior registration is not allowed."
    if suggestions:
        return f"{base_msg} {format_suggestion(suggestions)}"
    return base_msg


def type_error(param: str, type_name: str, got: Any) -> str:
    """
    Create a coercion failure message.

    Args:
        param: Parameter name (or tree key)
        type_name: Name of the declared type
        got: The text that could not be parsed

    Returns:
        Formatted error message.
    """
    return f"Cannot parse value {format_value(got)} of parameter {format_param(param)} as a {type_name}"


def format_error_list(errors: List[str], use_rich: bool = True) -> str:
    """
    Format a list of errors for display.

    Args:
        errors: List of error messages
        use_rich: Whether to use Rich markup for colors

    Returns:
        Formatted string with one error per line.
    """
    lines = []

    if errors:
        if use_rich:
            lines.append("[red]Parameter Errors:[/red]")
            for err in errors:
                lines.append(f"  [red]✗[/red] {err}")
        else:
            lines.append("Parameter Errors:")
            for err in errors:
                lines.append(f"  ✗ {err}")

    return "\n".join(lines)
