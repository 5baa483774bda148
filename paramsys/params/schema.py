"""
Parameter Schema Definitions.

This module defines how run-time parameters are declared and described:
- Parameter: Base class of a parameter declaration (name + compile-time default)
- ParamKind: Closed set of value kinds, decided once at registration
- ParamInfo: Registration record kept by the registry

A parameter is declared as a class whose `value` attribute holds its
compile-time default:

    class UpwindWeight(Parameter):
        value = 1.0

    Verbose = define("Verbose", False)

The registered name is the `name` attribute when given, otherwise the class
name. The declared type is `value_type` when given, otherwise the type of
`value`.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .errors import ParameterValueError, type_error


class ParamKind(Enum):
    """
    Value kinds of run-time parameters.

    The value of each member is the placeholder printed in usage messages:
    - STRING: str values, printed quoted
    - SCALAR: floating point values
    - INTEGER: integer values
    - BOOLEAN: bool values, stored as "1"/"0"
    - VALUE: any other type, constructed from its text
    - FLAG: no value at all (only used for help entries)
    """
    STRING  = "STRING"
    SCALAR  = "SCALAR"
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    VALUE   = "VALUE"
    FLAG    = ""

    @staticmethod
    def of(value_type: Optional[type]) -> 'ParamKind':
        if value_type is None or value_type is type(None):
            return ParamKind.FLAG
        # bool is a subclass of int, so it is checked first
        if issubclass(value_type, bool):
            return ParamKind.BOOLEAN
        if issubclass(value_type, int):
            return ParamKind.INTEGER
        if issubclass(value_type, float):
            return ParamKind.SCALAR
        if issubclass(value_type, str):
            return ParamKind.STRING
        return ParamKind.VALUE


class Parameter:
    """
    Base class of run-time parameter declarations.

    Attributes:
        value: Compile-time default.
        value_type: Declared type; defaults to type(value).
        name: Registered name; defaults to the class name.
    """
    value: Any = None

    @classmethod
    def param_name(cls) -> str:
        return cls.__dict__.get("name", None) or cls.__name__

    @classmethod
    def param_type(cls) -> Optional[type]:
        value_type = getattr(cls, "value_type", None)
        if value_type is not None:
            return value_type
        if cls.value is None:
            return None
        return type(cls.value)


def define(name: str, value: Any, value_type: Optional[type] = None) -> type:
    """
    Declare a parameter without writing a class statement.

    Args:
        name: Canonical (PascalCase) parameter name.
        value: Compile-time default.
        value_type: Declared type when it differs from type(value).

    Returns:
        A new Parameter subclass named after the parameter.
    """
    attrs = {"value": value}
    if value_type is not None:
        attrs["value_type"] = value_type

    return type(name, (Parameter,), attrs)


def type_name(value_type: Optional[type]) -> str:
    """The printable name of a declared type; empty for flags."""
    if value_type is None:
        return ""
    return value_type.__name__


def serialize(value: Any) -> str:
    """Convert a value to the textual form kept as registry default."""
    if isinstance(value, bool):
        return "1" if value else "0"
    if value is None:
        return ""
    return str(value)


def coerce(text: str, kind: ParamKind, value_type: Optional[type], key: str = "") -> Any:
    """
    Convert stored text to a value of the declared type.

    Raises:
        ParameterValueError: If the text is not a valid literal of the type.
    """
    if kind == ParamKind.BOOLEAN:
        return text == "1"
    if kind == ParamKind.STRING:
        return text
    if kind == ParamKind.FLAG:
        return None

    try:
        if kind == ParamKind.INTEGER:
            return value_type(int(text))
        if kind == ParamKind.SCALAR:
            return value_type(float(text))
        return value_type(text)
    except (ValueError, TypeError, ArithmeticError) as exc:
        raise ParameterValueError(type_error(key, type_name(value_type), text)) from exc


@dataclass
class ParamInfo:
    """
    Registration record of a single parameter.

    Two records are the same registration when name, type name and usage
    agree; the default and the hidden flag may change after registration.

    Attributes:
        name: Canonical parameter name (e.g., "UpwindWeight")
        type_name: Name of the declared type ("" for flags)
        usage: Human-readable description for the help message
        default_value: Current default in textual form
        hidden: Whether the parameter is left out of the default help
        kind: Value kind derived from the declared type
        value_type: The declared type itself
    """
    name: str
    type_name: str
    usage: str = ""
    default_value: str = field(default="", compare=False)
    hidden: bool = field(default=False, compare=False)
    kind: ParamKind = field(default=ParamKind.FLAG, compare=False)
    value_type: Optional[type] = field(default=None, compare=False, repr=False)

    @staticmethod
    def from_parameter(param: type, usage: str) -> 'ParamInfo':
        value_type = param.param_type()
        return ParamInfo(
            name=param.param_name(),
            type_name=type_name(value_type),
            usage=usage,
            default_value=serialize(param.value),
            kind=ParamKind.of(value_type),
            value_type=value_type,
        )

    def parse(self, text: str, key: Optional[str] = None) -> Any:
        """Coerce text to this parameter's declared type."""
        return coerce(text, self.kind, self.value_type, key or self.name)

    @property
    def default(self) -> Any:
        """The current default, coerced to the declared type."""
        return self.parse(self.default_value)
