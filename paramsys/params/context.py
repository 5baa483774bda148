"""
Parameter Context.

ParamContext bundles everything the parameter system knows: the registry of
declared parameters (with its lifecycle) and the tree of run-time overrides.
Its typed accessors resolve a parameter by taking the registry's current
default and letting a tree value, if present, take precedence.

Typical lifecycle:

    ctx = ParamContext()
    ctx.register(UpwindWeight, "Relative weight of the upwind node.")
    ctx.end_registration()
    parse_command_line_options(ctx, sys.argv[1:])
    weight = ctx.get(UpwindWeight)

Programs that want a single process-wide context use paramsys.state, which
owns one instance and forwards to it.
"""

from typing import Any, Dict, List, Tuple, Union

from .registry import ParamRegistry, RegistrationState
from .schema import ParamInfo, Parameter, serialize
from .tree import ParamTree


ParamRef = Union[type, str]


def param_name(param: ParamRef) -> str:
    """The registered name of a parameter class, or the name itself."""
    if isinstance(param, str):
        return param
    return param.param_name()


class ParamContext:
    """
    Registry, lifecycle and override tree of one parameter system.

    Attributes:
        registry: Declared parameters and registration state.
        tree: Run-time overrides as raw text.
    """

    def __init__(self):
        self.registry = ParamRegistry()
        self.tree     = ParamTree()

    @property
    def state(self) -> RegistrationState:
        return self.registry.state

    # --- registration -----------------------------------------------------

    def register(self, param: type, usage: str) -> None:
        """
        Register a parameter with its help text.

        Registering the same parameter again with identical type and usage is
        a no-op. A finalizer that reads the parameter back is queued so that
        end_registration() validates its default and any override.

        Raises:
            RegistrationClosedError: After end_registration().
            ConflictingRegistrationError: Same name, different type or usage.
            InvalidKeyFormatError: The name is not a canonical name.
        """
        if not (isinstance(param, type) and issubclass(param, Parameter)):
            raise TypeError(f"Expected a Parameter subclass, got {param!r}")

        info = ParamInfo.from_parameter(param, usage)
        self.registry.register(info, lambda: self.get(param, True))

    def hide(self, param: ParamRef) -> None:
        """Leave a registered parameter out of the default help output."""
        self.registry.hide(param_name(param))

    def end_registration(self) -> None:
        """Close registration and validate every registered parameter once."""
        self.registry.close()

    def reset(self) -> None:
        """Drop all parameters and overrides and reopen registration."""
        self.registry.clear()
        self.tree = ParamTree()

    # --- resolution -------------------------------------------------------

    def _info(self, param: ParamRef, error_if_unregistered: bool, verb: str) -> ParamInfo:
        name = param_name(param)

        if error_if_unregistered:
            self.registry.require_closed(
                f"Parameters can only be {verb} after _all_ of them have been registered."
            )
            return self.registry.lookup(name)

        if name in self.registry:
            return self.registry.all_params[name]
        if isinstance(param, str):
            return self.registry.lookup(name)

        return ParamInfo.from_parameter(param, "")

    def get(self, param: ParamRef, error_if_unregistered: bool = True) -> Any:
        """
        Return the effective value of a parameter.

        The run-time value from the tree wins over the current default (which
        set_default() may have replaced); both are coerced to the declared
        type.

        Args:
            param: Parameter class (or registered name).
            error_if_unregistered: Require a closed registry and a registered
                parameter. When False, an unregistered parameter falls back
                to its own compile-time default.

        Raises:
            RegistrationNotClosedError: Registration is still open.
            UnknownParameterError: The parameter was never registered.
            ParameterValueError: The default or the override does not parse.
        """
        info    = self._info(param, error_if_unregistered, "retrieved")
        default = info.default

        text = self.tree.get(info.name)
        if text is None:
            return default

        return info.parse(text)

    def is_set(self, param: ParamRef, error_if_unregistered: bool = True) -> bool:
        """Return whether the parameter was given a value at run time."""
        info = self._info(param, error_if_unregistered, "checked")
        return self.tree.has_key(info.name)

    def set_default(self, param: ParamRef, value: Any) -> None:
        """
        Replace the default of a registered parameter.

        Only the textual default kept in the registry changes; subsequent
        get() calls see it unless the parameter is set at run time.

        Raises:
            UnknownParameterError: The parameter was never registered.
            ParameterValueError: The value does not fit the declared type.
        """
        info = self.registry.lookup(param_name(param), action="Setting the default of")

        text = serialize(value)
        info.parse(text)
        info.default_value = text

    # --- reporting support ------------------------------------------------

    def effective_text(self, name: str) -> str:
        """The textual value a registered parameter resolves to."""
        return self.tree.get(name, self.registry.all_params[name].default_value)

    def partition(self) -> Tuple[List[str], List[str], List[str]]:
        """
        Split all known keys into three lists:
        - registered keys that were set at run time (tree order)
        - registered keys left at their default (name order)
        - run-time keys that no registered parameter consumes (tree order)
        """
        runtime, unknown = [], []
        for key in self.tree.flatten():
            if key in self.registry:
                runtime.append(key)
            else:
                unknown.append(key)

        compile_time = [ name for name in self.registry if not self.tree.has_key(name) ]

        return runtime, compile_time, unknown

    def get_lists(self) -> Tuple[List[Tuple[str, str]], List[Tuple[str, str]]]:
        """
        Return the (key, value) pairs given at run time, split into those of
        registered parameters and those nobody registered.

        Raises:
            RegistrationNotClosedError: Registration is still open.
        """
        self.registry.require_closed(
            "Parameter lists can only be retrieved after _all_ of them have been registered."
        )

        used, unused = [], []
        for key in self.tree.flatten():
            pair = (key, self.tree.get(key))
            if key in self.registry:
                used.append(pair)
            else:
                unused.append(pair)

        return used, unused

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        """
        Return the configuration state as nested plain dicts, one per report
        section; run-time entries carry their default alongside the value.
        """
        runtime, compile_time, unknown = self.partition()

        return {
            "runtime": {
                key: {
                    "value":   self.tree.get(key),
                    "default": self.registry.all_params[key].default_value,
                } for key in runtime
            },
            "compile_time": { key: self.effective_text(key) for key in compile_time },
            "unused":       { key: self.tree.get(key)       for key in unknown      },
        }


__all__ = ['ParamContext', 'ParamRef', 'param_name']
