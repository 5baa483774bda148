"""
Parameter Registry.

Central storage for run-time parameter declarations. ParamRegistry maps each
canonical parameter name to its ParamInfo and guards the two-phase
lifecycle of the parameter system:

    OPEN    registration and hiding are allowed, values cannot be read
    CLOSED  values can be read, the set of parameters is fixed

close() is the only transition from OPEN to CLOSED. It runs every pending
finalizer exactly once; the resolver installs one finalizer per parameter
that reads the parameter back, so bad defaults and malformed overrides fail
right at that point instead of at some later call site. clear() is the only
way back to OPEN.

Thread Safety
-------------
None. Registration is expected to complete on one thread before any reads;
once closed the registry is only read.
"""

from enum import Enum
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional

from .errors import (
    ConflictingRegistrationError,
    InvalidKeyFormatError,
    RegistrationClosedError,
    RegistrationNotClosedError,
    UnknownParameterError,
    format_param,
    unknown_param_error,
)
from .keys import canonicalize
from .schema import ParamInfo
from .suggest import suggest_similar


class RegistrationState(Enum):
    OPEN   = "open"
    CLOSED = "closed"


Finalizer = Callable[[], None]


class ParamRegistry:
    """
    Registry of run-time parameters plus the registration lifecycle.

    Attributes:
        _params: Dictionary mapping canonical names to ParamInfo instances.
        _finalizers: Deferred validation tasks, consumed by close().
        _state: Current lifecycle state.
    """

    def __init__(self):
        self._params: Dict[str, ParamInfo] = {}
        self._finalizers: List[Finalizer] = []
        self._state: RegistrationState = RegistrationState.OPEN

    @property
    def state(self) -> RegistrationState:
        return self._state

    @property
    def is_open(self) -> bool:
        """Return True while parameters may still be registered."""
        return self._state == RegistrationState.OPEN

    @property
    def all_params(self) -> Mapping[str, ParamInfo]:
        """Read-only view of the registered parameters."""
        return MappingProxyType(self._params)

    @property
    def pending_finalizers(self) -> int:
        return len(self._finalizers)

    def require_open(self, message: str) -> None:
        if not self.is_open:
            raise RegistrationClosedError(message)

    def require_closed(self, message: str) -> None:
        if self.is_open:
            raise RegistrationNotClosedError(message)

    def lookup(self, name: str, action: str = "Accessing") -> ParamInfo:
        """
        Get the registration record of a parameter.

        Raises:
            UnknownParameterError: If the name was never registered. The
                message suggests similarly spelled registered names.
        """
        info = self._params.get(name)
        if info is None:
            raise UnknownParameterError(
                unknown_param_error(name, suggest_similar(name, self._params.keys()), action)
            )
        return info

    def register(self, info: ParamInfo, finalizer: Optional[Finalizer] = None) -> bool:
        """
        Register a parameter.

        Registering the same name, type and usage again is a no-op, so a
        parameter can be declared from several places.

        Args:
            info: Registration record; its name must be canonical.
            finalizer: Task run once when registration is closed.

        Returns:
            True if the parameter was new, False for a repeated registration.

        Raises:
            RegistrationClosedError: If registration was already closed.
            InvalidKeyFormatError: If the name is not a canonical name.
            ConflictingRegistrationError: If the name is registered with a
                different type or usage.
        """
        self.require_open(
            f"Parameter registration was already closed before the parameter {format_param(info.name)} was registered."
        )

        # raises for malformed names; a valid but non-canonical spelling is rejected too
        if canonicalize(info.name, True) != info.name:
            raise InvalidKeyFormatError(
                f"Parameter {format_param(info.name)} is not spelled canonically, "
                f"use {format_param(canonicalize(info.name, True))}"
            )

        existing = self._params.get(info.name)
        if existing is not None:
            if existing == info:
                return False
            raise ConflictingRegistrationError(
                f"Parameter {format_param(info.name)} registered twice with non-matching characteristics."
            )

        self._params[info.name] = info
        if finalizer is not None:
            self._finalizers.append(finalizer)
        return True

    def hide(self, name: str) -> None:
        """Leave a registered parameter out of the default help message."""
        self.require_open(
            f"Parameter {format_param(name)} declared as hidden when parameter registration was already closed."
        )
        self.lookup(name, action="Hiding").hidden = True

    def close(self) -> None:
        """
        End registration and run all pending finalizers.

        The finalizer list is emptied before the first one runs, so each runs
        at most once even if one of them raises.

        Raises:
            RegistrationClosedError: If registration was already closed.
        """
        self.require_open("Parameter registration was already closed. It is only possible to close it once.")

        self._state = RegistrationState.CLOSED

        finalizers, self._finalizers = self._finalizers, []
        for finalizer in finalizers:
            finalizer()

    def clear(self) -> None:
        """Forget all parameters and finalizers and reopen registration."""
        self._params.clear()
        self._finalizers = []
        self._state = RegistrationState.OPEN

    def __contains__(self, name: str) -> bool:
        return name in self._params

    def __iter__(self):
        return iter(sorted(self._params))

    def __len__(self) -> int:
        return len(self._params)
