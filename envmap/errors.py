"""Exception hierarchy for environment variable loading."""

from __future__ import annotations

from enum import Enum

from envmap.utils.constant import LOAD_ERROR_MESSAGE


class VarError(str, Enum):
    """Reason a single environment variable could not be resolved."""

    NOT_PRESENT = "environment variable not found"
    NOT_UNICODE = "environment variable was not valid unicode"


class EnvError(Exception):
    """Base exception for envmap."""


class EnvVarNotPresentError(EnvError, KeyError):
    """Raised by a store when a variable has no value."""

    kind = VarError.NOT_PRESENT

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.name}"


class EnvVarNotUnicodeError(EnvError, ValueError):
    """Raised by a store when a variable's value cannot be decoded as text."""

    kind = VarError.NOT_UNICODE

    def __init__(self, name: str) -> None:
        super().__init__(name)
        self.name = name

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.name}"


class LoadError(EnvError):
    """Raised when one or more requested variables could not be loaded.

    The message is fixed. Per-variable causes are available via
    ``env_errors``, a mapping of variable name to ``VarError``.
    """

    def __init__(self, env_errors: dict[str, VarError]) -> None:
        super().__init__(LOAD_ERROR_MESSAGE)
        self._env_errors = dict(env_errors)

    @property
    def env_errors(self) -> dict[str, VarError]:
        """Get a copy of the per-variable error causes.

        Returns:
            Mapping of variable name to the reason it failed.
        """
        return dict(self._env_errors)

    def __str__(self) -> str:
        return LOAD_ERROR_MESSAGE

    def __repr__(self) -> str:
        causes = {name: kind.name for name, kind in sorted(self._env_errors.items())}
        return f"LoadError(env_errors={causes!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LoadError):
            return NotImplemented
        return self._env_errors == other._env_errors

    def __hash__(self) -> int:
        return hash(frozenset(self._env_errors.items()))

    def __reduce__(self) -> tuple[type[LoadError], tuple[dict[str, VarError]]]:
        return (LoadError, (self._env_errors,))
