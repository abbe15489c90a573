"""Load a requested set of environment variables into a map.

Missing variables fall back to caller-supplied defaults, which are also
written back into the environment. Every variable that cannot be resolved
is reported together in a single LoadError.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping

from envmap.errors import (
    EnvVarNotPresentError,
    EnvVarNotUnicodeError,
    LoadError,
    VarError,
)
from envmap.services.env_store import EnvStoreProtocol, get_default_store

EnvVars = Mapping[str, str | None]
EnvMap = dict[str, str]
EnvErrors = dict[str, VarError]


def load(env_vars: EnvVars, *, store: EnvStoreProtocol | None = None) -> EnvMap:
    """Load variables from the environment, setting defaults where given.

    A default is used only when the variable is absent. It is written into
    the store and kept there, even if the call fails for other variables.
    A variable that is present but not valid text is always an error.

    Checking for a variable and writing its default are two separate
    steps. Another writer may set the variable in between; callers that
    need atomicity must serialize access to the environment themselves.

    Args:
        env_vars: Mapping of variable name to an optional default value.
        store: Environment store to use. Defaults to the process environment.

    Returns:
        Mapping of every requested name to its resolved value.

    Raises:
        LoadError: If any variable is missing with no default, or is not
            valid text. ``env_errors`` maps each failing name to its cause.

    Example:
        env = load({"REQUIRED": None, "OPTIONAL": "default"})
    """
    if store is None:
        store = get_default_store()

    env_map: EnvMap = {}
    env_errors: EnvErrors = {}

    for name, default in env_vars.items():
        try:
            env_map[name] = store.get(name)
            logging.debug("Resolved environment variable %s", name)
        except EnvVarNotPresentError as exc:
            if default is None:
                env_errors[name] = exc.kind
                continue
            store.set(name, default)
            env_map[name] = default
            logging.info("Environment variable %s not set, applied default", name)
        except EnvVarNotUnicodeError as exc:
            env_errors[name] = exc.kind

    if env_errors:
        logging.warning(
            "Failed to load environment variables: %s",
            ", ".join(f"{name} ({kind.name})" for name, kind in sorted(env_errors.items())),
        )
        raise LoadError(env_errors)

    return env_map
