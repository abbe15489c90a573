"""FastAPI startup integration.

Loads required configuration when the application starts, so a missing
variable stops the app before it serves any request.
"""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Callable
from contextlib import AbstractAsyncContextManager, asynccontextmanager

from fastapi import FastAPI, Request

from envmap.errors import LoadError
from envmap.resolver import EnvMap, EnvVars, load
from envmap.services.env_store import EnvStoreProtocol


def env_lifespan(
    env_vars: EnvVars,
    *,
    store: EnvStoreProtocol | None = None,
) -> Callable[[FastAPI], AbstractAsyncContextManager[None]]:
    """Build a lifespan handler that loads environment variables on startup.

    Args:
        env_vars: Mapping of variable name to an optional default value.
        store: Environment store to use. Defaults to the process environment.

    Returns:
        A lifespan callable suitable for ``FastAPI(lifespan=...)``.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            app.state.env = load(env_vars, store=store)
        except LoadError as exc:
            for name, kind in sorted(exc.env_errors.items()):
                logging.error("Startup aborted: %s: %s", name, kind.value)
            raise
        logging.info("Loaded %d environment variables", len(app.state.env))
        yield

    return lifespan


def get_env(request: Request) -> EnvMap:
    """Return the environment map loaded at startup.

    Intended for use with ``Depends(get_env)`` in route handlers.

    Args:
        request: The incoming request.

    Returns:
        The mapping stored by ``env_lifespan``.
    """
    return request.app.state.env
