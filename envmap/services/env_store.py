"""Environment variable store service.

Provides the read/write primitives the resolver needs, over either the real
process environment or an in-memory mapping.
"""

from __future__ import annotations

import os
import threading
from collections.abc import Mapping
from typing import Protocol

from envmap.errors import EnvVarNotPresentError, EnvVarNotUnicodeError
from envmap.utils.constant import TEXT_ENCODING


class EnvStoreProtocol(Protocol):
    """Protocol for environment variable store implementations."""

    def get(self, name: str) -> str:
        """Read a variable. Raise EnvVarNotPresentError or EnvVarNotUnicodeError."""
        ...

    def set(self, name: str, value: str) -> None:
        """Write or overwrite a variable."""
        ...


class OsEnvironStore:
    """Store backed by the process environment (``os.environ``).

    Writes are visible to the rest of the process and inherited by child
    processes spawned afterwards. No locking is done: ``os.environ`` is
    process-wide and may be changed by anyone at any time.
    """

    def get(self, name: str) -> str:
        """Read a variable from the process environment.

        Args:
            name: The variable name.

        Returns:
            The variable's value.

        Raises:
            EnvVarNotPresentError: If the variable is not set.
            EnvVarNotUnicodeError: If the value holds bytes that are not
                valid text in the expected encoding.
        """
        if os.supports_bytes_environ:
            # Decode the raw bytes ourselves; the locale may not be UTF-8.
            try:
                raw = os.environb[os.fsencode(name)]
            except KeyError:
                raise EnvVarNotPresentError(name) from None
            try:
                return raw.decode(TEXT_ENCODING)
            except UnicodeDecodeError:
                raise EnvVarNotUnicodeError(name) from None

        try:
            value = os.environ[name]
        except KeyError:
            raise EnvVarNotPresentError(name) from None

        # Lone surrogates cannot be encoded strictly.
        try:
            value.encode(TEXT_ENCODING)
        except UnicodeEncodeError:
            raise EnvVarNotUnicodeError(name) from None
        return value

    def set(self, name: str, value: str) -> None:
        """Write a variable into the process environment.

        Args:
            name: The variable name.
            value: The value to store.

        Note:
            May raise ValueError if the OS rejects the name or value.
        """
        os.environ[name] = value


class InMemoryEnvStore:
    """Thread-safe in-memory environment store.

    Values may be seeded as ``bytes``; they are decoded strictly on read,
    which makes undecodable values easy to reproduce.
    """

    def __init__(self, initial: Mapping[str, str | bytes] | None = None) -> None:
        """Initialize the store.

        Args:
            initial: Starting variables (copied, not referenced).
        """
        self._vars: dict[str, str | bytes] = dict(initial) if initial else {}
        self._store_lock = threading.Lock()

    @property
    def vars(self) -> dict[str, str | bytes]:
        """Direct access to the backing dict."""
        return self._vars

    def get(self, name: str) -> str:
        """Read a variable.

        Args:
            name: The variable name.

        Returns:
            The variable's value as text.

        Raises:
            EnvVarNotPresentError: If the variable is not set.
            EnvVarNotUnicodeError: If a bytes value does not decode.
        """
        with self._store_lock:
            if name not in self._vars:
                raise EnvVarNotPresentError(name)
            raw = self._vars[name]

        if isinstance(raw, bytes):
            try:
                return raw.decode(TEXT_ENCODING)
            except UnicodeDecodeError:
                raise EnvVarNotUnicodeError(name) from None
        return raw

    def set(self, name: str, value: str) -> None:
        """Write or overwrite a variable.

        Args:
            name: The variable name.
            value: The value to store.
        """
        with self._store_lock:
            self._vars[name] = value


_default_store: OsEnvironStore | None = None


def get_default_store() -> OsEnvironStore:
    """Get or create the process-wide store instance.

    Returns:
        The singleton OsEnvironStore, created on first call.
    """
    global _default_store
    if _default_store is None:
        _default_store = OsEnvironStore()
    return _default_store
