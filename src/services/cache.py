"""
In-memory key-value cache backing the /api routes.

Values are opaque JSON documents. Collisions on create either fail or
shallow-merge into the existing entry depending on the ``override`` option.
"""
from __future__ import annotations

import json
import logging
import uuid
from collections.abc import Mapping
from typing import Any, Dict, List, Optional, Tuple

logger = logging.getLogger(__name__)

_MISSING = object()


class CacheError(Exception):
    """Base class for cache failures."""


class KeyNotFoundError(CacheError):
    def __init__(self, key: str):
        super().__init__("Key not found")
        self.key = key


class KeyInUseError(CacheError):
    def __init__(self, key: str):
        super().__init__("Key already in use")
        self.key = key


def _merge(existing: Any, data: Any) -> Dict[str, Any]:
    if not isinstance(existing, Mapping) or not isinstance(data, Mapping):
        raise CacheError("Only JSON objects can be merged")
    return {**existing, **data}


class Cache:
    """
    Simple in-memory cache for storing and retrieving key-value pairs.

    Every operation runs to completion without yielding, so each one is
    atomic with respect to other coroutines on the same event loop.

    Attributes:
        override: Merge into an existing entry on create instead of failing
        debug: Log every mutation at DEBUG level
    """

    def __init__(self, override: bool = False, debug: bool = False) -> None:
        self.override = override
        self.debug = debug
        self._entries: Dict[str, Any] = {}

    def get(self, key: str) -> Any:
        """
        Retrieve the value stored under ``key``.

        Raises:
            KeyNotFoundError: If the key does not exist
        """
        if key not in self._entries:
            raise KeyNotFoundError(key)
        return self._entries[key]

    def create(self, data: Any, key: Optional[str] = None) -> str:
        """
        Store ``data`` under ``key``, generating a unique key when omitted.

        Args:
            data: Document to store
            key: Optional caller-supplied key

        Returns:
            The key the data was stored under

        Raises:
            KeyInUseError: If the key exists and overriding is disabled
        """
        if key is None:
            key = uuid.uuid4().hex
        self._log("Creating key: %s %s", key, data)

        if key in self._entries:
            if not self.override:
                self._log("Overriding is disabled, key %s already exists", key)
                raise KeyInUseError(key)
            self._log("Key %s already exists, overriding", key)
            self._entries[key] = _merge(self._entries[key], data)
        else:
            self._entries[key] = data

        self._log_table()
        return key

    def update(self, key: str, data: Any) -> Dict[str, Any]:
        """
        Shallow-merge ``data`` into the entry stored under ``key``.

        Returns:
            ``{"key": key, "data": merged}``

        Raises:
            KeyNotFoundError: If the key does not exist
        """
        if key not in self._entries:
            raise KeyNotFoundError(key)

        merged = _merge(self._entries[key], data)
        self._entries[key] = merged

        self._log("Overriding %s %s", key, data)
        self._log_table()
        return {"key": key, "data": merged}

    def upsert(self, key: str, data: Any) -> Tuple[bool, Any]:
        """
        Update ``key`` if present, otherwise insert ``data`` under it.

        Returns:
            ``(created, result)`` where result is the key for a fresh insert
            and the ``update`` payload otherwise.
        """
        if key in self._entries:
            return False, self.update(key, data)
        return True, self.create(data, key)

    def remove(self, key: str) -> None:
        if self._entries.pop(key, _MISSING) is _MISSING:
            raise KeyNotFoundError(key)
        self._log("Removed key: %s", key)

    def has(self, key: str) -> bool:
        return key in self._entries

    @property
    def keys(self) -> List[str]:
        return list(self._entries.keys())

    @property
    def values(self) -> List[Any]:
        return list(self._entries.values())

    def clear(self) -> None:
        self._entries.clear()
        self._log("Cache cleared")

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def _log(self, message: str, *args: Any) -> None:
        if self.debug:
            logger.debug(message, *args)

    def _log_table(self) -> None:
        if not self.debug:
            return
        rows = [
            f"{key:<32} | {json.dumps(value, default=str)}"
            for key, value in self._entries.items()
        ]
        logger.debug("Cache entries (%d):\n%s", len(rows), "\n".join(rows))
