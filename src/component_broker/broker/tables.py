from __future__ import annotations

import threading
from typing import Dict, Optional

from component_broker.broker.errors import InvalidKeyError


class RegistrationTable:
    """
    Process-wide mapping: capability key → implementation identifier.

    The broker keeps two of these (factories and type associations). Last
    write wins; unregistering a missing key is a no-op. A None/empty key is
    rejected before anything is touched.
    """

    def __init__(self, name: str):
        self.name = name
        self._entries: Dict[str, str] = {}
        self._lock = threading.RLock()

    def register(self, key: str, identifier: str) -> None:
        _check_key(key)
        if not identifier:
            raise InvalidKeyError("identifier")
        with self._lock:
            self._entries[key] = identifier

    def has(self, key: str) -> bool:
        _check_key(key)
        with self._lock:
            return key in self._entries

    def get(self, key: str) -> Optional[str]:
        _check_key(key)
        with self._lock:
            return self._entries.get(key)

    def unregister(self, key: str) -> None:
        _check_key(key)
        with self._lock:
            self._entries.pop(key, None)

    def unregister_all(self) -> None:
        with self._lock:
            self._entries.clear()

    def snapshot(self) -> Dict[str, str]:
        with self._lock:
            return dict(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"<RegistrationTable {self.name} entries={len(self)}>"


def _check_key(key: Optional[str]) -> None:
    if not key:
        raise InvalidKeyError("key")
