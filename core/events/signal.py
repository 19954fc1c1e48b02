from __future__ import annotations

from threading import RLock
from typing import Callable, Generic, TypeVar

T = TypeVar("T")


class Signal(Generic[T]):
    """
    Qt-free observer used by the interaction controller. Every emit carries a
    single payload object; subscribers are called in connection order.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._subscribers: list[Callable[[T], None]] = []
        self._lock: RLock = RLock()

    def __repr__(self) -> str:
        return f"Signal({self.name!r}, subscribers={len(self._subscribers)})"

    def __len__(self) -> int:
        return len(self._subscribers)

    def connect(self, callback: Callable[[T], None]) -> Callable[[T], None]:
        with self._lock:
            if callback not in self._subscribers:
                self._subscribers.append(callback)
        return callback

    def disconnect(self, callback: Callable[[T], None]) -> None:
        with self._lock:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

    def disconnect_all(self) -> None:
        with self._lock:
            self._subscribers.clear()

    def emit(self, payload: T) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        stale: list[Callable[[T], None]] = []
        for callback in subscribers:
            try:
                callback(payload)
            except RuntimeError as exc:
                # slot bound to a QWidget that Qt already destroyed
                msg = str(exc).lower()
                if "already deleted" in msg or "has been deleted" in msg:
                    stale.append(callback)
                    continue
                raise
            except ReferenceError:
                # weakly bound slot whose owner is gone
                stale.append(callback)
        if stale:
            with self._lock:
                for callback in stale:
                    if callback in self._subscribers:
                        self._subscribers.remove(callback)
