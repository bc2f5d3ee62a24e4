"""
Observable state holders shared by the services.

A State owns a value and notifies subscribers when it changes. Services keep
their State objects private and hand out ReadonlyState views so that only the
owning service mutates the value.
"""

import logging
import threading
from typing import Any, Callable, Dict, Generic, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

Listener = Callable[[Any, Any], None]


class ReadonlyState(Generic[T]):
    """Read-only view over a State: exposes the value and subscriptions only."""

    def __init__(self, state: "State[T]"):
        self._state = state

    @property
    def value(self) -> T:
        return self._state.value

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        return self._state.subscribe(callback)

    def __repr__(self) -> str:
        return f"ReadonlyState({self._state.value!r})"


class State(Generic[T]):
    def __init__(self, initial: T):
        self._value = initial
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    @property
    def value(self) -> T:
        return self._value

    @value.setter
    def value(self, new_value: T) -> None:
        old_value = self._value
        self._value = new_value
        if new_value is old_value:
            return
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener(new_value, old_value)
            except Exception as e:
                logger.warning(f"State listener {listener!r} failed: {e}")

    def subscribe(self, callback: Listener) -> Callable[[], None]:
        """Register callback(new, old); returns a function that removes it."""
        with self._lock:
            self._listeners.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._listeners:
                    self._listeners.remove(callback)

        return unsubscribe

    def readonly(self) -> ReadonlyState[T]:
        return ReadonlyState(self)

    def __repr__(self) -> str:
        return f"State({self._value!r})"


class StateRegistry:
    """Keyed State slots: the first caller for a key decides its initial value."""

    def __init__(self):
        self._lock = threading.Lock()
        self._slots: Dict[str, State] = {}
        self._factories: Dict[str, Callable[[], Any]] = {}

    def get(self, key: str, factory: Callable[[], T]) -> State[T]:
        with self._lock:
            slot = self._slots.get(key)
            if slot is None:
                slot = State(factory())
                self._slots[key] = slot
                self._factories[key] = factory
                logger.debug(f"Created state slot {key}")
            return slot

    def reset(self) -> None:
        """Put every slot back to its initial value, keeping the State objects."""
        with self._lock:
            slots = [(self._slots[key], factory) for key, factory in self._factories.items()]
        for slot, factory in slots:
            slot.value = factory()
