"""Observable value holder for view-model state."""

import threading
from typing import Callable, Generic, List, Optional, TypeVar


T = TypeVar("T")


class Observable(Generic[T]):
    """A value that notifies observers whenever a new value is posted.

    ``post_value`` may be called from any thread; observers run on the
    posting thread.
    """

    def __init__(self, initial: Optional[T] = None):
        self._value: Optional[T] = initial
        self._observers: List[Callable[[T], None]] = []
        self._lock = threading.Lock()

    @property
    def value(self) -> Optional[T]:
        return self._value

    def post_value(self, value: T) -> None:
        with self._lock:
            self._value = value
            observers = list(self._observers)
        for observer in observers:
            observer(value)

    def observe(self, observer: Callable[[T], None]) -> Callable[[], None]:
        """Register an observer and return a callable that unregisters it.

        If a value is already set, the observer is called with it right away.
        """
        with self._lock:
            self._observers.append(observer)
            current = self._value
        if current is not None:
            observer(current)
        return lambda: self.remove_observer(observer)

    def remove_observer(self, observer: Callable[[T], None]) -> None:
        with self._lock:
            if observer in self._observers:
                self._observers.remove(observer)
