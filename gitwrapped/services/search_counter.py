from threading import Lock


class SearchCounter:
    """Process-local count of wrapped searches.

    The value lives only in memory: it resets on restart and is not shared
    between worker processes.
    """

    def __init__(self, start: int = 0) -> None:
        self._value = max(0, start)
        self._lock = Lock()

    @property
    def value(self) -> int:
        with self._lock:
            return self._value

    def increment(self) -> int:
        with self._lock:
            self._value += 1
            return self._value
