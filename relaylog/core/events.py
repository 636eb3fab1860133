"""Error notification channel"""

import sys
from typing import Callable, List

ErrorListener = Callable[[Exception], None]


class ErrorChannel:
    """
    Fan-out of errors to subscribed listeners.

    Listener failures are printed and ignored so one faulty listener does
    not hide errors from the others.
    """

    def __init__(self):
        self._listeners: List[ErrorListener] = []

    def subscribe(self, listener: ErrorListener) -> ErrorListener:
        """
        Register a listener.

        Returns the listener so the method works as a decorator.
        """
        if listener not in self._listeners:
            self._listeners.append(listener)
        return listener

    def unsubscribe(self, listener: ErrorListener) -> None:
        """Remove a listener; unknown listeners are ignored."""
        if listener in self._listeners:
            self._listeners.remove(listener)

    def dispatch(self, error: Exception) -> None:
        """Notify every listener of an error."""
        for listener in list(self._listeners):
            try:
                listener(error)
            except Exception as e:
                print(f"Error listener failed: {e!r}", file=sys.stderr)

    def __len__(self) -> int:
        return len(self._listeners)
