"""
Synchronous observer list shared by the session and the timer engine
"""
from typing import Callable, List
from models.events import CookingEvent

Listener = Callable[[CookingEvent], None]


class Observable:
    """
    Listeners are called in subscription order, on the caller's thread,
    right after the mutation that produced the event
    """

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener

        Returns:
            Callable that removes the listener (safe to call twice)
        """
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, type: str, event: str, data=None):
        if not self._listeners:
            return
        payload = CookingEvent(type=type, event=event, data=data)
        for listener in list(self._listeners):
            try:
                listener(payload)
            except Exception as e:
                print(f"Listener failed on {type}/{event}: {e}")
