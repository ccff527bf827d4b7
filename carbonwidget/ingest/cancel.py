"""Cooperative cancellation for in-flight forecast requests."""

import threading


class CancelToken:
    """Set by a consumer that no longer wants the result of a request."""

    def __init__(self) -> None:
        self._event = threading.Event()

    def cancel(self) -> None:
        self._event.set()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()
