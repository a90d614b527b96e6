"""
Cancellable delay used to pace polling.
"""

import threading


class CancellableDelay:
    """
    Blocking delay that can be interrupted from another thread.

    ``wait`` returns ``True`` as soon as ``cancel`` is called, so a polling
    loop blocked between probes can shut down without waiting out the full
    interval.
    """

    def __init__(self) -> None:
        self._event = threading.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def wait(self, seconds: float) -> bool:
        """
        Block for up to ``seconds``.

        Returns:
            True if the delay was cancelled, False if it elapsed
        """
        return self._event.wait(seconds)

    def cancel(self) -> None:
        self._event.set()

    def reset(self) -> None:
        """Clear a previous cancellation."""
        self._event.clear()
