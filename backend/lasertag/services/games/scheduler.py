from typing import Callable


class TimerHandle:
    """Cancellable reference to one scheduled callback."""

    def __init__(self, label: str = ''):
        self.label = label
        self.cancelled = False
        self.fired = False

    def cancel(self) -> None:
        self.cancelled = True

    @property
    def pending(self) -> bool:
        return not (self.cancelled or self.fired)


class BackgroundScheduler:
    """Runs delayed callbacks as Socket.IO background tasks.

    The callback receives the handle as its first argument so it can check,
    once back on the dispatch path, that it is still the timer it expects.
    """

    def __init__(self, socketio, logger=None):
        self.socketio = socketio
        self.logger = logger

    def call_later(self, delay: float, callback: Callable, *args, label: str = '') -> TimerHandle:
        handle = TimerHandle(label)

        def _worker():
            self.socketio.sleep(delay)
            if handle.cancelled:
                if self.logger:
                    self.logger.debug(f"[timer-cancelled] {label}")
                return
            handle.fired = True
            callback(handle, *args)

        if self.logger:
            self.logger.debug(f"[timer-set] {label} delay={delay}s")
        self.socketio.start_background_task(_worker)
        return handle
