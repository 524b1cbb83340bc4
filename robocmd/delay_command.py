"""A command that pauses the routine for a fixed time."""

from __future__ import annotations

import time

from robocmd.auto_command import AutoCommand, Sleep


class DelayCommand(AutoCommand):
    """Waits ``ms`` milliseconds, then finishes."""

    def __init__(self, ms: int, *, sleep: Sleep = time.sleep) -> None:
        super().__init__()
        self.ms = ms
        self._sleep = sleep

    def run(self) -> bool:
        self._sleep(self.ms / 1000.0)
        return True