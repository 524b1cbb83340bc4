"""Runs a queue of autonomous commands in first-in, first-out order."""

from __future__ import annotations

import logging
import time
from collections import deque
from typing import Callable, Iterable

from robocmd.auto_command import AutoCommand, _Timer
from robocmd.delay_command import DelayCommand

log = logging.getLogger(__name__)


class CommandController:
    """Holds an autonomous routine and executes it command by command."""

    def __init__(
        self,
        cmds: Iterable[AutoCommand] = (),
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._queue: deque[AutoCommand] = deque(cmds)
        self._timed_out = False
        self._should_cancel: Callable[[], bool] = lambda: False
        self._clock = clock
        self._sleep = sleep

    def add(self, cmd: AutoCommand, timeout_seconds: float = AutoCommand.default_timeout) -> None:
        """Queue a command with the given timeout; a timeout <= 0 means none."""
        cmd.timeout_seconds = timeout_seconds
        self._queue.append(cmd)

    def add_many(self, cmds: Iterable[AutoCommand], timeout_seconds: float | None = None) -> None:
        """Queue several commands, applying ``timeout_seconds`` to those still at the default."""
        for cmd in cmds:
            if timeout_seconds is not None and cmd.timeout_seconds == AutoCommand.default_timeout:
                cmd.timeout_seconds = timeout_seconds
            self._queue.append(cmd)

    def add_delay(self, ms: int) -> None:
        """Queue a pause of ``ms`` milliseconds."""
        self._queue.append(DelayCommand(ms, sleep=self._sleep))

    def add_cancel_func(self, true_if_cancel: Callable[[], bool]) -> None:
        """Cancel the routine once ``true_if_cancel`` returns True."""
        self._should_cancel = true_if_cancel

    def run(self) -> None:
        """Execute and remove the queued commands in order."""
        log.info("running auto, commands 1 to %d", len(self._queue))
        total = _Timer(self._clock)
        count = 1

        while self._queue:
            cmd = self._queue.popleft()
            self._timed_out = False

            timeout_timer = _Timer(self._clock)
            do_timeout = cmd.timeout_seconds > 0.0
            if cmd.true_to_end is not None:
                do_timeout = do_timeout or cmd.true_to_end.test()

            while not cmd.run():
                self._sleep(0.005)
                if not do_timeout:
                    continue
                if timeout_timer.value() > cmd.timeout_seconds or self._should_cancel():
                    cmd.on_timeout()
                    self._timed_out = True
                    break
                self._sleep(0.020)

            if self._should_cancel():
                log.info("cancelling")
                break

            log.info("finished command %d, timed out: %s", count, self._timed_out)
            count += 1

        log.info("finished commands in %f seconds", total.value())

    def last_command_timed_out(self) -> bool:
        """Whether the most recent command ended by timing out."""
        return self._timed_out