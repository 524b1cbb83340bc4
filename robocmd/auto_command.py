"""Composable autonomous commands and the conditions that steer them."""

from __future__ import annotations

import copy
import logging
import threading
import time
from abc import ABC, abstractmethod
from collections import deque
from typing import Callable, Iterable

log = logging.getLogger(__name__)

Clock = Callable[[], float]
Sleep = Callable[[float], None]

_POLL_SECONDS = 0.02


class _Timer:
    """Elapsed-time counter measured in seconds from construction or the last reset."""

    def __init__(self, clock: Clock) -> None:
        self._clock = clock
        self._start = clock()

    def reset(self) -> None:
        self._start = self._clock()

    def value(self) -> float:
        return self._clock() - self._start


class Condition(ABC):
    """A yes/no decision evaluated at run time."""

    @abstractmethod
    def test(self) -> bool:
        """Evaluate the condition."""

    def or_(self, other: Condition) -> Condition:
        """Combine with another condition; true when either is true."""
        return OrCondition(self, other)

    def and_(self, other: Condition) -> Condition:
        """Combine with another condition; true when both are true."""
        return AndCondition(self, other)

    __or__ = or_
    __and__ = and_


class _BinaryCondition(Condition):
    """Two operands that are always both evaluated."""

    def __init__(self, a: Condition, b: Condition) -> None:
        self.a = a
        self.b = b

    def _results(self) -> tuple[bool, bool]:
        return self.a.test(), self.b.test()


class OrCondition(_BinaryCondition):
    """True when either operand is true."""

    def test(self) -> bool:
        return any(self._results())


class AndCondition(_BinaryCondition):
    """True when both operands are true."""

    def test(self) -> bool:
        return all(self._results())


class TimesTestedCondition(Condition):
    """False until it has been tested ``n`` times, then true."""

    def __init__(self, n: int) -> None:
        self.max = n
        self.count = 0

    def test(self) -> bool:
        self.count += 1
        return self.count >= self.max


class FunctionCondition(Condition):
    """Wraps a callable that is evaluated each time the condition is tested."""

    def __init__(self, cond: Callable[[], bool], timeout: Callable[[], None] = lambda: None) -> None:
        self.cond = cond
        self.timeout = timeout

    def test(self) -> bool:
        return bool(self.cond())


class IfTimePassed(Condition):
    """True once more than ``time_s`` seconds have passed since construction."""

    def __init__(self, time_s: float, *, clock: Clock = time.monotonic) -> None:
        self.time_s = time_s
        self._timer = _Timer(clock)

    def test(self) -> bool:
        return self._timer.value() > self.time_s


class AutoCommand:
    """A step of an autonomous routine, run repeatedly until it reports completion."""

    default_timeout = 10.0

    def __init__(self) -> None:
        self.timeout_seconds: float = self.default_timeout
        self.true_to_end: Condition | None = None

    def run(self) -> bool:
        """Do one step of work; return True when the command is finished."""
        return True

    def on_timeout(self) -> None:
        """Clean up when the command is cancelled before finishing."""

    def with_timeout(self, t_seconds: float) -> AutoCommand:
        """Set the timeout, unless the command is marked never to time out."""
        if self.timeout_seconds >= 0:
            self.timeout_seconds = t_seconds
        return self

    def with_cancel_condition(self, true_to_end: Condition) -> AutoCommand:
        """Cancel the command once ``true_to_end`` tests true."""
        self.true_to_end = true_to_end
        return self


def _should_cancel(cmd: AutoCommand, elapsed: float) -> bool:
    """True when ``cmd`` has run past a positive timeout or its cancel condition holds."""
    expired = cmd.timeout_seconds > 0 and elapsed > cmd.timeout_seconds
    if cmd.true_to_end is not None:
        expired = expired or cmd.true_to_end.test()
    return expired


def _drive(
    cmd: AutoCommand,
    clock: Clock,
    sleep: Sleep,
    *,
    stop: threading.Event | None = None,
    stop_on_timeout: bool,
) -> None:
    """Run ``cmd`` until it finishes, polling its timeout between steps."""
    timer = _Timer(clock)
    while stop is None or not stop.is_set():
        if cmd.run():
            return
        if _should_cancel(cmd, timer.value()):
            cmd.on_timeout()
            if stop_on_timeout:
                return
        sleep(_POLL_SECONDS)


class FunctionCommand(AutoCommand):
    """Runs a callable; the command finishes when it returns True."""

    def __init__(self, f: Callable[[], bool]) -> None:
        super().__init__()
        self.f = f

    def run(self) -> bool:
        return bool(self.f())


class WaitUntilCondition(AutoCommand):
    """Finishes once the condition tests true."""

    def __init__(self, cond: Condition) -> None:
        super().__init__()
        self.cond = cond

    def run(self) -> bool:
        return self.cond.test()


class InOrder(AutoCommand):
    """Runs its commands one after another. Never times out unless told to."""

    def __init__(self, cmds: Iterable[AutoCommand] = (), *, clock: Clock = time.monotonic) -> None:
        super().__init__()
        self.timeout_seconds = -1.0
        self._clock = clock
        self._cmds: deque[AutoCommand] = deque(cmds)
        self._current: AutoCommand | None = None
        self._timer = _Timer(clock)

    def run(self) -> bool:
        if not self._cmds and self._current is None:
            return True

        if self._current is None:
            log.debug("taking next in-order command, %d queued", len(self._cmds))
            self._current = self._cmds.popleft()
            self._timer.reset()

        cmd = self._current
        if cmd.run():
            log.debug("in-order command finished")
            self._current = None
        elif _should_cancel(cmd, self._timer.value()):
            log.debug("in-order command timed out")
            cmd.on_timeout()
            self._current = None
        return False

    def on_timeout(self) -> None:
        if self._current is not None:
            self._current.on_timeout()

    def copy(self) -> InOrder:
        """Return an independent sequence holding the same commands and progress."""
        dup = InOrder(self._cmds, clock=self._clock)
        dup._current = self._current
        dup._timer = copy.copy(self._timer)
        dup.timeout_seconds = self.timeout_seconds
        dup.true_to_end = self.true_to_end
        return dup


class _Background(AutoCommand):
    """A command that drives other commands on background threads."""

    def __init__(self, clock: Clock, sleep: Sleep) -> None:
        super().__init__()
        self._clock = clock
        self._sleep = sleep


class Parallel(_Background):
    """Runs its commands concurrently and finishes once all of them have finished."""

    def __init__(
        self,
        cmds: Iterable[AutoCommand],
        *,
        clock: Clock = time.monotonic,
        sleep: Sleep = time.sleep,
    ) -> None:
        super().__init__(clock, sleep)
        self._cmds: list[AutoCommand | None] = list(cmds)
        self._runners: list[threading.Event | None] = []
        self._lock = threading.Lock()

    def _runner(self, index: int, cmd: AutoCommand, stop: threading.Event) -> None:
        _drive(cmd, self._clock, self._sleep, stop=stop, stop_on_timeout=False)
        with self._lock:
            if self._runners[index] is stop:
                self._runners[index] = None

    def run(self) -> bool:
        with self._lock:
            started = bool(self._runners)
        if not started:
            for index, cmd in enumerate(self._cmds):
                stop = threading.Event()
                with self._lock:
                    self._runners.append(stop)
                threading.Thread(target=self._runner, args=(index, cmd, stop), daemon=True).start()

        with self._lock:
            return all(runner is None for runner in self._runners)

    def on_timeout(self) -> None:
        with self._lock:
            for index, stop in enumerate(self._runners):
                if stop is None:
                    continue
                stop.set()
                cmd = self._cmds[index]
                if cmd is not None:
                    cmd.on_timeout()
                self._runners[index] = None
                self._cmds[index] = None


class Branch(AutoCommand):
    """Chooses between two commands by testing a condition when it starts."""

    def __init__(
        self,
        cond: Condition,
        false_choice: AutoCommand,
        true_choice: AutoCommand,
        *,
        clock: Clock = time.monotonic,
    ) -> None:
        super().__init__()
        self.timeout_seconds = -1
        self.cond = cond
        self.false_choice = false_choice
        self.true_choice = true_choice
        self._choice = False
        self._chosen = False
        self._timer = _Timer(clock)

    def _selected(self) -> AutoCommand:
        return self.true_choice if self._choice else self.false_choice

    def run(self) -> bool:
        if not self._chosen:
            self._choice = self.cond.test()
            self._chosen = True
            self._timer.reset()

        cmd = self._selected()
        if self._timer.value() > cmd.timeout_seconds and cmd.timeout_seconds != -1:
            cmd.on_timeout()
            self._chosen = False
            return True
        if cmd.run():
            self._chosen = False
            return True
        return False

    def on_timeout(self) -> None:
        if not self._chosen:
            return
        self._selected().on_timeout()
        self._chosen = False


class Async(_Background):
    """Starts a command in the background and finishes immediately."""

    def __init__(
        self,
        cmd: AutoCommand,
        *,
        clock: Clock = time.monotonic,
        sleep: Sleep = time.sleep,
    ) -> None:
        super().__init__(clock, sleep)
        self.cmd = cmd

    def run(self) -> bool:
        threading.Thread(
            target=_drive,
            args=(self.cmd, self._clock, self._sleep),
            kwargs={"stop_on_timeout": True},
            daemon=True,
        ).start()
        return True


class RepeatUntil(AutoCommand):
    """Repeats a sequence a fixed number of times or until a condition is true."""

    def __init__(self, cmds: InOrder, until: int | Condition) -> None:
        super().__init__()
        self.timeout_seconds = -1.0
        self.cond: Condition = until if isinstance(until, Condition) else TimesTestedCondition(until)
        self._template = cmds.copy()
        self._working = self._template.copy()

    def run(self) -> bool:
        if not self._working.run():
            return False
        if self.cond.test():
            return True
        self._working = self._template.copy()
        return False

    def on_timeout(self) -> None:
        self._working.on_timeout()