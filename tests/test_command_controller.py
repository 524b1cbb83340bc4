from types import SimpleNamespace

import pytest

from robocmd.auto_command import AutoCommand, TimesTestedCondition
from robocmd.command_controller import CommandController

FOREVER = 10**9


class FakeClock:
    def __init__(self):
        self.now = 0.0
        self.sleeps = []

    def __call__(self):
        return self.now

    def sleep(self, seconds):
        self.sleeps.append(seconds)
        self.now += seconds


class Recorder(AutoCommand):
    def __init__(self, name, log, runs_needed=1):
        super().__init__()
        self.name = name
        self.log = log
        self.remaining = runs_needed
        self.timeouts = 0

    def run(self):
        self.log.append(self.name)
        self.remaining -= 1
        return self.remaining <= 0

    def on_timeout(self):
        self.timeouts += 1


@pytest.fixture
def env():
    clock = FakeClock()
    log = []

    def controller(*cmds):
        return CommandController(
            [Recorder(name, log, runs) for name, runs in cmds], clock=clock, sleep=clock.sleep
        )

    return SimpleNamespace(
        clock=clock,
        log=log,
        controller=controller,
        rec=lambda name, runs=1: Recorder(name, log, runs),
    )


def test_runs_commands_in_order(env):
    ctrl = env.controller(("a", 1), ("b", 2), ("c", 1))
    ctrl.run()
    assert env.log == ["a", "b", "b", "c"]
    assert ctrl.last_command_timed_out() is False


def test_queue_is_consumed(env):
    ctrl = env.controller(("a", 1))
    ctrl.run()
    ctrl.run()
    assert env.log == ["a"]


def test_add_sets_timeout_and_times_out(env):
    ctrl = env.controller()
    stuck, after = env.rec("stuck", FOREVER), env.rec("after")
    ctrl.add(stuck, 1.0)
    ctrl.add(after)
    assert stuck.timeout_seconds == 1.0
    assert after.timeout_seconds == AutoCommand.default_timeout
    ctrl.run()
    assert stuck.timeouts == 1
    assert env.log[-1] == "after"
    assert env.clock.now > 1.0


def test_last_command_timed_out_reports_last(env):
    ctrl = env.controller()
    ctrl.add(env.rec("stuck", FOREVER), 0.5)
    ctrl.run()
    assert ctrl.last_command_timed_out() is True


def test_no_timeout_when_non_positive(env):
    ctrl = env.controller()
    slow = env.rec("slow", 50)
    ctrl.add(slow, 0)
    ctrl.run()
    assert slow.timeouts == 0
    assert len(env.log) == 50


def test_add_many_only_replaces_default_timeouts(env):
    ctrl = env.controller()
    default = env.rec("a")
    custom = env.rec("b").with_timeout(2.0)
    ctrl.add_many([default, custom], 4.0)
    assert (default.timeout_seconds, custom.timeout_seconds) == (4.0, 2.0)
    ctrl.run()
    assert env.log == ["a", "b"]


def test_add_many_without_timeout_leaves_commands_alone(env):
    ctrl = env.controller()
    cmd = env.rec("a")
    ctrl.add_many([cmd])
    assert cmd.timeout_seconds == AutoCommand.default_timeout
    ctrl.run()
    assert env.log == ["a"]


def test_add_delay_sleeps(env):
    ctrl = env.controller()
    ctrl.add_delay(500)
    ctrl.run()
    assert 0.5 in env.clock.sleeps


def test_cancel_after_command_stops_queue(env):
    ctrl = env.controller(("a", 1), ("b", 1))
    ctrl.add_cancel_func(lambda: True)
    ctrl.run()
    assert env.log == ["a"]


def test_cancel_during_command(env):
    ctrl = env.controller()
    stuck = env.rec("stuck", FOREVER)
    ctrl.add(stuck, 100.0)
    ctrl.add(env.rec("never"))
    ctrl.add_cancel_func(TimesTestedCondition(3).test)
    ctrl.run()
    assert stuck.timeouts == 1
    assert ctrl.last_command_timed_out() is True
    assert "never" not in env.log