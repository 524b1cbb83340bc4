# robocmd

A small framework for writing robot autonomous routines as a queue of
commands. Each command is polled until it reports that it is finished, times
out, or is cancelled by a condition.

## Installing

```
pip install .
```

For running the tests:

```
pip install .[test]
pytest
```

## Commands and conditions

Everything a routine does is an `AutoCommand`. Its `run()` method is called
over and over and returns `True` once the command is done. If it runs longer
than its `timeout_seconds` (10 seconds by default; a value of 0 or less means
no timeout), its `on_timeout()` method is called so it can clean up. Give a
command a different limit with `with_timeout()` (ignored for commands that are
marked never to time out), or end it early with `with_cancel_condition()`.

A `Condition` answers a yes/no question while the routine runs. Conditions can
be combined with `or_()` and `and_()`, or with the `|` and `&` operators; both
operands are always tested.

Building blocks in `robocmd.auto_command`:

- `FunctionCommand`: wraps a callable that returns `True` when it is done.
- `WaitUntilCondition`: finishes once a condition tests true.
- `InOrder`: runs its commands one after another. It never times out unless
  `with_timeout()` is called on it. `copy()` gives an independent sequence.
- `Parallel`: runs its commands on background threads and finishes when all
  of them have finished. On timeout it stops the threads and calls
  `on_timeout()` on the unfinished commands.
- `Branch`: tests a condition once when it starts, then runs the true or the
  false command.
- `Async`: starts a command on a background thread and finishes at once.
- `RepeatUntil`: repeats an `InOrder` a fixed number of times (pass an
  integer) or until a condition holds (pass a `Condition`).
- `FunctionCondition`, `TimesTestedCondition`, `IfTimePassed`: ready-made
  conditions.

`robocmd.delay_command.DelayCommand` pauses the routine for a number of
milliseconds.

Classes that measure time or wait accept `clock=` and `sleep=` keyword
arguments (defaulting to `time.monotonic` and `time.sleep`), so routines can
be run against a fake clock in tests.

## Running a routine

```python
from robocmd.auto_command import FunctionCommand, InOrder, RepeatUntil
from robocmd.command_controller import CommandController

controller = CommandController([
    FunctionCommand(lambda: print("start") or True),
    RepeatUntil(InOrder([FunctionCommand(lambda: True)]), 3),
])
controller.add_delay(250)
controller.run()
print(controller.last_command_timed_out())
```

`CommandController` also offers `add(cmd, timeout_seconds)` to queue one
command with a timeout, and `add_many(cmds, timeout_seconds)` to queue several,
applying the timeout to those still at the default. `add_cancel_func()`
registers a callable that stops the whole controller once it returns `True`.
Progress is reported through the standard `logging` module.

## Motor and solenoid commands

`robocmd.basic_command` holds single-shot commands:

- `BasicSpinCommand(motor, direction, setting, power)` calls
  `motor.spin(direction, power, unit)`, where `direction` is a `Direction`
  (`FWD`, `REV`) and the unit is `"percent"`, `"volt"` or `"rpm"` for the
  `SpinSetting` values `PERCENT`, `VOLTAGE` and `VELOCITY`.
- `BasicStopCommand(motor, brake)` calls `motor.stop(brake)`.
- `BasicSolenoidSet(solenoid, setting)` calls `solenoid.set(setting)`.

Any object with those methods will do, including test doubles.

## Choosing an autonomous

`robocmd.auto_chooser.AutoChooser` lays out one touch button per routine name,
three to a row, and records which one was tapped. Pass it touch events with
`update(was_pressed, x, y)`, and read the selected index with `get_choice()`.
`draw(screen, first_draw, frame_number)` draws onto any object that provides
`set_font`, `set_fill_color`, `draw_rectangle`, `get_string_width` and
`print_at`. The buttons are `Rect` values with `contains()` and `center()`.

## What this package does not do

It contains no hardware drivers, no drivetrain, flywheel or odometry
subsystems, and no commands for driving, turning, path following or spinning
a flywheel. Motors, solenoids and screens are supplied by the caller.