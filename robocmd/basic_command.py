"""Single-shot commands for motors and solenoids."""

from __future__ import annotations

from enum import Enum
from typing import Any, Protocol

from robocmd.auto_command import AutoCommand


class Direction(Enum):
    """Direction in which a motor spins."""

    FWD = "fwd"
    REV = "rev"


class SpinSetting(Enum):
    """How the power of a spin command is interpreted."""

    PERCENT = "percent"
    VOLTAGE = "voltage"
    VELOCITY = "velocity"

    @property
    def unit(self) -> str:
        """The motor unit that matches this setting."""
        return _UNITS[self]


_UNITS = {
    SpinSetting.PERCENT: "percent",
    SpinSetting.VOLTAGE: "volt",
    SpinSetting.VELOCITY: "rpm",
}


class Motor(Protocol):
    def spin(self, direction: Direction, power: float, unit: str) -> None: ...

    def stop(self, brake: Any) -> None: ...


class Solenoid(Protocol):
    def set(self, value: bool) -> None: ...


class BasicSpinCommand(AutoCommand):
    """Starts a motor spinning and finishes immediately."""

    def __init__(self, motor: Motor, direction: Direction, setting: SpinSetting, power: float) -> None:
        super().__init__()
        self.motor = motor
        self.direction = direction
        self.setting = setting
        self.power = power

    def run(self) -> bool:
        self.motor.spin(self.direction, self.power, self.setting.unit)
        return True


class BasicStopCommand(AutoCommand):
    """Stops a motor with the given brake mode and finishes immediately."""

    def __init__(self, motor: Motor, brake: Any) -> None:
        super().__init__()
        self.motor = motor
        self.brake = brake

    def run(self) -> bool:
        self.motor.stop(self.brake)
        return True


class BasicSolenoidSet(AutoCommand):
    """Sets a solenoid on or off and finishes immediately."""

    def __init__(self, solenoid: Solenoid, setting: bool) -> None:
        super().__init__()
        self.solenoid = solenoid
        self.setting = setting

    def run(self) -> bool:
        self.solenoid.set(self.setting)
        return True