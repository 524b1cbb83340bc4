"""Command-based autonomous routines, basic motor and solenoid commands, and an autonomous chooser."""

__version__ = "0.1.0"