"""Object-oriented design exercises: logic circuits and netlists, callbacks, emulated sensors, threading and small simulations."""

__version__ = "0.1.0"