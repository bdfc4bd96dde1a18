"""Pet feeder controller: settings, state machine, proximity handling and in-memory hardware."""

__version__ = "0.1.0"