"""Hardware interfaces used by the feeder, with in-memory implementations."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Protocol

PGAIN_2X = 1


class Display(Protocol):
    def clear(self) -> None: ...
    def print(self, value: object) -> None: ...
    def set_cursor(self, column: int, row: int) -> None: ...
    def display(self) -> None: ...
    def no_display(self) -> None: ...
    def backlight(self) -> None: ...
    def no_backlight(self) -> None: ...


class Servo(Protocol):
    def attach(self, pin: int) -> None: ...
    def write(self, angle: int) -> None: ...


class Clock(Protocol):
    def now(self) -> datetime: ...
    def adjust(self, when: datetime) -> None: ...
    def millis(self) -> int: ...


class ProximitySensor(Protocol):
    def init(self) -> bool: ...
    def set_proximity_gain(self, gain: int) -> bool: ...
    def enable_proximity_sensor(self, interrupts: bool) -> bool: ...
    def read_proximity(self) -> int: ...


class CharacterDisplay:
    """In-memory character LCD."""

    def __init__(self, cols: int = 16, rows: int = 2) -> None:
        if cols < 1 or rows < 1:
            raise ValueError("display needs at least one column and one row")
        self.cols = cols
        self.rows = rows
        self.is_on = True
        self.backlight_on = False
        self.clear()

    @property
    def cursor(self) -> tuple[int, int]:
        return self._cursor

    def clear(self) -> None:
        self._cells = [[" "] * self.cols for _ in range(self.rows)]
        self._cursor = (0, 0)

    def print(self, value: object) -> None:
        column, row = self._cursor
        for char in str(value):
            if column < self.cols:
                self._cells[row][column] = char
            column += 1
        self._cursor = (column, row)

    def set_cursor(self, column: int, row: int) -> None:
        if not (0 <= column < self.cols and 0 <= row < self.rows):
            raise ValueError(f"cursor ({column}, {row}) outside {self.cols}x{self.rows} display")
        self._cursor = (column, row)

    def display(self) -> None:
        self.is_on = True

    def no_display(self) -> None:
        self.is_on = False

    def backlight(self) -> None:
        self.backlight_on = True

    def no_backlight(self) -> None:
        self.backlight_on = False

    def line(self, row: int) -> str:
        """Text of one row, without trailing blanks."""
        if not 0 <= row < self.rows:
            raise IndexError(f"row {row} outside display")
        return "".join(self._cells[row]).rstrip()


class RecordingServo:
    """Servo that remembers every angle written to it, clamped to 0..180."""

    def __init__(self) -> None:
        self.pin: int | None = None
        self.angle: int | None = None
        self.history: list[int] = []

    def attach(self, pin: int) -> None:
        self.pin = pin

    def write(self, angle: int) -> None:
        self.angle = max(0, min(180, angle))
        self.history.append(self.angle)


class ManualClock:
    """Clock that only moves when told to."""

    def __init__(self, start: datetime | None = None) -> None:
        self._now = start or datetime(2000, 1, 1)
        self._millis = 0

    def now(self) -> datetime:
        return self._now

    def adjust(self, when: datetime) -> None:
        self._now = when

    def advance(self, seconds: float) -> None:
        if seconds < 0:
            raise ValueError("time cannot run backwards")
        self._now += timedelta(seconds=seconds)
        self._millis += round(seconds * 1000)

    def millis(self) -> int:
        return self._millis


class PinBank:
    """Digital input levels; unset pins read high as pull-up inputs do."""

    def __init__(self) -> None:
        self._levels: dict[int, bool] = {}

    def read(self, pin: int) -> bool:
        return self._levels.get(pin, True)

    def set(self, pin: int, level: bool) -> None:
        self._levels[pin] = bool(level)


class ScriptedProximitySensor:
    """Plays back fixed readings; the last one repeats once they run out (0 if none)."""

    def __init__(
        self,
        readings: Iterable[int] = (),
        *,
        init_ok: bool = True,
        gain_ok: bool = True,
        enable_ok: bool = True,
    ) -> None:
        self._readings = iter(readings)
        self._last = 0
        self._init_ok = init_ok
        self._gain_ok = gain_ok
        self._enable_ok = enable_ok
        self.initialized = False
        self.enabled = False
        self.gain: int | None = None
        self.interrupts: bool | None = None

    def init(self) -> bool:
        self.initialized = self._init_ok
        return self.initialized

    def set_proximity_gain(self, gain: int) -> bool:
        if not self.initialized:
            return False
        self.gain = gain
        return self._gain_ok

    def enable_proximity_sensor(self, interrupts: bool) -> bool:
        self.interrupts = interrupts
        self.enabled = self.initialized and self._enable_ok
        return self.enabled

    def read_proximity(self) -> int:
        if not self.enabled:
            raise RuntimeError("proximity sensor is not enabled")
        self._last = next(self._readings, self._last)
        return self._last


@dataclass
class Hardware:
    """The devices the feeder talks to."""

    display: Display = field(default_factory=CharacterDisplay)
    servo: Servo = field(default_factory=RecordingServo)
    clock: Clock = field(default_factory=ManualClock)
    pins: PinBank = field(default_factory=PinBank)
    sensor: ProximitySensor = field(default_factory=ScriptedProximitySensor)