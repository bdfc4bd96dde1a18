"""Feeder settings: pins, timings, thresholds and the feeding schedule."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

MSG_PROXIMITY_SENSOR_FAIL = "Failed to initialize proximity sensor!"
MSG_PROXIMITY_SENSOR_ENABLED = "Proximity sensor enabled."
MSG_PROXIMITY_SENSOR_INIT = "APDS-9930 Proximity Sensor Test"


@dataclass(frozen=True)
class FeederConfig:
    """Immutable configuration of the feeder."""

    serial_baud_rate: int = 9600
    wait_time_ms: int = 10
    debounce_wait_ms: int = 200
    loop_end_delay_ms: int = 1000
    button1_pin: int = 6
    button2_pin: int = 7
    servo_button_pin: int = 8
    button3_pin: int = 9
    proximity_threshold: int = 200
    proximity_buffer_size: int = 3
    lcd_addr: int = 0x27
    lcd_cols: int = 16
    lcd_rows: int = 2
    servo_pin: int = 7
    debug_mode: bool = True
    servo_debug_mode: bool = True
    feed_hours: tuple[int, ...] = (7, 12, 19)
    rollup_angle: int = 180
    rolldown_angle: int = 0
    open_interval_ms: int = 5000

    def __post_init__(self) -> None:
        if any(not 0 <= hour <= 23 for hour in self.feed_hours):
            raise ValueError(f"feed hours must lie in 0..23: {self.feed_hours!r}")
        if self.proximity_buffer_size < 1:
            raise ValueError("proximity buffer size must be at least 1")
        if self.lcd_cols < 1 or self.lcd_rows < 1:
            raise ValueError("LCD must have at least one column and one row")
        if self.open_interval_ms < 0:
            raise ValueError("open interval cannot be negative")

    @property
    def servo_debug(self) -> bool:
        """True when the servo is driven by its debug button instead of the clock."""
        return self.debug_mode and self.servo_debug_mode

    def is_feed_time(self, when: datetime) -> bool:
        """Return True at the exact start (hh:00:00) of a feeding hour."""
        return when.hour in self.feed_hours and when.minute == 0 and when.second == 0