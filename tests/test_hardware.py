from datetime import datetime

import pytest

from petfeeder.hardware import (
    PGAIN_2X,
    CharacterDisplay,
    Hardware,
    ManualClock,
    PinBank,
    RecordingServo,
    ScriptedProximitySensor,
)


def test_display_prints_at_cursor():
    lcd = CharacterDisplay()
    lcd.print("Hour: ")
    lcd.print(7)
    lcd.set_cursor(0, 1)
    lcd.print("Open...")
    assert lcd.line(0) == "Hour: 7"
    assert lcd.line(1) == "Open..."


def test_display_clips_to_width():
    lcd = CharacterDisplay(cols=4, rows=1)
    lcd.print("abcdefgh")
    assert lcd.line(0) == "abcd"


def test_display_clear_resets_text_and_cursor():
    lcd = CharacterDisplay()
    lcd.set_cursor(3, 1)
    lcd.print("x")
    lcd.clear()
    assert lcd.line(1) == ""
    assert lcd.cursor == (0, 0)


def test_display_rejects_cursor_outside():
    lcd = CharacterDisplay(cols=16, rows=2)
    with pytest.raises(ValueError):
        lcd.set_cursor(0, 2)
    with pytest.raises(IndexError):
        lcd.line(5)


def test_display_switches():
    lcd = CharacterDisplay()
    lcd.no_display()
    lcd.backlight()
    assert (lcd.is_on, lcd.backlight_on) == (False, True)
    lcd.display()
    lcd.no_backlight()
    assert (lcd.is_on, lcd.backlight_on) == (True, False)


def test_servo_records_and_clamps():
    servo = RecordingServo()
    servo.attach(7)
    servo.write(180)
    servo.write(400)
    servo.write(-5)
    assert servo.pin == 7
    assert servo.history == [180, 180, 0]
    assert servo.angle == 0


def test_clock_advance_moves_time_and_millis():
    clock = ManualClock(datetime(2024, 5, 1, 6, 59, 59))
    clock.advance(1.5)
    assert clock.millis() == 1500
    assert clock.now().hour == 7


def test_clock_adjust_keeps_millis():
    clock = ManualClock()
    clock.advance(2)
    target = datetime(2024, 5, 1, 12, 0, 0)
    clock.adjust(target)
    assert clock.now() == target
    assert clock.millis() == 2000


def test_clock_rejects_negative_advance():
    with pytest.raises(ValueError):
        ManualClock().advance(-1)


def test_pins_default_high_and_settable():
    pins = PinBank()
    assert pins.read(6) is True
    pins.set(6, False)
    assert pins.read(6) is False
    assert pins.read(9) is True


def test_sensor_plays_back_readings_then_repeats_last():
    sensor = ScriptedProximitySensor([10, 250])
    assert sensor.init() is True
    assert sensor.set_proximity_gain(PGAIN_2X) is True
    assert sensor.enable_proximity_sensor(False) is True
    assert [sensor.read_proximity() for _ in range(3)] == [10, 250, 250]
    assert sensor.gain == PGAIN_2X


def test_sensor_must_be_enabled_to_read():
    sensor = ScriptedProximitySensor([1])
    with pytest.raises(RuntimeError):
        sensor.read_proximity()


def test_sensor_init_failure_blocks_enable():
    sensor = ScriptedProximitySensor(init_ok=False)
    assert sensor.init() is False
    assert sensor.set_proximity_gain(PGAIN_2X) is False
    assert sensor.enable_proximity_sensor(False) is False


def test_hardware_defaults_are_independent():
    first, second = Hardware(), Hardware()
    first.pins.set(8, False)
    assert second.pins.read(8) is True
    assert first.pins.read(8) is False