# petfeeder

A controller for an automatic pet feeder, built around a small state
machine. A servo opens the food hatch at the configured feeding hours,
a proximity sensor wakes a character display that shows the time, and
three buttons let you set the clock.

## Settings

`petfeeder.config.FeederConfig` is a frozen dataclass holding pin
numbers, timings (in milliseconds), the proximity threshold and window
size, display size, servo angles and the feeding hours (default
`(7, 12, 19)`). Invalid values (feeding hours outside 0..23, a window
smaller than 1, an empty display, a negative open interval) raise
`ValueError`.

- `is_feed_time(when)` is true only at the exact start of a feeding
  hour (`hh:00:00`).
- `servo_debug` is true when both `debug_mode` and `servo_debug_mode`
  are set.

## States

`petfeeder.states.Context` holds the current state (`state`), the
`Hardware`, the `FeederConfig` and the hour and minute being edited.
`set_state(state)` switches state and runs the new state's entry
action; `update()` and `on_button1()`..`on_button3()` pass on to the
current state. Each state reports its kind through `type`, a
`StateType`.

- `NormalState` – backlight and display off. In servo debug mode a high
  level on the servo button pin starts feeding; otherwise feeding starts
  when `is_feed_time` is true for the clock's current time.
- `RollupState` – shows `Rollup...`, turns the servo to the roll-up
  angle and moves straight on to `OpenState`.
- `OpenState` – shows `Open...` and, once the open interval has passed
  on the clock's millisecond counter, moves to `RolldownState`.
- `RolldownState` – display off, servo to the roll-down angle, back to
  `NormalState`.
- `ProximityState` – display and backlight on, showing the time on the
  second row as `H:MM`. Button 1 goes to `HourSetState`.
- `HourSetState` – takes the current hour and minute from the clock;
  button 2 steps the hour up, button 3 down (wrapping at 24), button 1
  goes to `MinuteSetState`.
- `MinuteSetState` – button 2 up, button 3 down (wrapping at 60);
  button 1 writes the new time (seconds zero) to the clock and returns
  to `ProximityState`.

## Proximity handling

`petfeeder.proximity.ProximityTransitionManager` keeps a ring of the
last few readings (three by default). `check_transition(last_proximity,
current_state)` returns `Transition.TO_PROXIMITY` when every reading is
"near", the feeder was not already in proximity mode and the state is
normal or roll-down; `Transition.TO_NORMAL` when every reading is "not
near" while in `ProximityState`; otherwise `Transition.NONE`.

```python
from petfeeder.proximity import ProximityTransitionManager, Transition
from petfeeder.states import NormalState

manager = ProximityTransitionManager()
for _ in range(3):
    manager.update_buffer(True)

assert manager.check_transition(False, NormalState()) is Transition.TO_PROXIMITY
```

## Hardware

`petfeeder.hardware` defines the interfaces `Display`, `Servo`, `Clock`
and `ProximitySensor`, bundled in the `Hardware` dataclass, together
with in-memory implementations used as defaults:

- `CharacterDisplay` – a text grid (16x2 by default); `line(row)`
  returns a row without trailing blanks. Text past the last column is
  dropped.
- `RecordingServo` – clamps angles to 0..180 and keeps them in
  `history`.
- `ManualClock` – set with `adjust`, moved forward with
  `advance(seconds)`, which also advances `millis()`.
- `PinBank` – digital levels set by hand; unset pins read high, as
  pull-up inputs do. Buttons count as pressed when their pin reads low.
- `ScriptedProximitySensor` – plays back given readings and repeats the
  last one (0 if none) once they run out.

## Running the controller

`petfeeder.controller.FeederController` ties it together. `setup()`
initialises the proximity sensor, attaches the servo, turns on the
backlight and enters `NormalState`. `loop()` runs one pass: read the
sensor and apply any proximity transition, update the state, handle
pressed buttons (with a debounce pause) and pause at the end. In debug
mode it prints the proximity reading and the current state number to
its output. `run(iterations)` sets up if needed, loops that many times
(forever when `None`) and returns the final state.

With a `ManualClock` the pauses advance that clock; otherwise the
controller really sleeps. A `sleep` callable can be passed instead.

```python
import io
from datetime import datetime

from petfeeder.config import FeederConfig
from petfeeder.controller import FeederController
from petfeeder.hardware import Hardware, ManualClock
from petfeeder.states import StateType

hardware = Hardware(clock=ManualClock(datetime(2024, 1, 1, 6, 59, 59)))
controller = FeederController(
    hardware, FeederConfig(servo_debug_mode=False), output=io.StringIO()
)
state = controller.run(2)

assert state.type is StateType.OPEN
assert hardware.servo.history == [180]
```

Note that the default configuration has servo debug mode on, and since
`PinBank` reads unset pins as high, the servo button then counts as
pressed; set that pin low or turn `servo_debug_mode` off.

## What it does not do

The package has no command-line program and no drivers for real
devices: only the in-memory implementations above are included. To
drive physical hardware, supply your own objects that satisfy the
`Display`, `Servo`, `Clock` and `ProximitySensor` interfaces and a pin
reader with a `read(pin)` method.