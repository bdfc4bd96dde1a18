"""Main control loop driving the feeder's state machine."""

from __future__ import annotations

import sys
import time
from collections.abc import Callable
from typing import TextIO

from .config import FeederConfig
from .hardware import PGAIN_2X, Hardware, ManualClock
from .proximity import ProximityTransitionManager, Transition
from .states import Context, NormalState, ProximityState, State


class FeederController:
    """Setup followed by repeated loop iterations.

    ``sleep`` takes seconds; by default a manual clock is advanced, otherwise
    the controller really sleeps.
    """

    def __init__(
        self,
        hardware: Hardware | None = None,
        config: FeederConfig | None = None,
        *,
        output: TextIO | None = None,
        sleep: Callable[[float], None] | None = None,
    ) -> None:
        self.hardware = hardware or Hardware()
        self.config = config or FeederConfig()
        self.context = Context(self.hardware, self.config)
        self.proximity_manager = ProximityTransitionManager(self.config.proximity_buffer_size)
        self.proximity_enabled = False
        self.last_proximity = False
        self._output = output or sys.stdout
        if sleep is None:
            clock = self.hardware.clock
            sleep = clock.advance if isinstance(clock, ManualClock) else time.sleep
        self._sleep = sleep
        self.is_set_up = False

    @property
    def state(self) -> State | None:
        return self.context.state

    def _debug(self, message: str) -> None:
        if self.config.debug_mode:
            print(message, file=self._output)

    def setup(self) -> None:
        """Initialise the devices and enter the normal state."""
        sensor = self.hardware.sensor
        self.proximity_enabled = bool(
            sensor.init()
            and sensor.set_proximity_gain(PGAIN_2X)
            and sensor.enable_proximity_sensor(False)
        )
        self.hardware.servo.attach(self.config.servo_pin)
        self.hardware.display.backlight()
        self.context.set_state(NormalState())
        self.is_set_up = True

    def loop(self) -> None:
        """Run one iteration of the control loop."""
        if not self.is_set_up:
            raise RuntimeError("setup() must be called before loop()")
        if self.proximity_enabled:
            value = self.hardware.sensor.read_proximity()
            self._debug(f"Proximity: {value}")
            self.proximity_manager.update_buffer(value > self.config.proximity_threshold)
            if self.state is not None:
                transition = self.proximity_manager.check_transition(self.last_proximity, self.state)
                if transition is Transition.TO_PROXIMITY:
                    self.context.set_state(ProximityState())
                    self.last_proximity = True
                elif transition is Transition.TO_NORMAL:
                    self.context.set_state(NormalState())
                    self.last_proximity = False

        self.context.update()
        buttons = (
            (self.config.button1_pin, self.context.on_button1),
            (self.config.button2_pin, self.context.on_button2),
            (self.config.button3_pin, self.context.on_button3),
        )
        for pin, handler in buttons:
            if not self.hardware.pins.read(pin):
                self._sleep(self.config.debounce_wait_ms / 1000)
                handler()
        self._sleep(self.config.loop_end_delay_ms / 1000)
        if self.state is not None:
            self._debug(f"Current State: {int(self.state.type)}")

    def run(self, iterations: int | None = None) -> State | None:
        """Set up if needed, loop ``iterations`` times (forever when None), return the final state."""
        if iterations is not None and iterations < 0:
            raise ValueError("iterations cannot be negative")
        if not self.is_set_up:
            self.setup()
        if iterations is None:
            while True:
                self.loop()
        for _ in range(iterations):
            self.loop()
        return self.state