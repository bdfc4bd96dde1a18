"""Feeder state machine: the context and the states it moves through."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import IntEnum

from .config import FeederConfig
from .hardware import Hardware


class StateType(IntEnum):
    NORMAL = 0
    ROLLDOWN = 1
    PROXIMITYSTATE = 2
    ROLLUP = 3
    OPEN = 4
    HOUR_SET = 5
    MINUTE_SET = 6


class State(ABC):
    """A state of the feeder. Handlers do nothing unless a state overrides them."""

    @property
    @abstractmethod
    def type(self) -> StateType: ...

    def enter(self, ctx: Context) -> None:
        pass

    def update(self, ctx: Context) -> None:
        pass

    def on_button1(self, ctx: Context) -> None:
        pass

    def on_button2(self, ctx: Context) -> None:
        pass

    def on_button3(self, ctx: Context) -> None:
        pass


class Context:
    """Holds the current state, the hardware and the clock values being edited."""

    def __init__(self, hardware: Hardware | None = None, config: FeederConfig | None = None) -> None:
        self.hardware = hardware if hardware is not None else Hardware()
        self.config = config if config is not None else FeederConfig()
        self.hour_setting = 0
        self.minute_setting = 0
        self._state: State | None = None

    @property
    def state(self) -> State | None:
        return self._state

    def set_state(self, state: State | None) -> None:
        """Switch to ``state`` and run its entry action."""
        self._state = state
        if state is not None:
            state.enter(self)

    def update(self) -> None:
        if self._state is not None:
            self._state.update(self)

    def on_button1(self) -> None:
        if self._state is not None:
            self._state.on_button1(self)

    def on_button2(self) -> None:
        if self._state is not None:
            self._state.on_button2(self)

    def on_button3(self) -> None:
        if self._state is not None:
            self._state.on_button3(self)


class NormalState(State):
    """Idle: display dark, waiting for a feeding time."""

    type = StateType.NORMAL

    def enter(self, ctx: Context) -> None:
        ctx.hardware.display.no_backlight()
        ctx.hardware.display.no_display()

    def update(self, ctx: Context) -> None:
        hw = ctx.hardware
        if ctx.config.servo_debug:
            triggered = hw.pins.read(ctx.config.servo_button_pin)
        else:
            triggered = ctx.config.is_feed_time(hw.clock.now())
        if triggered:
            ctx.set_state(RollupState())


class RollupState(State):
    """Turns the servo to the open position and moves straight on."""

    type = StateType.ROLLUP

    def enter(self, ctx: Context) -> None:
        display = ctx.hardware.display
        display.clear()
        display.print("Rollup...")
        ctx.hardware.servo.write(ctx.config.rollup_angle)
        ctx.set_state(OpenState())


class OpenState(State):
    """Keeps the feeder open for the configured interval."""

    type = StateType.OPEN

    def __init__(self) -> None:
        self.start_millis = 0

    def enter(self, ctx: Context) -> None:
        display = ctx.hardware.display
        display.clear()
        display.print("Open...")
        self.start_millis = ctx.hardware.clock.millis()

    def update(self, ctx: Context) -> None:
        if ctx.hardware.clock.millis() - self.start_millis >= ctx.config.open_interval_ms:
            ctx.set_state(RolldownState())


class RolldownState(State):
    """Closes the feeder and returns to normal."""

    type = StateType.ROLLDOWN

    def enter(self, ctx: Context) -> None:
        ctx.hardware.display.no_display()
        ctx.hardware.servo.write(ctx.config.rolldown_angle)
        ctx.set_state(NormalState())


class ProximityState(State):
    """Someone is near: show the time."""

    type = StateType.PROXIMITYSTATE

    def enter(self, ctx: Context) -> None:
        display = ctx.hardware.display
        display.display()
        display.clear()
        display.backlight()

    def update(self, ctx: Context) -> None:
        now = ctx.hardware.clock.now()
        display = ctx.hardware.display
        display.set_cursor(0, 1)
        display.print(now.hour)
        display.print(":")
        display.print(f"{now.minute:02d}")

    def on_button1(self, ctx: Context) -> None:
        ctx.set_state(HourSetState())


class HourSetState(State):
    """Edit the hour: button 2 up, button 3 down, button 1 to minutes."""

    type = StateType.HOUR_SET

    def enter(self, ctx: Context) -> None:
        now = ctx.hardware.clock.now()
        ctx.hour_setting = now.hour
        ctx.minute_setting = now.minute
        display = ctx.hardware.display
        display.clear()
        display.print("Set Hour: ")
        display.print(ctx.hour_setting)

    def update(self, ctx: Context) -> None:
        display = ctx.hardware.display
        display.set_cursor(0, 1)
        display.print("Hour: ")
        display.print(ctx.hour_setting)

    def on_button1(self, ctx: Context) -> None:
        ctx.set_state(MinuteSetState())

    def on_button2(self, ctx: Context) -> None:
        ctx.hour_setting = (ctx.hour_setting + 1) % 24

    def on_button3(self, ctx: Context) -> None:
        ctx.hour_setting = (ctx.hour_setting - 1) % 24


class MinuteSetState(State):
    """Edit the minute: button 2 up, button 3 down, button 1 saves to the clock."""

    type = StateType.MINUTE_SET

    def enter(self, ctx: Context) -> None:
        display = ctx.hardware.display
        display.clear()
        display.print("Set Minute: ")
        display.print(ctx.minute_setting)

    def update(self, ctx: Context) -> None:
        display = ctx.hardware.display
        display.set_cursor(0, 1)
        display.print("Minute: ")
        display.print(ctx.minute_setting)

    def on_button1(self, ctx: Context) -> None:
        clock = ctx.hardware.clock
        clock.adjust(
            clock.now().replace(
                hour=ctx.hour_setting, minute=ctx.minute_setting, second=0, microsecond=0
            )
        )
        ctx.set_state(ProximityState())

    def on_button2(self, ctx: Context) -> None:
        ctx.minute_setting = (ctx.minute_setting + 1) % 60

    def on_button3(self, ctx: Context) -> None:
        ctx.minute_setting = (ctx.minute_setting - 1) % 60