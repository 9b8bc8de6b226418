"""Relay board and the two watering sequences that drive it."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Callable, Optional

RELAY_PINS = (0, 2)
MINUTE_MS = 60_000
POOL_FLOW_MS = 20_000
POOL_PAUSE_MS = 15 * MINUTE_MS

PinWriter = Callable[[int, bool], None]


class Step(enum.IntEnum):
    """Steps shared by the garden watering and pool sequences."""

    IDLE = 0
    START_WATERING_REL1 = 1
    WATERING_REL1 = 2
    STOP_WATERING_REL1 = 3
    START_WATERING_REL2 = 4
    WATERING_REL2 = 5
    STOP_WATERING_REL2 = 6


class RelayBoard:
    """Two relays, numbered 1 and 2, with an optional hook for driving the pins."""

    def __init__(self, writer: Optional[PinWriter] = None) -> None:
        self._writer = writer
        self._states = [False, False]

    @staticmethod
    def _slot(index: int) -> int:
        if index not in (1, 2):
            raise ValueError(f"no relay {index!r}; relays are 1 and 2")
        return index - 1

    def set(self, index: int, on: bool) -> None:
        slot = self._slot(index)
        self._states[slot] = bool(on)
        if self._writer is not None:
            self._writer(RELAY_PINS[slot], bool(on))

    def toggle(self, index: int) -> bool:
        """Flip a relay and return its new state."""
        new_state = not self.is_on(index)
        self.set(index, new_state)
        return new_state

    def all_off(self) -> None:
        for index in (1, 2):
            self.set(index, False)

    def is_on(self, index: int) -> bool:
        return self._states[self._slot(index)]


@dataclass
class Schedule:
    """Two daily start times and how long each relay waters, in minutes."""

    watering_time: int = 10
    start_hour1: int = 6
    start_minute1: int = 0
    start_hour2: int = 21
    start_minute2: int = 0

    def is_start_time(self, hour: int, minute: int) -> bool:
        return (hour, minute) in (
            (self.start_hour1, self.start_minute1),
            (self.start_hour2, self.start_minute2),
        )


@dataclass
class WateringCycle:
    """Waters through relay 1 and then relay 2, once per scheduled start."""

    board: RelayBoard
    schedule: Schedule
    state: Step = Step.IDLE
    started_ms: int = 0

    def step(self, now_ms: int, hour: int, minute: int) -> Step:
        """Advance the sequence by at most one step and return the new step."""
        state = self.state
        if state is Step.IDLE:
            if self.schedule.is_start_time(hour, minute):
                self.state = Step.START_WATERING_REL1
        elif state in (Step.START_WATERING_REL1, Step.START_WATERING_REL2):
            relay = 1 if state is Step.START_WATERING_REL1 else 2
            self.board.all_off()
            self.started_ms = now_ms
            self.board.set(relay, True)
            self.state = Step(state + 1)
        elif state in (Step.WATERING_REL1, Step.WATERING_REL2):
            if now_ms - self.started_ms >= self.schedule.watering_time * MINUTE_MS:
                self.state = Step(state + 1)
        elif state is Step.STOP_WATERING_REL1:
            self.board.set(1, False)
            self.state = Step.START_WATERING_REL2
        elif state is Step.STOP_WATERING_REL2:
            self.board.set(2, False)
            self.state = Step.IDLE
        return self.state


@dataclass
class PoolCycle:
    """Runs warm water from the hose into the pool in short bursts with long pauses."""

    board: RelayBoard
    enabled: bool = False
    state: Step = Step.IDLE
    started_ms: int = 0
    counter: int = 0

    def step(self, now_ms: int) -> Step:
        """Advance the sequence by at most one step and return the new step."""
        state = self.state
        if state is Step.IDLE:
            if self.enabled:
                self.state = Step.START_WATERING_REL1
        elif state is Step.START_WATERING_REL1:
            self.board.all_off()
            self.started_ms = now_ms
            self.board.set(1, True)
            self.state = Step.WATERING_REL1
        elif state is Step.WATERING_REL1:
            if now_ms - self.started_ms >= POOL_FLOW_MS:
                self.state = Step.STOP_WATERING_REL1
                self.started_ms = now_ms
        elif state is Step.STOP_WATERING_REL1:
            self.board.set(1, False)
            if now_ms - self.started_ms >= POOL_PAUSE_MS:
                self.state = Step.IDLE
                self.counter = (self.counter + 1) & 0xFFFF
        return self.state