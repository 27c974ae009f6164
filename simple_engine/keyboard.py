"""Keyboard scancodes, input events and a pressed-key tracker."""

from __future__ import annotations

import enum
from dataclasses import dataclass

SCANCODE_COUNT = 512


class Scancode(enum.IntEnum):
    """Physical key positions, numbered as in the USB HID usage table."""

    A = 4
    B = 5
    C = 6
    D = 7
    E = 8
    F = 9
    G = 10
    H = 11
    I = 12  # noqa: E741
    J = 13
    K = 14
    L = 15
    M = 16
    N = 17
    O = 18  # noqa: E741
    P = 19
    Q = 20
    R = 21
    S = 22
    T = 23
    U = 24
    V = 25
    W = 26
    X = 27
    Y = 28
    Z = 29
    RETURN = 40
    ESCAPE = 41
    BACKSPACE = 42
    TAB = 43
    SPACE = 44
    RIGHT = 79
    LEFT = 80
    DOWN = 81
    UP = 82


class EventType(enum.Enum):
    QUIT = enum.auto()
    KEY_DOWN = enum.auto()
    KEY_UP = enum.auto()


@dataclass(frozen=True)
class Event:
    """An input event; key events carry a scancode and a repeat flag."""

    type: EventType
    scancode: int | None = None
    repeat: bool = False


def _in_range(scancode: int | None) -> bool:
    return isinstance(scancode, int) and 0 <= scancode < SCANCODE_COUNT


class Input:
    """Tracks which keys are currently held down."""

    def __init__(self) -> None:
        self._pressed: set[int] = set()

    def process_event(self, event: Event) -> None:
        if event.type is EventType.KEY_DOWN and not event.repeat:
            if _in_range(event.scancode):
                self._pressed.add(int(event.scancode))
            return

        if event.type is EventType.KEY_UP and _in_range(event.scancode):
            self._pressed.discard(int(event.scancode))

    def is_key_pressed(self, scancode: int) -> bool:
        if not _in_range(scancode):
            return False
        return int(scancode) in self._pressed