"""A resizable window with an OpenGL 3.3 core context and queued input events."""

from __future__ import annotations

import logging
from typing import Any

from simple_engine.keyboard import Event, EventType, Scancode

log = logging.getLogger(__name__)


class WindowError(RuntimeError):
    """Raised when the window or its graphics context cannot be created."""


def _scancode_for(symbol: int) -> Scancode | None:
    """Map a pyglet key symbol onto a scancode, or None if it has none."""
    if ord("a") <= symbol <= ord("z"):
        name = chr(symbol).upper()
    else:
        from pyglet.window import key

        name = key.symbol_string(symbol)
    return Scancode.__members__.get(name)


class Window:
    """An operating-system window backed by pyglet.

    Keyboard and close requests are collected as :class:`Event` values and
    handed out by :meth:`poll_events`.
    """

    def __init__(self) -> None:
        self._native: Any = None
        self._events: list[Event] = []

    def __enter__(self) -> Window:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.destroy()

    @property
    def is_open(self) -> bool:
        return self._native is not None

    @property
    def native_handle(self) -> Any:
        return self._native

    def create(self, title: str, width: int, height: int) -> None:
        """Open the window and make its OpenGL context current."""
        self.destroy()
        try:
            import pyglet

            config = pyglet.gl.Config(
                major_version=3,
                minor_version=3,
                forward_compatible=True,
                double_buffer=True,
            )
            native = pyglet.window.Window(
                width, height, caption=title, resizable=True, config=config, vsync=True
            )
        except Exception as error:
            log.error(str(error))
            raise WindowError(f"Failed to create window: {error}") from error
        log.info("Window created.")

        native.push_handlers(
            on_key_press=self._on_key_press,
            on_key_release=self._on_key_release,
            on_close=self._on_close,
        )
        native.switch_to()
        self._native = native
        log.info("Window and OpenGL context created successfully.")

    def destroy(self) -> None:
        if self._native is not None:
            self._native.close()
            self._native = None
            log.info("Window destroyed.")

    def swap_buffers(self) -> None:
        if self._native is not None:
            self._native.flip()

    def drawable_size(self) -> tuple[int, int]:
        """Size of the framebuffer in pixels; (0, 0) when closed."""
        if self._native is None:
            return (0, 0)
        width, height = self._native.get_framebuffer_size()
        return (int(width), int(height))

    def poll_events(self) -> list[Event]:
        """Pump the window's events and return everything queued since last call."""
        if self._native is not None:
            self._native.dispatch_events()
        events, self._events = self._events, []
        return events

    def _on_key_press(self, symbol: int, modifiers: int) -> bool:
        scancode = _scancode_for(symbol)
        if scancode is not None:
            self._events.append(Event(EventType.KEY_DOWN, scancode, False))
        return True

    def _on_key_release(self, symbol: int, modifiers: int) -> bool:
        scancode = _scancode_for(symbol)
        if scancode is not None:
            self._events.append(Event(EventType.KEY_UP, scancode, False))
        return True

    def _on_close(self) -> bool:
        self._events.append(Event(EventType.QUIT))
        return True