"""The main loop: window, renderer, input and the game layer they drive."""

from __future__ import annotations

import abc
import logging
import time
from collections.abc import Callable
from typing import Any

from simple_engine.graphics_backend import BackendError
from simple_engine.keyboard import Event, EventType, Input
from simple_engine.renderer import Renderer
from simple_engine.window import Window, WindowError

log = logging.getLogger(__name__)

WINDOW_TITLE = "Simple Engine"
WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 720
FRAME_DELAY = 0.016


class EngineError(RuntimeError):
    """Raised when the engine or the game it runs cannot start."""


class GameLayer(abc.ABC):
    """What the engine drives once per frame."""

    @abc.abstractmethod
    def init(self) -> None:
        """Prepare the game; raise to abort the run."""

    def handle_event(self, event: Event) -> None:
        """React to a raw event; ignores it by default."""

    @abc.abstractmethod
    def update(self, input: Input, delta_time: float) -> None:
        """Advance the game by ``delta_time`` seconds."""

    @abc.abstractmethod
    def render(self, renderer: Any, window: Any) -> None:
        """Draw the current frame."""

    def shutdown(self) -> None:
        """Release game resources; does nothing by default."""


class Engine:
    """Opens a window, sets up rendering and runs a :class:`GameLayer`."""

    def __init__(
        self,
        window: Any = None,
        renderer: Any = None,
        *,
        clock: Callable[[], float] = time.perf_counter,
        sleep: Callable[[float], None] = time.sleep,
        frame_delay: float = FRAME_DELAY,
    ) -> None:
        self._provided_window = window
        self._provided_renderer = renderer
        self._clock = clock
        self._sleep = sleep
        self._frame_delay = frame_delay
        self._window: Any = None
        self._renderer: Any = None
        self._input: Input | None = None
        self._running = False

    def __enter__(self) -> Engine:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.shutdown()

    @property
    def running(self) -> bool:
        return self._running

    def init(self) -> None:
        """Create the window and renderer; raises :class:`EngineError` on failure."""
        log.info("Initializing engine...")

        log.info("Creating window and graphics context.")
        self._window = self._provided_window if self._provided_window is not None else Window()
        try:
            self._window.create(WINDOW_TITLE, WINDOW_WIDTH, WINDOW_HEIGHT)
        except WindowError as error:
            log.error("Failed to create window.")
            self.shutdown()
            raise EngineError("Failed to create window.") from error

        log.info("Creating renderer and loading graphics functions.")
        self._renderer = self._provided_renderer if self._provided_renderer is not None else Renderer()
        try:
            self._renderer.init(self._window)
        except (ValueError, BackendError) as error:
            log.error("Failed to initialize renderer.")
            self.shutdown()
            raise EngineError("Failed to initialize renderer.") from error

        self._input = Input()
        self._running = True
        log.info("Engine initialized successfully. Game objects can now create GPU resources.")

    def run(self, game: GameLayer) -> None:
        """Run frames until a quit event arrives; does nothing before :meth:`init`."""
        if not self._running or self._input is None or self._renderer is None or self._window is None:
            return

        log.info("Initializing game layer after graphics are ready.")
        try:
            game.init()
        except Exception as error:
            log.error("Game initialization failed.")
            self._running = False
            raise EngineError("Game initialization failed.") from error

        try:
            previous = self._clock()
            while self._running:
                current = self._clock()
                delta_time = current - previous
                previous = current

                for event in self._window.poll_events():
                    if event.type is EventType.QUIT:
                        self._running = False
                    self._input.process_event(event)
                    game.handle_event(event)

                game.update(self._input, delta_time)
                game.render(self._renderer, self._window)
                self._sleep(self._frame_delay)
        finally:
            game.shutdown()

    def shutdown(self) -> None:
        """Release the renderer and window; safe to call more than once."""
        if self._window is None and self._input is None and self._renderer is None:
            self._running = False
            return

        log.info("Shutting down engine...")
        self._input = None

        if self._renderer is not None:
            self._renderer.shutdown()
            self._renderer = None

        if self._window is not None:
            self._window.destroy()
            self._window = None

        self._running = False