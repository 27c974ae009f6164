import pytest

from simple_engine.engine import Engine, EngineError, GameLayer
from simple_engine.keyboard import Event, EventType, Scancode
from simple_engine.window import WindowError


class FakeWindow:
    def __init__(self, frames=(), fail=False):
        self.frames = [list(frame) for frame in frames]
        self.fail = fail
        self.created_with = None
        self.destroyed = 0
        self.open = False

    @property
    def is_open(self):
        return self.open

    def create(self, title, width, height):
        if self.fail:
            raise WindowError("no display")
        self.created_with = (title, width, height)
        self.open = True

    def destroy(self):
        self.destroyed += 1
        self.open = False

    def swap_buffers(self):
        pass

    def drawable_size(self):
        return (640, 480)

    def poll_events(self):
        if self.frames:
            return self.frames.pop(0)
        return [Event(EventType.QUIT)]


class FakeRenderer:
    def __init__(self, fail=False):
        self.fail = fail
        self.initialized_with = None
        self.shutdowns = 0

    def init(self, window):
        if self.fail:
            raise ValueError("bad window")
        self.initialized_with = window

    def shutdown(self):
        self.shutdowns += 1

    def render_scene(self, window, scene):
        pass


class RecordingGame(GameLayer):
    def __init__(self, fail=False):
        self.fail = fail
        self.calls = []
        self.deltas = []
        self.w_pressed = []

    def init(self):
        self.calls.append("init")
        if self.fail:
            raise EngineError("cannot start")

    def handle_event(self, event):
        self.calls.append("handle_event")

    def update(self, input, delta_time):
        self.calls.append("update")
        self.deltas.append(delta_time)
        self.w_pressed.append(input.is_key_pressed(Scancode.W))

    def render(self, renderer, window):
        self.calls.append("render")

    def shutdown(self):
        self.calls.append("shutdown")


def make_engine(window=None, renderer=None, clock=None):
    times = iter(clock) if clock is not None else None
    return Engine(
        window if window is not None else FakeWindow(),
        renderer if renderer is not None else FakeRenderer(),
        clock=(lambda: next(times)) if times is not None else (lambda: 0.0),
        sleep=lambda seconds: None,
        frame_delay=0.0,
    )


def test_init_creates_window_with_title_and_size():
    window = FakeWindow()
    renderer = FakeRenderer()
    engine = make_engine(window, renderer)
    engine.init()
    assert window.created_with == ("Simple Engine", 1280, 720)
    assert renderer.initialized_with is window
    assert engine.running is True


def test_window_failure_raises_and_cleans_up():
    window = FakeWindow(fail=True)
    engine = make_engine(window)
    with pytest.raises(EngineError):
        engine.init()
    assert window.destroyed == 1
    assert engine.running is False


def test_renderer_failure_raises_and_shuts_down():
    window = FakeWindow()
    renderer = FakeRenderer(fail=True)
    engine = make_engine(window, renderer)
    with pytest.raises(EngineError):
        engine.init()
    assert renderer.shutdowns == 1
    assert window.destroyed == 1


def test_run_before_init_does_nothing():
    game = RecordingGame()
    make_engine().run(game)
    assert game.calls == []


def test_single_frame_until_quit():
    engine = make_engine()
    engine.init()
    game = RecordingGame()
    engine.run(game)
    assert game.calls == ["init", "handle_event", "update", "render", "shutdown"]
    assert engine.running is False


def test_delta_time_follows_clock():
    window = FakeWindow(frames=[[], [Event(EventType.QUIT)]])
    engine = make_engine(window, clock=[10.0, 10.25, 10.75])
    engine.init()
    game = RecordingGame()
    engine.run(game)
    assert game.deltas == [0.25, 0.5]


def test_key_events_reach_input():
    window = FakeWindow(frames=[[Event(EventType.KEY_DOWN, Scancode.W, False)], [Event(EventType.QUIT)]])
    engine = make_engine(window)
    engine.init()
    game = RecordingGame()
    engine.run(game)
    assert game.w_pressed == [True, True]


def test_failed_game_init_stops_engine():
    engine = make_engine()
    engine.init()
    game = RecordingGame(fail=True)
    with pytest.raises(EngineError):
        engine.run(game)
    assert game.calls == ["init"]
    assert engine.running is False


def test_shutdown_is_idempotent():
    window = FakeWindow()
    renderer = FakeRenderer()
    engine = make_engine(window, renderer)
    engine.init()
    engine.shutdown()
    engine.shutdown()
    assert window.destroyed == 1
    assert renderer.shutdowns == 1