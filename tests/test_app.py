"""Tests for the application loop state machine."""

from collections import deque

import pytest

from term_snake.app import GameApp, GameOver, Menu, Playing
from term_snake.config import GameConfig
from term_snake.controls import Key
from term_snake.engine import GameSession, SessionSnapshot
from term_snake.render import MenuSnapshot
from term_snake.snake import Direction

# ---------------------------------------------------------------------------
# Fakes
# ---------------------------------------------------------------------------


class FakeInput:
    """Replays keys; ``None`` means no key arrived within the poll timeout.

    Once the script runs out the player quits.
    """

    def __init__(self, keys=()):
        self.keys = deque(keys)
        self.timeouts = []
        self._pending = None

    def poll(self, timeout_ms):
        self.timeouts.append(timeout_ms)
        key = self.keys.popleft() if self.keys else Key.QUIT
        if key is None:
            return False
        self._pending = key
        return True

    def read(self):
        key, self._pending = self._pending, None
        return key


class FakeRenderer:
    def __init__(self):
        self.frames = []

    def draw(self, snapshot):
        self.frames.append(snapshot)


class FakeClock:
    """Manual clock; optionally advances by *step* seconds on every read."""

    def __init__(self, step=0.0):
        self.now = 0.0
        self.step = step

    def __call__(self):
        value = self.now
        self.now += self.step
        return value


def _app(keys=(), sizes=((24, 80),), clock=None, seed=0):
    sizes = deque(sizes)
    last = [sizes[0]]

    def display_size():
        if sizes:
            last[0] = sizes.popleft()
        return last[0]

    return GameApp(
        FakeInput(keys),
        FakeRenderer(),
        display_size,
        seed=seed,
        clock=clock or FakeClock(),
    )


# ---------------------------------------------------------------------------
# Menu
# ---------------------------------------------------------------------------


class TestMenuMode:
    def test_starts_in_menu(self):
        app = _app()
        assert isinstance(app.mode, Menu)
        assert isinstance(app.snapshot(), MenuSnapshot)

    def test_start_builds_session_from_display(self):
        app = _app(sizes=[(24, 80)])
        assert app.handle_key(Key.START)
        assert isinstance(app.mode, Playing)
        session = app.mode.session
        assert (session.width, session.height) == (78, 20)

    def test_small_display_is_clamped(self):
        app = _app(sizes=[(6, 8)])
        app.handle_key(Key.START)
        session = app.mode.session
        assert (session.width, session.height) == (10, 5)

    @pytest.mark.parametrize("key", [Key.RESTART, Key.OTHER, Key.UP])
    def test_other_keys_ignored(self, key):
        app = _app()
        assert app.handle_key(key)
        assert isinstance(app.mode, Menu)

    def test_quit(self):
        assert not _app().handle_key(Key.QUIT)

    def test_idle_poll_timeout(self):
        assert _app().poll_timeout() == GameConfig().idle_poll_ms


# ---------------------------------------------------------------------------
# Playing
# ---------------------------------------------------------------------------


class TestPlayingMode:
    def _playing(self, **kwargs):
        app = _app(**kwargs)
        app.handle_key(Key.START)
        return app

    def test_movement_keys_queue_direction(self):
        app = self._playing()
        app.handle_key(Key.UP)
        assert app.mode.session.next_direction == Direction.UP

    def test_reverse_key_dropped(self):
        app = self._playing()
        app.handle_key(Key.LEFT)
        assert app.mode.session.next_direction == Direction.RIGHT

    def test_restart_replaces_session(self):
        app = self._playing(sizes=[(24, 80), (30, 100)])
        first = app.mode.session
        app.handle_key(Key.RESTART)
        assert isinstance(app.mode, Playing)
        assert app.mode.session is not first
        assert app.mode.session.width == 98

    def test_quit(self):
        assert not self._playing().handle_key(Key.QUIT)

    def test_play_poll_timeout(self):
        assert self._playing().poll_timeout() == GameConfig().play_poll_ms

    def test_no_step_before_interval(self):
        app = self._playing()
        head = app.mode.session.snake.head
        app.tick(0.159)
        assert app.mode.session.snake.head == head

    def test_step_after_interval(self):
        app = self._playing()
        head = app.mode.session.snake.head
        app.tick(0.160)
        assert app.mode.session.snake.head == (head.x + 1, head.y)
        # Timer restarts from the tick that fired.
        app.tick(0.300)
        assert app.mode.session.snake.head == (head.x + 1, head.y)
        app.tick(0.320)
        assert app.mode.session.snake.head == (head.x + 2, head.y)

    def test_interval_follows_level(self):
        app = self._playing()
        session = app.mode.session
        session.level = 3
        head = session.snake.head
        app.tick(0.140)
        assert session.snake.head == (head.x + 1, head.y)

    def test_wall_collision_enters_game_over(self):
        # 12x9 display leaves a 10x5 board: head starts at x=5.
        app = self._playing(sizes=[(9, 12)])
        session = app.mode.session
        now = 0.0
        for _ in range(5):
            now += 0.2
            app.tick(now)
        assert session.over
        assert isinstance(app.mode, GameOver)
        assert app.mode.session is session


# ---------------------------------------------------------------------------
# Game over
# ---------------------------------------------------------------------------


class TestGameOverMode:
    def _game_over(self, **kwargs):
        app = _app(**kwargs)
        session = GameSession(10, 5, seed=0)
        session.over = True
        app.mode = GameOver(session)
        return app

    def test_restart_starts_new_game(self):
        app = self._game_over()
        app.handle_key(Key.RESTART)
        assert isinstance(app.mode, Playing)
        assert not app.mode.session.over

    def test_movement_ignored(self):
        app = self._game_over()
        app.handle_key(Key.UP)
        assert isinstance(app.mode, GameOver)

    def test_quit(self):
        assert not self._game_over().handle_key(Key.QUIT)

    def test_tick_does_nothing(self):
        app = self._game_over()
        app.tick(10.0)
        assert isinstance(app.mode, GameOver)

    def test_snapshot_shows_over(self):
        snap = self._game_over().snapshot()
        assert isinstance(snap, SessionSnapshot)
        assert snap.over


# ---------------------------------------------------------------------------
# Run loop
# ---------------------------------------------------------------------------


class TestRunLoop:
    def test_draws_every_iteration_until_quit(self):
        app = _app(keys=[Key.START, None, None, Key.QUIT])
        app.run()
        frames = app.renderer.frames
        assert len(frames) == 4
        assert isinstance(frames[0], MenuSnapshot)
        assert all(isinstance(f, SessionSnapshot) for f in frames[1:])

    def test_poll_timeouts_track_mode(self):
        app = _app(keys=[None, Key.START, None, Key.QUIT])
        app.run()
        cfg = GameConfig()
        assert app.input.timeouts == [
            cfg.idle_poll_ms, cfg.idle_poll_ms,
            cfg.play_poll_ms, cfg.play_poll_ms,
        ]

    def test_steps_on_clock(self):
        clock = FakeClock(step=0.1)
        app = _app(keys=[Key.START] + [None] * 4, clock=clock)
        app.run()
        session = app.mode.session
        # Ticks fire on roughly every other loop read at 0.1 s per read.
        assert session.snake.head.x > session.width // 2

    def test_quit_from_menu(self):
        app = _app(keys=[Key.QUIT])
        app.run()
        assert len(app.renderer.frames) == 1


class TestSeeding:
    def test_same_seed_same_first_apple(self):
        a = _app(seed=5)
        b = _app(seed=5)
        a.handle_key(Key.START)
        b.handle_key(Key.START)
        assert a.mode.session.apple == b.mode.session.apple

    def test_sessions_get_fresh_generators(self):
        app = _app(seed=5)
        app.handle_key(Key.START)
        first = app.mode.session.rng
        app.handle_key(Key.RESTART)
        assert app.mode.session.rng is not first
