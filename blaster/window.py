"""
Arcade front end for the blaster game.

The window draws the menu overlay and the score display and hands arcade's
input events to WindowControls, which holds the menu state. Frames are
drawn into an offscreen framebuffer that is never fully cleared while
playing, so the session's translucent overlay leaves motion trails.
"""

from typing import Optional

import arcade

from .configs.game_config import GAME_CONFIG, WINDOW_CONFIG
from .controls import WindowControls
from .scores import HighScoreStore
from .session import GameSession
from .utils import make_rng

KEY_NAMES = {
    arcade.key.W: "w",
    arcade.key.A: "a",
    arcade.key.S: "s",
    arcade.key.D: "d",
    arcade.key.UP: "w",
    arcade.key.LEFT: "a",
    arcade.key.DOWN: "s",
    arcade.key.RIGHT: "d",
}


class ArcadeSurface:
    """Surface that flips y-down game coordinates into arcade's y-up ones"""

    def __init__(self, framebuffer, height: float, background=(0, 0, 0)):
        self.framebuffer = framebuffer
        self.height = height
        self.background = background

    def clear(self):
        self.framebuffer.clear(color=(*self.background[:3], 255))

    def fill_rect(self, x, y, width, height, color):
        top = self.height - y
        arcade.draw_lrbt_rectangle_filled(x, x + width, top - height, top, color)

    def fill_circle(self, x, y, radius, color):
        if radius <= 0:
            return
        arcade.draw_circle_filled(x, self.height - y, radius, color)


class GameWindow(arcade.Window):
    """Arcade window that plays (or mirrors) a GameSession"""

    def __init__(
        self,
        width: int = WINDOW_CONFIG["width"],
        height: int = WINDOW_CONFIG["height"],
        title: str = WINDOW_CONFIG["title"],
        store: Optional[HighScoreStore] = None,
        session_config: Optional[dict] = None,
        session: Optional[GameSession] = None,
        seed: Optional[int] = None,
        max_frame_delta: float = WINDOW_CONFIG["max_frame_delta"],
        background=WINDOW_CONFIG["background"],
    ):
        # A window built around an existing session only mirrors it
        self.interactive = session is None
        self.controls: Optional[WindowControls] = None
        self._trail = None
        super().__init__(width, height, title, resizable=self.interactive)

        self.session_config = dict(GAME_CONFIG if session_config is None else session_config)
        self.store = store if store is not None else HighScoreStore(
            verbose=self.session_config.get("verbose", 0))
        self.rng = make_rng(seed)
        self.max_frame_delta = max_frame_delta
        self.background = background

        # Colors
        self.TEXT_C = (255, 255, 255)
        self.DIM_C = (160, 160, 170)

        self.controls = WindowControls(
            session if session is not None else self._new_session(),
            height, KEY_NAMES, interactive=self.interactive,
        )
        self._pending_delta = 0.0

        self.surface: Optional[ArcadeSurface] = None
        self._build_trail(width, height)

    @property
    def session(self) -> Optional[GameSession]:
        return self.controls.session if self.controls is not None else None

    @session.setter
    def session(self, session: GameSession):
        self.controls.session = session

    @property
    def show_menu(self) -> bool:
        return self.controls.show_menu

    # ----------------------------
    # Setup
    # ----------------------------

    def _new_session(self) -> GameSession:
        return GameSession(self.width, self.height, rng=self.rng, store=self.store,
                           **self.session_config)

    def _build_trail(self, width: int, height: int):
        texture = self.ctx.texture((max(1, width), max(1, height)), components=4)
        self._trail = self.ctx.framebuffer(color_attachments=[texture])
        self.surface = ArcadeSurface(self._trail, height, self.background)
        self.surface.clear()

    def _reset_trail(self):
        self._pending_delta = 0.0
        self.surface.clear()

    # ----------------------------
    # Loop
    # ----------------------------

    def on_update(self, delta_time: float):
        self._pending_delta += delta_time * 1000.0

    def on_draw(self):
        if self.show_menu:
            self.clear()
            self._draw_menu()
            return

        delta = min(self._pending_delta, self.max_frame_delta)
        self._pending_delta = 0.0
        with self._trail.activate():
            still_running = self.session.frame(delta, self.surface)

        self._show_trail()
        self.controls.frame_finished(still_running)

    def present(self):
        """Redraw the mirrored session without advancing it"""
        self.dispatch_events()
        with self._trail.activate():
            self.surface.fill_rect(0, 0, self.width, self.height,
                                   (0, 0, 0, self.session.fade_alpha))
            self.session.draw(self.surface)
        self._show_trail()
        self.flip()

    def _show_trail(self):
        self.clear()
        self.ctx.copy_framebuffer(self._trail, self.ctx.screen)
        self._draw_score()

    # ----------------------------
    # HUD
    # ----------------------------

    def _draw_score(self):
        arcade.draw_text(f"Score: {self.session.score}", 12, self.height - 30,
                         self.TEXT_C, 16)

    def _draw_menu(self):
        cx, cy = self.width / 2, self.height / 2
        arcade.draw_text("BLASTER", cx, cy + 60, self.TEXT_C, 40, anchor_x="center")
        arcade.draw_text(f"Best: {self.session.high_score}", cx, cy, self.TEXT_C, 20,
                         anchor_x="center")
        arcade.draw_text("Click to start  -  WASD to move, hold mouse to fire",
                         cx, cy - 50, self.DIM_C, 14, anchor_x="center")

    # ----------------------------
    # Input
    # ----------------------------

    def on_key_press(self, symbol: int, modifiers: int):
        if symbol == arcade.key.ESCAPE:
            self.close()
            return
        self.controls.key_press(symbol)

    def on_key_release(self, symbol: int, modifiers: int):
        self.controls.key_release(symbol)

    def on_mouse_press(self, x: int, y: int, button: int, modifiers: int):
        if self.controls.mouse_press(x, y):
            self._reset_trail()

    def on_mouse_release(self, x: int, y: int, button: int, modifiers: int):
        self.controls.mouse_release()

    def on_mouse_motion(self, x: int, y: int, dx: int, dy: int):
        self.controls.pointer(x, y)

    def on_mouse_drag(self, x: int, y: int, dx: int, dy: int, buttons: int, modifiers: int):
        self.controls.pointer(x, y)

    def on_resize(self, width: int, height: int):
        super().on_resize(width, height)
        if self.controls is None or width <= 0 or height <= 0:
            return
        self.controls.resize(width, height)
        self._build_trail(width, height)

    def on_close(self):
        self.session.stop_timers()
        super().on_close()
