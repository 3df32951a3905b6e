"""
Window-side input and menu state, kept free of arcade so it runs headless.

GameWindow translates arcade events into calls on WindowControls; this class
owns the y-flip into game coordinates, which physical keys are held, and the
menu -> play -> menu transitions around a GameSession.
"""

from typing import Dict, Set, Tuple

from .session import GameSession


class WindowControls:
    """Routes window input to a session and tracks the menu overlay"""

    def __init__(self, session: GameSession, height: float, key_names: Dict[int, str],
                 interactive: bool = True):
        self.session = session
        self.height = height
        self.key_names = key_names
        self.interactive = interactive
        self.show_menu = interactive
        # physical key symbols currently down; several may share one game key
        self.held: Set[int] = set()

    def to_game(self, x: float, y: float) -> Tuple[float, float]:
        """Flip a y-up window point into the session's y-down space"""
        return x, self.height - y

    # ----------------------------
    # Menu / play transitions
    # ----------------------------

    def start(self):
        self.show_menu = False
        self.session.start()

    def frame_finished(self, still_running: bool) -> bool:
        """After a frame: on game over, swap in a fresh session and show the menu"""
        if still_running or not self.interactive:
            return False
        self.session = self.session.restart()
        self.held.clear()
        self.show_menu = True
        return True

    # ----------------------------
    # Input
    # ----------------------------

    def key_press(self, symbol: int):
        if not self.interactive:
            return
        key = self.key_names.get(symbol)
        if key is None:
            return
        self.held.add(symbol)
        self.session.press_key(key)

    def key_release(self, symbol: int):
        if not self.interactive:
            return
        key = self.key_names.get(symbol)
        if key is None:
            return
        self.held.discard(symbol)
        if not any(self.key_names[s] == key for s in self.held):
            self.session.release_key(key)

    def mouse_press(self, x: float, y: float) -> bool:
        """Returns True when the press started a game from the menu"""
        if not self.interactive:
            return False
        if self.show_menu:
            self.start()
            return True
        self.session.press_fire(*self.to_game(x, y))
        return False

    def mouse_release(self):
        if self.interactive:
            self.session.release_fire()

    def pointer(self, x: float, y: float):
        if self.interactive:
            self.session.move_pointer(*self.to_game(x, y))

    def resize(self, width: float, height: float):
        self.height = height
        self.session.resize(width, height)
