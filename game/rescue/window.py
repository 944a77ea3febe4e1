"""
Arcade front end: draws snapshots and feeds keyboard input to a RescueGame

Play:
    python -m game.rescue.window
"""

from __future__ import annotations

import logging
from typing import Optional

import arcade

from .config import GameConfig
from .game import GameListener, GamePhase, RescueGame


class RescueWindow(arcade.Window, GameListener):
    """Renderer + input source for the rescue game.

    With ``interactive=True`` the window drives the game itself from
    on_update and maps keys to the game's input surface. Otherwise it only
    draws (the Gym env steps the game).
    """

    def __init__(self, game: RescueGame, interactive: bool = False, title: str = "Shark Rescue - Arcade"):
        super().__init__(game.config.width, game.config.height, title)
        self.game = game
        self.interactive = interactive
        game.listeners.append(self)

        # HUD values, pushed by the game
        self.hud_score = game.session.score
        self.hud_lives = game.session.lives
        self.hud_rescued = game.session.rescued
        self.final_score: Optional[int] = None

        # Colors
        self.SKY = (135, 206, 235)
        self.WATER = (30, 110, 180)
        self.ISLAND_C = (222, 196, 132)
        self.CLOUD_C = (250, 250, 250)
        self.BOAT_C = (200, 60, 40)
        self.HELI_C = (70, 80, 60)
        self.CHUTE_C = (240, 120, 40)
        self.PERSON_C = (40, 40, 40)
        self.SHARK_C = (110, 120, 130)
        self.SCORE_C = (76, 175, 80)
        self.HUD_C = (20, 20, 20)

        self.background_color = self.SKY

    # ----------------------------
    # GameListener hooks
    # ----------------------------

    def on_score(self, score: int) -> None:
        self.hud_score = score

    def on_lives(self, lives: int) -> None:
        self.hud_lives = lives

    def on_rescued(self, rescued: int) -> None:
        self.hud_rescued = rescued

    def on_phase(self, phase: GamePhase) -> None:
        if phase is GamePhase.RUNNING:
            self.final_score = None

    def on_game_over(self, final_score: int) -> None:
        self.final_score = final_score

    # ----------------------------
    # Arcade callbacks
    # ----------------------------

    def on_update(self, delta_time: float):
        if self.interactive:
            self.game.update(delta_time)

    def on_key_press(self, symbol: int, modifiers: int):
        if not self.interactive:
            return
        if symbol == arcade.key.LEFT:
            self.game.on_key_change("left", True)
        elif symbol == arcade.key.RIGHT:
            self.game.on_key_change("right", True)
        elif symbol == arcade.key.ESCAPE:
            self.game.on_toggle_pause()
        elif symbol in (arcade.key.ENTER, arcade.key.RETURN, arcade.key.SPACE):
            self.game.on_start()

    def on_key_release(self, symbol: int, modifiers: int):
        if not self.interactive:
            return
        if symbol == arcade.key.LEFT:
            self.game.on_key_change("left", False)
        elif symbol == arcade.key.RIGHT:
            self.game.on_key_change("right", False)

    def on_draw(self):
        """Draw the current game state"""
        self.clear()
        snap = self.game.snapshot()
        cfg = self.game.config

        for c in snap.clouds:
            self._rect(c.x, c.y, c.width, c.height, self.CLOUD_C)

        # Water
        self._rect(0, cfg.water_level, cfg.width, cfg.height - cfg.water_level, self.WATER)
        for isl in snap.islands:
            self._rect(isl.x, isl.y, isl.width, isl.height, self.ISLAND_C)

        for h in snap.helicopters:
            self._rect(h.x, h.y, h.width, h.height, self.HELI_C)

        for p in snap.parachutists:
            # canopy above, person below
            self._rect(p.x - 5, p.y - 12, p.width + 10, 12, self.CHUTE_C)
            self._rect(p.x, p.y, p.width, p.height, self.PERSON_C)

        for s in snap.sharks:
            self._rect(s.x, s.y, s.width, s.height, self.SHARK_C)
            fin_base = self._flip(s.y)
            arcade.draw_triangle_filled(
                s.x + s.width * 0.3, fin_base,
                s.x + s.width * 0.7, fin_base,
                s.x + s.width * 0.5, fin_base + 12,
                self.SHARK_C,
            )

        b = snap.boat
        self._rect(b.x, b.y, b.width, b.height, self.BOAT_C)

        for f in snap.floating_scores:
            arcade.draw_text(
                f"+{cfg.rescue_points}", f.x, self._flip(f.y),
                (*self.SCORE_C, int(255 * f.alpha)), 24, anchor_x="center", bold=True,
            )

        # Text HUD
        txt = (f"Score: {self.hud_score}  "
               f"Lives: {self.hud_lives}  "
               f"Rescued: {self.hud_rescued}  "
               f"Level: {snap.level}")
        arcade.draw_text(txt, 12, self.height - 24, self.HUD_C, 14)

        if snap.phase is GamePhase.NOT_STARTED:
            self._overlay("Shark Rescue", "Press ENTER to start", 90)
        elif snap.phase is GamePhase.PAUSED:
            self._overlay("PAUSED", "Press ESC to continue", 128)
        elif snap.phase is GamePhase.GAME_OVER:
            self._overlay("Game Over!", f"Final Score: {snap.session.score}", 180)

    # ----------------------------
    # Drawing helpers (game space is y-down, arcade is y-up)
    # ----------------------------

    def _flip(self, y: float) -> float:
        return self.height - y

    def _rect(self, x, y, w, h, color):
        arcade.draw_lrbt_rectangle_filled(x, x + w, self.height - (y + h), self.height - y, color)

    def _overlay(self, title: str, subtitle: str, alpha: int):
        arcade.draw_lrbt_rectangle_filled(0, self.width, 0, self.height, (0, 0, 0, alpha))
        cx, cy = self.width / 2, self.height / 2
        arcade.draw_text(title, cx, cy, arcade.color.WHITE, 48, anchor_x="center")
        arcade.draw_text(subtitle, cx, cy - 40, arcade.color.WHITE, 24, anchor_x="center")


def play(config: Optional[GameConfig] = None):
    """Open a window and play with the keyboard"""
    game = RescueGame(config)
    RescueWindow(game, interactive=True)
    print("Arrows move the boat, ENTER starts, ESC pauses.")
    arcade.run()


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(name)s %(levelname)s %(message)s")
    play()
