#!/usr/bin/env python3
"""
Order of the Crimson Dot: a kitten chases the red dot (your mouse pointer),
tires, eats, naps on the couch and, if kept happy, evolves until it ascends.
"""
import os
import sys
import time
import random
import logging

import pygame

from crimson_dot.constants import *
from crimson_dot.config import SimulationConfig, Viewport
from crimson_dot.models import CatState
from crimson_dot.session import GameSession
from crimson_dot.game_loop import FixedStepLoop
from crimson_dot.sound import SoundManager
from crimson_dot.best_time import BestTimeStore, format_time

logger = logging.getLogger(__name__)

ACTIVATE_KEYS = (pygame.K_RETURN, pygame.K_KP_ENTER, pygame.K_ESCAPE)


def scene_text(message, action=None):
    return f"{message}\n\nPRESS ENTER TO {action or 'CONTINUE'}..."


def _env_int(name, default):
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", name, raw)
        return default


class GameEngine:
    """Window, input, scene flow and drawing around a GameSession."""
    def __init__(self, config=None, best_times=None, rng=None):
        pygame.init()
        try:
            self.screen = pygame.display.set_mode(WINDOW_SIZE, pygame.RESIZABLE)
        except pygame.error:
            # Some headless drivers do not support resizable windows; fall back
            self.screen = pygame.display.set_mode(WINDOW_SIZE)
            logger.warning("Resizable window unavailable, using a fixed window")
        pygame.display.set_caption("Order of the Crimson Dot")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 24)
        self.scene_font = pygame.font.Font(None, 32)
        self.fps = _env_int("CRIMSON_DOT_FPS", FPS)

        seed = os.getenv("CRIMSON_DOT_SEED")
        if rng is None:
            rng = random.Random(_env_int("CRIMSON_DOT_SEED", 0)) if seed else random.Random()

        self.sounds = SoundManager()
        config = config or SimulationConfig.from_env()
        self.session = GameSession(
            config=config,
            viewport=Viewport.for_window(*WINDOW_SIZE, config),
            play_sound=self.sounds.play_effect,
            rng=rng,
            on_animation=self._on_animation,
            best_times=best_times or BestTimeStore(),
        )
        self.loop = FixedStepLoop(self._update, fps=self.fps)
        self.phase = "intro"
        self.animation = None
        self._pending_resize = None
        self._last_step_time = time.time()

    # --- Collaborator callbacks ---
    def _on_animation(self, stage, name):
        self.animation = (stage, name)

    def pointer(self):
        mx, my = pygame.mouse.get_pos()
        ox, oy = self.canvas_offset()
        return (mx - ox, my - oy)

    def canvas_offset(self):
        vp = self.session.viewport
        w, h = self.screen.get_size()
        return (int(max(0, (w - vp.width) // 2)), int(max(0, (h - vp.height) // 2)))

    # --- Scene flow ---
    def _play(self):
        self.session.start()
        self.loop.start()
        self.phase = "playing"
        self.sounds.start_music()

    def _pause(self):
        self.session.pause()
        self.loop.stop()
        self.phase = "paused"
        self.sounds.stop_music()

    def handle_key(self, key):
        if key == pygame.K_m:
            self.sounds.toggle_mute()
            return
        if key not in ACTIVATE_KEYS:
            return
        if self.phase == "intro":
            self.phase = "briefing"
        elif self.phase in ("briefing", "paused"):
            self._play()
        elif self.phase == "playing":
            self._pause()
        elif self.phase == "cutscene":
            if self.session.ascended:
                self.phase = "result"
            else:
                self._play()
        elif self.phase == "result":
            # Back to the briefing with a fresh kitten; the next Enter starts play
            self.session.new_game()
            self.phase = "briefing"

    def current_scene(self):
        if self.phase == "intro":
            return scene_text(INTRO_TEXT)
        if self.phase == "briefing":
            return scene_text(BRIEFING_TEXT, "BEGIN")
        if self.phase == "paused":
            return scene_text(PAUSED_TEXT)
        if self.phase == "cutscene":
            return scene_text(self.session.scene or "")
        if self.phase == "result":
            return scene_text(RESULT_TEXT.format(time=format_time(self.session.game_time)), "TRY AGAIN")
        return None

    def _update(self, dt):
        self.session.update(dt, self.pointer())
        if self.phase == "playing" and not self.session.running:
            # An evolution stopped the clock
            self.loop.stop()
            self.phase = "cutscene"

    def _resize(self, width, height):
        try:
            self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        except pygame.error:
            self.screen = pygame.display.set_mode((width, height))
        self.session.resize(width, height)

    # --- Drawing ---
    def draw_cat(self, surface, snap, zoom):
        w, h = CAT_SIZE[0] * zoom, CAT_SIZE[1] * zoom
        x, y = snap.x, snap.y
        sleepy = snap.state in (CatState.EXHAUSTED, CatState.SEEKING_COUCH, CatState.ASLEEP)
        color = COLOR_CAT_SLEEPY if sleepy else COLOR_CAT
        if snap.level >= 1:
            # Grown cats are a bit darker
            color = tuple(max(0, c - 30) for c in color)

        body = pygame.Rect(x, y + h * 0.35, w, h * 0.6)
        pygame.draw.ellipse(surface, color, body)
        head_r = h * 0.28
        head_x = x + (w - head_r if snap.facing_right else head_r)
        head_y = y + head_r + 2 * zoom
        if snap.state is CatState.ASLEEP:
            head_x, head_y = x + w / 2, y + h * 0.55
        pygame.draw.circle(surface, color, (int(head_x), int(head_y)), int(head_r))
        # Ears
        for side in (-1, 1):
            ear_x = head_x + side * head_r * 0.6
            pygame.draw.polygon(surface, color, [
                (ear_x - head_r * 0.35, head_y - head_r * 0.5),
                (ear_x, head_y - head_r * 1.4),
                (ear_x + head_r * 0.35, head_y - head_r * 0.5),
            ])
        # Eyes
        eye_y = head_y - head_r * 0.1
        for side in (-1, 1):
            ex = head_x + side * head_r * 0.4
            if snap.state in (CatState.ASLEEP, CatState.IDLE):
                pygame.draw.line(surface, COLOR_CAT_EYES, (ex - 2 * zoom, eye_y), (ex + 2 * zoom, eye_y), max(1, zoom))
            else:
                pygame.draw.circle(surface, COLOR_CAT_EYES, (int(ex), int(eye_y)), max(1, zoom))
        if snap.state is CatState.ASLEEP:
            zzz = self.font.render("Zzz", True, COLOR_TEXT)
            surface.blit(zzz, (x + w, y - zzz.get_height() // 2))

    def draw_bar(self, x, y, value, color, label):
        """Renders a meter bar with its label and percentage."""
        width = 100
        pygame.draw.rect(self.screen, COLOR_UI_BAR_BG, (x, y, width, 15))
        fill = max(0, min(width, int(value)))
        pygame.draw.rect(self.screen, color, (x, y, fill, 15))
        lbl = self.font.render(f"{label} {int(value)}%", True, COLOR_TEXT)
        self.screen.blit(lbl, (x + width + 8, y - 2))

    def draw_scene(self, text):
        w, h = self.screen.get_size()
        band = pygame.Rect(0, h // 3, w, h // 3)
        pygame.draw.rect(self.screen, COLOR_SCENE_BG, band)
        lines = text.split("\n")
        line_h = int(self.scene_font.get_linesize() * 1.2)
        top = band.y + (band.height - line_h * len(lines)) // 2
        for i, line in enumerate(lines):
            surf = self.scene_font.render(line, True, COLOR_SCENE_TEXT)
            self.screen.blit(surf, (int(w * 0.3), top + i * line_h))

    def draw(self):
        snap = self.session.last_snapshot
        vp = self.session.viewport
        zoom = vp.zoom
        self.screen.fill((0, 0, 0))

        canvas = pygame.Surface((int(vp.width), int(vp.height)))
        if snap.level == STORM_LEVEL:
            canvas.fill(COLOR_BG_LIGHTNING if snap.lightning else COLOR_BG_STORM)
        else:
            canvas.fill(COLOR_BG)

        # Couch and bowl go first so they appear behind the cat; the storm hides them between flashes
        if snap.level != STORM_LEVEL or snap.lightning:
            cx, cy = snap.couch
            pygame.draw.rect(canvas, COLOR_COUCH, (cx, cy, COUCH_SIZE[0] * zoom, COUCH_SIZE[1] * zoom),
                             border_radius=3 * zoom)
            if snap.food_visible:
                fx, fy = snap.food
                pygame.draw.ellipse(canvas, COLOR_FOOD, (fx, fy, FOOD_SIZE[0] * zoom, FOOD_SIZE[1] * zoom))
        self.draw_cat(canvas, snap, zoom)

        if self.phase == "playing":
            px, py = self.pointer()
            pygame.draw.circle(canvas, COLOR_DOT, (int(px), int(py)), 3 * zoom)

        self.screen.blit(canvas, self.canvas_offset())

        # HUD
        if snap.evolving:
            self.draw_bar(10, 10, snap.evolution_percent, COLOR_EVOLVE, "Evolving...")
        else:
            self.draw_bar(10, 10, snap.happiness, COLOR_HAPPY, "Happiness")
        self.draw_bar(10, 32, snap.stamina_percent, COLOR_STAMINA, "Stamina")
        info = f"{snap.stage}   {format_time(self.session.game_time)}"
        if self.session.best_time:
            info += f"   best {format_time(self.session.best_time)}"
        self.screen.blit(self.font.render(info, True, COLOR_TEXT), (10, 54))

        text = self.current_scene()
        if text:
            self.draw_scene(text)

    # --- Main loop ---
    def step(self):
        """Process a single loop iteration (useful for headless tests). Returns False to stop."""
        now = time.time()
        elapsed = now - self._last_step_time
        self._last_step_time = now

        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                return False
            if event.type == pygame.KEYUP:
                self.handle_key(event.key)
            elif event.type == pygame.VIDEORESIZE:
                # Debounce: only the last size of a drag is applied
                self._pending_resize = (event.w, event.h, now + RESIZE_DEBOUNCE)

        if self._pending_resize and now >= self._pending_resize[2]:
            w, h, _ = self._pending_resize
            self._pending_resize = None
            self._resize(w, h)

        self.loop.advance(elapsed)
        self.draw()
        pygame.display.flip()
        self.clock.tick(self.fps)
        return True

    def run(self):
        running = True
        while running:
            running = self.step()
        self.sounds.stop_music()
        pygame.quit()


def main():
    logging.basicConfig(
        level=os.getenv("CRIMSON_DOT_LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    GameEngine().run()
    sys.exit()


if __name__ == "__main__":
    main()
