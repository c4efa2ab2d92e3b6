#!/usr/bin/env python3
"""
flappy_client.py

Window, event loop and rendering for the voice-controlled game.
The simulation lives in round_engine; this module only feeds it the
microphone level each frame and draws the resulting RoundContext.
"""

import argparse
from typing import Optional

import pygame

from .constants import DB_FILE, RENDER_FPS
from .data_models import DEFAULT_CONFIG, GameConfig, RoundContext, RoundPhase
from .mic_input import MicrophoneInput
from .round_engine import RoundController
from .score_store import ScoreStore

SKY_COLOR = (112, 197, 206)
GROUND_COLOR = (222, 216, 149)
PIPE_COLOR = (0x79, 0xAA, 0x2D)
BIRD_COLOR = (255, 200, 0)
WHITE = (255, 255, 255)
YELLOW = (255, 255, 0)
BLACK = (0, 0, 0)


class FlappyClient:
    def __init__(self, config: GameConfig = DEFAULT_CONFIG,
                 store: Optional[ScoreStore] = None,
                 mic: Optional[MicrophoneInput] = None):
        pygame.init()
        self.config = config
        self.screen = pygame.display.set_mode((int(config.screen_width), int(config.screen_height)))
        pygame.display.set_caption("Voice Flappy")

        self.store = store
        self.mic = mic
        self.controller = RoundController(config, store=store)

        self.clock = pygame.time.Clock()
        self.large_font = pygame.font.Font(None, 48)
        self.medium_font = pygame.font.Font(None, 32)
        self.font = pygame.font.Font(None, 24)
        self.small_font = pygame.font.Font(None, 20)

    def run(self):
        """The main client execution loop."""
        if self.mic is not None:
            self.mic.start()

        print(f"High score: {self.controller.ctx.high_score}")
        running = True
        try:
            while running:
                self.clock.tick(self.config.fps)

                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    if event.type == pygame.KEYDOWN and event.key == pygame.K_ESCAPE:
                        running = False
                    if event.type == pygame.KEYDOWN and event.key == pygame.K_r:
                        self.controller.restart()

                was_running = self.controller.ctx.running
                level = self.mic.get_level() if self.mic is not None else 0.0
                ctx = self.controller.step(level)
                if was_running and ctx.phase is RoundPhase.ENDED:
                    print(f"Round over ({ctx.end_reason.value}). Score: {ctx.score}, best: {ctx.high_score}")

                self._draw_game(ctx)
        finally:
            if self.mic is not None:
                self.mic.stop()
            pygame.quit()

    def _text(self, font, message, color, pos, center=False, outline=False):
        surf = font.render(message, True, color)
        x, y = pos
        if center:
            x -= surf.get_width() // 2
            y -= surf.get_height() // 2
        if outline:
            shadow = font.render(message, True, BLACK)
            for dx, dy in ((-2, 0), (2, 0), (0, -2), (0, 2)):
                self.screen.blit(shadow, (x + dx, y + dy))
        self.screen.blit(surf, (x, y))

    def _draw_game(self, ctx: RoundContext):
        """Renders the round state using Pygame."""
        cfg = self.config
        screen = self.screen
        width = cfg.screen_width
        ground_y = cfg.ground_y

        screen.fill(SKY_COLOR)
        pygame.draw.rect(screen, GROUND_COLOR, (0, ground_y, width, cfg.ground_height))

        # Pipes
        for pipe in ctx.pipes:
            pygame.draw.rect(screen, PIPE_COLOR, (pipe.x, 0, pipe.width, pipe.gap_top))
            pygame.draw.rect(screen, PIPE_COLOR,
                             (pipe.x, ground_y - pipe.gap_bottom, pipe.width, pipe.gap_bottom))

        # Bird, drawn from its top-left corner
        bird = ctx.bird
        pygame.draw.ellipse(screen, BIRD_COLOR, (bird.x, bird.y, cfg.bird_size, cfg.bird_size))

        # HUD
        if ctx.phase is RoundPhase.NOT_STARTED:
            self._text(self.large_font, "Get Ready!", YELLOW,
                       (width // 2, cfg.screen_height // 2), center=True, outline=True)
        else:
            self._text(self.font, f"Score: {ctx.score}", WHITE, (10, 10))

        self._text(self.small_font, f"Mic Level: {ctx.last_level:.2f}", WHITE, (10, 40))
        self._text(self.small_font, f"Speed Multiplier: {ctx.speed_multiplier(cfg):.2f}", WHITE, (10, 60))
        self._text(self.small_font, f"High Score: {ctx.high_score}", WHITE, (10, 80))
        if self.mic is None or not self.mic.enabled:
            self._text(self.small_font, "Microphone off", (200, 200, 200), (10, 100))

        if ctx.phase is RoundPhase.ENDED:
            center_y = cfg.screen_height // 2
            self._text(self.medium_font, f"Game Over! Score: {ctx.score}", YELLOW,
                       (width // 2, center_y), center=True, outline=True)
            self._text(self.font, "Press 'R' to restart", YELLOW,
                       (width // 2, center_y + 40), center=True, outline=True)

        pygame.display.flip()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="voice-flappy",
        description="Flappy bird steered by how loud you are.")
    parser.add_argument("--db", default=DB_FILE,
                        help="SQLite file holding the high score (default: %(default)s)")
    parser.add_argument("--no-mic", action="store_true",
                        help="run without capturing audio")
    parser.add_argument("--device", default=None,
                        help="sounddevice input device name or index")
    parser.add_argument("--fps", type=int, default=RENDER_FPS,
                        help="frames per second (default: %(default)s)")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    config = GameConfig(fps=args.fps)
    device = int(args.device) if args.device is not None and args.device.isdigit() else args.device

    store = ScoreStore(args.db)
    mic = None if args.no_mic else MicrophoneInput(device=device)
    try:
        FlappyClient(config=config, store=store, mic=mic).run()
    finally:
        store.close()


if __name__ == "__main__":
    main()
