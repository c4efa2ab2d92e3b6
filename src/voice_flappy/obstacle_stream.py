"""
obstacle_stream.py: Pipe creation, movement, scoring and spawning.
"""

import random
from dataclasses import dataclass, field
from typing import Optional

from .data_models import DEFAULT_CONFIG, GameConfig, Pipe, RoundContext
from .physics_core import PhysicsCore


def make_pipe(config: GameConfig = DEFAULT_CONFIG, rng: Optional[random.Random] = None) -> Pipe:
    """Generates a new pipe at the right edge with a random gap size and placement."""
    if rng is None:
        rng = random.Random()
    spacing = rng.uniform(config.pipe_gap_min, config.pipe_gap_max)
    gap_top = rng.uniform(config.pipe_gap_margin,
                          config.ground_y - spacing - config.pipe_gap_margin)
    gap_bottom = config.ground_y - (gap_top + spacing)
    return Pipe(
        x=float(config.screen_width),
        gap_top=gap_top,
        spacing=spacing,
        gap_bottom=gap_bottom,
        width=config.pipe_width,
        speed=config.pipe_base_speed,
    )


@dataclass
class ObstacleStream:
    """
    Owns the per-frame pipe update for a running round.
    The pipe list itself lives on the RoundContext.
    """
    core: PhysicsCore = field(default_factory=PhysicsCore)
    rng: random.Random = field(default_factory=random.Random)

    @property
    def config(self) -> GameConfig:
        return self.core.config

    def pipe_speed(self, score: int) -> float:
        return self.config.pipe_base_speed * (1 + score * self.config.pipe_speed_step)

    def spawn_pipe(self, ctx: RoundContext) -> Pipe:
        pipe = make_pipe(self.config, self.rng)
        ctx.pipes.append(pipe)
        return pipe

    def step(self, ctx: RoundContext) -> bool:
        """
        One frame of the pipe stream. Mutates the context.

        Returns False if any pipe hit the bird; scoring and spawning are
        skipped for that frame.
        """
        # 1. Move pipes, oldest first
        for pipe in ctx.pipes:
            pipe.speed = self.pipe_speed(ctx.score)
            pipe.x -= pipe.speed

        # 2. Collision check
        for pipe in ctx.pipes:
            if self.core.check_collision(ctx.bird, pipe):
                return False

        # 3. Remove passed pipes back to front, one point each
        for i in range(len(ctx.pipes) - 1, -1, -1):
            if ctx.pipes[i].offscreen():
                del ctx.pipes[i]
                ctx.score += 1

        # 4. Spawn on cadence, counted from the first running frame
        if ctx.running_frames % self.config.spawn_interval_frames == 0:
            self.spawn_pipe(ctx)

        return True
