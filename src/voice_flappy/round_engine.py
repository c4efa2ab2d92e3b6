"""
round_engine.py: The round state machine tying bird, pipes and high score together.
"""

import random
from typing import Optional, Protocol

from .data_models import (
    DEFAULT_CONFIG, Bird, EndReason, GameConfig, RoundContext, RoundPhase
)
from .obstacle_stream import ObstacleStream
from .physics_core import PhysicsCore


class HighScoreStore(Protocol):
    def get_high_score(self) -> int: ...

    def save_high_score(self, score: int) -> None: ...


class RoundController:
    """
    Runs one step per rendered frame:
    NOT_STARTED (start delay) -> RUNNING -> ENDED, and back via restart().
    """

    def __init__(self, config: GameConfig = DEFAULT_CONFIG,
                 store: Optional[HighScoreStore] = None,
                 rng: Optional[random.Random] = None):
        self.config = config
        self.store = store
        self.core = PhysicsCore(config)
        self.stream = ObstacleStream(core=self.core, rng=rng or random.Random())

        high_score = store.get_high_score() if store is not None else 0
        self.ctx = RoundContext(
            bird=Bird(x=config.bird_x, y=config.respawn_y),
            high_score=high_score,
        )

    def step(self, level: float) -> RoundContext:
        """Advances the round by one frame using this frame's microphone level."""
        ctx = self.ctx
        ctx.last_level = level

        if ctx.phase is RoundPhase.NOT_STARTED:
            ctx.bird.velocity = 0.0
            ctx.delay_frames += 1
            if ctx.delay_frames >= self.config.start_delay_frames:
                ctx.phase = RoundPhase.RUNNING
            return ctx

        if ctx.phase is RoundPhase.ENDED:
            return ctx

        # 1. Bird
        if not self.core.step_bird(ctx.bird, level):
            self._end_round(EndReason.CEILING)
            return ctx

        # 2. Pipes
        if not self.stream.step(ctx):
            self._end_round(EndReason.COLLISION)
            return ctx

        ctx.running_frames += 1
        return ctx

    def restart(self) -> RoundContext:
        """Resets score, pipes and bird and re-arms the start delay."""
        ctx = self.ctx
        ctx.score = 0
        ctx.pipes.clear()
        self.core.respawn(ctx.bird)
        ctx.phase = RoundPhase.NOT_STARTED
        ctx.delay_frames = 0
        ctx.running_frames = 0
        ctx.end_reason = None
        return ctx

    def _end_round(self, reason: EndReason):
        ctx = self.ctx
        ctx.phase = RoundPhase.ENDED
        ctx.end_reason = reason
        if ctx.score > ctx.high_score:
            ctx.high_score = ctx.score
            if self.store is not None:
                self.store.save_high_score(ctx.high_score)
