"""
data_models.py: Data structures for the game state.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional

from .constants import (
    BIRD_SIZE, BIRD_X, GRAVITY, GROUND_HEIGHT, MAX_FALL_VELOCITY,
    MIC_LEVEL_HIGH, MIC_LEVEL_LOW, MIC_THRESHOLD, PIPE_BASE_SPEED,
    PIPE_GAP_MARGIN, PIPE_GAP_MAX, PIPE_GAP_MIN, PIPE_SPAWN_INTERVAL_FRAMES,
    PIPE_SPEED_STEP, PIPE_WIDTH, RENDER_FPS, RESPAWN_Y, SCREEN_HEIGHT,
    SCREEN_WIDTH, START_DELAY_FRAMES, THRUST_HIGH, THRUST_LOW
)


@dataclass(frozen=True)
class GameConfig:
    """All tunables of a round. Defaults come from constants.py."""
    screen_width: float = SCREEN_WIDTH
    screen_height: float = SCREEN_HEIGHT
    ground_height: float = GROUND_HEIGHT
    bird_x: float = BIRD_X
    bird_size: float = BIRD_SIZE

    gravity: float = GRAVITY
    max_fall_velocity: Optional[float] = MAX_FALL_VELOCITY
    mic_threshold: float = MIC_THRESHOLD
    mic_level_low: float = MIC_LEVEL_LOW
    mic_level_high: float = MIC_LEVEL_HIGH
    thrust_low: float = THRUST_LOW
    thrust_high: float = THRUST_HIGH

    pipe_width: float = PIPE_WIDTH
    pipe_gap_min: float = PIPE_GAP_MIN
    pipe_gap_max: float = PIPE_GAP_MAX
    pipe_gap_margin: float = PIPE_GAP_MARGIN
    pipe_base_speed: float = PIPE_BASE_SPEED
    pipe_speed_step: float = PIPE_SPEED_STEP
    spawn_interval_frames: int = PIPE_SPAWN_INTERVAL_FRAMES

    start_delay_frames: int = START_DELAY_FRAMES
    fps: int = RENDER_FPS

    def __post_init__(self):
        if self.screen_width <= 0 or self.screen_height <= 0:
            raise ValueError("screen dimensions must be positive")
        if self.pipe_width <= 0:
            raise ValueError("pipe_width must be positive")
        if self.fps <= 0:
            raise ValueError("fps must be positive")
        if self.spawn_interval_frames <= 0:
            raise ValueError("spawn_interval_frames must be positive")
        if not 0 < self.pipe_gap_min <= self.pipe_gap_max:
            raise ValueError("pipe gap range must satisfy 0 < min <= max")
        # The gap-top draw is uniform(margin, ground_y - gap - margin); keep it a forward range.
        if self.ground_y - self.pipe_gap_max - 2 * self.pipe_gap_margin < 0:
            raise ValueError(
                f"playfield too short for a {self.pipe_gap_max} gap with "
                f"{self.pipe_gap_margin} margins (ground at {self.ground_y})")

    @property
    def ground_y(self) -> float:
        """Top edge of the ground strip."""
        return self.screen_height - self.ground_height

    @property
    def floor_y(self) -> float:
        """Lowest y the bird may rest at."""
        return self.ground_y - self.bird_size

    @property
    def respawn_y(self) -> float:
        return self.screen_height / 2


DEFAULT_CONFIG = GameConfig()


class ObstacleKind(Enum):
    PIPE = "pipe"


class RoundPhase(Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    ENDED = "ended"


class EndReason(Enum):
    CEILING = "ceiling"
    COLLISION = "collision"


@dataclass
class Bird:
    """The player-controlled avatar."""
    x: float = BIRD_X
    y: float = RESPAWN_Y
    velocity: float = 0.0


@dataclass
class Pipe:
    """
    A pair of solid segments around a passable gap.

    gap_top and gap_bottom are the heights of the upper and lower segments;
    gap_top + spacing + gap_bottom always equals the ground line.
    """
    x: float
    gap_top: float
    spacing: float
    gap_bottom: float
    width: float = PIPE_WIDTH
    speed: float = PIPE_BASE_SPEED
    kind: ObstacleKind = ObstacleKind.PIPE

    def offscreen(self) -> bool:
        return self.x < -self.width


@dataclass
class RoundContext:
    """Everything a round owns. Passed to and returned from each update."""
    bird: Bird = field(default_factory=Bird)
    pipes: List[Pipe] = field(default_factory=list)
    score: int = 0
    high_score: int = 0
    phase: RoundPhase = RoundPhase.NOT_STARTED
    delay_frames: int = 0
    running_frames: int = 0
    end_reason: Optional[EndReason] = None
    last_level: float = 0.0

    @property
    def running(self) -> bool:
        return self.phase is RoundPhase.RUNNING

    def speed_multiplier(self, config: GameConfig = DEFAULT_CONFIG) -> float:
        return 1 + self.score * config.pipe_speed_step
