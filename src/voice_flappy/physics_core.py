"""
physics_core.py: Bird kinematics and pipe collision logic.
"""

from .data_models import DEFAULT_CONFIG, Bird, GameConfig, Pipe


def map_range(value: float, in_low: float, in_high: float,
              out_low: float, out_high: float, clamp: bool = False) -> float:
    """Linearly remaps value from [in_low, in_high] onto [out_low, out_high]."""
    mapped = out_low + (value - in_low) * (out_high - out_low) / (in_high - in_low)
    if clamp:
        lo, hi = min(out_low, out_high), max(out_low, out_high)
        mapped = max(lo, min(mapped, hi))
    return mapped


class PhysicsCore:
    """
    Per-frame bird motion driven by the microphone level.

    Loud input sets an upward velocity directly; silence lets gravity
    accumulate. The floor is a clamp, the ceiling is fatal.
    """

    def __init__(self, config: GameConfig = DEFAULT_CONFIG):
        self.config = config

    def thrust(self, level: float) -> float:
        """Returns the upward velocity for a microphone level above the threshold."""
        cfg = self.config
        return map_range(level, cfg.mic_level_low, cfg.mic_level_high,
                         cfg.thrust_low, cfg.thrust_high, clamp=True)

    def apply_gravity(self, velocity: float) -> float:
        velocity += self.config.gravity
        if self.config.max_fall_velocity is not None:
            velocity = min(velocity, self.config.max_fall_velocity)
        return velocity

    def step_bird(self, bird: Bird, level: float) -> bool:
        """
        Advances the bird by one frame. Mutates the bird.

        Returns False when the bird has left the top of the playfield.
        """
        if level > self.config.mic_threshold:
            bird.velocity = self.thrust(level)
        else:
            bird.velocity = self.apply_gravity(bird.velocity)

        bird.y += bird.velocity

        if bird.y < 0:
            return False

        if bird.y > self.config.floor_y:
            bird.y = self.config.floor_y
            bird.velocity = 0.0

        return True

    def check_collision(self, bird: Bird, pipe: Pipe) -> bool:
        """Point test of the bird's (x, y) against the pipe's two solid segments."""
        if pipe.x <= bird.x < pipe.x + pipe.width:
            if bird.y < pipe.gap_top or bird.y > self.config.ground_y - pipe.gap_bottom:
                return True
        return False

    def respawn(self, bird: Bird):
        bird.x = self.config.bird_x
        bird.y = self.config.respawn_y
        bird.velocity = 0.0
