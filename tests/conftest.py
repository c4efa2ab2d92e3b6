import random

import pytest

from voice_flappy.data_models import Bird, GameConfig, RoundContext
from voice_flappy.physics_core import PhysicsCore


@pytest.fixture
def config():
    return GameConfig()


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def core(config):
    return PhysicsCore(config)


@pytest.fixture
def ctx(config):
    return RoundContext(bird=Bird(x=config.bird_x, y=config.respawn_y))
