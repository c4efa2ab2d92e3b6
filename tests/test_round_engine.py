import random

import pytest

from voice_flappy.data_models import EndReason, RoundPhase
from voice_flappy.round_engine import RoundController
from voice_flappy.score_store import ScoreStore


class MemoryStore:
    def __init__(self, high_score=0):
        self.high_score = high_score
        self.saves = []

    def get_high_score(self):
        return self.high_score

    def save_high_score(self, score):
        self.high_score = score
        self.saves.append(score)


@pytest.fixture
def controller(config):
    return RoundController(config, rng=random.Random(42))


def _skip_delay(controller):
    for _ in range(controller.config.start_delay_frames):
        controller.step(0.0)


def test_start_delay_holds_bird(controller):
    for _ in range(119):
        ctx = controller.step(1.0)
        assert ctx.phase is RoundPhase.NOT_STARTED
        assert ctx.bird.y == 300
        assert ctx.bird.velocity == 0.0
    ctx = controller.step(1.0)
    assert ctx.phase is RoundPhase.RUNNING
    assert ctx.pipes == []
    assert ctx.bird.y == 300


def test_first_running_frame_spawns_and_falls(controller):
    _skip_delay(controller)
    ctx = controller.step(0.0)
    assert len(ctx.pipes) == 1
    assert ctx.pipes[0].x == 800
    assert ctx.bird.velocity == pytest.approx(0.2)
    assert ctx.bird.y == pytest.approx(300.2)
    assert ctx.running_frames == 1


def test_silent_fall_reaches_floor_clamp(controller):
    _skip_delay(controller)
    for _ in range(33):
        ctx = controller.step(0.0)
    # y_n = 300 + 0.2 * n(n+1)/2
    assert ctx.bird.y == pytest.approx(412.2)
    assert ctx.bird.velocity == pytest.approx(6.6)

    ctx = controller.step(0.0)
    assert ctx.bird.y == 415
    assert ctx.bird.velocity == 0.0

    for _ in range(10):
        ctx = controller.step(0.0)
        assert ctx.bird.y <= 415
    assert ctx.phase is RoundPhase.RUNNING


def test_loud_input_ends_round_at_ceiling(controller):
    _skip_delay(controller)
    frames = 0
    while controller.ctx.phase is RoundPhase.RUNNING:
        controller.step(1.0)
        frames += 1
    assert frames == 38
    assert controller.ctx.end_reason is EndReason.CEILING
    assert controller.ctx.bird.y == -4


def test_resting_on_floor_ends_round_on_first_pipe(controller):
    _skip_delay(controller)
    frames = 0
    while controller.ctx.phase is RoundPhase.RUNNING:
        controller.step(0.0)
        frames += 1
    # First pipe spawns at x=800 and reaches x=50 after 250 moves.
    assert frames == 251
    assert controller.ctx.end_reason is EndReason.COLLISION
    assert controller.ctx.score == 0


def test_ended_round_is_frozen(controller):
    _skip_delay(controller)
    while controller.ctx.phase is RoundPhase.RUNNING:
        controller.step(1.0)
    snapshot = (controller.ctx.bird.y, [p.x for p in controller.ctx.pipes])
    for _ in range(10):
        controller.step(0.0)
    assert (controller.ctx.bird.y, [p.x for p in controller.ctx.pipes]) == snapshot
    assert controller.ctx.phase is RoundPhase.ENDED


def _end_with_score(controller, score):
    _skip_delay(controller)
    controller.ctx.score = score
    controller.ctx.bird.y = 1.0
    controller.step(1.0)
    assert controller.ctx.phase is RoundPhase.ENDED


def test_lower_score_keeps_high_score(config):
    store = MemoryStore(high_score=10)
    controller = RoundController(config, store=store)
    assert controller.ctx.high_score == 10
    _end_with_score(controller, 7)
    assert controller.ctx.high_score == 10
    assert store.saves == []


def test_new_record_is_persisted(config):
    store = MemoryStore(high_score=10)
    controller = RoundController(config, store=store)
    _end_with_score(controller, 15)
    assert controller.ctx.high_score == 15
    assert store.saves == [15]


def test_high_score_round_trips_through_sqlite(config):
    store = ScoreStore(":memory:")
    store.save_high_score(10)

    controller = RoundController(config, store=store)
    _end_with_score(controller, 7)
    assert store.get_high_score() == 10

    controller.restart()
    _end_with_score(controller, 15)
    assert store.get_high_score() == 15
    store.close()


def test_restart_resets_round(controller):
    _skip_delay(controller)
    while controller.ctx.phase is RoundPhase.RUNNING:
        controller.step(0.0)
    controller.ctx.score = 3
    assert controller.ctx.high_score == 0

    ctx = controller.restart()
    assert ctx.phase is RoundPhase.NOT_STARTED
    assert ctx.score == 0
    assert ctx.pipes == []
    assert (ctx.bird.y, ctx.bird.velocity) == (300, 0.0)
    assert ctx.end_reason is None

    for _ in range(119):
        controller.step(0.0)
    assert ctx.phase is RoundPhase.NOT_STARTED
    controller.step(0.0)
    assert ctx.phase is RoundPhase.RUNNING


def test_restart_mid_round(controller):
    _skip_delay(controller)
    for _ in range(5):
        controller.step(0.0)
    ctx = controller.restart()
    assert ctx.phase is RoundPhase.NOT_STARTED
    assert ctx.running_frames == 0
    assert ctx.pipes == []


def test_last_level_recorded(controller):
    ctx = controller.step(0.42)
    assert ctx.last_level == 0.42
    assert ctx.speed_multiplier(controller.config) == 1.0
