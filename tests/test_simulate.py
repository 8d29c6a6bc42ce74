"""Smoke tests for the headless simulator."""
import random

from spadebid.server.config import GameConfig
from spadebid.server.engine import GameEngine
from spadebid.server.models import Card, RoundPhase
from spadebid.server.simulate import card_str, hand_str, play_round


def test_card_str():
    assert card_str(Card.from_id('10H')) == '10♥'
    assert hand_str([Card.from_id('AS'), Card.from_id('2C')]) == 'A♠ 2♣'


def test_play_round_record():
    engine = GameEngine(config=GameConfig(minimum_contract_bid=6), rng=random.Random(8))
    lines = play_round(engine)
    assert engine.phase == RoundPhase.ROUND_END
    assert lines[0].startswith('round 1:')
    assert sum(1 for line in lines if line.startswith('trick ')) == 13
    assert lines[-1].startswith('score: ')
    assert engine.game.totals.total == 13


def test_several_rounds_accumulate():
    engine = GameEngine(rng=random.Random(21))
    for _ in range(4):
        play_round(engine)
    assert engine.game.totals.total == 52
    assert engine.game.round_number == 4
