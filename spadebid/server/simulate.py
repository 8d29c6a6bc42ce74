"""Headless simulation: every seat, the human's included, is played by the heuristics.

Usage:
    python -m spadebid.server.simulate [--rounds N] [--seed S] [--min-bid M]
"""
import argparse
import logging
import random

from .ai import ai_choose_trump, ai_estimate_bid, ai_select_card
from .config import GameConfig
from .engine import GameEngine
from .models import (
    Card, Suit, RoundPhase, RANK_NAMES, HUMAN_PLAYER_ID, legal_cards,
)


# Unicode suit symbols
SUIT_SYMBOL = {
    Suit.SPADES: "♠",
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
}


def card_str(card: Card) -> str:
    return f"{RANK_NAMES[card.rank]}{SUIT_SYMBOL[card.suit]}"


def hand_str(cards: list[Card]) -> str:
    return " ".join(card_str(c) for c in cards)


def play_round(engine: GameEngine, max_redeals: int = 10) -> list[str]:
    """Play one full round and return its text record."""
    lines = []
    game = engine.game
    minimum = engine.config.minimum_contract_bid

    for _ in range(max_redeals):
        engine.start_round()
        human = game.get_player(HUMAN_PLAYER_ID)
        lines.append(f"round {game.current_round.id}: {human.name} holds {hand_str(human.hand)}")
        result = engine.submit_human_bid(ai_estimate_bid(human.hand, minimum))
        lines.append("bids: " + ", ".join(f"P{b['player_id']}={b['value']}" for b in result["bids"]))
        if not result["no_contract"]:
            break
        lines.append("no contract, re-deal")
    else:
        raise RuntimeError(f"No contract after {max_redeals} deals")

    if engine.phase == RoundPhase.TRUMP_SELECTION:
        engine.submit_trump_choice(ai_choose_trump(human.hand))

    contract = game.current_round.contract
    lines.append(f"contract: P{contract.winner_id} {contract.bid_value}{SUIT_SYMBOL[contract.trump_suit]}")

    while engine.phase == RoundPhase.PLAY:
        rnd = game.current_round
        if engine.is_waiting_for_ai():
            result = engine.play_ai_turn()
        else:
            card = ai_select_card(human.hand, legal_cards(human.hand, rnd.lead_suit))
            result = engine.submit_play(HUMAN_PLAYER_ID, card)
        if result["trick_complete"]:
            trick = rnd.completed_tricks[-1]
            plays = " ".join(f"P{pid}:{card_str(c)}" for pid, c in trick.cards)
            lines.append(f"trick {trick.number}: {plays} -> P{trick.winner_id}")

    scores = game.current_round.scores
    lines.append(f"score: A={scores.team_a} B={scores.team_b}")
    return lines


def main():
    parser = argparse.ArgumentParser(description="Simulate Spadebid rounds")
    parser.add_argument("--rounds", type=int, default=1)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--min-bid", type=int, default=5)
    args = parser.parse_args()

    logging.basicConfig(level=logging.WARNING)
    engine = GameEngine(config=GameConfig(minimum_contract_bid=args.min_bid),
                        rng=random.Random(args.seed))
    for _ in range(args.rounds):
        for line in play_round(engine):
            print(line)
        print()

    totals = engine.game.totals
    print(f"totals: A={totals.team_a} B={totals.team_b}")


if __name__ == "__main__":
    main()
