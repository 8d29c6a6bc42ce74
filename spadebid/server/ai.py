"""Heuristics for the computer-controlled seats.

All functions are pure: they look at a hand and return a decision.
"""
from .models import Card, Rank, Suit, HAND_SIZE, rank_value

HIGH_RANKS = frozenset({Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE})
STRONG_SUIT = Suit.SPADES


def ai_estimate_bid(hand: list[Card], minimum_bid: int) -> int:
    """Half of (high cards + strong-suit cards), floored at the minimum, capped at 13."""
    high_count = sum(1 for c in hand if c.rank in HIGH_RANKS)
    strong_count = sum(1 for c in hand if c.suit == STRONG_SUIT)
    estimate = (high_count + strong_count) // 2
    return min(HAND_SIZE, max(estimate, minimum_bid))


def card_weight(card: Card) -> int:
    value = rank_value(card)
    if value >= 8:
        return 3
    if value >= 5:
        return 2
    return 1


def ai_choose_trump(hand: list[Card]) -> Suit:
    """Suit with the highest tiered weight; ties go to the earlier suit."""
    scores = {suit: 0 for suit in Suit}
    for card in hand:
        scores[card.suit] += card_weight(card)

    best = Suit.SPADES
    for suit in Suit:
        if scores[suit] > scores[best]:
            best = suit
    return best


def ai_select_card(hand: list[Card], legal: list[Card]) -> Card:
    """Play the first legal card in hand order."""
    for card in hand:
        if card in legal:
            return card
    raise ValueError("No legal card to play")
