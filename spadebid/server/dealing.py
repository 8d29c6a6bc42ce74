"""Two-tranche dealing: a few cards for bidding, the rest after the contract."""
from .models import Card, DECK_SIZE, HAND_SIZE, NUM_PLAYERS


def deal_initial(shuffled_deck: list[Card], size: int = 5) -> dict[int, list[Card]]:
    """Give ``size`` consecutive cards to each player, in seat order."""
    needed = size * NUM_PLAYERS
    if len(shuffled_deck) < needed:
        raise ValueError(f"Deck has {len(shuffled_deck)} cards, need at least {needed} to deal")

    return {
        player_id: list(shuffled_deck[player_id * size:(player_id + 1) * size])
        for player_id in range(NUM_PLAYERS)
    }


def deal_remainder(hands: dict[int, list[Card]], shuffled_deck: list[Card],
                   initial_size: int = 5) -> dict[int, list[Card]]:
    """Complete the deal from the same shuffle the initial hands came from.

    Every player keeps the cards they already hold. The undealt tail of the
    deck is handed out in consecutive blocks, player 0 first.
    """
    if len(shuffled_deck) != DECK_SIZE:
        raise ValueError(f"Expected a {DECK_SIZE}-card deck, got {len(shuffled_deck)}")

    rest = shuffled_deck[initial_size * NUM_PLAYERS:]
    per_player = HAND_SIZE - initial_size

    full = {}
    for player_id in range(NUM_PLAYERS):
        held = hands.get(player_id, [])
        if len(held) != initial_size:
            raise ValueError(f"Player {player_id} holds {len(held)} cards, expected {initial_size}")
        full[player_id] = list(held) + list(rest[player_id * per_player:(player_id + 1) * per_player])

    _check_partition(full, shuffled_deck)
    return full


def _check_partition(hands: dict[int, list[Card]], deck: list[Card]):
    dealt = [card for hand in hands.values() for card in hand]
    if len(dealt) != DECK_SIZE or set(dealt) != set(deck) or len(set(dealt)) != DECK_SIZE:
        raise ValueError("Hands do not partition the deck")
    for player_id, hand in hands.items():
        if len(hand) != HAND_SIZE:
            raise ValueError(f"Player {player_id} ended the deal with {len(hand)} cards")
