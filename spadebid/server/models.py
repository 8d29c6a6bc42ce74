"""Game models for Spadebid."""
from enum import IntEnum, Enum
from dataclasses import dataclass, field
from typing import Optional
import random


# === Enums ===

class Suit(IntEnum):
    SPADES = 0
    HEARTS = 1
    DIAMONDS = 2
    CLUBS = 3


class Rank(IntEnum):
    TWO = 0
    THREE = 1
    FOUR = 2
    FIVE = 3
    SIX = 4
    SEVEN = 5
    EIGHT = 6
    NINE = 7
    TEN = 8
    JACK = 9
    QUEEN = 10
    KING = 11
    ACE = 12


class RoundPhase(Enum):
    LOBBY = "lobby"
    DEALING = "dealing"
    BIDDING = "bidding"
    TRUMP_SELECTION = "trump_selection"
    PLAY = "play"
    ROUND_END = "round_end"


class TrickState(Enum):
    AWAITING_LEAD = "awaiting_lead"
    AWAITING_FOLLOW = "awaiting_follow"
    TRICK_COMPLETE = "trick_complete"


class PlayerType(Enum):
    HUMAN = "human"
    AI = "ai"


class Team(Enum):
    A = "teamA"
    B = "teamB"


# === Mappings ===

SUIT_CODES = {
    Suit.SPADES: "S",
    Suit.HEARTS: "H",
    Suit.DIAMONDS: "D",
    Suit.CLUBS: "C",
}

SUIT_NAMES = {
    Suit.SPADES: "spades",
    Suit.HEARTS: "hearts",
    Suit.DIAMONDS: "diamonds",
    Suit.CLUBS: "clubs",
}

RANK_NAMES = {
    Rank.TWO: "2",
    Rank.THREE: "3",
    Rank.FOUR: "4",
    Rank.FIVE: "5",
    Rank.SIX: "6",
    Rank.SEVEN: "7",
    Rank.EIGHT: "8",
    Rank.NINE: "9",
    Rank.TEN: "10",
    Rank.JACK: "J",
    Rank.QUEEN: "Q",
    Rank.KING: "K",
    Rank.ACE: "A",
}

CODE_TO_SUIT = {v: k for k, v in SUIT_CODES.items()}
NAME_TO_SUIT = {v: k for k, v in SUIT_NAMES.items()}
NAME_TO_RANK = {v: k for k, v in RANK_NAMES.items()}

NUM_PLAYERS = 4
DECK_SIZE = 52
HAND_SIZE = 13
HUMAN_PLAYER_ID = 0


def parse_suit(value) -> Optional[Suit]:
    """Accept a Suit, a one-letter code ("S") or a name ("spades")."""
    if isinstance(value, Suit):
        return value
    if not isinstance(value, str):
        return None
    key = value.strip()
    if key.upper() in CODE_TO_SUIT:
        return CODE_TO_SUIT[key.upper()]
    return NAME_TO_SUIT.get(key.lower())


def team_for(player_id: int) -> Team:
    """Players {0, 2} form team A, players {1, 3} team B."""
    return Team.A if player_id % 2 == 0 else Team.B


# === Models ===

@dataclass(frozen=True)
class Card:
    rank: Rank
    suit: Suit

    @property
    def id(self) -> str:
        return f"{RANK_NAMES[self.rank]}{SUIT_CODES[self.suit]}"

    @property
    def rank_value(self) -> int:
        return rank_value(self)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "rank": RANK_NAMES[self.rank],
            "suit": SUIT_NAMES[self.suit],
            "rank_value": self.rank_value,
        }

    @classmethod
    def from_id(cls, card_id: str) -> "Card":
        if not isinstance(card_id, str) or len(card_id) < 2:
            raise ValueError(f"Invalid card id: {card_id!r}")
        rank_str, suit_str = card_id[:-1].upper(), card_id[-1].upper()
        if rank_str not in NAME_TO_RANK or suit_str not in CODE_TO_SUIT:
            raise ValueError(f"Invalid card id: {card_id!r}")
        return cls(rank=NAME_TO_RANK[rank_str], suit=CODE_TO_SUIT[suit_str])

    def __str__(self) -> str:
        return self.id


def rank_value(card: Card) -> int:
    """Zero-based rank index: 2 is 0, ace is 12."""
    return int(card.rank)


def build_deck() -> list[Card]:
    """Create the standard 52-card deck, suits outer, ranks inner."""
    deck = []
    for suit in Suit:
        for rank in Rank:
            deck.append(Card(rank=rank, suit=suit))
    return deck


def shuffle(deck: list[Card], rng=None) -> list[Card]:
    """Return a shuffled copy of ``deck`` (Fisher-Yates, last index down to 1).

    The caller's list is left untouched. ``rng`` may be any object with a
    ``randint`` method (``random.Random`` instance); the module-level
    generator is used when omitted.
    """
    rng = rng or random
    cards = list(deck)
    for i in range(len(cards) - 1, 0, -1):
        j = rng.randint(0, i)
        cards[i], cards[j] = cards[j], cards[i]
    return cards


@dataclass
class Player:
    id: int
    name: str
    player_type: PlayerType = PlayerType.AI
    hand: list[Card] = field(default_factory=list)
    tricks_won: int = 0

    @property
    def is_human(self) -> bool:
        return self.player_type == PlayerType.HUMAN

    @property
    def is_ai(self) -> bool:
        return self.player_type == PlayerType.AI

    @property
    def team(self) -> Team:
        return team_for(self.id)

    def has_card(self, card: Card) -> bool:
        return card in self.hand

    def remove_card(self, card: Card):
        self.hand.remove(card)

    def reset_for_round(self):
        self.hand = []
        self.tricks_won = 0

    def to_dict(self, hide_hand: bool = False) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "player_type": self.player_type.value,
            "is_human": self.is_human,
            "team": self.team.value,
            "hand": [] if hide_hand else [c.to_dict() for c in self.hand],
            "hand_count": len(self.hand),
            "tricks_won": self.tricks_won,
        }


@dataclass(frozen=True)
class Bid:
    player_id: int
    value: int = 0  # 0 is a pass

    def is_pass(self) -> bool:
        return self.value == 0

    def to_dict(self) -> dict:
        return {
            "player_id": self.player_id,
            "value": self.value,
            "is_pass": self.is_pass(),
        }


@dataclass(frozen=True)
class Contract:
    winner_id: int
    bid_value: int
    trump_suit: Optional[Suit] = None

    def to_dict(self) -> dict:
        return {
            "winner_id": self.winner_id,
            "bid_value": self.bid_value,
            "trump_suit": SUIT_NAMES[self.trump_suit] if self.trump_suit is not None else None,
            "team": team_for(self.winner_id).value,
        }


@dataclass
class Trick:
    number: int
    lead_player_id: int
    cards: list[tuple[int, Card]] = field(default_factory=list)  # [(player_id, card), ...]
    winner_id: Optional[int] = None

    @property
    def suit_led(self) -> Optional[Suit]:
        if self.cards:
            return self.cards[0][1].suit
        return None

    @property
    def state(self) -> TrickState:
        if not self.cards:
            return TrickState.AWAITING_LEAD
        if len(self.cards) < NUM_PLAYERS:
            return TrickState.AWAITING_FOLLOW
        return TrickState.TRICK_COMPLETE

    def add_card(self, player_id: int, card: Card):
        self.cards.append((player_id, card))

    def determine_winner(self, trump_suit: Optional[Suit] = None) -> int:
        """Determine the winner of the trick."""
        if not self.cards:
            raise ValueError("No cards in trick")
        self.winner_id = trick_winner(self.cards, trump_suit)
        return self.winner_id

    def to_dict(self) -> dict:
        return {
            "number": self.number,
            "lead_player_id": self.lead_player_id,
            "cards": [{"player_id": pid, "card": c.to_dict()} for pid, c in self.cards],
            "winner_id": self.winner_id,
            "suit_led": SUIT_NAMES[self.suit_led] if self.suit_led is not None else None,
            "state": self.state.value,
        }


def beats(card: Card, best: Card, trump_suit: Optional[Suit]) -> bool:
    """True when ``card`` displaces the running best of a trick."""
    if card.suit == trump_suit and best.suit != trump_suit:
        return True
    if card.suit == best.suit:
        return rank_value(card) > rank_value(best)
    return False


def trick_winner(plays: list[tuple[int, Card]], trump_suit: Optional[Suit]) -> int:
    """Reduce the plays left to right; the first card sets the suit to beat."""
    winning_player_id, winning_card = plays[0]
    for player_id, card in plays[1:]:
        if beats(card, winning_card, trump_suit):
            winning_player_id = player_id
            winning_card = card
    return winning_player_id


def legal_cards(hand: list[Card], lead_suit: Optional[Suit]) -> list[Card]:
    """Cards that may be played: must follow the lead suit when able."""
    if lead_suit is None:
        return list(hand)
    follow = [c for c in hand if c.suit == lead_suit]
    return follow if follow else list(hand)


@dataclass
class Scoreboard:
    team_a: int = 0
    team_b: int = 0

    def award(self, player_id: int):
        if team_for(player_id) == Team.A:
            self.team_a += 1
        else:
            self.team_b += 1

    def add(self, other: "Scoreboard"):
        self.team_a += other.team_a
        self.team_b += other.team_b

    @property
    def total(self) -> int:
        return self.team_a + self.team_b

    def to_dict(self) -> dict:
        return {Team.A.value: self.team_a, Team.B.value: self.team_b}


@dataclass
class Round:
    id: int
    deck: list[Card] = field(default_factory=list)
    bids: list[Bid] = field(default_factory=list)
    contract: Optional[Contract] = None
    tricks: list[Trick] = field(default_factory=list)
    current_player_id: Optional[int] = None
    scores: Scoreboard = field(default_factory=Scoreboard)
    phase: RoundPhase = RoundPhase.DEALING

    @property
    def current_trick(self) -> Optional[Trick]:
        if self.tricks and self.tricks[-1].winner_id is None:
            return self.tricks[-1]
        return None

    @property
    def completed_tricks(self) -> list[Trick]:
        return [t for t in self.tricks if t.winner_id is not None]

    @property
    def lead_suit(self) -> Optional[Suit]:
        trick = self.current_trick
        return trick.suit_led if trick else None

    def start_new_trick(self, lead_player_id: int) -> Trick:
        trick = Trick(number=len(self.tricks) + 1, lead_player_id=lead_player_id)
        self.tricks.append(trick)
        return trick

    def to_dict(self) -> dict:
        trick = self.current_trick
        return {
            "id": self.id,
            "bids": [b.to_dict() for b in self.bids],
            "contract": self.contract.to_dict() if self.contract else None,
            "current_trick": trick.to_dict() if trick else None,
            "tricks_played": len(self.completed_tricks),
            "last_trick": self.completed_tricks[-1].to_dict() if self.completed_tricks else None,
            "current_player_id": self.current_player_id,
            "scores": self.scores.to_dict(),
            "phase": self.phase.value,
        }


@dataclass
class Game:
    id: str
    players: list[Player] = field(default_factory=list)
    current_round: Optional[Round] = None
    round_number: int = 0
    totals: Scoreboard = field(default_factory=Scoreboard)

    def add_player(self, player: Player) -> bool:
        if len(self.players) >= NUM_PLAYERS:
            return False
        player.id = len(self.players)
        self.players.append(player)
        return True

    def seat_default_players(self, human_name: str = "You"):
        """Seat the human at position 0 and fill the table with AI players."""
        self.players = []
        self.add_player(Player(id=0, name=human_name, player_type=PlayerType.HUMAN))
        while len(self.players) < NUM_PLAYERS:
            self.add_player(Player(id=0, name=f"AI {len(self.players)}", player_type=PlayerType.AI))

    def get_player(self, player_id: int) -> Optional[Player]:
        for p in self.players:
            if p.id == player_id:
                return p
        return None

    @property
    def phase(self) -> RoundPhase:
        if self.current_round is None:
            return RoundPhase.LOBBY
        return self.current_round.phase

    def hands(self) -> dict[int, list[Card]]:
        return {p.id: list(p.hand) for p in self.players}

    def reset_round(self):
        """Drop every piece of round-scoped state and go back to the lobby."""
        for player in self.players:
            player.reset_for_round()
        self.current_round = None

    def to_dict(self, viewer_id: Optional[int] = None) -> dict:
        """Convert to dict, optionally hiding other players' hands."""
        return {
            "id": self.id,
            "players": [
                p.to_dict(hide_hand=(viewer_id is not None and p.id != viewer_id))
                for p in self.players
            ],
            "current_round": self.current_round.to_dict() if self.current_round else None,
            "round_number": self.round_number,
            "totals": self.totals.to_dict(),
            "phase": self.phase.value,
        }
