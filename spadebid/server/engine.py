"""Game engine for Spadebid - handles all game logic."""
import uuid
from dataclasses import replace
from typing import Optional, Union

from .ai import ai_choose_trump, ai_estimate_bid, ai_select_card
from .bidding import resolve_bids, validate_bid
from .config import GameConfig, TrumpSelectionMode
from .dealing import deal_initial, deal_remainder
from .errors import (
    GameError, IllegalMove, InvalidBid, InvalidPhaseTransition, BidOutOfPhase, NoContract,
)
from .game_logger import EventLog
from .models import (
    Game, Player, Card, Round, Bid, Contract, Suit, RoundPhase,
    SUIT_NAMES, NUM_PLAYERS, HUMAN_PLAYER_ID,
    build_deck, shuffle, legal_cards, parse_suit, team_for,
)

__all__ = [
    "GameEngine", "GameError", "IllegalMove", "InvalidBid",
    "InvalidPhaseTransition", "BidOutOfPhase", "NoContract",
]


class GameEngine:
    """Manages game state and enforces rules for Spadebid.

    Commands either apply completely or raise a GameError before touching
    any state.
    """

    def __init__(self, game: Optional[Game] = None, config: Optional[GameConfig] = None, rng=None):
        self.game = game or Game(id=str(uuid.uuid4()))
        self.config = config or GameConfig()
        self.rng = rng
        self.events = EventLog(self.game.id, limit=self.config.event_log_size)
        if not self.game.players:
            self.game.seat_default_players()

    @property
    def phase(self) -> RoundPhase:
        return self.game.phase

    # === Round Setup ===

    def start_round(self):
        """Shuffle, deal the initial tranche and open the bidding."""
        if self.phase not in (RoundPhase.LOBBY, RoundPhase.ROUND_END):
            raise InvalidPhaseTransition(
                f"Cannot start a round while in {self.phase.value}; abort it first"
            )

        self.game.reset_round()
        self.game.round_number += 1
        round = Round(id=self.game.round_number, phase=RoundPhase.DEALING)
        self.game.current_round = round

        round.deck = shuffle(build_deck(), self.rng)
        size = self.config.initial_deal_size
        for player_id, hand in deal_initial(round.deck, size).items():
            self._get_player(player_id).hand = hand

        round.phase = RoundPhase.BIDDING
        self.events.log(f"Round {round.id}: {size} cards dealt to all players for bidding")

    def abort_round(self):
        """Throw away the round in progress, whatever its phase."""
        if self.game.current_round is None:
            return
        round_id = self.game.current_round.id
        self.game.reset_round()
        self.events.log(f"Round {round_id} abandoned")

    # === Bidding Phase ===

    def submit_human_bid(self, value: int) -> dict:
        """Record the human's bid, let the AI seats bid, and resolve the contract."""
        if self.phase != RoundPhase.BIDDING:
            raise BidOutOfPhase(f"Bids are only accepted during bidding, not {self.phase.value}")
        minimum = self.config.minimum_contract_bid
        value = validate_bid(value, minimum)

        round = self.game.current_round
        bids = []
        for player in self.game.players:
            if player.is_human:
                bids.append(Bid(player_id=player.id, value=value))
            else:
                bids.append(Bid(player_id=player.id, value=ai_estimate_bid(player.hand, minimum)))
        round.bids = bids
        for bid in bids:
            self.events.log(f"{self._name(bid.player_id)} {'passes' if bid.is_pass() else f'bids {bid.value}'}")

        result = {"bids": [b.to_dict() for b in bids], "no_contract": False, "contract": None}
        try:
            winning = resolve_bids(bids, minimum)
        except NoContract as e:
            self.events.log(f"No contract ({e}); cards are thrown in for a re-deal")
            self.game.reset_round()
            result["no_contract"] = True
            return result

        round.contract = Contract(winner_id=winning.player_id, bid_value=winning.value)
        self.events.log(f"{self._name(winning.player_id)} won the bidding with {winning.value}")

        winner = self._get_player(winning.player_id)
        if winner.is_human and self.config.trump_selection_mode == TrumpSelectionMode.CHOICE:
            round.phase = RoundPhase.TRUMP_SELECTION
        else:
            self._apply_trump(ai_choose_trump(winner.hand))

        result["contract"] = round.contract.to_dict()
        return result

    # === Trump Selection Phase ===

    def submit_trump_choice(self, suit: Union[Suit, str]) -> dict:
        """The human contract winner names the trump suit."""
        self._validate_phase(RoundPhase.TRUMP_SELECTION)
        round = self.game.current_round

        if not self._get_player(round.contract.winner_id).is_human:
            raise IllegalMove("Only the human contract winner chooses trump")

        trump = parse_suit(suit)
        if trump is None:
            raise IllegalMove(f"Invalid trump suit: {suit!r}")

        self._apply_trump(trump)
        return round.contract.to_dict()

    def _apply_trump(self, trump: Suit):
        round = self.game.current_round
        round.contract = replace(round.contract, trump_suit=trump)
        self.events.log(f"{self._name(round.contract.winner_id)} sets trump {SUIT_NAMES[trump]}")

        full = deal_remainder(self.game.hands(), round.deck, self.config.initial_deal_size)
        for player_id, hand in full.items():
            self._get_player(player_id).hand = hand
        round.deck = []
        self.events.log("Remaining cards dealt, full hands ready")

        round.phase = RoundPhase.PLAY
        round.current_player_id = round.contract.winner_id
        round.start_new_trick(lead_player_id=round.contract.winner_id)

    # === Playing Phase ===

    def submit_play(self, player_id: int, card: Union[Card, str]) -> dict:
        """Play a card to the current trick."""
        self._validate_phase(RoundPhase.PLAY)
        round = self.game.current_round
        trick = round.current_trick

        if trick is None:
            raise GameError("No active trick")

        if isinstance(player_id, bool) or not isinstance(player_id, int):
            raise IllegalMove(f"Player id must be an integer, got {player_id!r}")

        if player_id != round.current_player_id:
            raise IllegalMove(f"Not player {player_id}'s turn")

        player = self.game.get_player(player_id)
        if player is None:
            raise IllegalMove(f"Player {player_id} not found")

        card = self._resolve_card(card)
        if not player.has_card(card):
            raise IllegalMove(f"Card {card.id} not in hand")

        if card not in legal_cards(player.hand, trick.suit_led):
            raise IllegalMove(f"Must follow suit ({SUIT_NAMES[trick.suit_led]})")

        player.remove_card(card)
        trick.add_card(player_id, card)
        self.events.log(f"{self._name(player_id)} plays {card.id}")

        result = {"card": card.to_dict(), "trick_complete": False, "round_complete": False}

        if len(trick.cards) < NUM_PLAYERS:
            round.current_player_id = (player_id + 1) % NUM_PLAYERS
            return result

        winner_id = trick.determine_winner(trump_suit=round.contract.trump_suit)
        self._get_player(winner_id).tricks_won += 1
        round.scores.award(winner_id)
        self.events.log(f"{self._name(winner_id)} wins trick {trick.number} for {team_for(winner_id).value}")

        result["trick_complete"] = True
        result["trick_winner_id"] = winner_id

        if all(not p.hand for p in self.game.players):
            self._end_round()
            result["round_complete"] = True
        else:
            round.current_player_id = winner_id
            round.start_new_trick(lead_player_id=winner_id)

        return result

    def play_ai_turn(self) -> dict:
        """Let the AI seat on turn play its card."""
        self._validate_phase(RoundPhase.PLAY)
        round = self.game.current_round
        player = self._get_player(round.current_player_id)
        if not player.is_ai:
            raise IllegalMove(f"Player {player.id} is not computer-controlled")

        card = ai_select_card(player.hand, legal_cards(player.hand, round.lead_suit))
        return self.submit_play(player.id, card)

    def is_waiting_for_ai(self) -> bool:
        if self.phase != RoundPhase.PLAY:
            return False
        return self._get_player(self.game.current_round.current_player_id).is_ai

    # === Scoring ===

    def _end_round(self):
        round = self.game.current_round
        round.phase = RoundPhase.ROUND_END
        round.current_player_id = None
        self.game.totals.add(round.scores)
        self.events.log(
            f"Round {round.id} over: Team A {round.scores.team_a}, Team B {round.scores.team_b}"
        )

    # === Helper Methods ===

    def _validate_phase(self, expected_phase: RoundPhase):
        """Validate the game is in the expected phase."""
        if self.phase != expected_phase:
            raise InvalidPhaseTransition(
                f"Expected phase {expected_phase.value}, but in {self.phase.value}"
            )

    def _get_player(self, player_id: int) -> Player:
        """Get a player by ID."""
        player = self.game.get_player(player_id)
        if not player:
            raise GameError(f"Player {player_id} not found")
        return player

    def _name(self, player_id: int) -> str:
        return self._get_player(player_id).name

    @staticmethod
    def _resolve_card(card: Union[Card, str]) -> Card:
        if isinstance(card, Card):
            return card
        try:
            return Card.from_id(card)
        except ValueError as e:
            raise IllegalMove(str(e)) from e

    # === Game State Queries ===

    def get_legal_cards(self, player_id: int) -> list[Card]:
        """Get all legal cards a player can play right now."""
        if self.phase != RoundPhase.PLAY:
            return []
        round = self.game.current_round
        if round.current_player_id != player_id:
            return []
        return legal_cards(self._get_player(player_id).hand, round.lead_suit)

    def get_game_state(self, viewer_id: Optional[int] = HUMAN_PLAYER_ID) -> dict:
        """Snapshot for the table display; only the viewer's hand is revealed."""
        state = self.game.to_dict(viewer_id=viewer_id)
        round = self.game.current_round

        state["hands"] = {
            str(p.id): (
                {"cards": [c.to_dict() for c in p.hand], "count": len(p.hand)}
                if viewer_id is None or p.id == viewer_id
                else {"count": len(p.hand)}
            )
            for p in self.game.players
        }
        state["bids"] = [b.to_dict() for b in round.bids] if round else []
        state["contract"] = round.contract.to_dict() if round and round.contract else None
        trick = round.current_trick if round else None
        state["current_trick"] = trick.to_dict() if trick else None
        state["lead_suit"] = SUIT_NAMES[round.lead_suit] if round and round.lead_suit is not None else None
        state["current_player"] = round.current_player_id if round else None
        state["scores"] = round.scores.to_dict() if round else {"teamA": 0, "teamB": 0}
        state["event_log"] = self.events.entries()
        state["config"] = self.config.to_dict()
        if viewer_id is not None:
            state["legal_cards"] = [c.to_dict() for c in self.get_legal_cards(viewer_id)]
        return state
