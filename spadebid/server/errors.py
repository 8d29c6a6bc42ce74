"""Exceptions raised by the Spadebid engine."""


class GameError(Exception):
    """Base exception for game errors."""
    pass


class IllegalMove(GameError):
    """Raised for a play out of turn, a card not held, or a card not allowed by follow-suit."""
    pass


class InvalidBid(GameError):
    """Raised when a bid value is not a pass and below the minimum, or otherwise malformed."""
    pass


class InvalidPhaseTransition(GameError):
    """Raised when a command is attempted in the wrong phase."""
    pass


class BidOutOfPhase(InvalidBid, InvalidPhaseTransition):
    """Raised when a bid is submitted outside the bidding phase."""
    pass


class NoContract(GameError):
    """Nobody bid the minimum contract; the round has to be re-dealt."""

    def __init__(self, best_value: int, minimum: int):
        super().__init__(f"Highest bid {best_value} is below the minimum contract {minimum}")
        self.best_value = best_value
        self.minimum = minimum
