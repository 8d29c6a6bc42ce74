"""Bid validation and contract resolution."""
from .errors import InvalidBid, NoContract
from .models import Bid, HAND_SIZE


def validate_bid(value, minimum: int) -> int:
    """Return the bid value if it is a pass (0) or between the minimum and 13."""
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidBid(f"Bid must be an integer, got {value!r}")
    if value == 0:
        return value
    if value < minimum:
        raise InvalidBid(f"Bid {value} is below the minimum of {minimum}; bid 0 to pass")
    if value > HAND_SIZE:
        raise InvalidBid(f"Bid {value} is above the maximum of {HAND_SIZE}")
    return value


def resolve_bids(bids: list[Bid], minimum: int) -> Bid:
    """Pick the winning bid.

    Bids are reduced in seat order and the running best only changes on a
    strictly greater value, so ties go to the lowest player id. Raises
    NoContract when the best value does not reach ``minimum``.
    """
    if not bids:
        raise NoContract(0, minimum)

    best = None
    for bid in sorted(bids, key=lambda b: b.player_id):
        if best is None or bid.value > best.value:
            best = bid

    if best.value < minimum:
        raise NoContract(best.value, minimum)
    return best
