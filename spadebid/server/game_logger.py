"""Game event log: the most recent events of a game, oldest first.

Entries are informational text for the table display. Every entry is also
sent to the ``spadebid`` logger.
"""
import logging
from collections import deque

logger = logging.getLogger(__name__)


class EventLog:
    def __init__(self, game_id: str, limit: int = 50):
        self.game_id = game_id
        self._events = deque(maxlen=limit)

    def log(self, message: str):
        self._events.append(message)
        logger.info("[game %s] %s", self.game_id, message)

    def entries(self) -> list[str]:
        return list(self._events)

    def __len__(self) -> int:
        return len(self._events)
