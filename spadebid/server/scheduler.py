"""Paces computer turns for a watching player.

The engine is synchronous; this wraps it with a cancellable timer that plays
one AI card per tick until the human is on turn or the round is over.
"""
import logging
import threading
from typing import Callable, Optional

from .engine import GameEngine

logger = logging.getLogger(__name__)


class TurnScheduler:
    def __init__(self, engine: GameEngine, delay: float = 0.8,
                 on_update: Optional[Callable[[dict], None]] = None,
                 timer_factory=threading.Timer):
        self.engine = engine
        self.delay = delay
        self.on_update = on_update
        self.lock = threading.RLock()
        self._timer_factory = timer_factory
        self._timer = None

    @property
    def pending(self) -> bool:
        return self._timer is not None

    def schedule(self) -> bool:
        """Arm the timer if an AI seat is on turn. Returns True when armed."""
        with self.lock:
            if self._timer is not None or not self.engine.is_waiting_for_ai():
                return False
            self._timer = self._timer_factory(self.delay, self._tick)
            self._timer.daemon = True
            self._timer.start()
            return True

    def cancel(self):
        with self.lock:
            if self._timer is not None:
                self._timer.cancel()
                self._timer = None

    def _tick(self):
        with self.lock:
            self._timer = None
            if not self.engine.is_waiting_for_ai():
                return
            result = self.engine.play_ai_turn()
            logger.debug("AI turn played: %s", result["card"]["id"])
            if self.on_update:
                self.on_update(self.engine.get_game_state())
        self.schedule()
