"""Rule and server configuration."""
import os
from dataclasses import dataclass, asdict
from enum import Enum


class TrumpSelectionMode(Enum):
    CHOICE = "choice"  # the contract winner picks; the human is asked
    AUTO = "auto"      # the heuristic picks for every winner, human included


@dataclass(frozen=True)
class GameConfig:
    initial_deal_size: int = 5
    minimum_contract_bid: int = 5
    trump_selection_mode: TrumpSelectionMode = TrumpSelectionMode.CHOICE
    event_log_size: int = 50
    ai_delay: float = 0.8
    ai_autoplay: bool = True

    def __post_init__(self):
        if not 1 <= self.initial_deal_size <= 13:
            raise ValueError(f"initial_deal_size must be between 1 and 13, got {self.initial_deal_size}")
        if not 1 <= self.minimum_contract_bid <= 13:
            raise ValueError(f"minimum_contract_bid must be between 1 and 13, got {self.minimum_contract_bid}")
        if self.event_log_size < 1:
            raise ValueError("event_log_size must be positive")
        if self.ai_delay < 0:
            raise ValueError("ai_delay cannot be negative")

    @classmethod
    def from_env(cls) -> "GameConfig":
        return cls(
            initial_deal_size=int(os.getenv('SPADEBID_INITIAL_DEAL_SIZE', '5')),
            minimum_contract_bid=int(os.getenv('SPADEBID_MIN_CONTRACT_BID', '5')),
            trump_selection_mode=TrumpSelectionMode(os.getenv('SPADEBID_TRUMP_MODE', 'choice')),
            event_log_size=int(os.getenv('SPADEBID_EVENT_LOG_SIZE', '50')),
            ai_delay=float(os.getenv('SPADEBID_AI_DELAY', '0.8')),
            ai_autoplay=os.getenv('SPADEBID_AI_AUTOPLAY', '1') == '1',
        )

    def to_dict(self) -> dict:
        data = asdict(self)
        data['trump_selection_mode'] = self.trump_selection_mode.value
        return data


SERVER_CONFIG = {
    'host': os.getenv('FLASK_HOST', '127.0.0.1'),
    'port': int(os.getenv('FLASK_PORT', '3000')),
    'debug': os.getenv('FLASK_DEBUG', '0') == '1',
}
