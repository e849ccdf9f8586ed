"""Random baseline bot."""

from __future__ import annotations

import random
from typing import List, Optional

from engine.cards import Card
from engine.state import Session

from .base import BotStrategy


class RandomBot(BotStrategy):
    name = "Random"

    def __init__(self, seed: Optional[int] = None) -> None:
        self._rng = random.Random(seed)

    def choose_card(self, session: Session, player: str, legal: List[Card]) -> Card:
        return self._rng.choice(legal)
