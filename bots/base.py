"""Common bot strategy interfaces."""

from __future__ import annotations

from typing import List

from engine.action import Draw, Play
from engine.cards import Card
from engine.service import playable_cards
from engine.state import Session


class BotStrategy:
    """Base class for bot policies."""

    name: str = "BaseBot"

    def on_round_start(self, session: Session, player: str) -> None:
        """Optional hook invoked after each deal."""
        return None

    def choose_card(self, session: Session, player: str, legal: List[Card]) -> Card:
        """Pick one of the legal cards; only called when ``legal`` is non-empty."""
        return legal[0]

    def choose_action(self, session: Session, player: str):
        """Return a ``Play`` when a legal card is held, otherwise a ``Draw``."""
        legal = playable_cards(session, player)
        if not legal:
            return Draw(player)
        return Play(player, self.choose_card(session, player, legal))
