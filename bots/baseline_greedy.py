"""Baseline greedy bot: shed the most expensive playable card first."""

from __future__ import annotations

from typing import List

from engine.cards import Card
from engine.state import Session

from .base import BotStrategy


class GreedyBot(BotStrategy):
    name = "Greedy"

    def choose_card(self, session: Session, player: str, legal: List[Card]) -> Card:
        return max(legal, key=lambda card: card.point_value())
