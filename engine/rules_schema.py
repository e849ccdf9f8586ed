"""Validation schema for Uno Room rules configuration."""

from __future__ import annotations

from pydantic import BaseModel, Field, model_validator

from .deck import DECK_SIZE
from .scoring import MATCH_THRESHOLD


class RuleSet(BaseModel):
    hand_size: int = Field(7, ge=1, description="Cards dealt to each player at round start.")
    min_players: int = Field(2, ge=2, description="Players required before a round can start.")
    match_threshold: int = Field(
        MATCH_THRESHOLD,
        gt=0,
        description="Cumulative penalty at which the match ends.",
    )
    enforce_max_players: bool = Field(
        False,
        description="Reject joins beyond the room's maxPlayers instead of treating it as informational.",
    )

    @model_validator(mode="after")
    def ensure_deal_fits(self) -> RuleSet:
        # The smallest table plus the opening discard must fit in one deck.
        needed = self.min_players * self.hand_size + 1
        if needed > DECK_SIZE:
            raise ValueError(
                f"Dealing {self.hand_size} cards to {self.min_players} players needs {needed} cards; "
                f"the deck holds {DECK_SIZE}."
            )
        return self


DEFAULT_RULES = RuleSet()
