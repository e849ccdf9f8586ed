"""Card-related data structures and helpers for Uno Room."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from .errors import InvalidCard


class Color(Enum):
    RED = "Red"
    BLUE = "Blue"
    GREEN = "Green"
    YELLOW = "Yellow"

    def __str__(self) -> str:
        return self.value


class Rank(Enum):
    ZERO = "0"
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    REVERSE = "Reverse"
    SKIP = "Skip"
    DRAW_TWO = "Draw Two"
    WILD = "Wild"
    WILD_DRAW_FOUR = "Wild Draw Four"

    def __str__(self) -> str:
        return self.value


NUMERAL_RANKS: list[Rank] = [
    Rank.ZERO,
    Rank.ONE,
    Rank.TWO,
    Rank.THREE,
    Rank.FOUR,
    Rank.FIVE,
    Rank.SIX,
    Rank.SEVEN,
    Rank.EIGHT,
    Rank.NINE,
]

# Deck generation order for the colored action cards.
ACTION_RANKS: list[Rank] = [Rank.REVERSE, Rank.SKIP, Rank.DRAW_TWO]

WILD_RANKS: list[Rank] = [Rank.WILD, Rank.WILD_DRAW_FOUR]

# Penalty points for cards left in hand when a round ends.
ACTION_POINTS = 20
WILD_POINTS = 50

CARD_POINTS: dict[Rank, int] = {
    **{rank: int(rank.value) for rank in NUMERAL_RANKS},
    **{rank: ACTION_POINTS for rank in ACTION_RANKS},
    **{rank: WILD_POINTS for rank in WILD_RANKS},
}


@dataclass(frozen=True)
class Card:
    """Immutable card value; equality is by face, never by identity."""

    rank: Rank
    color: Optional[Color] = None

    def __post_init__(self) -> None:
        if self.rank in WILD_RANKS and self.color is not None:
            raise InvalidCard(f"{self.rank} cards are colorless.")
        if self.rank not in WILD_RANKS and self.color is None:
            raise InvalidCard(f"{self.rank} cards need a color.")

    @property
    def face(self) -> str:
        if self.color is None:
            return self.rank.value
        return f"{self.color.value} {self.rank.value}"

    def is_wild(self) -> bool:
        return self.color is None

    def point_value(self) -> int:
        return CARD_POINTS[self.rank]

    def __str__(self) -> str:
        return self.face


def parse_card(face: str) -> Card:
    """Parse a wire face such as ``"Red 7"`` or ``"Wild Draw Four"``.

    The color is the token before the first space and the rank is the rest, so
    ``"Blue Draw Two"`` reads as color Blue, rank Draw Two.
    """
    if not isinstance(face, str):
        raise InvalidCard(f"Card face must be a string, got {type(face).__name__}.")
    for rank in WILD_RANKS:
        if face == rank.value:
            return Card(rank)

    color_token, _, rank_token = face.partition(" ")
    try:
        color = Color(color_token)
        rank = Rank(rank_token)
    except ValueError as exc:
        raise InvalidCard(f"Unknown card face: {face!r}") from exc
    if rank in WILD_RANKS:
        raise InvalidCard(f"Unknown card face: {face!r}")
    return Card(rank, color)


def faces(cards: Iterable[Card]) -> list[str]:
    return [card.face for card in cards]


def parse_cards(payload: Iterable[str]) -> list[Card]:
    return [parse_card(face) for face in payload]
