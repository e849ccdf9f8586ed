"""Legal move generation for Uno Room."""

from __future__ import annotations

from typing import Iterable, List

from .cards import Card


def is_legal_play(card: Card, discard_top: Card) -> bool:
    """Return True if ``card`` may be played on top of ``discard_top``.

    Wild and Wild Draw Four are always legal. No color is chosen after a wild,
    so a colorless discard top only accepts its own rank or another wild.
    """
    if card.is_wild():
        return True
    return card.color is discard_top.color or card.rank is discard_top.rank


def legal_moves(hand: Iterable[Card], discard_top: Card) -> List[Card]:
    """Return the distinct cards of the hand that are legal to play, in hand order."""
    moves: List[Card] = []
    for card in hand:
        if card not in moves and is_legal_play(card, discard_top):
            moves.append(card)
    return moves
