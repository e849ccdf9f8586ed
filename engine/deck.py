"""Deck creation and dealing utilities for Uno Room."""

from __future__ import annotations

from random import Random
from typing import List, MutableSequence, Optional, Sequence, Tuple

from .cards import ACTION_RANKS, NUMERAL_RANKS, Card, Color, Rank
from .errors import InsufficientCards

DECK_SIZE = 108
WILD_COPIES = 4


def build_deck() -> List[Card]:
    """Return the ordered, unshuffled 108-card deck."""
    cards: List[Card] = []
    for color in Color:
        for rank in NUMERAL_RANKS:
            cards.append(Card(rank, color))
            if rank is not Rank.ZERO:
                cards.append(Card(rank, color))

    for color in Color:
        for rank in ACTION_RANKS:
            cards.append(Card(rank, color))
            cards.append(Card(rank, color))

    for _ in range(WILD_COPIES):
        cards.append(Card(Rank.WILD))
        cards.append(Card(Rank.WILD_DRAW_FOUR))

    return cards


def shuffle(deck: MutableSequence[Card], *, rng: Optional[Random] = None) -> MutableSequence[Card]:
    """Fisher-Yates shuffle in place; the same sequence is returned."""
    if rng is None:
        rng = Random()
    for i in range(len(deck) - 1, 0, -1):
        j = rng.randint(0, i)
        deck[i], deck[j] = deck[j], deck[i]
    return deck


def deal_hand(deck: Sequence[Card], n: int) -> Tuple[List[Card], List[Card]]:
    """Pop ``n`` cards from the top (tail) of the deck into a new hand.

    Returns ``(hand, remaining_deck)``; the input sequence is left untouched.
    """
    if n < 0:
        raise ValueError("Cannot deal a negative number of cards.")
    if len(deck) < n:
        raise InsufficientCards(f"Cannot deal {n} cards from a deck of {len(deck)}.")
    remaining = list(deck)
    hand = [remaining.pop() for _ in range(n)]
    return hand, remaining


def open_discard(deck: Sequence[Card]) -> Tuple[Card, List[Card]]:
    """Pop the single card that seeds the discard pile."""
    if not deck:
        raise InsufficientCards("Cannot open the discard pile from an empty deck.")
    remaining = list(deck)
    card = remaining.pop()
    return card, remaining
