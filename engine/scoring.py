"""Round and match scoring helpers for Uno Room."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Mapping, Optional, Sequence, Tuple

from .cards import Card

MATCH_THRESHOLD = 500


@dataclass(frozen=True)
class RoundScoreResult:
    round_scores: Dict[str, int]
    new_scores: Dict[str, int]
    match_over: bool
    overall_winner: Optional[str]


def score_hand(hand: Iterable[Card]) -> int:
    """Penalty points for the cards left in a hand."""
    return sum(card.point_value() for card in hand)


def merge_scores(cumulative: Mapping[str, int], round_scores: Mapping[str, int]) -> Dict[str, int]:
    """Add one round's scores into a copy of the running totals."""
    merged = dict(cumulative)
    for name, points in round_scores.items():
        merged[name] = merged.get(name, 0) + points
    return merged


def check_match_end(cumulative: Mapping[str, int], threshold: int = MATCH_THRESHOLD) -> bool:
    return any(points >= threshold for points in cumulative.values())


def pick_overall_winner(
    cumulative: Mapping[str, int],
    order: Optional[Sequence[str]] = None,
) -> str:
    """Return the player with the lowest cumulative penalty.

    Ties go to whoever comes first in ``order`` (join order); without an order,
    mapping iteration order decides.
    """
    if not cumulative:
        raise ValueError("Cannot pick a winner without scores.")
    names = [name for name in order if name in cumulative] if order is not None else []
    names += [name for name in cumulative if name not in names]
    winner = names[0]
    for name in names[1:]:
        if cumulative[name] < cumulative[winner]:
            winner = name
    return winner


def score_round(
    hands: Sequence[Tuple[str, Sequence[Card]]],
    prior_scores: Mapping[str, int],
    *,
    threshold: int = MATCH_THRESHOLD,
) -> RoundScoreResult:
    """Score every hand at round end and fold the result into the totals."""
    round_scores = {name: score_hand(hand) for name, hand in hands}
    new_scores = merge_scores(prior_scores, round_scores)
    match_over = check_match_end(new_scores, threshold)
    overall_winner = None
    if match_over:
        overall_winner = pick_overall_winner(new_scores, order=[name for name, _ in hands])
    return RoundScoreResult(
        round_scores=round_scores,
        new_scores=new_scores,
        match_over=match_over,
        overall_winner=overall_winner,
    )
