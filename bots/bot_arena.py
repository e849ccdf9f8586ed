"""Simple bot arena for Uno Room."""

from __future__ import annotations

import argparse
from random import Random
from typing import Dict, Iterable, List, Sequence

from engine.action import Draw, Join, Start
from engine.game import apply_action, create_session
from engine.rules_schema import RuleSet
from engine.state import Session

from .base import BotStrategy
from .baseline_greedy import GreedyBot
from .random_bot import RandomBot

BOT_REGISTRY: Dict[str, type[BotStrategy]] = {
    "greedy": GreedyBot,
    "random": RandomBot,
}

ARENA_CODE = "ARENA000"


def seat_names(bots: Sequence[BotStrategy]) -> List[str]:
    return [f"{bot.name}-{index}" for index, bot in enumerate(bots)]


def open_table(bots: Sequence[BotStrategy], *, rules: RuleSet | None = None) -> Session:
    names = seat_names(bots)
    session = create_session(ARENA_CODE, len(names), names[0])
    for name in names[1:]:
        session = apply_action(session, Join(name), rules=rules).unwrap()
    return session


def play_round(
    session: Session,
    bots: Sequence[BotStrategy],
    *,
    rng: Random,
    rules: RuleSet | None = None,
) -> tuple[Session, int, bool]:
    """Deal and play one round; returns (session, turns, stalled)."""
    session = apply_action(session, Start(), rng=rng, rules=rules).unwrap()
    by_name = dict(zip(seat_names(bots), bots))
    for name, bot in by_name.items():
        bot.on_round_start(session, name)

    turns = 0
    while session.started:
        player = session.current_player
        action = by_name[player].choose_action(session, player)
        if isinstance(action, Draw) and not session.deck:
            return session, turns, True
        session = apply_action(session, action, rules=rules).unwrap()
        turns += 1
    return session, turns, False


def run_match(
    bots: Sequence[BotStrategy],
    *,
    max_rounds: int = 50,
    seed: int | None = None,
    rules: RuleSet | None = None,
) -> dict:
    if len(bots) < 2:
        raise ValueError("A match needs at least two bots.")
    rng = Random(seed)
    session = open_table(bots, rules=rules)
    history = []
    stalled = False
    while session.overall_winner is None and len(history) < max_rounds:
        session, turns, stalled = play_round(session, bots, rng=rng, rules=rules)
        if stalled:
            break
        history.append(
            {
                "winner": session.winner,
                "scores": dict(session.scores),
                "turns": turns,
            }
        )
    return {
        "scores": dict(session.scores),
        "history": history,
        "overall_winner": session.overall_winner,
        "stalled": stalled,
        "session": session,
    }


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a bot match.")
    parser.add_argument(
        "--bots",
        nargs="+",
        default=["greedy", "random"],
        choices=BOT_REGISTRY.keys(),
        help="Bot kinds, one per seat.",
    )
    parser.add_argument("--rounds", type=int, default=50, help="Maximum number of rounds to play.")
    parser.add_argument("--seed", type=int, default=42)
    args = parser.parse_args(argv)

    bots = [BOT_REGISTRY[kind]() for kind in args.bots]
    results = run_match(bots, max_rounds=args.rounds, seed=args.seed)

    print(f"Scores after {len(results['history'])} rounds: {results['scores']}")
    if results["overall_winner"] is not None:
        print(f"Match winner: {results['overall_winner']}")
    elif results["stalled"]:
        print("Match stalled: draw pile exhausted with no legal play.")


if __name__ == "__main__":
    main()
