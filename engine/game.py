"""Session state machine for Uno Room.

Each transition takes the current ``Session`` and returns a new one, raising a
``GameError`` (and leaving the input untouched) when the request is rejected.
"""

from __future__ import annotations

from random import Random
from typing import Optional, Union

from .action import Action, ActionResult, Draw, Join, Play, Start
from .cards import Card, parse_card
from .deck import build_deck, deal_hand, open_discard, shuffle
from .errors import (
    AlreadyStarted,
    CardNotHeld,
    EmptyDrawPile,
    GameError,
    IllegalCard,
    MatchOver,
    MissingPlayerName,
    NameTaken,
    NotEnoughPlayers,
    NotStarted,
    NotYourTurn,
    RoomFull,
)
from .mechanics import is_legal_play
from .rules_schema import DEFAULT_RULES, RuleSet
from .scoring import score_round
from .state import Player, Session


def create_session(code: str, max_players: int, host_name: str) -> Session:
    """Open a lobby with the host as its only player."""
    _ensure_name(host_name)
    return Session(code=code, max_players=max_players, players=[Player(name=host_name)])


def join(session: Session, player_name: str, *, rules: Optional[RuleSet] = None) -> Session:
    rules = rules or DEFAULT_RULES
    _ensure_name(player_name)
    if session.started:
        raise AlreadyStarted("Game has already started.")
    if session.find_player(player_name) is not None:
        raise NameTaken(f"Player name {player_name!r} is already taken.")
    if rules.enforce_max_players and len(session.players) >= session.max_players:
        raise RoomFull(f"Room is full ({session.max_players} players).")

    updated = session.clone()
    updated.players.append(Player(name=player_name))
    return updated


def start(
    session: Session,
    *,
    rng: Optional[Random] = None,
    rules: Optional[RuleSet] = None,
) -> Session:
    """Deal a fresh round: shuffled deck, one hand per player, one open discard."""
    rules = rules or DEFAULT_RULES
    if session.overall_winner is not None:
        raise MatchOver(f"Match is over; {session.overall_winner} won.")
    if len(session.players) < rules.min_players:
        raise NotEnoughPlayers(f"Minimum {rules.min_players} players required to start the game.")
    if session.started:
        raise AlreadyStarted("Game already started.")
    if rng is None:
        rng = Random()

    updated = session.clone()
    deck = list(shuffle(build_deck(), rng=rng))
    for player in updated.players:
        player.hand, deck = deal_hand(deck, rules.hand_size)
    top, deck = open_discard(deck)

    updated.deck = deck
    updated.discard_pile = [top]
    updated.current_player = rng.choice(updated.players).name
    updated.started = True
    return updated


def play(
    session: Session,
    player_name: str,
    card: Union[Card, str],
    *,
    rules: Optional[RuleSet] = None,
) -> Session:
    """Play one card from the current player's hand onto the discard pile.

    ``card`` may be a wire face; it is only parsed once the turn is confirmed.
    """
    rules = rules or DEFAULT_RULES
    _ensure_turn(session, player_name)
    if isinstance(card, str):
        card = parse_card(card)
    top = session.discard_top()
    assert top is not None
    if not is_legal_play(card, top):
        raise IllegalCard(f"{card} cannot be played on {top}.")
    player = session.find_player(player_name)
    assert player is not None
    if card not in player.hand:
        raise CardNotHeld(f"{card} is not in {player_name}'s hand.")

    updated = session.clone()
    player = updated.find_player(player_name)
    assert player is not None
    player.hand.remove(card)
    updated.discard_pile.append(card)
    updated.current_player = updated.next_player_name(player_name)

    if not player.hand:
        _end_round(updated, player_name, rules)
    return updated


def draw(session: Session, player_name: str) -> Session:
    """Draw the top card; keep it if playable, otherwise discard it and pass."""
    _ensure_turn(session, player_name)
    if not session.deck:
        raise EmptyDrawPile("Draw pile is empty.")

    updated = session.clone()
    drawn = updated.deck.pop()
    top = updated.discard_top()
    assert top is not None
    if is_legal_play(drawn, top):
        player = updated.find_player(player_name)
        assert player is not None
        player.hand.append(drawn)
    else:
        updated.discard_pile.append(drawn)
        updated.current_player = updated.next_player_name(player_name)
    return updated


def apply_action(
    session: Session,
    action: Action,
    *,
    rng: Optional[Random] = None,
    rules: Optional[RuleSet] = None,
) -> ActionResult:
    """Apply one transition and report the outcome as a tagged result."""
    try:
        if isinstance(action, Join):
            updated = join(session, action.player_name, rules=rules)
        elif isinstance(action, Start):
            updated = start(session, rng=rng, rules=rules)
        elif isinstance(action, Play):
            updated = play(session, action.player_name, action.card, rules=rules)
        elif isinstance(action, Draw):
            updated = draw(session, action.player_name)
        else:
            raise TypeError(f"Unknown action {action!r}")
    except GameError as exc:
        return ActionResult.failure(exc)
    return ActionResult.ok(updated)


def _end_round(session: Session, winner: str, rules: RuleSet) -> None:
    result = score_round(
        [(player.name, player.hand) for player in session.players],
        session.scores,
        threshold=rules.match_threshold,
    )
    session.winner = winner
    session.started = False
    session.scores = result.new_scores
    if result.match_over:
        session.overall_winner = result.overall_winner


def _ensure_name(player_name: str) -> None:
    if not player_name or not player_name.strip():
        raise MissingPlayerName("Player name is required.")


def _ensure_turn(session: Session, player_name: str) -> None:
    if not session.started:
        raise NotStarted("Game has not started yet.")
    if session.current_player != player_name:
        raise NotYourTurn("It is not your turn.")
