"""Convenience service layer for the HTTP API and bots."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from random import Random
from typing import Dict, List, Optional

from .action import Action, Draw, Join, Play, Start
from .cards import Card
from .errors import VersionConflict
from .game import apply_action, create_session
from .mechanics import legal_moves
from .rules_schema import DEFAULT_RULES, RuleSet
from .state import Session
from .store import InMemorySessionStore

logger = logging.getLogger("uno_room.service")

MAX_COMMIT_ATTEMPTS = 3


@dataclass
class PlayerView:
    name: str
    hand_size: int
    score: int


@dataclass
class SessionView:
    code: str
    phase: str
    current_player: Optional[str]
    discard_top: Optional[str]
    draw_pile_size: int
    players: List[PlayerView]
    hand: List[str]
    legal_moves: List[str]
    winner: Optional[str]
    overall_winner: Optional[str]


class RoomService:
    """Load a room, apply one transition, commit it.

    A commit that loses a race against another request for the same room is
    retried from a fresh load, up to ``max_attempts`` times.
    """

    def __init__(
        self,
        store: Optional[InMemorySessionStore] = None,
        *,
        rules: Optional[RuleSet] = None,
        rng: Optional[Random] = None,
        max_attempts: int = MAX_COMMIT_ATTEMPTS,
    ) -> None:
        self.store = store or InMemorySessionStore(rng=rng)
        self.rules = rules or DEFAULT_RULES
        self.rng = rng or Random()
        self.max_attempts = max_attempts

    # Room lifecycle ----------------------------------------------------

    def create_room(self, max_players: int, host_name: str) -> Session:
        session, _ = self.store.create(lambda code: create_session(code, max_players, host_name))
        return session

    def get_room(self, code: str) -> Session:
        session, _ = self.store.load(code)
        return session

    # Actions -----------------------------------------------------------

    def join_room(self, code: str, player_name: str) -> Session:
        return self._commit(code, Join(player_name))

    def start_game(self, code: str) -> Session:
        session = self._commit(code, Start())
        logger.info("Room %s started a round; %s opens", code, session.current_player)
        return session

    def play_card(self, code: str, player_name: str, face: str) -> Session:
        session = self._commit(code, Play(player_name, face))
        if not session.started:
            logger.info("Room %s round won by %s; scores %s", code, session.winner, session.scores)
            if session.overall_winner is not None:
                logger.info("Room %s match won by %s", code, session.overall_winner)
        return session

    def draw_card(self, code: str, player_name: str) -> Session:
        return self._commit(code, Draw(player_name))

    # Views -------------------------------------------------------------

    def legal_moves_for(self, code: str, player_name: str) -> List[Card]:
        session = self.get_room(code)
        return playable_cards(session, player_name)

    def get_session_view(self, code: str, perspective: Optional[str] = None) -> SessionView:
        return build_session_view(self.get_room(code), perspective)

    # Helpers -----------------------------------------------------------

    def _commit(self, code: str, action: Action) -> Session:
        for attempt in range(1, self.max_attempts + 1):
            session, version = self.store.load(code)
            result = apply_action(session, action, rng=self.rng, rules=self.rules)
            if not result.success:
                logger.info("Room %s rejected %s: %s", code, type(action).__name__, result.error_kind)
            updated = result.unwrap()
            try:
                self.store.save(updated, version)
            except VersionConflict:
                logger.warning("Room %s changed during %s (attempt %d)", code, type(action).__name__, attempt)
                continue
            return updated
        raise VersionConflict(f"Room {code} kept changing; gave up after {self.max_attempts} attempts.")


def playable_cards(session: Session, player_name: str) -> List[Card]:
    if not session.started or session.current_player != player_name:
        return []
    player = session.find_player(player_name)
    top = session.discard_top()
    if player is None or top is None:
        return []
    return legal_moves(player.hand, top)


def build_session_view(session: Session, perspective: Optional[str] = None) -> SessionView:
    """Summarize a session, showing only the perspective player's hand."""
    player = session.find_player(perspective) if perspective else None
    top = session.discard_top()
    scores: Dict[str, int] = session.scores
    return SessionView(
        code=session.code,
        phase=session.phase.name.lower(),
        current_player=session.current_player if session.started else None,
        discard_top=top.face if top is not None else None,
        draw_pile_size=len(session.deck),
        players=[
            PlayerView(name=p.name, hand_size=len(p.hand), score=scores.get(p.name, 0))
            for p in session.players
        ],
        hand=[card.face for card in player.hand] if player is not None else [],
        legal_moves=[card.face for card in playable_cards(session, perspective)] if perspective else [],
        winner=session.winner,
        overall_winner=session.overall_winner,
    )
