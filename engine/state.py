"""Session state for Uno Room."""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, List, Mapping, Optional

from .cards import Card, faces, parse_cards


class Phase(Enum):
    LOBBY = auto()
    IN_ROUND = auto()
    MATCH_OVER = auto()


@dataclass
class Player:
    name: str
    hand: List[Card] = field(default_factory=list)


@dataclass
class Session:
    """Authoritative aggregate for one room.

    Transitions in ``engine.game`` never modify a Session in place; they work on
    ``clone()`` and return the copy.
    """

    code: str
    max_players: int
    players: List[Player] = field(default_factory=list)
    started: bool = False
    deck: List[Card] = field(default_factory=list)
    discard_pile: List[Card] = field(default_factory=list)
    current_player: str = ""
    winner: Optional[str] = None
    scores: Dict[str, int] = field(default_factory=dict)
    overall_winner: Optional[str] = None

    @property
    def phase(self) -> Phase:
        if self.started:
            return Phase.IN_ROUND
        if self.overall_winner is not None:
            return Phase.MATCH_OVER
        return Phase.LOBBY

    def clone(self) -> Session:
        return deepcopy(self)

    def player_names(self) -> List[str]:
        return [player.name for player in self.players]

    def find_player(self, name: str) -> Optional[Player]:
        for player in self.players:
            if player.name == name:
                return player
        return None

    def player_index(self, name: str) -> int:
        for index, player in enumerate(self.players):
            if player.name == name:
                return index
        raise KeyError(name)

    def next_player_name(self, name: str) -> str:
        index = self.player_index(name)
        return self.players[(index + 1) % len(self.players)].name

    def discard_top(self) -> Optional[Card]:
        return self.discard_pile[-1] if self.discard_pile else None


def session_to_document(session: Session) -> Dict[str, Any]:
    """Serialize to the persisted document shape with card faces as strings."""
    return {
        "code": session.code,
        "maxPlayers": session.max_players,
        "players": [{"name": player.name, "hand": faces(player.hand)} for player in session.players],
        "started": session.started,
        "deck": faces(session.deck),
        "discardPile": faces(session.discard_pile),
        "currentPlayer": session.current_player,
        "winner": session.winner,
        "scores": dict(session.scores),
        "overallWinner": session.overall_winner,
    }


def session_from_document(payload: Mapping[str, Any]) -> Session:
    return Session(
        code=payload["code"],
        max_players=payload["maxPlayers"],
        players=[
            Player(name=entry["name"], hand=parse_cards(entry.get("hand", [])))
            for entry in payload.get("players", [])
        ],
        started=bool(payload.get("started", False)),
        deck=parse_cards(payload.get("deck", [])),
        discard_pile=parse_cards(payload.get("discardPile", [])),
        current_player=payload.get("currentPlayer") or "",
        winner=payload.get("winner"),
        scores={name: int(points) for name, points in (payload.get("scores") or {}).items()},
        overall_winner=payload.get("overallWinner"),
    )
