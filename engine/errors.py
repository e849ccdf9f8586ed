"""Failure taxonomy shared by the engine, the store and the HTTP layer."""

from __future__ import annotations

from enum import Enum
from typing import Dict, Type


class ErrorKind(Enum):
    # Lobby phase
    NAME_TAKEN = "NameTaken"
    ALREADY_STARTED = "AlreadyStarted"
    NOT_ENOUGH_PLAYERS = "NotEnoughPlayers"
    MISSING_PLAYER_NAME = "MissingPlayerName"
    ROOM_FULL = "RoomFull"
    MATCH_OVER = "MatchOver"

    # In-round phase
    NOT_STARTED = "NotStarted"
    NOT_YOUR_TURN = "NotYourTurn"
    ILLEGAL_CARD = "IllegalCard"
    CARD_NOT_HELD = "CardNotHeld"
    EMPTY_DRAW_PILE = "EmptyDrawPile"

    # Deck and card handling
    INVALID_CARD = "InvalidCard"
    INSUFFICIENT_CARDS = "InsufficientCards"

    # Raised outside the engine by the session store
    GAME_NOT_FOUND = "GameNotFound"
    VERSION_CONFLICT = "VersionConflict"

    def __str__(self) -> str:
        return self.value


class GameError(RuntimeError):
    """Base class for every recoverable game failure."""

    kind: ErrorKind

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NameTaken(GameError):
    kind = ErrorKind.NAME_TAKEN


class AlreadyStarted(GameError):
    kind = ErrorKind.ALREADY_STARTED


class NotEnoughPlayers(GameError):
    kind = ErrorKind.NOT_ENOUGH_PLAYERS


class MissingPlayerName(GameError):
    kind = ErrorKind.MISSING_PLAYER_NAME


class RoomFull(GameError):
    kind = ErrorKind.ROOM_FULL


class MatchOver(GameError):
    kind = ErrorKind.MATCH_OVER


class NotStarted(GameError):
    kind = ErrorKind.NOT_STARTED


class NotYourTurn(GameError):
    kind = ErrorKind.NOT_YOUR_TURN


class IllegalCard(GameError):
    kind = ErrorKind.ILLEGAL_CARD


class CardNotHeld(GameError):
    kind = ErrorKind.CARD_NOT_HELD


class EmptyDrawPile(GameError):
    kind = ErrorKind.EMPTY_DRAW_PILE


class InvalidCard(GameError, ValueError):
    kind = ErrorKind.INVALID_CARD


class InsufficientCards(GameError):
    kind = ErrorKind.INSUFFICIENT_CARDS


class GameNotFound(GameError):
    kind = ErrorKind.GAME_NOT_FOUND


class VersionConflict(GameError):
    kind = ErrorKind.VERSION_CONFLICT


ERRORS_BY_KIND: Dict[ErrorKind, Type[GameError]] = {
    cls.kind: cls
    for cls in (
        NameTaken,
        AlreadyStarted,
        NotEnoughPlayers,
        MissingPlayerName,
        RoomFull,
        MatchOver,
        NotStarted,
        NotYourTurn,
        IllegalCard,
        CardNotHeld,
        EmptyDrawPile,
        InvalidCard,
        InsufficientCards,
        GameNotFound,
        VersionConflict,
    )
}
