"""Transition variants and their results.

Every request against a session is exactly one of ``Join``, ``Start``, ``Play``
or ``Draw``. ``engine.game.apply_action`` dispatches on the variant and wraps the
outcome in an ``ActionResult``.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

from .cards import Card
from .errors import ERRORS_BY_KIND, ErrorKind, GameError
from .state import Session


@dataclass(frozen=True)
class Join:
    player_name: str


@dataclass(frozen=True)
class Start:
    pass


@dataclass(frozen=True)
class Play:
    player_name: str
    card: Union[Card, str]


@dataclass(frozen=True)
class Draw:
    player_name: str


Action = Union[Join, Start, Play, Draw]


@dataclass(frozen=True)
class ActionResult:
    success: bool
    session: Optional[Session] = None
    error_kind: Optional[ErrorKind] = None
    message: Optional[str] = None

    @classmethod
    def ok(cls, session: Session) -> ActionResult:
        return cls(success=True, session=session)

    @classmethod
    def failure(cls, error: GameError) -> ActionResult:
        return cls(success=False, error_kind=error.kind, message=error.message)

    def unwrap(self) -> Session:
        """Return the new session, re-raising the failure if there is one."""
        if self.success:
            assert self.session is not None
            return self.session
        assert self.error_kind is not None
        raise ERRORS_BY_KIND[self.error_kind](self.message or str(self.error_kind))
