"""In-memory session store with optimistic concurrency."""

from __future__ import annotations

import logging
import string
import threading
from random import Random
from typing import Any, Callable, Dict, Optional, Tuple

from .errors import GameNotFound, VersionConflict
from .state import Session, session_from_document, session_to_document

logger = logging.getLogger("uno_room.store")

CODE_ALPHABET = string.ascii_uppercase + string.ascii_lowercase + string.digits
CODE_LENGTH = 8
MAX_CODE_ATTEMPTS = 32


def generate_room_code(rng: Optional[Random] = None) -> str:
    if rng is None:
        rng = Random()
    return "".join(rng.choice(CODE_ALPHABET) for _ in range(CODE_LENGTH))


class InMemorySessionStore:
    """Keeps one serialized document per room, each with a version number.

    ``save`` only succeeds if the caller read the latest version, so two
    requests racing on the same room cannot both commit.
    """

    def __init__(self, rng: Optional[Random] = None) -> None:
        self._rng = rng or Random()
        self._documents: Dict[str, Tuple[int, Dict[str, Any]]] = {}
        self._lock = threading.Lock()

    def create(self, build: Callable[[str], Session]) -> Tuple[Session, int]:
        """Allocate an unused room code, build the session for it and store it."""
        with self._lock:
            for _ in range(MAX_CODE_ATTEMPTS):
                code = generate_room_code(self._rng)
                if code not in self._documents:
                    break
                logger.debug("Room code %s collided, retrying", code)
            else:
                raise RuntimeError("Could not allocate a unique room code.")
            session = build(code)
            self._documents[code] = (1, session_to_document(session))
        logger.info("Created room %s", code)
        return session_from_document(self._documents[code][1]), 1

    def load(self, code: str) -> Tuple[Session, int]:
        version, document = self._get(code)
        return session_from_document(document), version

    def save(self, session: Session, expected_version: int) -> int:
        with self._lock:
            entry = self._documents.get(session.code)
            if entry is None:
                raise GameNotFound(f"Game room {session.code!r} not found.")
            current_version, _ = entry
            if current_version != expected_version:
                raise VersionConflict(
                    f"Room {session.code} is at version {current_version}, expected {expected_version}."
                )
            new_version = current_version + 1
            self._documents[session.code] = (new_version, session_to_document(session))
        return new_version

    def _get(self, code: str) -> Tuple[int, Dict[str, Any]]:
        with self._lock:
            entry = self._documents.get(code)
        if entry is None:
            raise GameNotFound(f"Game room {code!r} not found.")
        return entry
