"""REST service for hosting Uno Room matches."""

from __future__ import annotations

import logging
import os
import sys
from dataclasses import asdict
from typing import Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from engine.cards import faces
from engine.errors import ErrorKind, GameError
from engine.rules_schema import RuleSet
from engine.service import RoomService
from engine.state import session_to_document

logging.basicConfig(
    level=os.environ.get("UNO_LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger("uno_room.api")


def _truthy_env(name: str, default: bool = False) -> bool:
    raw = str(os.environ.get(name) or "").strip().lower()
    if not raw:
        return default
    return raw in {"1", "true", "yes", "on"}


def _int_env(name: str, default: int) -> int:
    raw = str(os.environ.get(name) or "").strip()
    return int(raw) if raw else default


def rules_from_env() -> RuleSet:
    defaults = RuleSet()
    return RuleSet(
        hand_size=_int_env("UNO_HAND_SIZE", defaults.hand_size),
        match_threshold=_int_env("UNO_MATCH_THRESHOLD", defaults.match_threshold),
        enforce_max_players=_truthy_env("UNO_ENFORCE_MAX_PLAYERS", defaults.enforce_max_players),
    )


class CreateRequest(BaseModel):
    maxPlayers: int = Field(4, ge=2)
    hostName: str = Field(..., min_length=1)


class JoinRequest(BaseModel):
    code: str
    playerName: Optional[str] = None


class PlayRequest(BaseModel):
    playerName: str
    playedCard: str


class DrawRequest(BaseModel):
    playerName: str


def error_response(kind: ErrorKind, message: str) -> JSONResponse:
    status_code = 404 if kind is ErrorKind.GAME_NOT_FOUND else 400
    return JSONResponse(
        status_code=status_code,
        content={"kind": kind.value, "message": message, "detail": message},
    )


def create_app(service: Optional[RoomService] = None) -> FastAPI:
    room_service = service or RoomService(rules=rules_from_env())

    app = FastAPI(title="Uno Room Play Service")
    cors_origins = [o.strip() for o in os.environ.get("UNO_CORS_ORIGINS", "*").split(",")]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins,
        allow_credentials="*" not in cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.room_service = room_service

    @app.exception_handler(GameError)
    async def _game_error_handler(request: Request, exc: GameError):
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.kind, exc.message)
        return error_response(exc.kind, exc.message)

    @app.exception_handler(RequestValidationError)
    async def _validation_error_handler(request: Request, exc: RequestValidationError):
        message = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()
        )
        return JSONResponse(
            status_code=400,
            content={"kind": "InvalidRequest", "message": message, "detail": message},
        )

    @app.get("/health")
    def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.post("/api/games/create", status_code=201)
    def create_game(request: CreateRequest) -> Dict[str, object]:
        session = room_service.create_room(request.maxPlayers, request.hostName)
        return session_to_document(session)

    @app.post("/api/games/join")
    def join_game(request: JoinRequest) -> Dict[str, object]:
        session = room_service.join_room(request.code, request.playerName or "")
        return session_to_document(session)

    @app.get("/api/games/{code}")
    def get_game(code: str) -> Dict[str, object]:
        return session_to_document(room_service.get_room(code))

    @app.post("/api/games/{code}/start")
    def start_game(code: str) -> Dict[str, object]:
        return session_to_document(room_service.start_game(code))

    @app.post("/api/games/{code}/play")
    def play_card(code: str, request: PlayRequest) -> Dict[str, object]:
        session = room_service.play_card(code, request.playerName, request.playedCard)
        return session_to_document(session)

    @app.post("/api/games/{code}/draw")
    def draw_card(code: str, request: DrawRequest) -> Dict[str, object]:
        session = room_service.draw_card(code, request.playerName)
        return session_to_document(session)

    @app.get("/api/games/{code}/view")
    def view_game(code: str, playerName: Optional[str] = None) -> Dict[str, object]:
        return asdict(room_service.get_session_view(code, perspective=playerName))

    @app.get("/api/games/{code}/legal-moves")
    def legal_moves(code: str, playerName: str) -> Dict[str, List[str]]:
        return {"legalMoves": faces(room_service.legal_moves_for(code, playerName))}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host=os.environ.get("UNO_HOST", "0.0.0.0"), port=_int_env("UNO_PORT", 5000))
