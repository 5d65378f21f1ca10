from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Query
from fastapi.middleware.cors import CORSMiddleware
from pydantic import TypeAdapter, ValidationError

from . import config, storage
from .core.primitives import Explanation
from .core.scenario_registry import get_scenario, list_scenarios
from .engine.core import TaflEngine
from .engine.session import Game
from .errors import ScenarioError
from .logging_listeners import register_listeners
from .models.api import (
    ActionLogEntry,
    ActionLogResponse,
    CreateGameRequest,
    GameView,
    LegalMovesResponse,
    MoveAction,
    MoveRequest,
    MoveResponse,
)
from .models.board import Board
from .models.game import GameOutcome, GameState, RuleOptions
from .scenarios import build_board

logging.basicConfig(level=config.LOG_LEVEL)

app = FastAPI(title="Tafl - Hnefatafl rules engine")
engine = TaflEngine()
register_listeners()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _board_matrix(board: Board) -> list[list[str]]:
    # board[row][col], row 0 is the top row
    out = [["" for _ in range(board.cols)] for _ in range(board.rows)]
    for p in board.living():
        x, y = p.pos
        out[y][x] = f"{p.side.value}_{p.kind.value}"
    return out


def _view(state: GameState) -> GameView:
    return GameView(
        id=state.id,
        state=state,
        board=_board_matrix(state.board),
        extent=state.board.outer_extent(),
    )


def _game(gid: str) -> Game:
    game = storage.get(gid)
    if not game:
        raise HTTPException(404, "game not found")
    return game


@app.get("/health")
def health() -> dict[str, Any]:
    return {"ok": True, "storage": "memory", "games": len(storage.list_all())}


## Model-driven examples (avoid bespoke templates)


@app.get("/info")
def defaults_info():
    """Expose rules schema+example for game creation, plus the move action shape."""
    return {
        "scenarios": list_scenarios(),
        "default_scenario": config.DEFAULT_SCENARIO,
        "models": {
            "rules": {
                "schema": RuleOptions.model_json_schema(),
                "example": config.default_rules().model_dump(mode="json"),
            },
        },
        "actions": {
            "move": {
                "schema": MoveAction.model_json_schema(),
                "example": MoveAction(src=(3, 0), dst=(3, 2)).model_dump(mode="json"),
            },
        },
        "requests": {
            "create_game": {
                "schema": CreateGameRequest.model_json_schema(),
                "example": {"scenario": config.DEFAULT_SCENARIO},
            }
        },
    }


@app.get("/scenarios")
def scenarios() -> list[dict[str, Any]]:
    out = []
    for name in list_scenarios():
        board = build_board(get_scenario(name))
        out.append({"name": name, "cols": board.cols, "rows": board.rows})
    return out


@app.get("/games", response_model=list[GameView])
def list_games():
    return [_view(g.current_state()) for g in storage.list_all()]


@app.post("/games", response_model=GameView)
def create_game(req: CreateGameRequest):
    sc = req.scenario if req.scenario is not None else config.DEFAULT_SCENARIO
    if isinstance(sc, str):
        try:
            sc = get_scenario(sc)
        except KeyError:
            raise HTTPException(400, f"unknown scenario: {sc}") from None
    try:
        game = Game(sc, req.rules or config.default_rules(), engine=engine)
    except ScenarioError as e:
        raise HTTPException(
            400, {"kind": e.kind.value, "line": e.line, "message": str(e)}
        ) from None
    except ValidationError as e:
        raise HTTPException(400, {"kind": "invalid_board", "message": str(e)}) from None
    storage.save(game)
    return _view(game.current_state())


@app.get("/games/{gid}", response_model=GameView)
def get_game(gid: str):
    return _view(_game(gid).current_state())


@app.get("/games/{gid}/legal", response_model=LegalMovesResponse)
def legal_moves(gid: str, col: int, row: int):
    dests = _game(gid).legal_destinations((col, row))
    if dests is None:
        raise HTTPException(400, "no_piece_at_source")
    return LegalMovesResponse(src=(col, row), destinations=sorted(dests))


@app.post("/games/{gid}/evaluate", response_model=Explanation)
def evaluate_move(gid: str, req: MoveRequest):
    return _game(gid).evaluate_move(req.src, req.dst)


@app.post("/games/{gid}/move", response_model=MoveResponse)
def submit_move(gid: str, req: MoveRequest):
    game = _game(gid)
    result = game.submit_move(req.src, req.dst)
    if not result.applied:
        raise HTTPException(400, result.error.value)
    return MoveResponse(result=result, game=_view(game.current_state()))


@app.post("/games/{gid}/clock", response_model=GameOutcome)
def check_clock(gid: str):
    return _game(gid).check_clock()


@app.post("/games/{gid}/reset", response_model=GameView)
def reset_game(gid: str):
    game = _game(gid)
    game.new_game()
    return _view(game.current_state())


@app.delete("/games/{gid}")
def delete_game(gid: str) -> dict[str, Any]:
    if not storage.delete(gid):
        raise HTTPException(404, "game not found")
    return {"deleted": gid}


@app.get("/games/{gid}/log", response_model=ActionLogResponse)
def get_action_log(gid: str, limit: int = Query(50, ge=1, le=1000)):
    _game(gid)
    raw = storage.logs.list(gid, limit)
    entries: list[ActionLogEntry] = []
    # Validate each stored JSON string as a single ActionLogEntry
    ta = TypeAdapter(ActionLogEntry)
    for s in raw:
        entries.append(ta.validate_json(s))
    return ActionLogResponse(entries=entries)
