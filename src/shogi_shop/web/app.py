"""FastAPI web application for playing Shogi Shop in a browser.

FastAPI を使った対局用 REST API。画面側は盤のクリックを
「選択」→「確定」の2回のリクエストとして送る。

エンドポイント:
  POST /api/new-game     — 新規対局を開始（ゲームIDを返す）
  POST /api/select       — 盤上の駒を選ぶ
  POST /api/select-hand  — 持ち駒を選ぶ
  POST /api/move         — 選んだ駒の移動先を確定する
  POST /api/drop         — 選んだ持ち駒を打つマスを確定する
  GET  /api/state/{id}   — 現在の局面情報を取得
"""

from __future__ import annotations

import logging
import uuid
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel, Field

from shogi_shop.config import DEFAULT_CONFIG, AppConfig
from shogi_shop.game.display import format_snapshot
from shogi_shop.game.match import Match, MoveResult, Outcome, new_game
from shogi_shop.game.types import FILES, RANKS, Player

logger = logging.getLogger(__name__)

app = FastAPI(title="Shogi Shop")

# 対局情報のインメモリストレージ（サーバ再起動で消える簡易実装）
_games: dict[str, Match] = {}


class SquareRequest(BaseModel):
    """盤上のマスを指定するリクエストのスキーマ。"""

    game_id: str
    file: int = Field(ge=0, lt=FILES)
    rank: int = Field(ge=0, lt=RANKS)


class MoveRequest(SquareRequest):
    """移動確定リクエストのスキーマ。"""

    promote: bool = False  # 成れる場合に成るかどうか


class HandRequest(BaseModel):
    """持ち駒選択リクエストのスキーマ。"""

    game_id: str
    player: int = Field(ge=0, le=1)  # 0=先手, 1=後手
    index: int = Field(ge=0)  # 持ち駒リスト内の位置


def _get_match(game_id: str) -> Match:
    match = _games.get(game_id)
    if match is None:
        raise HTTPException(404, "Game not found")
    return match


def _match_to_dict(match: Match) -> dict[str, Any]:
    """Convert match state to JSON-serializable dict.

    フロントエンドが盤面を描画するための情報を辞書にまとめる。
    """
    snapshot = match.snapshot()
    squares: list[dict[str, Any] | None] = []
    for piece in snapshot.squares:
        if piece is None:
            squares.append(None)
        else:
            squares.append(
                {
                    "type": piece.piece_type.value,  # 駒種インデックス
                    "owner": piece.owner.value,  # 所有者（0=先手, 1=後手）
                    "name": piece.piece_type.name,  # 駒名（文字列）
                }
            )
    return {
        "side_to_move": snapshot.side_to_move.value,
        "phase": snapshot.phase.value,
        "winner": snapshot.winner.value if snapshot.winner is not None else None,
        "squares": squares,  # 81要素、squares[rank * 9 + file]
        "hands": [[pt.name for pt in hand] for hand in snapshot.hands],
        "selected": list(snapshot.selected) if snapshot.selected is not None else None,
        "legal_targets": [list(sq) for sq in match.legal_targets()],
        "promotable_targets": [list(sq) for sq in match.promotable_targets()],
        "files": FILES,
        "ranks": RANKS,
        "board_display": format_snapshot(snapshot),
    }


def _respond(match: Match, result: MoveResult) -> dict[str, Any]:
    """操作結果を返す。受け付けられなかった操作は 400 にする。"""
    if result.outcome == Outcome.GAME_OVER:
        raise HTTPException(400, "Game is already over")
    if result.outcome == Outcome.INVALID:
        raise HTTPException(400, "Invalid selection or move")
    return {
        "outcome": result.outcome.value,
        "check": result.check,
        "captured": result.captured.name if result.captured is not None else None,
        "state": _match_to_dict(match),
    }


@app.post("/api/new-game")
async def create_game() -> dict[str, Any]:
    """新規対局を開始する。対局IDと初期局面情報を返す。"""
    game_id = str(uuid.uuid4())[:8]  # 短いIDを生成
    match = new_game()
    _games[game_id] = match
    logger.info("new game %s", game_id)
    return {"game_id": game_id, "state": _match_to_dict(match)}


@app.post("/api/select")
async def select_square(req: SquareRequest) -> dict[str, Any]:
    match = _get_match(req.game_id)
    return _respond(match, match.select_square((req.file, req.rank)))


@app.post("/api/select-hand")
async def select_hand(req: HandRequest) -> dict[str, Any]:
    match = _get_match(req.game_id)
    return _respond(match, match.select_hand_piece(Player(req.player), req.index))


@app.post("/api/move")
async def confirm_move(req: MoveRequest) -> dict[str, Any]:
    """選択中の駒を動かす。決着した場合は state.winner に勝者が入る。"""
    match = _get_match(req.game_id)
    result = match.confirm_move((req.file, req.rank), promote=req.promote)
    if result.winner is not None:
        logger.info("game %s over, winner %s", req.game_id, result.winner.name)
    return _respond(match, result)


@app.post("/api/drop")
async def confirm_drop(req: SquareRequest) -> dict[str, Any]:
    match = _get_match(req.game_id)
    result = match.confirm_drop((req.file, req.rank))
    if result.winner is not None:
        logger.info("game %s over, winner %s", req.game_id, result.winner.name)
    return _respond(match, result)


@app.get("/api/state/{game_id}")
async def get_state(game_id: str) -> dict[str, Any]:
    """現在の局面情報を取得する（ページ再読み込み時などに使用）。"""
    return _match_to_dict(_get_match(game_id))


def main(config: AppConfig = DEFAULT_CONFIG) -> None:
    """Run the web server.

    `uv run shogi-web` または `python -m shogi_shop.web.app` で起動する。
    """
    import uvicorn

    logging.basicConfig(level=config.log_level)
    uvicorn.run(app, host=config.host, port=config.port)


if __name__ == "__main__":
    main()
