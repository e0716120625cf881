"""Drop legality (持ち駒を打つ手の判定)."""

from __future__ import annotations

from shogi_shop.game.board import Board, Piece, in_bounds
from shogi_shop.game.types import FILES, RANKS, PieceType, Player, Square

_PAWN_KINDS = (PieceType.PAWN, PieceType.PRO_PAWN)


def terminal_rank(player: Player) -> int:
    """プレイヤーにとっての最奥の段（先手は段8、後手は段0）。"""
    return RANKS - 1 if player == Player.BLACK else 0


def can_drop(piece: Piece, square: Square, board: Board, player: Player) -> bool:
    """Return True if player may drop piece on square.

    制限は次の2つだけ:
    - 二歩: 同じ筋に自分の歩（と金を含む）があれば歩は打てない
    - 最奥の段には歩を打てない
    打ち歩詰めや香・桂の行き所のない駒の判定は行わない。
    """
    if not in_bounds(square) or board.piece_at(square) is not None:
        return False

    if piece.piece_type in _PAWN_KINDS:
        file, rank = square
        for r in range(RANKS):
            p = board.piece_at((file, r))
            if p is not None and p.owner == player and p.piece_type in _PAWN_KINDS:
                return False
        if rank == terminal_rank(player):
            return False

    return True


def drop_targets(board: Board, piece: Piece, player: Player) -> list[Square]:
    """piece を打てるマスを全て返す。"""
    return [
        (f, r)
        for r in range(RANKS)
        for f in range(FILES)
        if can_drop(piece, (f, r), board, player)
    ]
