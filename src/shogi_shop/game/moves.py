"""Move legality for board moves.

盤上の駒の移動判定。各駒種の動きを (dx, dy) の差分で判定する。
dx は筋の差、dy は段の差。「前」は先手なら段が増える方向、後手なら減る方向。

ここでの判定は擬似合法手（pseudo-legal）であり、自玉が取られる手かどうかは
調べない。
"""

from __future__ import annotations

from shogi_shop.game.board import Board, Piece, in_bounds
from shogi_shop.game.types import (
    FILES,
    GOLD_MOVERS,
    PROMOTION_MAP,
    RANKS,
    PieceType,
    Player,
    Square,
    is_promoted,
)


def can_move(piece: Piece, origin: Square, dest: Square, board: Board) -> bool:
    """Return True if piece on origin may move to dest.

    盤外への移動と、自分の駒がいるマスへの移動（味方取り）は不可。
    """
    if not in_bounds(dest):
        return False
    target = board.piece_at(dest)
    if target is not None and target.owner == piece.owner:
        return False

    dx = dest[0] - origin[0]
    dy = dest[1] - origin[1]
    adx, ady = abs(dx), abs(dy)
    forward = dy * piece.owner.forward > 0
    pt = piece.piece_type

    if pt == PieceType.KING:
        return adx <= 1 and ady <= 1

    # 金の仲間: 隣接8マスすべて（斜め後ろも除外しない）
    if pt in GOLD_MOVERS:
        return adx <= 1 and ady <= 1

    # 銀: 前3方向と真横（真後ろ・斜め後ろは不可）
    if pt == PieceType.SILVER:
        if adx > 1 or ady > 1 or (adx == 0 and ady == 0):
            return False
        return forward or (adx == 1 and dy == 0)

    # 桂: 前方向へのジャンプ。途中の駒は関係ない
    if pt == PieceType.KNIGHT:
        return forward and ((adx == 1 and ady == 2) or (adx == 2 and ady == 1))

    if pt == PieceType.LANCE:
        return dx == 0 and forward and board.clear_path(origin, dest)

    if pt == PieceType.PAWN:
        return dx == 0 and dy == piece.owner.forward

    if pt == PieceType.BISHOP:
        return adx == ady and board.clear_path(origin, dest)

    if pt == PieceType.ROOK:
        return (dx == 0 or dy == 0) and board.clear_path(origin, dest)

    # 馬: 斜めの遠距離 + 縦横1マス
    if pt == PieceType.PRO_BISHOP:
        if adx == ady and board.clear_path(origin, dest):
            return True
        return adx + ady == 1

    # 龍: 縦横の遠距離 + 斜め1マス
    if pt == PieceType.PRO_ROOK:
        if (dx == 0 or dy == 0) and board.clear_path(origin, dest):
            return True
        return adx == 1 and ady == 1

    msg = f"Unknown piece type: {pt!r}"
    raise ValueError(msg)


def in_promotion_zone(player: Player, rank: int) -> bool:
    """Check if a rank is in the promotion zone (enemy's 3 ranks)."""
    if player == Player.BLACK:
        return rank >= RANKS - 3
    return rank <= 2


def can_promote(piece_type: PieceType, from_rank: int, to_rank: int, player: Player) -> bool:
    """Return True if the move may promote.

    成れるかどうか（資格）だけを返す。実際に成るかは呼び出し側が決める。
    移動元か移動先のどちらかが敵陣（相手側の3段）にあれば成れる。
    """
    if is_promoted(piece_type) or piece_type not in PROMOTION_MAP:
        return False
    return in_promotion_zone(player, from_rank) or in_promotion_zone(player, to_rank)


def legal_destinations(board: Board, origin: Square) -> list[Square]:
    """origin の駒が移動できるマスを全て返す。駒がなければ空リスト。"""
    piece = board.piece_at(origin)
    if piece is None:
        return []
    return [
        (f, r)
        for r in range(RANKS)
        for f in range(FILES)
        if can_move(piece, origin, (f, r), board)
    ]
