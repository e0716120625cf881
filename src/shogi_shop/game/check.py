"""Check and checkmate detection.

王手・詰みの判定。

詰み判定は総当たり:
1. 玉を隣の8マスへ逃がしてみる
2. 守り側の全ての駒を、動ける全てのマスへ動かしてみる（合駒・王手駒の取り）
どれか1つでも王手が解消すれば詰みではない。持ち駒を打つ受けは試さない。

試しに動かした盤面は Board.trial() が必ず元に戻す。
"""

from __future__ import annotations

from shogi_shop.game.board import Board, in_bounds
from shogi_shop.game.moves import can_move
from shogi_shop.game.types import FILES, RANKS, Player, Square

_KING_STEPS = [
    (-1, -1), (0, -1), (1, -1),
    (-1, 0), (1, 0),
    (-1, 1), (0, 1), (1, 1),
]


def is_attacked(square: Square, by_player: Player, board: Board) -> bool:
    """Return True if any piece of by_player can move to square."""
    for origin, piece in board.iter_pieces(by_player):
        if can_move(piece, origin, square, board):
            return True
    return False


def is_in_check(board: Board, player: Player) -> bool:
    """Check if player's king is under attack. 玉がなければ False。"""
    king_square = board.find_king(player)
    if king_square is None:
        return False
    return is_attacked(king_square, player.opponent, board)


def is_checkmate(king_square: Square, board: Board, player: Player) -> bool:
    """Return True if player's king on king_square has no escape.

    player は王手をかけられている側（守り側）。
    王手がかかっていることは呼び出し側が確認済みとする。
    """
    attacker = player.opponent

    # 1. 玉の逃げ
    kf, kr = king_square
    for df, dr in _KING_STEPS:
        dest = (kf + df, kr + dr)
        if not in_bounds(dest):
            continue
        occupant = board.piece_at(dest)
        if occupant is not None and occupant.owner == player:
            continue
        with board.trial(king_square, dest):
            if not is_attacked(dest, attacker, board):
                return False

    # 2. 合駒・王手駒の取り（trial 中に盤が変わるので先に駒を列挙しておく）
    defenders = list(board.iter_pieces(player))
    for origin, piece in defenders:
        for r in range(RANKS):
            for f in range(FILES):
                dest = (f, r)
                if not can_move(piece, origin, dest, board):
                    continue
                king_at = dest if origin == king_square else king_square
                with board.trial(origin, dest):
                    if not is_attacked(king_at, attacker, board):
                        return False

    return True
