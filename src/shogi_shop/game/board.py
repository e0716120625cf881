"""Board representation for the Shogi Shop engine (9x9).

9×9盤の盤面データ構造。

詰み探索では「仮に動かして王手を確認し、元に戻す」操作を大量に行うため、
盤面はミュータブルな81要素のリストとして持ち、trial() で一時的な変更と
確実な巻き戻しを行う。
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field

from shogi_shop.game.types import (
    FILES,
    NUM_SQUARES,
    RANKS,
    PieceType,
    Player,
    Square,
    demote,
    is_promoted,
    promote,
)


@dataclass
class Piece:
    """A piece on the board or in a hand.

    盤上または持ち駒の駒。種類と所有者を持つ。
    成り・戻し・取られた時の所有者変更で中身が変わるためミュータブル。
    """

    piece_type: PieceType
    owner: Player

    @property
    def is_promoted(self) -> bool:
        return is_promoted(self.piece_type)

    def promote(self) -> None:
        self.piece_type = promote(self.piece_type)

    def demote(self) -> None:
        self.piece_type = demote(self.piece_type)

    def copy(self) -> Piece:
        return Piece(self.piece_type, self.owner)


def in_bounds(square: Square) -> bool:
    """マスが盤内（0〜8）にあれば True。"""
    file, rank = square
    return 0 <= file < FILES and 0 <= rank < RANKS


def _index(square: Square) -> int:
    file, rank = square
    return rank * FILES + file


def _sign(value: int) -> int:
    return (value > 0) - (value < 0)


@dataclass
class Board:
    """Mutable 9x9 board.

    squares: 81要素のリスト（段優先）。squares[rank * FILES + file] でアクセス。
    持ち駒は盤ではなく Match が管理する。
    """

    squares: list[Piece | None] = field(
        default_factory=lambda: Board._initial_squares()
    )

    @staticmethod
    def _initial_squares() -> list[Piece | None]:
        """Return the standard starting position (平手).

        先手は段0〜2、後手は段6〜8に並ぶ。
        飛角の筋は先後で入れ替わる（先手: 飛=筋1 角=筋7、後手: 角=筋1 飛=筋7）。
        """
        squares: list[Piece | None] = [None] * NUM_SQUARES
        back = [
            PieceType.LANCE, PieceType.KNIGHT, PieceType.SILVER,
            PieceType.GOLD, PieceType.KING, PieceType.GOLD,
            PieceType.SILVER, PieceType.KNIGHT, PieceType.LANCE,
        ]

        # 先手の後段（段0）: 香桂銀金王金銀桂香
        for f, pt in enumerate(back):
            squares[_index((f, 0))] = Piece(pt, Player.BLACK)
        squares[_index((1, 1))] = Piece(PieceType.ROOK, Player.BLACK)
        squares[_index((7, 1))] = Piece(PieceType.BISHOP, Player.BLACK)
        for f in range(FILES):
            squares[_index((f, 2))] = Piece(PieceType.PAWN, Player.BLACK)

        # 後手（段8〜6、先手と鏡像）
        for f, pt in enumerate(back):
            squares[_index((f, 8))] = Piece(pt, Player.WHITE)
        squares[_index((1, 7))] = Piece(PieceType.BISHOP, Player.WHITE)
        squares[_index((7, 7))] = Piece(PieceType.ROOK, Player.WHITE)
        for f in range(FILES):
            squares[_index((f, 6))] = Piece(PieceType.PAWN, Player.WHITE)

        return squares

    @classmethod
    def empty(cls) -> Board:
        """駒が1枚もない盤を返す（局面の組み立てやテストに使う）。"""
        return cls(squares=[None] * NUM_SQUARES)

    def piece_at(self, square: Square) -> Piece | None:
        """マス (file, rank) の駒を返す。駒がなければ None。"""
        return self.squares[_index(square)]

    def set_piece(self, square: Square, piece: Piece | None) -> None:
        self.squares[_index(square)] = piece

    def clear_path(self, origin: Square, dest: Square) -> bool:
        """Return True if every square strictly between origin and dest is empty.

        飛び駒（香・角・飛・馬・龍）の利きが途中の駒で遮られていないかを調べる。
        方向は筋・段の差の符号で決まる。同じマスや直線上にないマスは False。
        """
        dx = dest[0] - origin[0]
        dy = dest[1] - origin[1]
        if dx == 0 and dy == 0:
            return False
        if dx != 0 and dy != 0 and abs(dx) != abs(dy):
            return False

        sx, sy = _sign(dx), _sign(dy)
        f, r = origin[0] + sx, origin[1] + sy
        while (f, r) != dest:
            if self.piece_at((f, r)) is not None:
                return False
            f, r = f + sx, r + sy
        return True

    def find_king(self, player: Player) -> Square | None:
        """プレイヤーの王将のマスを返す。王将がなければ None。"""
        for square, piece in self.iter_pieces(player):
            if piece.piece_type == PieceType.KING:
                return square
        return None

    def iter_pieces(self, player: Player | None = None) -> Iterator[tuple[Square, Piece]]:
        """盤上の駒を (マス, 駒) の組で列挙する。player を指定するとその駒のみ。"""
        for idx, piece in enumerate(self.squares):
            if piece is None:
                continue
            if player is not None and piece.owner != player:
                continue
            yield (idx % FILES, idx // FILES), piece

    def copy(self) -> Board:
        """駒オブジェクトごと複製した Board を返す。"""
        return Board(squares=[p.copy() if p is not None else None for p in self.squares])

    @contextmanager
    def trial(self, origin: Square, dest: Square) -> Iterator[None]:
        """Temporarily move the piece on origin to dest.

        origin の駒を dest に仮に動かす（dest の駒は一時的に取り除かれる）。
        with ブロックを抜けるとき、途中 return や例外を含めて必ず
        両マスを元の内容に戻す。
        """
        moved = self.piece_at(origin)
        captured = self.piece_at(dest)
        self.set_piece(origin, None)
        self.set_piece(dest, moved)
        try:
            yield
        finally:
            self.set_piece(dest, captured)
            self.set_piece(origin, moved)
