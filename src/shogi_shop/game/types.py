"""Types and constants for the Shogi Shop rules engine (9x9).

9×9盤の基本型・定数定義。
駒は14種類（未成8種 + 成り駒6種）。座標は (筋, 段) = (file, rank) で扱う。
"""

from __future__ import annotations

from enum import IntEnum, unique

FILES = 9
RANKS = 9
NUM_SQUARES = FILES * RANKS  # 81マス

# 盤上のマス目 (file, rank)。どちらも 0〜8。
Square = tuple[int, int]


@unique
class Player(IntEnum):
    """Player identifiers.

    先手（BLACK）は段0〜2に並び、段の大きい方へ進む（rank 0 → rank 8）。
    後手（WHITE）は段6〜8に並び、段の小さい方へ進む（rank 8 → rank 0）。
    """

    BLACK = 0  # 先手
    WHITE = 1  # 後手

    @property
    def opponent(self) -> Player:
        """相手プレイヤーを返す。"""
        return Player(1 - self.value)

    @property
    def forward(self) -> int:
        """前進1マスでの段の増分（先手 +1、後手 -1）。"""
        return 1 if self == Player.BLACK else -1


@unique
class PieceType(IntEnum):
    """Piece types（14種類）.

    値は Web API の "type" としてそのまま返す。
    0〜7: 未成駒（王・金を含む）、8〜13: 成り駒
    """

    KING = 0         # 玉/王
    GOLD = 1         # 金
    SILVER = 2       # 銀
    KNIGHT = 3       # 桂
    LANCE = 4        # 香
    BISHOP = 5       # 角
    ROOK = 6         # 飛
    PAWN = 7         # 歩
    PRO_SILVER = 8   # 成銀
    PRO_KNIGHT = 9   # 成桂
    PRO_LANCE = 10   # 成香
    PRO_BISHOP = 11  # 馬（成り角）
    PRO_ROOK = 12    # 龍（成り飛）
    PRO_PAWN = 13    # と（成り歩）


# 成り変換テーブル: 未成駒 → 成り駒（王・金は成らない）
PROMOTION_MAP: dict[PieceType, PieceType] = {
    PieceType.SILVER: PieceType.PRO_SILVER,
    PieceType.KNIGHT: PieceType.PRO_KNIGHT,
    PieceType.LANCE: PieceType.PRO_LANCE,
    PieceType.BISHOP: PieceType.PRO_BISHOP,
    PieceType.ROOK: PieceType.PRO_ROOK,
    PieceType.PAWN: PieceType.PRO_PAWN,
}

# 逆変換: 成り駒 → 元の駒種（取られた駒を持ち駒に戻す際に使用）
UNPROMOTION_MAP: dict[PieceType, PieceType] = {v: k for k, v in PROMOTION_MAP.items()}

# 持ち駒として使える駒種（未成の非玉駒、7種）
HAND_PIECE_TYPES = [
    PieceType.GOLD, PieceType.SILVER, PieceType.KNIGHT, PieceType.LANCE,
    PieceType.BISHOP, PieceType.ROOK, PieceType.PAWN,
]

# 金と同じ扱いで動く駒（成銀・成桂・成香・と）
GOLD_MOVERS = frozenset({
    PieceType.GOLD,
    PieceType.PRO_SILVER,
    PieceType.PRO_KNIGHT,
    PieceType.PRO_LANCE,
    PieceType.PRO_PAWN,
})


def promote(piece_type: PieceType) -> PieceType:
    """成った後の駒種を返す。成れない駒はそのまま。"""
    return PROMOTION_MAP.get(piece_type, piece_type)


def demote(piece_type: PieceType) -> PieceType:
    """成る前の駒種を返す。成り駒でなければそのまま。"""
    return UNPROMOTION_MAP.get(piece_type, piece_type)


def is_promoted(piece_type: PieceType) -> bool:
    return piece_type >= PieceType.PRO_SILVER
