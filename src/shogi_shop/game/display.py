"""Terminal display for a match snapshot."""

from __future__ import annotations

from shogi_shop.game.state import MatchSnapshot
from shogi_shop.game.types import FILES, RANKS, PieceType, Player

# Display characters for pieces
PIECE_CHARS: dict[PieceType, str] = {
    PieceType.KING: "玉",
    PieceType.GOLD: "金",
    PieceType.SILVER: "銀",
    PieceType.KNIGHT: "桂",
    PieceType.LANCE: "香",
    PieceType.BISHOP: "角",
    PieceType.ROOK: "飛",
    PieceType.PAWN: "歩",
    PieceType.PRO_SILVER: "全",
    PieceType.PRO_KNIGHT: "圭",
    PieceType.PRO_LANCE: "杏",
    PieceType.PRO_BISHOP: "馬",
    PieceType.PRO_ROOK: "龍",
    PieceType.PRO_PAWN: "と",
}


def format_snapshot(snapshot: MatchSnapshot) -> str:
    """Format the board and both hands for terminal display.

    後手（WHITE）を上、先手（BLACK）を下に表示する。段8が最上段。
    後手の駒には "v" を付ける。選択中のマスは右側の罫線を "*" にして示す。
    """
    lines: list[str] = []

    lines.append(f"後手持駒: {format_hand(snapshot, Player.WHITE)}")
    lines.append("  " + "  ".join(str(f) for f in range(FILES)))
    lines.append("+--" * FILES + "+")

    for r in reversed(range(RANKS)):
        row_str = "|"
        for f in range(FILES):
            piece = snapshot.piece_at((f, r))
            border = "*" if snapshot.selected == (f, r) else "|"
            if piece is None:
                row_str += f"  {border}"
            else:
                char = PIECE_CHARS[piece.piece_type]
                prefix = "v" if piece.owner == Player.WHITE else " "
                row_str += f"{prefix}{char}{border}"
        lines.append(f"{row_str} {r}")
        lines.append("+--" * FILES + "+")

    lines.append(f"先手持駒: {format_hand(snapshot, Player.BLACK)}")
    return "\n".join(lines)


def format_hand(snapshot: MatchSnapshot, player: Player) -> str:
    """持ち駒を取った順に番号付きで並べる（打つときの番号に対応）。"""
    hand = snapshot.hands[player.value]
    if not hand:
        return "なし"
    return " ".join(f"{i}:{PIECE_CHARS[pt]}" for i, pt in enumerate(hand))
