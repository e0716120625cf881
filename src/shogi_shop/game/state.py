"""Read-only snapshot of a match.

対局状態のスナップショット（描画・API応答用）。
Match から作られ、以後 Match を変更しても影響を受けない。
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from shogi_shop.game.board import Piece
from shogi_shop.game.types import FILES, PieceType, Player, Square


class Phase(Enum):
    """Match phases.

    AWAITING_SELECTION → (駒を選ぶ) PIECE_SELECTED / (持ち駒を選ぶ) DROP_SELECTED
    → (確定) AWAITING_SELECTION または GAME_OVER
    """

    AWAITING_SELECTION = "awaiting_selection"
    PIECE_SELECTED = "piece_selected"
    DROP_SELECTED = "drop_selected"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class MatchSnapshot:
    """Immutable view of board, hands, side to move and phase.

    squares: 81要素のタプル（段優先）。squares[rank * FILES + file]。
    hands: hands[0]=先手の持ち駒、hands[1]=後手の持ち駒（取った順）。
    selected: 選択中の盤上のマス（駒選択中のみ）。
    selected_drop: 打とうとしている持ち駒の種類（打ち駒選択中のみ）。
    """

    squares: tuple[Piece | None, ...]
    hands: tuple[tuple[PieceType, ...], tuple[PieceType, ...]]
    side_to_move: Player
    phase: Phase
    winner: Player | None = None
    selected: Square | None = None
    selected_drop: PieceType | None = None

    def piece_at(self, square: Square) -> Piece | None:
        file, rank = square
        return self.squares[rank * FILES + file]

    @property
    def is_over(self) -> bool:
        return self.phase == Phase.GAME_OVER
