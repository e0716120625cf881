"""Match state manager.

対局の進行管理。盤・両者の持ち駒・手番・選択中の駒を持ち、
画面側から届く操作（駒を選ぶ → 移動先を確定する）を処理する。

操作は2段階:
  1. select_square() / select_hand_piece() で動かす駒を選ぶ
  2. confirm_move() / confirm_drop() で移動先を確定する
不正な操作は例外ではなく Outcome.INVALID の結果として返す。
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum

from shogi_shop.game.board import Board, Piece, in_bounds
from shogi_shop.game.check import is_attacked, is_checkmate
from shogi_shop.game.drops import can_drop, drop_targets
from shogi_shop.game.moves import can_move, can_promote, legal_destinations
from shogi_shop.game.state import MatchSnapshot, Phase
from shogi_shop.game.types import PieceType, Player, Square

logger = logging.getLogger(__name__)


class Outcome(Enum):
    ACCEPTED = "accepted"
    INVALID = "invalid"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class MoveResult:
    """Result of an intent.

    outcome: 操作が受け付けられたか
    phase:   操作後のフェーズ
    winner:  決着した場合の勝者
    check:   手番側の玉に王手がかかっているか
    captured: 取った駒の種類（成り駒なら元の駒種に戻した後）
    """

    outcome: Outcome
    phase: Phase
    winner: Player | None = None
    check: bool = False
    captured: PieceType | None = None

    @property
    def accepted(self) -> bool:
        return self.outcome == Outcome.ACCEPTED


@dataclass(frozen=True)
class BoardSelection:
    """盤上の駒を選択中。"""

    square: Square


@dataclass(frozen=True)
class HandSelection:
    """持ち駒を選択中。piece は選択時点で持ち駒から取り除かれている。"""

    player: Player
    index: int
    piece: Piece


@dataclass
class Match:
    """A single game between BLACK and WHITE.

    盤と持ち駒はこのクラスだけが変更する。判定関数には盤を一時的に渡すだけ。
    """

    board: Board = field(default_factory=Board)
    hands: tuple[list[Piece], list[Piece]] = field(default_factory=lambda: ([], []))
    side_to_move: Player = Player.BLACK
    phase: Phase = Phase.AWAITING_SELECTION
    selection: BoardSelection | HandSelection | None = None
    winner: Player | None = None

    def hand(self, player: Player) -> list[Piece]:
        return self.hands[player.value]

    # ---- 選択 -----------------------------------------------------------

    def select_square(self, square: Square) -> MoveResult:
        """Select the side to move's piece on square."""
        if self.phase == Phase.GAME_OVER:
            return self._game_over()
        self._cancel_selection()

        piece = self.board.piece_at(square) if in_bounds(square) else None
        if piece is None or piece.owner != self.side_to_move:
            return self._invalid()

        self.selection = BoardSelection(square)
        self.phase = Phase.PIECE_SELECTED
        logger.debug("%s selected %s at %s", self.side_to_move.name, piece.piece_type.name, square)
        return MoveResult(Outcome.ACCEPTED, self.phase)

    def select_hand_piece(self, player: Player, index: int) -> MoveResult:
        """Take the index-th piece out of player's hand for dropping."""
        if self.phase == Phase.GAME_OVER:
            return self._game_over()
        self._cancel_selection()

        hand = self.hand(player)
        if player != self.side_to_move or not 0 <= index < len(hand):
            return self._invalid()

        # 選んだ時点で持ち駒から外す（打てなければ _cancel_selection で戻す）
        piece = hand.pop(index)
        self.selection = HandSelection(player, index, piece)
        self.phase = Phase.DROP_SELECTED
        logger.debug("%s picked %s from hand", player.name, piece.piece_type.name)
        return MoveResult(Outcome.ACCEPTED, self.phase)

    # ---- 確定 -----------------------------------------------------------

    def confirm_move(self, target: Square, promote: bool = False) -> MoveResult:
        """Move the selected piece to target.

        promote は成れる場合にだけ適用され、成れない場合は無視される。
        """
        if self.phase == Phase.GAME_OVER:
            return self._game_over()
        selection = self.selection
        if self.phase != Phase.PIECE_SELECTED or not isinstance(selection, BoardSelection):
            self._cancel_selection()
            return self._invalid()

        origin = selection.square
        piece = self.board.piece_at(origin)
        assert piece is not None
        if not can_move(piece, origin, target, self.board):
            self._cancel_selection()
            return self._invalid()

        mover = self.side_to_move
        captured = self.board.piece_at(target)
        self.selection = None

        # 玉を取ったら詰み判定を待たずにその場で勝ち
        if captured is not None and captured.piece_type == PieceType.KING:
            self.board.set_piece(target, piece)
            self.board.set_piece(origin, None)
            self.winner = mover
            self.phase = Phase.GAME_OVER
            logger.info("%s captured the king at %s", mover.name, target)
            return MoveResult(Outcome.ACCEPTED, self.phase, winner=mover)

        if promote and can_promote(piece.piece_type, origin[1], target[1], mover):
            piece.promote()

        self.board.set_piece(target, piece)
        self.board.set_piece(origin, None)

        captured_type = None
        if captured is not None:
            # 取った駒は自分のものにして、成りを戻して持ち駒へ
            captured.owner = mover
            captured.demote()
            self.hand(mover).append(captured)
            captured_type = captured.piece_type

        logger.debug("%s moved %s -> %s", mover.name, origin, target)
        return self._finish_turn(captured_type)

    def confirm_drop(self, target: Square) -> MoveResult:
        """Drop the selected hand piece on target."""
        if self.phase == Phase.GAME_OVER:
            return self._game_over()
        selection = self.selection
        if self.phase != Phase.DROP_SELECTED or not isinstance(selection, HandSelection):
            self._cancel_selection()
            return self._invalid()

        if not can_drop(selection.piece, target, self.board, self.side_to_move):
            self._cancel_selection()
            return self._invalid()

        self.board.set_piece(target, selection.piece)
        self.selection = None
        logger.debug(
            "%s dropped %s on %s",
            self.side_to_move.name,
            selection.piece.piece_type.name,
            target,
        )
        return self._finish_turn(None)

    # ---- 照会 -----------------------------------------------------------

    def legal_targets(self) -> list[Square]:
        """選択中の駒の移動先（または打てるマス）を返す。"""
        selection = self.selection
        if isinstance(selection, BoardSelection):
            return legal_destinations(self.board, selection.square)
        if isinstance(selection, HandSelection):
            return drop_targets(self.board, selection.piece, selection.player)
        return []

    def promotable_targets(self) -> list[Square]:
        """選択中の駒が成れる移動先。打ち駒選択中や未選択なら空。"""
        selection = self.selection
        if not isinstance(selection, BoardSelection):
            return []
        piece = self.board.piece_at(selection.square)
        assert piece is not None
        from_rank = selection.square[1]
        return [
            sq
            for sq in legal_destinations(self.board, selection.square)
            if can_promote(piece.piece_type, from_rank, sq[1], piece.owner)
        ]

    def snapshot(self) -> MatchSnapshot:
        selection = self.selection
        return MatchSnapshot(
            squares=tuple(p.copy() if p is not None else None for p in self.board.squares),
            hands=(
                tuple(p.piece_type for p in self.hands[0]),
                tuple(p.piece_type for p in self.hands[1]),
            ),
            side_to_move=self.side_to_move,
            phase=self.phase,
            winner=self.winner,
            selected=selection.square if isinstance(selection, BoardSelection) else None,
            selected_drop=(
                selection.piece.piece_type if isinstance(selection, HandSelection) else None
            ),
        )

    # ---- 内部処理 -------------------------------------------------------

    def _finish_turn(self, captured: PieceType | None) -> MoveResult:
        """手番を渡し、新しい手番側の玉について王手・詰みを判定する。"""
        mover = self.side_to_move
        self.side_to_move = mover.opponent

        king_square = self.board.find_king(self.side_to_move)
        check = king_square is not None and is_attacked(king_square, mover, self.board)
        if check:
            assert king_square is not None
            logger.info("%s is in check", self.side_to_move.name)
            if is_checkmate(king_square, self.board, self.side_to_move):
                self.winner = mover
                self.phase = Phase.GAME_OVER
                logger.info("checkmate, %s wins", mover.name)
                return MoveResult(
                    Outcome.ACCEPTED, self.phase, winner=mover, check=True, captured=captured
                )

        self.phase = Phase.AWAITING_SELECTION
        return MoveResult(Outcome.ACCEPTED, self.phase, check=check, captured=captured)

    def _cancel_selection(self) -> None:
        """選択を取り消す。持ち駒を選んでいた場合は元の位置に戻す。"""
        selection = self.selection
        if isinstance(selection, HandSelection):
            hand = self.hand(selection.player)
            hand.insert(min(selection.index, len(hand)), selection.piece)
        self.selection = None
        if self.phase != Phase.GAME_OVER:
            self.phase = Phase.AWAITING_SELECTION

    def _invalid(self) -> MoveResult:
        return MoveResult(Outcome.INVALID, self.phase)

    def _game_over(self) -> MoveResult:
        return MoveResult(Outcome.GAME_OVER, self.phase, winner=self.winner)


def new_game() -> Match:
    """平手の初期局面、先手番、持ち駒なしの対局を作る。"""
    return Match()
