"""Tests for board move legality."""

from __future__ import annotations

import pytest

from shogi_shop.game.board import Board, Piece
from shogi_shop.game.moves import can_move, can_promote, in_promotion_zone, legal_destinations
from shogi_shop.game.types import FILES, RANKS, PieceType, Player, Square

CENTER = (4, 4)


def _board_with(pieces: dict[Square, Piece]) -> Board:
    board = Board.empty()
    for square, piece in pieces.items():
        board.set_piece(square, piece)
    return board


def _moves_from_center(piece_type: PieceType, player: Player = Player.BLACK) -> set[Square]:
    piece = Piece(piece_type, player)
    board = _board_with({CENTER: piece})
    return set(legal_destinations(board, CENTER))


class TestCommonRules:
    def test_out_of_range_destination(self) -> None:
        piece = Piece(PieceType.PAWN, Player.BLACK)
        board = _board_with({(4, 8): piece})
        assert not can_move(piece, (4, 8), (4, 9), board)

    def test_friendly_fire_rejected(self) -> None:
        rook = Piece(PieceType.ROOK, Player.BLACK)
        board = _board_with({(0, 0): rook, (0, 3): Piece(PieceType.GOLD, Player.BLACK)})
        assert not can_move(rook, (0, 0), (0, 3), board)

    def test_capture_allowed(self) -> None:
        rook = Piece(PieceType.ROOK, Player.BLACK)
        board = _board_with({(0, 0): rook, (0, 3): Piece(PieceType.GOLD, Player.WHITE)})
        assert can_move(rook, (0, 0), (0, 3), board)

    def test_staying_put_rejected(self) -> None:
        for pt in PieceType:
            piece = Piece(pt, Player.BLACK)
            board = _board_with({CENTER: piece})
            assert not can_move(piece, CENTER, CENTER, board)


class TestPieceMovement:
    def test_king(self) -> None:
        assert _moves_from_center(PieceType.KING) == {
            (3, 3), (4, 3), (5, 3), (3, 4), (5, 4), (3, 5), (4, 5), (5, 5),
        }

    @pytest.mark.parametrize(
        "piece_type",
        [
            PieceType.GOLD,
            PieceType.PRO_SILVER,
            PieceType.PRO_KNIGHT,
            PieceType.PRO_LANCE,
            PieceType.PRO_PAWN,
        ],
    )
    def test_gold_movers_reach_every_adjacent_square(self, piece_type: PieceType) -> None:
        # 斜め後ろも除外しない
        assert _moves_from_center(piece_type) == _moves_from_center(PieceType.KING)

    def test_silver(self) -> None:
        assert _moves_from_center(PieceType.SILVER) == {
            (3, 5), (4, 5), (5, 5),  # 前3方向
            (3, 4), (5, 4),  # 真横
        }

    def test_silver_white(self) -> None:
        assert _moves_from_center(PieceType.SILVER, Player.WHITE) == {
            (3, 3), (4, 3), (5, 3), (3, 4), (5, 4),
        }

    def test_knight(self) -> None:
        assert _moves_from_center(PieceType.KNIGHT) == {(3, 6), (5, 6), (2, 5), (6, 5)}

    def test_knight_jumps_over_pieces(self) -> None:
        knight = Piece(PieceType.KNIGHT, Player.BLACK)
        pieces = {CENTER: knight}
        for sq in [(3, 4), (4, 5), (5, 4), (3, 5), (5, 5), (4, 6)]:
            pieces[sq] = Piece(PieceType.PAWN, Player.WHITE)
        board = _board_with(pieces)
        assert can_move(knight, CENTER, (5, 6), board)
        assert can_move(knight, CENTER, (6, 5), board)

    def test_knight_never_backward(self) -> None:
        moves = _moves_from_center(PieceType.KNIGHT)
        assert all(r > CENTER[1] for _, r in moves)

    def test_lance(self) -> None:
        assert _moves_from_center(PieceType.LANCE) == {(4, r) for r in range(5, RANKS)}

    def test_lance_blocked(self) -> None:
        lance = Piece(PieceType.LANCE, Player.BLACK)
        board = _board_with({(0, 0): lance, (0, 4): Piece(PieceType.PAWN, Player.WHITE)})
        assert can_move(lance, (0, 0), (0, 4), board)
        assert not can_move(lance, (0, 0), (0, 5), board)

    def test_pawn(self) -> None:
        assert _moves_from_center(PieceType.PAWN) == {(4, 5)}
        assert _moves_from_center(PieceType.PAWN, Player.WHITE) == {(4, 3)}

    def test_pawn_never_backward_or_sideways(self) -> None:
        pawn = Piece(PieceType.PAWN, Player.BLACK)
        board = _board_with({CENTER: pawn})
        for dest in [(4, 3), (3, 4), (5, 4), (3, 3), (5, 5), (4, 6)]:
            assert not can_move(pawn, CENTER, dest, board)

    def test_bishop(self) -> None:
        moves = _moves_from_center(PieceType.BISHOP)
        assert len(moves) == 16
        assert (0, 0) in moves
        assert (8, 0) in moves
        assert (4, 5) not in moves

    def test_bishop_blocked(self) -> None:
        bishop = Piece(PieceType.BISHOP, Player.BLACK)
        board = _board_with({(0, 0): bishop, (2, 2): Piece(PieceType.PAWN, Player.BLACK)})
        assert can_move(bishop, (0, 0), (1, 1), board)
        assert not can_move(bishop, (0, 0), (3, 3), board)

    def test_rook(self) -> None:
        moves = _moves_from_center(PieceType.ROOK)
        assert len(moves) == 16
        assert (4, 0) in moves
        assert (0, 4) in moves
        assert (5, 5) not in moves

    def test_rook_blocked(self) -> None:
        rook = Piece(PieceType.ROOK, Player.WHITE)
        board = _board_with({(8, 8): rook, (5, 8): Piece(PieceType.GOLD, Player.BLACK)})
        assert can_move(rook, (8, 8), (5, 8), board)
        assert not can_move(rook, (8, 8), (4, 8), board)

    def test_promoted_bishop(self) -> None:
        moves = _moves_from_center(PieceType.PRO_BISHOP)
        assert moves == _moves_from_center(PieceType.BISHOP) | {(4, 3), (4, 5), (3, 4), (5, 4)}
        assert (4, 6) not in moves

    def test_promoted_rook(self) -> None:
        moves = _moves_from_center(PieceType.PRO_ROOK)
        assert moves == _moves_from_center(PieceType.ROOK) | {(3, 3), (5, 3), (3, 5), (5, 5)}
        assert (6, 6) not in moves

    def test_promoted_rook_blocked_slide(self) -> None:
        dragon = Piece(PieceType.PRO_ROOK, Player.BLACK)
        board = _board_with({CENTER: dragon, (4, 5): Piece(PieceType.PAWN, Player.WHITE)})
        assert can_move(dragon, CENTER, (4, 5), board)
        assert not can_move(dragon, CENTER, (4, 6), board)


@pytest.mark.parametrize("piece_type", list(PieceType))
def test_side_symmetry(piece_type: PieceType) -> None:
    """先手の動きを段で反転すると後手の動きになる。"""
    black = Piece(piece_type, Player.BLACK)
    white = Piece(piece_type, Player.WHITE)
    origin = (2, 3)
    mirrored_origin = (2, RANKS - 1 - 3)
    black_board = _board_with({origin: black, (2, 6): Piece(PieceType.PAWN, Player.WHITE)})
    white_board = _board_with(
        {mirrored_origin: white, (2, RANKS - 1 - 6): Piece(PieceType.PAWN, Player.BLACK)}
    )
    for r in range(RANKS):
        for f in range(FILES):
            assert can_move(black, origin, (f, r), black_board) == can_move(
                white, mirrored_origin, (f, RANKS - 1 - r), white_board
            )


class TestPromotion:
    def test_promotion_zone(self) -> None:
        assert in_promotion_zone(Player.BLACK, 6)
        assert not in_promotion_zone(Player.BLACK, 5)
        assert in_promotion_zone(Player.WHITE, 2)
        assert not in_promotion_zone(Player.WHITE, 3)

    def test_entering_zone(self) -> None:
        assert can_promote(PieceType.PAWN, 5, 6, Player.BLACK)
        assert can_promote(PieceType.PAWN, 3, 2, Player.WHITE)

    def test_leaving_zone(self) -> None:
        assert can_promote(PieceType.BISHOP, 7, 3, Player.BLACK)

    def test_outside_zone(self) -> None:
        assert not can_promote(PieceType.PAWN, 2, 3, Player.BLACK)
        assert not can_promote(PieceType.ROOK, 6, 5, Player.WHITE)

    def test_already_promoted(self) -> None:
        assert not can_promote(PieceType.PRO_PAWN, 6, 7, Player.BLACK)

    def test_king_and_gold(self) -> None:
        assert not can_promote(PieceType.KING, 6, 7, Player.BLACK)
        assert not can_promote(PieceType.GOLD, 6, 7, Player.BLACK)


class TestInitialPosition:
    def test_black_pawn_single_step(self) -> None:
        board = Board()
        assert legal_destinations(board, (0, 2)) == [(0, 3)]

    def test_knight_sideways_jump(self) -> None:
        # 桂は (2, 1) の跳びも前方なら許される
        board = Board()
        assert legal_destinations(board, (1, 0)) == [(3, 1)]

    def test_empty_square_has_no_destinations(self) -> None:
        assert legal_destinations(Board(), (4, 4)) == []
