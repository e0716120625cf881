"""本将棋 (9x9) rules engine."""

from shogi_shop.game.board import Board, Piece
from shogi_shop.game.check import is_attacked, is_checkmate, is_in_check
from shogi_shop.game.drops import can_drop
from shogi_shop.game.match import Match, MoveResult, Outcome, new_game
from shogi_shop.game.moves import can_move, can_promote
from shogi_shop.game.state import MatchSnapshot, Phase
from shogi_shop.game.types import FILES, RANKS, PieceType, Player

__all__ = [
    "Board",
    "FILES",
    "Match",
    "MatchSnapshot",
    "MoveResult",
    "Outcome",
    "Phase",
    "Piece",
    "PieceType",
    "Player",
    "RANKS",
    "can_drop",
    "can_move",
    "can_promote",
    "is_attacked",
    "is_checkmate",
    "is_in_check",
    "new_game",
]
