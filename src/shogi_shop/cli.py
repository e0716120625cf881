"""CLI entry point for shogi-shop — two players on one terminal.

コマンドラインで動く二人対局プログラム（先手・後手が交互に入力する）。

入力形式:
  move <筋> <段> <筋> <段> [+]   盤上の駒を動かす（+ を付けると成る。
                                  付けずに成れる手を入力すると成るか尋ねる）
  drop <持ち駒番号> <筋> <段>     持ち駒を打つ
  quit                            終了

起動方法: `uv run shogi-cli`
"""

from __future__ import annotations

import logging

from shogi_shop.config import DEFAULT_CONFIG, AppConfig
from shogi_shop.game.board import in_bounds
from shogi_shop.game.display import format_snapshot
from shogi_shop.game.match import Match, MoveResult, Outcome, new_game
from shogi_shop.game.moves import can_move, can_promote

logger = logging.getLogger(__name__)

_SIDE_NAMES = {0: "先手 (BLACK)", 1: "後手 (WHITE)"}

_USAGE = """\
  move <file> <rank> <file> <rank> [+]
  drop <hand index> <file> <rank>
  quit"""


def run_command(match: Match, line: str) -> MoveResult:
    """Parse one input line and apply it to match.

    1行の入力を選択・確定の2段階の操作に分解して Match に渡す。
    書式が不正なら ValueError を送出する。
    """
    parts = line.split()
    if not parts:
        msg = "Empty command"
        raise ValueError(msg)

    cmd, args = parts[0], parts[1:]
    if cmd == "move":
        promote = bool(args) and args[-1] == "+"
        if promote:
            args = args[:-1]
        if len(args) != 4:
            msg = "Usage: move <file> <rank> <file> <rank> [+]"
            raise ValueError(msg)
        ff, fr, tf, tr = (int(a) for a in args)
        result = match.select_square((ff, fr))
        if not result.accepted:
            return result
        return match.confirm_move((tf, tr), promote=promote)

    if cmd == "drop":
        if len(args) != 3:
            msg = "Usage: drop <hand index> <file> <rank>"
            raise ValueError(msg)
        index, tf, tr = (int(a) for a in args)
        result = match.select_hand_piece(match.side_to_move, index)
        if not result.accepted:
            return result
        return match.confirm_drop((tf, tr))

    msg = f"Unknown command: {cmd}"
    raise ValueError(msg)


def offers_promotion(match: Match, line: str) -> bool:
    """`+` の付いていない move が成れる手かどうか。"""
    parts = line.split()
    if len(parts) != 5 or parts[0] != "move":
        return False
    try:
        ff, fr, tf, tr = (int(a) for a in parts[1:])
    except ValueError:
        return False
    origin, target = (ff, fr), (tf, tr)
    if not (in_bounds(origin) and in_bounds(target)):
        return False
    piece = match.board.piece_at(origin)
    if piece is None or piece.owner != match.side_to_move:
        return False
    return can_move(piece, origin, target, match.board) and can_promote(
        piece.piece_type, fr, tr, piece.owner
    )


def main(config: AppConfig = DEFAULT_CONFIG) -> None:
    """Run a hot-seat game until checkmate, king capture or quit.

    ゲームの流れ:
    1. 盤面と手番を表示
    2. 手番側のコマンドを読む
    3. 不正なら理由を表示して再入力、正しければ局面を進める
    """
    logging.basicConfig(level=config.log_level)

    print("=== Shogi Shop ===")
    print(_USAGE)
    print()

    match = new_game()

    while not match.snapshot().is_over:
        snapshot = match.snapshot()
        print(format_snapshot(snapshot))
        print(f"手番: {_SIDE_NAMES[snapshot.side_to_move.value]}")

        try:
            line = input("> ").strip()
            if offers_promotion(match, line):
                answer = input("成りますか? [y/N] ").strip().lower()
                if answer == "y":
                    line += " +"
        except (EOFError, KeyboardInterrupt):
            print("\nGame aborted.")
            return
        if line == "quit":
            print("Game aborted.")
            return

        try:
            result = run_command(match, line)
        except ValueError as e:
            print(e)
            continue
        logger.debug("command %r -> %s", line, result.outcome.value)

        if result.outcome == Outcome.INVALID:
            print("Invalid move.")
        elif result.check and result.winner is None:
            print("王手!")
        print()

    # 終局: 結果を表示
    snapshot = match.snapshot()
    print(format_snapshot(snapshot))
    assert snapshot.winner is not None
    print(f"{_SIDE_NAMES[snapshot.winner.value]} wins!")


if __name__ == "__main__":
    main()
