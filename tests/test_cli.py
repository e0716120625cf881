"""Tests for the terminal front end."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from shogi_shop.cli import main, offers_promotion, run_command
from shogi_shop.game.match import Match, Outcome, new_game
from shogi_shop.game.types import PieceType, Player


class TestRunCommand:
    def test_move(self) -> None:
        match = new_game()
        result = run_command(match, "move 0 2 0 3")
        assert result.outcome == Outcome.ACCEPTED
        assert match.side_to_move == Player.WHITE

    def test_move_with_promotion_flag(self) -> None:
        match = new_game()
        assert run_command(match, "move 6 2 6 3").accepted
        assert run_command(match, "move 0 6 0 5").accepted
        # 角が敵陣の歩を取って成る
        assert run_command(match, "move 7 1 2 6 +").accepted
        piece = match.board.piece_at((2, 6))
        assert piece is not None
        assert piece.piece_type == PieceType.PRO_BISHOP
        assert [p.piece_type for p in match.hand(Player.BLACK)] == [PieceType.PAWN]

    def test_opponent_piece_rejected(self) -> None:
        match = new_game()
        assert run_command(match, "move 0 6 0 5").outcome == Outcome.INVALID

    def test_drop_from_empty_hand(self) -> None:
        match = new_game()
        assert run_command(match, "drop 0 4 4").outcome == Outcome.INVALID

    @pytest.mark.parametrize("line", ["", "move 0 2", "move a b c d", "fly 1 2", "drop 0 4"])
    def test_malformed(self, line: str) -> None:
        with pytest.raises(ValueError):
            run_command(new_game(), line)


class TestOffersPromotion:
    def _bishop_ready(self) -> Match:
        match = new_game()
        run_command(match, "move 6 2 6 3")
        run_command(match, "move 0 6 0 5")
        return match

    def test_move_into_zone(self) -> None:
        assert offers_promotion(self._bishop_ready(), "move 7 1 2 6")

    def test_move_outside_zone(self) -> None:
        assert not offers_promotion(self._bishop_ready(), "move 7 1 3 5")

    @pytest.mark.parametrize(
        "line",
        ["move 7 1 2 6 +", "move 7 1 1 7", "move 9 1 2 6", "move a 1 2 6", "drop 0 4 4", "quit"],
    )
    def test_not_offered(self, line: str) -> None:
        assert not offers_promotion(self._bishop_ready(), line)

    def test_opponent_piece(self) -> None:
        match = self._bishop_ready()
        assert not offers_promotion(match, "move 1 7 6 2")


def _feed(monkeypatch: pytest.MonkeyPatch, lines: list[str]) -> None:
    it: Iterator[str] = iter(lines)

    def fake_input(prompt: str = "") -> str:
        try:
            return next(it)
        except StopIteration:
            raise EOFError from None

    monkeypatch.setattr("builtins.input", fake_input)


class TestMain:
    def test_quit(self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
        _feed(monkeypatch, ["quit"])
        main()
        assert "Game aborted." in capsys.readouterr().out

    def test_invalid_then_eof(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _feed(monkeypatch, ["move 0 6 0 5", "nonsense"])
        main()
        out = capsys.readouterr().out
        assert "Invalid move." in out
        assert "Unknown command: nonsense" in out
        assert "Game aborted." in out

    def test_king_capture_ends_game(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        # 先手の角道を開け、後手が王手を放置したところで玉を取る
        _feed(
            monkeypatch,
            [
                "move 6 2 6 3",  # 先手 角道を開ける
                "move 2 6 2 5",  # 後手
                "move 7 1 2 6",  # 先手 角で王手
                "n",  # 成らない
                "move 0 6 0 5",  # 後手 王手放置
                "move 2 6 4 8",  # 先手 角で玉を取る
                "n",
            ],
        )
        main()
        out = capsys.readouterr().out
        assert "先手 (BLACK) wins!" in out

    def test_promotion_prompt(
        self, monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]
    ) -> None:
        _feed(monkeypatch, ["move 6 2 6 3", "move 0 6 0 5", "move 7 1 2 6", "y", "quit"])
        main()
        out = capsys.readouterr().out
        assert "馬" in out
        assert "王手!" in out
