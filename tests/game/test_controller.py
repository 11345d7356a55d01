"""Tests for GameController, the session orchestrator."""

from typing import Any

import pytest

from anarchess.core.enums import Color, GameStatus, MoveResult, PieceType, RuleMode
from anarchess.core.notation import PositionLoadError, placement_from_position
from anarchess.core.piece import Piece
from anarchess.core.rules import GameEnd
from anarchess.core.types import Square, parse_square
from anarchess.game.controller import GameController
from anarchess.game.interfaces import GamePhase
from anarchess.game.settings import GameSettings


def _make_controller(placement: str | None = None, **overrides: Any) -> GameController:
    """Helper: started session with optional custom placement."""
    ctrl = GameController(GameSettings(**overrides))
    ctrl.start_game(placement)
    return ctrl


def _at(ctrl: GameController, name: str) -> Piece:
    piece = ctrl.position.piece_at(parse_square(name))
    assert piece is not None, name
    return piece


def _play(ctrl: GameController, src: str, dst: str) -> MoveResult:
    return ctrl.submit_move(_at(ctrl, src), parse_square(dst))


class TestLifecycle:
    def test_not_started_by_default(self) -> None:
        ctrl = GameController()
        assert ctrl.phase == GamePhase.NOT_STARTED
        assert len(ctrl.position.board) == 0

    def test_start_game(self) -> None:
        ctrl = _make_controller()
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.side_to_move == Color.WHITE
        assert len(ctrl.position.board) == 32
        assert ctrl.score(Color.WHITE) == ctrl.score(Color.BLACK) == 0

    def test_phase_event(self) -> None:
        ctrl = GameController()
        phases: list[GamePhase] = []
        ctrl.events.on_phase_changed.append(phases.append)
        ctrl.start_game()
        assert phases == [GamePhase.AWAITING_MOVE]

    def test_bad_placement_raises_before_any_change(self) -> None:
        ctrl = GameController()
        with pytest.raises(PositionLoadError):
            ctrl.start_game("8/8/8")
        assert ctrl.phase == GamePhase.NOT_STARTED

    def test_custom_starting_placement_setting(self) -> None:
        ctrl = GameController(GameSettings(starting_placement="4k3/8/8/8/8/8/8/4K3"))
        ctrl.start_game()
        assert len(ctrl.position.board) == 2

    def test_reset_restores_start(self) -> None:
        ctrl = _make_controller()
        _play(ctrl, "e2", "e4")
        ctrl.reset()
        assert ctrl.side_to_move == Color.WHITE
        assert placement_from_position(ctrl.position) == (
            "rnbqkbnr/pppppppp/8/8/8/8/PPPPPPPP/RNBQKBNR"
        )

    def test_end_game_clears_board(self) -> None:
        ctrl = _make_controller()
        king = _at(ctrl, "e1")
        ctrl.end_game()
        assert ctrl.phase == GamePhase.NOT_STARTED
        assert len(ctrl.position.board) == 0
        assert not king.alive


class TestSubmitMove:
    def test_legal_move_accepted(self) -> None:
        ctrl = _make_controller()
        assert _play(ctrl, "e2", "e4") == MoveResult.MOVED
        assert ctrl.side_to_move == Color.BLACK

    def test_move_event(self) -> None:
        ctrl = _make_controller()
        seen: list[tuple[Piece, Square, MoveResult]] = []
        ctrl.events.on_move.append(lambda p, s, r: seen.append((p, s, r)))
        pawn = _at(ctrl, "e2")
        ctrl.submit_move(pawn, parse_square("e4"))
        assert seen == [(pawn, parse_square("e4"), MoveResult.MOVED)]

    def test_illegal_move_rejected(self) -> None:
        ctrl = _make_controller()
        assert _play(ctrl, "e2", "e5") == MoveResult.REJECTED
        assert ctrl.side_to_move == Color.WHITE

    def test_wrong_side_rejected(self) -> None:
        ctrl = _make_controller()
        assert _play(ctrl, "e7", "e5") == MoveResult.REJECTED

    def test_before_start_rejected(self) -> None:
        ctrl = GameController()
        pawn = Piece(Color.WHITE, PieceType.PAWN, Square(4, 1))
        assert ctrl.submit_move(pawn, Square(4, 3)) == MoveResult.REJECTED

    def test_stale_legal_set_rejected(self) -> None:
        ctrl = _make_controller(rule_mode=RuleMode.ANARCHY)
        pawn = _at(ctrl, "e2")
        assert parse_square("e4") in ctrl.legal_moves(pawn)
        ctrl.place_piece(PieceType.KNIGHT, Color.BLACK, parse_square("e3"))
        ctrl.set_rule_mode(RuleMode.STANDARD)
        assert ctrl.submit_move(pawn, parse_square("e4")) == MoveResult.REJECTED


class TestScore:
    def test_capture_scores_for_capturer(self) -> None:
        ctrl = _make_controller("4k3/8/8/3p4/4P3/8/8/4K3")
        assert _play(ctrl, "e4", "d5") == MoveResult.CAPTURED
        assert ctrl.score(Color.WHITE) == 1
        assert ctrl.score(Color.BLACK) == 0

    def test_queen_value(self) -> None:
        ctrl = _make_controller("4k3/8/8/3q4/8/8/8/3RK3")
        _play(ctrl, "d1", "d5")
        assert ctrl.score(Color.WHITE) == 9

    def test_scoring_disabled(self) -> None:
        ctrl = _make_controller("4k3/8/8/3p4/4P3/8/8/4K3", track_score=False)
        _play(ctrl, "e4", "d5")
        assert ctrl.score(Color.WHITE) == 0

    def test_own_capture_credits_opponent(self) -> None:
        ctrl = _make_controller(rule_mode=RuleMode.ANARCHY)
        _play(ctrl, "d1", "d2")
        assert ctrl.score(Color.BLACK) == 1
        assert ctrl.score(Color.WHITE) == 0


class TestCheckAndGameOver:
    def test_check_event(self) -> None:
        ctrl = _make_controller("4k3/8/8/8/8/8/8/R3K3")
        checks: list[tuple[Color, Square]] = []
        ctrl.events.on_check.append(lambda c, s: checks.append((c, s)))
        _play(ctrl, "a1", "a8")
        assert checks == [(Color.BLACK, parse_square("e8"))]
        assert ctrl.is_in_check()
        assert ctrl.phase == GamePhase.AWAITING_MOVE

    def test_fools_mate(self) -> None:
        ctrl = _make_controller()
        endings: list[GameEnd] = []
        ctrl.events.on_game_over.append(endings.append)
        for src, dst in [("f2", "f3"), ("e7", "e5"), ("g2", "g4"), ("d8", "h4")]:
            assert _play(ctrl, src, dst) != MoveResult.REJECTED
        assert ctrl.is_game_over
        assert ctrl.last_game_end == GameEnd(GameStatus.CHECKMATE, loser=Color.WHITE)
        assert endings == [ctrl.last_game_end]
        assert _play(ctrl, "e2", "e4") == MoveResult.REJECTED

    def test_stalemate(self) -> None:
        ctrl = _make_controller("7k/8/5K2/8/8/8/8/6Q1")
        _play(ctrl, "g1", "g6")
        assert ctrl.phase == GamePhase.GAME_OVER
        assert ctrl.last_game_end.status == GameStatus.STALEMATE
        assert ctrl.last_game_end.winner is None


class TestPromotion:
    PLACEMENT = "4k3/P7/8/8/8/8/8/4K3"

    def test_pawn_reaching_last_rank_pauses(self) -> None:
        ctrl = _make_controller(self.PLACEMENT)
        pending: list[Piece] = []
        ctrl.events.on_promotion_pending.append(pending.append)
        pawn = _at(ctrl, "a7")
        assert _play(ctrl, "a7", "a8") == MoveResult.MOVED
        assert ctrl.phase == GamePhase.AWAITING_PROMOTION
        assert ctrl.pending_promotion is pawn
        assert pending == [pawn]
        assert ctrl.side_to_move == Color.WHITE
        assert _play(ctrl, "e1", "d1") == MoveResult.REJECTED

    def test_invalid_choice_keeps_waiting(self) -> None:
        ctrl = _make_controller(self.PLACEMENT)
        _play(ctrl, "a7", "a8")
        assert not ctrl.promote(PieceType.KING)
        assert ctrl.phase == GamePhase.AWAITING_PROMOTION

    def test_promote_to_queen_ends_turn(self) -> None:
        ctrl = _make_controller(self.PLACEMENT)
        _play(ctrl, "a7", "a8")
        assert ctrl.promote(PieceType.QUEEN)
        queen = _at(ctrl, "a8")
        assert queen.piece_type == PieceType.QUEEN
        assert ctrl.pending_promotion is None
        assert ctrl.phase == GamePhase.AWAITING_MOVE
        assert ctrl.side_to_move == Color.BLACK
        assert ctrl.is_in_check()

    def test_promote_without_pending(self) -> None:
        ctrl = _make_controller()
        assert not ctrl.promote(PieceType.QUEEN)


class TestAnarchy:
    def test_any_destination(self) -> None:
        ctrl = _make_controller(rule_mode=RuleMode.ANARCHY)
        assert _play(ctrl, "a1", "h6") == MoveResult.MOVED
        assert ctrl.side_to_move == Color.WHITE

    def test_explicit_end_turn(self) -> None:
        ctrl = _make_controller(rule_mode=RuleMode.ANARCHY)
        _play(ctrl, "e2", "e4")
        _play(ctrl, "d2", "d4")
        assert ctrl.end_turn() == GameEnd(GameStatus.ONGOING)
        assert ctrl.side_to_move == Color.BLACK

    def test_auto_end_turn_setting(self) -> None:
        ctrl = _make_controller(
            rule_mode=RuleMode.ANARCHY, auto_end_turn_in_anarchy=True
        )
        _play(ctrl, "e2", "e4")
        assert ctrl.side_to_move == Color.BLACK

    def test_king_capture_does_not_end_game(self) -> None:
        ctrl = _make_controller(rule_mode=RuleMode.ANARCHY)
        assert _play(ctrl, "d1", "e8") == MoveResult.CAPTURED
        ctrl.end_turn()
        assert not ctrl.is_game_over
        assert ctrl.score(Color.WHITE) == 0

    def test_place_and_remove(self) -> None:
        ctrl = _make_controller(rule_mode=RuleMode.ANARCHY)
        piece = ctrl.place_piece(PieceType.QUEEN, Color.WHITE, parse_square("e7"))
        assert piece is not None
        assert ctrl.score(Color.WHITE) == 1
        assert ctrl.remove_piece(piece)
        assert ctrl.score(Color.BLACK) == 9
        assert ctrl.position.piece_at(parse_square("e7")) is None

    def test_place_and_remove_rejected_in_standard(self) -> None:
        ctrl = _make_controller()
        e4 = parse_square("e4")
        assert ctrl.place_piece(PieceType.QUEEN, Color.WHITE, e4) is None
        assert not ctrl.remove_piece(_at(ctrl, "e2"))
        assert len(ctrl.position.board) == 32


class TestRuleMode:
    def test_toggle(self) -> None:
        ctrl = _make_controller()
        modes: list[RuleMode] = []
        ctrl.events.on_mode_changed.append(modes.append)
        assert ctrl.toggle_rule_mode() == RuleMode.ANARCHY
        assert ctrl.toggle_rule_mode() == RuleMode.STANDARD
        assert modes == [RuleMode.ANARCHY, RuleMode.STANDARD]

    def test_same_mode_is_silent(self) -> None:
        ctrl = _make_controller()
        modes: list[RuleMode] = []
        ctrl.events.on_mode_changed.append(modes.append)
        ctrl.set_rule_mode(RuleMode.STANDARD)
        assert modes == []

    def test_reset_keeps_mode(self) -> None:
        ctrl = _make_controller(rule_mode=RuleMode.ANARCHY)
        ctrl.reset()
        assert ctrl.rule_mode == RuleMode.ANARCHY
