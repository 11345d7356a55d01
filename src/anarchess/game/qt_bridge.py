"""Qt bridge exposing a game session as signals and slots."""

from __future__ import annotations

import logging

from PyQt6.QtCore import QObject, pyqtSignal, pyqtSlot

from anarchess.core.enums import Color, MoveResult, PieceType, RuleMode
from anarchess.core.notation import PositionLoadError
from anarchess.core.piece import Piece
from anarchess.core.rules import GameEnd
from anarchess.core.types import Square, is_valid_square
from anarchess.game.controller import GameController
from anarchess.game.interfaces import GamePhase

_LOGGER = logging.getLogger(__name__)


class SessionBridge(QObject):
    """Main-thread adapter between a :class:`GameController` and a UI.

    Presentation, audio and networking layers connect to the signals;
    their input handlers call the ``request_*`` slots.
    """

    move_applied = pyqtSignal(object, object, int)  # piece, square, MoveResult
    promotion_pending = pyqtSignal(object)  # pawn
    king_in_check = pyqtSignal(int, object)  # Color, king square
    game_over = pyqtSignal(object)  # GameEnd
    phase_changed = pyqtSignal(int)  # GamePhase
    mode_changed = pyqtSignal(int)  # RuleMode
    load_failed = pyqtSignal(str)

    __slots__ = ("_controller",)

    def __init__(self, controller: GameController | None = None) -> None:
        super().__init__()
        self._controller = controller if controller is not None else GameController()

        events = self._controller.events
        events.on_move.append(self._on_move)
        events.on_promotion_pending.append(self.promotion_pending.emit)
        events.on_check.append(self._on_check)
        events.on_game_over.append(self._on_game_over)
        events.on_phase_changed.append(self._on_phase_changed)
        events.on_mode_changed.append(self._on_mode_changed)

    @property
    def controller(self) -> GameController:
        return self._controller

    # ── Slots ────────────────────────────────────────────────────────────

    @pyqtSlot(object, object)
    def request_move(self, piece: object, square: object) -> int:
        """Submit a move; returns the :class:`MoveResult` value."""
        if not isinstance(piece, Piece) or not is_valid_square(square):
            _LOGGER.warning("Move request ignored: piece=%r square=%r", piece, square)
            return int(MoveResult.REJECTED)
        return int(self._controller.submit_move(piece, Square(*square)))

    @pyqtSlot(object)
    def request_legal_moves(self, piece: object) -> set[Square]:
        if not isinstance(piece, Piece):
            return set()
        return self._controller.legal_moves(piece)

    @pyqtSlot(int)
    def request_promotion(self, piece_type: int) -> bool:
        try:
            kind = PieceType(piece_type)
        except ValueError:
            _LOGGER.warning("Unknown promotion kind %r", piece_type)
            return False
        return self._controller.promote(kind)

    @pyqtSlot()
    def request_end_turn(self) -> None:
        self._controller.end_turn()

    @pyqtSlot(int)
    def request_mode(self, mode: int) -> None:
        try:
            rule_mode = RuleMode(mode)
        except ValueError:
            _LOGGER.warning("Unknown rule mode %r", mode)
            return
        self._controller.set_rule_mode(rule_mode)

    @pyqtSlot()
    def request_reset(self) -> None:
        self.request_load(self._controller.settings.starting_placement)

    @pyqtSlot(str)
    def request_load(self, placement: str) -> None:
        """Start a game from *placement*; emits ``load_failed`` on bad input."""
        try:
            self._controller.start_game(placement)
        except PositionLoadError as exc:
            self.load_failed.emit(str(exc))

    @pyqtSlot()
    def request_stop(self) -> None:
        self._controller.end_game()

    # ── Controller event forwarding ──────────────────────────────────────

    def _on_move(self, piece: Piece, square: Square, result: MoveResult) -> None:
        self.move_applied.emit(piece, square, int(result))

    def _on_check(self, color: Color, square: Square) -> None:
        self.king_in_check.emit(int(color), square)

    def _on_game_over(self, game_end: GameEnd) -> None:
        self.game_over.emit(game_end)

    def _on_phase_changed(self, phase: GamePhase) -> None:
        self.phase_changed.emit(int(phase))

    def _on_mode_changed(self, mode: RuleMode) -> None:
        self.mode_changed.emit(int(mode))
