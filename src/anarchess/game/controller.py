"""GameController — the central orchestrator of a game session.

Coordinates: Position, MoveGenerator, MoveExecutor, Rules.
Emits events via simple callbacks so presentation layers / tests can
subscribe.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from anarchess.core.board import Board
from anarchess.core.enums import Color, MoveResult, PieceType, RuleMode
from anarchess.core.executor import MoveExecutor
from anarchess.core.move_generator import MoveGenerator
from anarchess.core.notation import load_placement
from anarchess.core.piece import Piece
from anarchess.core.position import Position
from anarchess.core.rules import ONGOING, GameEnd, Rules
from anarchess.core.types import Square
from anarchess.game.interfaces import GamePhase, IGameController
from anarchess.game.settings import GameSettings

_LOGGER = logging.getLogger(__name__)

# ── Event definitions ────────────────────────────────────────────────────────

MoveCallback = Callable[[Piece, Square, MoveResult], None]  # piece, dest, result
PromotionCallback = Callable[[Piece], None]
CheckCallback = Callable[[Color, Square], None]  # side in check, king square
GameOverCallback = Callable[[GameEnd], None]
PhaseCallback = Callable[[GamePhase], None]
ModeCallback = Callable[[RuleMode], None]


@dataclass
class GameEvents:
    """Observable callbacks. Multiple handlers per event."""

    on_move: list[MoveCallback] = field(default_factory=list)
    on_promotion_pending: list[PromotionCallback] = field(default_factory=list)
    on_check: list[CheckCallback] = field(default_factory=list)
    on_game_over: list[GameOverCallback] = field(default_factory=list)
    on_phase_changed: list[PhaseCallback] = field(default_factory=list)
    on_mode_changed: list[ModeCallback] = field(default_factory=list)


# ── Controller ───────────────────────────────────────────────────────────────


class GameController(IGameController):
    """Orchestrates a game: validates and applies moves, hands over turns,
    detects check / checkmate / stalemate, keeps the score, notifies
    listeners.

    Thread-safety: the controller is the single mutator of its position
    and must be driven from one thread (e.g. the Qt main thread via
    :class:`~anarchess.game.qt_bridge.SessionBridge`).
    """

    __slots__ = (
        "_settings",
        "_position",
        "_phase",
        "_scores",
        "_pending_promotion",
        "_last_end",
        "events",
    )

    def __init__(self, settings: GameSettings | None = None) -> None:
        self._settings = settings if settings is not None else GameSettings()
        self._position = Position(Board(), rule_mode=self._settings.rule_mode)
        self._phase = GamePhase.NOT_STARTED
        self._scores: dict[Color, int] = {Color.WHITE: 0, Color.BLACK: 0}
        self._pending_promotion: Piece | None = None
        self._last_end: GameEnd = ONGOING
        self.events = GameEvents()

    # ── Properties ───────────────────────────────────────────────────────

    @property
    def settings(self) -> GameSettings:
        return self._settings

    @property
    def position(self) -> Position:
        return self._position

    @property
    def phase(self) -> GamePhase:
        return self._phase

    @property
    def side_to_move(self) -> Color:
        return self._position.side_to_move

    @property
    def rule_mode(self) -> RuleMode:
        return self._position.rule_mode

    @property
    def pending_promotion(self) -> Piece | None:
        return self._pending_promotion

    @property
    def last_game_end(self) -> GameEnd:
        return self._last_end

    @property
    def is_game_over(self) -> bool:
        return self._phase == GamePhase.GAME_OVER

    def score(self, color: Color) -> int:
        return self._scores[color]

    # ── Lifecycle ────────────────────────────────────────────────────────

    def start_game(self, placement: str | None = None) -> None:
        text = self._settings.starting_placement if placement is None else placement
        # Raises PositionLoadError before any state changes.
        load_placement(self._position, text)

        self._scores = {Color.WHITE: 0, Color.BLACK: 0}
        self._pending_promotion = None
        self._last_end = ONGOING
        _LOGGER.info("Game started (%s rules)", self._position.rule_mode)
        self._set_phase(GamePhase.AWAITING_MOVE)

    def reset(self) -> None:
        """Restart from the configured starting placement."""
        self.start_game()

    def end_game(self) -> None:
        self._position.reset(Board())
        self._pending_promotion = None
        self._last_end = ONGOING
        _LOGGER.info("Game stopped")
        self._set_phase(GamePhase.NOT_STARTED)

    def set_rule_mode(self, mode: RuleMode) -> None:
        if self._position.rule_mode == mode:
            return
        self._position.rule_mode = mode
        _LOGGER.info("Rule mode set to %s", mode)
        for cb in self.events.on_mode_changed:
            cb(mode)

    def toggle_rule_mode(self) -> RuleMode:
        mode = RuleMode.STANDARD if self._position.is_anarchy else RuleMode.ANARCHY
        self.set_rule_mode(mode)
        return mode

    # ── Queries ──────────────────────────────────────────────────────────

    def legal_moves(self, piece: Piece | None) -> set[Square]:
        return MoveGenerator.for_position(self._position).legal_moves(piece)

    def is_in_check(self, color: Color | None = None) -> bool:
        return Rules.is_in_check(self._position, color)

    # ── Commands ─────────────────────────────────────────────────────────

    def submit_move(self, piece: Piece | None, destination: Square) -> MoveResult:
        if self._phase != GamePhase.AWAITING_MOVE:
            _LOGGER.warning("Move ignored in phase %s", self._phase.name)
            return MoveResult.REJECTED
        if piece is None or piece.color != self._position.side_to_move:
            _LOGGER.warning("Move ignored: %r is not on the side to move", piece)
            return MoveResult.REJECTED

        captured_before = len(self._position.captured)
        # Legality is recomputed here rather than trusted from pick-up time.
        result = MoveExecutor.execute(piece, destination, self._position)
        if result == MoveResult.REJECTED:
            return result

        _LOGGER.debug("%r -> %s: %s", piece, piece.position, result.name)
        self._credit_captures(captured_before)
        for cb in self.events.on_move:
            cb(piece, piece.position, result)

        if self._position.is_anarchy:
            if self._settings.auto_end_turn_in_anarchy:
                self.end_turn()
            return result

        if Rules.reached_promotion_rank(piece):
            self._pending_promotion = piece
            self._set_phase(GamePhase.AWAITING_PROMOTION)
            for promo_cb in self.events.on_promotion_pending:
                promo_cb(piece)
            return result

        self.end_turn()
        return result

    def promote(self, piece_type: PieceType) -> bool:
        pawn = self._pending_promotion
        if self._phase != GamePhase.AWAITING_PROMOTION or pawn is None:
            _LOGGER.warning("No promotion pending")
            return False

        promoted = MoveExecutor.promote(self._position, pawn, piece_type)
        if promoted is None:
            return False

        _LOGGER.info("%s pawn promoted to %s", pawn.color, piece_type.name.lower())
        self._pending_promotion = None
        self._set_phase(GamePhase.AWAITING_MOVE)
        self.end_turn()
        return True

    def place_piece(
        self, piece_type: PieceType, color: Color, square: Square
    ) -> Piece | None:
        """Spawn a piece (anarchy mode only)."""
        if not self._anarchy_command_allowed("place_piece"):
            return None
        captured_before = len(self._position.captured)
        piece = MoveExecutor.place(self._position, piece_type, color, square)
        self._credit_captures(captured_before)
        return piece

    def remove_piece(self, piece: Piece | None) -> bool:
        """Take a piece out of play (anarchy mode only)."""
        if not self._anarchy_command_allowed("remove_piece"):
            return False
        captured_before = len(self._position.captured)
        removed = MoveExecutor.remove(self._position, piece)
        self._credit_captures(captured_before)
        return removed

    def end_turn(self) -> GameEnd:
        if self._phase != GamePhase.AWAITING_MOVE:
            _LOGGER.warning("Cannot end turn in phase %s", self._phase.name)
            return self._last_end

        pos = self._position
        pos.side_to_move = pos.side_to_move.opposite
        side = pos.side_to_move
        self._last_end = ONGOING

        if pos.rule_mode == RuleMode.STANDARD:
            king_sq = pos.board.king_square(side)
            if king_sq is not None:
                gen = MoveGenerator.for_position(pos)
                in_check = gen.is_king_in_check(king_sq, side)
                if in_check:
                    _LOGGER.info("%s king is in check", side)
                    for cb in self.events.on_check:
                        cb(side, king_sq)
                self._last_end = Rules.game_end(pos, side, in_check)

        if self._last_end.is_over:
            self._set_phase(GamePhase.GAME_OVER)
            for over_cb in self.events.on_game_over:
                over_cb(self._last_end)
        return self._last_end

    # ── Internal helpers ─────────────────────────────────────────────────

    def _anarchy_command_allowed(self, name: str) -> bool:
        if not self._position.is_anarchy:
            _LOGGER.warning("%s is only available in anarchy mode", name)
            return False
        if self._phase != GamePhase.AWAITING_MOVE:
            _LOGGER.warning("%s ignored in phase %s", name, self._phase.name)
            return False
        return True

    def _credit_captures(self, since: int) -> None:
        if not self._settings.track_score:
            return
        for victim in self._position.captured[since:]:
            scorer = victim.color.opposite
            self._scores[scorer] += victim.value
            _LOGGER.debug("%s scored %d", scorer, victim.value)

    def _set_phase(self, phase: GamePhase) -> None:
        self._phase = phase
        for cb in self.events.on_phase_changed:
            cb(phase)
