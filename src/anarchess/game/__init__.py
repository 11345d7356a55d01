"""Game management layer — session controller, settings, Qt bridge.

Quick start::

    from anarchess.core import parse_square
    from anarchess.game import GameController

    ctrl = GameController()
    ctrl.start_game()
    pawn = ctrl.position.piece_at(parse_square("e2"))
    ctrl.submit_move(pawn, parse_square("e4"))

The Qt bridge is not imported here, so the controller works without a
Qt application::

    from anarchess.game.qt_bridge import SessionBridge
"""

from anarchess.game.controller import GameController, GameEvents
from anarchess.game.interfaces import GamePhase, IGameController
from anarchess.game.settings import GameSettings

__all__ = [
    # Interfaces
    "GamePhase",
    "IGameController",
    # Concrete
    "GameController",
    "GameEvents",
    "GameSettings",
]
