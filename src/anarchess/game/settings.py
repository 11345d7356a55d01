"""Session configuration."""

from __future__ import annotations

from dataclasses import dataclass

from anarchess.core.enums import RuleMode
from anarchess.core.notation import STARTING_PLACEMENT


@dataclass
class GameSettings:
    """All configurable knobs of a game session."""

    rule_mode: RuleMode = RuleMode.STANDARD
    starting_placement: str = STARTING_PLACEMENT

    # Credit the capturing side with the victim's material value.
    track_score: bool = True

    # In anarchy mode players end their turn explicitly unless this is set.
    auto_end_turn_in_anarchy: bool = False
