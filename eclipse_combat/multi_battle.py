"""Sequential elimination between several fleets sharing a hex."""
from __future__ import annotations

from typing import Iterable, List

from .battle import Battle, BattleOutcome, BattleResult
from .exceptions import ConfigurationError
from .fleet import Fleet


class MultiBattle:
    """Winner-stays-on gauntlet.

    Fleets are listed in order of arrival.  The last two to arrive fight
    first, the later one attacking; the survivor then attacks the next fleet
    down the list, carrying its damage with it.
    """

    def __init__(self, fleets: Iterable[Fleet]):
        self.fleets: List[Fleet] = list(fleets)
        if len(self.fleets) < 2:
            raise ConfigurationError("MultiBattle requires at least 2 fleets")

    def run(self) -> List[BattleResult]:
        results: List[BattleResult] = []
        while len(self.fleets) > 1:
            attacker = self.fleets[-1]
            defender = self.fleets[-2]
            result = Battle(attacker, defender).fight()
            results.append(result)

            if result.outcome == BattleOutcome.ATTACKER:
                del self.fleets[-2]
            elif result.outcome == BattleOutcome.DEFENDER:
                del self.fleets[-1]
            else:
                del self.fleets[-2:]
        return results

    def get_remaining_fleets(self) -> List[Fleet]:
        return list(self.fleets)


__all__ = ["MultiBattle"]
