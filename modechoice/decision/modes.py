"""
Mode argument maps — which argument speaks for or against which mode.

Static configuration, independent of the context: an argument that is
absent from a given framework simply never gets counted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping, Optional

from ..models import Mode


class Polarity(str, Enum):
    PRO = "pro"
    CON = "con"


MODE_PRIORS: dict[Mode, float] = {
    Mode.CAR: 0.40,
    Mode.PUBLIC_TRANSPORT: 0.20,
    Mode.WALK: 0.05,
    Mode.BIKE: 0.08,
}


def _by_mode(table: Mapping[Mode, Iterable[str]]) -> dict[str, Mode]:
    out: dict[str, Mode] = {}
    for mode, names in table.items():
        for name in names:
            out[name] = mode
    return out


PRO_ARGUMENTS: dict[str, Mode] = _by_mode({
    Mode.CAR: ("available", "time-saver", "comfort", "dry-car", "safer-than-bike"),
    Mode.PUBLIC_TRANSPORT: ("no-driving", "no-parking", "dense-network"),
    Mode.WALK: ("free", "short-distance", "relaxing"),
    Mode.BIKE: ("fast-city", "avoids-traffic", "eco-friendly", "bike-lanes"),
})

CON_ARGUMENTS: dict[str, Mode] = _by_mode({
    Mode.CAR: ("expensive", "traffic-jam", "parking-far", "aquaplaning"),
    Mode.PUBLIC_TRANSPORT: ("wait-time", "overcrowded", "unreliable", "saturated-network"),
    Mode.WALK: ("too-slow", "long-walk"),
    Mode.BIKE: ("tiring", "low-health", "rain-danger"),
})


@dataclass(frozen=True)
class ModeArgumentMap:
    """Two fixed mappings: pro-argument → mode and con-argument → mode."""
    pro: Mapping[str, Mode] = field(default_factory=lambda: dict(PRO_ARGUMENTS))
    con: Mapping[str, Mode] = field(default_factory=lambda: dict(CON_ARGUMENTS))

    def __post_init__(self):
        overlap = set(self.pro) & set(self.con)
        if overlap:
            raise ValueError(f"Arguments mapped as both pro and con: {sorted(overlap)}")

    def classify(self, name: str) -> Optional[tuple[Mode, Polarity]]:
        if name in self.pro:
            return self.pro[name], Polarity.PRO
        if name in self.con:
            return self.con[name], Polarity.CON
        return None

    def count(self, names: Iterable[str]) -> dict[Mode, tuple[int, int]]:
        """Accepted (pros, cons) per mode for a set of argument names."""
        pros = {mode: 0 for mode in Mode}
        cons = {mode: 0 for mode in Mode}
        for name in names:
            if name in self.pro:
                pros[self.pro[name]] += 1
            elif name in self.con:
                cons[self.con[name]] += 1
        return {mode: (pros[mode], cons[mode]) for mode in Mode}

    def arguments_for(self, mode: Mode, polarity: Polarity) -> list[str]:
        table = self.pro if polarity == Polarity.PRO else self.con
        return sorted(name for name, m in table.items() if m == mode)

    def annotate(self, name: str) -> dict:
        found = self.classify(name)
        if found is None:
            return {"mode": None, "polarity": None}
        mode, polarity = found
        return {"mode": mode.value, "polarity": polarity.value}


DEFAULT_MODE_MAP = ModeArgumentMap()
