"""Decision aggregation — mode scores from argumentation extensions."""
from .aggregator import DecisionAggregator, scr
from .modes import (
    DEFAULT_MODE_MAP,
    MODE_PRIORS,
    ModeArgumentMap,
    Polarity,
)

__all__ = [
    "DecisionAggregator",
    "scr",
    "DEFAULT_MODE_MAP",
    "MODE_PRIORS",
    "ModeArgumentMap",
    "Polarity",
]
