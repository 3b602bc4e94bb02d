"""modechoice — travel-mode selection by abstract argumentation."""
from .agent import TravelAgent
from .models import Context, DecisionResult, Mode, Weather

__version__ = "0.1.0"

__all__ = [
    "TravelAgent",
    "Context",
    "DecisionResult",
    "Mode",
    "Weather",
]
