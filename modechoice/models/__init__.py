"""
models — Boundary Types

Pydantic models for everything that crosses the decision boundary:
the travel context handed in by a caller, and the decision handed
back. Closed enums keep invalid weather or mode strings from ever
reaching the argumentation layer.
"""

from __future__ import annotations

import math
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


# ── Enums ────────────────────────────────────────────────────────

class Weather(str, Enum):
    SUNNY = "Sunny"
    CLOUDY = "Cloudy"
    RAINY = "Rainy"


class Mode(str, Enum):
    """Travel modes, in the order used for tie-breaks."""
    CAR = "CAR"
    PUBLIC_TRANSPORT = "PUBLIC_TRANSPORT"
    WALK = "WALK"
    BIKE = "BIKE"


class Acceptance(str, Enum):
    """How the extensions of one semantics become an accepted set."""
    CANONICAL = "canonical"
    SKEPTICAL = "skeptical"
    CREDULOUS = "credulous"


# ── Request Models ───────────────────────────────────────────────

class Context(BaseModel):
    """The traveler's situation for a single decision."""
    model_config = ConfigDict(frozen=True)

    distance: float = Field(..., ge=0)
    weather: Weather
    is_healthy: bool = True
    is_rush_hour: bool = False

    @field_validator("weather", mode="before")
    @classmethod
    def normalize_weather(cls, v):
        if isinstance(v, str) and not isinstance(v, Weather):
            return v.strip().capitalize()
        return v

    @classmethod
    def from_positions(
        cls,
        start: tuple[float, float],
        destination: tuple[float, float],
        weather: Weather | str,
        is_healthy: bool = True,
        is_rush_hour: bool = False,
    ) -> "Context":
        distance = math.hypot(destination[0] - start[0], destination[1] - start[1])
        return cls(
            distance=distance,
            weather=weather,
            is_healthy=is_healthy,
            is_rush_hour=is_rush_hour,
        )


# ── Response Models ──────────────────────────────────────────────

class DecisionResult(BaseModel):
    """
    Outcome of one decision.

    `percentages` sums to 100 within rounding. `scores` keeps the SCR
    of every mode under each semantics for inspection.
    """
    percentages: dict[Mode, float]
    selected_mode: Mode
    scores: dict[str, dict[Mode, float]] = Field(default_factory=dict)
    approximate: bool = False
    explanation: str = ""


class ArgumentView(BaseModel):
    index: int
    name: str
    label: str = ""
    mode: Optional[Mode] = None
    polarity: Optional[str] = None
    accepted: bool = False


class AttackView(BaseModel):
    attacker: str
    target: str
    reason: str = ""


class FrameworkResponse(BaseModel):
    """Graph export for visualization: nodes, edges, grounded acceptance."""
    context: Context
    arguments: list[ArgumentView] = Field(default_factory=list)
    attacks: list[AttackView] = Field(default_factory=list)
    stats: dict[str, int] = Field(default_factory=dict)


class ModeInfo(BaseModel):
    mode: Mode
    prior: float
    pro_arguments: list[str] = Field(default_factory=list)
    con_arguments: list[str] = Field(default_factory=list)


class HealthComponent(BaseModel):
    status: str
    detail: Optional[str] = None


class HealthResponse(BaseModel):
    status: str = "ok"
    version: str = "0.1.0"
    uptime_seconds: int = 0
    components: dict[str, HealthComponent] = Field(default_factory=dict)
