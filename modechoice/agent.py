"""
TravelAgent — one decision, end to end.

    Context → FrameworkBuilder → ArgumentationFramework
            → ArgumentationEngine → SemanticsResult
            → DecisionAggregator → DecisionResult

Each call builds a fresh framework and throws it away afterwards;
nothing is shared between decisions except the stateless collaborators.
"""

from __future__ import annotations

import logging
import time
from typing import Mapping, Optional

from .argumentation import (
    ArgumentationEngine,
    ArgumentationFramework,
    Extension,
    FrameworkBuilder,
    Semantics,
    SemanticsResult,
)
from .decision import DEFAULT_MODE_MAP, DecisionAggregator, ModeArgumentMap
from .models import Context, DecisionResult, Mode

logger = logging.getLogger("modechoice.agent")


class TravelAgent:

    def __init__(
        self,
        builder: Optional[FrameworkBuilder] = None,
        engine: Optional[ArgumentationEngine] = None,
        aggregator: Optional[DecisionAggregator] = None,
        mode_map: ModeArgumentMap = DEFAULT_MODE_MAP,
    ):
        self.builder = builder or FrameworkBuilder()
        self.engine = engine or ArgumentationEngine()
        self.aggregator = aggregator or DecisionAggregator()
        self.mode_map = mode_map

    def build_framework(self, context: Context | Mapping) -> ArgumentationFramework:
        return self.builder.build(context)

    def evaluate(self, context: Context | Mapping) -> tuple[ArgumentationFramework, SemanticsResult]:
        af = self.builder.build(context)
        return af, self.engine.extensions(af)

    def decide(self, context: Context | Mapping) -> DecisionResult:
        start = time.perf_counter()
        af, result = self.evaluate(context)
        decision = self.aggregator.decide(af, result, self.mode_map)
        elapsed = (time.perf_counter() - start) * 1000

        logger.info(
            f"DECISION | {decision.selected_mode.value} | "
            + " ".join(f"{m.value}={decision.percentages[m]:.2f}%" for m in Mode)
            + f" | {elapsed:.1f}ms"
            + (" | approximate" if decision.approximate else "")
        )
        return decision

    def decide_mode(self, context: Context | Mapping) -> Mode:
        return self.decide(context).selected_mode

    def compare_semantics(self, context: Context | Mapping) -> dict[str, Optional[Extension]]:
        """Canonical extension of every semantics, keyed by semantics name."""
        _, result = self.evaluate(context)
        return {s.value: result.canonical(s) for s in Semantics}

    def accepted_arguments(self, context: Context | Mapping) -> list[str]:
        """Names in the grounded extension."""
        af = self.builder.build(context)
        return af.names(self.engine.grounded_extension(af).arguments)
