"""
Decision Aggregator — from extensions to a travel mode

For every semantics, one accepted-argument set is taken from the
extensions and each mode gets an SCR score:

    scr = (pros - 0.5 * cons) / (pros + cons)      (0 when pros + cons == 0)

Scores are averaged over the four semantics, a fixed prior per mode is
added, and the combined scores are normalized linearly to percentages.
The selected mode is the one with the highest percentage; ties go to
the earlier mode in Mode's declared order.
"""

from __future__ import annotations

import logging
from typing import Mapping, Optional

from ..argumentation.models import (
    ArgumentationFramework,
    Semantics,
    SemanticsResult,
)
from ..models import Acceptance, DecisionResult, Mode
from .modes import DEFAULT_MODE_MAP, MODE_PRIORS, ModeArgumentMap

logger = logging.getLogger("modechoice.decision")

SEMANTICS_ORDER = (
    Semantics.GROUNDED,
    Semantics.COMPLETE,
    Semantics.PREFERRED,
    Semantics.STABLE,
)


def scr(pros: int, cons: int) -> float:
    """Per-mode score in [-0.5, 1]; neutral 0 when nothing is accepted."""
    if pros + cons == 0:
        return 0.0
    return (pros - 0.5 * cons) / (pros + cons)


class DecisionAggregator:
    """
    Turns a SemanticsResult into a DecisionResult.

    Pure: no state is kept between calls, so one aggregator can be
    shared freely.
    """

    def __init__(
        self,
        priors: Mapping[Mode, float] = MODE_PRIORS,
        acceptance: Acceptance = Acceptance.CANONICAL,
    ):
        missing = [m.value for m in Mode if m not in priors]
        if missing:
            raise ValueError(f"Missing priors for modes: {missing}")
        self.priors = dict(priors)
        self.acceptance = Acceptance(acceptance)

    # ── Accepted Sets ───────────────────────────────────────────

    def accepted(self, result: SemanticsResult,
                 semantics: Semantics) -> Optional[frozenset[int]]:
        """
        The accepted-argument set for one semantics, or None when the
        semantics has no extension at all (e.g. no stable extension).
        """
        found = result.extensions(semantics)
        if not found:
            return None
        if self.acceptance == Acceptance.SKEPTICAL:
            return frozenset.intersection(*(e.arguments for e in found))
        if self.acceptance == Acceptance.CREDULOUS:
            return frozenset.union(*(e.arguments for e in found))
        return result.canonical(semantics).arguments

    # ── Scoring ─────────────────────────────────────────────────

    def semantics_scores(
        self,
        af: ArgumentationFramework,
        result: SemanticsResult,
        mode_map: ModeArgumentMap = DEFAULT_MODE_MAP,
    ) -> dict[Semantics, dict[Mode, float]]:
        scores: dict[Semantics, dict[Mode, float]] = {}
        for semantics in SEMANTICS_ORDER:
            accepted = self.accepted(result, semantics)
            if accepted is None:
                scores[semantics] = {mode: 0.0 for mode in Mode}
                continue
            counts = mode_map.count(af.names(accepted))
            scores[semantics] = {
                mode: scr(*counts[mode]) for mode in Mode
            }
        return scores

    def normalize(self, combined: Mapping[Mode, float]) -> dict[Mode, float]:
        total = sum(combined.values())
        if total <= 0:
            logger.warning(
                f"Combined scores sum to {total:.3f}; normalizing priors instead"
            )
            combined = self.priors
            if sum(combined.values()) <= 0:
                combined = {mode: 1.0 for mode in Mode}
            total = sum(combined.values())
        return {mode: round(100 * combined[mode] / total, 2) for mode in Mode}

    def decide(
        self,
        af: ArgumentationFramework,
        result: SemanticsResult,
        mode_map: ModeArgumentMap = DEFAULT_MODE_MAP,
    ) -> DecisionResult:
        """
        Score every mode and pick one.

        Steps:
            1. accepted set per semantics (empty semantics → all zero)
            2. SCR per mode per semantics
            3. average over the four semantics
            4. add the mode prior
            5. normalize to percentages, pick the arg-max
        """
        scores = self.semantics_scores(af, result, mode_map)

        combined = {
            mode: sum(scores[s][mode] for s in SEMANTICS_ORDER) / len(SEMANTICS_ORDER)
            + self.priors[mode]
            for mode in Mode
        }
        percentages = self.normalize(combined)

        selected = max(Mode, key=lambda m: percentages[m])

        return DecisionResult(
            percentages=percentages,
            selected_mode=selected,
            scores={
                s.value: {m: round(v, 4) for m, v in per_mode.items()}
                for s, per_mode in scores.items()
            },
            approximate=result.approximate,
            explanation=self._build_explanation(af, result, mode_map),
        )

    def _build_explanation(
        self,
        af: ArgumentationFramework,
        result: SemanticsResult,
        mode_map: ModeArgumentMap,
    ) -> str:
        """Human-readable summary of what the grounded extension accepts."""
        accepted = af.names(result.grounded.arguments)
        parts = []
        for mode in Mode:
            pros = [n for n in accepted if mode_map.pro.get(n) == mode]
            cons = [n for n in accepted if mode_map.con.get(n) == mode]
            if not pros and not cons:
                parts.append(f"{mode.value}: no accepted arguments")
                continue
            parts.append(
                f"{mode.value}: for [{', '.join(pros)}] "
                f"against [{', '.join(cons)}]"
            )
        return " | ".join(parts)
