"""
Argumentation Engine — Dung's Extension Computation

Implements the core algorithms from Dung (1995) for computing:
- Grounded extension (unique, most skeptical)
- Complete extensions (admissible and closed under defense)
- Preferred extensions (maximal complete)
- Stable extensions (conflict-free and attacks all outsiders)

Complete and stable extensions are enumerated as complete labellings
(in/out/undec, Caminada 2006). The search starts from the grounded
labelling, branches on the remaining arguments in index order and
prunes any partial labelling that can no longer become legal. It runs
on an explicit stack with a step limit, so it cannot recurse out of
bounds and a caller always gets an answer.

Computational complexity:
- Grounded: O(|Args| · |Attacks|) per round, at most |Args| rounds
- Complete / Preferred: O(3^k) worst case, k = arguments left
  undecided by the grounded extension
- Stable: O(2^k) worst case (the undec branch is never taken)

Travel frameworks are small and mostly acyclic, so k is usually 0 and
every semantics collapses to the grounded extension.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from enum import Enum
from typing import Optional

from .models import (
    ArgumentationFramework,
    Extension,
    Semantics,
    SemanticsResult,
)

logger = logging.getLogger("modechoice.argumentation")

DEFAULT_SEARCH_LIMIT = 100_000


class Label(Enum):
    IN = "in"
    OUT = "out"
    UNDEC = "undec"


Labelling = tuple[Optional[Label], ...]


class ArgumentationEngine:
    """
    Core engine for computing argumentation extensions.

    Follows Dung's characteristic function F:
        F(S) = { a ∈ Args | S defends a }

    The grounded extension is the least fixpoint of F.

    The engine holds no per-framework state; one instance can serve
    any number of frameworks and threads.
    """

    def __init__(self, search_limit: int = DEFAULT_SEARCH_LIMIT,
                 parallel: bool = True):
        if search_limit < 1:
            raise ValueError("search_limit must be at least 1")
        self.search_limit = search_limit
        self.parallel = parallel

    # ── Grounded Extension ──────────────────────────────────────

    def characteristic(self, af: ArgumentationFramework,
                       candidate: frozenset[int]) -> frozenset[int]:
        """F(S): every argument defended by candidate."""
        return frozenset(a for a in af.arg_ids if af.is_defended_by(a, candidate))

    def grounded_extension(self, af: ArgumentationFramework) -> Extension:
        """
        Compute the grounded extension via iterative fixpoint.

        Algorithm:
            S₀ = ∅
            Sₙ₊₁ = F(Sₙ)
            Stop when Sₙ₊₁ = Sₙ

        F is monotone and S₀ ⊆ S₁, so the sequence only grows and
        reaches its fixpoint within |Args| + 1 rounds.
        """
        current: frozenset[int] = frozenset()
        for _ in range(len(af) + 1):
            next_set = self.characteristic(af, current)
            if next_set == current:
                break
            current = next_set

        return Extension(arguments=current, semantics=Semantics.GROUNDED)

    # ── Set Predicates ──────────────────────────────────────────

    def is_conflict_free(self, af: ArgumentationFramework,
                         candidate: frozenset[int] | set[int]) -> bool:
        """Check if no argument in candidate attacks another in candidate."""
        return all(af.get_attacked(a).isdisjoint(candidate) for a in candidate)

    def is_admissible(self, af: ArgumentationFramework,
                      candidate: frozenset[int] | set[int]) -> bool:
        """
        S is admissible iff:
        1. S is conflict-free
        2. S defends all its members
        """
        if not self.is_conflict_free(af, candidate):
            return False
        return all(af.is_defended_by(a, candidate) for a in candidate)

    def is_complete(self, af: ArgumentationFramework,
                    candidate: frozenset[int] | set[int]) -> bool:
        """
        S is complete iff S is admissible and contains every
        argument it defends.
        """
        if not self.is_admissible(af, candidate):
            return False
        return self.characteristic(af, frozenset(candidate)) <= candidate

    def is_stable(self, af: ArgumentationFramework,
                  candidate: frozenset[int] | set[int]) -> bool:
        """S is stable iff S is conflict-free and attacks every outsider."""
        if not self.is_conflict_free(af, candidate):
            return False
        return all(af.is_attacked_by(a, candidate) for a in af.arg_ids - candidate)

    # ── Labelling Search ────────────────────────────────────────

    @staticmethod
    def _legal(af: ArgumentationFramework, labels: Labelling, index: int) -> bool:
        """
        Whether the label of index can still be legal once the
        remaining blanks are filled.

        in:    every attacker out
        out:   some attacker in
        undec: no attacker in, and not every attacker out
        """
        label = labels[index]
        if label is None:
            return True
        attacker_labels = [labels[a] for a in af.get_attackers(index)]
        if label is Label.IN:
            return all(l is Label.OUT or l is None for l in attacker_labels)
        if label is Label.OUT:
            return any(l is Label.IN or l is None for l in attacker_labels)
        if any(l is Label.IN for l in attacker_labels):
            return False
        return any(l is Label.UNDEC or l is None for l in attacker_labels)

    def _search(self, af: ArgumentationFramework,
                allow_undec: bool = True) -> tuple[list[frozenset[int]], bool]:
        """
        Enumerate complete labellings, returning their IN sets.

        With allow_undec=False only labellings without undec survive,
        which are exactly the stable extensions.

        Returns (in_sets, truncated).
        """
        grounded = self.grounded_extension(af).arguments
        defeated = frozenset(t for a in grounded for t in af.get_attacked(a))

        initial: list[Optional[Label]] = [None] * len(af)
        for a in grounded:
            initial[a] = Label.IN
        for a in defeated:
            initial[a] = Label.OUT
        order = [i for i, label in enumerate(initial) if label is None]

        if allow_undec:
            choices = (Label.UNDEC, Label.OUT, Label.IN)
        else:
            choices = (Label.OUT, Label.IN)

        found: list[frozenset[int]] = []
        stack: list[tuple[int, Labelling]] = [(0, tuple(initial))]
        steps = 0
        while stack:
            steps += 1
            if steps > self.search_limit:
                logger.warning(
                    f"Labelling search stopped after {self.search_limit} steps "
                    f"({len(order)} undecided arguments, {len(found)} found)"
                )
                return found, True

            depth, labels = stack.pop()
            if depth == len(order):
                found.append(frozenset(
                    i for i, label in enumerate(labels) if label is Label.IN
                ))
                continue

            index = order[depth]
            touched = (index, *af.get_attacked(index))
            # Pushed in reverse so IN is explored first
            for label in choices:
                nxt = labels[:index] + (label,) + labels[index + 1:]
                if all(self._legal(af, nxt, t) for t in touched):
                    stack.append((depth + 1, nxt))

        return found, False

    # ── Complete Extensions ─────────────────────────────────────

    def complete_extensions(self, af: ArgumentationFramework) -> list[Extension]:
        """
        Compute all complete extensions.

        The grounded extension is always complete; it is kept even
        when a truncated search has not reached it.
        """
        in_sets, truncated = self._search(af)
        grounded = self.grounded_extension(af).arguments
        if grounded not in in_sets:
            in_sets.append(grounded)
        return self._wrap(in_sets, Semantics.COMPLETE, truncated)

    # ── Preferred Extensions ────────────────────────────────────

    def preferred_extensions(self, af: ArgumentationFramework) -> list[Extension]:
        """
        Compute all preferred (maximal admissible) extensions.

        Every admissible set lies inside some complete extension, so
        the maximal complete extensions are the preferred ones.
        """
        complete = self.complete_extensions(af)
        truncated = any(ext.approximate for ext in complete)
        sets = [ext.arguments for ext in complete]
        maximal = [s for s in sets if not any(s < other for other in sets)]
        return self._wrap(maximal, Semantics.PREFERRED, truncated)

    # ── Stable Extensions ───────────────────────────────────────

    def stable_extensions(self, af: ArgumentationFramework) -> list[Extension]:
        """
        Compute all stable extensions.

        An empty list is a valid answer: odd attack cycles and
        self-attacking arguments can leave a framework without any.
        If the search is cut short before finding one, the largest
        complete extension found is returned, flagged approximate.
        """
        in_sets, truncated = self._search(af, allow_undec=False)
        if truncated and not in_sets:
            fallback = self.complete_extensions(af)
            best = max(fallback, key=lambda e: (e.size, [-i for i in e.key]))
            in_sets = [best.arguments]
        return self._wrap(in_sets, Semantics.STABLE, truncated)

    # ── All Semantics ───────────────────────────────────────────

    def extensions(self, af: ArgumentationFramework) -> SemanticsResult:
        """
        Compute every semantics for one framework.

        The four computations share nothing but the frozen framework,
        so they are fanned out to a thread pool and joined here.
        """
        tasks = {
            Semantics.GROUNDED: self.grounded_extension,
            Semantics.COMPLETE: self.complete_extensions,
            Semantics.PREFERRED: self.preferred_extensions,
            Semantics.STABLE: self.stable_extensions,
        }

        if self.parallel:
            with ThreadPoolExecutor(max_workers=len(tasks)) as executor:
                futures = {sem: executor.submit(fn, af) for sem, fn in tasks.items()}
                results = {sem: future.result() for sem, future in futures.items()}
        else:
            results = {sem: fn(af) for sem, fn in tasks.items()}

        result = SemanticsResult(
            grounded=results[Semantics.GROUNDED],
            complete=tuple(results[Semantics.COMPLETE]),
            preferred=tuple(results[Semantics.PREFERRED]),
            stable=tuple(results[Semantics.STABLE]),
        )
        logger.debug(
            f"Extensions | args={len(af)} grounded={result.grounded.size} "
            f"complete={len(result.complete)} preferred={len(result.preferred)} "
            f"stable={len(result.stable)} approximate={result.approximate}"
        )
        return result

    @staticmethod
    def _wrap(sets: list[frozenset[int]], semantics: Semantics,
              approximate: bool) -> list[Extension]:
        unique = sorted(set(sets), key=lambda s: tuple(sorted(s)))
        return [
            Extension(arguments=s, semantics=semantics, approximate=approximate)
            for s in unique
        ]
