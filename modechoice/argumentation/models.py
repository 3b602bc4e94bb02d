"""
Argumentation Framework Models — Dung's Abstract Argumentation

Implements the formal structures from Dung (1995), "On the acceptability
of arguments", sized for travel-mode reasoning:

- Arguments live in an arena and are addressed by a stable integer index.
- An ArgumentStore is the only mutable piece: it hands out arguments by
  name (get-or-create) and collects attacks while a framework is built.
- ArgumentationFramework is the frozen result the engine reasons over.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Mapping, Optional


class Semantics(str, Enum):
    """Argumentation semantics for extension computation."""
    GROUNDED = "grounded"
    COMPLETE = "complete"
    PREFERRED = "preferred"
    STABLE = "stable"


@dataclass(frozen=True)
class Argument:
    """
    An atomic reason in the decision.

    Identity is the index; the name is unique within one framework and
    the label is only used for display.
    """
    index: int
    name: str
    label: str = field(default="", compare=False)

    def __repr__(self):
        return f"Arg({self.index}: {self.name})"


@dataclass(frozen=True)
class Attack:
    """
    An attack relation between two arguments.

    Following Dung (1995), if (a, b) is an attack, then argument 'a'
    attacks argument 'b'. The reason is kept for explanation only.
    """
    attacker: int
    target: int
    reason: str = field(default="", compare=False)


@dataclass(frozen=True)
class Extension:
    """
    A set of arguments that are collectively acceptable under
    a given semantics.

    `approximate` is set when the search producing it hit its step
    limit, so the set is a best effort rather than a proven extension.
    """
    arguments: frozenset[int] = frozenset()
    semantics: Semantics = Semantics.GROUNDED
    approximate: bool = False

    @property
    def size(self) -> int:
        return len(self.arguments)

    @property
    def is_empty(self) -> bool:
        return not self.arguments

    @property
    def key(self) -> tuple[int, ...]:
        """Sorted indices; lexicographic order on this picks canonical members."""
        return tuple(sorted(self.arguments))

    def __contains__(self, index: int) -> bool:
        return index in self.arguments


@dataclass(frozen=True)
class ArgumentationFramework:
    """
    Dung's Abstract Argumentation Framework (AAF).

    AF = (Args, Attacks) where:
    - Args is a finite set of arguments
    - Attacks ⊆ Args × Args is a binary attack relation

    Frozen once constructed. Attacker and target adjacency is indexed
    at construction so the engine never scans the attack list.
    """
    arguments: tuple[Argument, ...] = ()
    attacks: frozenset[Attack] = frozenset()
    _attackers: tuple[frozenset[int], ...] = field(
        default=(), init=False, repr=False, compare=False)
    _targets: tuple[frozenset[int], ...] = field(
        default=(), init=False, repr=False, compare=False)
    _by_name: Mapping[str, int] = field(
        default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self):
        n = len(self.arguments)
        by_name: dict[str, int] = {}
        for position, arg in enumerate(self.arguments):
            if arg.index != position:
                raise ValueError(
                    f"Argument {arg.name!r} has index {arg.index}, expected {position}"
                )
            if arg.name in by_name:
                raise ValueError(f"Duplicate argument name {arg.name!r}")
            by_name[arg.name] = position

        attackers: list[set[int]] = [set() for _ in range(n)]
        targets: list[set[int]] = [set() for _ in range(n)]
        for attack in self.attacks:
            if not (0 <= attack.attacker < n and 0 <= attack.target < n):
                raise ValueError(
                    f"Attack {attack.attacker}->{attack.target} references "
                    f"an argument outside the framework ({n} arguments)"
                )
            attackers[attack.target].add(attack.attacker)
            targets[attack.attacker].add(attack.target)

        object.__setattr__(self, "_attackers", tuple(frozenset(s) for s in attackers))
        object.__setattr__(self, "_targets", tuple(frozenset(s) for s in targets))
        object.__setattr__(self, "_by_name", by_name)

    @classmethod
    def from_pairs(
        cls,
        pairs: Iterable[tuple[str, str]],
        names: Iterable[str] = (),
    ) -> "ArgumentationFramework":
        """Build a framework from (attacker, target) name pairs."""
        store = ArgumentStore()
        for name in names:
            store.argument(name)
        for attacker, target in pairs:
            store.attack(attacker, target)
        return store.freeze()

    def __len__(self) -> int:
        return len(self.arguments)

    @property
    def arg_ids(self) -> frozenset[int]:
        return frozenset(range(len(self.arguments)))

    def get_attackers(self, index: int) -> frozenset[int]:
        """Get all arguments that attack the given argument."""
        return self._attackers[index]

    def get_attacked(self, index: int) -> frozenset[int]:
        """Get all arguments attacked by the given argument."""
        return self._targets[index]

    def attacks_between(self, attacker: int, target: int) -> bool:
        return attacker in self._attackers[target]

    def is_attacked_by(self, index: int, candidate: frozenset[int] | set[int]) -> bool:
        """Check if index is attacked by any member of candidate set."""
        return not self._attackers[index].isdisjoint(candidate)

    def is_defended_by(self, index: int, candidate: frozenset[int] | set[int]) -> bool:
        """
        Check if candidate defends index.
        index is defended by S if for every attacker of index,
        there exists a member of S that attacks the attacker.
        """
        return all(
            not self._attackers[attacker].isdisjoint(candidate)
            for attacker in self._attackers[index]
        )

    def index_of(self, name: str) -> Optional[int]:
        return self._by_name.get(name)

    def get(self, name: str) -> Optional[Argument]:
        index = self._by_name.get(name)
        return None if index is None else self.arguments[index]

    def names(self, indices: Iterable[int]) -> list[str]:
        return [self.arguments[i].name for i in sorted(indices)]

    def to_dict(
        self,
        accepted: Iterable[int] = (),
        annotate=None,
    ) -> dict:
        """
        Export nodes and edges.

        `annotate`, if given, maps an argument name to extra fields
        merged into that node (mode and polarity, for instance).
        """
        accepted = frozenset(accepted)
        nodes = []
        for arg in self.arguments:
            node = {
                "index": arg.index,
                "name": arg.name,
                "label": arg.label,
                "accepted": arg.index in accepted,
            }
            if annotate is not None:
                node.update(annotate(arg.name))
            nodes.append(node)

        edges = [
            {
                "attacker": self.arguments[a.attacker].name,
                "target": self.arguments[a.target].name,
                "reason": a.reason,
            }
            for a in sorted(self.attacks, key=lambda a: (a.attacker, a.target))
        ]
        return {
            "arguments": nodes,
            "attacks": edges,
            "stats": {
                "num_arguments": len(self.arguments),
                "num_attacks": len(self.attacks),
                "num_accepted": len(accepted),
            },
        }


class ArgumentStore:
    """
    Mutable arena used while a framework is being assembled.

    Requesting a name twice returns the same Argument, so building
    never produces duplicate nodes.
    """

    def __init__(self):
        self._arguments: list[Argument] = []
        self._by_name: dict[str, int] = {}
        self._attacks: dict[tuple[int, int], Attack] = {}

    def argument(self, name: str, label: str = "") -> Argument:
        index = self._by_name.get(name)
        if index is not None:
            return self._arguments[index]
        arg = Argument(index=len(self._arguments), name=name, label=label)
        self._arguments.append(arg)
        self._by_name[name] = arg.index
        return arg

    def attack(self, attacker: str, target: str, reason: str = "",
               labels: Mapping[str, str] | None = None) -> Attack:
        labels = labels or {}
        a = self.argument(attacker, labels.get(attacker, ""))
        b = self.argument(target, labels.get(target, ""))
        key = (a.index, b.index)
        if key not in self._attacks:
            self._attacks[key] = Attack(attacker=a.index, target=b.index, reason=reason)
        return self._attacks[key]

    def __contains__(self, name: str) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._arguments)

    def freeze(self) -> ArgumentationFramework:
        return ArgumentationFramework(
            arguments=tuple(self._arguments),
            attacks=frozenset(self._attacks.values()),
        )


@dataclass(frozen=True)
class SemanticsResult:
    """
    Extensions of one framework under every semantics.

    `complete`, `preferred` and `stable` are sorted by Extension.key,
    so the first member is the canonical one.
    """
    grounded: Extension
    complete: tuple[Extension, ...] = ()
    preferred: tuple[Extension, ...] = ()
    stable: tuple[Extension, ...] = ()

    @property
    def approximate(self) -> bool:
        return any(
            ext.approximate
            for ext in (self.grounded, *self.complete, *self.preferred, *self.stable)
        )

    def extensions(self, semantics: Semantics) -> tuple[Extension, ...]:
        if semantics == Semantics.GROUNDED:
            return (self.grounded,)
        return getattr(self, semantics.value)

    def canonical(self, semantics: Semantics) -> Optional[Extension]:
        """Lexicographically smallest extension, or None when there is none."""
        found = self.extensions(semantics)
        if not found:
            return None
        return min(found, key=lambda e: e.key)
