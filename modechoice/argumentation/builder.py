"""
Context-to-Argumentation Builder

Converts a travel Context into Dung's Abstract Argumentation Framework
for mode selection.

The framework is assembled from two tables:
1. Core attacks — baseline pros and cons of each mode, always present
2. Conditional attacks — gated by a predicate over the Context
   (health, distance, rush hour, weather), evaluated once per build

Arguments are created on first mention (get-or-create by name), so an
argument that only appears in a conditional attack is absent from the
framework unless its condition fires.
"""

from __future__ import annotations

import logging
from typing import Callable, Mapping, NamedTuple, Sequence

from ..models import Context, Weather
from .models import ArgumentationFramework, ArgumentStore

logger = logging.getLogger("modechoice.argumentation.builder")


class AttackRule(NamedTuple):
    attacker: str
    target: str
    reason: str = ""


class ConditionalAttacks(NamedTuple):
    name: str
    condition: Callable[[Context], bool]
    attacks: tuple[AttackRule, ...]


ARGUMENT_LABELS: dict[str, str] = {
    # CAR
    "available": "Car is available",
    "time-saver": "Driving is fast",
    "comfort": "Comfortable ride",
    "dry-car": "Stay dry in the car",
    "safer-than-bike": "Safer than cycling in the rain",
    "expensive": "Driving is expensive",
    "traffic-jam": "Rush-hour traffic jams",
    "parking-far": "Wet walk from the parking spot",
    "aquaplaning": "Wet roads are slippery for cars too",
    # PUBLIC_TRANSPORT
    "no-driving": "No need to drive",
    "no-parking": "No parking needed",
    "dense-network": "Dense network",
    "wait-time": "Waiting at the stop",
    "overcrowded": "Overcrowded vehicles",
    "unreliable": "Sparse, unreliable service",
    "saturated-network": "Saturated network",
    # WALK
    "free": "Walking is free",
    "short-distance": "Short distance",
    "relaxing": "Relaxing",
    "too-slow": "Walking is slow",
    "long-walk": "Far too long to walk",
    # BIKE
    "fast-city": "Fast in town",
    "avoids-traffic": "Avoids traffic",
    "eco-friendly": "Eco-friendly",
    "bike-lanes": "Bike lanes",
    "tiring": "Cycling is tiring",
    "low-health": "Not fit enough",
    "rain-danger": "Cycling in the rain is dangerous",
}

CORE_ARGUMENTS: tuple[str, ...] = ("free", "comfort")

CORE_ATTACKS: tuple[AttackRule, ...] = (
    # CAR
    AttackRule("available", "expensive", "Car at hand offsets its cost"),
    AttackRule("time-saver", "overcrowded", "Driving skips the crowd"),
    # PUBLIC_TRANSPORT
    AttackRule("no-parking", "expensive", "No parking fees"),
    AttackRule("dense-network", "wait-time", "Frequent service offsets waiting"),
    AttackRule("wait-time", "no-driving", "Waiting spoils the easy ride"),
    # WALK
    AttackRule("short-distance", "too-slow", "Speed matters little on short trips"),
    AttackRule("relaxing", "too-slow", "A relaxing walk is worth the time"),
    # BIKE
    AttackRule("tiring", "fast-city", "Effort cancels the speed gain"),
    AttackRule("avoids-traffic", "tiring", "Skipping traffic is worth the effort"),
    AttackRule("eco-friendly", "tiring", "Green travel is worth the effort"),
    AttackRule("bike-lanes", "tiring", "Bike lanes make riding easy"),
)

CONDITIONAL_ATTACKS: tuple[ConditionalAttacks, ...] = (
    ConditionalAttacks(
        "low-health",
        lambda ctx: not ctx.is_healthy,
        (
            AttackRule("low-health", "free", "Walking is too hard when unwell"),
            AttackRule("low-health", "fast-city", "Cycling is too hard when unwell"),
        ),
    ),
    ConditionalAttacks(
        "long-distance",
        lambda ctx: ctx.distance > 50,
        (AttackRule("too-slow", "free", "Too far to walk comfortably"),),
    ),
    ConditionalAttacks(
        "very-long-distance",
        lambda ctx: ctx.distance > 70,
        (AttackRule("long-walk", "free", "Far too far to walk"),),
    ),
    ConditionalAttacks(
        "rush-hour",
        lambda ctx: ctx.is_rush_hour,
        (
            AttackRule("traffic-jam", "time-saver", "Jams kill the speed advantage"),
            AttackRule("overcrowded", "no-driving", "Packed vehicles are no rest"),
            AttackRule("saturated-network", "dense-network", "Saturation cancels frequency"),
        ),
    ),
    ConditionalAttacks(
        "rain",
        lambda ctx: ctx.weather == Weather.RAINY,
        (
            AttackRule("unreliable", "no-driving", "Rain disrupts service"),
            AttackRule("dry-car", "unreliable", "The car stays dry"),
            AttackRule("safer-than-bike", "rain-danger", "The car is safer in rain"),
            AttackRule("rain-danger", "fast-city", "Wet roads make cycling risky"),
            AttackRule("parking-far", "dry-car", "You still get wet reaching the car"),
            AttackRule("aquaplaning", "safer-than-bike", "Cars slide on wet roads too"),
        ),
    ),
)


class FrameworkBuilder:
    """
    Constructs argumentation frameworks from a travel Context.

    The tables default to the module constants; alternatives can be
    passed in to experiment with other argument catalogues.
    """

    def __init__(
        self,
        core_arguments: Sequence[str] = CORE_ARGUMENTS,
        core_attacks: Sequence[AttackRule] = CORE_ATTACKS,
        conditional_attacks: Sequence[ConditionalAttacks] = CONDITIONAL_ATTACKS,
        labels: Mapping[str, str] = ARGUMENT_LABELS,
    ):
        self.core_arguments = tuple(core_arguments)
        self.core_attacks = tuple(core_attacks)
        self.conditional_attacks = tuple(conditional_attacks)
        self.labels = dict(labels)

    def build(self, context: Context | Mapping) -> ArgumentationFramework:
        """
        Build a complete AF for one decision.

        Args:
            context: a Context, or a mapping validated into one
                (pydantic.ValidationError on unknown weather etc.)

        Returns:
            A frozen ArgumentationFramework ready for extension computation
        """
        if not isinstance(context, Context):
            context = Context.model_validate(context)

        store = ArgumentStore()

        # ── Core ────────────────────────────────────────────────
        for name in self.core_arguments:
            store.argument(name, self.labels.get(name, ""))
        for rule in self.core_attacks:
            store.attack(rule.attacker, rule.target, rule.reason, self.labels)

        # ── Context-gated attacks ───────────────────────────────
        fired = []
        for group in self.conditional_attacks:
            if not group.condition(context):
                continue
            fired.append(group.name)
            for rule in group.attacks:
                store.attack(rule.attacker, rule.target, rule.reason, self.labels)

        af = store.freeze()
        logger.debug(
            f"Built framework | distance={context.distance:.1f} "
            f"weather={context.weather.value} conditions={fired or 'none'} "
            f"args={len(af)} attacks={len(af.attacks)}"
        )
        return af
