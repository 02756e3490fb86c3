"""
Pattern Detector — Structural Anti-Patterns

Three independent boolean rules over the classifier flags. Patterns
are not mutually exclusive: an artifact may show none, one, or all
of them.

Each rule fires only when every condition is explicitly met; flags
are compared with ``is True`` / ``is False``, never by truthiness.

The priority order used to pick a primary pattern is a module
constant and is independent of detection order.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Iterable, Optional, Union

from decisionsuite.models import ClassifierFlags, Decision, Pattern


@dataclass(frozen=True)
class PatternDefinition:
    id: Pattern
    name: str
    description: str
    base_weight: float


PATTERN_DEFINITIONS = MappingProxyType({
    Pattern.OUTCOME_AS_VALIDATION: PatternDefinition(
        id=Pattern.OUTCOME_AS_VALIDATION,
        name="Outcome Used as Validation",
        description=(
            "An expected result is stated as a certain assumption, with no "
            "causal explanation and no hedging."
        ),
        base_weight=0.8,
    ),
    Pattern.MEANS_BEFORE_ENDS: PatternDefinition(
        id=Pattern.MEANS_BEFORE_ENDS,
        name="Means Before Ends",
        description=(
            "The options are concrete implementations while the purpose they "
            "serve stays implicit and doing nothing is not considered."
        ),
        base_weight=0.5,
    ),
    Pattern.OBJECTIVE_VAGUENESS: PatternDefinition(
        id=Pattern.OBJECTIVE_VAGUENESS,
        name="Objective Vagueness",
        description="The objective is missing or names a topic instead of an effect.",
        base_weight=0.3,
    ),
})

# Highest priority first
PATTERN_PRIORITY: tuple[Pattern, ...] = (
    Pattern.OUTCOME_AS_VALIDATION,
    Pattern.MEANS_BEFORE_ENDS,
    Pattern.OBJECTIVE_VAGUENESS,
)


# ============================================================
# RULES
# ============================================================

def _means_before_ends(flags: ClassifierFlags) -> bool:
    return (
        flags.options_are_implementations is True
        and flags.causal_link_explicit is False
        and flags.status_quo_excluded is True
        and flags.objective_has_constraints is False
        and (
            flags.objective_present is False
            or (flags.objective_is_effect is True and flags.objective_has_constraints is False)
        )
    )


def _objective_vagueness(flags: ClassifierFlags) -> bool:
    return flags.objective_present is False or flags.objective_is_effect is False


def _outcome_as_validation(flags: ClassifierFlags) -> bool:
    return (
        flags.options_are_implementations is False
        and flags.assumptions_are_outcomes is True
        and flags.assumptions_are_guaranteed is True
        and flags.causal_link_explicit is False
    )


# Evaluation order, not priority order
_RULES = (
    (Pattern.MEANS_BEFORE_ENDS, _means_before_ends),
    (Pattern.OBJECTIVE_VAGUENESS, _objective_vagueness),
    (Pattern.OUTCOME_AS_VALIDATION, _outcome_as_validation),
)


def detect_patterns(decision: Decision, flags: ClassifierFlags) -> list[Pattern]:
    """
    Detect structural patterns. Observation only, no judgement.

    The decision view is accepted for rule context; current rules read
    the flags alone.
    """
    return [pattern for pattern, rule in _RULES if rule(flags)]


def _normalize(patterns: Iterable[Union[Pattern, str]]) -> set[str]:
    return {p.value if isinstance(p, Pattern) else str(p) for p in patterns}


def select_primary_pattern(patterns: Iterable[Union[Pattern, str]]) -> Optional[Pattern]:
    """
    Pick the highest-priority pattern present.

    Returns None for an empty input or when no known pattern is present.
    Input order does not matter.
    """
    present = _normalize(patterns)
    if not present:
        return None
    for pattern in PATTERN_PRIORITY:
        if pattern.value in present:
            return pattern
    return None


def patterns_catalogue() -> list[dict]:
    """The pattern surface exposed by GET /patterns."""
    return [
        {
            "id": d.id.value,
            "name": d.name,
            "description": d.description,
            "priority": PATTERN_PRIORITY.index(d.id) + 1,
            "base_weight": d.base_weight,
        }
        for d in (PATTERN_DEFINITIONS[p] for p in PATTERN_PRIORITY)
    ]
