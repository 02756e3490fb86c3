"""
Hint Intensity Scorer and Band Derivation

Computes a 0.0-1.0 hint intensity from detected patterns and
observed signals, then discretizes it into a hint band.

Intensity = max base weight of the patterns present (never the sum),
plus up to two +0.1 boosts, capped at 1.0:
  - Boost A: objective names an effect but no constraint
  - Boost B: assumptions state outcomes with no explicit causal link

Bands (v1):
  intensity <  0.15          → NO_HINT
  0.15 <= intensity <= 0.45  → CLARIFICATION_NEEDED
  intensity >  0.45          → STRUCTURALLY_UNCLEAR
"""

from __future__ import annotations

from typing import Iterable, Union

from decisionsuite.models import HintBand, Pattern, Signals
from decisionsuite.patterns import PATTERN_DEFINITIONS

BOOST = 0.1
MAX_INTENSITY = 1.0

NO_HINT_BELOW = 0.15
UNCLEAR_ABOVE = 0.45


def _clamp(value: float) -> float:
    return max(0.0, min(MAX_INTENSITY, value))


def hint_intensity_breakdown(
    patterns: Iterable[Union[Pattern, str]],
    signals: Signals,
) -> tuple[float, dict]:
    """
    Calculate hint intensity together with the contributions behind it.

    Returns:
        (intensity, breakdown) where breakdown lists the base weight and
        every boost applied.
    """
    present = [p.value if isinstance(p, Pattern) else str(p) for p in patterns]
    breakdown: dict = {"base_weight": 0.0, "base_pattern": None, "boosts": []}

    if not present:
        breakdown["final_intensity"] = 0.0
        return 0.0, breakdown

    intensity = 0.0
    for definition in PATTERN_DEFINITIONS.values():
        if definition.id.value in present and definition.base_weight > intensity:
            intensity = definition.base_weight
            breakdown["base_pattern"] = definition.id.value
    breakdown["base_weight"] = intensity

    # Boosts only amplify an existing hint
    if intensity > 0:
        if not signals.objective_has_constraints and signals.objective_is_effect:
            intensity = min(intensity + BOOST, MAX_INTENSITY)
            breakdown["boosts"].append("objective_without_constraints")
        if not signals.causal_link_explicit and signals.assumptions_are_outcomes:
            intensity = min(intensity + BOOST, MAX_INTENSITY)
            breakdown["boosts"].append("outcomes_without_causal_link")

    final = _clamp(intensity)
    breakdown["final_intensity"] = final
    return final, breakdown


def calculate_hint_intensity(
    patterns: Iterable[Union[Pattern, str]],
    signals: Signals,
) -> float:
    """Hint intensity in [0.0, 1.0]. No patterns means 0.0."""
    intensity, _ = hint_intensity_breakdown(patterns, signals)
    return intensity


def derive_hint_band(hint_intensity: float) -> HintBand:
    """Map an intensity to its band. Total over all floats; input is clamped."""
    clamped = _clamp(hint_intensity)

    if clamped < NO_HINT_BELOW:
        return HintBand.NO_HINT
    if clamped <= UNCLEAR_ABOVE:
        return HintBand.CLARIFICATION_NEEDED
    return HintBand.STRUCTURALLY_UNCLEAR
