"""
Core Data Structures

Immutable value objects passed between pipeline stages. Every
instance is created fresh for a single classification call.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, fields
from enum import Enum
from typing import Optional


class Pattern(str, Enum):
    """Named structural anti-patterns. Declaration order is priority order."""

    OUTCOME_AS_VALIDATION = "OUTCOME_AS_VALIDATION"
    MEANS_BEFORE_ENDS = "MEANS_BEFORE_ENDS"
    OBJECTIVE_VAGUENESS = "OBJECTIVE_VAGUENESS"


class HintBand(str, Enum):
    """Discrete hint bands, ordered by increasing intensity."""

    NO_HINT = "NO_HINT"
    CLARIFICATION_NEEDED = "CLARIFICATION_NEEDED"
    STRUCTURALLY_UNCLEAR = "STRUCTURALLY_UNCLEAR"


class Locale(str, Enum):
    DE = "de"
    EN = "en"


@dataclass(frozen=True)
class Decision:
    """Reduced view of an artifact used by the pattern rules."""
    decision: str
    context: str
    objective: str
    options: tuple[str, ...]
    assumptions: tuple[str, ...]


@dataclass(frozen=True)
class ClassifierFlags:
    """The eight structural flags derived from an artifact's text."""
    objective_present: bool
    objective_is_effect: bool
    objective_has_constraints: bool
    options_are_implementations: bool
    status_quo_excluded: bool
    assumptions_are_outcomes: bool
    assumptions_are_guaranteed: bool
    causal_link_explicit: bool

    def to_dict(self) -> dict[str, bool]:
        return asdict(self)


@dataclass(frozen=True)
class Signals(ClassifierFlags):
    """Observed signals. Same shape as the flags they were observed from."""


FLAG_NAMES: tuple[str, ...] = tuple(f.name for f in fields(ClassifierFlags))


@dataclass(frozen=True)
class AggregatedResult:
    """The full classification outcome, minus user-facing copy."""
    signals: Signals
    hint_intensity: float
    hint_band: HintBand
    patterns_detected: tuple[Pattern, ...]
    primary_pattern: Optional[Pattern]

    def to_dict(self) -> dict:
        return {
            "signals": self.signals.to_dict(),
            "hint_intensity": self.hint_intensity,
            "hint_band": self.hint_band.value,
            "patterns_detected": [p.value for p in self.patterns_detected],
            "primary_pattern": self.primary_pattern.value if self.primary_pattern else None,
        }


@dataclass(frozen=True)
class Copy:
    """User-facing feedback text."""
    hint_label: str
    result_line: str
    focus_question: Optional[str] = None

    def to_dict(self) -> dict[str, str]:
        out = {"hint_label": self.hint_label, "result_line": self.result_line}
        if self.focus_question is not None:
            out["focus_question"] = self.focus_question
        return out
