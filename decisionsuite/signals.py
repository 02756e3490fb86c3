"""
Signal Observer — ClassifierFlags to Signals

Observes structural signals, does not judge them. A signal is True
only when the underlying flag is the boolean ``True``; any other
value, truthy or not, is observed as False.

This layer keeps the guarantee stable even if flag derivation
changes internally.
"""

from __future__ import annotations

from decisionsuite.models import ClassifierFlags, Signals


def observe_objective_signals(flags: ClassifierFlags) -> dict[str, bool]:
    return {
        "objective_present": flags.objective_present is True,
        "objective_is_effect": flags.objective_is_effect is True,
        "objective_has_constraints": flags.objective_has_constraints is True,
    }


def observe_options_signals(flags: ClassifierFlags) -> dict[str, bool]:
    return {
        "options_are_implementations": flags.options_are_implementations is True,
        "status_quo_excluded": flags.status_quo_excluded is True,
    }


def observe_assumptions_signals(flags: ClassifierFlags) -> dict[str, bool]:
    return {
        "assumptions_are_outcomes": flags.assumptions_are_outcomes is True,
        "assumptions_are_guaranteed": flags.assumptions_are_guaranteed is True,
    }


def observe_evidence_signals(flags: ClassifierFlags) -> dict[str, bool]:
    return {
        "causal_link_explicit": flags.causal_link_explicit is True,
    }


def observe_signals(flags: ClassifierFlags) -> Signals:
    """Observe every structural signal. Only explicit True survives."""
    return Signals(
        **observe_objective_signals(flags),
        **observe_options_signals(flags),
        **observe_assumptions_signals(flags),
        **observe_evidence_signals(flags),
    )
