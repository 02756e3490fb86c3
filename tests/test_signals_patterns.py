"""
Tests for signal observation and pattern detection.

Rules fire on explicit booleans only. Truthy stand-ins such as 1 or
"yes" must never trigger anything.
"""

import pytest

from decisionsuite.models import ClassifierFlags, Decision, Pattern, Signals
from decisionsuite.patterns import (
    PATTERN_DEFINITIONS,
    PATTERN_PRIORITY,
    detect_patterns,
    patterns_catalogue,
    select_primary_pattern,
)
from decisionsuite.signals import observe_signals

DECISION = Decision(
    decision="Pick a path",
    context="Pick a path",
    objective="Reduce churn",
    options=("Plan A", "Plan B"),
    assumptions=(),
)


def make_flags(**overrides) -> ClassifierFlags:
    """A clean baseline: effect objective, nothing else flagged."""
    values = {
        "objective_present": True,
        "objective_is_effect": True,
        "objective_has_constraints": False,
        "options_are_implementations": False,
        "status_quo_excluded": False,
        "assumptions_are_outcomes": False,
        "assumptions_are_guaranteed": False,
        "causal_link_explicit": False,
    }
    values.update(overrides)
    return ClassifierFlags(**values)


class TestSignalObserver:

    def test_copies_true_flags(self):
        signals = observe_signals(make_flags(status_quo_excluded=True))
        assert isinstance(signals, Signals)
        assert signals.status_quo_excluded is True
        assert signals.objective_is_effect is True

    def test_truthy_values_observed_as_false(self):
        signals = observe_signals(make_flags(
            objective_is_effect=1,
            options_are_implementations="yes",
            causal_link_explicit=[True],
        ))
        assert signals.objective_is_effect is False
        assert signals.options_are_implementations is False
        assert signals.causal_link_explicit is False

    def test_same_shape_as_flags(self):
        flags = make_flags()
        assert observe_signals(flags).to_dict() == flags.to_dict()


class TestNoPatterns:

    def test_clean_baseline(self):
        assert detect_patterns(DECISION, make_flags()) == []


class TestObjectiveVagueness:

    def test_objective_not_effect(self):
        assert detect_patterns(DECISION, make_flags(objective_is_effect=False)) == [
            Pattern.OBJECTIVE_VAGUENESS,
        ]

    def test_objective_absent(self):
        flags = make_flags(objective_present=False)
        assert Pattern.OBJECTIVE_VAGUENESS in detect_patterns(DECISION, flags)

    def test_non_bool_does_not_fire(self):
        flags = make_flags(objective_is_effect=0)
        assert detect_patterns(DECISION, flags) == []


class TestMeansBeforeEnds:

    def _flags(self, **overrides):
        base = dict(options_are_implementations=True, status_quo_excluded=True)
        base.update(overrides)
        return make_flags(**base)

    def test_fires_with_effect_objective(self):
        assert detect_patterns(DECISION, self._flags()) == [Pattern.MEANS_BEFORE_ENDS]

    def test_fires_with_absent_objective(self):
        flags = self._flags(objective_present=False, objective_is_effect=False)
        assert detect_patterns(DECISION, flags) == [
            Pattern.MEANS_BEFORE_ENDS,
            Pattern.OBJECTIVE_VAGUENESS,
        ]

    def test_blocked_by_causal_link(self):
        assert Pattern.MEANS_BEFORE_ENDS not in detect_patterns(
            DECISION, self._flags(causal_link_explicit=True))

    def test_blocked_by_status_quo_option(self):
        assert Pattern.MEANS_BEFORE_ENDS not in detect_patterns(
            DECISION, self._flags(status_quo_excluded=False))

    def test_blocked_by_constraints(self):
        assert Pattern.MEANS_BEFORE_ENDS not in detect_patterns(
            DECISION, self._flags(objective_has_constraints=True))

    def test_blocked_by_non_effect_objective(self):
        detected = detect_patterns(DECISION, self._flags(objective_is_effect=False))
        assert detected == [Pattern.OBJECTIVE_VAGUENESS]


class TestOutcomeAsValidation:

    def _flags(self, **overrides):
        base = dict(assumptions_are_outcomes=True, assumptions_are_guaranteed=True)
        base.update(overrides)
        return make_flags(**base)

    def test_fires(self):
        assert detect_patterns(DECISION, self._flags()) == [Pattern.OUTCOME_AS_VALIDATION]

    def test_blocked_by_hedging(self):
        assert detect_patterns(DECISION, self._flags(assumptions_are_guaranteed=False)) == []

    def test_blocked_by_implementation_options(self):
        assert Pattern.OUTCOME_AS_VALIDATION not in detect_patterns(
            DECISION, self._flags(options_are_implementations=True))

    def test_blocked_by_causal_link(self):
        assert detect_patterns(DECISION, self._flags(causal_link_explicit=True)) == []

    def test_combined_with_vagueness(self):
        detected = detect_patterns(DECISION, self._flags(objective_is_effect=False))
        assert set(detected) == {Pattern.OBJECTIVE_VAGUENESS, Pattern.OUTCOME_AS_VALIDATION}


class TestPrimaryPattern:

    def test_empty(self):
        assert select_primary_pattern([]) is None

    def test_priority_order(self):
        assert select_primary_pattern([
            Pattern.OBJECTIVE_VAGUENESS,
            Pattern.MEANS_BEFORE_ENDS,
            Pattern.OUTCOME_AS_VALIDATION,
        ]) is Pattern.OUTCOME_AS_VALIDATION

    def test_order_independent(self):
        a = select_primary_pattern([Pattern.OBJECTIVE_VAGUENESS, Pattern.MEANS_BEFORE_ENDS])
        b = select_primary_pattern([Pattern.MEANS_BEFORE_ENDS, Pattern.OBJECTIVE_VAGUENESS])
        assert a is b is Pattern.MEANS_BEFORE_ENDS

    def test_accepts_strings(self):
        assert select_primary_pattern(["OBJECTIVE_VAGUENESS"]) is Pattern.OBJECTIVE_VAGUENESS

    def test_unknown_ids_ignored(self):
        assert select_primary_pattern(["NOT_A_PATTERN"]) is None
        assert select_primary_pattern(["NOT_A_PATTERN", "MEANS_BEFORE_ENDS"]) is Pattern.MEANS_BEFORE_ENDS


class TestCatalogue:

    def test_priority_is_declaration_order(self):
        assert PATTERN_PRIORITY == tuple(Pattern)

    def test_weights(self):
        assert PATTERN_DEFINITIONS[Pattern.OUTCOME_AS_VALIDATION].base_weight == 0.8
        assert PATTERN_DEFINITIONS[Pattern.MEANS_BEFORE_ENDS].base_weight == 0.5
        assert PATTERN_DEFINITIONS[Pattern.OBJECTIVE_VAGUENESS].base_weight == 0.3

    def test_catalogue_ranked(self):
        catalogue = patterns_catalogue()
        assert [p["id"] for p in catalogue] == [p.value for p in PATTERN_PRIORITY]
        assert [p["priority"] for p in catalogue] == [1, 2, 3]

    def test_definitions_read_only(self):
        with pytest.raises(TypeError):
            PATTERN_DEFINITIONS[Pattern.OBJECTIVE_VAGUENESS] = None
