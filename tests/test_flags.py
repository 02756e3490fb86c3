"""
Tests for flag derivation — keyword tables to classifier flags.
"""

import dataclasses

import pytest

from decisionsuite.flags import artifact_to_decision, derive_flags, evaluate_rule
from decisionsuite.models import FLAG_NAMES
from decisionsuite.schemas.artifact import validate_artifact
from decisionsuite.vocabulary import KEYWORD_RULES, Quantifier, all_terms, CONSTRAINT_TERMS, rules_catalogue


def _artifact(objective="Reduce churn", problem="Churn is rising",
              options=("Plan A", "Plan B"), assumptions=()):
    return validate_artifact({
        "objective": objective,
        "problem_statement": problem,
        "options": [{"text": t} for t in options],
        "assumptions": [{"text": t} for t in assumptions],
    })


class TestObjectiveFlags:

    def test_objective_present_after_validation(self):
        assert derive_flags(_artifact()).objective_present is True

    def test_effect_term(self):
        assert derive_flags(_artifact(objective="Improve retention")).objective_is_effect is True

    def test_no_effect_term(self):
        assert derive_flags(_artifact(objective="Select a vendor tool")).objective_is_effect is False

    def test_match_is_case_insensitive(self):
        assert derive_flags(_artifact(objective="MAXIMIZE uptime")).objective_is_effect is True

    def test_german_effect_term(self):
        assert derive_flags(_artifact(objective="Wir wollen die Marge erhöhen")).objective_is_effect is True

    def test_constraint_term(self):
        flags = derive_flags(_artifact(objective="Reduce churn within budget"))
        assert flags.objective_has_constraints is True

    def test_constraint_substring_match(self):
        # "time" is contained in "timeline"
        flags = derive_flags(_artifact(objective="Improve the timeline"))
        assert flags.objective_has_constraints is True


class TestOptionFlags:

    def test_implementation_option(self):
        flags = derive_flags(_artifact(options=("Buy a CRM platform", "Plan B")))
        assert flags.options_are_implementations is True

    def test_no_implementation_option(self):
        assert derive_flags(_artifact()).options_are_implementations is False

    def test_status_quo_excluded(self):
        assert derive_flags(_artifact()).status_quo_excluded is True

    def test_status_quo_present(self):
        flags = derive_flags(_artifact(options=("Stay with the current setup", "Plan B")))
        assert flags.status_quo_excluded is False

    def test_german_status_quo_present(self):
        flags = derive_flags(_artifact(options=("Alles so behalten", "Neu aufsetzen")))
        assert flags.status_quo_excluded is False


class TestAssumptionFlags:

    def test_outcome_assumption(self):
        flags = derive_flags(_artifact(assumptions=("This will be a success",)))
        assert flags.assumptions_are_outcomes is True

    def test_guaranteed_when_no_hedge(self):
        flags = derive_flags(_artifact(assumptions=("This will be a success",)))
        assert flags.assumptions_are_guaranteed is True

    def test_hedged_assumption_not_guaranteed(self):
        flags = derive_flags(_artifact(assumptions=(
            "This will be a success",
            "Users might adopt it quickly",
        )))
        assert flags.assumptions_are_guaranteed is False

    def test_no_assumptions_not_guaranteed(self):
        flags = derive_flags(_artifact(assumptions=()))
        assert flags.assumptions_are_outcomes is False
        assert flags.assumptions_are_guaranteed is False


class TestCausalLink:

    def test_because(self):
        flags = derive_flags(_artifact(problem="Churn rose because onboarding is slow"))
        assert flags.causal_link_explicit is True

    def test_german_causal(self):
        flags = derive_flags(_artifact(problem="Die Abwanderung steigt aufgrund langer Wartezeiten"))
        assert flags.causal_link_explicit is True

    def test_no_causal_term(self):
        assert derive_flags(_artifact()).causal_link_explicit is False


class TestRulesAsData:

    def test_every_flag_has_one_source(self):
        derived = {rule.flag for rule in KEYWORD_RULES} | {"objective_present"}
        assert derived == set(FLAG_NAMES)

    def test_all_flags_are_bools(self):
        flags = derive_flags(_artifact(assumptions=("Maybe a win",)))
        for name in FLAG_NAMES:
            assert isinstance(getattr(flags, name), bool), name

    def test_terms_union_both_locales(self):
        terms = all_terms(CONSTRAINT_TERMS)
        assert "cost" in terms and "kosten" in terms
        assert terms.count("budget") == 1

    def test_catalogue_lists_every_rule(self):
        catalogue = rules_catalogue()
        assert [r["flag"] for r in catalogue] == [rule.flag for rule in KEYWORD_RULES]
        assert set(catalogue[0]["terms"]) == {"de", "en"}

    def test_rules_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            KEYWORD_RULES[0].flag = "something_else"

    @pytest.mark.parametrize("rule", KEYWORD_RULES, ids=lambda r: r.flag)
    def test_rule_is_deterministic(self, rule):
        artifact = _artifact(assumptions=("Results are certain",))
        assert evaluate_rule(rule, artifact) == evaluate_rule(rule, artifact)

    def test_every_without_quantifier_used_for_guarantee(self):
        rule = next(r for r in KEYWORD_RULES if r.flag == "assumptions_are_guaranteed")
        assert rule.quantifier is Quantifier.EVERY_WITHOUT


class TestDecisionView:

    def test_decision_truncated_problem(self):
        decision = artifact_to_decision(_artifact(problem="x" * 150))
        assert decision.decision == "x" * 100
        assert decision.context == "x" * 150

    def test_decision_carries_texts(self):
        decision = artifact_to_decision(_artifact(assumptions=("A1",)))
        assert decision.options == ("Plan A", "Plan B")
        assert decision.assumptions == ("A1",)
