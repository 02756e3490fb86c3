"""
End-to-end tests for the classification engine.

If the engine doesn't classify these artifacts correctly, nothing
else matters.
"""

import pytest

from decisionsuite import SUITE_VERSION, DecisionSuite, decision_suite
from decisionsuite.errors import ArtifactValidationError
from decisionsuite.models import HintBand, Locale, Pattern


VENDOR_SELECTION = {
    "objective": "Select a vendor tool",
    "problem_statement": "We need a new CRM",
    "options": [{"text": "Tool A"}, {"text": "Tool B"}],
    "assumptions": [],
}

GUARANTEED_SUCCESS = {
    "objective": "Launch the new onboarding flow",
    "problem_statement": "Onboarding is slow",
    "options": [{"text": "Plan A"}, {"text": "Plan B"}],
    "assumptions": [{"text": "This will be a success"}],
}

GERMAN_SOFTWARE = {
    "objective": "Wir wollen die Kundenzufriedenheit verbessern",
    "problem_statement": "Die Kunden sind unzufrieden mit dem Support",
    "options": [{"text": "Neue Software einführen"}, {"text": "Externen Dienst beauftragen"}],
}


class TestSuiteVersion:

    def test_version(self):
        assert SUITE_VERSION == "1.0.0"
        assert decision_suite.version == SUITE_VERSION

    def test_singleton_is_engine(self):
        assert isinstance(decision_suite, DecisionSuite)


class TestVendorSelection:
    """Options are tools, the objective names no effect."""

    def test_flags(self):
        flags = decision_suite.classify(VENDOR_SELECTION).flags
        assert flags.options_are_implementations is True
        assert flags.status_quo_excluded is True
        assert flags.causal_link_explicit is False
        assert flags.objective_is_effect is False

    def test_result(self):
        result = decision_suite.classify(VENDOR_SELECTION).result
        # Means-before-ends needs an effect objective, so only vagueness fires
        assert result.patterns_detected == (Pattern.OBJECTIVE_VAGUENESS,)
        assert result.hint_intensity == pytest.approx(0.3)
        assert result.hint_band is HintBand.CLARIFICATION_NEEDED
        assert result.primary_pattern is Pattern.OBJECTIVE_VAGUENESS

    def test_copy(self):
        evaluation = decision_suite.classify(VENDOR_SELECTION)
        assert evaluation.locale is Locale.EN
        assert evaluation.copy.result_line == "The goal is recognizable but still vaguely defined."


class TestGuaranteedSuccess:
    """A certain outcome is stated as an assumption."""

    def test_flags(self):
        flags = decision_suite.classify(GUARANTEED_SUCCESS).flags
        assert flags.options_are_implementations is False
        assert flags.assumptions_are_outcomes is True
        assert flags.assumptions_are_guaranteed is True
        assert flags.causal_link_explicit is False

    def test_result(self):
        result = decision_suite.classify(GUARANTEED_SUCCESS).result
        assert Pattern.OUTCOME_AS_VALIDATION in result.patterns_detected
        assert result.hint_intensity >= 0.8
        assert result.hint_band is HintBand.STRUCTURALLY_UNCLEAR
        assert result.primary_pattern is Pattern.OUTCOME_AS_VALIDATION

    def test_copy(self):
        copy = decision_suite.classify(GUARANTEED_SUCCESS).copy
        assert copy.hint_label == "Structurally Unclear"
        assert copy.focus_question == "Which assumption would you test first – and how?"

    def test_breakdown(self):
        breakdown = decision_suite.classify(GUARANTEED_SUCCESS).breakdown
        assert breakdown["base_pattern"] == "OUTCOME_AS_VALIDATION"
        assert breakdown["boosts"] == ["outcomes_without_causal_link"]


class TestSingleOption:

    def test_rejected(self):
        payload = dict(VENDOR_SELECTION, options=[{"text": "Tool A"}])
        with pytest.raises(ArtifactValidationError) as exc_info:
            decision_suite.classify(payload)
        assert exc_info.value.error_code == "VALIDATION_ERROR"
        assert "At least 2 options" in exc_info.value.message


class TestGermanArtifact:

    def test_means_before_ends_in_german(self):
        evaluation = decision_suite.classify(GERMAN_SOFTWARE)
        assert evaluation.result.patterns_detected == (Pattern.MEANS_BEFORE_ENDS,)
        assert evaluation.result.hint_intensity == pytest.approx(0.6)
        assert evaluation.locale is Locale.DE
        assert evaluation.copy.hint_label == "Strukturell unklar"


class TestNoHint:

    def test_consistent_artifact(self, artifact_payload):
        evaluation = decision_suite.classify(artifact_payload)
        assert evaluation.result.patterns_detected == ()
        assert evaluation.result.hint_intensity == 0.0
        assert evaluation.result.hint_band is HintBand.NO_HINT
        assert evaluation.result.primary_pattern is None

    def test_response_omits_focus_question(self, artifact_payload):
        body = decision_suite.classify(artifact_payload).to_response()
        assert body["hint_band"] == "NO_HINT"
        assert body["primary_pattern"] is None
        assert body["feedback"] == {
            "hint_label": "No Structural Hint",
            "result_line": "The decision structure appears consistent.",
        }


class TestDeterminism:

    @pytest.mark.parametrize("payload", [VENDOR_SELECTION, GUARANTEED_SUCCESS, GERMAN_SOFTWARE])
    def test_same_input_same_output(self, payload):
        first = decision_suite.classify(payload).to_response()
        for _ in range(5):
            assert decision_suite.classify(payload).to_response() == first

    def test_fresh_engine_agrees(self):
        assert DecisionSuite().classify(GUARANTEED_SUCCESS).to_response() == \
            decision_suite.classify(GUARANTEED_SUCCESS).to_response()

    def test_response_shape(self):
        body = decision_suite.classify(GUARANTEED_SUCCESS).to_response()
        assert set(body) == {
            "signals", "hint_intensity", "hint_band",
            "patterns_detected", "primary_pattern", "feedback",
        }
        assert len(body["signals"]) == 8
        assert set(body["feedback"]) == {"hint_label", "result_line", "focus_question"}
