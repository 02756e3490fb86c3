"""
Decision Suite — The Classification Engine

Composes the pipeline stages, strictly left to right:

  validate → derive flags → observe signals → detect patterns
           → score intensity → derive band → select primary pattern
           → detect language → resolve copy

Every stage is a pure function. The engine holds no mutable state,
performs no I/O and uses no clock or randomness, so the same
artifact always produces the same result and the same copy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from decisionsuite.feedback import resolve_copy
from decisionsuite.flags import artifact_to_decision, derive_flags
from decisionsuite.language import detect_language
from decisionsuite.models import AggregatedResult, ClassifierFlags, Copy, Decision, Locale
from decisionsuite.patterns import detect_patterns, select_primary_pattern
from decisionsuite.schemas.artifact import Artifact, validate_artifact
from decisionsuite.scorer import derive_hint_band, hint_intensity_breakdown
from decisionsuite.signals import observe_signals

SUITE_VERSION = "1.0.0"


@dataclass(frozen=True)
class SuiteEvaluation:
    """Everything one classification call produced."""
    artifact: Artifact
    decision: Decision
    flags: ClassifierFlags
    result: AggregatedResult
    locale: Locale
    copy: Copy
    breakdown: dict = field(default_factory=dict, compare=False)

    def to_response(self) -> dict:
        """The public response body: aggregated result plus feedback."""
        return {**self.result.to_dict(), "feedback": self.copy.to_dict()}


class DecisionSuite:
    """
    Stateless classification engine.

    Instantiated once as a module-level singleton, like any other
    collection of pure functions it is safe to share across threads
    and requests.
    """

    version = SUITE_VERSION

    def aggregate(
        self, artifact: Artifact,
    ) -> tuple[Decision, ClassifierFlags, AggregatedResult, dict]:
        """
        Run stages 2-7.

        Returns the decision view, the flags, the aggregated result and the
        intensity breakdown (base pattern and boosts) behind it.
        """
        flags = derive_flags(artifact)
        decision = artifact_to_decision(artifact)
        signals = observe_signals(flags)
        patterns = detect_patterns(decision, flags)
        hint_intensity, breakdown = hint_intensity_breakdown(patterns, signals)

        result = AggregatedResult(
            signals=signals,
            hint_intensity=hint_intensity,
            hint_band=derive_hint_band(hint_intensity),
            patterns_detected=tuple(patterns),
            primary_pattern=select_primary_pattern(patterns),
        )
        return decision, flags, result, breakdown

    def evaluate(self, artifact: Artifact) -> SuiteEvaluation:
        """Classify a validated artifact and resolve its feedback copy."""
        decision, flags, result, breakdown = self.aggregate(artifact)
        locale = detect_language(f"{artifact.problem_statement} {artifact.objective}")
        return SuiteEvaluation(
            artifact=artifact,
            decision=decision,
            flags=flags,
            result=result,
            locale=locale,
            copy=resolve_copy(result, locale),
            breakdown=breakdown,
        )

    def classify(self, payload: Any) -> SuiteEvaluation:
        """
        Validate a raw payload and classify it.

        Raises:
            ArtifactValidationError if the payload is not a valid artifact.
        """
        return self.evaluate(validate_artifact(payload))


# ============================================================
# SINGLETON: instantiated once, never mutated
# ============================================================

decision_suite = DecisionSuite()
