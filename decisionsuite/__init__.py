"""
Decision Suite — Deterministic Decision-Artifact Classifier

Reads a structured decision (objective, problem statement, options,
assumptions) and reports which structural signals it shows, which
anti-patterns it falls into, how strongly it needs clarification,
and what to ask the author next. No model, no randomness, no I/O.

Public API:
  - decision_suite:          Singleton engine (validate → classify → copy)
  - validate_artifact:       Raw payload → Artifact, or ArtifactValidationError
  - derive_flags:            Artifact → ClassifierFlags
  - observe_signals:         ClassifierFlags → Signals
  - detect_patterns:         (Decision, ClassifierFlags) → patterns
  - calculate_hint_intensity / derive_hint_band / select_primary_pattern
  - detect_language:         Text → Locale
  - resolve_copy:            (AggregatedResult, Locale) → Copy
  - Outbox / ArtifactSink:   Fire-and-forget persistence

Usage:
    from decisionsuite import decision_suite
    evaluation = decision_suite.classify(payload)
    body = evaluation.to_response()
"""

__version__ = "1.0.0"

from decisionsuite.errors import (
    DecisionSuiteError,
    ArtifactValidationError,
    PersistenceError,
    IdentityResolutionError,
    InternalError,
)
from decisionsuite.models import (
    AggregatedResult,
    ClassifierFlags,
    Copy,
    Decision,
    HintBand,
    Locale,
    Pattern,
    Signals,
)
from decisionsuite.schemas.artifact import Artifact, validate_artifact
from decisionsuite.flags import derive_flags, artifact_to_decision
from decisionsuite.signals import observe_signals
from decisionsuite.patterns import detect_patterns, select_primary_pattern, PATTERN_PRIORITY
from decisionsuite.scorer import calculate_hint_intensity, derive_hint_band
from decisionsuite.language import detect_language
from decisionsuite.feedback import resolve_copy
from decisionsuite.suite import decision_suite, DecisionSuite, SuiteEvaluation, SUITE_VERSION
from decisionsuite.outbox import Outbox, ArtifactSink, SQLiteArtifactSink, NullArtifactSink

__all__ = [
    "DecisionSuiteError",
    "ArtifactValidationError",
    "PersistenceError",
    "IdentityResolutionError",
    "InternalError",
    "AggregatedResult",
    "ClassifierFlags",
    "Copy",
    "Decision",
    "HintBand",
    "Locale",
    "Pattern",
    "Signals",
    "Artifact",
    "validate_artifact",
    "derive_flags",
    "artifact_to_decision",
    "observe_signals",
    "detect_patterns",
    "select_primary_pattern",
    "PATTERN_PRIORITY",
    "calculate_hint_intensity",
    "derive_hint_band",
    "detect_language",
    "resolve_copy",
    "decision_suite",
    "DecisionSuite",
    "SuiteEvaluation",
    "SUITE_VERSION",
    "Outbox",
    "ArtifactSink",
    "SQLiteArtifactSink",
    "NullArtifactSink",
]
