"""
Flag Deriver — Artifact to ClassifierFlags

Deterministic derivation of the eight structural flags from a
validated artifact. No model, no scoring, only the keyword rules
declared in vocabulary.py.

Conservative: a flag is True only when its rule is explicitly
satisfied. The single structural flag (objective_present) is computed
here directly; everything else is table-driven.
"""

from __future__ import annotations

from decisionsuite.models import ClassifierFlags, Decision
from decisionsuite.schemas.artifact import Artifact
from decisionsuite.vocabulary import KEYWORD_RULES, KeywordRule, Quantifier, Source

DECISION_TITLE_LENGTH = 100


def _texts(artifact: Artifact, source: Source) -> tuple[str, ...]:
    if source is Source.OBJECTIVE:
        return (artifact.objective,)
    if source is Source.PROBLEM_STATEMENT:
        return (artifact.problem_statement,)
    if source is Source.OPTIONS:
        return tuple(option.text for option in artifact.options)
    return tuple(assumption.text for assumption in artifact.assumptions)


def _contains_any(text: str, terms: tuple[str, ...]) -> bool:
    lowered = text.lower()
    return any(term in lowered for term in terms)


def evaluate_rule(rule: KeywordRule, artifact: Artifact) -> bool:
    """Evaluate one keyword rule against an artifact."""
    for required in rule.requires:
        if not any(_texts(artifact, required)):
            return False

    texts = _texts(artifact, rule.source)
    terms = rule.terms
    hits = [_contains_any(text, terms) for text in texts]

    if rule.quantifier is Quantifier.ANY:
        return any(hits)
    if rule.quantifier is Quantifier.NONE:
        return not any(hits)
    # EVERY_WITHOUT: nothing can be guaranteed if nothing was asserted
    return len(texts) > 0 and not any(hits)


def derive_flags(artifact: Artifact) -> ClassifierFlags:
    """Derive all eight classifier flags from an artifact."""
    values = {rule.flag: evaluate_rule(rule, artifact) for rule in KEYWORD_RULES}
    values["objective_present"] = len(artifact.objective) > 0
    return ClassifierFlags(**values)


def artifact_to_decision(artifact: Artifact) -> Decision:
    """Reduce an artifact to the Decision view used by pattern rules."""
    return Decision(
        decision=artifact.problem_statement[:DECISION_TITLE_LENGTH] or "Decision",
        context=artifact.problem_statement,
        objective=artifact.objective,
        options=tuple(option.text for option in artifact.options),
        assumptions=tuple(assumption.text for assumption in artifact.assumptions),
    )
