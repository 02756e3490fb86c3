"""
Artifact Schema — The Validated Input Contract

A structured decision description: objective, problem statement,
options, assumptions and hypotheses. Artifacts are the single source
of truth for classification; nothing is inferred beyond what the
user wrote into these fields.

Validation is strict at the top level (unknown keys are rejected)
and lenient inside list entries (unknown keys are dropped).
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from decisionsuite.errors import ArtifactValidationError


MIN_OPTIONS = 2


class Option(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    text: str = Field(..., min_length=1)
    trade_offs: Optional[str] = None


class Assumption(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    text: str = Field(..., min_length=1)
    evidence: Optional[str] = None


class Hypothesis(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    text: str = Field(..., min_length=1)
    test: Optional[str] = None


class Artifact(BaseModel):
    """A user-submitted decision description."""

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        json_schema_extra={"examples": [{
            "objective": "Reduce onboarding time for new customers",
            "problem_statement": "Churn is high because onboarding takes three weeks",
            "options": [
                {"text": "Keep the current onboarding process"},
                {"text": "Introduce a guided setup call"},
            ],
            "assumptions": [{"text": "Customers might accept a scheduled call"}],
        }]},
    )

    objective: str = Field(..., min_length=1)
    problem_statement: str = Field(..., min_length=1)
    options: tuple[Option, ...] = Field(..., min_length=MIN_OPTIONS)
    assumptions: tuple[Assumption, ...] = ()
    hypotheses: tuple[Hypothesis, ...] = ()

    def to_payload(self) -> dict:
        """JSON-safe representation, used by persistence sinks."""
        return self.model_dump(mode="json", exclude_none=True)


# ============================================================
# VALIDATION
# ============================================================

_FIELD_LABELS = {
    "objective": "Objective",
    "problem_statement": "Problem statement",
    "options": "Options",
    "assumptions": "Assumptions",
    "hypotheses": "Hypotheses",
}

_ENTRY_LABELS = {
    "options": "Option",
    "assumptions": "Assumption",
    "hypotheses": "Hypothesis",
}


def _label(loc: tuple) -> str:
    """Turn a pydantic error location into a readable field name."""
    if not loc:
        return "Artifact"
    head = loc[0]
    if len(loc) == 1:
        return _FIELD_LABELS.get(head, str(head))
    entry = _ENTRY_LABELS.get(head, str(head))
    label = f"{entry} {loc[1] + 1}" if isinstance(loc[1], int) else entry
    if len(loc) > 2:
        label = f"{label} {'.'.join(str(part) for part in loc[2:])}"
    return label


def _describe(error: dict) -> str:
    """One human-readable sentence per violated constraint."""
    kind = error["type"]
    loc = tuple(error.get("loc", ()))
    ctx = error.get("ctx") or {}
    label = _label(loc)

    if kind == "extra_forbidden":
        return f"Unrecognized field: '{loc[-1]}'"
    if kind == "missing":
        return f"{label} is required"
    if kind == "string_too_short":
        return f"{label} must be at least {ctx.get('min_length', 1)} character long"
    if kind == "too_short" and loc == ("options",):
        return f"At least {ctx.get('min_length', MIN_OPTIONS)} options are required"
    if kind == "string_type":
        return f"{label} must be a string"
    if kind in ("list_type", "tuple_type"):
        return f"{label} must be a list"
    if kind in ("model_type", "model_attributes_type", "dict_type"):
        return f"{label} must be an object"
    return f"{label}: {error.get('msg', 'invalid value')}"


def validate_artifact(payload: Any) -> Artifact:
    """
    Validate a raw payload into an Artifact.

    Raises:
        ArtifactValidationError listing every violated constraint.
    """
    if not isinstance(payload, dict):
        raise ArtifactValidationError(["Request body must be a JSON object"])
    try:
        return Artifact.model_validate(payload)
    except ValidationError as e:
        raise ArtifactValidationError([_describe(err) for err in e.errors()]) from e
