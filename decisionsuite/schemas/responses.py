"""
API Schemas — Response Models

Pydantic models documenting the Decision Suite API responses.
"""

from __future__ import annotations

from typing import Optional
from pydantic import BaseModel, Field


# ============================================================
# CLASSIFICATION
# ============================================================

class SignalsResponse(BaseModel):
    objective_present: bool
    objective_is_effect: bool
    objective_has_constraints: bool
    options_are_implementations: bool
    status_quo_excluded: bool
    assumptions_are_outcomes: bool
    assumptions_are_guaranteed: bool
    causal_link_explicit: bool


class FeedbackResponse(BaseModel):
    hint_label: str
    result_line: str
    focus_question: Optional[str] = Field(
        None, description="Absent when hint_band is NO_HINT.",
    )


class ArtifactResponse(BaseModel):
    """POST /artifacts response body."""
    signals: SignalsResponse
    hint_intensity: float = Field(..., ge=0.0, le=1.0)
    hint_band: str = Field(..., pattern="^(NO_HINT|CLARIFICATION_NEEDED|STRUCTURALLY_UNCLEAR)$")
    patterns_detected: list[str]
    primary_pattern: Optional[str] = None
    feedback: FeedbackResponse


class ErrorResponse(BaseModel):
    error_code: str
    message: str


# ============================================================
# STORED ARTIFACTS
# ============================================================

class StoredResult(BaseModel):
    signals: dict
    hint_intensity: float
    hint_band: str
    patterns_detected: list[str]
    feedback: dict
    created_at: str


class StoredArtifact(BaseModel):
    id: str
    objective: str
    problem_statement: str
    options: list[dict]
    assumptions: list[dict]
    hypotheses: list[dict]
    created_at: str
    artifact_results: list[StoredResult]


class ArtifactListResponse(BaseModel):
    """GET /artifacts response body."""
    artifacts: list[StoredArtifact]


# ============================================================
# CATALOGUE & HEALTH
# ============================================================

class PatternsResponse(BaseModel):
    suite_version: str
    patterns: list[dict]
    keyword_rules: list[dict]
    band_thresholds: dict


class HealthResponse(BaseModel):
    status: str
    version: str
    suite_version: str
    persistence: str
    outbox: dict
    rate_limit_enabled: bool
