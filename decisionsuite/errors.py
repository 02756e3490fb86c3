"""
Error Taxonomy

Every error raised by the suite carries a stable ``error_code`` and
the HTTP status the API answers with. The API layer copies both
verbatim into its response.

  - ArtifactValidationError:  malformed input, always surfaced with detail
  - PersistenceError:         storage failure, swallowed on the write path
  - IdentityResolutionError:  caller lookup failure, treated as anonymous
  - RateLimitExceeded:        caller exhausted the current window
  - OriginRejected:           state-changing request from a foreign origin
  - InternalError:            anything else, surfaced without detail
"""

from __future__ import annotations

from typing import Optional


class DecisionSuiteError(Exception):
    """Base class for all Decision Suite errors."""

    error_code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str, headers: Optional[dict[str, str]] = None):
        super().__init__(message)
        self.message = message
        self.headers = headers or {}

    def to_dict(self) -> dict:
        return {"error_code": self.error_code, "message": self.message}


class ArtifactValidationError(DecisionSuiteError):
    """Raised when a payload does not match the artifact contract."""

    error_code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, violations: list[str]):
        self.violations = list(violations)
        super().__init__("; ".join(self.violations))


class PersistenceError(DecisionSuiteError):
    error_code = "DATABASE_ERROR"
    status_code = 500


class IdentityResolutionError(DecisionSuiteError):
    error_code = "UNAUTHORIZED"
    status_code = 401


class RateLimitExceeded(DecisionSuiteError):
    error_code = "RATE_LIMITED"
    status_code = 429


class InternalError(DecisionSuiteError):
    error_code = "INTERNAL_ERROR"
    status_code = 500

    def __init__(self, message: str = "An unexpected error occurred"):
        super().__init__(message)


class OriginRejected(DecisionSuiteError):
    error_code = "FORBIDDEN"
    status_code = 403
