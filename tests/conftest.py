"""
Shared test setup.

Settings and API keys are read at import time, so the environment is
prepared here before any decisionsuite module is imported.
"""

import os
import tempfile

_TEST_DIR = tempfile.mkdtemp(prefix="decisionsuite-tests-")

os.environ.setdefault("DECISIONSUITE_ENV", "development")
os.environ["DECISIONSUITE_PERSISTENCE"] = "sqlite"
os.environ["DECISIONSUITE_DB_PATH"] = os.path.join(_TEST_DIR, "api.db")
os.environ["DECISIONSUITE_API_KEYS"] = "ds_test_key_alpha,ds_test_key_beta"
os.environ["DECISIONSUITE_APP_URL"] = ""
os.environ["DECISIONSUITE_RATE_LIMIT"] = "true"
os.environ["DECISIONSUITE_RATE_LIMIT_REQUESTS"] = "1000"

import pytest  # noqa: E402


@pytest.fixture
def artifact_payload():
    """A well-formed artifact that raises no structural hint."""
    return {
        "objective": "Reduce support cost by 20 percent",
        "problem_statement": "Support cost grew because ticket volume doubled",
        "options": [
            {"text": "Keep the current process"},
            {"text": "Hire two more agents"},
        ],
        "assumptions": [{"text": "Agents might handle more tickets"}],
    }
