"""
Outbox — Fire-and-Forget Persistence

Classification never waits for storage. The API hands each
(artifact, result) pair to the outbox, which delivers it to a sink
in the background. A failed delivery is logged and dropped: stored
results are analytics only, so nothing is retried.

Sinks implement ArtifactSink. The core never imports a concrete
sink; the API wires one in at startup via get_sink().
"""

from __future__ import annotations

import asyncio
import json
import sqlite3
import threading
import uuid
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Optional

from decisionsuite.errors import PersistenceError
from decisionsuite.logging import describe_error, get_logger
from decisionsuite.models import AggregatedResult, Copy
from decisionsuite.schemas.artifact import Artifact

logger = get_logger("outbox")


# ============================================================
# SINKS
# ============================================================

class ArtifactSink(ABC):
    """Abstract storage for classified artifacts."""

    @abstractmethod
    def save(
        self,
        user_id: str,
        artifact: Artifact,
        result: AggregatedResult,
        copy: Copy,
    ) -> str:
        """Store an artifact and its result. Returns the artifact id."""
        ...

    @abstractmethod
    def recent(self, user_id: str, limit: int = 10) -> list[dict]:
        """Most recent artifacts of a user, newest first, with results."""
        ...


class NullArtifactSink(ArtifactSink):
    """Discards everything. Used when persistence is switched off."""

    def save(self, user_id, artifact, result, copy) -> str:
        return ""

    def recent(self, user_id: str, limit: int = 10) -> list[dict]:
        return []


class SQLiteArtifactSink(ArtifactSink):
    """Artifact store backed by SQLite: one row per artifact, one per result."""

    def __init__(self, db_path: str = "decisionsuite.db"):
        self.db_path = db_path
        self._lock = threading.Lock()
        self._init_db()

    def _init_db(self):
        with self._get_conn() as conn:
            conn.execute("""
                CREATE TABLE IF NOT EXISTS artifacts (
                    id TEXT PRIMARY KEY,
                    user_id TEXT NOT NULL,
                    objective TEXT NOT NULL,
                    problem_statement TEXT NOT NULL,
                    options TEXT NOT NULL,
                    assumptions TEXT NOT NULL,
                    hypotheses TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE TABLE IF NOT EXISTS artifact_results (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    artifact_id TEXT NOT NULL REFERENCES artifacts(id),
                    signals TEXT NOT NULL,
                    hint_intensity REAL NOT NULL,
                    hint_band TEXT NOT NULL,
                    patterns_detected TEXT NOT NULL,
                    feedback TEXT NOT NULL,
                    created_at TEXT NOT NULL
                )
            """)
            conn.execute("""
                CREATE INDEX IF NOT EXISTS idx_artifacts_user
                ON artifacts(user_id, created_at)
            """)
            conn.commit()

    def _get_conn(self) -> sqlite3.Connection:
        return sqlite3.connect(self.db_path)

    def save(
        self,
        user_id: str,
        artifact: Artifact,
        result: AggregatedResult,
        copy: Copy,
    ) -> str:
        payload = artifact.to_payload()
        summary = result.to_dict()
        artifact_id = uuid.uuid4().hex
        created_at = datetime.now(timezone.utc).isoformat()

        try:
            with self._lock:
                with self._get_conn() as conn:
                    conn.execute(
                        """INSERT INTO artifacts
                           (id, user_id, objective, problem_statement,
                            options, assumptions, hypotheses, created_at)
                           VALUES (?, ?, ?, ?, ?, ?, ?, ?)""",
                        (
                            artifact_id, user_id,
                            payload["objective"], payload["problem_statement"],
                            json.dumps(payload["options"]),
                            json.dumps(payload["assumptions"]),
                            json.dumps(payload["hypotheses"]),
                            created_at,
                        ),
                    )
                    conn.execute(
                        """INSERT INTO artifact_results
                           (artifact_id, signals, hint_intensity, hint_band,
                            patterns_detected, feedback, created_at)
                           VALUES (?, ?, ?, ?, ?, ?, ?)""",
                        (
                            artifact_id,
                            json.dumps(summary["signals"]),
                            summary["hint_intensity"],
                            summary["hint_band"],
                            json.dumps(summary["patterns_detected"]),
                            json.dumps(copy.to_dict()),
                            created_at,
                        ),
                    )
                    conn.commit()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to persist artifact: {e}") from e
        return artifact_id

    def recent(self, user_id: str, limit: int = 10) -> list[dict]:
        try:
            with self._get_conn() as conn:
                rows = conn.execute(
                    """SELECT id, objective, problem_statement, options,
                              assumptions, hypotheses, created_at
                       FROM artifacts WHERE user_id = ?
                       ORDER BY created_at DESC, rowid DESC LIMIT ?""",
                    (user_id, limit),
                ).fetchall()
                results: dict[str, list[dict]] = {r[0]: [] for r in rows}
                if results:
                    marks = ",".join("?" for _ in results)
                    result_rows = conn.execute(
                        f"""SELECT artifact_id, signals, hint_intensity, hint_band,
                                   patterns_detected, feedback, created_at
                            FROM artifact_results WHERE artifact_id IN ({marks})
                            ORDER BY id ASC""",
                        tuple(results),
                    ).fetchall()
                    for r in result_rows:
                        results[r[0]].append({
                            "signals": json.loads(r[1]),
                            "hint_intensity": r[2],
                            "hint_band": r[3],
                            "patterns_detected": json.loads(r[4]),
                            "feedback": json.loads(r[5]),
                            "created_at": r[6],
                        })
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to load artifacts: {e}") from e

        return [
            {
                "id": r[0],
                "objective": r[1],
                "problem_statement": r[2],
                "options": json.loads(r[3]),
                "assumptions": json.loads(r[4]),
                "hypotheses": json.loads(r[5]),
                "created_at": r[6],
                "artifact_results": results[r[0]],
            }
            for r in rows
        ]


def get_sink(kind: str = "sqlite", db_path: str = "decisionsuite.db") -> ArtifactSink:
    """Factory — returns the configured artifact sink."""
    if kind == "sqlite":
        return SQLiteArtifactSink(db_path=db_path)
    if kind == "none":
        return NullArtifactSink()
    raise ValueError(f"Unknown persistence sink: {kind}")


# ============================================================
# OUTBOX
# ============================================================

class Outbox:
    """Submit-and-forget delivery of classified artifacts to a sink."""

    def __init__(self, sink: ArtifactSink, production: bool = False):
        self.sink = sink
        self._production = production
        self._pending: set[asyncio.Task] = set()
        self._threads: set[threading.Thread] = set()
        self._lock = threading.Lock()
        self._delivered = 0
        self._failed = 0

    def submit(
        self,
        user_id: str,
        artifact: Artifact,
        result: AggregatedResult,
        copy: Copy,
    ) -> Optional[asyncio.Task]:
        """
        Schedule delivery and return immediately.

        Inside an event loop delivery runs as a background task (the
        sink call itself goes to a worker thread). Without a running
        loop it runs on a tracked daemon thread.
        """
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            thread = threading.Thread(
                target=self._deliver_sync,
                args=(user_id, artifact, result, copy),
                daemon=True,
            )
            with self._lock:
                self._threads.add(thread)
            thread.start()
            return None

        task = loop.create_task(self._deliver(user_id, artifact, result, copy))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _deliver(self, user_id, artifact, result, copy) -> None:
        try:
            artifact_id = await asyncio.to_thread(self.sink.save, user_id, artifact, result, copy)
        except Exception as e:
            self._record_failure(e, user_id)
            return
        self._record_success(artifact_id, user_id)

    def _deliver_sync(self, user_id, artifact, result, copy) -> None:
        try:
            artifact_id = self.sink.save(user_id, artifact, result, copy)
        except Exception as e:
            self._record_failure(e, user_id)
        else:
            self._record_success(artifact_id, user_id)
        finally:
            with self._lock:
                self._threads.discard(threading.current_thread())

    def _record_success(self, artifact_id: str, user_id: str) -> None:
        with self._lock:
            self._delivered += 1
        logger.debug("Artifact persisted", extra={"artifact_id": artifact_id, "user_id": user_id})

    def _record_failure(self, exc: Exception, user_id: str) -> None:
        with self._lock:
            self._failed += 1
        logger.error(
            "Failed to persist artifact",
            extra={
                "error": describe_error(exc, self._production),
                "error_type": type(exc).__name__,
                "user_id": user_id,
            },
        )

    def join_threads(self, timeout: Optional[float] = None) -> None:
        """Block until every thread-delivered artifact has been handled."""
        with self._lock:
            threads = list(self._threads)
        for thread in threads:
            thread.join(timeout)

    async def drain(self) -> None:
        """Wait for every pending delivery. Used at shutdown and in tests."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
        with self._lock:
            has_threads = bool(self._threads)
        if has_threads:
            await asyncio.to_thread(self.join_threads)

    @property
    def stats(self) -> dict:
        with self._lock:
            return {
                "pending": len(self._pending) + len(self._threads),
                "delivered": self._delivered,
                "failed": self._failed,
            }
