"""Provisioning audit trail: one JSONL line per run, runs and steps in SQLite.

A run is opened with :func:`audit` and each numbered step is wrapped in
:func:`step`, so a failed run records which step broke and which ones had
already been applied (nothing is rolled back).
"""

from __future__ import annotations

import getpass
import logging
import os
import sqlite3
import time
from collections.abc import Generator, Iterator
from contextlib import contextmanager
from pathlib import Path

from vhostkit_common import AuditEvent, PhpTarget, StepRecord

from vhostkit.config import get_config
from vhostkit.errors import AuditWriteError

log = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS audit_runs (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    timestamp TEXT NOT NULL,
    host_id TEXT NOT NULL,
    actor TEXT NOT NULL,
    action TEXT NOT NULL,
    domain TEXT NOT NULL,
    php_version TEXT,
    socket_path TEXT,
    layout TEXT,
    result TEXT NOT NULL,
    failed_step TEXT,
    error TEXT,
    duration_ms INTEGER
);
CREATE TABLE IF NOT EXISTS audit_steps (
    run_id INTEGER NOT NULL REFERENCES audit_runs(id),
    position INTEGER NOT NULL,
    name TEXT NOT NULL,
    result TEXT NOT NULL,
    error TEXT,
    duration_ms INTEGER NOT NULL
);
CREATE INDEX IF NOT EXISTS idx_runs_domain ON audit_runs(domain);
CREATE INDEX IF NOT EXISTS idx_runs_timestamp ON audit_runs(timestamp);
"""


def _elapsed_ms(start: float) -> int:
    return int((time.monotonic() - start) * 1000)


def _get_actor() -> str:
    # Under sudo, record the operator rather than root.
    return os.environ.get("VHOSTKIT_ACTOR") or os.environ.get("SUDO_USER") or getpass.getuser()


def _write_jsonl(path: Path, event: AuditEvent) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "a") as f:
        f.write(event.to_jsonl() + "\n")


def _write_sqlite(db_path: Path, event: AuditEvent) -> None:
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    try:
        conn.executescript(_SCHEMA)
        cur = conn.execute(
            """INSERT INTO audit_runs
               (timestamp, host_id, actor, action, domain, php_version, socket_path,
                layout, result, failed_step, error, duration_ms)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                event.timestamp.isoformat(),
                event.host_id,
                event.actor,
                event.action,
                event.domain,
                event.php_version,
                event.socket_path,
                event.layout,
                event.result,
                event.failed_step,
                event.error,
                event.duration_ms,
            ),
        )
        conn.executemany(
            """INSERT INTO audit_steps (run_id, position, name, result, error, duration_ms)
               VALUES (?, ?, ?, ?, ?, ?)""",
            [
                (cur.lastrowid, i, s.name, s.result, s.error, s.duration_ms)
                for i, s in enumerate(event.steps, start=1)
            ],
        )
        conn.commit()
    finally:
        conn.close()


def log_event(event: AuditEvent) -> None:
    """Write a finished run to both JSONL and SQLite."""
    cfg = get_config()
    _write_jsonl(cfg.audit_jsonl_path, event)
    _write_sqlite(cfg.audit_db_path, event)


def _record(event: AuditEvent) -> None:
    try:
        log_event(event)
    except (OSError, sqlite3.Error) as exc:
        log.warning("could not write audit record for %s: %s", event.domain, exc)
        # A failed run keeps its own error; only a clean run reports this one.
        if event.result == "success":
            raise AuditWriteError(f"Audit log could not be written: {exc}") from exc


@contextmanager
def audit(action: str, domain: str, *, php: PhpTarget | None = None) -> Generator[AuditEvent, None, None]:
    """Time a provisioning run and record it when it ends, however it ends."""
    cfg = get_config()
    event = AuditEvent(
        host_id=cfg.host_id,
        actor=_get_actor(),
        action=action,
        domain=domain,
        php_version=php.version_token if php else None,
        socket_path=php.socket_path if php else None,
    )
    start = time.monotonic()
    try:
        yield event
    except BaseException as exc:
        event.result = "failure"
        event.error = str(exc) or type(exc).__name__
        raise
    else:
        event.result = "success"
    finally:
        event.duration_ms = _elapsed_ms(start)
        _record(event)


@contextmanager
def step(event: AuditEvent, name: str) -> Iterator[None]:
    """Record one named step of ``event``."""
    record = StepRecord(name=name)
    start = time.monotonic()
    try:
        yield
    except BaseException as exc:
        record.result = "failure"
        record.error = str(exc) or type(exc).__name__
        raise
    finally:
        record.duration_ms = _elapsed_ms(start)
        event.steps.append(record)
